# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import os

from pyzte.config.log_config import LoggerConfigurator
from pyzte.config.system_config_settings import SystemConfigSettings


class StartUp:
    """
    Prepare the process that hosts the signal monitor: directories and logging.
    """

    @classmethod
    def initialize(cls) -> LoggerConfigurator:
        """
        Initialize the system configuration settings and set up logging.
        This method should be called once at the start of the application.
        """
        SystemConfigSettings.initialize_directories()

        # Console logging in containers, or when configured
        in_docker = os.path.exists('/.dockerenv') or bool(os.environ.get('DOCKER_CONTAINER', False))

        return LoggerConfigurator(SystemConfigSettings.log_dir(),
                                  SystemConfigSettings.log_filename(),
                                  SystemConfigSettings.log_level(),
                                  to_console=in_docker or SystemConfigSettings.log_to_console())
