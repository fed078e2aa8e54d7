# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
import time
from datetime import datetime

from pydantic import BaseModel, Field

from pyzte.cell.record import (
    UNKNOWN_BANDWIDTH,
    CellRecord,
    CellRecordModel,
    LteCellRecord,
    NrCellRecord,
)
from pyzte.cell.registry import CellRegistry
from pyzte.config.system_config_settings import SystemConfigSettings
from pyzte.data_type.device_sample import DeviceSample
from pyzte.lib.metric_series import MetricSeries, MetricSeriesModel
from pyzte.lib.scalar_value import ScalarKind
from pyzte.lib.types import BandwidthMHz, RawSample
from pyzte.network.network_type import NetworkType, NetworkTypeClassifier
from pyzte.policy.lte import LteUpdatePolicy
from pyzte.policy.nr import NrUpdatePolicy
from pyzte.signal.connection_time import ConnectionTime
from pyzte.traffic.throughput import Clock, TrafficMonitor, TrafficRatesModel


class SignalSnapshotModel(BaseModel):
    """Read-only view of the aggregated signal state after the last update."""
    network_type      : str                    = Field(..., description="Human readable network type")
    time_connected    : str                    = Field(..., description="HH:MM:SS since connect, or N/A")
    bands             : list[str]              = Field(default_factory=list, description="Band label per tracked cell")
    total_bandwidth   : float                  = Field(..., description="Sum of cell bandwidths in MHz, -1 if any is unknown")
    tx_power          : MetricSeriesModel      = Field(..., description="Transmit power in dBm")
    traffic           : TrafficRatesModel      = Field(..., description="Live traffic rates")
    lte_cells         : list[CellRecordModel]  = Field(default_factory=list, description="Active LTE cells")
    nr_cells          : list[CellRecordModel]  = Field(default_factory=list, description="Active NR cells")


class SignalSnapshot:
    """
    Long-lived aggregator turning each raw DeviceSample into cell and metric state.

    One ``update`` per poll cycle: classify the network type, then run the
    LTE policy and the NR policy when their family is active. Registries
    persist across cycles; views (``lte_cells``, ``nr_cells``, bands,
    bandwidth) only cover the families active under the current network type.

    Not safe for concurrent ``update`` calls.
    """

    def __init__(self, history_size: int | None = None, clock: Clock = time.monotonic) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.history_size = history_size if history_size is not None else SystemConfigSettings.history_size()

        self.classifier = NetworkTypeClassifier()
        self.network_type: NetworkType = NetworkType.UNKNOWN
        self.connection_time = ConnectionTime()
        self.tx_power = MetricSeries(ScalarKind.INTEGER, self.history_size)
        self.traffic = TrafficMonitor(clock)

        self.lte: CellRegistry[LteCellRecord] = CellRegistry("LTE")
        self.nr: CellRegistry[NrCellRecord] = CellRegistry("NR")
        self.lte_policy = LteUpdatePolicy(self.lte, self.history_size)
        self.nr_policy = NrUpdatePolicy(self.nr, self.history_size)

        self.updates: int = 0

    def update(self, raw: RawSample | DeviceSample) -> bool:
        """
        Apply one raw sample.

        Returns:
            bool: Always True; bad fields only leave stale values behind.
        """
        sample = DeviceSample.from_raw(raw)

        previous = self.network_type
        self.network_type = self.classifier.classify(sample.network_type, sample.wan_lte_ca)
        if self.network_type is not previous:
            self.logger.info("Network type changed: %s -> %s", previous, self.network_type)

        self.connection_time.update(sample.ppp_connect_time)
        self.traffic.update(sample)

        if self.network_type.is_lte:
            self.tx_power.update(sample.tx_power)
            self.lte_policy.apply(self.network_type, sample)

        if self.network_type.is_nr:
            self.nr_policy.apply(self.network_type, sample)

        self.updates += 1
        return True

    @property
    def lte_cells(self) -> list[LteCellRecord]:
        return self.lte.cells if self.network_type.is_lte else []

    @property
    def nr_cells(self) -> list[NrCellRecord]:
        return self.nr.cells if self.network_type.is_nr else []

    def active_cells(self) -> list[CellRecord]:
        """LTE cells first, then NR cells."""
        return [*self.lte_cells, *self.nr_cells]

    def total_bandwidth(self) -> BandwidthMHz:
        """Sum of all active cell bandwidths, or -1 if any cell's bandwidth is unknown."""
        total = 0.0
        for cell in self.active_cells():
            if not cell.bandwidth_known:
                return UNKNOWN_BANDWIDTH
            total += cell.bandwidth_mhz
        return BandwidthMHz(total)

    def band_labels(self) -> list[str]:
        """One label per active cell, e.g. ``["B3 (20 MHz)", "n78 (100 MHz)"]``."""
        return [cell.band_label(with_bandwidth=True) for cell in self.active_cells()]

    def to_model(self, now: datetime | None = None) -> SignalSnapshotModel:
        return SignalSnapshotModel(
            network_type    = self.network_type.label,
            time_connected  = self.connection_time.formatted(now),
            bands           = self.band_labels(),
            total_bandwidth = self.total_bandwidth(),
            tx_power        = self.tx_power.to_model(),
            traffic         = self.traffic.to_model(),
            lte_cells       = [cell.to_model() for cell in self.lte_cells],
            nr_cells        = [cell.to_model() for cell in self.nr_cells],
        )
