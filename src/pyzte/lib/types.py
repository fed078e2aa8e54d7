# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, NewType, TypeAlias

import numpy as np
from numpy.typing import NDArray


# Enum String Type
class StringEnum(str, Enum):
    """Py3.10-compatible StrEnum shim."""
    pass

# ────────────────────────────────────────────────────────────────────────────────
# Core numerics
# ────────────────────────────────────────────────────────────────────────────────
ScalarNumber: TypeAlias = int | float
ScalarType: TypeAlias   = int | float | bool

NDArrayF64: TypeAlias   = NDArray[np.float64]
FloatSeries: TypeAlias  = list[float]

# ────────────────────────────────────────────────────────────────────────────────
# Raw vendor snapshot (field name -> field value, one per poll cycle)
# ────────────────────────────────────────────────────────────────────────────────
RawSample: TypeAlias = Mapping[str, Any]

# ────────────────────────────────────────────────────────────────────────────────
# Radio identifiers / units
# ────────────────────────────────────────────────────────────────────────────────
Pci           = NewType("Pci", int)             # physical cell id
Arfcn         = NewType("Arfcn", int)           # EARFCN (LTE) / NR-ARFCN (NR)
BandwidthMHz  = NewType("BandwidthMHz", float)  # -1.0 when unknown

# Time
TimestampSec  = NewType("TimestampSec", float)

# ────────────────────────────────────────────────────────────────────────────────
# Paths / filesystem
# ────────────────────────────────────────────────────────────────────────────────
PathLike    = str | Path
FileNameStr = NewType("FileNameStr", str)
