# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field

from pyzte.cell.identity import CellIdentity
from pyzte.lib.metric_series import MAX_HISTORY, MetricSeries, MetricSeriesModel
from pyzte.lib.scalar_value import ScalarKind, ScalarValue
from pyzte.lib.types import BandwidthMHz, StringEnum

UNKNOWN_BANDWIDTH: BandwidthMHz = BandwidthMHz(-1.0)


class CellRole(StringEnum):
    PRIMARY   = "primary"
    SECONDARY = "secondary"


class NetworkFamily(StringEnum):
    LTE = "lte"
    NR  = "nr"


class CellRecordModel(BaseModel):
    """Read-only view of one tracked cell."""
    family        : NetworkFamily                 = Field(..., description="Network family the cell belongs to")
    pci           : int                           = Field(..., description="Physical cell id")
    freq          : int                           = Field(..., description="EARFCN / NR-ARFCN")
    role          : CellRole                      = Field(..., description="Primary (PCell) or secondary (SCell)")
    band          : int | None                    = Field(None, description="Band number, None if never reported")
    bandwidth_mhz : float                         = Field(..., description="Channel bandwidth in MHz, -1 if unknown")
    label         : str                           = Field(..., description="Family prefixed band label, e.g. 'B3' or 'n78'")
    metrics       : dict[str, MetricSeriesModel]  = Field(default_factory=dict, description="Signal metrics by name")


class CellRecord:
    """
    One tracked radio cell: identity, band, bandwidth, role and signal metrics.

    Created on first sight of an identity within a registry and mutated in
    place on every later sighting, so metric histories accumulate.
    Subclasses register their signal metrics through ``_metric`` so each
    one is both a typed attribute and an entry in ``metrics``.
    """
    FAMILY: ClassVar[NetworkFamily]
    BAND_PREFIX: ClassVar[str]
    UNKNOWN_BAND: ClassVar[str] = "?"

    def __init__(self, identity: CellIdentity, history_size: int = MAX_HISTORY) -> None:
        self.identity = identity
        self.history_size = history_size
        self.band = ScalarValue(ScalarKind.INTEGER)
        self.bandwidth = ScalarValue(ScalarKind.FLOAT)
        self.secondary = ScalarValue(ScalarKind.BOOLEAN)
        self.metrics: dict[str, MetricSeries] = {}

    def _metric(self, name: str, kind: ScalarKind = ScalarKind.FLOAT) -> MetricSeries:
        series = MetricSeries(kind, self.history_size)
        self.metrics[name] = series
        return series

    @property
    def role(self) -> CellRole:
        if self.secondary.ok and self.secondary.get():
            return CellRole.SECONDARY
        return CellRole.PRIMARY

    @role.setter
    def role(self, role: CellRole) -> None:
        self.secondary.set_bool(role is CellRole.SECONDARY)

    @property
    def is_primary(self) -> bool:
        return self.role is CellRole.PRIMARY

    @property
    def is_secondary(self) -> bool:
        return self.role is CellRole.SECONDARY

    @property
    def bandwidth_mhz(self) -> BandwidthMHz:
        if not self.bandwidth.ok:
            return UNKNOWN_BANDWIDTH
        return BandwidthMHz(float(self.bandwidth.get()))

    @property
    def bandwidth_known(self) -> bool:
        return self.bandwidth_mhz != UNKNOWN_BANDWIDTH

    def band_label(self, with_bandwidth: bool = False) -> str:
        band = self.band.get() if self.band.ok else self.UNKNOWN_BAND
        label = f"{self.BAND_PREFIX}{band}"
        if with_bandwidth and self.bandwidth_known:
            label += f" ({self.bandwidth_mhz:g} MHz)"
        return label

    def to_model(self) -> CellRecordModel:
        return CellRecordModel(
            family        = self.FAMILY,
            pci           = self.identity.pci,
            freq          = self.identity.freq,
            role          = self.role,
            band          = int(self.band.get()) if self.band.ok else None,
            bandwidth_mhz = self.bandwidth_mhz,
            label         = self.band_label(),
            metrics       = {name: series.to_model() for name, series in self.metrics.items()},
        )

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(identity={self.identity}, role={self.role.value}, "
                f"band={self.band_label()}, bandwidth={self.bandwidth_mhz:g})")


class LteCellRecord(CellRecord):
    """LTE cell; ``identity.freq`` is the EARFCN."""
    FAMILY = NetworkFamily.LTE
    BAND_PREFIX = "B"

    def __init__(self, identity: CellIdentity, history_size: int = MAX_HISTORY) -> None:
        super().__init__(identity, history_size)
        self.rssi   = self._metric("rssi", ScalarKind.INTEGER)
        self.rsrp1  = self._metric("rsrp1")
        self.rsrp2  = self._metric("rsrp2")
        self.rsrp3  = self._metric("rsrp3")
        self.rsrp4  = self._metric("rsrp4")
        self.rsrq   = self._metric("rsrq")
        self.sinr1  = self._metric("sinr1")
        self.sinr2  = self._metric("sinr2")
        self.sinr3  = self._metric("sinr3")
        self.sinr4  = self._metric("sinr4")


class NrCellRecord(CellRecord):
    """5G-NR cell; ``identity.freq`` is the NR-ARFCN."""
    FAMILY = NetworkFamily.NR
    BAND_PREFIX = "n"

    def __init__(self, identity: CellIdentity, history_size: int = MAX_HISTORY) -> None:
        super().__init__(identity, history_size)
        self.rsrp1        = self._metric("rsrp1")
        self.rsrp2        = self._metric("rsrp2")
        self.primary_rsrp = self._metric("primary_rsrp")
        self.rsrq         = self._metric("rsrq")
        self.sinr         = self._metric("sinr")
