# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging

from pyzte.cell.identity import CellIdentity
from pyzte.cell.record import CellRole, NrCellRecord
from pyzte.cell.registry import CellRegistry
from pyzte.data_type.device_sample import DeviceSample
from pyzte.lib.metric_series import MAX_HISTORY
from pyzte.lib.scalar_value import (
    HEX,
    NUMERIC_ONLY,
    ParseOptions,
    first_non_empty,
    strip_non_numeric,
)
from pyzte.network.network_type import NetworkType
from pyzte.policy.lte import split_records


class NrUpdatePolicy:
    """
    Update the NR cell registry from one DeviceSample.

    The status API keeps its CA memory after the modem falls back from NR
    carrier aggregation: ``nr_ca_pcell_freq`` and stale SCell entries stay
    populated. Two checks guard against that:

    1. CA is only trusted while ``nr5g_action_channel == nr_ca_pcell_freq``.
    2. SCell entries whose band is not in the current band lock are dropped.
    """
    SCELL_MIN_FIELDS: int = 10

    PCELL_SINR_OPTIONS = ParseOptions.removing("-20.0", "-3276.8")
    SCELL_RSRP_OPTIONS = ParseOptions.removing("0.0")
    SCELL_RSRQ_OPTIONS = ParseOptions.removing("0.0")
    SCELL_SINR_OPTIONS = ParseOptions.removing("0.0", "-20.0", "-3276.8")

    # Shared bandwidth field is unreliable under NSA.
    NSA_BANDWIDTH: str = "-1"

    def __init__(self, registry: CellRegistry[NrCellRecord], history_size: int = MAX_HISTORY) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.registry = registry
        self.history_size = history_size

    @staticmethod
    def is_carrier_aggregation(sample: DeviceSample) -> bool:
        """True if the reported NR CA state is self-consistent."""
        channel = sample.nr5g_action_channel
        return channel != "" and channel == sample.nr_ca_pcell_freq

    @staticmethod
    def allowed_bands(network_type: NetworkType, sample: DeviceSample) -> set[str]:
        band_lock = sample.nr5g_nsa_band_lock if network_type.is_nr_nsa else sample.nr5g_sa_band_lock
        return {band.strip() for band in band_lock.split(",") if band.strip()}

    def apply(self, network_type: NetworkType, sample: DeviceSample) -> None:
        """Run one NR update cycle; a no-op unless ``network_type`` is NR-family."""
        if not network_type.is_nr:
            return

        if network_type.is_nr_nsa and not network_type.is_nr_nsa_active:
            # NSA offered, but no NR reception: nothing to track.
            self.registry.clear()
            self.registry.remove_orphans()
            return

        is_ca = self.is_carrier_aggregation(sample)

        self._update_primary(network_type, sample, is_ca)

        if is_ca and sample.nr_multi_ca_scell_info:
            self._update_secondaries(network_type, sample)
        elif sample.nr_multi_ca_scell_info:
            self.logger.debug("Ignoring NR SCell info, CA state inconsistent (channel=%r, ca_pcell_freq=%r)",
                              sample.nr5g_action_channel, sample.nr_ca_pcell_freq)

        self.registry.remove_orphans()

    def _cell_for(self, identity: CellIdentity) -> NrCellRecord:
        cell = self.registry.lookup(identity)
        if cell is None:
            cell = NrCellRecord(identity, self.history_size)
        return cell

    def _update_primary(self, network_type: NetworkType, sample: DeviceSample, is_ca: bool) -> None:
        identity = CellIdentity.parse(sample.nr5g_pci, sample.nr5g_action_channel, pci_options=HEX)
        if identity is None:
            self.logger.debug("No usable NR PCell identity (pci=%r, arfcn=%r)",
                              sample.nr5g_pci, sample.nr5g_action_channel)
            return

        nsa = network_type.is_nr_nsa

        cell = self._cell_for(identity)
        cell.role = CellRole.PRIMARY

        if is_ca:
            band = sample.nr_ca_pcell_band
        else:
            band = sample.nr5g_action_nsa_band if nsa else sample.nr5g_action_band
        cell.band.set(band, NUMERIC_ONLY)
        cell.bandwidth.set(self.NSA_BANDWIDTH if nsa else sample.bandwidth, NUMERIC_ONLY)

        cell.rsrp1.update(first_non_empty(sample.nr5g_rx0_rsrp, sample.z5g_rsrp))
        cell.rsrp2.update(sample.nr5g_rx1_rsrp)
        cell.primary_rsrp.update(sample.z5g_rsrp)
        cell.rsrq.update(sample.z5g_rsrq)
        cell.sinr.update(sample.z5g_sinr, self.PCELL_SINR_OPTIONS)

        self.registry.upsert(cell)

    def _update_secondaries(self, network_type: NetworkType, sample: DeviceSample) -> None:
        allowed = self.allowed_bands(network_type, sample)

        for scell_info in split_records(sample.nr_multi_ca_scell_info):
            fields = scell_info.split(",")

            if len(fields) < self.SCELL_MIN_FIELDS:
                self.logger.debug("Skipping short NR SCell record %r", scell_info)
                continue

            band = strip_non_numeric(fields[3])
            if band not in allowed:
                self.logger.debug("Dropping NR SCell %r: band %r not in band lock %s",
                                  scell_info, band, sorted(allowed))
                continue

            identity = CellIdentity.parse(fields[1], fields[4])
            if identity is None:
                self.logger.debug("Skipping NR SCell record without identity %r", scell_info)
                continue

            cell = self._cell_for(identity)
            cell.role = CellRole.SECONDARY
            cell.band.set(band)
            cell.bandwidth.set(fields[5], NUMERIC_ONLY)
            cell.rsrp1.update(fields[7], self.SCELL_RSRP_OPTIONS)
            cell.rsrq.update(fields[8], self.SCELL_RSRQ_OPTIONS)
            cell.sinr.update(fields[9], self.SCELL_SINR_OPTIONS)

            self.registry.upsert(cell)
