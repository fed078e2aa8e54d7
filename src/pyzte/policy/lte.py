# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging

from pyzte.cell.identity import CellIdentity
from pyzte.cell.record import CellRole, LteCellRecord
from pyzte.cell.registry import CellRegistry
from pyzte.data_type.device_sample import DeviceSample
from pyzte.lib.metric_series import MAX_HISTORY
from pyzte.lib.scalar_value import HEX, ParseOptions, first_non_empty
from pyzte.network.network_type import NetworkType


def split_records(field: str) -> list[str]:
    """Split a ';' separated multi-record vendor field, dropping empty segments."""
    return [segment for segment in field.split(";") if segment]


class LteUpdatePolicy:
    """
    Update the LTE cell registry from one DeviceSample.

    The primary cell comes from the flat ``lte_*`` fields, secondary cells
    from ``lte_multi_ca_scell_info`` and its index-aligned signal field
    ``lte_multi_ca_scell_sig_info``.
    """
    SCELL_MIN_FIELDS: int = 6
    SCELL_SIGNAL_MIN_FIELDS: int = 3

    BANDWIDTH_OPTIONS     = ParseOptions.removing("MHz")
    SCELL_RSRP_OPTIONS    = ParseOptions.removing("0.0", "-44.0")
    SCELL_RSRQ_OPTIONS    = ParseOptions.removing("0.0")
    # 0.0 is a possible SINR, but the vendor also uses it for "no data".
    SCELL_SINR_OPTIONS    = ParseOptions.removing("0.0")

    def __init__(self, registry: CellRegistry[LteCellRecord], history_size: int = MAX_HISTORY) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.registry = registry
        self.history_size = history_size

    def apply(self, network_type: NetworkType, sample: DeviceSample) -> None:
        """Run one LTE update cycle; a no-op unless ``network_type`` is LTE-family."""
        if not network_type.is_lte:
            return

        self._update_primary(sample)

        if sample.lte_multi_ca_scell_info:
            self._update_secondaries(sample)

        self.registry.remove_orphans()

    def _cell_for(self, identity: CellIdentity) -> LteCellRecord:
        cell = self.registry.lookup(identity)
        if cell is None:
            cell = LteCellRecord(identity, self.history_size)
        return cell

    def _update_primary(self, sample: DeviceSample) -> None:
        identity = CellIdentity.parse(
            sample.lte_pci,
            first_non_empty(sample.wan_active_band, sample.lte_ca_pcell_freq),
            pci_options=HEX,
        )
        if identity is None:
            self.logger.debug("No usable LTE PCell identity (pci=%r, earfcn=%r)",
                              sample.lte_pci, sample.wan_active_band or sample.lte_ca_pcell_freq)
            return

        cell = self._cell_for(identity)
        cell.role = CellRole.PRIMARY

        cell.band.set(first_non_empty(sample.lte_ca_pcell_band, sample.lte_band))
        cell.bandwidth.set(first_non_empty(sample.lte_ca_pcell_bandwidth, sample.bandwidth),
                           self.BANDWIDTH_OPTIONS)

        cell.rssi.update(sample.lte_rssi)
        cell.rsrp1.update(sample.lte_rsrp_1)
        cell.rsrp2.update(sample.lte_rsrp_2)
        cell.rsrp3.update(sample.lte_rsrp_3)
        cell.rsrp4.update(sample.lte_rsrp_4)
        cell.rsrq.update(sample.lte_rsrq)
        cell.sinr1.update(sample.lte_snr_1)
        cell.sinr2.update(sample.lte_snr_2)
        cell.sinr3.update(sample.lte_snr_3)
        cell.sinr4.update(sample.lte_snr_4)

        self.registry.upsert(cell)

    def _update_secondaries(self, sample: DeviceSample) -> None:
        scell_infos = split_records(sample.lte_multi_ca_scell_info)
        scell_signals = split_records(sample.lte_multi_ca_scell_sig_info)

        for index, scell_info in enumerate(scell_infos):
            fields = scell_info.split(",")

            if len(fields) < self.SCELL_MIN_FIELDS:
                self.logger.debug("Skipping short LTE SCell record %r", scell_info)
                continue

            # SCell PCI is already decimal here.
            identity = CellIdentity.parse(fields[1], fields[4])
            if identity is None:
                self.logger.debug("Skipping LTE SCell record without identity %r", scell_info)
                continue

            cell = self._cell_for(identity)
            cell.role = CellRole.SECONDARY
            cell.band.set(fields[3])
            cell.bandwidth.set(fields[5])

            if index < len(scell_signals):
                signal = scell_signals[index].split(",")
                if len(signal) >= self.SCELL_SIGNAL_MIN_FIELDS:
                    cell.rsrp1.update(signal[0], self.SCELL_RSRP_OPTIONS)
                    cell.rsrq.update(signal[1], self.SCELL_RSRQ_OPTIONS)
                    cell.sinr1.update(signal[2], self.SCELL_SINR_OPTIONS)

            self.registry.upsert(cell)
