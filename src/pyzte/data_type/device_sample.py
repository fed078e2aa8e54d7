# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyzte.lib.types import RawSample


class DeviceSample(BaseModel):
    """
    One raw diagnostic snapshot as returned by the modem's status API.

    Every field is kept as the vendor string; missing keys read as ``""``.
    Non-string JSON scalars are coerced with ``str()`` and ``null`` becomes ``""``.
    Keys that are not Python identifiers are mapped through aliases.
    Unknown keys are retained as extras.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    # Network state
    network_type            : str = Field("", description="Radio access technology name, e.g. 'LTE', 'ENDC', 'SA'")
    wan_lte_ca              : str = Field("", description="'ca_activated' / 'ca_deactivated' when LTE CA is in use")
    wan_active_band         : str = Field("", description="Active LTE EARFCN (despite the name)")
    ppp_connect_time        : str = Field("", description="Connection start, 'YYYY-MM-DDTHH:MM:SSZ'")
    bandwidth               : str = Field("", description="Primary channel bandwidth, e.g. '20MHz'")
    tx_power                : str = Field("", description="Transmit power in dBm")

    # LTE primary cell
    lte_pci                 : str = Field("", description="LTE PCI, hex encoded")
    lte_band                : str = Field("", description="LTE band number")
    lte_ca_pcell_band       : str = Field("", description="LTE band of the CA primary cell")
    lte_ca_pcell_freq       : str = Field("", description="EARFCN of the CA primary cell")
    lte_ca_pcell_bandwidth  : str = Field("", description="Bandwidth of the CA primary cell")
    lte_rssi                : str = Field("", description="RSSI in dBm")
    lte_rsrp_1              : str = Field("", description="RSRP antenna 1 in dBm")
    lte_rsrp_2              : str = Field("", description="RSRP antenna 2 in dBm")
    lte_rsrp_3              : str = Field("", description="RSRP antenna 3 in dBm")
    lte_rsrp_4              : str = Field("", description="RSRP antenna 4 in dBm")
    lte_rsrq                : str = Field("", description="RSRQ in dB")
    lte_snr_1               : str = Field("", description="SINR antenna 1 in dB")
    lte_snr_2               : str = Field("", description="SINR antenna 2 in dB")
    lte_snr_3               : str = Field("", description="SINR antenna 3 in dB")
    lte_snr_4               : str = Field("", description="SINR antenna 4 in dB")

    # LTE secondary cells
    lte_multi_ca_scell_info     : str = Field("", description="';' separated SCell records, ',' separated fields")
    lte_multi_ca_scell_sig_info : str = Field("", description="';' separated SCell signal records (rsrp,rsrq,sinr)")

    # NR primary cell
    nr5g_pci                : str = Field("", description="NR PCI, hex encoded")
    nr5g_action_channel     : str = Field("", description="NR-ARFCN of the serving cell")
    nr5g_action_band        : str = Field("", description="NR band (SA)")
    nr5g_action_nsa_band    : str = Field("", description="NR band (NSA)")
    nr_ca_pcell_band        : str = Field("", description="NR band of the CA primary cell")
    nr_ca_pcell_freq        : str = Field("", description="NR-ARFCN of the CA primary cell; may be stale")
    nr5g_rx0_rsrp           : str = Field("", alias="5g_rx0_rsrp", description="NR RSRP rx0 in dBm")
    nr5g_rx1_rsrp           : str = Field("", alias="5g_rx1_rsrp", description="NR RSRP rx1 in dBm")
    z5g_rsrp                : str = Field("", alias="Z5g_rsrp", description="NR RSRP (legacy single value)")
    z5g_rsrq                : str = Field("", alias="Z5g_rsrq", description="NR RSRQ in dB")
    z5g_sinr                : str = Field("", alias="Z5g_SINR", description="NR SINR in dB")

    # NR secondary cells
    nr_multi_ca_scell_info  : str = Field("", description="';' separated NR SCell records")
    nr5g_nsa_band_lock      : str = Field("", description="Comma separated NR bands allowed in NSA")
    nr5g_sa_band_lock       : str = Field("", description="Comma separated NR bands allowed in SA")

    # Live traffic
    realtime_rx_packets     : str = Field("", description="Cumulative received packets")
    realtime_tx_packets     : str = Field("", description="Cumulative transmitted packets")
    realtime_rx_thrpt       : str = Field("", description="Downlink throughput in bytes/s")
    realtime_tx_thrpt       : str = Field("", description="Uplink throughput in bytes/s")

    @field_validator("*", mode="before")
    @classmethod
    def _as_vendor_string(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def from_raw(cls, raw: RawSample | DeviceSample) -> DeviceSample:
        """
        Normalize a raw mapping (or an existing sample) into a DeviceSample.

        Raises:
            pydantic.ValidationError: If ``raw`` is not a mapping.
        """
        if isinstance(raw, DeviceSample):
            return raw
        if isinstance(raw, Mapping) and not isinstance(raw, dict):
            raw = dict(raw)
        return cls.model_validate(raw)
