# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from enum import Enum


class NetworkType(Enum):
    """
    Radio access state of the modem for one update cycle.

    NR_NSA_PASSIVE means the base station offers 5G NSA but the modem has
    no NR reception, so only the LTE anchor carries data.
    """
    UNKNOWN         = "Unknown"
    UMTS            = "UMTS"
    LTE             = "LTE"
    LTE_PLUS        = "LTE+"
    NR_NSA_ACTIVE   = "NR-NSA"
    NR_NSA_PASSIVE  = "NR-NSA (LTE-only)"
    NR_SA           = "NR-SA"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_umts(self) -> bool:
        return self is NetworkType.UMTS

    @property
    def is_lte(self) -> bool:
        """LTE-family, including NSA since it always rides on an LTE anchor."""
        return self in (NetworkType.LTE, NetworkType.LTE_PLUS) or self.is_nr_nsa

    @property
    def is_lte_ca(self) -> bool:
        return self is NetworkType.LTE_PLUS

    @property
    def is_nr(self) -> bool:
        return self.is_nr_nsa or self.is_nr_sa

    @property
    def is_nr_nsa(self) -> bool:
        return self in (NetworkType.NR_NSA_ACTIVE, NetworkType.NR_NSA_PASSIVE)

    @property
    def is_nr_nsa_active(self) -> bool:
        return self is NetworkType.NR_NSA_ACTIVE

    @property
    def is_nr_sa(self) -> bool:
        return self is NetworkType.NR_SA


class NetworkTypeClassifier:
    """
    Map the vendor ``network_type`` string and ``wan_lte_ca`` indicator to a NetworkType.
    """
    UMTS_NAMES: frozenset[str] = frozenset({
        "HSPA", "HSDPA", "HSUPA", "HSPA+", "DC-HSPA+", "UMTS", "CDMA",
        "CDMA_EVDO", "EVDO_EHRPD", "TDSCDMA",
    })
    LTE_NAMES: frozenset[str] = frozenset({"LTE"})
    NR_NSA_NAMES: frozenset[str] = frozenset({"ENDC", "EN-DC", "LTE-NSA"})
    NR_SA_NAMES: frozenset[str] = frozenset({"SA"})

    # Both count: SCell fields stay meaningful during a deactivated CA session.
    CA_INDICATORS: frozenset[str] = frozenset({"ca_activated", "ca_deactivated"})

    # NSA offered but no NR reception.
    NSA_PASSIVE_NAME: str = "LTE-NSA"

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    def classify(self, network_type: str | None, ca_indicator: str | None = "") -> NetworkType:
        name = network_type or ""

        if name in self.UMTS_NAMES:
            return NetworkType.UMTS

        if name in self.LTE_NAMES:
            if ca_indicator and ca_indicator in self.CA_INDICATORS:
                return NetworkType.LTE_PLUS
            return NetworkType.LTE

        if name in self.NR_NSA_NAMES:
            if name == self.NSA_PASSIVE_NAME:
                return NetworkType.NR_NSA_PASSIVE
            return NetworkType.NR_NSA_ACTIVE

        if name in self.NR_SA_NAMES:
            return NetworkType.NR_SA

        if name:
            self.logger.debug("Unrecognized network type %r", name)
        return NetworkType.UNKNOWN
