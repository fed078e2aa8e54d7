# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from dataclasses import dataclass

from pyzte.lib.scalar_value import (
    NO_OPTIONS,
    ParseOptions,
    ScalarKind,
    ScalarValue,
)
from pyzte.lib.types import Arfcn, Pci


@dataclass(frozen=True)
class CellIdentity:
    """
    (PCI, frequency channel) pair identifying one radio cell within a network family.

    This pair is the only key used to correlate cells across update cycles.
    """
    pci: Pci
    freq: Arfcn

    @classmethod
    def parse(cls, raw_pci: str | None, raw_freq: str | None,
              pci_options: ParseOptions = NO_OPTIONS) -> CellIdentity | None:
        """
        Build an identity from raw vendor fields.

        Returns:
            CellIdentity | None: None if either field fails to parse.
        """
        pci = ScalarValue(ScalarKind.INTEGER)
        freq = ScalarValue(ScalarKind.INTEGER)

        if not pci.set(raw_pci, pci_options) or not freq.set(raw_freq):
            return None

        return cls(pci=Pci(int(pci.get())), freq=Arfcn(int(freq.get())))

    def __str__(self) -> str:
        return f"{self.pci}/{self.freq}"


def same_identity(a: CellIdentity, b: CellIdentity) -> bool:
    """Exact match on both PCI and frequency."""
    return a.pci == b.pci and a.freq == b.freq
