# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import pytest

from pyzte.cell.identity import CellIdentity, same_identity
from pyzte.cell.record import (
    UNKNOWN_BANDWIDTH,
    CellRole,
    LteCellRecord,
    NetworkFamily,
    NrCellRecord,
)
from pyzte.cell.registry import CellRegistry
from pyzte.lib.scalar_value import HEX, ScalarKind
from pyzte.lib.types import Arfcn, Pci


def _identity(pci: int, freq: int) -> CellIdentity:
    return CellIdentity(pci=Pci(pci), freq=Arfcn(freq))


def test_identity_parse_decodes_hex_pci() -> None:
    identity = CellIdentity.parse("1A", "1850", pci_options=HEX)
    assert identity == _identity(26, 1850)


@pytest.mark.parametrize("pci, freq", [("", "1850"), ("12", ""), ("zz", "1850")])
def test_identity_parse_fails_on_missing_component(pci: str, freq: str) -> None:
    assert CellIdentity.parse(pci, freq) is None


def test_same_identity_is_exact_on_both_fields() -> None:
    assert same_identity(_identity(1, 100), _identity(1, 100)) is True
    assert same_identity(_identity(1, 100), _identity(1, 101)) is False
    assert same_identity(_identity(2, 100), _identity(1, 100)) is False


def test_record_defaults() -> None:
    cell = LteCellRecord(_identity(1, 100))
    assert cell.role is CellRole.PRIMARY
    assert cell.bandwidth_mhz == UNKNOWN_BANDWIDTH
    assert cell.bandwidth_known is False
    assert set(cell.metrics) == {
        "rssi", "rsrp1", "rsrp2", "rsrp3", "rsrp4", "rsrq", "sinr1", "sinr2", "sinr3", "sinr4",
    }
    assert cell.rsrp1 is cell.metrics["rsrp1"]


def test_record_unknown_metric_raises_attribute_error() -> None:
    cell = NrCellRecord(_identity(1, 100))
    with pytest.raises(AttributeError):
        _ = cell.sinr1  # type: ignore[attr-defined]


def test_metrics_are_declared_attributes() -> None:
    """
    Verify That Every Metric Is A Plain Instance Attribute Shared With The metrics Map.
    """
    lte = LteCellRecord(_identity(1, 100), history_size=7)
    nr = NrCellRecord(_identity(2, 200))

    assert vars(lte)["sinr4"] is lte.metrics["sinr4"]
    assert vars(nr)["primary_rsrp"] is nr.metrics["primary_rsrp"]
    assert lte.rssi.kind is ScalarKind.INTEGER
    assert lte.rsrp1.capacity == 7
    assert set(nr.metrics) == {"rsrp1", "rsrp2", "primary_rsrp", "rsrq", "sinr"}


@pytest.mark.parametrize("record_type, expected", [(LteCellRecord, "B?"), (NrCellRecord, "n?")])
def test_band_label_when_band_never_parsed(record_type: type[LteCellRecord] | type[NrCellRecord],
                                           expected: str) -> None:
    cell = record_type(_identity(1, 100))
    cell.bandwidth.set("20")

    assert cell.band_label() == expected
    assert cell.band_label(with_bandwidth=True) == f"{expected} (20 MHz)"
    assert cell.to_model().band is None


def test_record_role_and_labels() -> None:
    cell = NrCellRecord(_identity(7, 627264))
    cell.role = CellRole.SECONDARY
    cell.band.set("78")
    cell.bandwidth.set("100")

    assert cell.is_secondary is True
    assert cell.band_label() == "n78"
    assert cell.band_label(with_bandwidth=True) == "n78 (100 MHz)"

    model = cell.to_model()
    assert model.family is NetworkFamily.NR
    assert model.role is CellRole.SECONDARY
    assert model.band == 78
    assert model.metrics["sinr"].ok is False


def test_lookup_miss_returns_none() -> None:
    registry: CellRegistry[LteCellRecord] = CellRegistry("LTE")
    assert registry.lookup(_identity(1, 100)) is None


def test_upsert_inserts_then_replaces() -> None:
    registry: CellRegistry[LteCellRecord] = CellRegistry("LTE")
    first = LteCellRecord(_identity(1, 100))
    registry.upsert(first)

    replacement = LteCellRecord(_identity(1, 100))
    registry.upsert(replacement)

    assert len(registry) == 1
    assert registry.lookup(_identity(1, 100)) is replacement


def test_remove_orphans_drops_untouched_cells() -> None:
    """
    Verify That A Sweep Removes Only Cells Not Touched Since The Previous Sweep.
    """
    registry: CellRegistry[LteCellRecord] = CellRegistry("LTE")
    registry.upsert(LteCellRecord(_identity(1, 100)))
    registry.upsert(LteCellRecord(_identity(2, 200)))
    assert registry.remove_orphans() == []

    # Next cycle only the first cell is reported
    registry.upsert(LteCellRecord(_identity(1, 100)))
    removed = registry.remove_orphans()

    assert removed == [_identity(2, 200)]
    assert _identity(1, 100) in registry
    assert _identity(2, 200) not in registry


def test_lookup_alone_protects_from_sweep() -> None:
    """
    Verify That A Lookup Hit Counts As A Touch, Even Without A Following Upsert.
    """
    registry: CellRegistry[LteCellRecord] = CellRegistry("LTE")
    registry.upsert(LteCellRecord(_identity(1, 100)))
    registry.remove_orphans()

    assert registry.lookup(_identity(1, 100)) is not None
    assert registry.remove_orphans() == []
    assert len(registry) == 1


def test_sweep_clears_seen_marks() -> None:
    registry: CellRegistry[LteCellRecord] = CellRegistry("LTE")
    registry.upsert(LteCellRecord(_identity(1, 100)))
    registry.remove_orphans()

    # Nothing touched in this cycle
    assert registry.remove_orphans() == [_identity(1, 100)]
    assert len(registry) == 0


def test_clear_then_sweep_empties_registry() -> None:
    registry: CellRegistry[NrCellRecord] = CellRegistry("NR")
    registry.upsert(NrCellRecord(_identity(1, 100)))
    registry.clear()
    registry.remove_orphans()

    assert registry.cells == []


def test_cells_keep_first_seen_order() -> None:
    registry: CellRegistry[LteCellRecord] = CellRegistry("LTE")
    for pci in (5, 3, 9):
        registry.upsert(LteCellRecord(_identity(pci, 100)))

    assert [cell.identity.pci for cell in registry] == [5, 3, 9]
