# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Generic, TypeVar

from pyzte.cell.identity import CellIdentity
from pyzte.cell.record import CellRecord

R = TypeVar("R", bound=CellRecord)


class CellRegistry(Generic[R]):
    """
    Cells of one network family keyed by CellIdentity, with mark-and-sweep cleanup.

    Every ``lookup`` hit and every ``upsert`` marks the identity as seen.
    ``remove_orphans`` drops whatever was not seen and clears the marks.
    Call it exactly once per update cycle, after all lookups and upserts
    for that cycle, never in between them:

        Idle -> (lookup | upsert)* -> remove_orphans -> Idle

    Not safe for concurrent mutation.
    """

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.name = name
        self._cells: dict[CellIdentity, R] = {}
        self._seen: set[CellIdentity] = set()

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._cells.values()))

    def __contains__(self, identity: object) -> bool:
        return identity in self._cells

    @property
    def cells(self) -> list[R]:
        """Tracked cells in first-seen order."""
        return list(self._cells.values())

    def lookup(self, identity: CellIdentity) -> R | None:
        """
        Return the record for ``identity``, marking it seen if present.

        A read alone protects the record from the next sweep.
        """
        cell = self._cells.get(identity)
        if cell is not None:
            self._seen.add(identity)
        return cell

    def upsert(self, cell: R) -> None:
        """Insert or replace ``cell`` under its identity and mark it seen."""
        identity = cell.identity
        self._seen.add(identity)
        if identity not in self._cells:
            self.logger.debug("%s: tracking new cell %s", self.name, identity)
        self._cells[identity] = cell

    def clear(self) -> None:
        """Drop every record; pending seen-marks are kept until the next sweep."""
        self._cells.clear()

    def remove_orphans(self) -> list[CellIdentity]:
        """
        Remove every record not seen since the previous sweep.

        Returns:
            list[CellIdentity]: Identities that were removed.
        """
        orphans = [identity for identity in self._cells if identity not in self._seen]
        for identity in orphans:
            del self._cells[identity]

        self._seen.clear()

        if orphans:
            self.logger.debug("%s: removed orphaned cells %s",
                              self.name, ", ".join(str(i) for i in orphans))
        return orphans
