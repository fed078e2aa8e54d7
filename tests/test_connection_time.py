# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pyzte.signal.connection_time import ConnectionTime

NOW = datetime(2024, 5, 2, 13, 4, 5, tzinfo=timezone.utc)


def test_unknown_before_first_update() -> None:
    conn = ConnectionTime()
    assert conn.connected_at is None
    assert conn.seconds_connected(NOW) == -1
    assert conn.formatted(NOW) == "N/A"


def test_hours_are_not_wrapped_at_a_day() -> None:
    conn = ConnectionTime()
    conn.update("2024-05-01T10:00:00Z")

    assert conn.connected_at == datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
    assert conn.seconds_connected(NOW) == 27 * 3600 + 4 * 60 + 5
    assert conn.formatted(NOW) == "27:04:05"


@pytest.mark.parametrize("raw", ["", None, "yesterday", "2024-05-01 10:00:00"])
def test_unparsable_value_resets_to_unknown(raw: str | None) -> None:
    conn = ConnectionTime()
    conn.update("2024-05-01T10:00:00Z")

    conn.update(raw)

    assert conn.connected_at is None
    assert conn.formatted(NOW) == "N/A"
