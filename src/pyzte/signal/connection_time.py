# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from datetime import datetime, timezone


class ConnectionTime:
    """Time since the data session came up, from the vendor ``ppp_connect_time`` field."""

    TIME_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"
    NOT_AVAILABLE: str = "N/A"

    def __init__(self) -> None:
        self._connected_at: datetime | None = None

    @property
    def connected_at(self) -> datetime | None:
        return self._connected_at

    def update(self, ppp_connect_time: str | None) -> None:
        """Parse the connect timestamp; anything unparsable means not connected."""
        try:
            parsed = datetime.strptime(ppp_connect_time or "", self.TIME_FORMAT)
        except ValueError:
            self._connected_at = None
            return
        self._connected_at = parsed.replace(tzinfo=timezone.utc)

    def seconds_connected(self, now: datetime | None = None) -> int:
        """Whole seconds connected, or -1 if unknown."""
        if self._connected_at is None:
            return -1
        now = now or datetime.now(timezone.utc)
        return int((now - self._connected_at).total_seconds())

    def formatted(self, now: datetime | None = None) -> str:
        """``HH:MM:SS`` with unbounded hours, or ``N/A``."""
        seconds = self.seconds_connected(now)
        if seconds < 0:
            return self.NOT_AVAILABLE
        hours, remainder = divmod(seconds, 3600)
        minutes, secs = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
