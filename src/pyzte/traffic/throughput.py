# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import time
from collections.abc import Callable

from pydantic import BaseModel, Field

from pyzte.data_type.device_sample import DeviceSample
from pyzte.lib.scalar_value import parse_int
from pyzte.lib.types import TimestampSec

Clock = Callable[[], float]


def bytes_to_mbits(value: int) -> float:
    """Bytes to megabits (binary mega, matching the modem web UI)."""
    return value * 8 / (1024.0 * 1024.0)


class ThroughputCalculator:
    """
    Per-second rate derived from two successive readings of a cumulative counter.
    """

    def __init__(self) -> None:
        self.throughput: float = 0.0
        self.updates: int = 0
        self._last_value: int = 0
        self._last_time: TimestampSec = TimestampSec(0.0)

    def update(self, counter: int | str, now: float) -> None:
        """
        Record a new counter reading taken at ``now`` (seconds, monotonic).

        Unparsable string counters are recorded as -1.
        """
        if isinstance(counter, str):
            parsed = parse_int(counter)
            value = parsed if parsed is not None else -1
        else:
            value = counter

        if self.updates > 0:
            elapsed = now - self._last_time
            if elapsed > 0:
                self.throughput = (value - self._last_value) / elapsed

        self._last_value = value
        self._last_time = TimestampSec(now)
        self.updates += 1


class TrafficRatesModel(BaseModel):
    rx_mbits      : float         = Field(..., description="Downlink throughput in Mbit/s")
    tx_mbits      : float         = Field(..., description="Uplink throughput in Mbit/s")
    rx_packets_ps : float | None  = Field(None, description="Downlink packets per second, None until two readings")
    tx_packets_ps : float | None  = Field(None, description="Uplink packets per second, None until two readings")


class TrafficMonitor:
    """Live traffic figures tracked across DeviceSamples."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self.rx_packets = ThroughputCalculator()
        self.tx_packets = ThroughputCalculator()
        self.rx_mbits: float = 0.0
        self.tx_mbits: float = 0.0

    @property
    def rates_ready(self) -> bool:
        return self.rx_packets.updates >= 2

    def update(self, sample: DeviceSample, now: float | None = None) -> None:
        now = self._clock() if now is None else now

        self.rx_packets.update(sample.realtime_rx_packets, now)
        self.tx_packets.update(sample.realtime_tx_packets, now)

        self.rx_mbits = bytes_to_mbits(parse_int(sample.realtime_rx_thrpt) or 0)
        self.tx_mbits = bytes_to_mbits(parse_int(sample.realtime_tx_thrpt) or 0)

    def to_model(self) -> TrafficRatesModel:
        ready = self.rates_ready
        return TrafficRatesModel(
            rx_mbits      = round(self.rx_mbits, 2),
            tx_mbits      = round(self.tx_mbits, 2),
            rx_packets_ps = self.rx_packets.throughput if ready else None,
            tx_packets_ps = self.tx_packets.throughput if ready else None,
        )
