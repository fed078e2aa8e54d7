# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, Field

from pyzte.lib.scalar_value import (
    NO_OPTIONS,
    ParseOptions,
    ScalarKind,
    ScalarKindError,
    ScalarValue,
    compare_values,
)
from pyzte.lib.types import FloatSeries, NDArrayF64, ScalarNumber

MAX_HISTORY: int = 100


class MetricSeriesModel(BaseModel):
    """Read-only view of a MetricSeries for presentation."""
    ok      : bool                 = Field(..., description="At least one successful update was seen")
    current : ScalarNumber | None  = Field(None, description="Last successfully parsed value")
    min     : ScalarNumber | None  = Field(None, description="Lowest value since the first update")
    max     : ScalarNumber | None  = Field(None, description="Highest value since the first update")
    average : float | None         = Field(None, description="Mean of the values in the history buffer")
    samples : int                  = Field(..., ge=0, description="Values currently held in the history buffer")
    updates : int                  = Field(..., ge=0, description="Successful updates since creation")


class MetricSeries:
    """
    A numeric ScalarValue with a bounded circular history.

    Min/max are tracked incrementally from the first successful update and
    are not recomputed when the oldest sample is overwritten. The average
    is the mean of the samples currently in the buffer.
    """

    def __init__(self, kind: ScalarKind = ScalarKind.FLOAT, capacity: int = MAX_HISTORY) -> None:
        if kind is ScalarKind.BOOLEAN:
            raise ScalarKindError("MetricSeries only tracks INTEGER or FLOAT values")
        if capacity < 1:
            raise ValueError(f"History capacity must be >= 1, got {capacity}")

        self._value = ScalarValue(kind)
        self._capacity = capacity
        self._history: NDArrayF64 = np.zeros(capacity, dtype=np.float64)
        self._count: int = 0
        self._cursor: int = 0
        self._min: ScalarNumber = kind.zero
        self._max: ScalarNumber = kind.zero
        self._average: float = 0.0

    @property
    def kind(self) -> ScalarKind:
        return self._value.kind

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def updates(self) -> int:
        return self._value.updates

    @property
    def ok(self) -> bool:
        return self._value.ok

    @property
    def current(self) -> ScalarNumber:
        return self._value.get()

    @property
    def min(self) -> ScalarNumber:
        return self._min

    @property
    def max(self) -> ScalarNumber:
        return self._max

    @property
    def average(self) -> float:
        return self._average

    def __len__(self) -> int:
        return self._count

    def update(self, raw: str | None, options: ParseOptions = NO_OPTIONS) -> bool:
        """
        Parse ``raw`` and, on success, append it to the history.

        Returns:
            bool: False if the field did not parse; nothing changes in that case.
        """
        if not self._value.set(raw, options):
            return False

        value = self._value.get()

        self._history[self._cursor] = value
        self._cursor = (self._cursor + 1) % self._capacity
        self._count = min(self._count + 1, self._capacity)
        self._average = float(self._history[:self._count].mean())

        if self.updates == 1:
            self._min = value
            self._max = value
        else:
            if compare_values(self.kind, value, self._min) < 0:
                self._min = value
            if compare_values(self.kind, value, self._max) > 0:
                self._max = value

        return True

    def history(self) -> FloatSeries:
        """Buffered values, oldest first."""
        if self._count < self._capacity:
            ordered = self._history[:self._count]
        else:
            ordered = np.concatenate((self._history[self._cursor:], self._history[:self._cursor]))
        return [float(v) for v in ordered]

    def to_model(self) -> MetricSeriesModel:
        if not self.ok:
            return MetricSeriesModel(ok=False, samples=0, updates=0)

        return MetricSeriesModel(
            ok      = True,
            current = self.current,
            min     = self._min,
            max     = self._max,
            average = round(self._average, 2),
            samples = self._count,
            updates = self.updates,
        )
