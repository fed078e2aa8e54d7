# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pyzte.lib.types import ScalarType

_FIRST_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?")


class ScalarKindError(TypeError):
    """Raised when a value is routed to a ScalarValue of an incompatible kind."""


class ScalarKind(Enum):
    """
    Closed set of scalar kinds a ScalarValue can hold.

    The kind is fixed at construction and selects the parse function,
    so parsing never inspects the runtime type of the held value.
    """
    INTEGER = "integer"
    FLOAT   = "float"
    BOOLEAN = "boolean"

    @property
    def zero(self) -> ScalarType:
        return _ZERO[self]

    def accepts(self, value: object) -> bool:
        """True if ``value`` is a native Python value of this kind (no coercion)."""
        if self is ScalarKind.BOOLEAN:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self is ScalarKind.INTEGER:
            return isinstance(value, int)
        return isinstance(value, float)


_ZERO: dict[ScalarKind, ScalarType] = {
    ScalarKind.INTEGER: 0,
    ScalarKind.FLOAT: 0.0,
    ScalarKind.BOOLEAN: False,
}


@dataclass(frozen=True)
class ParseOptions:
    """
    Sanitizing rules applied to a raw field before it is parsed.

    Attributes:
        remove: Literals to strip. Numeric literals (e.g. ``"0.0"``) only
            blank the field when they are the whole value, or are removed
            when preceded by a space; anything else (e.g. ``"MHz"``) is
            removed wherever it appears.
        strip_non_numeric: Reduce the field to its first signed decimal number.
        input_is_hex: Parse integers as base-16.
    """
    remove: tuple[str, ...] = ()
    strip_non_numeric: bool = False
    input_is_hex: bool = False

    @classmethod
    def removing(cls, *literals: str) -> ParseOptions:
        return cls(remove=tuple(literals))


NO_OPTIONS   = ParseOptions()
HEX          = ParseOptions(input_is_hex=True)
NUMERIC_ONLY = ParseOptions(strip_non_numeric=True)


def is_number(text: str) -> bool:
    """Return True if ``text`` parses as a decimal number."""
    try:
        float(text)
    except ValueError:
        return False
    return True


def strip_non_numeric(text: str) -> str:
    """
    Return the first signed decimal number found in ``text``.

    ``"n78"`` -> ``"78"``, ``"-3276.8 dB"`` -> ``"-3276.8"``, ``"N/A"`` -> ``""``.
    """
    match = _FIRST_NUMBER_RE.search(text)
    return match.group(0) if match else ""


def first_non_empty(*values: str | None) -> str:
    """Return the first value that is neither ``None`` nor empty, else ``""``."""
    for value in values:
        if value:
            return value
    return ""


def remove_literals(text: str, literals: tuple[str, ...]) -> str:
    for literal in literals:
        if is_number(literal):
            # Never cut into a legitimate reading that merely starts with the same digits.
            if text.strip() == literal:
                text = ""
            else:
                text = text.replace(" " + literal, "")
        else:
            text = text.replace(literal, "")
    return text


def sanitize(text: str, options: ParseOptions) -> str:
    """Apply ``options`` in declaration order: literal removal, then numeric stripping."""
    if options.remove:
        text = remove_literals(text, options.remove)
    if options.strip_non_numeric:
        text = strip_non_numeric(text)
    return text


def parse_int(text: str, base: int = 10) -> int | None:
    text = text.strip()
    if text == "":
        return None
    try:
        return int(text, base)
    except ValueError:
        return None


def parse_float(text: str) -> float | None:
    text = text.strip()
    if text == "":
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _parse_integer(text: str, options: ParseOptions) -> ScalarType | None:
    return parse_int(text, 16 if options.input_is_hex else 10)


def _parse_float(text: str, options: ParseOptions) -> ScalarType | None:
    return parse_float(text)


_PARSERS: dict[ScalarKind, Callable[[str, ParseOptions], ScalarType | None]] = {
    ScalarKind.INTEGER: _parse_integer,
    ScalarKind.FLOAT: _parse_float,
}


def compare_values(kind: ScalarKind, a: ScalarType, b: ScalarType) -> int:
    """
    Three-way compare two native values of ``kind``.

    Returns -1, 0 or 1. Values of another kind raise ScalarKindError
    rather than being coerced.
    """
    if not (kind.accepts(a) and kind.accepts(b)):
        raise ScalarKindError(
            f"Cannot compare {type(a).__name__} and {type(b).__name__} as {kind.value}")
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


class ScalarValue:
    """
    Last successfully parsed value of one raw vendor field.

    A failed parse leaves both the value and the update counter untouched,
    so a single garbled field never overwrites the last known good value.
    Check ``ok`` before reading ``get()``; ``updates == 0`` means never observed.
    """

    def __init__(self, kind: ScalarKind) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.kind = kind
        self._value: ScalarType = kind.zero
        self._updates: int = 0
        self._parse = _PARSERS.get(kind)

    @property
    def updates(self) -> int:
        return self._updates

    @property
    def ok(self) -> bool:
        return self._updates > 0

    def get(self) -> ScalarType:
        return self._value

    def set(self, raw: str | None, options: ParseOptions = NO_OPTIONS) -> bool:
        """
        Sanitize and parse ``raw`` per ``options``.

        Returns:
            bool: True if the value was updated.

        Raises:
            ScalarKindError: If this is a BOOLEAN value; booleans are only
                assigned directly via ``set_bool``.
        """
        if self._parse is None:
            raise ScalarKindError("BOOLEAN scalars have no string conversion path; use set_bool()")

        text = sanitize(raw or "", options)
        parsed = self._parse(text, options)
        if parsed is None:
            self.logger.debug("Unparsable %s field %r (sanitized %r)", self.kind.value, raw, text)
            return False

        self._value = parsed
        self._updates += 1
        return True

    def set_bool(self, value: bool) -> None:
        if self.kind is not ScalarKind.BOOLEAN or not isinstance(value, bool):
            raise ScalarKindError(f"set_bool() requires a BOOLEAN scalar and a bool, got {self.kind.value}")
        self._value = value
        self._updates += 1

    def __repr__(self) -> str:
        return f"ScalarValue(kind={self.kind.value}, value={self._value!r}, updates={self._updates})"


def scalar_equals(a: ScalarValue, b: ScalarValue) -> bool:
    """True if both values are of the same kind and hold the same value."""
    if a.kind is not b.kind:
        raise ScalarKindError(f"Cannot compare {a.kind.value} with {b.kind.value}")
    return compare_values(a.kind, a.get(), b.get()) == 0


def scalar_compare(a: ScalarValue, b: ScalarValue) -> int:
    """Three-way compare of two ScalarValues of the same kind."""
    if a.kind is not b.kind:
        raise ScalarKindError(f"Cannot compare {a.kind.value} with {b.kind.value}")
    return compare_values(a.kind, a.get(), b.get())
