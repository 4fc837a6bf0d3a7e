"""
ValueParser
===========

Interprets the raw text of an opcode assignment according to its
:class:`~sfz_parser.models.OpcodeDescriptor`.

Parsing never raises.  A value that does not fit its descriptor is kept as a
``STRING`` :class:`~sfz_parser.models.TypedValue` holding the raw text, and a
``(WarningKind, message)`` pair is returned beside it for the caller to turn
into a :class:`~sfz_parser.models.ParseWarning`.
"""
from __future__ import annotations

import math
import re
from typing import Any, Optional, Tuple

from ..models import OpcodeDescriptor, TypedValue, ValueKind, WarningKind

Problem = Tuple[WarningKind, str]

_NOTE_RE = re.compile(r"([a-gA-G])([#b]?)(-?\d+)$")
_PITCH_CLASSES = {"c": 0, "d": 2, "e": 4, "f": 5, "g": 7, "a": 9, "b": 11}
_ACCIDENTALS = {"": 0, "#": 1, "b": -1}

_NUMERIC_KINDS = frozenset(
    {ValueKind.INTEGER, ValueKind.FLOAT, ValueKind.PERCENTAGE, ValueKind.NOTE}
)


def parse_int(text: str) -> int:
    """Parse an integer, accepting integral floats such as ``"12.0"``."""
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    number = float(text)
    if not number.is_integer():
        raise ValueError(f"{text!r} is not an integer")
    return int(number)


def parse_float(text: str) -> float:
    number = float(text.strip())
    if not math.isfinite(number):
        raise ValueError(f"{text.strip()!r} is not a finite number")
    return number


def parse_note(text: str) -> int:
    """
    Parse a MIDI note number or a note name.

    Note names use scientific pitch notation with middle C as ``c4`` (60):
    ``c#4`` = 61, ``db4`` = 61, ``a#3`` = 58, ``C-1`` = 0.  Names are
    case-insensitive.
    """
    text = text.strip()
    try:
        return parse_int(text)
    except ValueError:
        pass
    match = _NOTE_RE.match(text)
    if match is None:
        raise ValueError(f"{text!r} is not a MIDI note number or note name")
    letter, accidental, octave = match.groups()
    return (
        (int(octave) + 1) * 12
        + _PITCH_CLASSES[letter.lower()]
        + _ACCIDENTALS[accidental]
    )


def parse_bool(text: str) -> bool:
    word = text.strip().lower()
    if word == "on":
        return True
    if word == "off":
        return False
    raise ValueError(f"expected 'on' or 'off', got {text.strip()!r}")


class ValueParser:
    """Kind-directed interpretation of raw opcode values."""

    def parse(
        self,
        descriptor: OpcodeDescriptor,
        raw: str,
    ) -> Tuple[TypedValue, Optional[Problem]]:
        """
        Interpret *raw* for *descriptor*.

        Parameters
        ----------
        descriptor:
            Catalog entry of the opcode being assigned.
        raw:
            The value text exactly as lexed.

        Returns
        -------
        Tuple[TypedValue, Optional[Problem]]
            The typed value and ``None``, or the raw value kept as a
            ``STRING`` together with an ``INVALID_VALUE`` / ``OUT_OF_RANGE``
            problem.
        """
        try:
            value = self._interpret(descriptor, raw)
        except ValueError as exc:
            return self.raw_value(raw), (
                WarningKind.INVALID_VALUE,
                f"invalid value for '{descriptor.name}': {exc}",
            )

        if descriptor.bounds is not None and descriptor.kind in _NUMERIC_KINDS:
            lo, hi = descriptor.bounds
            if not lo <= value <= hi:
                return self.raw_value(raw), (
                    WarningKind.OUT_OF_RANGE,
                    f"'{descriptor.name}' value {raw.strip()} is outside "
                    f"[{lo:g}, {hi:g}]",
                )

        return TypedValue(descriptor.kind, value, raw), None

    def default_value(self, descriptor: OpcodeDescriptor) -> Optional[TypedValue]:
        """The descriptor's default as a :class:`TypedValue`, if it has one."""
        if descriptor.default is None:
            return None
        value, _ = self.parse(descriptor, descriptor.default)
        return value

    @staticmethod
    def raw_value(raw: str) -> TypedValue:
        """A value retained verbatim (unknown opcode or rejected value)."""
        return TypedValue(ValueKind.STRING, raw, raw)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _interpret(self, descriptor: OpcodeDescriptor, raw: str) -> Any:
        kind = descriptor.kind
        if kind is ValueKind.INTEGER:
            return parse_int(raw)
        if kind in (ValueKind.FLOAT, ValueKind.PERCENTAGE):
            return parse_float(raw)
        if kind is ValueKind.NOTE:
            return parse_note(raw)
        if kind is ValueKind.BOOLEAN:
            return parse_bool(raw)
        if kind is ValueKind.ENUM:
            return self._parse_enum(descriptor, raw)
        if kind is ValueKind.PATH:
            return raw.strip().replace("\\", "/")
        return raw

    @staticmethod
    def _parse_enum(descriptor: OpcodeDescriptor, raw: str) -> str:
        word = raw.strip()
        if word in descriptor.choices:
            return word
        if word.lower() in descriptor.choices:
            return word.lower()
        allowed = ", ".join(sorted(descriptor.choices))
        raise ValueError(f"{word!r} is not one of: {allowed}")
