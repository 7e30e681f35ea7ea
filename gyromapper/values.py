"""Text parsing and formatting of configuration value types."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional


class ValueParseError(ValueError):
    """Raised when a text value cannot be parsed."""


_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT = re.compile(r"\s*([+-]?\d+)")
_HEX = re.compile(r"\s*([0-9a-fA-F]+)")


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def _first_token(text: str) -> str:
    tokens = text.split()
    return tokens[0] if tokens else ""


def _leading_float(text: str) -> tuple[Optional[float], int]:
    match = _FLOAT.match(text)
    if match is None:
        return None, 0
    return float(match.group(1)), match.end()


def _read_ints(text: str, count: int) -> list[int]:
    values = []
    pos = 0
    for _ in range(count):
        match = _INT.match(text, pos)
        if match is None:
            raise ValueParseError(f"expected {count} integers in {text!r}")
        values.append(int(match.group(1)))
        pos = match.end()
    return values


class FlickSnapMode(Enum):
    NONE = 0
    FOUR = 4
    EIGHT = 8


_FLICK_SNAP_DIGITS = {"0": FlickSnapMode.NONE, "4": FlickSnapMode.FOUR, "8": FlickSnapMode.EIGHT}


def parse_flick_snap_mode(text: str) -> FlickSnapMode:
    """Parse a flick snap mode given by name or by 0, 4 or 8."""
    name = _first_token(text)
    if name in _FLICK_SNAP_DIGITS:
        return _FLICK_SNAP_DIGITS[name]
    try:
        return FlickSnapMode[name]
    except KeyError:
        raise ValueParseError(f"invalid flick snap mode: {name!r}") from None


def format_flick_snap_mode(mode: FlickSnapMode) -> str:
    if mode is FlickSnapMode.FOUR:
        return "4"
    if mode is FlickSnapMode.EIGHT:
        return "8"
    return mode.name


class AxisMode(Enum):
    STANDARD = 1
    INVERTED = -1


def parse_axis_mode(text: str) -> AxisMode:
    """Parse an axis mode given by name or by 1 or -1."""
    name = _first_token(text)
    if name == "1":
        return AxisMode.STANDARD
    if name == "-1":
        return AxisMode.INVERTED
    try:
        return AxisMode[name]
    except KeyError:
        raise ValueParseError(f"invalid axis mode: {name!r}") from None


@dataclass(frozen=True)
class AxisSignPair:
    """Axis modes for the horizontal and vertical axes."""

    first: AxisMode
    second: AxisMode

    @classmethod
    def parse(cls, text: str) -> AxisSignPair:
        """Parse one mode for both axes, or two modes separated by whitespace."""
        line = _first_line(text).lstrip()
        match = re.match(r"\S*", line)
        first = parse_axis_mode(match.group(0))
        rest = line[match.end():]
        if rest == "":
            return cls(first, first)
        return cls(first, parse_axis_mode(rest))

    def __str__(self) -> str:
        if self.first == self.second:
            return self.first.name
        return f"{self.first.name} {self.second.name}"


@dataclass(frozen=True, eq=False)
class FloatXY:
    """A pair of numbers for the horizontal and vertical axes."""

    x: float
    y: float

    @classmethod
    def parse(cls, text: str) -> FloatXY:
        """Parse one number for both axes, or two numbers."""
        line = _first_line(text)
        x, pos = _leading_float(line)
        if x is None:
            raise ValueParseError(f"expected a number in {text!r}")
        y, _ = _leading_float(line[pos:])
        return cls(x, x if y is None else y)

    def __str__(self) -> str:
        if self.x != self.y:
            return f"{self.x:g} {self.y:g}"
        return f"{self.x:g}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FloatXY):
            return NotImplemented
        return abs(self.x - other.x) < 1e-5 and abs(self.y - other.y) < 1e-5


@dataclass(frozen=True)
class Color:
    """An RGB colour with 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0

    @property
    def raw(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b

    @classmethod
    def _from_raw(cls, raw: int) -> Color:
        return cls((raw >> 16) & 0xFF, (raw >> 8) & 0xFF, raw & 0xFF)

    @classmethod
    def parse(cls, text: str, names: Optional[Mapping[str, int]] = None) -> Color:
        """Parse ``xRRGGBB``, a colour name from ``names``, or three integers."""
        if text.startswith("x"):
            match = _HEX.match(text, 1)
            if match is None or int(match.group(1), 16) > 0xFFFFFFFF:
                raise ValueParseError(f"invalid hex colour: {text!r}")
            return cls._from_raw(int(match.group(1), 16))
        if text[:1].isascii() and text[:1].isupper():
            name = _first_token(text)
            names = names or {}
            if name not in names:
                raise ValueParseError(f"unknown colour name: {name!r}")
            return cls._from_raw(names[name])
        r, g, b = (max(0, min(v, 255)) for v in _read_ints(text, 3))
        return cls(r, g, b)

    def __str__(self) -> str:
        return f"x{self.r:02x}{self.g:02x}{self.b:02x}"


class AdaptiveTriggerMode(Enum):
    SEGMENT = "SEGMENT"
    RESISTANCE = "RESISTANCE"
    BOW = "BOW"
    GALLOPING = "GALLOPING"
    SEMI_AUTOMATIC = "SEMI_AUTOMATIC"
    AUTOMATIC = "AUTOMATIC"
    MACHINE = "MACHINE"


_TRIGGER_FIELDS = {
    AdaptiveTriggerMode.SEGMENT: ("start", "end", "force"),
    AdaptiveTriggerMode.RESISTANCE: ("start", "force"),
    AdaptiveTriggerMode.BOW: ("start", "end", "force", "force_extra"),
    AdaptiveTriggerMode.GALLOPING: ("start", "end", "force", "force_extra", "frequency"),
    AdaptiveTriggerMode.SEMI_AUTOMATIC: ("start", "end", "force"),
    AdaptiveTriggerMode.AUTOMATIC: ("start", "force", "frequency"),
    AdaptiveTriggerMode.MACHINE: (
        "start", "end", "force", "force_extra", "frequency", "frequency_extra",
    ),
}


@dataclass(frozen=True)
class AdaptiveTriggerSetting:
    """An adaptive trigger effect with the parameters its mode uses."""

    mode: AdaptiveTriggerMode
    start: int = 0
    end: int = 0
    force: int = 0
    frequency: int = 0
    force_extra: int = 0
    frequency_extra: int = 0

    @classmethod
    def parse(cls, text: str) -> AdaptiveTriggerSetting:
        """Parse a mode name followed by that mode's integer parameters."""
        stripped = text.lstrip()
        match = re.match(r"\S*", stripped)
        name = match.group(0)
        try:
            mode = AdaptiveTriggerMode[name]
        except KeyError:
            raise ValueParseError(f"invalid adaptive trigger mode: {name!r}") from None
        fields = _TRIGGER_FIELDS[mode]
        values = _read_ints(stripped[match.end():], len(fields))
        return cls(mode, **dict(zip(fields, values)))

    def __str__(self) -> str:
        params = " ".join(str(getattr(self, field)) for field in _TRIGGER_FIELDS[self.mode])
        return f"{self.mode.name} {params}"