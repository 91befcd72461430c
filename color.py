"""
Color Codec
===========

Decode user-supplied colors into one canonical RGB value.

Accepted encodings (mixed freely within one file):
- "R,G,B"            decimal channels, e.g. "255,128,0"
- "#RRGGBB"          hex, case-insensitive, e.g. "#FF8000"
- { r, g, b }        record with integer channels, e.g. { r = 255, g = 128, b = 0 }

The encoding is chosen from the shape of the value, never from a tag.
"""

# ============================================================================
# IMPORTS
# ============================================================================

from __future__ import annotations

import re
import string
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict

from error_handling import (
    ChannelOutOfRange,
    InvalidColorFormat,
    InvalidHexDigit,
    InvalidHexLength,
    MissingField,
    NotANumber,
)


CHANNELS = ("r", "g", "b")
CHANNEL_MIN = 0
CHANNEL_MAX = 255

HEX_LENGTH = 7
_HEX_DIGITS = frozenset(string.hexdigits)
_INTEGER_RE = re.compile(r"-?[0-9]+")


# ============================================================================
# CANONICAL COLOR
# ============================================================================

def _check_channel(name: str, value: Any, raw: Any) -> int:
    """Validate one channel and return it as int"""
    # bool is an int subclass; true/false in a config file is not a channel
    if isinstance(value, bool) or not isinstance(value, int):
        raise NotANumber(
            f"Channel '{name}' is not an integer: {value!r}",
            context={"channel": name, "value": raw}
        )
    if not CHANNEL_MIN <= value <= CHANNEL_MAX:
        raise ChannelOutOfRange(
            f"Channel '{name}' out of range {CHANNEL_MIN}-{CHANNEL_MAX}: {value}",
            context={"channel": name, "value": raw}
        )
    return value


@dataclass(frozen=True)
class Color:
    """24-bit RGB color"""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in CHANNELS:
            value = getattr(self, name)
            _check_channel(name, value, (self.r, self.g, self.b))

    # ------------------------------------------------------------------------
    # Decoders
    # ------------------------------------------------------------------------

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """
        Parse "#RRGGBB"

        Raises:
            InvalidHexLength: Not exactly 7 characters or no leading '#'
            InvalidHexDigit: A digit outside [0-9a-fA-F]
        """
        if len(text) != HEX_LENGTH or not text.startswith("#"):
            raise InvalidHexLength(
                f"Hex color must be '#' followed by 6 digits, got {text!r}",
                context={"value": text}
            )

        digits = text[1:]
        bad = [ch for ch in digits if ch not in _HEX_DIGITS]
        if bad:
            raise InvalidHexDigit(
                f"Invalid hex digit {bad[0]!r} in {text!r}",
                context={"value": text}
            )

        return cls(
            int(digits[0:2], 16),
            int(digits[2:4], 16),
            int(digits[4:6], 16),
        )

    @classmethod
    def from_comma(cls, text: str) -> Color:
        """
        Parse "R,G,B"

        Segments may carry surrounding whitespace.

        Raises:
            InvalidColorFormat: Not exactly three segments
            NotANumber: A segment is not a decimal integer
            ChannelOutOfRange: A channel outside 0-255
        """
        segments = text.split(",")
        if len(segments) != len(CHANNELS):
            raise InvalidColorFormat(
                f"Expected 3 comma-separated channels, got {len(segments)} in {text!r}",
                context={"value": text}
            )

        values = []
        for name, segment in zip(CHANNELS, segments):
            segment = segment.strip()
            if not _INTEGER_RE.fullmatch(segment):
                raise NotANumber(
                    f"Channel '{name}' is not an integer: {segment!r}",
                    context={"channel": name, "value": text}
                )
            # more than 3 significant digits cannot be a channel
            if len(segment.lstrip("-").lstrip("0")) > 3:
                raise ChannelOutOfRange(
                    f"Channel '{name}' out of range {CHANNEL_MIN}-{CHANNEL_MAX}: {segment[:10]}...",
                    context={"channel": name, "value": text}
                )
            values.append(_check_channel(name, int(segment), text))

        return cls(*values)

    @classmethod
    def from_record(cls, record: Mapping) -> Color:
        """
        Parse a mapping with exactly the keys r, g, b

        Raises:
            MissingField: One of r, g, b is absent
            InvalidColorFormat: Keys other than r, g, b
            NotANumber: A channel is not an integer
            ChannelOutOfRange: A channel outside 0-255
        """
        raw = dict(record)

        missing = [name for name in CHANNELS if name not in record]
        if missing:
            raise MissingField(
                f"Color record is missing channel(s): {', '.join(missing)}",
                context={"missing": missing, "value": raw}
            )

        extra = sorted(str(key) for key in record if key not in CHANNELS)
        if extra:
            raise InvalidColorFormat(
                f"Color record has unexpected key(s): {', '.join(extra)}",
                context={"unexpected": extra, "value": raw}
            )

        return cls(*(_check_channel(name, record[name], raw) for name in CHANNELS))

    # ------------------------------------------------------------------------
    # Encoders
    # ------------------------------------------------------------------------

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_comma(self) -> str:
        return f"{self.r},{self.g},{self.b}"

    def to_record(self) -> Dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


# ============================================================================
# DISPATCH
# ============================================================================

def _looks_like_bare_hex(text: str) -> bool:
    """Hex digits with the '#' left off, e.g. "FF8000" """
    return len(text) in (HEX_LENGTH - 1, HEX_LENGTH) and all(ch in _HEX_DIGITS for ch in text)


ENCODERS = {
    "hex": Color.to_hex,
    "comma": Color.to_comma,
    "record": Color.to_record,
}


def parse_color(value: Any) -> Color:
    """
    Decode any accepted color encoding

    Args:
        value: A string ("R,G,B" or "#RRGGBB") or a mapping with r, g, b

    Returns:
        Color instance

    Raises:
        ColorError subclass describing the first problem found
    """
    if isinstance(value, Color):
        return value

    if isinstance(value, str):
        if value.startswith("#") or _looks_like_bare_hex(value):
            return Color.from_hex(value)
        if "," in value:
            return Color.from_comma(value)
        raise InvalidColorFormat(
            f"Unrecognized color {value!r}; expected 'R,G,B' or '#RRGGBB'",
            context={"value": value}
        )

    if isinstance(value, Mapping):
        return Color.from_record(value)

    raise InvalidColorFormat(
        f"Unrecognized color of type {type(value).__name__}: {value!r}",
        context={"value": value}
    )


def encode_color(color: Color, fmt: str = "hex") -> Any:
    """Encode *color* as 'hex', 'comma' or 'record'"""
    try:
        encoder = ENCODERS[fmt]
    except KeyError:
        raise ValueError(
            f"Unknown color format {fmt!r}; expected one of {', '.join(ENCODERS)}"
        ) from None
    return encoder(color)
