"""Segments of data in a QR Code and how they are bit-encoded."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from fancyqr.types import Version, get_bit

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_ALPHANUMERIC_INDEX = {ch: i for i, ch in enumerate(ALPHANUMERIC_CHARSET)}
_DIGITS = frozenset("0123456789")


class SegmentMode(Enum):
    """How a segment's data bits are interpreted."""

    NUMERIC = "numeric"
    ALPHANUMERIC = "alphanumeric"
    BYTE = "byte"
    KANJI = "kanji"
    ECI = "eci"

    def mode_bits(self) -> int:
        """The 4-bit mode indicator of this mode."""
        return _MODE_BITS[self]

    def num_char_count_bits(self, version: Version) -> int:
        """Width of the character count field at the given version."""
        return _CHAR_COUNT_BITS[self][(version.value + 7) // 17]


_MODE_BITS = {
    SegmentMode.NUMERIC: 0x1,
    SegmentMode.ALPHANUMERIC: 0x2,
    SegmentMode.BYTE: 0x4,
    SegmentMode.KANJI: 0x8,
    SegmentMode.ECI: 0x7,
}

_CHAR_COUNT_BITS = {
    SegmentMode.NUMERIC: (10, 12, 14),
    SegmentMode.ALPHANUMERIC: (9, 11, 13),
    SegmentMode.BYTE: (8, 16, 16),
    SegmentMode.KANJI: (8, 10, 12),
    SegmentMode.ECI: (0, 0, 0),
}


class BitBuffer(list):
    """An appendable sequence of bits, stored as booleans."""

    def append_bits(self, value: int, length: int) -> None:
        """Append the ``length`` low-order bits of ``value``, most significant first."""
        if not 0 <= length <= 31 or value < 0 or value >> length != 0:
            raise ValueError("Value out of range")
        self.extend(get_bit(value, i) for i in reversed(range(length)))


def _chunks(seq: Sequence, size: int) -> Iterable[Sequence]:
    return (seq[start:start + size] for start in range(0, len(seq), size))


@dataclass(frozen=True)
class QrSegment:
    """An immutable segment of character, binary or control data.

    ``num_chars`` counts characters for numeric, alphanumeric and kanji
    mode, bytes for byte mode, and is 0 for ECI mode.
    """

    mode: SegmentMode
    num_chars: int
    data: tuple[bool, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", tuple(bool(b) for b in self.data))

    @staticmethod
    def make_bytes(data: bytes) -> QrSegment:
        """A byte-mode segment holding the given binary data."""
        bb = BitBuffer()
        for byte in bytes(data):
            bb.append_bits(byte, 8)
        return QrSegment(SegmentMode.BYTE, len(data), tuple(bb))

    @staticmethod
    def make_numeric(text: str) -> QrSegment:
        """A numeric-mode segment for a string of decimal digits."""
        if not QrSegment.is_numeric(text):
            raise ValueError("String contains non-numeric characters")
        bb = BitBuffer()
        for chunk in _chunks(text, 3):
            bb.append_bits(int(chunk), len(chunk) * 3 + 1)
        return QrSegment(SegmentMode.NUMERIC, len(text), tuple(bb))

    @staticmethod
    def make_alphanumeric(text: str) -> QrSegment:
        """An alphanumeric-mode segment for text in the alphanumeric charset."""
        if not QrSegment.is_alphanumeric(text):
            raise ValueError(
                "String contains unencodable characters in alphanumeric mode"
            )
        bb = BitBuffer()
        for chunk in _chunks(text, 2):
            value = 0
            for ch in chunk:
                value = value * 45 + _ALPHANUMERIC_INDEX[ch]
            bb.append_bits(value, len(chunk) * 5 + 1)
        return QrSegment(SegmentMode.ALPHANUMERIC, len(text), tuple(bb))

    @staticmethod
    def make_segments(text: str) -> list[QrSegment]:
        """Zero or one segment in the most compact single mode for the text."""
        if not text:
            return []
        if QrSegment.is_numeric(text):
            return [QrSegment.make_numeric(text)]
        if QrSegment.is_alphanumeric(text):
            return [QrSegment.make_alphanumeric(text)]
        return [QrSegment.make_bytes(text.encode("utf-8"))]

    @staticmethod
    def make_eci(assignval: int) -> QrSegment:
        """An ECI designator segment with the given assignment value."""
        bb = BitBuffer()
        if 0 <= assignval < (1 << 7):
            bb.append_bits(assignval, 8)
        elif (1 << 7) <= assignval < (1 << 14):
            bb.append_bits(0b10, 2)
            bb.append_bits(assignval, 14)
        elif (1 << 14) <= assignval < 1_000_000:
            bb.append_bits(0b110, 3)
            bb.append_bits(assignval, 21)
        else:
            raise ValueError("ECI assignment value out of range")
        return QrSegment(SegmentMode.ECI, 0, tuple(bb))

    @staticmethod
    def is_numeric(text: str) -> bool:
        """True if every character is a digit 0 to 9."""
        return all(ch in _DIGITS for ch in text)

    @staticmethod
    def is_alphanumeric(text: str) -> bool:
        """True if every character is in the alphanumeric charset."""
        return all(ch in _ALPHANUMERIC_INDEX for ch in text)

    @staticmethod
    def get_total_bits(segs: Iterable[QrSegment], version: Version) -> int | None:
        """Bits needed to encode the segments at a version.

        Returns None if a segment has too many characters for its count field.
        """
        total = 0
        for seg in segs:
            ccbits = seg.mode.num_char_count_bits(version)
            if seg.num_chars >= (1 << ccbits):
                return None
            total += 4 + ccbits + len(seg.data)
        return total