"""Basic value types shared by the QR Code encoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar


class Ecc(IntEnum):
    """Error correction level of a QR Code symbol."""

    LOW = 0
    """Tolerates about 7% erroneous codewords."""
    MEDIUM = 1
    """Tolerates about 15% erroneous codewords."""
    QUARTILE = 2
    """Tolerates about 25% erroneous codewords."""
    HIGH = 3
    """Tolerates about 30% erroneous codewords."""

    def ordinal(self) -> int:
        """Index of this level in the capacity tables (0 to 3)."""
        return int(self.value)

    def format_bits(self) -> int:
        """The 2-bit value of this level in the format information."""
        return _FORMAT_BITS[self]


_FORMAT_BITS = {
    Ecc.LOW: 1,
    Ecc.MEDIUM: 0,
    Ecc.QUARTILE: 3,
    Ecc.HIGH: 2,
}


@dataclass(frozen=True, order=True)
class Version:
    """A QR Code version number between 1 and 40 inclusive."""

    value: int

    MIN: ClassVar[Version]
    MAX: ClassVar[Version]

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not 1 <= self.value <= 40:
            raise ValueError("Version number out of range")


Version.MIN = Version(1)
Version.MAX = Version(40)


@dataclass(frozen=True, order=True)
class Mask:
    """A mask pattern number between 0 and 7 inclusive."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not 0 <= self.value <= 7:
            raise ValueError("Mask value out of range")


class DataTooLong(Exception):
    """The supplied data does not fit any QR Code version in range."""


class SegmentTooLong(DataTooLong):
    """A segment has more characters than its length field can express."""

    def __init__(self) -> None:
        super().__init__("Segment too long")


class DataOverCapacity(DataTooLong):
    """The encoded data needs more bits than the symbol can hold."""

    def __init__(self, datalen: int, maxcapacity: int) -> None:
        self.datalen = datalen
        self.maxcapacity = maxcapacity
        super().__init__(
            f"Data length = {datalen} bits, Max capacity = {maxcapacity} bits"
        )


def get_bit(x: int, i: int) -> bool:
    """Return True if bit ``i`` of ``x`` is set."""
    return (x >> i) & 1 != 0