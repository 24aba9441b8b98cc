"""Core QR Code symbol construction: codewords, error correction and masking."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import cycle
from typing import Callable, Sequence

from fancyqr.segment import BitBuffer, QrSegment
from fancyqr.types import (
    DataOverCapacity,
    Ecc,
    Mask,
    SegmentTooLong,
    Version,
    get_bit,
)

_PENALTY_N1 = 3
_PENALTY_N2 = 3
_PENALTY_N3 = 40
_PENALTY_N4 = 10

_ECC_CODEWORDS_PER_BLOCK = (
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28,
     28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26,
     26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30,
     28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28,
     30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
)

_NUM_ERROR_CORRECTION_BLOCKS = (
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8,
     8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16,
     17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20,
     23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25,
     25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
)

_MASK_PATTERNS: tuple[Callable[[int, int], bool], ...] = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
)


def _table_get(table: Sequence[Sequence[int]], ver: Version, ecl: Ecc) -> int:
    return table[ecl.ordinal()][ver.value]


def _num_raw_data_modules(ver: Version) -> int:
    """Number of data bits available in a symbol of this version, after function patterns."""
    v = ver.value
    result = (16 * v + 128) * v + 64
    if v >= 2:
        numalign = v // 7 + 2
        result -= (25 * numalign - 10) * numalign - 55
        if v >= 7:
            result -= 36
    return result


def _num_data_codewords(ver: Version, ecl: Ecc) -> int:
    """Number of 8-bit data codewords (excluding ECC) for the version and level."""
    return (
        _num_raw_data_modules(ver) // 8
        - _table_get(_ECC_CODEWORDS_PER_BLOCK, ver, ecl)
        * _table_get(_NUM_ERROR_CORRECTION_BLOCKS, ver, ecl)
    )


def _rs_multiply(x: int, y: int) -> int:
    """Product of two field elements modulo GF(2^8/0x11D)."""
    z = 0
    for i in reversed(range(8)):
        z = ((z << 1) ^ ((z >> 7) * 0x11D)) & 0xFF
        z ^= ((y >> i) & 1) * x
    return z


def _rs_divisor(degree: int) -> list[int]:
    if not 1 <= degree <= 255:
        raise ValueError("Degree out of range")
    result = [0] * (degree - 1) + [1]
    root = 1
    for _ in range(degree):
        for j in range(degree):
            result[j] = _rs_multiply(result[j], root)
            if j + 1 < degree:
                result[j] ^= result[j + 1]
        root = _rs_multiply(root, 0x02)
    return result


def _rs_remainder(data: Sequence[int], divisor: Sequence[int]) -> list[int]:
    result = [0] * len(divisor)
    for b in data:
        factor = b ^ result.pop(0)
        result.append(0)
        result = [r ^ _rs_multiply(d, factor) for r, d in zip(result, divisor)]
    return result


class _FinderPenalty:
    """Run-length history of one row or column, used to spot finder-like patterns."""

    def __init__(self, size: int) -> None:
        self.size = size
        self.history = [0] * 7

    def add(self, run_length: int) -> None:
        if self.history[0] == 0:
            run_length += self.size
        self.history.pop()
        self.history.insert(0, run_length)

    def count_patterns(self) -> int:
        rh = self.history
        n = rh[1]
        core = n > 0 and rh[2] == n and rh[3] == n * 3 and rh[4] == n and rh[5] == n
        return int(core and rh[0] >= n * 4 and rh[6] >= n) + int(
            core and rh[6] >= n * 4 and rh[0] >= n
        )

    def terminate_and_count(self, run_color: bool, run_length: int) -> int:
        if run_color:
            self.add(run_length)
            run_length = 0
        self.add(run_length + self.size)
        return self.count_patterns()


class _Canvas:
    """Mutable grid used while a symbol is being drawn."""

    def __init__(self, version: Version, ecl: Ecc) -> None:
        self.version = version
        self.ecl = ecl
        self.size = version.value * 4 + 17
        self.modules = [[False] * self.size for _ in range(self.size)]
        self.isfunction = [[False] * self.size for _ in range(self.size)]

    # -- function patterns --

    def set_function(self, x: int, y: int, dark: bool) -> None:
        self.modules[y][x] = dark
        self.isfunction[y][x] = True

    def draw_function_patterns(self) -> None:
        size = self.size
        for i in range(size):
            self.set_function(6, i, i % 2 == 0)
            self.set_function(i, 6, i % 2 == 0)

        self.draw_finder(3, 3)
        self.draw_finder(size - 4, 3)
        self.draw_finder(3, size - 4)

        positions = self.alignment_positions()
        last = len(positions) - 1
        for i, ax in enumerate(positions):
            for j, ay in enumerate(positions):
                if (i, j) not in ((0, 0), (0, last), (last, 0)):
                    self.draw_alignment(ax, ay)

        self.draw_format_bits(Mask(0))
        self.draw_version()

    def draw_format_bits(self, mask: Mask) -> None:
        data = self.ecl.format_bits() << 3 | mask.value
        rem = data
        for _ in range(10):
            rem = (rem << 1) ^ ((rem >> 9) * 0x537)
        bits = (data << 10 | rem) ^ 0x5412

        for i in range(6):
            self.set_function(8, i, get_bit(bits, i))
        self.set_function(8, 7, get_bit(bits, 6))
        self.set_function(8, 8, get_bit(bits, 7))
        self.set_function(7, 8, get_bit(bits, 8))
        for i in range(9, 15):
            self.set_function(14 - i, 8, get_bit(bits, i))

        size = self.size
        for i in range(8):
            self.set_function(size - 1 - i, 8, get_bit(bits, i))
        for i in range(8, 15):
            self.set_function(8, size - 15 + i, get_bit(bits, i))
        self.set_function(8, size - 8, True)

    def draw_version(self) -> None:
        if self.version.value < 7:
            return
        data = self.version.value
        rem = data
        for _ in range(12):
            rem = (rem << 1) ^ ((rem >> 11) * 0x1F25)
        bits = data << 12 | rem
        for i in range(18):
            bit = get_bit(bits, i)
            a = self.size - 11 + i % 3
            b = i // 3
            self.set_function(a, b, bit)
            self.set_function(b, a, bit)

    def draw_finder(self, x: int, y: int) -> None:
        for dy in range(-4, 5):
            for dx in range(-4, 5):
                xx, yy = x + dx, y + dy
                if 0 <= xx < self.size and 0 <= yy < self.size:
                    dist = max(abs(dx), abs(dy))
                    self.set_function(xx, yy, dist not in (2, 4))

    def draw_alignment(self, x: int, y: int) -> None:
        for dy in range(-2, 3):
            for dx in range(-2, 3):
                self.set_function(x + dx, y + dy, max(abs(dx), abs(dy)) != 1)

    def alignment_positions(self) -> list[int]:
        ver = self.version.value
        if ver == 1:
            return []
        numalign = ver // 7 + 2
        step = (ver * 8 + numalign * 3 + 5) // (numalign * 4 - 4) * 2
        positions = [self.size - 7 - i * step for i in range(numalign - 1)]
        positions.append(6)
        positions.reverse()
        return positions

    # -- codewords and masking --

    def add_ecc_and_interleave(self, data: bytes) -> list[int]:
        ver, ecl = self.version, self.ecl
        if len(data) != _num_data_codewords(ver, ecl):
            raise ValueError("Illegal argument")

        numblocks = _table_get(_NUM_ERROR_CORRECTION_BLOCKS, ver, ecl)
        blockecclen = _table_get(_ECC_CODEWORDS_PER_BLOCK, ver, ecl)
        rawcodewords = _num_raw_data_modules(ver) // 8
        numshortblocks = numblocks - rawcodewords % numblocks
        shortblocklen = rawcodewords // numblocks

        divisor = _rs_divisor(blockecclen)
        blocks: list[list[int]] = []
        k = 0
        for i in range(numblocks):
            datlen = shortblocklen - blockecclen + (1 if i >= numshortblocks else 0)
            dat = list(data[k:k + datlen])
            k += datlen
            ecc = _rs_remainder(dat, divisor)
            if i < numshortblocks:
                dat.append(0)
            blocks.append(dat + ecc)

        skip_row = shortblocklen - blockecclen
        return [
            block[i]
            for i in range(shortblocklen + 1)
            for j, block in enumerate(blocks)
            if i != skip_row or j >= numshortblocks
        ]

    def draw_codewords(self, data: Sequence[int]) -> None:
        if len(data) != _num_raw_data_modules(self.version) // 8:
            raise ValueError("Illegal argument")
        total_bits = len(data) * 8
        i = 0
        right = self.size - 1
        while right >= 1:
            if right == 6:
                right = 5
            upward = (right + 1) & 2 == 0
            for vert in range(self.size):
                y = self.size - 1 - vert if upward else vert
                for x in (right, right - 1):
                    if not self.isfunction[y][x] and i < total_bits:
                        self.modules[y][x] = get_bit(data[i >> 3], 7 - (i & 7))
                        i += 1
            right -= 2

    def apply_mask(self, mask: Mask) -> None:
        pattern = _MASK_PATTERNS[mask.value]
        for y, (row, funcs) in enumerate(zip(self.modules, self.isfunction)):
            for x, is_func in enumerate(funcs):
                if not is_func and pattern(x, y):
                    row[x] = not row[x]

    def penalty_score(self) -> int:
        size = self.size
        result = 0
        columns = [list(col) for col in zip(*self.modules)]
        for line in (*self.modules, *columns):
            run_color = False
            run_len = 0
            history = _FinderPenalty(size)
            for color in line:
                if color == run_color:
                    run_len += 1
                    if run_len == 5:
                        result += _PENALTY_N1
                    elif run_len > 5:
                        result += 1
                else:
                    history.add(run_len)
                    if not run_color:
                        result += history.count_patterns() * _PENALTY_N3
                    run_color = color
                    run_len = 1
            result += history.terminate_and_count(run_color, run_len) * _PENALTY_N3

        for upper, lower in zip(self.modules, self.modules[1:]):
            for x in range(size - 1):
                color = upper[x]
                if color == upper[x + 1] == lower[x] == lower[x + 1]:
                    result += _PENALTY_N2

        dark = sum(sum(row) for row in self.modules)
        total = size * size
        k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
        result += k * _PENALTY_N4
        return result


@dataclass(frozen=True)
class QrCode:
    """An immutable QR Code symbol: a square grid of dark and light modules.

    Covers QR Code Model 2, versions 1 to 40, all four error correction
    levels and the numeric, alphanumeric, byte and ECI segment modes.
    """

    version: Version
    error_correction_level: Ecc
    mask: Mask
    modules: tuple[tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        """Width and height in modules, between 21 and 177."""
        return self.version.value * 4 + 17

    # -- high level --

    @staticmethod
    def encode_text(text: str, ecl: Ecc) -> QrCode:
        """Encode Unicode text at the given level, choosing the smallest version."""
        return QrCode.encode_segments(QrSegment.make_segments(text), ecl)

    @staticmethod
    def encode_binary(data: bytes, ecl: Ecc) -> QrCode:
        """Encode binary data in byte mode, choosing the smallest version."""
        return QrCode.encode_segments([QrSegment.make_bytes(data)], ecl)

    # -- mid level --

    @staticmethod
    def encode_segments(segs: Sequence[QrSegment], ecl: Ecc) -> QrCode:
        """Encode segments over the full version range with automatic mask and ECC boost."""
        return QrCode.encode_segments_advanced(
            segs, ecl, Version.MIN, Version.MAX, None, True
        )

    @staticmethod
    def encode_segments_advanced(
        segs: Sequence[QrSegment],
        ecl: Ecc,
        minversion: Version,
        maxversion: Version,
        mask: Mask | None,
        boostecl: bool,
    ) -> QrCode:
        """Encode segments with explicit version range, mask and ECC boosting.

        Raises SegmentTooLong or DataOverCapacity if the data does not fit
        any version in the range.
        """
        if minversion > maxversion:
            raise ValueError("Invalid value")

        version = minversion
        while True:
            capacity = _num_data_codewords(version, ecl) * 8
            used = QrSegment.get_total_bits(segs, version)
            if used is not None and used <= capacity:
                break
            if version >= maxversion:
                if used is None:
                    raise SegmentTooLong()
                raise DataOverCapacity(used, capacity)
            version = Version(version.value + 1)

        if boostecl:
            for newecl in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
                if used <= _num_data_codewords(version, newecl) * 8:
                    ecl = newecl

        bb = BitBuffer()
        for seg in segs:
            bb.append_bits(seg.mode.mode_bits(), 4)
            bb.append_bits(seg.num_chars, seg.mode.num_char_count_bits(version))
            bb.extend(seg.data)

        capacity = _num_data_codewords(version, ecl) * 8
        bb.append_bits(0, min(4, capacity - len(bb)))
        bb.append_bits(0, -len(bb) & 7)
        for padbyte in cycle((0xEC, 0x11)):
            if len(bb) >= capacity:
                break
            bb.append_bits(padbyte, 8)

        codewords = bytearray(len(bb) // 8)
        for i, bit in enumerate(bb):
            if bit:
                codewords[i >> 3] |= 1 << (7 - (i & 7))

        return QrCode.encode_codewords(version, ecl, bytes(codewords), mask)

    # -- low level --

    @staticmethod
    def encode_codewords(
        version: Version, ecl: Ecc, datacodewords: bytes, mask: Mask | None
    ) -> QrCode:
        """Build a symbol from complete data codewords (without ECC).

        If ``mask`` is None the mask with the lowest penalty score is chosen.
        """
        canvas = _Canvas(version, ecl)
        canvas.draw_function_patterns()
        canvas.draw_codewords(canvas.add_ecc_and_interleave(bytes(datacodewords)))

        if mask is None:
            best_penalty = None
            for candidate in map(Mask, range(8)):
                canvas.apply_mask(candidate)
                canvas.draw_format_bits(candidate)
                penalty = canvas.penalty_score()
                if best_penalty is None or penalty < best_penalty:
                    mask, best_penalty = candidate, penalty
                canvas.apply_mask(candidate)  # XOR undoes the mask

        canvas.apply_mask(mask)
        canvas.draw_format_bits(mask)
        return QrCode(
            version=version,
            error_correction_level=ecl,
            mask=mask,
            modules=tuple(tuple(row) for row in canvas.modules),
        )

    def get_module(self, x: int, y: int) -> bool:
        """True for a dark module; coordinates out of bounds read as light."""
        return 0 <= x < self.size and 0 <= y < self.size and self.modules[y][x]