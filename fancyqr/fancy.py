"""Styled SVG rendering of QR Codes with custom colours, shapes and overlays."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, replace
from decimal import Decimal

from fancyqr.qrcode import QrCode
from fancyqr.types import Ecc


def _f32(x: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("<f", struct.pack("<f", x))[0]


def _fmt(x: float) -> str:
    """Shortest decimal text that reads back as the same single-precision value."""
    x = _f32(x)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x == int(x):
        if x == 0 and math.copysign(1.0, x) < 0:
            return "-0"
        return str(int(x))
    text = repr(x)
    for precision in range(1, 18):
        candidate = f"{x:.{precision}g}"
        if _f32(float(candidate)) == x:
            text = candidate
            break
    return format(Decimal(text), "f")


@dataclass(frozen=True)
class ModuleShape:
    """Shape of the small data modules."""


@dataclass(frozen=True)
class SquareModule(ModuleShape):
    """Plain square modules."""


@dataclass(frozen=True)
class CircleModule(ModuleShape):
    """Circular modules."""


@dataclass(frozen=True)
class RoundedSquareModule(ModuleShape):
    """Squares with rounded corners; radius 0.0 to 0.5 of a module."""

    radius: float


@dataclass(frozen=True)
class FinderShape:
    """Shape of the three large corner patterns."""


@dataclass(frozen=True)
class SquareFinder(FinderShape):
    """Plain square finder patterns."""


@dataclass(frozen=True)
class RoundedFinder(FinderShape):
    """Rounded finder patterns; radius is relative to the 7-module width."""

    radius: float


@dataclass
class FancyOptions:
    """Styling for a fancy QR Code rendering."""

    color_background: str = "#FFFFFF"
    color_data: str = "#000000"
    color_finder: str = "#000000"
    shape_module: ModuleShape = SquareModule()
    shape_finder: FinderShape = SquareFinder()
    center_image_url: str | None = None
    center_text: str | None = None
    overlay_scale: float = 0.2


def _is_finder_module(c: int, r: int, width: int) -> bool:
    edge = max(0, width - 7)
    return (r < 7 and c < 7) or (r < 7 and c >= edge) or (r >= edge and c < 7)


@dataclass(frozen=True)
class FancyQr:
    """A QR Code with a quiet zone, rendered as styled SVG."""

    code: QrCode
    quiet_zone: int = 4

    def __post_init__(self) -> None:
        if self.quiet_zone < 0:
            raise ValueError("Quiet zone must not be negative")

    @staticmethod
    def from_text(text: str) -> FancyQr:
        """Encode text with high error correction, which tolerates overlays."""
        return FancyQr(QrCode.encode_text(text, Ecc.HIGH))

    @staticmethod
    def from_binary(data: bytes) -> FancyQr:
        """Encode binary data with high error correction."""
        return FancyQr(QrCode.encode_binary(data, Ecc.HIGH))

    @staticmethod
    def from_text_with_ecc(text: str, ecl: Ecc) -> FancyQr:
        """Encode text with the given error correction level."""
        return FancyQr(QrCode.encode_text(text, ecl))

    @staticmethod
    def from_qrcode(code: QrCode) -> FancyQr:
        """Wrap an existing QR Code."""
        return FancyQr(code)

    @property
    def qrcode(self) -> QrCode:
        """The underlying QR Code."""
        return self.code

    def with_quiet_zone(self, size: int) -> FancyQr:
        """A copy with the quiet zone set to ``size`` modules."""
        return replace(self, quiet_zone=size)

    def render_svg(self, options: FancyOptions) -> str:
        """Render as a standalone SVG document with the given styling."""
        width = self.code.size
        quiet = self.quiet_zone
        full_width = width + quiet * 2

        parts = [
            f'<svg viewBox="0 0 {full_width} {full_width}" '
            f'xmlns="http://www.w3.org/2000/svg" shape-rendering="geometricPrecision">',
            f'<rect x="0" y="0" width="{full_width}" height="{full_width}" '
            f'fill="{options.color_background}" />',
        ]

        scale = _f32(options.overlay_scale)
        center = _f32(width / 2.0)
        safe_size = _f32(width * scale)
        safe_min = _f32(center - _f32(safe_size / 2.0))
        safe_max = _f32(center + _f32(safe_size / 2.0))
        has_overlay = (
            options.center_image_url is not None or options.center_text is not None
        )

        def in_safe_zone(c: int, r: int) -> bool:
            return has_overlay and safe_min <= c <= safe_max and safe_min <= r <= safe_max

        fill = options.color_data
        shape = options.shape_module
        for r in range(width):
            for c in range(width):
                if not self.code.get_module(c, r):
                    continue
                if _is_finder_module(c, r, width) or in_safe_zone(c, r):
                    continue
                x = c + quiet
                y = r + quiet
                if isinstance(shape, CircleModule):
                    parts.append(
                        f'<circle cx="{_fmt(x + 0.5)}" cy="{_fmt(y + 0.5)}" '
                        f'r="0.45" fill="{fill}" />'
                    )
                elif isinstance(shape, RoundedSquareModule):
                    parts.append(
                        f'<rect x="{x}" y="{y}" width="1" height="1" '
                        f'rx="{_fmt(shape.radius)}" fill="{fill}" />'
                    )
                else:
                    parts.append(
                        f'<rect x="{x}" y="{y}" width="1" height="1" fill="{fill}" />'
                    )

        parts.extend(self._finder_patterns(width, options))
        parts.extend(self._center_overlay(center, safe_size, options))
        parts.append("</svg>")
        return "".join(parts)

    def render_svg_default(self) -> str:
        """Render with the default styling."""
        return self.render_svg(FancyOptions())

    def _finder_patterns(self, width: int, options: FancyOptions) -> list[str]:
        edge = max(0, width - 7)
        shape = options.shape_finder
        r_outer = _f32(shape.radius) if isinstance(shape, RoundedFinder) else 0.0
        r_mid = _f32(r_outer * _f32(0.7)) if r_outer > 0.0 else 0.0
        r_inner = _f32(r_outer * _f32(0.4)) if r_outer > 0.0 else 0.0
        parts = []
        for fc, fr in ((0, 0), (edge, 0), (0, edge)):
            x = fc + self.quiet_zone
            y = fr + self.quiet_zone
            parts.append(
                f'<rect x="{x}" y="{y}" width="7" height="7" '
                f'rx="{_fmt(r_outer)}" fill="{options.color_finder}" />'
            )
            parts.append(
                f'<rect x="{x + 1}" y="{y + 1}" width="5" height="5" '
                f'rx="{_fmt(r_mid)}" fill="{options.color_background}" />'
            )
            parts.append(
                f'<rect x="{x + 2}" y="{y + 2}" width="3" height="3" '
                f'rx="{_fmt(r_inner)}" fill="{options.color_finder}" />'
            )
        return parts

    def _center_overlay(
        self, center: float, safe_size: float, options: FancyOptions
    ) -> list[str]:
        center_px = _f32(center + self.quiet_zone)
        size_px = safe_size
        start_px = _f32(center_px - _f32(size_px / 2.0))

        if options.center_image_url is not None:
            return [
                f'<image x="{_fmt(start_px)}" y="{_fmt(start_px)}" '
                f'width="{_fmt(size_px)}" height="{_fmt(size_px)}" '
                f'href="{options.center_image_url}" '
                f'preserveAspectRatio="xMidYMid slice" />'
            ]
        if options.center_text is not None:
            badge_x = _f32(start_px - 0.5)
            badge_y = _f32(start_px + _f32(size_px * 0.25))
            badge_w = _f32(size_px + 1.0)
            badge_h = _f32(size_px * 0.5)
            text_y = _f32(center_px + _f32(size_px * _f32(0.15)))
            font_size = _f32(size_px * 0.25)
            return [
                f'<rect x="{_fmt(badge_x)}" y="{_fmt(badge_y)}" '
                f'width="{_fmt(badge_w)}" height="{_fmt(badge_h)}" rx="1" '
                f'fill="{options.color_background}" stroke="{options.color_data}" '
                f'stroke-width="0.2" />',
                f'<text x="{_fmt(center_px)}" y="{_fmt(text_y)}" '
                f'font-family="sans-serif" font-weight="bold" '
                f'font-size="{_fmt(font_size)}" text-anchor="middle" '
                f'fill="{options.color_data}">{options.center_text}</text>',
            ]
        return []