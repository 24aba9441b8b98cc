"""Named style presets for branded QR Codes and helpers for applying them."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum

from fancyqr.fancy import (
    CircleModule,
    FancyOptions,
    FancyQr,
    FinderShape,
    ModuleShape,
    RoundedFinder,
    RoundedSquareModule,
    SquareModule,
)
from fancyqr.types import DataTooLong

SVG_DATA_URI_PREFIX = "data:image/svg+xml;base64,"


class QrStyle(Enum):
    """A preset combination of colours, shapes and logo placement."""

    STANDARD = "standard"
    MINIMAL_LOGO = "minimal_logo"
    GRADIENT_LOGO = "gradient_logo"
    PREMIUM = "premium"
    BRANDED_FINDERS = "branded_finders"
    MINIMAL_FINDERS = "minimal_finders"
    GRADIENT_FINDERS = "gradient_finders"
    GRADIENT_MINIMAL = "gradient_minimal"

    def label(self) -> str:
        """Human-readable name of the style."""
        return _LABELS[self]

    def slug(self) -> str:
        """Short identifier of the style, used in file names."""
        return self.value


_LABELS = {
    QrStyle.STANDARD: "Standard with Logo",
    QrStyle.MINIMAL_LOGO: "Minimal with Logo",
    QrStyle.GRADIENT_LOGO: "Gradient with Logo",
    QrStyle.PREMIUM: "Ultra Premium",
    QrStyle.BRANDED_FINDERS: "Branded Finders",
    QrStyle.MINIMAL_FINDERS: "Minimal Finders",
    QrStyle.GRADIENT_FINDERS: "Gradient Finders",
    QrStyle.GRADIENT_MINIMAL: "Gradient Minimal",
}


@dataclass(frozen=True)
class _Preset:
    background: str
    data: str
    finder: str
    module: ModuleShape
    finder_shape: FinderShape
    # Overlay scale used when a logo is supplied; None marks a style that
    # never shows a logo and clears the overlay zone entirely.
    logo_scale: float | None


_PRESETS = {
    QrStyle.STANDARD: _Preset(
        "#FFFFFF", "#4d3695", "#4d3695", RoundedSquareModule(0.3), RoundedFinder(1.5), 0.3
    ),
    QrStyle.MINIMAL_LOGO: _Preset(
        "#FFFFFF", "#000000", "#4d3695", SquareModule(), RoundedFinder(1.0), 0.25
    ),
    QrStyle.GRADIENT_LOGO: _Preset(
        "#F5F3FF", "#4d3695", "#5B34A8", CircleModule(), RoundedFinder(2.0), 0.28
    ),
    QrStyle.PREMIUM: _Preset(
        "#FFFFFF", "#4d3695", "#4d3695", RoundedSquareModule(0.35), RoundedFinder(1.8), 0.26
    ),
    QrStyle.BRANDED_FINDERS: _Preset(
        "#FFFFFF", "#1a1a1a", "#4d3695", RoundedSquareModule(0.25), RoundedFinder(2.2), None
    ),
    QrStyle.MINIMAL_FINDERS: _Preset(
        "#FFFFFF", "#000000", "#4d3695", SquareModule(), RoundedFinder(1.5), None
    ),
    QrStyle.GRADIENT_FINDERS: _Preset(
        "#FAF5FF", "#6B4B8A", "#4d3695", CircleModule(), RoundedFinder(2.5), None
    ),
    QrStyle.GRADIENT_MINIMAL: _Preset(
        "#FAF5FF", "#6B4B8A", "#4d3695", SquareModule(), RoundedFinder(1.5), 0.25
    ),
}


def style_options(style: QrStyle, logo_base64: str) -> FancyOptions:
    """Rendering options for a preset, embedding the logo where the style shows one."""
    preset = _PRESETS[style]
    options = FancyOptions(
        color_background=preset.background,
        color_data=preset.data,
        color_finder=preset.finder,
        shape_module=preset.module,
        shape_finder=preset.finder_shape,
    )
    if preset.logo_scale is None:
        options.overlay_scale = 0.0
    elif logo_base64:
        options.center_image_url = logo_base64
        options.overlay_scale = preset.logo_scale
    return options


def custom_style_options(
    style: QrStyle,
    logo_base64: str,
    background_color: str,
    data_color: str,
    finder_color: str,
) -> FancyOptions:
    """Preset options with any non-empty colour replacing the preset's."""
    options = style_options(style, logo_base64)
    if background_color:
        options.color_background = background_color
    if data_color:
        options.color_data = data_color
    if finder_color:
        options.color_finder = finder_color
    return options


def svg_data_uri(svg: str) -> str:
    """Embed SVG text as a base64 data URI."""
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return SVG_DATA_URI_PREFIX + encoded


def download_filename(style: QrStyle) -> str:
    """File name under which a code in this style is saved."""
    return f"qr_code_{style.slug()}.svg"


def render_styled(
    text: str,
    style: QrStyle,
    logo_svg: str | None = None,
    background_color: str = "",
    data_color: str = "",
    finder_color: str = "",
) -> str | None:
    """Render text as an SVG QR Code in the given style.

    Returns None when the text is empty or too long to encode.
    """
    if not text:
        return None
    try:
        qr = FancyQr.from_text(text)
    except DataTooLong:
        return None
    logo_uri = svg_data_uri(logo_svg) if logo_svg else ""
    options = custom_style_options(
        style, logo_uri, background_color, data_color, finder_color
    )
    return qr.render_svg(options)