import re

import pytest

from fancyqr.fancy import (
    CircleModule,
    FancyOptions,
    FancyQr,
    RoundedFinder,
    RoundedSquareModule,
    SquareFinder,
    SquareModule,
)
from fancyqr.qrcode import QrCode
from fancyqr.types import DataTooLong, Ecc


def _data_rects(svg):
    return [
        (int(x), int(y))
        for x, y in re.findall(r'<rect x="(\d+)" y="(\d+)" width="1" height="1"', svg)
    ]


def test_fancy_qr_creation():
    qr = FancyQr.from_text("Hello, World!")
    assert qr.qrcode.size > 0
    assert (qr.qrcode.size - 17) % 4 == 0


def test_from_text_uses_high_ecc():
    qr = FancyQr.from_text("Hello, World!")
    assert qr.qrcode.error_correction_level == Ecc.HIGH
    assert qr.quiet_zone == 4


def test_from_binary_uses_high_ecc():
    qr = FancyQr.from_binary(b"abc")
    assert qr.qrcode.error_correction_level == Ecc.HIGH
    assert qr.qrcode.size == 21


def test_from_qrcode_wraps_code():
    code = QrCode.encode_text("Test", Ecc.LOW)
    qr = FancyQr.from_qrcode(code)
    assert qr.qrcode == code


def test_too_long_text_raises():
    with pytest.raises(DataTooLong):
        FancyQr.from_text("a" * 3000)


def test_svg_rendering():
    qr = FancyQr.from_text("Test")
    svg = qr.render_svg_default()
    assert "<svg" in svg
    assert "</svg>" in svg


def test_custom_options():
    qr = FancyQr.from_text("Custom")
    options = FancyOptions(color_data="#FF0000", shape_module=CircleModule())
    svg = qr.render_svg(options)
    assert "#FF0000" in svg
    assert "<circle" in svg


def test_view_box_follows_quiet_zone():
    qr = FancyQr.from_text_with_ecc("Test", Ecc.LOW)
    assert 'viewBox="0 0 29 29"' in qr.render_svg_default()
    assert 'viewBox="0 0 21 21"' in qr.with_quiet_zone(0).render_svg_default()


def test_negative_quiet_zone_rejected():
    qr = FancyQr.from_text("Test")
    with pytest.raises(ValueError):
        qr.with_quiet_zone(-1)


def test_square_finders_drawn_three_times():
    qr = FancyQr.from_text_with_ecc("Test", Ecc.LOW)
    svg = qr.render_svg(FancyOptions(shape_finder=SquareFinder()))
    outer = re.findall(r'<rect x="(\d+)" y="(\d+)" width="7" height="7" rx="0"', svg)
    assert outer == [("4", "4"), ("18", "4"), ("4", "18")]


def test_rounded_finder_radii():
    qr = FancyQr.from_text("Test")
    svg = qr.render_svg(FancyOptions(shape_finder=RoundedFinder(1.5)))
    assert svg.count('width="7" height="7" rx="1.5"') == 3
    assert svg.count('width="5" height="5" rx="1.05"') == 3
    assert svg.count('width="3" height="3" rx="0.6"') == 3


def test_circle_count_matches_dark_non_finder_modules():
    qr = FancyQr.from_text_with_ecc("Test", Ecc.LOW)
    code = qr.qrcode
    size = code.size
    expected = sum(
        1
        for y in range(size)
        for x in range(size)
        if code.get_module(x, y)
        and not ((y < 7 and x < 7) or (y < 7 and x >= size - 7) or (y >= size - 7 and x < 7))
    )
    svg = qr.render_svg(FancyOptions(shape_module=CircleModule()))
    assert svg.count('r="0.45"') == expected


def test_rounded_square_modules_carry_radius():
    qr = FancyQr.from_text("Test")
    svg = qr.render_svg(FancyOptions(shape_module=RoundedSquareModule(0.3)))
    assert 'width="1" height="1" rx="0.3"' in svg
    assert 'width="1" height="1" fill=' not in svg


def test_image_overlay_position():
    qr = FancyQr.from_text_with_ecc("Test", Ecc.LOW)
    options = FancyOptions(center_image_url="logo.svg", overlay_scale=0.5)
    svg = qr.render_svg(options)
    assert (
        '<image x="9.25" y="9.25" width="10.5" height="10.5" href="logo.svg" '
        'preserveAspectRatio="xMidYMid slice" />'
    ) in svg


def test_overlay_clears_safe_zone():
    qr = FancyQr.from_text_with_ecc("Test", Ecc.LOW)
    plain = _data_rects(qr.render_svg(FancyOptions(overlay_scale=0.5)))
    with_logo = _data_rects(
        qr.render_svg(FancyOptions(center_image_url="logo.svg", overlay_scale=0.5))
    )
    in_zone = [(x, y) for x, y in with_logo if 10 <= x <= 19 and 10 <= y <= 19]
    assert in_zone == []
    assert len(with_logo) < len(plain)
    assert set(with_logo) <= set(plain)


def test_no_overlay_without_image_or_text():
    qr = FancyQr.from_text("Test")
    svg = qr.render_svg_default()
    assert "<image" not in svg
    assert "<text" not in svg


def test_text_overlay():
    qr = FancyQr.from_text_with_ecc("Test", Ecc.LOW)
    options = FancyOptions(center_text="SCAN ME", overlay_scale=0.5, color_data="#123456")
    svg = qr.render_svg(options)
    assert 'fill="#123456">SCAN ME</text>' in svg
    assert '<text x="14.5"' in svg
    assert 'stroke="#123456" stroke-width="0.2"' in svg
    assert svg.endswith("</text></svg>")


def test_default_options_values():
    options = FancyOptions()
    assert options.color_background == "#FFFFFF"
    assert options.shape_module == SquareModule()
    assert options.shape_finder == SquareFinder()
    assert options.overlay_scale == pytest.approx(0.2)