"""Plain renderings of a QR Code: SVG, terminal block art and a 0/1 grid."""

from __future__ import annotations

from fancyqr.qrcode import QrCode

_BLOCK = "██"
_BLANK = "  "


def to_svg_string(qr: QrCode, border: int, module_size: int) -> str:
    """Render the code as a black-on-white SVG document.

    ``border`` is the quiet zone width in modules and ``module_size`` the
    width of one module in SVG units.
    """
    size = qr.size
    full_size = (size + border * 2) * module_size
    path = "".join(
        f"M{(x + border) * module_size},{(y + border) * module_size}"
        f"h{module_size}v{module_size}h-{module_size}z"
        for y in range(size)
        for x in range(size)
        if qr.get_module(x, y)
    )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'viewBox="0 0 {full_size} {full_size}" stroke="none">\n'
        f'<rect width="{full_size}" height="{full_size}" fill="#FFFFFF"/>\n'
        f'<path d="{path}" fill="#000000"/>\n'
        f"</svg>"
    )


def to_ascii_art(qr: QrCode, border: int) -> str:
    """Render the code with Unicode blocks for display in a terminal.

    Light modules are drawn as full blocks and dark modules as blanks, so
    the code reads correctly on a dark terminal background.
    """
    size = qr.size
    side = _BLOCK * border
    lines = [_BLOCK * (size + border * 2)]
    for y in range(-border, size + border):
        content = "".join(
            _BLANK if 0 <= y < size and qr.get_module(x, y) else _BLOCK
            for x in range(size)
        )
        lines.append(side + content + side)
    return "\n".join(lines) + "\n"


def to_debug_string(qr: QrCode) -> str:
    """Rows of space-separated '1' (dark) and '0' (light) characters."""
    size = qr.size
    return "\n".join(
        " ".join("1" if qr.get_module(x, y) else "0" for x in range(size))
        for y in range(size)
    )