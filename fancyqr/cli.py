"""Command line tool that encodes text as a QR Code and prints or saves it."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from fancyqr.fancy import (
    CircleModule,
    FancyOptions,
    FancyQr,
    ModuleShape,
    RoundedFinder,
    RoundedSquareModule,
    SquareFinder,
    SquareModule,
)
from fancyqr.qrcode import QrCode
from fancyqr.render import to_ascii_art, to_debug_string, to_svg_string
from fancyqr.segment import QrSegment
from fancyqr.styles import QrStyle, custom_style_options, svg_data_uri
from fancyqr.types import DataTooLong, Ecc, Mask, Version

_ECC_NAMES = [level.name.lower() for level in Ecc]
_MODES = ("auto", "numeric", "alphanumeric", "bytes")


def _segments(text: str, mode: str) -> list[QrSegment]:
    if mode == "numeric":
        return [QrSegment.make_numeric(text)]
    if mode == "alphanumeric":
        return [QrSegment.make_alphanumeric(text)]
    if mode == "bytes":
        return [QrSegment.make_bytes(text.encode("utf-8"))]
    return QrSegment.make_segments(text)


def _encode(args: argparse.Namespace, default_ecc: str) -> QrCode:
    ecc = Ecc[(args.ecc or default_ecc).upper()]
    mask = Mask(args.mask) if args.mask is not None else None
    return QrCode.encode_segments_advanced(
        _segments(args.text, args.mode),
        ecc,
        Version(args.min_version),
        Version(args.max_version),
        mask,
        not args.no_boost,
    )


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"QR code saved to {output}")
    else:
        print(text)


def _module_shape(name: str, radius: float) -> ModuleShape:
    if name == "circle":
        return CircleModule()
    if name == "rounded":
        return RoundedSquareModule(radius)
    return SquareModule()


def _fancy_options(args: argparse.Namespace) -> FancyOptions:
    logo_uri = ""
    if args.logo:
        logo_uri = svg_data_uri(Path(args.logo).read_text(encoding="utf-8"))

    if args.style:
        options = custom_style_options(
            QrStyle(args.style),
            logo_uri,
            args.background or "",
            args.data_color or "",
            args.finder_color or "",
        )
    else:
        options = FancyOptions()
        if args.background:
            options.color_background = args.background
        if args.data_color:
            options.color_data = args.data_color
        if args.finder_color:
            options.color_finder = args.finder_color
        if logo_uri:
            options.center_image_url = logo_uri

    if args.center_text is not None:
        options.center_text = args.center_text
    if args.overlay_scale is not None:
        options.overlay_scale = args.overlay_scale
    if args.module_shape:
        options.shape_module = _module_shape(args.module_shape, args.module_radius)
    if args.finder_radius is not None:
        options.shape_finder = (
            RoundedFinder(args.finder_radius) if args.finder_radius > 0 else SquareFinder()
        )
    return options


def _cmd_show(args: argparse.Namespace) -> None:
    qr = _encode(args, "low")
    print(f"QR Code for: {args.text}")
    print(f"Size: {qr.size}x{qr.size}")
    print(f"Version: {qr.version.value}")
    print(f"Mask: {qr.mask.value}")
    print(f"Error Correction Level: {qr.error_correction_level.name.capitalize()}")
    print()
    if args.debug:
        print(to_debug_string(qr))
    else:
        print(to_ascii_art(qr, args.border), end="")


def _cmd_svg(args: argparse.Namespace) -> None:
    qr = _encode(args, "medium")
    _emit(to_svg_string(qr, args.border, args.module_size), args.output)
    if args.output:
        print(f"Size: {qr.size}x{qr.size} modules")


def _cmd_fancy(args: argparse.Namespace) -> None:
    qr = FancyQr.from_qrcode(_encode(args, "high")).with_quiet_zone(args.quiet_zone)
    _emit(qr.render_svg(_fancy_options(args)), args.output)


def _add_encoding_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("text", help="text to encode")
    parser.add_argument("--ecc", choices=_ECC_NAMES, help="error correction level")
    parser.add_argument("--mode", choices=_MODES, default="auto", help="segment mode")
    parser.add_argument("--min-version", type=int, default=Version.MIN.value)
    parser.add_argument("--max-version", type=int, default=Version.MAX.value)
    parser.add_argument("--mask", type=int, help="force a mask pattern 0-7")
    parser.add_argument(
        "--no-boost", action="store_true", help="do not raise the error correction level"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fancyqr", description="Generate QR Codes as text art or SVG."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="print the code in the terminal")
    _add_encoding_options(show)
    show.add_argument("--border", type=int, default=2)
    show.add_argument("--debug", action="store_true", help="print a 0/1 grid")
    show.set_defaults(handler=_cmd_show)

    svg = commands.add_parser("svg", help="plain black-on-white SVG")
    _add_encoding_options(svg)
    svg.add_argument("--border", type=int, default=4)
    svg.add_argument("--module-size", type=int, default=5)
    svg.add_argument("-o", "--output", help="file to write (default: stdout)")
    svg.set_defaults(handler=_cmd_svg)

    fancy = commands.add_parser("fancy", help="styled SVG")
    _add_encoding_options(fancy)
    fancy.add_argument("--style", choices=[s.slug() for s in QrStyle])
    fancy.add_argument("--background")
    fancy.add_argument("--data-color")
    fancy.add_argument("--finder-color")
    fancy.add_argument("--module-shape", choices=("square", "circle", "rounded"))
    fancy.add_argument("--module-radius", type=float, default=0.3)
    fancy.add_argument("--finder-radius", type=float)
    fancy.add_argument("--center-text")
    fancy.add_argument("--logo", help="SVG file to place in the centre")
    fancy.add_argument("--overlay-scale", type=float)
    fancy.add_argument("--quiet-zone", type=int, default=4)
    fancy.add_argument("-o", "--output", help="file to write (default: stdout)")
    fancy.set_defaults(handler=_cmd_fancy)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        args.handler(args)
    except (DataTooLong, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())