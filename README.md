# fancyqr

A pure-Python QR Code generator. It supports all 40 versions and all four
error correction levels, picks numeric, alphanumeric or byte mode for text on
its own, and chooses the mask with the lowest penalty score. Finished codes
can be drawn as a plain SVG, as terminal block art, as a grid of 0 and 1, or
as a styled SVG with custom colours, round or rounded modules, rounded finder
patterns and a centre logo or label.

There are no runtime dependencies.

## Installing

```
pip install .
```

The tests need pytest (`pip install .[test]`).

## Encoding

```python
from fancyqr.qrcode import QrCode
from fancyqr.types import Ecc

qr = QrCode.encode_text("Hello, World!", Ecc.LOW)
print(qr.size, qr.version.value, qr.mask.value, qr.error_correction_level)
print(qr.get_module(0, 0))   # True: the top-left finder is dark
```

`get_module(x, y)` returns `False` for coordinates outside the symbol.
The error correction level of the result may be higher than the one asked
for when that costs no extra version.

`QrCode.encode_binary` takes bytes. For finer control, build the segments
yourself with `QrSegment.make_numeric`, `QrSegment.make_alphanumeric`,
`QrSegment.make_bytes` or `QrSegment.make_eci` (all in `fancyqr.segment`)
and pass them to `QrCode.encode_segments`, or to
`QrCode.encode_segments_advanced` together with a version range
(`Version`), a fixed `Mask` or `None` for automatic choice, and whether the
error correction level may be raised. `QrCode.encode_codewords` builds a
symbol directly from finished data codewords.

Data that fits no version in range raises `DataTooLong`, as either
`SegmentTooLong` or `DataOverCapacity` (which carries `datalen` and
`maxcapacity` in bits). Out-of-range versions, masks, non-digit text for
numeric mode and the like raise `ValueError`.

## Plain output

```python
from fancyqr.render import to_svg_string, to_ascii_art, to_debug_string

svg = to_svg_string(qr, 4, 5)     # 4-module border, 5 units per module
print(to_ascii_art(qr, 2))        # light modules as blocks, for dark terminals
print(to_debug_string(qr))        # rows of space-separated 0 and 1
```

## Styled output

```python
from fancyqr.fancy import FancyQr, FancyOptions, CircleModule, RoundedFinder

qr = FancyQr.from_text("https://example.com/")   # high error correction
options = FancyOptions()
options.color_background = "#FAF5FF"
options.color_data = "#6B4B8A"
options.color_finder = "#8B5CF6"
options.shape_module = CircleModule()
options.shape_finder = RoundedFinder(1.5)
options.center_text = "SCAN ME"
options.overlay_scale = 0.2

with open("fancy_qrcode.svg", "w", encoding="utf-8") as fh:
    fh.write(qr.render_svg(options))
```

Module shapes are `SquareModule()`, `CircleModule()` and
`RoundedSquareModule(radius)`; finder shapes are `SquareFinder()` and
`RoundedFinder(radius)`. `center_image_url` places an image (a URL or a data
URI) in the centre instead of a text label. `FancyQr.from_binary`,
`FancyQr.from_text_with_ecc` and `FancyQr.from_qrcode` are the other
constructors, `with_quiet_zone(n)` returns a copy with an `n`-module border
(4 by default), and `render_svg_default()` renders with the default options.

Data modules under the centre overlay are left out, so keep the overlay
small enough for the error correction level to recover them.

## Presets

`fancyqr.styles` holds ready-made looks as members of `QrStyle`
(`STANDARD`, `MINIMAL_LOGO`, `GRADIENT_LOGO`, `PREMIUM`, `BRANDED_FINDERS`,
`MINIMAL_FINDERS`, `GRADIENT_FINDERS`, `GRADIENT_MINIMAL`), each with a
`label()` and a `slug()`. `style_options` gives the `FancyOptions` for a
preset, `custom_style_options` replaces its colours with any non-empty ones
given, `svg_data_uri` turns logo SVG text into a base64 data URI, and
`download_filename` gives `qr_code_<slug>.svg`. `render_styled` does all of
that in one call and returns `None` for empty or over-long text:

```python
from fancyqr.styles import QrStyle, render_styled, download_filename

style = QrStyle.GRADIENT_MINIMAL
svg = render_styled("https://example.com/", style)
print(download_filename(style))
```

The finder-only presets never show a logo.

## Command line

The `fancyqr` command has three subcommands:

```
fancyqr show "Hello, World!"                 # terminal art (--debug for a 0/1 grid)
fancyqr svg "https://example.com/" -o qrcode.svg
fancyqr fancy "https://example.com/" --style premium --logo logo.svg -o fancy.svg
```

All three take `--ecc {low,medium,quartile,high}`, `--mode
{auto,numeric,alphanumeric,bytes}`, `--min-version`, `--max-version`,
`--mask` and `--no-boost`. The default level is low for `show`, medium for
`svg` and high for `fancy`. `show` takes `--border` (2); `svg` takes
`--border` (4) and `--module-size` (5). `fancy` takes `--style`,
`--background`, `--data-color`, `--finder-color`, `--module-shape
{square,circle,rounded}`, `--module-radius`, `--finder-radius` (0 for
square), `--center-text`, `--logo`, `--overlay-scale` and `--quiet-zone`.
Without `-o` the SVG goes to standard output. Errors are printed and the
command exits with status 1. See `fancyqr --help` for details.

## What it does not do

There is no graphical or web interface, no raster (PNG) output, no QR Code
decoding, and no constructor for kanji-mode segments.