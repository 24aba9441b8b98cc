"""QR Code encoding with plain, terminal and styled SVG rendering, presets and a command line tool."""

__version__ = "0.1.0"