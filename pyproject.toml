[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fancyqr"
version = "0.1.0"
description = "QR Code generator with plain and styled SVG rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["qrcode", "qr", "generator", "svg", "fancy", "barcode"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fancyqr = "fancyqr.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fancyqr"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
