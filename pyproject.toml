[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shoveltool"
version = "0.1.0"
description = "Support library for small framebuffer games: ROM packing, PNG codec and pixel conversion, 1-bit rendering, a square-wave synthesizer, and web asset tokenizers"
requires-python = ">=3.10"
keywords = ["gamedev", "png", "synthesizer", "rom", "framebuffer", "tokenizer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "mido",
]

[tool.hatch.build.targets.wheel]
packages = ["shoveltool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
