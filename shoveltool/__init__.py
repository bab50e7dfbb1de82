"""Support library for small framebuffer games: ROM packing, PNG handling, 1-bit rendering, synthesis and web tokenizers."""

__version__ = "0.1.0"