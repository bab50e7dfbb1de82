"""Shovel ROM packing.

A ROM is binary, big-endian: a table of contents followed by the Main and
Audio segments, each a WebAssembly module.

TOC:
  4 Signature "\\0SVL"
  4 TOC length, the offset of the Main segment (always 16 here)
  4 Main segment length
  4 Audio segment length
"""

from __future__ import annotations

import struct

ROM_SIGNATURE = b"\0SVL"
TOC_LENGTH = 16

_TOC = struct.Struct(">4sIII")


def pack_rom(main_wasm: bytes, audio_wasm: bytes) -> bytes:
    """Combine the Main and Audio Wasm modules into one ROM image."""
    main_wasm = bytes(main_wasm)
    audio_wasm = bytes(audio_wasm)
    header = _TOC.pack(ROM_SIGNATURE, TOC_LENGTH, len(main_wasm), len(audio_wasm))
    return header + main_wasm + audio_wasm