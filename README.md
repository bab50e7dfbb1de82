# shoveltool

A small support library for games made on a framebuffer-and-PCM platform.
A game ships as a ROM: a short table of contents, then a main WebAssembly
module, then an audio WebAssembly module. This package builds those ROMs and
provides the pieces a build pipeline and a headless runtime need around them:
a PNG reader and writer, pixel format conversion, a 1-bit renderer, a tiny
square-wave synthesizer, keysym tables, a dummy video driver, and tokenizers
for HTML and JavaScript.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Modules

### `shoveltool.rom`

`pack_rom(main_wasm, audio_wasm)` returns the ROM bytes: the signature
`b"\0SVL"`, then big-endian 32-bit TOC length (always 16), main segment length
and audio segment length, followed by both segments.

```python
from shoveltool.rom import pack_rom
rom = pack_rom(main_bytes, audio_bytes)
```

### `shoveltool.png_image`

`PngImage(w, h, depth, colortype)` holds zeroed pixels at minimum stride
(`pixels`, a `bytearray`), the header fields, and a list of ancillary
`PngChunk` objects. `add_chunk`, `remove_chunk_at` and `set_ctab` (which
writes PLTE and, where alphas need it, tRNS from an RGB or RGBA table) manage
the chunks. Invalid sizes and formats raise `PngError`.

### `shoveltool.png_codec`

`decode(data, refname=None)` reads a whole PNG file into a `PngImage`;
`encode(image)` writes one back, choosing a row filter per row and putting all
pixel data in a single IDAT. Interlaced files are not supported and CRCs are
not checked on reading. Errors raise `PngError`, prefixed with `refname` when
given.

### `shoveltool.png_reformat`

`reformat(image, depth, colortype)` returns a new image in another pixel
format; `convert_image(dst, src)` copies between two images of the same size.
`read_pixels(image)` and `write_pixels(image, pixels)` walk the pixels in scan
order as 16-bit-per-channel `Pixel(r, g, b, a)` values. Indexed images use
their PLTE and tRNS chunks.

### `shoveltool.r1b`

`Image32` is a 32-bit XBGR framebuffer (red in the low byte) and `Image1` a
1-bit image with bits most-significant first. `Image32.fill_rect` fills a
clipped rectangle, `Image32.blit_img1` draws a region of a 1-bit image with
two colours (zero is transparent) and optional `Xform.XREV` / `Xform.YREV`
flips, and `Image32.to_rgbx` packs the pixels as bytes.

### `shoveltool.synmin`

`Synmin(rate, chanc=1)` is a mono square-wave synthesizer. `note(noteida,
noteidz, level, dur16ms)` starts a (possibly sliding) note, `song(data,
force=False, repeat=False)` plays a synmin event stream, `silence()` stops all
voices, and `update(count)` returns `count` float samples. The song format is a
headerless stream: `0ttttttt` delays `(t+1)*16` ms, and
`1aaaaaaz zzzzzlll lltttttt` plays a note from `a` to `z` at level `l` for
`(t+1)*16` ms. Note 32 plays at 440 Hz.

### `shoveltool.keysyms`

`codepoint_from_keysym(keysym)` and `usb_usage_from_keysym(keysym)` translate
X11 keysyms into the character they type and the USB HID usage, or 0.

### `shoveltool.video`

`Button` holds the input state bits. `DummyVideo(setup)` is a video driver
with no output: `set_framebuffer(rgbx, w, h)` holds a frame, `commit()` drops
it and reports whether there was one, and it works as a context manager.

### `shoveltool.text`

`next_html_token(src)` reads one atomic HTML token (`HtmlToken`, typed by
`HtmlTokenType`) or returns `None` at the end of input. `js_token_measure(src)`
measures one JavaScript token or whitespace run, and `js_space_required(a, b)`
tells whether two tokens need a space between them. `lineno(src)` counts lines.
Malformed input raises `ValueError`.

## What it does not do

The package installs no command. There is no command-line entry for packing a
ROM, generating the HTML page, or converting files, and no asset conversion
such as PNG or MIDI into C source or MIDI into synmin songs. There is no HTML
minifier built on the tokenizers, and no real audio, video or input drivers
beyond `DummyVideo`. These are library pieces to call from your own scripts.

## Running the tests

```
pip install ".[test]"
pytest
```