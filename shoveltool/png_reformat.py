"""Pixel-level access to PNG images, and conversion between pixel formats.

Every pixel is read and written as 16-bit-per-channel RGBA, so any supported
format converts to any other. Indexed images use their PLTE and tRNS chunks;
conversions into indexed formats search the colour table for each pixel and
are correspondingly slow.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .png_image import CHUNK_PLTE, CHUNK_tRNS, PngError, PngImage

_SUPPORTED_DEPTHS = {
    0: (1, 2, 4, 8, 16),
    2: (8, 16),
    3: (1, 2, 4, 8),
    4: (8, 16),
    6: (8, 16),
}
_CHANNELS = {0: 1, 2: 3, 3: 1, 4: 2, 6: 4}


@dataclass(frozen=True)
class Pixel:
    """One pixel with 16-bit red, green, blue and alpha channels."""

    r: int
    g: int
    b: int
    a: int = 0xFFFF


class _Palette:
    """Colour table taken from an image's PLTE and tRNS chunks."""

    def __init__(self, image: PngImage) -> None:
        self._chunks = [c for c in image.chunks if c.id in (CHUNK_PLTE, CHUNK_tRNS)]
        self._plte = b""
        self._trns = b""
        for chunk in self._chunks:
            if chunk.id == CHUNK_PLTE:
                self._plte = chunk.data
            else:
                self._trns = chunk.data
        self._lookups: dict[int, Pixel] = {}

    def lookup(self, index: int) -> Pixel:
        pixel = self._lookups.get(index)
        if pixel is None:
            pixel = self._lookup(index)
            self._lookups[index] = pixel
        return pixel

    def _lookup(self, index: int) -> Pixel:
        r = g = b = 0
        a = 0xFFFF
        for chunk in self._chunks:
            if chunk.id == CHUNK_PLTE:
                if index < len(chunk.data) // 3:
                    r, g, b = (v * 0x101 for v in chunk.data[index * 3 : index * 3 + 3])
            elif index < len(chunk.data):
                # Alpha comes from the first tRNS entry, whatever the index.
                a = chunk.data[0] * 0x101
        return Pixel(r, g, b, a)

    def search(self, pixel: Pixel, pixelsize: int) -> int:
        plte = self._plte
        if len(plte) < 3:
            luma = (pixel.r + pixel.g + pixel.b) // 3
            return luma >> (16 - pixelsize)
        r, g, b, a = pixel.r >> 8, pixel.g >> 8, pixel.b >> 8, pixel.a >> 8
        best_index, best_score = 0, 1024
        entries = zip(plte[0::3], plte[1::3], plte[2::3])
        for index, (pr, pg, pb) in enumerate(entries):
            pa = self._trns[index] if index < len(self._trns) else 0xFF
            score = abs(pr - r) + abs(pg - g) + abs(pb - b) + abs(pa - a)
            if not score:
                return index
            if score < best_score:
                best_index, best_score = index, score
        return best_index


class _Codec:
    """Reads and writes single pixels of one image."""

    def __init__(self, image: PngImage) -> None:
        if image.w < 1 or image.h < 1:
            raise PngError(f"Invalid dimensions {image.w}x{image.h}.")
        if image.depth not in _SUPPORTED_DEPTHS.get(image.colortype, ()):
            raise PngError(
                f"Unsupported pixel format depth={image.depth} colortype={image.colortype}."
            )
        self.image = image
        self.depth = image.depth
        self.colortype = image.colortype
        self.channels = _CHANNELS[image.colortype]
        self.sample_mask = (1 << image.depth) - 1
        self.palette = _Palette(image) if image.colortype == 3 else None

    def positions(self) -> Iterator[tuple[int, int]]:
        """Yield (byte offset, bit shift) of each pixel in scan order."""
        image = self.image
        pixelsize = image.pixelsize
        for y in range(image.h):
            row = y * image.stride
            for x in range(image.w):
                bit = x * pixelsize
                yield row + (bit >> 3), 8 - pixelsize - (bit & 7)

    def _samples(self, offset: int, shift: int) -> list[int]:
        buf = self.image.pixels
        if self.image.pixelsize < 8:
            return [(buf[offset] >> shift) & self.sample_mask]
        if self.depth == 8:
            return list(buf[offset : offset + self.channels])
        end = offset + 2 * self.channels
        return [int.from_bytes(buf[p : p + 2], "big") for p in range(offset, end, 2)]

    def _store(self, offset: int, shift: int, samples: list[int]) -> None:
        buf = self.image.pixels
        if self.image.pixelsize < 8:
            mask = self.sample_mask << shift
            buf[offset] = (buf[offset] & ~mask & 0xFF) | ((samples[0] << shift) & mask)
        elif self.depth == 8:
            buf[offset : offset + len(samples)] = bytes(s & 0xFF for s in samples)
        else:
            buf[offset : offset + 2 * len(samples)] = b"".join(
                (s & 0xFFFF).to_bytes(2, "big") for s in samples
            )

    def read(self, offset: int, shift: int) -> Pixel:
        samples = self._samples(offset, shift)
        if self.palette is not None:
            return self.palette.lookup(samples[0])
        scale = 0xFFFF // self.sample_mask
        wide = [s * scale for s in samples]
        if self.colortype == 0:
            return Pixel(wide[0], wide[0], wide[0])
        if self.colortype == 4:
            return Pixel(wide[0], wide[0], wide[0], wide[1])
        return Pixel(*wide)

    def write(self, offset: int, shift: int, pixel: Pixel) -> None:
        pixel = Pixel(pixel.r & 0xFFFF, pixel.g & 0xFFFF, pixel.b & 0xFFFF, pixel.a & 0xFFFF)
        if self.palette is not None:
            index = self.palette.search(pixel, self.image.pixelsize)
            self._store(offset, shift, [index & self.sample_mask])
            return
        luma = (pixel.r + pixel.g + pixel.b) // 3
        wide = {
            0: [luma],
            2: [pixel.r, pixel.g, pixel.b],
            4: [luma, pixel.a],
            6: [pixel.r, pixel.g, pixel.b, pixel.a],
        }[self.colortype]
        drop = 16 - self.depth
        self._store(offset, shift, [v >> drop for v in wide])


def read_pixels(image: PngImage) -> Iterator[Pixel]:
    """Return an iterator over the image's pixels in scan order.

    Raises PngError at once if the pixel format is not supported.
    """
    codec = _Codec(image)
    return (codec.read(offset, shift) for offset, shift in codec.positions())


def write_pixels(image: PngImage, pixels: Iterable[Pixel]) -> int:
    """Write pixels into the image in scan order; return how many were written.

    Writing stops when either the image or (pixels) runs out.
    """
    codec = _Codec(image)
    count = 0
    for (offset, shift), pixel in zip(codec.positions(), pixels):
        codec.write(offset, shift, pixel)
        count += 1
    return count


def convert_image(dst: PngImage, src: PngImage) -> None:
    """Copy every pixel of (src) into (dst), converting formats as needed."""
    if dst.w != src.w or dst.h != src.h:
        raise PngError(f"Size mismatch: {dst.w}x{dst.h} vs {src.w}x{src.h}.")
    _Codec(dst)
    write_pixels(dst, read_pixels(src))


def reformat(src: PngImage, depth: int, colortype: int) -> PngImage:
    """Make a new image at minimum stride in the requested format.

    Indexed output carries over the PLTE and tRNS chunks of (src).
    """
    dst = PngImage(src.w, src.h, depth, colortype)
    if colortype == 3:
        for chunk in src.chunks:
            if chunk.id in (CHUNK_PLTE, CHUNK_tRNS):
                dst.add_chunk(chunk.id, chunk.data)
    convert_image(dst, src)
    return dst