"""One-shot PNG decoding and encoding.

Interlaced images are not supported. CRCs are written but never checked.
Ancillary chunks (anything but IHDR, IDAT and IEND) are kept on the image in
file order, and written back before IDAT.
"""

from __future__ import annotations

import struct
import zlib

from .png_image import (
    CHUNK_IDAT,
    CHUNK_IEND,
    CHUNK_IHDR,
    PngError,
    PngImage,
)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_IEND_CRC = 0xAE426082
_U32 = struct.Struct(">I")


def _fail(refname: str | None, message: str) -> PngError:
    if refname:
        return PngError(f"{refname}: {message}")
    return PngError(message)


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa = abs(p - a)
    pb = abs(p - b)
    pc = abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def _unfilter(ftype: int, raw: bytes, prev: bytes | None, xstride: int) -> bytearray:
    out = bytearray(raw)
    n = len(raw)
    if ftype == 0:
        return out
    if ftype == 1:
        for i in range(xstride, n):
            out[i] = (raw[i] + out[i - xstride]) & 0xFF
    elif ftype == 2:
        if prev is not None:
            out = bytearray((a + b) & 0xFF for a, b in zip(raw, prev))
    elif ftype == 3:
        for i in range(n):
            left = out[i - xstride] if i >= xstride else 0
            up = prev[i] if prev is not None else 0
            out[i] = (raw[i] + ((left + up) >> 1)) & 0xFF
    elif ftype == 4:
        for i in range(n):
            left = out[i - xstride] if i >= xstride else 0
            if prev is None:
                up = upleft = 0
            else:
                up = prev[i]
                upleft = prev[i - xstride] if i >= xstride else 0
            out[i] = (raw[i] + _paeth(left, up, upleft)) & 0xFF
    return out


class _Decoder:
    def __init__(self, data: bytes, refname: str | None) -> None:
        self.src = data
        self.refname = refname
        self.image: PngImage | None = None
        self.inflater = None
        self.pending = bytearray()
        self.y = 0
        self.xstride = 1

    def fail(self, message: str) -> PngError:
        return _fail(self.refname, message)

    def on_ihdr(self, body: bytes) -> None:
        if self.image is not None:
            raise self.fail("Multiple IHDR.")
        if len(body) < 13:
            raise self.fail(f"Unexpected IHDR length {len(body)}.")
        w, h, depth, colortype, compression, filtering, interlace = struct.unpack(
            ">IIBBBBB", body[:13]
        )
        if interlace == 1:
            raise self.fail("Adam7 interlacing not supported.")
        if compression or filtering or interlace:
            raise self.fail("Unexpected compression, filter, or interlace strategy.")
        try:
            self.image = PngImage(w, h, depth, colortype)
        except PngError as exc:
            raise self.fail(
                f"Failed to create image {w}x{h} depth={depth} colortype={colortype}."
            ) from exc
        self.xstride = max(1, self.image.pixelsize >> 3)
        self.inflater = zlib.decompressobj()

    def drain_rows(self) -> None:
        image = self.image
        rowlen = 1 + image.stride
        while self.y < image.h and len(self.pending) >= rowlen:
            ftype = self.pending[0]
            raw = bytes(self.pending[1:rowlen])
            del self.pending[:rowlen]
            if ftype > 4:
                raise self.fail(
                    f"Unexpected filter byte 0x{ftype:02x} at row {self.y}/{image.h}"
                )
            start = self.y * image.stride
            prev = None
            if self.y:
                prev = bytes(image.pixels[start - image.stride : start])
            image.pixels[start : start + image.stride] = _unfilter(
                ftype, raw, prev, self.xstride
            )
            self.y += 1

    def on_idat(self, body: bytes) -> None:
        if self.inflater is None:
            raise self.fail("IHDR required before IDAT.")
        if self.y >= self.image.h:
            return
        try:
            self.pending += self.inflater.decompress(body)
        except zlib.error as exc:
            raise self.fail(
                f"Error from inflate(). ({self.y}/{self.image.h}): {exc}"
            ) from exc
        self.drain_rows()

    def finish(self) -> None:
        if self.image is None:
            raise self.fail("No IHDR.")
        if self.y < self.image.h:
            try:
                self.pending += self.inflater.flush()
            except zlib.error as exc:
                raise self.fail(f"Error from inflate(). (wrapping up): {exc}") from exc
            self.drain_rows()
        if self.y < self.image.h:
            raise self.fail("Incomplete image data.")

    def run(self) -> PngImage:
        src = self.src
        if len(src) < 8 or src[:8] != PNG_SIGNATURE:
            raise self.fail("PNG signature mismatch.")
        pos = 8
        while True:
            if pos > len(src) - 8:
                raise self.fail("Unexpected EOF.")
            length, chunk_id = struct.unpack_from(">II", src, pos)
            pos += 8
            if length > 0x7FFFFFFF or pos > len(src) - length:
                raise self.fail("Invalid chunk length.")
            body = src[pos : pos + length]
            pos += length
            if pos > len(src) - 4:
                raise self.fail("Unexpected EOF.")
            pos += 4
            if chunk_id == CHUNK_IHDR:
                self.on_ihdr(body)
            elif chunk_id == CHUNK_IDAT:
                self.on_idat(body)
            elif chunk_id == CHUNK_IEND:
                break
            else:
                if self.image is None:
                    raise self.fail("Expected IHDR.")
                self.image.add_chunk(chunk_id, body)
        self.finish()
        return self.image


def decode(data: bytes, refname: str | None = None) -> PngImage:
    """Decode a whole PNG file into a PngImage.

    Raises PngError on any failure; (refname), if given, prefixes the message.
    """
    return _Decoder(bytes(data), refname).run()


def _filter_sub(src: bytes, xstride: int) -> bytes:
    return bytes(
        (src[i] - (src[i - xstride] if i >= xstride else 0)) & 0xFF
        for i in range(len(src))
    )


def _filter_up(src: bytes, prev: bytes) -> bytes:
    return bytes((a - b) & 0xFF for a, b in zip(src, prev))


def _filter_avg(src: bytes, prev: bytes, xstride: int) -> bytes:
    return bytes(
        (src[i] - (((src[i - xstride] if i >= xstride else 0) + prev[i]) >> 1)) & 0xFF
        for i in range(len(src))
    )


def _filter_paeth(src: bytes, prev: bytes, xstride: int) -> bytes:
    out = bytearray(len(src))
    for i in range(len(src)):
        if i >= xstride:
            predictor = _paeth(src[i - xstride], prev[i], prev[i - xstride])
        else:
            predictor = _paeth(0, prev[i], 0)
        out[i] = (src[i] - predictor) & 0xFF
    return bytes(out)


def _filter_row(src: bytes, prev: bytes | None, xstride: int) -> bytes:
    """Pick the filter that yields the most zero bytes; earlier filters win ties."""
    candidates = [src, _filter_sub(src, xstride)]
    if prev is not None:
        candidates += [
            _filter_up(src, prev),
            _filter_avg(src, prev, xstride),
            _filter_paeth(src, prev, xstride),
        ]
    best, best_zeroes = 0, candidates[0].count(0)
    for ftype, filtered in enumerate(candidates[1:], start=1):
        zeroes = filtered.count(0)
        if zeroes > best_zeroes:
            best, best_zeroes = ftype, zeroes
    return bytes([best]) + candidates[best]


def _chunk(chunk_id: int, body: bytes) -> bytes:
    tag = _U32.pack(chunk_id)
    return _U32.pack(len(body)) + tag + body + _U32.pack(zlib.crc32(tag + body))


def encode(image: PngImage) -> bytes:
    """Encode an image as a complete PNG file with a single IDAT chunk."""
    stride, h = image.stride, image.h
    pixels = bytes(image.pixels)
    if len(pixels) < stride * h:
        raise PngError("Pixel buffer shorter than stride * height.")
    xstride = max(1, image.pixelsize >> 3)

    ihdr = struct.pack(
        ">IIBBBBB", image.w, image.h, image.depth, image.colortype, 0, 0, 0
    )
    parts = [PNG_SIGNATURE, _chunk(CHUNK_IHDR, ihdr)]
    parts.extend(_chunk(chunk.id, chunk.data) for chunk in image.chunks)

    deflater = zlib.compressobj(zlib.Z_BEST_COMPRESSION)
    compressed = []
    prev = None
    for y in range(h):
        row = pixels[y * stride : (y + 1) * stride]
        compressed.append(deflater.compress(_filter_row(row, prev, xstride)))
        prev = row
    compressed.append(deflater.flush())
    parts.append(_chunk(CHUNK_IDAT, b"".join(compressed)))

    parts.append(_U32.pack(0) + _U32.pack(CHUNK_IEND) + _U32.pack(_IEND_CRC))
    return b"".join(parts)