"""In-memory PNG image: pixel buffer, header fields and ancillary chunks."""

from __future__ import annotations

from dataclasses import dataclass

CHUNK_IHDR = 0x49484452
CHUNK_IDAT = 0x49444154
CHUNK_IEND = 0x49454E44
CHUNK_PLTE = 0x504C5445
CHUNK_tRNS = 0x74524E53

_INT_MAX = 0x7FFFFFFF
_CHANNELS_BY_COLORTYPE = {0: 1, 2: 3, 3: 1, 4: 2, 6: 4}


class PngError(ValueError):
    """Raised for invalid PNG images, chunks or operations."""


@dataclass
class PngChunk:
    """One ancillary chunk: big-endian four-byte id and its payload."""

    id: int
    data: bytes


def _pixel_size(depth: int, colortype: int) -> int:
    channels = _CHANNELS_BY_COLORTYPE.get(colortype)
    if channels is None:
        raise PngError(f"Unsupported colortype {colortype}.")
    pixelsize = depth * channels
    if not 1 <= pixelsize <= 64:
        raise PngError(f"Invalid pixel size {pixelsize} bits.")
    if pixelsize < 8:
        if 8 % pixelsize:
            raise PngError(f"Invalid pixel size {pixelsize} bits.")
    elif pixelsize & 7:
        raise PngError(f"Invalid pixel size {pixelsize} bits.")
    return pixelsize


def _plte_bytes(data: bytes, count: int, channels: int) -> bytes:
    if channels == 3:
        return data[: count * 3]
    return b"".join(data[p : p + 3] for p in range(0, count * 4, 4))


def _trns_bytes(data: bytes, count: int) -> bytes:
    return data[3 : count * 4 : 4]


class PngImage:
    """Zeroed pixels at minimum stride, plus an ordered list of extra chunks.

    IHDR, IDAT and IEND are never kept in ``chunks``.
    Invalid (depth, colortype) pairs are allowed when they yield a legal
    pixel size: 1, 2, 4, 8, 16, 24, 32, 48 or 64 bits.
    """

    def __init__(self, w: int, h: int, depth: int, colortype: int) -> None:
        if w < 1 or h < 1:
            raise PngError(f"Invalid dimensions {w}x{h}.")
        pixelsize = _pixel_size(depth, colortype)
        if w > (_INT_MAX - 7) // pixelsize:
            raise PngError("Image too wide.")
        stride = (w * pixelsize + 7) >> 3
        if stride > _INT_MAX // h:
            raise PngError("Image too large.")
        self.w = w
        self.h = h
        self.stride = stride
        self.depth = depth
        self.colortype = colortype
        self.pixelsize = pixelsize
        self.pixels = bytearray(stride * h)
        self.chunks: list[PngChunk] = []

    def __repr__(self) -> str:
        return (
            f"PngImage(w={self.w}, h={self.h}, depth={self.depth}, "
            f"colortype={self.colortype}, chunks={len(self.chunks)})"
        )

    def add_chunk(self, chunk_id: int, data: bytes = b"") -> PngChunk:
        """Append a copy of (data) as a new chunk and return it."""
        chunk = PngChunk(chunk_id, bytes(data))
        self.chunks.append(chunk)
        return chunk

    def remove_chunk_at(self, index: int) -> None:
        """Remove the chunk at (index); out-of-range indices are ignored."""
        if 0 <= index < len(self.chunks):
            del self.chunks[index]

    def set_ctab(self, data: bytes, count: int, channels: int) -> None:
        """Replace or add PLTE and tRNS from an RGB or RGBA colour table.

        (count) is the number of entries, at most 256 are used.
        An RGBA table whose trailing alphas are all 0xff stores a shorter
        tRNS, or none at all. A count of zero removes both chunks.
        """
        if count < 0 or channels not in (3, 4):
            raise PngError(f"Invalid colour table: count={count} channels={channels}.")
        count = min(count, 256)
        data = bytes(data)
        if len(data) < count * channels:
            raise PngError("Colour table data too short.")

        alphac = 0
        if channels == 4:
            alphac = count
            while alphac > 0 and data[alphac * 4 - 1] == 0xFF:
                alphac -= 1

        got_plte = got_trns = False
        for index in reversed(range(len(self.chunks))):
            chunk = self.chunks[index]
            if chunk.id == CHUNK_PLTE:
                if not count:
                    del self.chunks[index]
                else:
                    chunk.data = _plte_bytes(data, count, channels)
                    got_plte = True
            elif chunk.id == CHUNK_tRNS:
                if not alphac:
                    del self.chunks[index]
                else:
                    chunk.data = _trns_bytes(data, count)
                    got_trns = True
        if not count:
            return

        if not got_plte:
            self.add_chunk(CHUNK_PLTE, _plte_bytes(data, count, channels))
        if not got_trns and alphac:
            self.add_chunk(CHUNK_tRNS, _trns_bytes(data, alphac))