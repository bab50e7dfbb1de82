"""1-bit renderer: draws 1-bit images onto 32-bit RGBX framebuffers.

Output pixels are 32-bit integers stored little-endian, so 0x000000ff is red
and the high byte is ignored. Source images are row-padded to whole bytes,
with bits ordered most-significant first as in PNG.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field


class Xform(enum.IntFlag):
    """Flips applied when blitting. There is no axis swap."""

    NONE = 0
    XREV = 1
    YREV = 2


@dataclass
class Image1:
    """A 1-bit image; (stride) is in bytes and defaults to the minimum."""

    w: int
    h: int
    pixels: bytes | bytearray | None = None
    stride: int | None = None

    def __post_init__(self) -> None:
        if self.stride is None:
            self.stride = (self.w + 7) >> 3
        if self.pixels is None:
            self.pixels = bytearray(self.stride * self.h)


@dataclass
class Image32:
    """A 32-bit XBGR image; (stridewords) is in pixels and defaults to (w)."""

    w: int
    h: int
    pixels: list[int] | None = None
    stridewords: int | None = None
    _unused: None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.stridewords is None:
            self.stridewords = self.w
        if self.pixels is None:
            self.pixels = [0] * (self.stridewords * self.h)

    def to_rgbx(self) -> bytes:
        """Pack the visible pixels row by row as little-endian 32-bit words."""
        rows = (
            self.pixels[y * self.stridewords : y * self.stridewords + self.w]
            for y in range(self.h)
        )
        return b"".join(struct.pack(f"<{self.w}I", *row) for row in rows)

    def fill_rect(self, x: int, y: int, w: int, h: int, xbgr: int) -> None:
        """Fill a rectangle with one colour, clipped to the image. Zero is a no-op."""
        xbgr &= 0xFFFFFFFF
        if not xbgr:
            return
        if x < 0:
            w += x
            x = 0
        if y < 0:
            h += y
            y = 0
        if x > self.w - w:
            w = self.w - x
        if y > self.h - h:
            h = self.h - y
        if w < 1 or h < 1:
            return
        for row in range(y, y + h):
            start = row * self.stridewords + x
            self.pixels[start : start + w] = [xbgr] * w

    def blit_img1(
        self,
        src: Image1,
        dstx: int,
        dsty: int,
        srcx: int,
        srcy: int,
        w: int,
        h: int,
        xbgr0: int,
        xbgr1: int,
        xform: int = Xform.NONE,
    ) -> None:
        """Draw a region of a 1-bit image, clipped on both sides.

        Clear bits take (xbgr0) and set bits (xbgr1); a zero colour is
        transparent. Flips do not change the covered area.
        """
        xbgr0 &= 0xFFFFFFFF
        xbgr1 &= 0xFFFFFFFF
        if not xbgr0 and not xbgr1:
            return
        xrev = bool(xform & Xform.XREV)
        yrev = bool(xform & Xform.YREV)

        if dstx < 0:
            if not xrev:
                srcx -= dstx
            w += dstx
            dstx = 0
        if dsty < 0:
            if not yrev:
                srcy -= dsty
            h += dsty
            dsty = 0
        if dstx > self.w - w:
            if xrev:
                srcx += dstx + w - self.w
            w = self.w - dstx
        if dsty > self.h - h:
            if yrev:
                srcy += dsty + h - self.h
            h = self.h - dsty
        if srcx < 0:
            if not xrev:
                dstx -= srcx
            w += srcx
            srcx = 0
        if srcy < 0:
            if not yrev:
                dsty -= srcy
            h += srcy
            srcy = 0
        if srcx > src.w - w:
            if xrev:
                dstx += srcx + w - src.w
            w = src.w - srcx
        if srcy > src.h - h:
            if yrev:
                dsty += srcy + h - src.h
            h = src.h - srcy
        if w < 1 or h < 1:
            return

        # Source is always read in scan order; flips happen on the destination side.
        dminor, dmajor = 1, self.stridewords
        if xrev:
            dminor = -1
            dstx += w - 1
        if yrev:
            dmajor = -self.stridewords
            dsty += h - 1

        dstrow = dsty * self.stridewords + dstx
        for sy in range(srcy, srcy + h):
            rowbase = sy * src.stride
            dstp = dstrow
            for sx in range(srcx, srcx + w):
                if src.pixels[rowbase + (sx >> 3)] & (0x80 >> (sx & 7)):
                    if xbgr1:
                        self.pixels[dstp] = xbgr1
                elif xbgr0:
                    self.pixels[dstp] = xbgr0
                dstp += dminor
            dstrow += dmajor