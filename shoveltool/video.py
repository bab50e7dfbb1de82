"""Video driver interface pieces and a headless dummy driver."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass


class Button(enum.IntFlag):
    """Bits of a virtual input device's state."""

    NONE = 0
    LEFT = 0x01
    RIGHT = 0x02
    UP = 0x04
    DOWN = 0x08
    SOUTH = 0x10  # Primary.
    WEST = 0x20  # Secondary.
    AUX1 = 0x40


@dataclass
class VideoSetup:
    """Parameters for opening a video output.

    (w, h) is the initial window size, zero for automatic; (fbw, fbh) is the
    expected framebuffer size, used to guide the automatic choice.
    """

    w: int = 0
    h: int = 0
    fbw: int = 0
    fbh: int = 0
    fullscreen: bool = False
    title: str = ""
    icon_rgba: bytes | None = None
    iconw: int = 0
    iconh: int = 0
    on_close: Callable[[], None] | None = None
    on_focus: Callable[[bool], None] | None = None


@dataclass(frozen=True)
class Framebuffer:
    """A framebuffer handed over by the game: packed RGBX, rows of w*4 bytes."""

    rgbx: object
    w: int
    h: int


class DummyVideo:
    """Video driver with no output; it accepts frames and discards them."""

    driver_name = "dummy"
    provides_events = False

    def __init__(self, setup: VideoSetup | None = None) -> None:
        self.setup = setup if setup is not None else VideoSetup()
        self._pending: Framebuffer | None = None

    def __enter__(self) -> DummyVideo:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def pending(self) -> Framebuffer | None:
        """The framebuffer awaiting commit, if any."""
        return self._pending

    def update(self) -> None:
        """Poll for events; this driver has none."""

    def set_framebuffer(self, rgbx, w: int, h: int) -> None:
        """Hold on to the game's framebuffer until the next commit; last call wins."""
        self._pending = Framebuffer(rgbx, w, h)

    def commit(self) -> bool:
        """Commit the pending framebuffer; return whether there was one."""
        if self._pending is None:
            return False
        self._pending = None
        return True

    def close(self) -> None:
        """Release the driver; safe to call more than once."""
        self._pending = None