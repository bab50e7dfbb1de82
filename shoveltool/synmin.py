"""Bare-minimum square-wave synthesizer with a compact song format.

Mono only, no level envelopes. Song data is a headerless stream of events,
told apart by the high bit of their leading byte:

  0ttttttt                   : DELAY (t+1)*16 ms
  1aaaaaaz zzzzzlll lltttttt : NOTE from (a) to (z), level (l), duration (t+1)*16 ms
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

VOICE_LIMIT = 16
NOTE_COUNT = 64
REFERENCE_NOTE = 32  # Plays at 440 Hz.

_F32 = struct.Struct("<f")
_TWELFTH_ROOT_TWO = 1.0594630943592953


def _f32(value: float) -> float:
    """Round to single precision, as the synthesizer's arithmetic does."""
    return _F32.unpack(_F32.pack(value))[0]


def _wrap32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


@dataclass(slots=True)
class _Voice:
    ttl: int = 0  # Frames remaining; zero means defunct.
    level: float = 0.0
    p: int = 0  # Phase, unsigned 32-bit.
    dp: int = 0
    ddp: int = 0


class Synmin:
    """Square-wave synthesizer producing one channel of float PCM."""

    def __init__(self, rate: int, chanc: int = 1) -> None:
        if not 200 <= rate <= 200000:
            raise ValueError(f"Unsupported output rate {rate} Hz.")
        if chanc < 1:
            raise ValueError(f"Invalid channel count {chanc}.")
        self._rate = rate
        self._rates = self._build_rate_table(rate)
        self._voices: list[_Voice] = []
        self._song = None
        self._songp = 0
        self._songc = 0
        self._songdelay = 0
        self._songrepeat = False

    @staticmethod
    def _build_rate_table(rate: int) -> tuple[int, ...]:
        # Compute in floating point first to keep rounding errors from compounding.
        fpv = [0.0] * NOTE_COUNT
        fpv[REFERENCE_NOTE] = _f32(440.0 / _f32(float(rate)))
        step = _f32(_TWELFTH_ROOT_TWO)
        for i in range(REFERENCE_NOTE + 1, REFERENCE_NOTE + 12):
            fpv[i] = _f32(fpv[i - 1] * step)
        for i in range(REFERENCE_NOTE + 12, NOTE_COUNT):
            fpv[i] = _f32(fpv[i - 12] * 2.0)
        for i in reversed(range(REFERENCE_NOTE)):
            fpv[i] = _f32(fpv[i + 12] * 0.5)
        return tuple(_wrap32(int(_f32(v * 4294967296.0))) for v in fpv)

    @property
    def rate(self) -> int:
        return self._rate

    @property
    def rates(self) -> tuple[int, ...]:
        """Phase delta per frame for each of the 64 notes."""
        return self._rates

    @property
    def voice_count(self) -> int:
        return len(self._voices)

    @property
    def playing(self) -> bool:
        """True while a song is loaded and not yet finished."""
        return self._song is not None

    def _frames_from_ms(self, ms: int) -> int:
        seconds = _f32(_f32(float(ms)) / 1000.0)
        return int(_f32(seconds * _f32(float(self._rate))))

    def note(self, noteida: int, noteidz: int, level: int, dur16ms: int) -> None:
        """Start a note, sliding from (noteida) to (noteidz) over its duration.

        Notes are 0..63, level 0..31 and dur16ms 0..63 (meaning (dur16ms+1)*16 ms);
        out-of-range values are masked to those widths.
        """
        noteida &= 0x3F
        noteidz &= 0x3F
        level &= 0x1F
        dur16ms &= 0x3F

        if len(self._voices) < VOICE_LIMIT:
            voice = _Voice()
            self._voices.append(voice)
        else:
            voice = self._voices[0]
            for candidate in self._voices:
                if not candidate.ttl:
                    voice = candidate
                    break
                if candidate.ttl < voice.ttl:
                    voice = candidate

        voice.p = 0
        voice.ttl = max(1, self._frames_from_ms((1 + dur16ms) << 4))
        voice.level = _f32(_f32(0.05) + _f32(level / 200.0))
        voice.dp = self._rates[noteida]
        if noteida == noteidz:
            voice.ddp = 0
        else:
            voice.ddp = _trunc_div(self._rates[noteidz] - voice.dp, voice.ttl)

    def song(self, data, force: bool = False, repeat: bool = False) -> None:
        """Stop all voices and begin playing (data) from the start.

        If (data) is the song already playing and (force) is false, only the
        repeat flag changes. Empty data stops the song.
        """
        if data is not None and len(data) < 1:
            data = None
        if not force and data is self._song:
            self._songrepeat = bool(repeat)
            return
        self._song = data
        self._songp = 0
        self._songc = len(data) if data is not None else 0
        self._songdelay = 0
        self._songrepeat = bool(repeat)
        self._voices.clear()

    def silence(self) -> None:
        """Kill all voices at once."""
        self._voices.clear()

    def _song_update(self) -> None:
        """Process events until a delay is pending or the song ends."""
        song = self._song
        delayms = 0
        while True:
            if self._songp >= self._songc:
                if self._songrepeat:
                    self._songp = 0
                    self._songdelay = max(1, self._frames_from_ms(delayms))
                else:
                    self._song = None
                return
            lead = song[self._songp]
            if not lead & 0x80:
                delayms += (lead + 1) << 4
                self._songp += 1
                continue
            if delayms:
                self._songdelay = max(1, self._frames_from_ms(delayms))
                return
            if self._songp > self._songc - 3:
                self._song = None
                return
            a, b, c = song[self._songp : self._songp + 3]
            self._songp += 3
            self.note(
                (a >> 1) & 63,
                ((a << 5) & 32) | (b >> 3),
                ((b & 7) << 2) | (c >> 6),
                c & 63,
            )

    def _render(self, out: list[float], start: int, count: int) -> None:
        for voice in self._voices:
            n = min(voice.ttl, count)
            if n <= 0:
                continue
            level = voice.level
            p, dp, ddp = voice.p, voice.dp, voice.ddp
            for i in range(start, start + n):
                dp = _wrap32(dp + ddp)
                p = (p + dp) & 0xFFFFFFFF
                if p & 0x80000000:
                    out[i] += level
                else:
                    out[i] -= level
            voice.p, voice.dp = p, dp
            voice.ttl -= n

    def update(self, count: int) -> list[float]:
        """Advance by (count) frames and return that much PCM."""
        out = [0.0] * max(0, count)
        pos = 0
        remaining = count
        while remaining > 0:
            updc = remaining
            if self._song is not None:
                if not self._songdelay:
                    self._song_update()
                if 0 < self._songdelay < updc:
                    updc = self._songdelay
                self._songdelay = max(0, self._songdelay - updc)
            self._render(out, pos, updc)
            pos += updc
            remaining -= updc
        while self._voices and not self._voices[-1].ttl:
            self._voices.pop()
        return out