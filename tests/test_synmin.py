import pytest

from shoveltool.synmin import VOICE_LIMIT, Synmin


def note_bytes(a, z, level, dur):
    return bytes(
        [
            0x80 | (a << 1) | (z >> 5),
            ((z << 3) & 0xFF) | (level >> 2),
            ((level << 6) & 0xFF) | dur,
        ]
    )


@pytest.mark.parametrize("rate,chanc", [(199, 1), (200001, 1), (44100, 0)])
def test_init_rejects_bad_parameters(rate, chanc):
    with pytest.raises(ValueError):
        Synmin(rate, chanc)


def test_rate_table_is_increasing_and_octaves_double():
    synth = Synmin(44100, 2)
    rates = synth.rates
    assert len(rates) == 64
    assert all(a < b for a, b in zip(rates, rates[1:]))
    r32, r44 = rates[32], rates[44]
    assert 2 * r32 <= r44 <= 2 * r32 + 1


def test_silent_without_notes():
    synth = Synmin(1000)
    assert synth.update(50) == [0.0] * 50


def test_single_note_lasts_its_duration():
    synth = Synmin(1000)
    synth.note(32, 32, 0, 0)
    out = synth.update(32)
    assert len(out) == 32
    assert all(v == pytest.approx(0.05) or v == pytest.approx(-0.05) for v in out[:16])
    assert out[16:] == [0.0] * 16
    assert synth.voice_count == 0


def test_note_level_scales_amplitude():
    synth = Synmin(1000)
    synth.note(32, 32, 31, 0)
    out = synth.update(8)
    assert max(abs(v) for v in out) == pytest.approx(0.05 + 31 / 200.0)


def test_voice_limit():
    synth = Synmin(1000)
    for _ in range(VOICE_LIMIT + 3):
        synth.note(10, 20, 5, 10)
    assert synth.voice_count == VOICE_LIMIT


def test_silence_kills_voices():
    synth = Synmin(1000)
    synth.note(32, 40, 10, 63)
    synth.silence()
    assert synth.voice_count == 0
    assert synth.update(20) == [0.0] * 20


def test_song_plays_then_finishes():
    synth = Synmin(1000)
    data = note_bytes(32, 32, 0, 0) + b"\x00" + note_bytes(32, 32, 0, 0)
    synth.song(data)
    assert synth.playing
    out = synth.update(64)
    assert all(v != 0.0 for v in out[:32])
    assert out[32:] == [0.0] * 32
    assert not synth.playing


def test_song_repeats():
    synth = Synmin(1000)
    data = note_bytes(30, 30, 0, 0) + b"\x00"
    synth.song(data, repeat=True)
    out = synth.update(64)
    assert all(v != 0.0 for v in out)
    assert synth.playing


def test_truncated_note_ends_song():
    synth = Synmin(1000)
    synth.song(b"\x80")
    out = synth.update(10)
    assert out == [0.0] * 10
    assert not synth.playing


def test_same_song_without_force_keeps_position():
    synth = Synmin(1000)
    data = note_bytes(32, 32, 0, 0) + b"\x00" + note_bytes(32, 32, 0, 0)
    synth.song(data)
    synth.update(8)
    voices = synth.voice_count
    synth.song(data, force=False)
    assert synth.voice_count == voices
    synth.song(data, force=True)
    assert synth.voice_count == 0
    assert synth.playing


def test_empty_song_stops():
    synth = Synmin(1000)
    synth.song(note_bytes(1, 1, 1, 1))
    synth.song(b"", force=True)
    assert not synth.playing


def test_slide_changes_phase_rate():
    flat = Synmin(8000)
    flat.note(20, 20, 0, 63)
    slide = Synmin(8000)
    slide.note(20, 50, 0, 63)
    assert flat.update(2000) != slide.update(2000)