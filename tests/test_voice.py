import random

import pytest

from pluckysynth.voice import Exciter, KarplusVoice, midi_note_to_hertz

RATE = 8000.0


def _render(voice, count):
    return [voice.render_next_sample(RATE) for _ in range(count)]


def _plucked(velocity=1.0, decay=0.97, width=0.005, source=0, cutoff=2000.0, rng=None):
    voice = KarplusVoice(RATE, rng=rng)
    voice.start_note(69, velocity, decay, width, source, cutoff)
    return voice


def test_concert_a():
    assert midi_note_to_hertz(69) == pytest.approx(440.0)


def test_octave_doubles_frequency():
    assert midi_note_to_hertz(81) == pytest.approx(2 * midi_note_to_hertz(69))
    assert midi_note_to_hertz(57) == pytest.approx(midi_note_to_hertz(69) / 2)


def test_exciter_order_matches_choices():
    assert [e.name for e in Exciter] == ["SINE", "SAWTOOTH", "SQUARE", "NOISE"]
    assert Exciter(3) is Exciter.NOISE


def test_inactive_voice_is_silent():
    voice = KarplusVoice(RATE)
    assert voice.active is False
    assert _render(voice, 50) == [0.0] * 50


def test_start_and_stop():
    voice = _plucked()
    assert voice.active is True
    voice.stop_note()
    assert voice.active is False
    assert voice.render_next_sample(RATE) == 0.0


def test_output_is_delayed_by_the_string_length():
    out = _render(_plucked(), 300)
    assert out[:10] == [0.0] * 10
    assert any(abs(s) > 1e-3 for s in out)


def test_velocity_scales_output():
    loud = _render(_plucked(velocity=1.0), 400)
    soft = _render(_plucked(velocity=0.5), 400)
    for a, b in zip(loud, soft):
        assert b == pytest.approx(a * 0.5, abs=1e-12)


def test_zero_decay_dies_out():
    out = _render(_plucked(decay=0.0), 2000)
    assert max(abs(s) for s in out[1500:]) < 1e-6
    assert max(abs(s) for s in out[:200]) > 1e-3


def test_higher_decay_sustains_longer():
    long_tail = _render(_plucked(decay=0.99), 3000)[2000:]
    short_tail = _render(_plucked(decay=0.8), 3000)[2000:]
    assert sum(s * s for s in long_tail) > sum(s * s for s in short_tail)


def test_noise_exciter_is_reproducible_with_seed():
    a = _render(_plucked(source=Exciter.NOISE, rng=random.Random(7)), 500)
    b = _render(_plucked(source=Exciter.NOISE, rng=random.Random(7)), 500)
    assert a == b
    assert any(abs(s) > 1e-4 for s in a)


@pytest.mark.parametrize("source", [Exciter.SAWTOOTH, Exciter.SQUARE])
def test_other_exciters_produce_sound(source):
    out = _render(_plucked(source=source), 400)
    assert max(abs(s) for s in out) > 1e-3


def test_invalid_source_rejected():
    voice = KarplusVoice(RATE)
    with pytest.raises(ValueError):
        voice.start_note(60, 1.0, 0.97, 0.005, 9, 2000.0)
    assert voice.active is False


def test_cutoff_above_nyquist_rejected():
    voice = KarplusVoice(RATE)
    with pytest.raises(ValueError):
        voice.start_note(60, 1.0, 0.97, 0.005, 0, RATE)
    assert voice.active is False


def test_invalid_sample_rate_rejected():
    with pytest.raises(ValueError):
        KarplusVoice(0)