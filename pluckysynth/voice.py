"""A single plucked-string voice built on a Karplus-Strong delay loop."""

from __future__ import annotations

import math
import random
from enum import IntEnum

from .filters import Biquad, low_pass


class Exciter(IntEnum):
    """Signal used to excite the string at the start of a note."""

    SINE = 0
    SAWTOOTH = 1
    SQUARE = 2
    NOISE = 3


def midi_note_to_hertz(note: int) -> float:
    """Frequency of a MIDI note number, A4 at 440 Hz."""
    return 440.0 * 2.0 ** ((note - 69) / 12.0)


class KarplusVoice:
    """An exciter burst fed into a low-pass filtered delay line."""

    def __init__(self, sample_rate: float, rng: random.Random | None = None) -> None:
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        self.sample_rate = float(sample_rate)
        self._buffer = [0.0] * int(sample_rate)
        self._write_position = 0
        self._excitation_gain = 0.0
        self._phase = 0.0
        self._frequency = 0.0
        self._gain = 0.0
        self.decay = 0.0
        self.width = 0.0
        self.source = Exciter.SINE
        self.active = False
        self._filter = Biquad(low_pass(self.sample_rate, 2000.0))
        self._rng = rng or random.Random()

    def start_note(self, midi_note, velocity, decay, width, source, cutoff) -> None:
        """Pluck the string for a MIDI note."""
        self.source = Exciter(source)
        self._filter.set_coefficients(low_pass(self.sample_rate, cutoff))
        self._filter.reset()
        self._frequency = midi_note_to_hertz(midi_note)
        self._excitation_gain = 1.0
        self._gain = velocity
        self._write_position = 0
        self.decay = decay
        self.width = width
        self.active = True

    def stop_note(self) -> None:
        """Silence the voice immediately."""
        self.active = False

    def _excite(self) -> float:
        if self.source is Exciter.SINE:
            return math.sin(2.0 * math.pi * self._phase)
        if self.source is Exciter.SAWTOOTH:
            return math.fmod(self._phase * 2.0, 2.0) - 1.0
        if self.source is Exciter.SQUARE:
            return 1.0 if math.sin(2.0 * math.pi * self._phase) >= 0.0 else -1.0
        return 2.0 * (self._rng.random() - 0.5)

    def render_next_sample(self, sample_rate: float) -> float:
        """Advance the string by one sample and return its output."""
        if not self.active:
            return 0.0
        length = len(self._buffer)
        delay = int(sample_rate / self._frequency)
        read_position = (self._write_position - delay) % length

        excitation = 0.0
        if self._excitation_gain > 0.0:
            excitation = self._excite()
            self._excitation_gain = max(
                0.0, self._excitation_gain - 1.0 / (self.width * sample_rate)
            )

        self._phase += self._frequency / sample_rate
        if self._phase >= 1.0:
            self._phase -= 1.0

        filtered = self._filter.process(self._buffer[read_position])
        self._buffer[self._write_position] = excitation + filtered * self.decay
        self._write_position = (self._write_position + 1) % length
        return filtered * self._gain