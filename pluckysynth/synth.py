"""The polyphonic plucked-string synth: voices, low cut, tremolo and reverb."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace
from typing import Union

from .filters import Biquad, high_pass
from .parameters import ParameterSet
from .reverb import Reverb, ReverbParameters
from .voice import KarplusVoice

MAX_VOICES = 16


@dataclass(frozen=True)
class _MidiNote:
    note: int
    velocity: int = 0

    def __post_init__(self) -> None:
        for what, value in (("note", self.note), ("velocity", self.velocity)):
            if not 0 <= value <= 127:
                raise ValueError(f"{what} must lie in 0..127, got {value}")


@dataclass(frozen=True)
class NoteOn(_MidiNote):
    """Start a note. A velocity of zero acts as a note off."""

    velocity: int = 100


@dataclass(frozen=True)
class NoteOff(_MidiNote):
    """Release a note; this silences every sounding voice."""


Event = Union[NoteOn, NoteOff]


class KarplusSynth:
    """Renders stereo audio from note events using the current parameters."""

    def __init__(self, parameters=None, max_voices=MAX_VOICES, rng=None) -> None:
        if max_voices <= 0:
            raise ValueError(f"at least one voice is required, got {max_voices}")
        self.parameters = parameters if parameters is not None else ParameterSet()
        self.max_voices = max_voices
        self.voices: list[KarplusVoice] = []
        self.sample_rate: float | None = None
        self.block_size = 0
        self._rng = rng or random.Random()
        self._filter = Biquad()
        self._tremolo_phase = 0.0
        self._reverb = Reverb()
        self._reverb_parameters = ReverbParameters()

    def prepare(self, sample_rate: float, block_size: int) -> None:
        """Allocate voices and set up the effects for a sample rate."""
        if block_size <= 0:
            raise ValueError(f"block size must be positive, got {block_size}")
        self.voices = [KarplusVoice(sample_rate, self._rng) for _ in range(self.max_voices)]
        self._filter = Biquad(high_pass(sample_rate, self.parameters["lowFilterCutoff"]))
        self._reverb.set_sample_rate(sample_rate)
        self.sample_rate = float(sample_rate)
        self.block_size = block_size

    def _handle(self, event: Event) -> None:
        if not isinstance(event, (NoteOn, NoteOff)):
            raise TypeError(f"unsupported event {event!r}")
        if isinstance(event, NoteOff) or event.velocity == 0:
            for voice in self.voices:
                voice.stop_note()
            return
        p = self.parameters
        free = next((v for v in self.voices if not v.active), None)
        if free is not None:
            free.start_note(event.note, event.velocity / 127.0, p["decay"],
                            p["width"], p["source"], p["filterCutoff"])

    def _check(self, num_samples: int) -> float:
        if self.sample_rate is None:
            raise RuntimeError("prepare() must be called first")
        if num_samples < 0:
            raise ValueError(f"sample count must not be negative, got {num_samples}")
        return self.sample_rate

    def process_block(self, num_samples, events=()) -> tuple[list[float], list[float]]:
        """Apply the events, then render one block and return left and right."""
        sample_rate = self._check(num_samples)
        p = self.parameters
        self._filter.set_coefficients(high_pass(sample_rate, p["lowFilterCutoff"]))
        for event in events:
            self._handle(event)

        rate, depth = p["tremoloRate"], p["tremoloDepth"]
        mono: list[float] = []
        for _ in range(num_samples):
            mixed = sum(v.render_next_sample(sample_rate) for v in self.voices if v.active)
            mixed = self._filter.process(mixed)
            lfo = 1.0 - depth * 0.5 * (1.0 + math.sin(2.0 * math.pi * self._tremolo_phase))
            self._tremolo_phase += rate / sample_rate
            if self._tremolo_phase >= 1.0:
                self._tremolo_phase -= 1.0
            mono.append(mixed * lfo)

        self._reverb_parameters = replace(self._reverb_parameters, room_size=p["reverbSize"])
        self._reverb.set_parameters(self._reverb_parameters)
        wet_left, wet_right = self._reverb.process_stereo(mono, mono)

        mix, gain = p["reverbMix"], p["gain"]
        left = [((1.0 - mix) * s + mix * w) * gain for s, w in zip(mono, wet_left)]
        right = [((1.0 - mix) * s + mix * w) * gain for s, w in zip(mono, wet_right)]
        return left, right

    def render(self, events, num_samples) -> tuple[list[float], list[float]]:
        """Render in blocks; each timed event is applied at the start of its block."""
        self._check(num_samples)
        pending = sorted(events, key=lambda item: item[0])
        if pending and pending[0][0] < 0:
            raise ValueError("event times must not be negative")
        pending.reverse()

        left: list[float] = []
        right: list[float] = []
        for start in range(0, num_samples, self.block_size):
            end = min(start + self.block_size, num_samples)
            block_events = []
            while pending and pending[-1][0] < end:
                block_events.append(pending.pop()[1])
            block_left, block_right = self.process_block(end - start, block_events)
            left.extend(block_left)
            right.extend(block_right)
        return left, right