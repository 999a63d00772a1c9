"""A stereo Freeverb-style reverb: parallel comb filters into series all-passes."""

from __future__ import annotations

from dataclasses import dataclass

_COMBS = (1116, 1188, 1277, 1356, 1422, 1491, 1557, 1617)
_ALL_PASSES = (556, 441, 341, 225)
_SPREAD = 23
_REFERENCE_RATE = 44100
_INPUT_GAIN = 0.015


@dataclass(frozen=True)
class ReverbParameters:
    """Reverb settings, each in the range 0..1."""

    room_size: float = 0.5
    damping: float = 0.5
    wet_level: float = 0.33
    dry_level: float = 0.4
    width: float = 1.0
    freeze_mode: float = 0.0

    @property
    def frozen(self) -> bool:
        """Whether the tail is held and new input ignored."""
        return self.freeze_mode >= 0.5


class _Smoothed:
    """A value that glides linearly to its target over a fixed number of steps."""

    def __init__(self) -> None:
        self._current = self._target = self._step = 0.0
        self._countdown = self._steps = 0

    def reset(self, sample_rate: float) -> None:
        self._steps = int(0.01 * sample_rate)
        self._current = self._target
        self._countdown = 0

    def set_target(self, value: float) -> None:
        if value == self._target:
            return
        self._target = value
        if self._steps <= 0:
            self._current, self._countdown = value, 0
        else:
            self._countdown = self._steps
            self._step = (value - self._current) / self._steps

    def next_value(self) -> float:
        if self._countdown <= 0:
            return self._target
        self._countdown -= 1
        self._current = self._current + self._step if self._countdown else self._target
        return self._current


class _Comb:
    def __init__(self, size: int) -> None:
        self.buffer = [0.0] * max(1, size)
        self.index = 0
        self.last = 0.0

    def process(self, sample: float, damp: float, feedback: float) -> float:
        output = self.buffer[self.index]
        self.last = output * (1.0 - damp) + self.last * damp
        self.buffer[self.index] = sample + self.last * feedback
        self.index = (self.index + 1) % len(self.buffer)
        return output


class _AllPass:
    def __init__(self, size: int) -> None:
        self.buffer = [0.0] * max(1, size)
        self.index = 0

    def process(self, sample: float) -> float:
        buffered = self.buffer[self.index]
        self.buffer[self.index] = sample + buffered * 0.5
        self.index = (self.index + 1) % len(self.buffer)
        return buffered - sample


class Reverb:
    """Stereo reverb with smoothed parameter changes."""

    def __init__(self, parameters: ReverbParameters | None = None) -> None:
        self._damping, self._feedback, self._dry, self._wet1, self._wet2 = (
            _Smoothed() for _ in range(5)
        )
        self._gain = _INPUT_GAIN
        self.parameters = ReverbParameters()
        self.set_parameters(parameters or ReverbParameters())
        self.set_sample_rate(_REFERENCE_RATE)

    def set_sample_rate(self, sample_rate: float) -> None:
        """Resize the delay lines for a sample rate and settle all smoothing."""
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        rate = int(sample_rate)
        self._combs = tuple(
            [_Comb(rate * (t + s) // _REFERENCE_RATE) for t in _COMBS] for s in (0, _SPREAD)
        )
        self._all_passes = tuple(
            [_AllPass(rate * (t + s) // _REFERENCE_RATE) for t in _ALL_PASSES]
            for s in (0, _SPREAD)
        )
        for smoothed in (self._damping, self._feedback, self._dry, self._wet1, self._wet2):
            smoothed.reset(sample_rate)

    def set_parameters(self, parameters: ReverbParameters) -> None:
        """Apply new settings; gains and damping glide to their new values."""
        wet = parameters.wet_level * 3.0
        self._dry.set_target(parameters.dry_level * 2.0)
        self._wet1.set_target(0.5 * wet * (1.0 + parameters.width))
        self._wet2.set_target(0.5 * wet * (1.0 - parameters.width))
        frozen = parameters.frozen
        self._gain = 0.0 if frozen else _INPUT_GAIN
        self._damping.set_target(0.0 if frozen else parameters.damping * 0.4)
        self._feedback.set_target(1.0 if frozen else parameters.room_size * 0.28 + 0.7)
        self.parameters = parameters

    def reset(self) -> None:
        """Clear the reverb tail."""
        for filters in (*self._combs, *self._all_passes):
            for f in filters:
                f.buffer = [0.0] * len(f.buffer)
                if isinstance(f, _Comb):
                    f.last = 0.0

    def process_stereo(self, left, right) -> tuple[list[float], list[float]]:
        """Process a stereo block and return the new left and right channels."""
        if len(left) != len(right):
            raise ValueError("left and right channels must have the same length")
        combs_left, combs_right = self._combs
        passes_left, passes_right = self._all_passes
        out_left: list[float] = []
        out_right: list[float] = []
        for in_left, in_right in zip(left, right):
            sample = (in_left + in_right) * self._gain
            damp = self._damping.next_value()
            feedback = self._feedback.next_value()
            wet_left = sum(c.process(sample, damp, feedback) for c in combs_left)
            wet_right = sum(c.process(sample, damp, feedback) for c in combs_right)
            for a in passes_left:
                wet_left = a.process(wet_left)
            for a in passes_right:
                wet_right = a.process(wet_right)
            dry = self._dry.next_value()
            wet1 = self._wet1.next_value()
            wet2 = self._wet2.next_value()
            out_left.append(wet_left * wet1 + wet_right * wet2 + in_left * dry)
            out_right.append(wet_right * wet1 + wet_left * wet2 + in_right * dry)
        return out_left, out_right