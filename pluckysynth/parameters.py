"""Synth parameters: their ranges, defaults and current values."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class FloatParameter:
    """A continuous parameter with a range, step interval and skew."""

    id: str
    name: str
    minimum: float
    maximum: float
    interval: float = 0.0
    default: float = 0.0
    skew: float = 1.0

    def __post_init__(self) -> None:
        if self.maximum <= self.minimum:
            raise ValueError(f"{self.id}: maximum must exceed minimum")
        if self.skew <= 0:
            raise ValueError(f"{self.id}: skew must be positive")

    def snap(self, value: float) -> float:
        """Round a value to the interval grid and clamp it to the range."""
        value = float(value)
        if self.interval > 0:
            steps = math.floor((value - self.minimum) / self.interval + 0.5)
            value = self.minimum + self.interval * steps
        if value <= self.minimum:
            return self.minimum
        return min(value, self.maximum)

    def to_normalised(self, value: float) -> float:
        """Map a value in the range to 0..1, applying the skew."""
        proportion = (float(value) - self.minimum) / (self.maximum - self.minimum)
        proportion = min(1.0, max(0.0, proportion))
        if self.skew == 1.0:
            return proportion
        return proportion**self.skew

    def from_normalised(self, proportion: float) -> float:
        """Map a 0..1 position back into the range, undoing the skew."""
        proportion = min(1.0, max(0.0, float(proportion)))
        if self.skew != 1.0 and proportion > 0.0:
            proportion = math.exp(math.log(proportion) / self.skew)
        return self.minimum + (self.maximum - self.minimum) * proportion


@dataclass(frozen=True)
class ChoiceParameter:
    """A parameter that selects one of a list of named choices by index."""

    id: str
    name: str
    choices: tuple[str, ...]
    default: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(self.choices))
        if not self.choices:
            raise ValueError(f"{self.id}: at least one choice is required")
        if not 0 <= self.default < len(self.choices):
            raise ValueError(f"{self.id}: default index out of range")

    def snap(self, value: Union[int, float, str]) -> int:
        """Turn a choice name or a number into a valid choice index."""
        if isinstance(value, str):
            try:
                return self.choices.index(value)
            except ValueError:
                raise ValueError(f"{self.id}: unknown choice {value!r}") from None
        index = math.floor(float(value) + 0.5)
        return max(0, min(len(self.choices) - 1, index))


Parameter = Union[FloatParameter, ChoiceParameter]


def create_parameter_layout() -> tuple[Parameter, ...]:
    """The synth's parameters, in their display order."""
    return (
        FloatParameter("gain", "Gain", 0.0, 1.0, 0.01, 0.5),
        ChoiceParameter("source", "Source", ("Sinusoid", "Sawtooth", "Square", "Noise"), 0),
        FloatParameter("decay", "Decay", 0.80, 1.0, 0.01, 0.97),
        FloatParameter("width", "Width", 0.001, 0.020, 0.001, 0.005),
        FloatParameter("filterCutoff", "Acoustic Attenuator", 20.0, 20000.0, 1.0, 2000.0, 0.3),
        FloatParameter("lowFilterCutoff", "Filter Cutoff", 20.0, 500.0, 1.0, 20.0, 0.3),
        FloatParameter("tremoloRate", "Tremolo Rate", 0.1, 20.0, 0.01, 2.0),
        FloatParameter("tremoloDepth", "Tremolo Depth", 0.0, 1.0, 0.01, 0.0),
        FloatParameter("reverbSize", "Reverb Size", 0.0, 1.0, 0.01, 0.5),
        FloatParameter("reverbMix", "Reverb Mix", 0.0, 1.0, 0.01, 0.5),
    )


class ParameterSet(Mapping):
    """Current parameter values, keyed by parameter id.

    Assigned values are snapped to each parameter's legal range.
    """

    def __init__(self, parameters: Iterable[Parameter] | None = None) -> None:
        if parameters is None:
            parameters = create_parameter_layout()
        self._definitions: dict[str, Parameter] = {}
        for parameter in parameters:
            if parameter.id in self._definitions:
                raise ValueError(f"duplicate parameter id {parameter.id!r}")
            self._definitions[parameter.id] = parameter
        self._values: dict[str, float | int] = {}
        self.reset()

    def __getitem__(self, name: str) -> float | int:
        return self._values[name]

    def __setitem__(self, name: str, value) -> None:
        self._values[name] = self._definitions[name].snap(value)

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def definition(self, name: str) -> Parameter:
        """The parameter description for an id."""
        return self._definitions[name]

    def reset(self) -> None:
        """Restore every parameter to its default."""
        self._values = {pid: p.default for pid, p in self._definitions.items()}