"""Second-order IIR filters for the string feedback path and the output low cut."""

from __future__ import annotations

import math
from dataclasses import dataclass

# Butterworth response: Q = 1 / sqrt(2), so 1 / Q = sqrt(2).
_INVERSE_Q = math.sqrt(2.0)


@dataclass(frozen=True)
class BiquadCoefficients:
    """Normalised biquad coefficients (a0 is always 1)."""

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float

    @classmethod
    def identity(cls) -> BiquadCoefficients:
        """Coefficients that pass every sample through unchanged."""
        return cls(1.0, 0.0, 0.0, 0.0, 0.0)


def _check_cutoff(sample_rate: float, cutoff: float) -> None:
    if sample_rate <= 0:
        raise ValueError(f"sample rate must be positive, got {sample_rate}")
    if not 0 < cutoff <= sample_rate * 0.5:
        raise ValueError(
            f"cutoff must lie in (0, {sample_rate * 0.5}], got {cutoff}"
        )


def low_pass(sample_rate: float, cutoff: float) -> BiquadCoefficients:
    """Second-order Butterworth low-pass coefficients."""
    _check_cutoff(sample_rate, cutoff)
    n = 1.0 / math.tan(math.pi * cutoff / sample_rate)
    n_squared = n * n
    c1 = 1.0 / (1.0 + _INVERSE_Q * n + n_squared)
    return BiquadCoefficients(
        b0=c1,
        b1=c1 * 2.0,
        b2=c1,
        a1=c1 * 2.0 * (1.0 - n_squared),
        a2=c1 * (1.0 - _INVERSE_Q * n + n_squared),
    )


def high_pass(sample_rate: float, cutoff: float) -> BiquadCoefficients:
    """Second-order Butterworth high-pass coefficients."""
    _check_cutoff(sample_rate, cutoff)
    n = math.tan(math.pi * cutoff / sample_rate)
    n_squared = n * n
    c1 = 1.0 / (1.0 + n * _INVERSE_Q + n_squared)
    return BiquadCoefficients(
        b0=c1,
        b1=c1 * -2.0,
        b2=c1,
        a1=c1 * 2.0 * (n_squared - 1.0),
        a2=c1 * (1.0 - n * _INVERSE_Q + n_squared),
    )


class Biquad:
    """A biquad filter in transposed direct form II."""

    def __init__(self, coefficients: BiquadCoefficients | None = None) -> None:
        self.coefficients = (
            coefficients if coefficients is not None else BiquadCoefficients.identity()
        )
        self._state1 = 0.0
        self._state2 = 0.0

    def set_coefficients(self, coefficients: BiquadCoefficients) -> None:
        """Replace the coefficients while keeping the filter state."""
        self.coefficients = coefficients

    def process(self, sample: float) -> float:
        """Filter one sample and return the output."""
        c = self.coefficients
        output = sample * c.b0 + self._state1
        self._state1 = sample * c.b1 - output * c.a1 + self._state2
        self._state2 = sample * c.b2 - output * c.a2
        return output

    def reset(self) -> None:
        """Clear the filter's memory."""
        self._state1 = 0.0
        self._state2 = 0.0