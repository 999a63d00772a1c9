"""Polyphonic Karplus-Strong plucked-string synthesizer with offline WAV rendering."""

__version__ = "0.1.0"

__all__ = ["cli", "filters", "parameters", "reverb", "synth", "voice"]