"""Command line renderer: play notes through the synth into a WAV file."""

from __future__ import annotations

import argparse
import random
import struct
import wave

from .synth import KarplusSynth, NoteOff, NoteOn


def write_wav(path, left, right, sample_rate) -> None:
    """Write a 16-bit stereo WAV file, clipping samples to -1..1."""
    if len(left) != len(right):
        raise ValueError("left and right channels must have the same length")
    frames = [round(max(-1.0, min(1.0, s)) * 32767) for pair in zip(left, right) for s in pair]
    with wave.open(str(path), "wb") as out:
        out.setnchannels(2)
        out.setsampwidth(2)
        out.setframerate(int(sample_rate))
        out.writeframes(struct.pack(f"<{len(frames)}h", *frames))


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pluckysynth", description="Render plucked-string notes to a WAV file."
    )
    parser.add_argument("output")
    parser.add_argument("--notes", type=int, nargs="+", default=[60])
    parser.add_argument("--velocity", type=int, default=100)
    parser.add_argument("--spacing", type=float, default=0.0)
    parser.add_argument("--duration", type=float, default=2.0)
    parser.add_argument("--stop", type=float, default=None)
    parser.add_argument("--sample-rate", type=int, default=44100)
    parser.add_argument("--block-size", type=int, default=512)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--set", dest="settings", action="append", default=[],
                        metavar="NAME=VALUE")
    return parser


def main(argv=None) -> int:
    """Render the requested notes and write them out."""
    parser = _parser()
    args = parser.parse_args(argv)
    synth = KarplusSynth(rng=random.Random(args.seed))
    rate = args.sample_rate

    try:
        for setting in args.settings:
            name, sep, text = setting.partition("=")
            if not sep or name not in synth.parameters:
                raise ValueError(f"bad setting {setting!r}")
            try:
                value: float | str = float(text)
            except ValueError:
                value = text
            synth.parameters[name] = value
        if args.duration < 0 or args.spacing < 0:
            raise ValueError("durations must not be negative")
        events = [(round(i * args.spacing * rate), NoteOn(note, args.velocity))
                  for i, note in enumerate(args.notes)]
        if args.stop is not None:
            events += [(round(args.stop * rate), NoteOff(note)) for note in args.notes]
        synth.prepare(rate, args.block_size)
    except ValueError as error:
        parser.error(str(error))

    left, right = synth.render(events, round(args.duration * rate))
    write_wav(args.output, left, right, rate)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())