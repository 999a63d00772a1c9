# pluckysynth

A small polyphonic plucked-string synthesizer built on the Karplus-Strong
algorithm. It is pure Python and needs no third-party packages.

Each note fills a delay line with a short burst from one of four sources
(sinusoid, sawtooth, square or noise). The delay line feeds back through a
low-pass filter, so the sound dies away like a plucked string. The voices are
mixed, then pass through a high-pass "low cut" filter, a tremolo and a reverb.
A final gain is applied last. The output is stereo.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

The `pluckysynth` command renders notes to a 16-bit stereo WAV file:

```
pluckysynth out.wav --notes 60 64 67 --spacing 0.25 --duration 3
```

Options:

- `output`: the WAV file to write.
- `--notes N [N ...]`: MIDI note numbers to play (default `60`).
- `--velocity V`: note-on velocity, 0–127 (default `100`).
- `--spacing SECONDS`: time between successive note starts (default `0`).
- `--duration SECONDS`: length of the rendering (default `2`).
- `--stop SECONDS`: when to send note-offs; without it the notes ring on.
- `--sample-rate HZ`: default `44100`.
- `--block-size N`: samples per processing block (default `512`).
- `--seed N`: seed for the noise source, for repeatable output.
- `--set NAME=VALUE`: set a parameter (see the table below). It may be given
  more than once. `source` accepts a choice name such as `Noise` or its index.

Events take effect at the start of the block they fall in, so their timing is
rounded to the block size.

## Library use

```python
from pluckysynth.synth import KarplusSynth, NoteOn, NoteOff

synth = KarplusSynth()
synth.parameters["source"] = "Noise"
synth.parameters["decay"] = 0.99
synth.prepare(44100, 512)
left, right = synth.render([(0, NoteOn(60, 100)), (44100, NoteOff(60))], 88200)
```

Modules:

- `pluckysynth.synth`: `KarplusSynth` plays `NoteOn` and `NoteOff` events.
  Call `prepare(sample_rate, block_size)` first. Then use either
  `process_block(num_samples, events)` one block at a time, or
  `render(events, num_samples)` with `(sample_time, event)` pairs. Both return
  lists of left and right samples. A `NoteOn` with velocity 0 acts as a note-off.
- `pluckysynth.voice`: `KarplusVoice`, a single string, with `start_note`,
  `stop_note` and `render_next_sample`. Also holds the `Exciter` enumeration
  and `midi_note_to_hertz`.
- `pluckysynth.parameters`: `create_parameter_layout()` returns the
  `FloatParameter` and `ChoiceParameter` definitions. A `ParameterSet` holds
  their current values, keyed by id. Assigned values are snapped to the
  parameter's step and range.
- `pluckysynth.filters`: Butterworth `low_pass` and `high_pass` coefficient
  designs (`BiquadCoefficients`), and the `Biquad` filter.
- `pluckysynth.reverb`: a Freeverb-style stereo `Reverb` configured with
  `ReverbParameters`. The synth changes only its room size; the wet level,
  dry level, damping and width keep their defaults.
- `pluckysynth.cli`: `write_wav(path, left, right, sample_rate)` and the
  command's `main`.

### Parameters

| Name              | Range                             | Default  | Meaning                              |
|-------------------|-----------------------------------|----------|--------------------------------------|
| `gain`            | 0 – 1                             | 0.5      | output level                         |
| `source`          | Sinusoid, Sawtooth, Square, Noise | Sinusoid | excitation source                    |
| `decay`           | 0.80 – 1.0                        | 0.97     | feedback amount in the string        |
| `width`           | 0.001 – 0.020 s                   | 0.005    | length of the excitation burst       |
| `filterCutoff`    | 20 – 20000 Hz                     | 2000     | feedback low-pass cutoff (harmonics) |
| `lowFilterCutoff` | 20 – 500 Hz                       | 20       | output high-pass cutoff (low cut)    |
| `tremoloRate`     | 0.1 – 20 Hz                       | 2.0      | tremolo speed                        |
| `tremoloDepth`    | 0 – 1                             | 0.0      | tremolo depth                        |
| `reverbSize`      | 0 – 1                             | 0.5      | reverb room size                     |
| `reverbMix`       | 0 – 1                             | 0.5      | reverb wet/dry balance               |

Filter cutoffs must stay below half the sample rate. Otherwise the filter
design raises `ValueError`.

The synth has 16 voices by default. A note-on takes the first idle voice, and
it is dropped when every voice is busy. Any note-off silences all voices at
once. There is no release phase.

## What it does not do

pluckysynth renders audio offline into lists of samples or a WAV file. It has
no graphical interface or on-screen keyboard. It does not play sound through
an audio device. It does not read live MIDI input or MIDI files. It does not
save or load parameter presets.