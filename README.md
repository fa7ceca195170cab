# tremolokit

A tremolo audio effect for Python. The package holds the signal processing
(a low-frequency oscillator that modulates the amplitude of the input), a
click-free bypass crossfade, a smooth switch between LFO waveforms, the
effect's parameters with JSON state, and a command that applies the effect
to WAV files.

## Installation

```
pip install tremolokit
```

For the test suite:

```
pip install "tremolokit[test]"
pytest
```

## Command line

The `tremolokit` command reads a mono or stereo PCM WAV file (8, 16, 24 or
32-bit), runs it through the tremolo block by block and writes the result as
a 16-bit WAV file:

```
tremolokit input.wav output.wav
tremolokit input.wav output.wav --rate 3 --waveform triangle
```

Options:

- `--rate` — modulation rate in Hz (default 5.0)
- `--waveform` — `sine` or `triangle` (default `sine`)
- `--bypass` — pass the audio through unchanged
- `--block-size` — frames per processed block (default 512)

It prints the number of frames processed, or an error and exits with status
1. The same work is available as `tremolokit.cli.process_file`, with
`read_wav` and `write_wav` beside it.

## Library

### The effect

`tremolokit.tremolo.Tremolo` modulates every channel of a buffer with one
LFO at a depth of 0.4. The default rate is 5 Hz and the default waveform is
`LfoWaveform.SINE`. Buffers are float numpy arrays of shape
`(channels, samples)` (a 1-D array is treated as one channel) and are
processed in place.

```python
import numpy as np
from tremolokit.tremolo import ApplySmoothing, LfoWaveform, Tremolo

tremolo = Tremolo()
tremolo.prepare(48000.0, 512)
tremolo.set_modulation_rate_hz(3.0, ApplySmoothing.NO)
tremolo.set_lfo_waveform(LfoWaveform.TRIANGLE, ApplySmoothing.YES)

buffer = np.ones((2, 512), dtype=np.float32)
tremolo.process(buffer)
lfo = tremolo.read_all_lfo_samples()  # LFO values generated since the last call
```

A waveform change takes effect at the next block; with smoothing it ramps
from the old LFO to the new one over 25 ms. A rate change with smoothing
ramps over 50 ms. `process_channelwise` computes the same result block-wise,
for at most four times the block size given to `prepare`.

### Parameters

`tremolokit.parameters.Parameters` holds:

- `rate` — a `FloatParameter` from 0.1 to 20 Hz in steps of 0.01, default 5
- `bypassed` — a `BoolParameter`, default off
- `waveform` — a `ChoiceParameter` with the choices `Sine` and `Triangle`

Set values are clamped to their range.

### The processor

`tremolokit.processor.PluginProcessor` combines the effect, its parameters
and a `tremolokit.bypass.BypassTransitionSmoother`, which crossfades between
the dry and the processed signal over 10 ms whenever bypass is switched.
When fully bypassed, blocks are left untouched.

```python
from tremolokit.processor import PluginProcessor

processor = PluginProcessor()
processor.prepare_to_play(48000.0, 512)
processor.parameters.bypassed.set(True)
processor.process_block(buffer)

state = processor.get_state_information()  # UTF-8 encoded JSON
processor.set_state_information(state)
```

`set_state_information` applies the restored settings at once, without
ramps; data that cannot be used is logged as a warning and ignored.
`PluginProcessor.is_buses_layout_supported` accepts mono or stereo output
with a matching input.

### State documents

`tremolokit.json_serializer.serialize` returns the parameters as an indented
JSON document holding `__version__` (1), `pluginName`, `modulationRateHz`
(rounded to two decimals), `bypassed` and `modulationWaveform`.
`deserialize` reads such a document (text or UTF-8 bytes) back into a
`Parameters`. It raises `DeserializationError` and changes nothing when the
document is not valid JSON, has another version or plugin name, lacks a
field, or names a waveform other than `Sine` or `Triangle`.

### Helpers for drawing the LFO

- `tremolokit.sample_fifo.SampleFifo` queues LFO samples for a reader,
  holding up to one second of them.
- `tremolokit.strided_queue.StridedQueue` keeps the most recent samples of a
  stream, taking every n-th one.
- `tremolokit.lfo_visualizer.LfoCurve` turns the LFO samples into the points
  of a curve, scrolling with zeros while bypassed, and gives the affine
  transform that maps it onto a drawing area.
- `tremolokit.look_and_feel` holds the colour palette, gradients, knob and
  combo-box geometry and toggle-button styles of the editor.
- `tremolokit.layout` holds a `Rectangle` type and the component bounds of
  the editor (`editor_layout`) and of a few small example windows.

### Prime search

`tremolokit.prime_search` finds the largest prime below a limit with
progress reports and cancellation; `PrimeSearchTask` runs the search on a
background thread.

## What the package does not do

There is no graphical interface and no audio-host plugin. The look and
layout modules only compute colours and geometry; nothing is drawn on
screen. Audio is processed from numpy arrays or WAV files, not from a live
audio device.