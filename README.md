# formantscope

Building blocks for live speech analysis: glottal-source and noise synthesis,
IIR filtering, a small set of processing nodes (spectrum, linear prediction,
and wrappers for pitch tracking, formant tracking and inverse glottal
filtering), and the frequency-axis and colour mapping used to draw
spectrograms.

## Installation

```
pip install .
```

Only `numpy` is needed at run time. Install the `test` extra to run the tests:

```
pip install ".[test]"
pytest
```

## Synthesis (`formantscope.synthesis`)

```python
from formantscope.synthesis import (
    NoiseSource, lf_gen_frame, lfilter, sos_filter, polynomial_from_roots,
)

# One period of the Liljencrants-Fant glottal flow derivative, peak normalised.
frame = lf_gen_frame(f0=120.0, fs=16000.0, rd=1.0, tc=1.0)

# Coloured noise with a reproducible seed; each colour keeps its own filter
# state, so successive calls continue the same stream.
noise = NoiseSource(seed=1)
white = noise.white(1024)      # uniform in [-1, 1)
pink = noise.pink(1024)
brown = noise.brown(1024)
breath = noise.aspirate(1024)

# Transposed direct-form filtering; returns the output and the final state.
y, zf = lfilter([1.0], [1.0, -0.9], [1.0, 0.0, 0.0], None)

# A cascade of second-order sections (b0, b1, b2, a0, a1, a2) per row.
y, states = sos_filter([(1.0, 0.0, 0.0, 1.0, -0.5, 0.0)], [1.0, 0.0, 0.0])

# Real parts of the monic polynomial with the given roots.
poly = polynomial_from_roots([0.5, -0.5])   # [1.0, 0.0, -0.25]
```

`lfilter` raises `ValueError` for empty coefficient lists or a zero leading
denominator coefficient. When both `b` and `a` hold a single coefficient the
filter has no state and its output is all zeros.

The LF model steps are also available separately: `LFState` holds the
parameters, `lf_rd_to_te_tp_ta` derives the timing from `rd`, and
`lf_eps_alpha` solves for the decay and growth constants.

The module-level `white_noise`, `pink_noise`, `brown_noise` and
`aspirate_noise` functions draw from one shared, unseeded `NoiseSource`.

## Node data (`formantscope.nodeio`)

`NodeIOType` names the four kinds of data nodes exchange. `make_node_io` makes
one empty container of a type and `make_node_ios` one per type given:

- `AudioTime` and `AudioSpec`: `sample_rate`, a numpy `data` array, `length`,
  and `set_length`, which keeps existing values and zero-pads.
- `Frequencies`: a resizable list of floats with `len`, indexing and
  iteration; out-of-range indices raise `IndexError`.
- `IIRFilter`: `sample_rate`, feed-forward `ff` and feedback `fb` arrays,
  resized with `set_ff_order` and `set_fb_order`.

## Nodes

Every node subclasses `formantscope.node.Node`, exposes `input_types` and
`output_types`, and fills its outputs in `process(inputs, outputs)`. Passing a
container of the wrong type raises `TypeError`.

```python
from formantscope.nodeio import NodeIOType, make_node_ios
from formantscope.node import Tail

inputs = make_node_ios(NodeIOType.AUDIO_TIME)
outputs = make_node_ios(NodeIOType.AUDIO_TIME)
inputs[0].sample_rate = 16000
inputs[0].set_length(16000)

tail = Tail(out_duration_ms=50)
tail.process(inputs, outputs)   # outputs[0] holds the last 800 samples
```

- `node.NodePassthru` copies time-domain audio unchanged.
- `node.Tail` keeps the last `out_duration_ms` milliseconds; it raises
  `ValueError` if the input is shorter than that.
- `spectrum.Spectrum(nfft)` produces the power spectrum of a Hann-windowed
  frame, normalised by a slowly decaying peak.
- `spectrum.LinPred(solver, order)` windows the frame with
  `gaussian_window`, calls `solver.solve(data, order)`, which must return the
  prediction coefficients and the gain, and writes an `IIRFilter` plus the
  smoothed, normalised filter response over 513 bins.
- `trackers.PitchTracker`, `trackers.FormantTracker` and `trackers.InvGlot`
  pass their input to `solver.solve(data, sample_rate)`. The result must have
  `voiced` and `pitch`; `formants` whose items carry `frequency` and
  `bandwidth`; or `glot_sig` and `sample_rate`, respectively.

`spectrum.halfcomplex_fft` returns a real FFT in half-complex order (real
parts, then imaginary parts in reverse).

## Rendering helpers

`formantscope.renderer.AbstractBase` holds drawable and window sizes with
change flags and the display `Parameters` (frequency range, gain range and
`FrequencyScale`: `LINEAR`, `LOGARITHMIC` or `MEL`). `frequency_to_coordinate`
maps a frequency to `[-1, 1]` and `coordinate_to_frequency` maps back.
`gain_to_color` clamps a gain in dB to the configured range and returns an RGB
tuple from `formantscope.colormap.colormap_color`, which interpolates the
perceptually uniform `COLORMAP`.

## What this package does not do

- It does not capture or play audio and has no command-line program.
- It does not draw anything: `AbstractBase` provides state and mapping only,
  with no graphics back-end behind `RendererType`.
- It contains no linear-prediction, pitch, formant or inverse-filtering
  algorithms; the nodes that need them call a solver object you supply.