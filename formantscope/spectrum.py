"""Spectrum and linear-prediction nodes."""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from .node import Node
from .nodeio import AudioSpec, AudioTime, IIRFilter, NodeIO, NodeIOType

_LINPRED_NFFT = 1024
_LINPRED_WINDOW_ALPHA = 0.2


def halfcomplex_fft(data: Sequence[float]) -> np.ndarray:
    """Real FFT in half-complex order.

    The result holds ``r0, r1, ..., r(n/2), i((n+1)/2 - 1), ..., i1``:
    the real parts first, then the imaginary parts in reverse.
    """
    x = np.asarray(data, dtype=float).ravel()
    n = x.size
    out = np.empty(n)
    if n == 0:
        return out
    spectrum = np.fft.rfft(x)
    out[: n // 2 + 1] = spectrum.real
    k = np.arange(1, (n + 1) // 2)
    out[n - k] = spectrum.imag[k]
    return out


def gaussian_window(length: int, alpha: float) -> np.ndarray:
    """Confined Gaussian window of ``length`` points with width ``alpha``."""
    if length < 0:
        raise ValueError("window length must not be negative")
    if length == 0:
        return np.zeros(0)
    size = length
    centre = (size - 1) / 2.0

    def g(x):
        k = (x - centre) / (2.0 * size * alpha)
        return np.exp(-(k * k))

    n = np.arange(size, dtype=float)
    g_mh = g(-0.5)
    denom = g(-0.5 + size) - g(-0.5 - size)
    return g(n) - (g_mh * (g(n + size) + g(n - size))) / denom


class _LinpredSolver(Protocol):
    def solve(self, data: np.ndarray, order: int) -> tuple[Sequence[float], float]:
        """Return the prediction coefficients (without the leading 1) and the gain."""


class Spectrum(Node):
    """Power spectrum of a Hann-windowed frame, normalised by a slowly decaying peak."""

    def __init__(self, nfft: int) -> None:
        super().__init__([NodeIOType.AUDIO_TIME], [NodeIOType.AUDIO_SPEC])
        if nfft <= 0:
            raise ValueError("FFT length must be positive")
        self.nfft = nfft
        self._hold_max = 1.0

    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        source = self._expect(inputs[0], AudioTime)
        out = self._expect(outputs[0], AudioSpec)

        samples = source.data
        in_length = samples.size
        nfft = self.nfft
        frame = np.zeros(nfft)

        with np.errstate(divide="ignore", invalid="ignore"):
            if in_length <= nfft:
                j = np.arange(in_length)
                window = 0.5 - 0.5 * np.cos((2.0 * np.pi * j) / (in_length - 1))
                start = nfft // 2 - in_length // 2
                frame[start:start + in_length] = samples * window
            else:
                j = np.arange(nfft)
                window = 0.5 - 0.5 * np.cos((2.0 * np.pi * j) / (nfft - 1))
                start = in_length // 2 - nfft // 2
                frame[:] = samples[start:start + nfft] * window

        hc = halfcomplex_fft(frame)
        out_length = nfft // 2 + 1
        i = np.arange(out_length)
        spec = hc[i] ** 2 + hc[nfft - 1 - i] ** 2

        peak = max(1.0, float(spec.max()))
        peak = max(0.995 * self._hold_max + 0.005 * peak, peak)
        self._hold_max = peak

        out.sample_rate = source.sample_rate
        out.set_length(out_length)
        out.data[:] = spec / peak


class LinPred(Node):
    """Linear-prediction analysis producing an all-pole filter and its smoothed response."""

    def __init__(self, solver: _LinpredSolver, order: int) -> None:
        super().__init__([NodeIOType.AUDIO_TIME], [NodeIOType.IIR_FILTER, NodeIOType.AUDIO_SPEC])
        self.solver = solver
        self.order = order
        self._last_spec = np.zeros(_LINPRED_NFFT // 2 + 1)
        self._window = np.zeros(0)

    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        source = self._expect(inputs[0], AudioTime)
        filt = self._expect(outputs[0], IIRFilter)
        spec_out = self._expect(outputs[1], AudioSpec)

        sample_rate = source.sample_rate
        if self._window.size != source.length:
            self._window = gaussian_window(source.length, _LINPRED_WINDOW_ALPHA)

        lpc, gain = self.solver.solve(source.data * self._window, self.order)
        coeffs = np.asarray(lpc, dtype=float).ravel()
        nfft = _LINPRED_NFFT
        if coeffs.size + 1 > nfft:
            raise ValueError(f"prediction order {coeffs.size} too large for a {nfft}-point response")

        filt.sample_rate = sample_rate
        filt.set_ff_order(1)
        filt.ff[0] = gain
        filt.set_fb_order(coeffs.size)
        filt.fb[:] = coeffs

        frame = np.zeros(nfft)
        frame[0] = 1.0
        frame[1:1 + coeffs.size] = coeffs
        hc = halfcomplex_fft(frame)

        out_length = nfft // 2 + 1
        i = np.arange(out_length)
        with np.errstate(divide="ignore", invalid="ignore"):
            response = filt.ff[0] / (hc[i] ** 2 + hc[nfft - 1 - i] ** 2)
            above = response[response > 1e-10]
            peak = float(above.max()) if above.size else 1e-10
            self._last_spec = 0.2 * self._last_spec + 0.8 * response / peak

        spec_out.sample_rate = sample_rate
        spec_out.set_length(out_length)
        spec_out.data[:] = self._last_spec