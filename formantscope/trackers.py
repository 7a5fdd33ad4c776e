"""Nodes that hand audio or filters to external analysis solvers."""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from .node import Node
from .nodeio import AudioSpec, AudioTime, Frequencies, IIRFilter, NodeIO, NodeIOType


class _FormantSolver(Protocol):
    def solve(self, lpc: np.ndarray, sample_rate: int):
        """Return an object whose ``formants`` items carry ``frequency`` and ``bandwidth``."""


class _PitchSolver(Protocol):
    def solve(self, data: np.ndarray, sample_rate: int):
        """Return an object with ``voiced`` and ``pitch``."""


class _InvglotSolver(Protocol):
    def solve(self, data: np.ndarray, sample_rate: int):
        """Return an object with ``glot_sig`` and ``sample_rate``."""


class FormantTracker(Node):
    """Estimates formant frequencies and bandwidths from an all-pole filter."""

    def __init__(self, solver: _FormantSolver) -> None:
        super().__init__(
            [NodeIOType.IIR_FILTER, NodeIOType.AUDIO_SPEC],
            [NodeIOType.FREQUENCIES, NodeIOType.FREQUENCIES],
        )
        self.solver = solver

    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        filt = self._expect(inputs[0], IIRFilter)
        if len(inputs) > 1:
            self._expect(inputs[1], AudioSpec)
        out_freqs = self._expect(outputs[0], Frequencies)
        out_bands = self._expect(outputs[1], Frequencies)

        result = self.solver.solve(filt.fb.copy(), filt.sample_rate)
        formants = list(result.formants)

        out_freqs.set_length(len(formants))
        out_bands.set_length(len(formants))
        for i, formant in enumerate(formants):
            out_freqs[i] = formant.frequency
            out_bands[i] = formant.bandwidth


class PitchTracker(Node):
    """Estimates the pitch of a frame; empty output when unvoiced."""

    def __init__(self, solver: _PitchSolver) -> None:
        super().__init__([NodeIOType.AUDIO_TIME], [NodeIOType.FREQUENCIES])
        self.solver = solver

    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        source = self._expect(inputs[0], AudioTime)
        out = self._expect(outputs[0], Frequencies)

        result = self.solver.solve(source.data.copy(), source.sample_rate)
        if result.voiced:
            out.set_length(1)
            out[0] = result.pitch
        else:
            out.set_length(0)


class InvGlot(Node):
    """Recovers the glottal source signal by inverse filtering."""

    def __init__(self, solver: _InvglotSolver) -> None:
        super().__init__([NodeIOType.AUDIO_TIME], [NodeIOType.AUDIO_TIME])
        self.solver = solver

    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        source = self._expect(inputs[0], AudioTime)
        out = self._expect(outputs[0], AudioTime)

        result = self.solver.solve(source.data.copy(), source.sample_rate)
        signal = np.asarray(result.glot_sig, dtype=float).ravel()

        out.sample_rate = result.sample_rate
        out.set_length(signal.size)
        out.data[:] = signal