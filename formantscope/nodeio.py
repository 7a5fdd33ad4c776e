"""Typed data containers passed between processing nodes."""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar, Iterator

import numpy as np


class NodeIOType(IntEnum):
    """Kinds of data a node can consume or produce."""

    AUDIO_TIME = 0
    AUDIO_SPEC = 1
    FREQUENCIES = 2
    IIR_FILTER = 3


def _resized(data: np.ndarray, length: int) -> np.ndarray:
    if length < 0:
        raise ValueError("length must not be negative")
    out = np.zeros(length)
    keep = min(length, data.size)
    out[:keep] = data[:keep]
    return out


class NodeIO:
    """Base class of all node inputs and outputs."""

    io_type: ClassVar[NodeIOType]


class AudioTime(NodeIO):
    """Audio samples in the time domain."""

    io_type = NodeIOType.AUDIO_TIME

    def __init__(self) -> None:
        self.sample_rate = 0
        self.data = np.zeros(0)

    @property
    def length(self) -> int:
        return int(self.data.size)

    def set_length(self, length: int) -> None:
        """Resize the sample buffer, keeping existing samples and zero-padding."""
        if length != self.data.size:
            self.data = _resized(self.data, length)


class AudioSpec(NodeIO):
    """Audio magnitudes in the frequency domain."""

    io_type = NodeIOType.AUDIO_SPEC

    def __init__(self) -> None:
        self.sample_rate = 0
        self.data = np.zeros(0)

    @property
    def length(self) -> int:
        return int(self.data.size)

    def set_length(self, length: int) -> None:
        """Resize the spectrum buffer, keeping existing bins and zero-padding."""
        if length != self.data.size:
            self.data = _resized(self.data, length)


class Frequencies(NodeIO):
    """A list of frequencies such as a pitch or formant estimates."""

    io_type = NodeIOType.FREQUENCIES

    def __init__(self) -> None:
        self._values: list[float] = []

    def set_length(self, length: int) -> None:
        """Resize the list, keeping existing values and zero-padding."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length < len(self._values):
            del self._values[length:]
        else:
            self._values.extend([0.0] * (length - len(self._values)))

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._values):
            raise IndexError(f"frequency index {index} out of range")
        return index

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> float:
        return self._values[self._check(index)]

    def __setitem__(self, index: int, frequency: float) -> None:
        self._values[self._check(index)] = float(frequency)

    def __iter__(self) -> Iterator[float]:
        return iter(list(self._values))


class IIRFilter(NodeIO):
    """An IIR filter given by feed-forward and feedback coefficients."""

    io_type = NodeIOType.IIR_FILTER

    def __init__(self) -> None:
        self.sample_rate = 0
        self.ff = np.zeros(0)
        self.fb = np.zeros(0)

    @property
    def ff_order(self) -> int:
        return int(self.ff.size)

    @property
    def fb_order(self) -> int:
        return int(self.fb.size)

    def set_ff_order(self, order: int) -> None:
        """Reallocate the feed-forward coefficients when the order changes."""
        if order < 0:
            raise ValueError("order must not be negative")
        if order != self.ff.size:
            self.ff = np.zeros(order)

    def set_fb_order(self, order: int) -> None:
        """Reallocate the feedback coefficients when the order changes."""
        if order < 0:
            raise ValueError("order must not be negative")
        if order != self.fb.size:
            self.fb = np.zeros(order)


_FACTORIES: dict[NodeIOType, type[NodeIO]] = {
    NodeIOType.AUDIO_TIME: AudioTime,
    NodeIOType.AUDIO_SPEC: AudioSpec,
    NodeIOType.FREQUENCIES: Frequencies,
    NodeIOType.IIR_FILTER: IIRFilter,
}


def make_node_io(io_type: NodeIOType | int) -> NodeIO:
    """Create an empty container of the given type."""
    try:
        kind = NodeIOType(io_type)
    except ValueError:
        raise ValueError(f"unrecognized node I/O type: {io_type!r}") from None
    return _FACTORIES[kind]()


def make_node_ios(*args: NodeIOType | int) -> list[NodeIO]:
    """Create one empty container for each type given, in order."""
    return [make_node_io(io_type) for io_type in args]