"""Processing node base classes and the simple time-domain nodes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Sequence, TypeVar

from .nodeio import AudioTime, NodeIO, NodeIOType

_IO = TypeVar("_IO", bound=NodeIO)


class Node(ABC):
    """A processing step that turns typed inputs into typed outputs."""

    def __init__(self, input_types: Iterable[NodeIOType | int], output_types: Iterable[NodeIOType | int]) -> None:
        self._input_types = tuple(NodeIOType(t) for t in input_types)
        self._output_types = tuple(NodeIOType(t) for t in output_types)

    @property
    def input_types(self) -> list[NodeIOType]:
        """Types of the inputs this node expects, in order."""
        return list(self._input_types)

    @property
    def output_types(self) -> list[NodeIOType]:
        """Types of the outputs this node fills, in order."""
        return list(self._output_types)

    @abstractmethod
    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        """Read ``inputs`` and write the results into ``outputs``."""

    @staticmethod
    def _expect(io: NodeIO, kind: type[_IO]) -> _IO:
        if not isinstance(io, kind):
            raise TypeError(f"expected {kind.__name__}, got {type(io).__name__}")
        return io


class NodePassthru(Node):
    """Copies time-domain audio unchanged."""

    def __init__(self) -> None:
        super().__init__([NodeIOType.AUDIO_TIME], [NodeIOType.AUDIO_TIME])

    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        source = self._expect(inputs[0], AudioTime)
        out = self._expect(outputs[0], AudioTime)
        out.sample_rate = source.sample_rate
        out.set_length(source.length)
        out.data[:] = source.data


class Tail(Node):
    """Keeps only the last ``out_duration_ms`` milliseconds of the input."""

    def __init__(self, out_duration_ms: int) -> None:
        super().__init__([NodeIOType.AUDIO_TIME], [NodeIOType.AUDIO_TIME])
        self.out_duration_ms = out_duration_ms

    def process(self, inputs: Sequence[NodeIO], outputs: Sequence[NodeIO]) -> None:
        source = self._expect(inputs[0], AudioTime)
        out = self._expect(outputs[0], AudioTime)

        sample_rate = source.sample_rate
        out_length = (sample_rate * self.out_duration_ms) // 1000
        if out_length < 0:
            raise ValueError("output duration must not be negative")
        if out_length > source.length:
            raise ValueError(
                f"input holds {source.length} samples, fewer than the {out_length} requested"
            )

        out.sample_rate = sample_rate
        out.set_length(out_length)
        if out_length:
            out.data[:] = source.data[source.length - out_length:]