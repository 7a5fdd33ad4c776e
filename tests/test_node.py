import numpy as np
import pytest

from formantscope.node import Node, NodePassthru, Tail
from formantscope.nodeio import AudioTime, Frequencies, IIRFilter, NodeIOType, make_node_ios


def _audio(samples, sample_rate):
    io = AudioTime()
    io.sample_rate = sample_rate
    io.set_length(len(samples))
    io.data[:] = samples
    return io


class _Doubler(Node):
    def __init__(self):
        super().__init__([NodeIOType.AUDIO_TIME], [NodeIOType.AUDIO_TIME])

    def process(self, inputs, outputs):
        source = self._expect(inputs[0], AudioTime)
        out = self._expect(outputs[0], AudioTime)
        out.sample_rate = source.sample_rate
        out.set_length(source.length)
        out.data[:] = source.data * 2


def test_node_is_abstract():
    with pytest.raises(TypeError):
        Node([], [])


def test_tail_records_types():
    node = Tail(5)
    assert node.input_types == [NodeIOType.AUDIO_TIME]
    assert node.output_types == [NodeIOType.AUDIO_TIME]


def test_types_accept_plain_integers():
    class Mixed(_Doubler):
        def __init__(self):
            Node.__init__(self, [0, 3], [2])

    node = Mixed()
    assert node.input_types == [NodeIOType.AUDIO_TIME, NodeIOType.IIR_FILTER]
    assert node.output_types == [NodeIOType.FREQUENCIES]
    ios = make_node_ios(*node.input_types, *node.output_types)
    assert [type(io) for io in ios] == [AudioTime, IIRFilter, Frequencies]


def test_subclass_processes():
    out = AudioTime()
    _Doubler().process([_audio([1.0, 2.0], 100)], [out])
    assert out.data.tolist() == [2.0, 4.0]


def test_passthru_types():
    node = NodePassthru()
    assert node.input_types == [NodeIOType.AUDIO_TIME]
    assert node.output_types == [NodeIOType.AUDIO_TIME]


def test_passthru_copies_samples_and_rate():
    source = _audio([0.5, -0.25, 1.0], 16000)
    out = AudioTime()
    NodePassthru().process([source], [out])
    assert out.sample_rate == 16000
    assert out.data.tolist() == [0.5, -0.25, 1.0]


def test_passthru_output_is_independent():
    source = _audio([1.0, 2.0], 8000)
    out = AudioTime()
    NodePassthru().process([source], [out])
    source.data[0] = 99.0
    assert out.data[0] == 1.0


def test_passthru_rejects_wrong_input_type():
    with pytest.raises(TypeError):
        NodePassthru().process([Frequencies()], [AudioTime()])


def test_tail_keeps_last_samples():
    samples = np.arange(10, dtype=float)
    out = AudioTime()
    Tail(3).process([_audio(samples, 1000)], [out])
    assert out.sample_rate == 1000
    assert out.data.tolist() == samples[-3:].tolist()


def test_tail_duration_can_change():
    samples = np.arange(20, dtype=float)
    node = Tail(3)
    node.out_duration_ms = 5
    out = AudioTime()
    node.process([_audio(samples, 1000)], [out])
    assert out.data.tolist() == samples[-5:].tolist()


def test_tail_whole_input():
    samples = np.linspace(-1.0, 1.0, 8)
    out = AudioTime()
    Tail(1).process([_audio(samples, 8000)], [out])
    assert np.allclose(out.data, samples)


def test_tail_rejects_short_input():
    with pytest.raises(ValueError):
        Tail(10).process([_audio([1.0, 2.0], 1000)], [AudioTime()])