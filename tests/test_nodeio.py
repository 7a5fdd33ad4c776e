import numpy as np
import pytest

from formantscope.nodeio import (
    AudioSpec,
    AudioTime,
    Frequencies,
    IIRFilter,
    NodeIOType,
    make_node_io,
    make_node_ios,
)


@pytest.mark.parametrize(
    "io_type, cls",
    [
        (NodeIOType.AUDIO_TIME, AudioTime),
        (NodeIOType.AUDIO_SPEC, AudioSpec),
        (NodeIOType.FREQUENCIES, Frequencies),
        (NodeIOType.IIR_FILTER, IIRFilter),
    ],
)
def test_make_node_io_builds_matching_container(io_type, cls):
    io = make_node_io(io_type)
    assert type(io) is cls
    assert io.io_type == io_type


def test_make_node_io_accepts_plain_integers():
    io = make_node_io(2)
    assert io.io_type == NodeIOType.FREQUENCIES
    io.set_length(1)
    io[0] = 3.0
    assert list(io) == [3.0]


def test_make_node_io_rejects_unknown_type():
    with pytest.raises(ValueError):
        make_node_io(17)


def test_make_node_ios_keeps_order():
    ios = make_node_ios(NodeIOType.IIR_FILTER, NodeIOType.AUDIO_TIME, NodeIOType.IIR_FILTER)
    assert [type(io) for io in ios] == [IIRFilter, AudioTime, IIRFilter]
    assert ios[0] is not ios[2]


@pytest.mark.parametrize("cls", [AudioTime, AudioSpec])
def test_signal_defaults_are_empty(cls):
    io = cls()
    assert io.sample_rate == 0
    assert io.length == 0


@pytest.mark.parametrize("cls", [AudioTime, AudioSpec])
def test_signal_resize_keeps_prefix_and_pads(cls):
    io = cls()
    io.set_length(3)
    io.data[:] = [1.0, 2.0, 3.0]
    io.set_length(5)
    assert np.array_equal(io.data, [1.0, 2.0, 3.0, 0.0, 0.0])
    io.set_length(2)
    assert np.array_equal(io.data, [1.0, 2.0])
    assert io.length == 2


def test_signal_same_length_keeps_buffer():
    io = AudioTime()
    io.set_length(4)
    buffer = io.data
    io.set_length(4)
    assert io.data is buffer


@pytest.mark.parametrize("cls", [AudioTime, AudioSpec, Frequencies])
def test_negative_length_raises(cls):
    with pytest.raises(ValueError):
        cls().set_length(-1)


def test_frequencies_store_and_iterate():
    freqs = Frequencies()
    freqs.set_length(3)
    freqs[0] = 500
    freqs[1] = 1500.5
    assert len(freqs) == 3
    assert freqs[0] == 500.0
    assert list(freqs) == [500.0, 1500.5, 0.0]


def test_frequencies_shrink_drops_tail():
    freqs = Frequencies()
    freqs.set_length(2)
    freqs[1] = 300.0
    freqs.set_length(1)
    assert list(freqs) == [0.0]


@pytest.mark.parametrize("index", [2, -1])
def test_frequencies_out_of_range_raises(index):
    freqs = Frequencies()
    freqs.set_length(2)
    freqs[1] = 250.0
    with pytest.raises(IndexError):
        freqs[index]
    with pytest.raises(IndexError):
        freqs[index] = 1.0
    assert len(freqs) == 2
    assert list(freqs) == [0.0, 250.0]


def test_iir_filter_orders():
    filt = IIRFilter()
    assert filt.ff_order == 0 and filt.fb_order == 0
    filt.set_ff_order(1)
    filt.set_fb_order(4)
    assert filt.ff_order == 1
    assert filt.fb_order == 4
    assert len(filt.fb) == 4


def test_iir_filter_same_order_keeps_coefficients():
    filt = IIRFilter()
    filt.set_fb_order(2)
    filt.fb[:] = [0.25, -0.5]
    filt.set_fb_order(2)
    assert np.array_equal(filt.fb, [0.25, -0.5])


def test_iir_filter_negative_order_raises():
    with pytest.raises(ValueError):
        IIRFilter().set_ff_order(-3)