import pytest

from formantscope.colormap import COLORMAP
from formantscope.renderer import (
    AbstractBase,
    FrequencyScale,
    Parameters,
    RendererType,
    clamp,
)


def make(scale=FrequencyScale.LINEAR, lo=100.0, hi=5000.0):
    base = AbstractBase(RendererType.NANOVG)
    base.parameters.frequency_scale = scale
    base.parameters.min_frequency = lo
    base.parameters.max_frequency = hi
    return base


def test_default_sizes_and_flags():
    base = AbstractBase(RendererType.OPENGL)
    assert base.window_size == (1280, 720)
    assert base.drawable_size == (1280, 720)
    assert base.window_size_changed is False
    assert base.drawable_size_changed is False
    assert base.renderer_type is RendererType.OPENGL


def test_window_size_change_flag():
    base = AbstractBase(RendererType.GLES)
    base.set_window_size(640, 480)
    assert base.window_size == (640, 480)
    assert base.window_size_changed is True
    base.reset_window_size_changed()
    assert base.window_size_changed is False


def test_drawable_size_change_flag():
    base = AbstractBase(RendererType.VULKAN)
    base.set_drawable_size(2560, 1440)
    assert base.drawable_size == (2560, 1440)
    assert base.drawable_size_changed is True
    base.reset_drawable_size_changed()
    assert base.drawable_size_changed is False
    assert base.window_size_changed is False


@pytest.mark.parametrize("scale", list(FrequencyScale))
def test_range_ends_map_to_unit_edges(scale):
    base = make(scale)
    assert base.frequency_to_coordinate(100.0) == pytest.approx(-1.0)
    assert base.frequency_to_coordinate(5000.0) == pytest.approx(1.0)


@pytest.mark.parametrize("scale", list(FrequencyScale))
@pytest.mark.parametrize("frequency", [150.0, 440.0, 1234.5, 4000.0])
def test_coordinate_round_trip(scale, frequency):
    base = make(scale)
    y = base.frequency_to_coordinate(frequency)
    assert base.coordinate_to_frequency(y) == pytest.approx(frequency, rel=1e-9)


@pytest.mark.parametrize("scale", list(FrequencyScale))
def test_mapping_is_increasing(scale):
    base = make(scale)
    ys = [base.frequency_to_coordinate(f) for f in (200.0, 800.0, 2000.0, 4500.0)]
    assert ys == sorted(ys)
    assert len(set(ys)) == 4


def test_linear_midpoint():
    base = make(FrequencyScale.LINEAR, 0.0, 1000.0)
    assert base.frequency_to_coordinate(500.0) == pytest.approx(0.0)
    assert base.coordinate_to_frequency(0.0) == pytest.approx(500.0)


def test_mapping_follows_parameter_changes():
    base = make(FrequencyScale.LINEAR, 0.0, 1000.0)
    first = base.frequency_to_coordinate(1000.0)
    base.parameters.max_frequency = 2000.0
    second = base.frequency_to_coordinate(1000.0)
    assert first == pytest.approx(1.0)
    assert second == pytest.approx(0.0)


def test_empty_frequency_range_raises():
    base = make(FrequencyScale.MEL, 300.0, 300.0)
    with pytest.raises(ValueError):
        base.frequency_to_coordinate(300.0)


def test_gain_to_color_ends_and_clamping():
    base = AbstractBase(RendererType.NANOVG)
    base.parameters.min_gain = -80.0
    base.parameters.max_gain = 0.0
    assert base.gain_to_color(-80.0) == pytest.approx(COLORMAP[0])
    assert base.gain_to_color(0.0) == pytest.approx(COLORMAP[-1])
    assert base.gain_to_color(-500.0) == pytest.approx(COLORMAP[0])
    assert base.gain_to_color(50.0) == pytest.approx(COLORMAP[-1])


def test_gain_to_color_empty_range_raises():
    base = AbstractBase(RendererType.SDL2)
    base.parameters.min_gain = -10.0
    base.parameters.max_gain = -10.0
    with pytest.raises(ValueError):
        base.gain_to_color(-5.0)


def test_parameters_hold_assigned_values():
    params = Parameters(min_frequency=50.0, max_frequency=6000.0, frequency_scale=FrequencyScale.MEL)
    assert params.frequency_scale is FrequencyScale.MEL
    assert (params.min_frequency, params.max_frequency) == (50.0, 6000.0)


@pytest.mark.parametrize(
    "value, lo, hi, frequency",
    [
        (0, 0.0, 1000.0, 500.0),
        (1, 0.0, 990.0, 90.0),
        (2, 0.0, 2100.0, 700.0),
    ],
)
def test_scale_by_numeric_value_maps_to_midpoint(value, lo, hi, frequency):
    base = make(FrequencyScale(value), lo, hi)
    assert base.frequency_to_coordinate(frequency) == pytest.approx(0.0, abs=1e-6)


@pytest.mark.parametrize(
    "value, expected",
    [(-3, 0), (5, 5), (12, 10), (0, 0), (10, 10)],
)
def test_clamp(value, expected):
    assert clamp(value, 0, 10) == expected