"""Renderer state shared by all back-ends: surface sizes, display parameters and axis mapping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import TypeVar

from .colormap import RGB, colormap_color

_T = TypeVar("_T")


class FrequencyScale(IntEnum):
    """How frequencies are laid out along the vertical axis."""

    LINEAR = 0
    LOGARITHMIC = 1
    MEL = 2


class RendererType(Enum):
    """Graphics back-ends a renderer can be built on."""

    OPENGL = "opengl"
    GLES = "gles"
    VULKAN = "vulkan"
    SDL2 = "sdl2"
    NANOVG = "nanovg"


@dataclass
class Parameters:
    """Display parameters: visible frequency range, gain range and frequency scale."""

    min_frequency: float = 60.0
    max_frequency: float = 8000.0
    min_gain: float = -60.0
    max_gain: float = 0.0
    frequency_scale: FrequencyScale = FrequencyScale.LINEAR


def clamp(value: _T, lo, hi) -> _T:
    """Limit ``value`` to the closed range ``[lo, hi]``."""
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def _forward(scale: FrequencyScale, frequency: float) -> float:
    if scale is FrequencyScale.LINEAR:
        return frequency
    if scale is FrequencyScale.LOGARITHMIC:
        return math.log10(10.0 + frequency)
    return 2595.0 * math.log10(1.0 + frequency / 700.0)


def _inverse(scale: FrequencyScale, value: float) -> float:
    if scale is FrequencyScale.LINEAR:
        return value
    if scale is FrequencyScale.LOGARITHMIC:
        return 10.0 ** value - 10.0
    return 700.0 * (10.0 ** (value / 2595.0) - 1.0)


def _range(scale: FrequencyScale, min_frequency: float, max_frequency: float) -> tuple[float, float]:
    lo = _forward(scale, min_frequency)
    hi = _forward(scale, max_frequency)
    if hi == lo:
        raise ValueError("the frequency range must not be empty")
    return lo, hi


@lru_cache(maxsize=65536)
def _to_coordinate(scale: FrequencyScale, min_frequency: float, max_frequency: float, frequency: float) -> float:
    lo, hi = _range(scale, min_frequency, max_frequency)
    return 2.0 * (_forward(scale, frequency) - lo) / (hi - lo) - 1.0


@lru_cache(maxsize=65536)
def _to_frequency(scale: FrequencyScale, min_frequency: float, max_frequency: float, y: float) -> float:
    lo, hi = _range(scale, min_frequency, max_frequency)
    return _inverse(scale, (y + 1.0) / 2.0 * (hi - lo) + lo)


class AbstractBase:
    """State common to every renderer back-end.

    Keeps the drawable and window sizes with change flags, owns the display
    :class:`Parameters`, and maps frequencies to normalised vertical
    coordinates in ``[-1, 1]`` and gains to colours.
    """

    def __init__(self, renderer_type: RendererType) -> None:
        self._type = RendererType(renderer_type)
        self._drawable_size = (1280, 720)
        self._drawable_size_changed = False
        self._window_size = (1280, 720)
        self._window_size_changed = False
        self._parameters = Parameters()

    @property
    def renderer_type(self) -> RendererType:
        return self._type

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    @property
    def drawable_size(self) -> tuple[int, int]:
        return self._drawable_size

    @property
    def window_size(self) -> tuple[int, int]:
        return self._window_size

    @property
    def drawable_size_changed(self) -> bool:
        return self._drawable_size_changed

    @property
    def window_size_changed(self) -> bool:
        return self._window_size_changed

    def set_drawable_size(self, width: int, height: int) -> None:
        """Record a new drawable size and flag it as changed."""
        self._drawable_size = (width, height)
        self._drawable_size_changed = True

    def set_window_size(self, width: int, height: int) -> None:
        """Record a new window size and flag it as changed."""
        self._window_size = (width, height)
        self._window_size_changed = True

    def reset_drawable_size_changed(self) -> None:
        self._drawable_size_changed = False

    def reset_window_size_changed(self) -> None:
        self._window_size_changed = False

    def frequency_to_coordinate(self, frequency: float) -> float:
        """Map a frequency to ``[-1, 1]``, where the range ends map to -1 and 1."""
        p = self._parameters
        return _to_coordinate(
            FrequencyScale(p.frequency_scale), float(p.min_frequency), float(p.max_frequency), float(frequency)
        )

    def coordinate_to_frequency(self, y: float) -> float:
        """Inverse of :meth:`frequency_to_coordinate`."""
        p = self._parameters
        return _to_frequency(
            FrequencyScale(p.frequency_scale), float(p.min_frequency), float(p.max_frequency), float(y)
        )

    def gain_to_color(self, gain: float) -> RGB:
        """Colour for a gain in dB, clamped to the configured gain range."""
        p = self._parameters
        span = p.max_gain - p.min_gain
        if span == 0:
            raise ValueError("the gain range must not be empty")
        return colormap_color(clamp((gain - p.min_gain) / span, 0.0, 1.0))