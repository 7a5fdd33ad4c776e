"""Signal synthesis helpers: noise sources, the LF glottal model and IIR filtering."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

import numpy as np

_NOISE_TAPS = 64


@dataclass
class LFState:
    """Parameters of one Liljencrants-Fant glottal pulse.

    ``te``, ``tp`` and ``ta`` are relative to ``tc``; ``alpha`` and ``eps``
    are the growth and decay constants solved by :func:`lf_eps_alpha`.
    """

    t0: float = 0.0
    tc: float = 0.0
    rd: float = 0.0
    te: float = 0.0
    tp: float = 0.0
    ta: float = 0.0
    alpha: float = 0.0
    eps: float = 0.0


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _fzero(f: Callable[[float], float], df: Callable[[float], float], x0: float) -> float:
    """Newton iteration for a root of ``f`` starting from ``x0``."""
    tol = 1e-7
    eps = 1e-13
    for _ in range(50):
        y = f(x0)
        dy = df(x0)
        if abs(dy) < eps:
            return x0
        x1 = x0 - y / dy
        if abs(x1 - x0) <= tol:
            return x1
        x0 = x1
    return x0


def lf_rd_to_te_tp_ta(state: LFState) -> LFState:
    """Derive the relative timing parameters of the LF model from ``state.rd``."""
    rd = state.rd
    rap = (-1.0 + 4.8 * rd) / 100.0
    rkp = (22.4 + 11.8 * rd) / 100.0
    rgp = 1.0 / (4.0 * ((0.11 * rd / (0.5 + 1.2 * rkp)) - rap) / rkp)

    tp = 1.0 / (2.0 * rgp)
    state.tp = tp
    state.te = tp * (rkp + 1.0)
    state.ta = rap
    return state


def lf_eps_alpha(state: LFState) -> LFState:
    """Solve the implicit LF equations for ``eps`` and ``alpha``."""
    t0 = state.t0
    tc = state.tc
    te = state.te * tc
    tp = state.tp * tc
    ta = state.ta * tc
    wg = math.pi / tp

    def fb(e: float) -> float:
        return 1.0 - _exp(-e * (tc - te)) - e * ta

    def dfb(e: float) -> float:
        return (t0 - te) * _exp(-e * (tc - te)) - ta

    e = _fzero(fb, dfb, 1.0 / (ta + 1e-13))

    area = (1.0 - _exp(-e * (tc - te))) / (e * e * ta) - (tc - te) * _exp(-e * (tc - te)) / (e * ta)
    sin_wte = math.sin(wg * te)
    cos_wte = math.cos(wg * te)

    def fa(a: float) -> float:
        return (a * a + wg * wg) * sin_wte * area + wg * _exp(-a * te) + a * sin_wte - wg * cos_wte

    def dfa(a: float) -> float:
        return (2.0 * area * a + 1.0) * sin_wte - wg * te * _exp(-a * te)

    state.eps = e
    state.alpha = _fzero(fa, dfa, 4.42)
    return state


def lf_gen_frame(f0: float, fs: float, rd: float, tc: float) -> np.ndarray:
    """Generate one period of the LF glottal flow derivative, peak-normalised."""
    ee = 1.0
    state = LFState(rd=rd, t0=1.0 / f0)
    state.tc = tc * state.t0
    lf_rd_to_te_tp_ta(state)
    lf_eps_alpha(state)

    period = int(math.floor(fs / f0 + 0.5))

    t0 = state.t0
    t_c = state.tc
    te = state.te * t_c
    tp = state.tp * t_c
    ta = state.ta * t_c
    a = state.alpha
    e = state.eps

    glot = np.zeros(period)
    pos_max = 1e-10
    for i in range(period):
        t = (i * t0) / period
        if t <= te:
            value = (-ee * _exp(a * (t - te)) * math.sin(math.pi * t / tp)) / math.sin(math.pi * te / tp)
        elif t <= t_c:
            value = -ee / (e * ta) * (_exp(-e * (t - te)) - _exp(-e * (t_c - te)))
        else:
            value = 0.0
        glot[i] = value
        pos_max = max(pos_max, value)

    return glot / pos_max


def polynomial_from_roots(roots: Iterable[complex]) -> list[float]:
    """Return the real parts of the monic polynomial with the given roots."""
    poly: list[complex] = [1.0 + 0j]
    for root in roots:
        z = complex(root)
        poly = [p - z * q for p, q in zip(poly + [0j], [0j] + poly)]
    return [c.real for c in poly]


def lfilter(
    b: Sequence[float],
    a: Sequence[float],
    x: Iterable[float],
    zi: Optional[Sequence[float]] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Filter ``x`` with the rational transfer function ``b / a``.

    Returns the output and the final filter state, which has
    ``max(len(a), len(b)) - 1`` entries. ``zi`` is the initial state; it is
    zero-padded or truncated to that length.
    """
    b_arr = np.asarray(b, dtype=float).ravel()
    a_arr = np.asarray(a, dtype=float).ravel()
    if a_arr.size == 0 or b_arr.size == 0:
        raise ValueError("filter coefficients must not be empty")
    if a_arr[0] == 0.0:
        raise ValueError("the first denominator coefficient must be nonzero")

    order = max(a_arr.size, b_arr.size)
    bp = np.zeros(order)
    ap = np.zeros(order)
    bp[: b_arr.size] = b_arr
    ap[: a_arr.size] = a_arr
    bp /= a_arr[0]
    ap /= a_arr[0]

    xs = np.asarray(list(x) if not isinstance(x, np.ndarray) else x, dtype=float).ravel()
    y = np.zeros(xs.size)
    state_len = order - 1
    zf = np.zeros(state_len)
    if zi is not None:
        initial = np.asarray(zi, dtype=float).ravel()
        n = min(state_len, initial.size)
        zf[:n] = initial[:n]

    # A zero-order filter has no state to run through and leaves the output silent.
    if state_len == 0:
        return y, zf

    b_tail = bp[1:]
    a_tail = ap[1:]
    for n, xn in enumerate(xs):
        yn = zf[0] + bp[0] * xn
        y[n] = yn
        update = b_tail * xn - a_tail * yn
        zf[:-1] = zf[1:] + update[:-1]
        zf[-1] = update[-1]

    return y, zf


def sos_filter(
    sos: Iterable[Sequence[float]],
    x: Iterable[float],
    zi: Optional[Sequence[Optional[Sequence[float]]]] = None,
) -> tuple[np.ndarray, list[np.ndarray]]:
    """Run ``x`` through a cascade of second-order sections.

    Each section is ``(b0, b1, b2, a0, a1, a2)``. Returns the output and the
    final state of every section.
    """
    sections = [tuple(float(c) for c in section) for section in sos]
    for section in sections:
        if len(section) != 6:
            raise ValueError("each second-order section needs six coefficients")
    if zi is None:
        initial: list = [None] * len(sections)
    else:
        initial = list(zi)
        if len(initial) < len(sections):
            raise ValueError("one initial state is needed per section")

    y = np.asarray(list(x) if not isinstance(x, np.ndarray) else x, dtype=float).ravel().copy()
    states: list[np.ndarray] = []
    for section, state in zip(sections, initial):
        y, zf = lfilter(section[:3], section[3:], y, state)
        states.append(zf)
    return y, states


def _fractional_taps(shift: float) -> np.ndarray:
    taps = np.empty(_NOISE_TAPS)
    taps[0] = 1.0
    for k in range(1, _NOISE_TAPS):
        taps[k] = (k - shift) * taps[k - 1] / k
    return taps


_BROWN_TAPS = _fractional_taps(2.0)
_PINK_TAPS = _fractional_taps(1.5)
_ASPIRATE_TAPS = _fractional_taps(1.0 + 1.5 / 2.0)


class NoiseSource:
    """Generator of white and coloured noise with persistent filter state."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._states: dict[str, np.ndarray] = {}

    def white(self, length: int) -> np.ndarray:
        """Uniform white noise in [-1, 1)."""
        if length < 0:
            raise ValueError("noise length must not be negative")
        return self._rng.uniform(-1.0, 1.0, int(length))

    def _coloured(self, name: str, taps: np.ndarray, length: int) -> np.ndarray:
        y, self._states[name] = lfilter(taps, (1.0,), self.white(length), self._states.get(name))
        return y

    def brown(self, length: int) -> np.ndarray:
        """Brown-coloured noise; successive calls continue the same stream."""
        return self._coloured("brown", _BROWN_TAPS, length)

    def pink(self, length: int) -> np.ndarray:
        """Pink noise; successive calls continue the same stream."""
        return self._coloured("pink", _PINK_TAPS, length)

    def aspirate(self, length: int) -> np.ndarray:
        """Aspiration noise; successive calls continue the same stream."""
        return self._coloured("aspirate", _ASPIRATE_TAPS, length)


_default_source = NoiseSource()


def white_noise(length: int) -> np.ndarray:
    """White noise from the shared noise source."""
    return _default_source.white(length)


def brown_noise(length: int) -> np.ndarray:
    """Brown noise from the shared noise source."""
    return _default_source.brown(length)


def pink_noise(length: int) -> np.ndarray:
    """Pink noise from the shared noise source."""
    return _default_source.pink(length)


def aspirate_noise(length: int) -> np.ndarray:
    """Aspiration noise from the shared noise source."""
    return _default_source.aspirate(length)