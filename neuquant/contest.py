# neuquant/contest.py
from __future__ import annotations

"""
Neighbour/contest engine.

Exports:
  special_find(state, r, g, b) -> int
  contest(state, r, g, b) -> int
  alter_single(state, alpha, i, r, g, b) -> None
  alter_neighbours(state, alpha, rad, i, r, g, b) -> None

Notes:
  - Distances are L1 in RGB.
  - The contest winner is chosen on dist - bias; the frequency reward goes to
    the plain nearest neuron. For frequently chosen neurons freq[i] is high
    and bias[i] is negative: bias[i] ~ GAMMA * (1/NET_SIZE - freq[i]).
  - Arithmetic is elementwise float64 in the same operation order per neuron,
    so results do not depend on vectorisation.
"""

import numpy as np

from .constants import BETA, BETA_GAMMA, NET_SIZE, SPECIAL_MATCH_TOLERANCE, SPECIALS
from .network import NetworkState


def special_find(state: NetworkState, r: float, g: float, b: float) -> int:
    """Index of the reserved neuron equal to (r, g, b), or -1."""
    net = state.network
    for i in range(SPECIALS):
        if (
            abs(float(net[i, 0]) - r) < SPECIAL_MATCH_TOLERANCE
            and abs(float(net[i, 1]) - g) < SPECIAL_MATCH_TOLERANCE
            and abs(float(net[i, 2]) - b) < SPECIAL_MATCH_TOLERANCE
        ):
            return i
    return -1


def contest(state: NetworkState, r: float, g: float, b: float) -> int:
    """
    Run one competitive round over the learning neurons.

    Every learning neuron leaks BETA of its frequency and gains bias in
    proportion; the nearest neuron is then rewarded. Returns the index of the
    neuron with minimum bias-corrected distance.
    """
    learners = state.network[SPECIALS:]
    diff = learners - np.array([r, g, b], dtype=np.float64)
    dist = np.abs(diff[:, 0]) + np.abs(diff[:, 1]) + np.abs(diff[:, 2])

    best_pos = SPECIALS + int(np.argmin(dist))
    best_bias_pos = SPECIALS + int(np.argmin(dist - state.bias[SPECIALS:]))

    freq = state.freq[SPECIALS:]
    freq -= BETA * freq
    state.bias[SPECIALS:] += BETA_GAMMA * freq

    state.freq[best_pos] += BETA
    state.bias[best_pos] -= BETA_GAMMA
    return best_bias_pos


def alter_single(
    state: NetworkState, alpha: float, i: int, r: float, g: float, b: float
) -> None:
    """Move neuron i a fraction alpha of the way towards (r, g, b)."""
    p = state.network[i]
    p[0] -= alpha * (p[0] - r)
    p[1] -= alpha * (p[1] - g)
    p[2] -= alpha * (p[2] - b)


def alter_neighbours(
    state: NetworkState,
    alpha: float,
    rad: int,
    i: int,
    r: float,
    g: float,
    b: float,
) -> None:
    """
    Move the neurons within rad index positions of i towards (r, g, b).

    Strength falls off as alpha * (rad^2 - c^2) / rad^2, where c counts from 0
    at the immediate neighbours. Both directions share the same c per step.
    The window is exclusive at both ends; the low end is clamped to SPECIALS-1.
    """
    lo = i - rad
    hi = i + rad
    if lo < SPECIALS:
        lo = SPECIALS - 1
    if hi > NET_SIZE:
        hi = NET_SIZE

    rad_sq = rad * rad
    target = np.array([r, g, b], dtype=np.float64)
    net = state.network

    if i + 1 < hi:
        c = np.arange(hi - i - 1)
        a = (alpha * (rad_sq - c * c)) / float(rad_sq)
        up = net[i + 1 : hi]
        up -= a[:, None] * (up - target)

    if i - 1 > lo:
        c = np.arange(i - lo - 1)
        a = (alpha * (rad_sq - c * c)) / float(rad_sq)
        # rows i-1, i-2, ..., lo+1
        down = net[lo + 1 : i][::-1]
        down -= a[:, None] * (down - target)


__all__ = ["special_find", "contest", "alter_single", "alter_neighbours"]
