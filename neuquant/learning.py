# neuquant/learning.py
from __future__ import annotations

"""
Training scheduler.

Exports:
  choose_step(length) -> int
  calc_radius(bias_radius) -> int
  build_schedule(length, sample_factor) -> LearningSchedule
  learn(state, pixels, sample_factor, *, debug=False, progress=False) -> TrainingReport

Notes:
  - Pixels are visited with a fixed prime stride modulo the pixel count, so the
    traversal is deterministic and never materialises a permutation.
  - alpha and the biased radius are integers decayed once per cycle of `delta`
    visits. Neighbourhood updates stop once the radius drops to 1 or below.
"""

import time
from dataclasses import dataclass
from typing import List, Sequence

from .constants import (
    ALPHA_DEC_BASE,
    BG_COLOUR,
    INIT_ALPHA,
    INIT_BIAS_RADIUS,
    NUM_CYCLES,
    PRIMES,
    RADIUS_BIAS_SHIFT,
    RADIUS_DEC,
    SPECIALS,
)
from .contest import alter_neighbours, alter_single, contest, special_find
from .core_types import TrainingReport, unpack_rgb
from .errors import check_pixel_count, check_sample_factor
from .network import NetworkState
from .utils import (
    debug_log,
    format_eta,
    key_value_pairs_to_string,
    print_progress_line,
)


@dataclass(frozen=True)
class LearningSchedule:
    """Derived sampling and decay parameters for one run."""

    length: int
    sample_factor: int
    sample_pixels: int
    delta: int
    alpha_dec: int
    step: int


def choose_step(length: int) -> int:
    """First of PRIMES that does not divide length (last prime as fallback)."""
    for prime in PRIMES[:-1]:
        if length % prime != 0:
            return prime
    return PRIMES[-1]


def calc_radius(bias_radius: int) -> int:
    """Unbias the radius; 1 or less disables neighbourhood updates."""
    rad = bias_radius >> RADIUS_BIAS_SHIFT
    return 0 if rad <= 1 else rad


def build_schedule(length: int, sample_factor: int) -> LearningSchedule:
    """Validate inputs and derive the run's sampling schedule."""
    sample_factor = check_sample_factor(sample_factor)
    length = check_pixel_count(length)
    sample_pixels = length // sample_factor
    return LearningSchedule(
        length=length,
        sample_factor=sample_factor,
        sample_pixels=sample_pixels,
        delta=max(1, sample_pixels // NUM_CYCLES),
        alpha_dec=ALPHA_DEC_BASE + (sample_factor - 1) // 3,
        step=choose_step(length),
    )


def learn(
    state: NetworkState,
    pixels: Sequence[int],
    sample_factor: int,
    *,
    debug: bool = False,
    progress: bool = False,
) -> TrainingReport:
    """
    Train the network in place on packed RGB pixels.

    Args:
      state         : freshly initialised network (see init_network)
      pixels        : packed r<<16 | g<<8 | b values, at least MIN_PIXELS long
      sample_factor : 1..30, visit length // sample_factor pixels
      debug         : print schedule and final state
      progress      : print a per-cycle percent line with ETA

    Returns:
      TrainingReport with visit counters and the per-cycle decay history.
    """
    schedule = build_schedule(len(pixels), sample_factor)
    px: List[int] = [int(p) for p in pixels]

    network = state.network
    sample_pixels = schedule.sample_pixels
    delta = schedule.delta
    alpha_dec = schedule.alpha_dec
    step = schedule.step
    length = schedule.length

    alpha = INIT_ALPHA
    bias_radius = INIT_BIAS_RADIUS
    rad = calc_radius(bias_radius)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Learning pixels", sample_pixels),
                    ("Delta", delta),
                    ("Step", step),
                    ("Alpha dec", alpha_dec),
                    ("Radius", rad),
                ]
            )
        )

    alpha_history: List[int] = []
    radius_history: List[int] = []
    contests = 0
    special_hits = 0
    t_start = time.perf_counter()

    pos = 0
    i = 0
    while i < sample_pixels:
        red, green, blue = unpack_rgb(px[pos])
        r, g, b = float(red), float(green), float(blue)

        if i == 0:
            # Remember background colour.
            network[BG_COLOUR, 0] = r
            network[BG_COLOUR, 1] = g
            network[BG_COLOUR, 2] = b

        j = special_find(state, r, g, b)
        if j < 0:
            j = contest(state, r, g, b)
            contests += 1
        else:
            special_hits += 1

        # No learning for specials.
        if j >= SPECIALS:
            a = float(alpha) / float(INIT_ALPHA)
            alter_single(state, a, j, r, g, b)
            if rad > 0:
                alter_neighbours(state, a, rad, j, r, g, b)

        pos = (pos + step) % length

        i += 1
        if i % delta == 0:
            alpha -= alpha // alpha_dec
            bias_radius -= bias_radius // RADIUS_DEC
            rad = calc_radius(bias_radius)
            alpha_history.append(alpha)
            radius_history.append(bias_radius)

            if progress:
                elapsed = time.perf_counter() - t_start
                frac = i / sample_pixels
                eta = elapsed * (1.0 - frac) / frac if frac > 0 else None
                print_progress_line(
                    f"[learn] {int(100 * frac):3d}% (ETA {format_eta(eta)})"
                )

    if progress:
        print_progress_line("[learn] 100% (ETA 0s)", final=True)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Visits", i),
                    ("Contests", contests),
                    ("Special hits", special_hits),
                    ("Final alpha", float(alpha) / float(INIT_ALPHA)),
                    ("Final radius", rad),
                ]
            )
        )

    return TrainingReport(
        sample_pixels=sample_pixels,
        delta=delta,
        step=step,
        alpha_dec=alpha_dec,
        visits=i,
        cycles=len(alpha_history),
        contests=contests,
        special_hits=special_hits,
        final_alpha=alpha,
        final_bias_radius=bias_radius,
        alpha_history=alpha_history,
        radius_history=radius_history,
    )


__all__ = [
    "LearningSchedule",
    "choose_step",
    "calc_radius",
    "build_schedule",
    "learn",
]
