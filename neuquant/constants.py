# neuquant/constants.py
"""
Network shape and learning tunables used across the project.

- Network shape (NET_SIZE, SPECIALS, BG_COLOUR)
- Radius and alpha schedules (RADIUS_*, ALPHA_*)
- Frequency/bias learning (BETA, GAMMA)
- Sampling (PRIMES, MIN_PIXELS, SAMPLE_FACTOR_*)
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Network shape
# =========================
NET_SIZE: int = 256  # number of colours
SPECIALS: int = 3  # reserved colours: black, white, background
BG_COLOUR: int = SPECIALS - 1
CUT_NET_SIZE: int = NET_SIZE - SPECIALS
MAX_NET_POS: int = NET_SIZE - 1

# =========================
# Schedules
# =========================
NUM_CYCLES: int = 100  # learning cycles

INIT_RAD: int = NET_SIZE // 8  # 32 for 256 colours
RADIUS_BIAS_SHIFT: int = 6
RADIUS_BIAS: int = 1 << RADIUS_BIAS_SHIFT
INIT_BIAS_RADIUS: int = INIT_RAD * RADIUS_BIAS
RADIUS_DEC: int = 30  # 1/30 per cycle

ALPHA_BIAS_SHIFT: int = 10
INIT_ALPHA: int = 1 << ALPHA_BIAS_SHIFT  # 1.0 biased by 10 bits
ALPHA_DEC_BASE: int = 30

# =========================
# Frequency / bias
# =========================
BETA: float = 1.0 / 1024.0
GAMMA: float = 1024.0
BETA_GAMMA: float = BETA * GAMMA

# =========================
# Sampling
# =========================
# Four primes near 500; no realistic image length is divisible by all four.
PRIMES: Tuple[int, int, int, int] = (499, 491, 487, 503)
MIN_PIXELS: int = 503

SAMPLE_FACTOR_MIN: int = 1
SAMPLE_FACTOR_MAX: int = 30
DEFAULT_SAMPLE_FACTOR: int = 10

SPECIAL_MATCH_TOLERANCE: float = 1e-5

__all__ = [
    "NET_SIZE",
    "SPECIALS",
    "BG_COLOUR",
    "CUT_NET_SIZE",
    "MAX_NET_POS",
    "NUM_CYCLES",
    "INIT_RAD",
    "RADIUS_BIAS_SHIFT",
    "RADIUS_BIAS",
    "INIT_BIAS_RADIUS",
    "RADIUS_DEC",
    "ALPHA_BIAS_SHIFT",
    "INIT_ALPHA",
    "ALPHA_DEC_BASE",
    "BETA",
    "GAMMA",
    "BETA_GAMMA",
    "PRIMES",
    "MIN_PIXELS",
    "SAMPLE_FACTOR_MIN",
    "SAMPLE_FACTOR_MAX",
    "DEFAULT_SAMPLE_FACTOR",
    "SPECIAL_MATCH_TOLERANCE",
]
