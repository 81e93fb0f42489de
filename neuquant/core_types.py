# neuquant/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
PackedPixels = NDArray[np.uint32]  # (N,) r<<16 | g<<8 | b
NetworkArray = NDArray[np.float64]  # (NET_SIZE, 3) neuron positions
ColourMap = NDArray[np.int32]  # (NET_SIZE, 3) rounded neuron colours
NetIndex = NDArray[np.int32]  # (256,) green value -> sorted position

# Value objects


@dataclass(frozen=True)
class TrainingReport:
    """Counters and decay history from one learning run."""

    sample_pixels: int
    delta: int
    step: int
    alpha_dec: int
    visits: int = 0
    cycles: int = 0
    contests: int = 0
    special_hits: int = 0
    final_alpha: int = 0
    final_bias_radius: int = 0
    alpha_history: List[int] = field(default_factory=list)
    radius_history: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class QuantizeResult:
    """
    Output of one quantization run.

    palette    : 256 RGB tuples in learned order (for palette construction)
    colour_map : (256, 3) int32 rows sorted by green (for nearest-colour search)
    net_index  : (256,) int32, green value -> start position in colour_map
    report     : training counters
    """

    palette: List[RGBTuple]
    colour_map: ColourMap
    net_index: NetIndex
    report: TrainingReport


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def pack_rgb(rgb: Sequence[int]) -> int:
    """(r, g, b) -> r<<16 | g<<8 | b."""
    return ((int(rgb[0]) & 0xFF) << 16) | ((int(rgb[1]) & 0xFF) << 8) | (int(rgb[2]) & 0xFF)


def unpack_rgb(packed: int) -> RGBTuple:
    """r<<16 | g<<8 | b -> (r, g, b)."""
    p = int(packed)
    return ((p >> 16) & 0xFF, (p >> 8) & 0xFF, p & 0xFF)


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3 or 4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] < 3:
        raise TypeError("expected uint8 (H,W,3/4) image")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "PackedPixels",
    "NetworkArray",
    "ColourMap",
    "NetIndex",
    # value objects
    "TrainingReport",
    "QuantizeResult",
    # helpers
    "clamp_value",
    "pack_rgb",
    "unpack_rgb",
    "rgb_to_hex",
    "assert_u8_image_rgb",
]
