# neuquant/finalize.py
from __future__ import annotations

"""
Finalizer and index builder.

Exports:
  round_to_colour_value(x) -> int
  fix_network(state) -> ColourMap
  build_net_index(colour_map) -> (sorted_map, net_index)
"""

import math
from typing import List, Tuple

import numpy as np

from .constants import MAX_NET_POS
from .core_types import ColourMap, NetIndex, clamp_value
from .network import NetworkState


def round_to_colour_value(x: float) -> int:
    """floor(x + 0.5) clamped to [0, 255]."""
    return int(clamp_value(math.floor(0.5 + float(x)), 0, 255))


def fix_network(state: NetworkState) -> ColourMap:
    """Round every neuron to an integer colour. Returns (NET_SIZE, 3) int32."""
    net = state.network
    out = np.empty(net.shape, dtype=np.int32)
    for i in range(net.shape[0]):
        for j in range(3):
            out[i, j] = round_to_colour_value(net[i, j])
    return out


def build_net_index(colour_map: ColourMap) -> Tuple[ColourMap, NetIndex]:
    """
    Selection-sort the colour map by green and build the green lookup table.

    net_index[v] is the middle of the run of entries with green == v, or the
    first entry above v when no entry has that green. Values past the last
    green point at the final entry.

    Returns (sorted copy of colour_map, net_index).
    """
    rows: List[List[int]] = [[int(c) for c in row] for row in colour_map]
    size = len(rows)
    max_pos = size - 1 if size else MAX_NET_POS
    net_index = [0] * 256

    prev_col = 0
    start_pos = 0
    for i in range(size):
        small_pos = i
        small_val = rows[i][1]  # index on g
        for j in range(i + 1, size):
            if rows[j][1] < small_val:
                small_pos = j
                small_val = rows[j][1]

        if i != small_pos:
            rows[i], rows[small_pos] = rows[small_pos], rows[i]

        # small_val is now at position i
        if small_val != prev_col:
            net_index[prev_col] = (start_pos + i) >> 1
            for j in range(prev_col + 1, small_val):
                net_index[j] = i
            prev_col = small_val
            start_pos = i

    net_index[prev_col] = (start_pos + max_pos) >> 1
    for j in range(prev_col + 1, 256):
        net_index[j] = max_pos

    sorted_map = np.array(rows, dtype=np.int32).reshape(-1, 3)
    return sorted_map, np.array(net_index, dtype=np.int32)


__all__ = ["round_to_colour_value", "fix_network", "build_net_index"]
