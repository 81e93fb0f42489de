# neuquant/network.py
from __future__ import annotations

"""
Network state: neuron positions plus frequency and bias accumulators.

Layout:
  0          black (pinned)
  1          white (pinned)
  2          background, set from the first sampled pixel
  3..255     learning neurons, initialised to a grey ramp
"""

from dataclasses import dataclass

import numpy as np

from .constants import CUT_NET_SIZE, NET_SIZE, SPECIALS
from .core_types import NetworkArray


@dataclass
class NetworkState:
    """Mutable substrate for one quantization run."""

    network: NetworkArray  # (NET_SIZE, 3) float64
    freq: np.ndarray  # (NET_SIZE,) float64
    bias: np.ndarray  # (NET_SIZE,) float64

    @property
    def size(self) -> int:
        return int(self.network.shape[0])


def init_network() -> NetworkState:
    """Fresh network: black, white, empty background slot, grey ramp."""
    network = np.zeros((NET_SIZE, 3), dtype=np.float64)
    network[1, :] = 255.0

    ramp = np.arange(NET_SIZE - SPECIALS, dtype=np.float64)
    network[SPECIALS:, :] = ((255.0 * ramp) / float(CUT_NET_SIZE))[:, None]

    freq = np.full(NET_SIZE, 1.0 / float(NET_SIZE), dtype=np.float64)
    bias = np.zeros(NET_SIZE, dtype=np.float64)
    return NetworkState(network=network, freq=freq, bias=bias)


__all__ = ["NetworkState", "init_network"]
