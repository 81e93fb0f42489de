# neuquant/quantizer.py
from __future__ import annotations

"""
Quantizer entry point.

Provides:
  NeuQuant(sample_factor=1, *, debug=False, progress=False)
    .quantize(pixels)        -> QuantizeResult
    .quantize_image(image)   -> QuantizeResult

    Args:
      sample_factor : int in [1, 30]; 1 trains on every pixel (best quality),
                      higher values train on length // sample_factor pixels.
      debug         : bool, print schedule and final training state
      progress      : bool, print per-cycle percent with ETA

  quantize(pixels, sample_factor=1) -> QuantizeResult
    One-shot convenience wrapper.

Notes:
  - The sample factor is validated on construction, the pixel count before any
    network state is created.
  - Each call builds its own network, so one instance may be reused
    sequentially. Use separate instances for concurrent runs.
"""

from typing import Sequence, Union

import numpy as np
from PIL import Image

from .core_types import QuantizeResult
from .errors import check_pixel_count, check_sample_factor
from .finalize import build_net_index, fix_network
from .image_io import extract_pixels, make_palette
from .learning import learn
from .network import init_network


class NeuQuant:
    """Kohonen network colour quantizer producing a 256-entry palette."""

    def __init__(
        self, sample_factor: int = 1, *, debug: bool = False, progress: bool = False
    ) -> None:
        self.sample_factor = check_sample_factor(sample_factor)
        self.debug = bool(debug)
        self.progress = bool(progress)

    def __repr__(self) -> str:
        return f"NeuQuant(sample_factor={self.sample_factor})"

    def quantize(self, pixels: Sequence[int]) -> QuantizeResult:
        """Train on packed r<<16 | g<<8 | b pixels and return palette + index."""
        check_pixel_count(len(pixels))

        state = init_network()
        report = learn(
            state,
            pixels,
            self.sample_factor,
            debug=self.debug,
            progress=self.progress,
        )
        colour_map = fix_network(state)
        sorted_map, net_index = build_net_index(colour_map)
        return QuantizeResult(
            palette=make_palette(colour_map),
            colour_map=sorted_map,
            net_index=net_index,
            report=report,
        )

    def quantize_image(self, image: Union[Image.Image, np.ndarray]) -> QuantizeResult:
        """Extract pixels from a Pillow image or uint8 array, then quantize."""
        return self.quantize(extract_pixels(image))


def quantize(
    pixels: Sequence[int], sample_factor: int = 1
) -> QuantizeResult:
    """Quantize packed pixels with a fresh NeuQuant."""
    return NeuQuant(sample_factor).quantize(pixels)


__all__ = ["NeuQuant", "quantize"]
