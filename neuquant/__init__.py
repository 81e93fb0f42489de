# neuquant/__init__.py
"""
neuquant package.

Purpose:
  NeuQuant neural-net colour quantization: learn a 256-colour palette from an
  image's pixels. See quantize.py for the CLI.

Public API:
  NeuQuant      : quantizer; .quantize(pixels) / .quantize_image(image).
  quantize      : one-shot wrapper around NeuQuant.
  QuantizeResult: palette (learned order), colour_map (green-sorted), net_index, report.
  errors        : ImageTooSmallError, InvalidSamplingFactorError.
  image_io      : pixel extraction and palette marshaling (Pillow).
  constants     : network shape and learning tunables.
  utils         : shared helpers (formatting, logging).

Quick start:
  from neuquant import NeuQuant
  from neuquant.image_io import load_image_rgb, apply_palette
  result = NeuQuant(sample_factor=10).quantize_image(load_image_rgb(path))
  paletted = apply_palette(load_image_rgb(path), result.palette)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import image_io
from . import utils

from .core_types import QuantizeResult, TrainingReport  # noqa: E402
from .errors import (  # noqa: E402
    ImageTooSmallError,
    InvalidSamplingFactorError,
    NeuQuantError,
)
from .quantizer import NeuQuant, quantize  # noqa: E402

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "image_io",
    "utils",
    "QuantizeResult",
    "TrainingReport",
    "NeuQuantError",
    "ImageTooSmallError",
    "InvalidSamplingFactorError",
    "NeuQuant",
    "quantize",
]
