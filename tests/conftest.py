from __future__ import annotations

import numpy as np
import pytest
from PIL import Image


def gradient_rgb(width: int, height: int) -> np.ndarray:
    """Deterministic colourful (H,W,3) uint8 test image."""
    ys, xs = np.mgrid[0:height, 0:width]
    r = (xs * 255) // max(1, width - 1)
    g = (ys * 255) // max(1, height - 1)
    b = ((xs + ys) * 7) % 256
    return np.stack([r, g, b], axis=-1).astype(np.uint8)


def pack(rgb: np.ndarray) -> np.ndarray:
    flat = rgb.reshape(-1, 3).astype(np.uint32)
    return (flat[:, 0] << 16) | (flat[:, 1] << 8) | flat[:, 2]


@pytest.fixture
def gradient_pixels() -> np.ndarray:
    """64x64 gradient as packed pixels (4096 values)."""
    return pack(gradient_rgb(64, 64))


@pytest.fixture
def gradient_image() -> Image.Image:
    return Image.fromarray(gradient_rgb(48, 32))
