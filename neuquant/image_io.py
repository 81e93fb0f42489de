# neuquant/image_io.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import ColourMap, PackedPixels, RGBTuple, assert_u8_image_rgb
from .errors import check_pixel_count

"""
Image I/O helpers: pixel extraction for training and palette marshaling for output.

Exports:
  load_image_rgb(path) -> Image.Image
  resize_to_height(im, dst_h, resample) -> Image.Image
  extract_pixels(image) -> PackedPixels
  make_palette(colour_map) -> list[RGBTuple]
  palette_image(palette) -> Image.Image ("P", 1x1)
  apply_palette(im, palette, dither=False) -> Image.Image ("P")
  save_indexed(path, im) -> Path
  save_swatch(path, palette, cell=16) -> Path
  is_image_file(path) -> bool
"""


def load_image_rgb(path: Path) -> Image.Image:
    """Load with Pillow, apply EXIF orientation, convert to RGB."""
    with Image.open(path) as im0:
        im = ImageOps.exif_transpose(im0)
        return im.convert("RGB")


def resize_to_height(
    im: Image.Image, dst_h: Optional[int], resample: Image.Resampling
) -> Image.Image:
    """Downscale so height <= dst_h, keeping aspect. No-op when not needed."""
    w0, h0 = im.size
    if dst_h is None or dst_h <= 0 or dst_h >= h0:
        return im
    dst_w = max(1, int(round(w0 * (dst_h / float(h0)))))
    return im.resize((dst_w, int(dst_h)), resample=resample)


def extract_pixels(image: Union[Image.Image, np.ndarray]) -> PackedPixels:
    """
    Flatten an image to row-major packed pixels r<<16 | g<<8 | b.

    Accepts a Pillow image (any mode) or a uint8 (H,W,3/4) array; alpha is dropped.
    Raises ImageTooSmallError below MIN_PIXELS.
    """
    if isinstance(image, Image.Image):
        arr = np.asarray(image.convert("RGB"), dtype=np.uint8)
    else:
        arr = assert_u8_image_rgb(np.asarray(image))

    height, width = int(arr.shape[0]), int(arr.shape[1])
    check_pixel_count(height * width)

    rgb = arr[..., :3].reshape(-1, 3).astype(np.uint32)
    return (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]


def make_palette(colour_map: Union[ColourMap, Sequence[Sequence[int]]]) -> List[RGBTuple]:
    """Rounded neuron rows -> list of RGB tuples in the same order."""
    rows = np.asarray(colour_map, dtype=np.int64).reshape(-1, 3)
    return [(int(r), int(g), int(b)) for r, g, b in rows.tolist()]


def palette_image(palette: Sequence[RGBTuple]) -> Image.Image:
    """
    A 1x1 "P" image carrying the palette, for Image.quantize(palette=...).
    Short palettes are padded with black up to 256 entries.
    """
    flat: List[int] = []
    for rgb in palette[:256]:
        flat.extend(int(c) for c in rgb)
    flat.extend([0] * (768 - len(flat)))
    pimage = Image.new("P", (1, 1), 0)
    pimage.putpalette(flat)
    return pimage


def apply_palette(
    im: Image.Image, palette: Sequence[RGBTuple], dither: bool = False
) -> Image.Image:
    """Remap an image onto the palette with Pillow, optionally Floyd-Steinberg."""
    mode = Image.Dither.FLOYDSTEINBERG if dither else Image.Dither.NONE
    return im.convert("RGB").quantize(palette=palette_image(palette), dither=mode)


def save_indexed(path: Path, im: Image.Image) -> Path:
    """Save a paletted image as GIF or PNG depending on suffix (PNG by default)."""
    if path.suffix.lower() not in (".gif", ".png"):
        path = path.with_suffix(".png")
    im.save(path)
    return path


def save_swatch(path: Path, palette: Sequence[RGBTuple], cell: int = 16) -> Path:
    """Write the palette as a 16x16 grid of cell-sized squares (PNG)."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    cols = 16
    rows = (len(palette) + cols - 1) // cols
    grid = np.zeros((rows, cols, 3), dtype=np.uint8)
    for i, rgb in enumerate(palette):
        grid[i // cols, i % cols] = rgb
    big = np.repeat(np.repeat(grid, cell, axis=0), cell, axis=1)
    Image.fromarray(big).save(path)
    return path


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "load_image_rgb",
    "resize_to_height",
    "extract_pixels",
    "make_palette",
    "palette_image",
    "apply_palette",
    "save_indexed",
    "save_swatch",
    "is_image_file",
]
