import numpy as np
import pytest
from PIL import Image

from neuquant.errors import ImageTooSmallError
from neuquant.image_io import (
    apply_palette,
    extract_pixels,
    is_image_file,
    load_image_rgb,
    make_palette,
    palette_image,
    resize_to_height,
    save_indexed,
    save_swatch,
)


def test_extract_pixels_packs_row_major():
    arr = np.zeros((20, 30, 3), dtype=np.uint8)
    arr[0, 0] = (1, 2, 3)
    arr[0, 1] = (255, 0, 128)
    arr[1, 0] = (9, 8, 7)
    pixels = extract_pixels(Image.fromarray(arr))
    assert pixels.dtype == np.uint32
    assert pixels.size == 600
    assert int(pixels[0]) == 0x010203
    assert int(pixels[1]) == 0xFF0080
    assert int(pixels[30]) == 0x090807


def test_extract_pixels_drops_alpha():
    arr = np.full((25, 25, 4), 200, dtype=np.uint8)
    arr[..., 3] = 0
    pixels = extract_pixels(arr)
    assert pixels.size == 625
    assert np.all(pixels == 0xC8C8C8)


def test_extract_pixels_converts_pillow_modes():
    im = Image.new("L", (30, 30), 17)
    pixels = extract_pixels(im)
    assert np.all(pixels == 0x111111)


def test_extract_pixels_rejects_wrong_dtype():
    with pytest.raises(TypeError):
        extract_pixels(np.zeros((30, 30, 3), dtype=np.float32))


def test_extract_pixels_too_small():
    with pytest.raises(ImageTooSmallError):
        extract_pixels(np.zeros((20, 20, 3), dtype=np.uint8))


def test_make_palette():
    rows = np.array([[1, 2, 3], [250, 251, 252]], dtype=np.int32)
    assert make_palette(rows) == [(1, 2, 3), (250, 251, 252)]


def test_palette_image_carries_palette():
    pim = palette_image([(10, 20, 30), (40, 50, 60)])
    assert pim.mode == "P"
    assert pim.size == (1, 1)
    assert pim.getpalette()[:6] == [10, 20, 30, 40, 50, 60]


def test_apply_palette_exact_colours():
    arr = np.zeros((10, 10, 3), dtype=np.uint8)
    arr[:, 5:] = (200, 30, 60)
    palette = [(0, 0, 0), (200, 30, 60)] + [(255, 255, 255)] * 254
    out = apply_palette(Image.fromarray(arr), palette)
    assert out.mode == "P"
    assert np.array_equal(np.asarray(out.convert("RGB")), arr)


def test_resize_to_height():
    im = Image.new("RGB", (200, 100))
    assert resize_to_height(im, None, Image.Resampling.NEAREST) is im
    assert resize_to_height(im, 150, Image.Resampling.NEAREST) is im
    assert resize_to_height(im, 50, Image.Resampling.NEAREST).size == (100, 50)


def test_save_indexed_and_load(tmp_path):
    im = palette_image([(1, 2, 3)]).resize((30, 30))
    out = save_indexed(tmp_path / "x.jpg", im)
    assert out.suffix == ".png"
    assert is_image_file(out)
    back = load_image_rgb(out)
    assert back.mode == "RGB"
    assert back.getpixel((0, 0)) == (1, 2, 3)


def test_save_swatch(tmp_path):
    palette = [(i, 255 - i, 7) for i in range(256)]
    out = save_swatch(tmp_path / "swatch", palette, cell=4)
    assert out.suffix == ".png"
    with Image.open(out) as im:
        assert im.size == (64, 64)
        assert im.convert("RGB").getpixel((4, 0)) == palette[1]
        assert im.convert("RGB").getpixel((0, 4)) == palette[16]


def test_is_image_file_rejects_text(tmp_path):
    p = tmp_path / "notes.png"
    p.write_text("not an image")
    assert not is_image_file(p)
