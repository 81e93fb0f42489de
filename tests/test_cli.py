import numpy as np
import pytest
from PIL import Image

import quantize as cli

from conftest import gradient_rgb


@pytest.fixture
def src_png(tmp_path):
    path = tmp_path / "tile.png"
    Image.fromarray(gradient_rgb(40, 30)).save(path)
    return path


def test_parse_cli_defaults(src_png):
    args = cli.parse_cli_args([str(src_png)])
    assert args.src == src_png
    assert args.dst is None
    assert args.sample == 10
    assert args.format == "png"
    assert not args.dither


def test_main_writes_paletted_png_and_swatch(src_png, tmp_path, capsys):
    swatch = tmp_path / "pal.png"
    cli.main([str(src_png), "--sample", "5", "--swatch", str(swatch)])

    out = tmp_path / "tile_neuquant.png"
    assert out.exists()
    with Image.open(out) as im:
        assert im.mode == "P"
        assert im.size == (40, 30)
    assert swatch.exists()

    stdout = capsys.readouterr().out
    assert "[run] Sample factor: 5" in stdout
    assert "Wrote tile_neuquant.png" in stdout


def test_main_gif_with_dither_and_debug(src_png, tmp_path, capsys):
    dst = tmp_path / "out.gif"
    cli.main([str(src_png), str(dst), "--format", "gif", "--dither", "--debug"])
    assert dst.exists()
    with Image.open(dst) as im:
        assert im.format == "GIF"
    assert "[debug] Visits:" in capsys.readouterr().out


def test_main_folder(tmp_path):
    for name in ("a.png", "b.png"):
        Image.fromarray(gradient_rgb(32, 32)).save(tmp_path / name)
    outdir = tmp_path / "out"
    outdir.mkdir()
    cli.main([str(tmp_path), "--outdir", str(outdir), "--sample", "20"])
    assert sorted(p.name for p in outdir.iterdir()) == [
        "a_neuquant.png",
        "b_neuquant.png",
    ]


def test_main_rejects_bad_sample(src_png, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(src_png), "--sample", "31"])
    assert exc.value.code == 2
    assert "[error] sample factor" in capsys.readouterr().err


def test_main_rejects_small_image(tmp_path, capsys):
    path = tmp_path / "tiny.png"
    Image.fromarray(np.zeros((20, 20, 3), dtype=np.uint8)).save(path)
    with pytest.raises(SystemExit) as exc:
        cli.main([str(path)])
    assert exc.value.code == 2
    assert "too small" in capsys.readouterr().err


def test_main_missing_input(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(tmp_path / "nope.png")])
    assert exc.value.code == 2
