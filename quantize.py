#!/usr/bin/env python3
"""
quantize.py
Reduce true-colour images to a learned 256-colour palette with NeuQuant.

Usage:
  python quantize.py INPUT [OUTPUT] --sample N --format [png|gif] --dither --height H --resample [nearest|bilinear|bicubic|lanczos] --swatch PATH --progress --debug

Sampling:
  --sample 1 trains on every pixel (slowest, best). Higher values up to 30
  train on every Nth pixel of the prime-stride traversal.

Input:
  Any Pillow-readable image, or a folder of images. Alpha is ignored.

Output:
  Paletted PNG by default, GIF with --format gif. If OUTPUT is omitted, writes
  <stem>_neuquant.<ext> next to INPUT (or into --outdir).

Notes:
  Palette learning comes from neuquant.quantizer. Remapping onto the learned
  palette is done by Pillow (Image.quantize with a palette image).
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np
from PIL import Image

from neuquant.constants import (
    DEFAULT_SAMPLE_FACTOR,
    SAMPLE_FACTOR_MAX,
    SAMPLE_FACTOR_MIN,
)
from neuquant.errors import NeuQuantError
from neuquant.image_io import (
    apply_palette,
    extract_pixels,
    load_image_rgb,
    resize_to_height,
    save_indexed,
    save_swatch,
)
from neuquant.quantizer import NeuQuant
from neuquant.utils import (
    # formatting
    format_seconds_compact,
    format_total_duration_compact,
    # palette summaries
    colour_usage_report,
    count_distinct_colours,
    # pretty logging
    print_banner,
    log,
    debug_log,
    error,
    warn,
    print_config_line,
    key_value_pairs_to_string,
    enable_line_buffered_stdout,
)

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif", ".tif", ".tiff"}
OUTPUT_SUFFIX = "_neuquant"


# CLI args & small helpers


def pillow_resample_from_name(name: str) -> Image.Resampling:
    """Map a string to a Pillow resampling filter enum."""
    if name == "nearest":
        return Image.Resampling.NEAREST
    if name == "bilinear":
        return Image.Resampling.BILINEAR
    if name == "bicubic":
        return Image.Resampling.BICUBIC
    if name == "lanczos":
        return Image.Resampling.LANCZOS
    return Image.Resampling.LANCZOS  # default


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for palette learning.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        dst: optional Path for a single output file
        outdir: optional Path for outputs
        sample: sampling factor 1..30
        format: "png" | "gif"
        dither: bool, Floyd-Steinberg when remapping
        height: optional int max height before learning
        resample: resize filter name
        swatch: optional Path for a palette swatch PNG
        progress: bool for per-cycle learning progress
        debug: bool for verbose learning details
    """
    parser = argparse.ArgumentParser(
        prog="quantize",
        description="Learn a 256-colour palette with NeuQuant and write a paletted image.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "dst", type=Path, nargs="?", default=None, help="Output file (single input)"
    )
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--sample",
        type=int,
        default=DEFAULT_SAMPLE_FACTOR,
        help=f"Sampling factor {SAMPLE_FACTOR_MIN}..{SAMPLE_FACTOR_MAX} (1 = best quality).",
    )
    parser.add_argument(
        "--format", choices=["png", "gif"], default="png", help="Output format."
    )
    parser.add_argument(
        "--dither", action="store_true", help="Floyd-Steinberg when remapping"
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Resize so height<=H before learning. Omit for no resize.",
    )
    parser.add_argument(
        "--resample",
        choices=["nearest", "bilinear", "bicubic", "lanczos"],
        default="lanczos",
        help="Scaling filter for --height.",
    )
    parser.add_argument(
        "--swatch", type=Path, default=None, help="Write the palette as a PNG swatch"
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show learning progress"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose learning details")
    return parser.parse_args(argv)


def _output_path(
    src_path: Path, dst: Optional[Path], outdir: Optional[Path], fmt: str
) -> Path:
    if dst is not None:
        return dst
    name = f"{src_path.stem}{OUTPUT_SUFFIX}.{fmt}"
    return (outdir / name) if outdir else src_path.with_name(name)


# Per-file processing


def _process_single_image(
    src_path: Path,
    out_path: Path,
    quantizer: NeuQuant,
    height_cap: Optional[int],
    resample_name: str,
    dither: bool,
    swatch_path: Optional[Path],
    debug: bool,
) -> None:
    """
    Process a single image path end-to-end:
      load -> optional resize -> learn palette -> remap -> save -> report.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name)

    im = load_image_rgb(src_path)
    width0, height0 = im.size
    im = resize_to_height(im, height_cap, pillow_resample_from_name(resample_name))
    width, height = im.size

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [("Loaded", f"{width0}x{height0}"), ("Learning on", f"{width}x{height}")]
            )
        )

    t_load = time.perf_counter()
    pixels = extract_pixels(im)
    result = quantizer.quantize(pixels)
    t_learn = time.perf_counter()

    paletted = apply_palette(im, result.palette, dither=dither)
    out_path = save_indexed(out_path, paletted)
    if swatch_path is not None:
        swatch_path = save_swatch(swatch_path, result.palette)
        log(f"Wrote swatch {swatch_path.name}")
    t_save = time.perf_counter()

    report = result.report
    log(
        f"Wrote {out_path.name} | size={width}x{height} | "
        f"palette={len(result.palette)} ({count_distinct_colours(result.palette)} distinct)"
    )

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Visits", report.visits),
                    ("Cycles", report.cycles),
                    ("Step", report.step),
                    ("Contests", report.contests),
                    ("Special hits", report.special_hits),
                ]
            )
        )
        indexed = np.asarray(paletted, dtype=np.uint8)
        debug_log("top palette entries:")
        for hex_code, count in colour_usage_report(indexed, result.palette)[:10]:
            debug_log(f"  -> {hex_code}: pixels={count:,}")
        debug_log(
            f"Total {format_total_duration_compact(t_save - t_start)}  "
            f"(load={format_seconds_compact(t_load - t_start)}, "
            f"learn={format_seconds_compact(t_learn - t_load)}, "
            f"remap+save={format_seconds_compact(t_save - t_learn)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_save - t_start)}")


# Entry point


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI entry point.

    Handles a single file or a folder (processed in name order). Precondition
    failures (bad sampling factor, image too small) exit with status 2.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        quantizer = NeuQuant(args.sample, debug=args.debug, progress=args.progress)
    except NeuQuantError as e:
        error(str(e))
        sys.exit(2)

    print_config_line(
        "run",
        [
            ("Sample factor", quantizer.sample_factor),
            ("Format", args.format),
            ("Dither", bool(args.dither)),
        ],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        sys.exit(2)

    if src.is_dir():
        files = sorted(
            (
                p
                for p in src.iterdir()
                if p.is_file()
                and p.suffix.lower() in IMAGE_EXTS
                and not p.stem.endswith(OUTPUT_SUFFIX)
            ),
            key=lambda p: p.name.lower(),
        )
        if not files:
            warn(f"no images found in {src}")
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files))]))
        failures = 0
        for p in files:
            try:
                _process_single_image(
                    p,
                    _output_path(p, None, args.outdir, args.format),
                    quantizer,
                    args.height,
                    args.resample,
                    args.dither,
                    None,
                    args.debug,
                )
            except NeuQuantError as e:
                error(f"{p.name}: {e}")
                failures += 1
        if failures:
            sys.exit(2)
        return

    try:
        _process_single_image(
            src,
            _output_path(src, args.dst, args.outdir, args.format),
            quantizer,
            args.height,
            args.resample,
            args.dither,
            args.swatch,
            args.debug,
        )
    except NeuQuantError as e:
        error(str(e))
        sys.exit(2)


if __name__ == "__main__":
    main()
