# neuquant/utils.py
from __future__ import annotations

"""
Shared utilities for neuquant.

Includes time formatting, progress lines, palette usage summaries, and tidy logging.
"""

from typing import Any, Iterable, List, Tuple

import numpy as np

from .core_types import RGBTuple, rgb_to_hex


#  Time / size formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_eta(seconds: float | None) -> str:
    """Format an ETA in seconds as 'Hh Mm', 'Mm Ss', 'Ss', or '--:--' for unknown."""
    if seconds is None or not np.isfinite(seconds) or seconds < 0:
        return "--:--"
    total = int(round(seconds))
    if total >= 3600:
        hours = total // 3600
        minutes = (total % 3600) // 60
        return f"{hours}h {minutes}m"
    if total >= 60:
        minutes = total // 60
        rem = total % 60
        return f"{minutes}m {rem}s"
    return f"{total}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Palette summaries


def colour_usage_report(
    indexed: np.ndarray, palette: List[RGBTuple]
) -> List[Tuple[str, int]]:
    """
    Count palette index usage in a paletted (H,W) array.

    Returns a list of (hex, count) sorted by count descending.
    """
    flat = np.asarray(indexed).reshape(-1)
    if flat.size == 0:
        return []
    counts = np.bincount(flat.astype(np.int64), minlength=len(palette))
    report: List[Tuple[str, int]] = []
    for idx in np.argsort(-counts, kind="stable").tolist():
        count = int(counts[idx])
        if count == 0 or idx >= len(palette):
            continue
        report.append((rgb_to_hex(palette[idx]), count))
    return report


def count_distinct_colours(palette: Iterable[RGBTuple]) -> int:
    """Number of distinct RGB entries in a palette."""
    return len({tuple(int(c) for c in rgb) for rgb in palette})


#  CLI / progress logging


def print_progress_line(message: str, final: bool = False) -> None:
    """Print a single-line progress message that overwrites previous output."""
    import sys as _sys

    _sys.stdout.write("\r\033[K" + message)
    _sys.stdout.flush()
    if final:
        _sys.stdout.write("\n")
        _sys.stdout.flush()


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (AttributeError, ValueError, OSError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return f"{int(value):,}"
    if isinstance(value, (float, np.floating)):
        text = f"{float(value):.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] Sample factor: 10  Format: gif  Dither: off
    Routes to debug() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # formatting
    "format_seconds_compact",
    "format_eta",
    "format_total_duration_compact",
    "format_bool_on_off",
    "format_number_compact",
    # palette summaries
    "colour_usage_report",
    "count_distinct_colours",
    # logging / progress
    "print_progress_line",
    "enable_line_buffered_stdout",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
