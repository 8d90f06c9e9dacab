from __future__ import annotations

import os
import sys

_COLOR: bool | None = None

# Cycled by value so equal elements share a color across charts.
_BAR_COLORS = (36, 35, 34, 33, 32, 31)


def supports_color() -> bool:
    global _COLOR
    if _COLOR is None:
        _COLOR = not (
            os.environ.get("NO_COLOR", "") != ""
            or os.environ.get("TERM", "") == "dumb"
            or not hasattr(sys.stdout, "isatty")
            or not sys.stdout.isatty()
        )
    return _COLOR


def force_color(enabled: bool | None) -> None:
    """Pin color on or off; ``None`` goes back to auto-detection."""
    global _COLOR
    _COLOR = enabled


def style(text: str, *codes: int) -> str:
    if not codes or not supports_color():
        return text
    return f"\033[{';'.join(str(c) for c in codes)}m{text}\033[0m"


def green(text: str) -> str:
    return style(text, 32)


def red(text: str) -> str:
    return style(text, 31)


def yellow(text: str) -> str:
    return style(text, 33)


def dim(text: str) -> str:
    return style(text, 2)


def bold(text: str) -> str:
    return style(text, 1)


def mark(ok: bool) -> str:
    return green("PASS") if ok else style("FAIL", 31, 1)


def bar(value: int, width: int) -> str:
    return style("#" * width, _BAR_COLORS[value % len(_BAR_COLORS)])
