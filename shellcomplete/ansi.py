"""Terminal colors for log messages and candidate listings.

Colors are off when NO_COLOR is set, on a dumb terminal, or when the
stream is not a terminal. FORCE_COLOR turns them on regardless.
"""

import os
import sys
from typing import TextIO

__all__ = [
    "BLUE",
    "BOLD",
    "DIM",
    "RED",
    "RESET",
    "YELLOW",
    "CandidateStyles",
    "LogStyles",
    "colorize",
    "make_style",
    "should_colorize",
    "style_candidate",
]

_CSI = "\x1b["

RESET = _CSI + "0m"

# SGR parameters
BOLD = "1"
DIM = "2"
RED = "31"
YELLOW = "33"
BLUE = "34"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI sequences may be written to `stream` (stderr by default)."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(sys.stderr if stream is None else stream, "isatty", None)
    return bool(isatty and isatty())


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (start, end) sequences framing text styled with `codes`."""
    start = f"{_CSI}{';'.join(codes)}m" if codes else ""
    return start, RESET


def colorize(text: str, *codes: str) -> str:
    """Frame `text` with the sequences of `codes`; no codes, no change."""
    if not codes:
        return text
    start, end = make_style(*codes)
    return start + text + end


class LogStyles:
    """Styles of the log levels worth noticing."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)


class CandidateStyles:
    """Styles of the candidate listing."""

    DIRECTORY = (BLUE, BOLD)
    VARIABLE = (YELLOW,)


def style_candidate(candidate: str) -> str:
    """Color a candidate according to its shape (directory or variable)."""
    if candidate.endswith("/"):
        return colorize(candidate, *CandidateStyles.DIRECTORY)
    if candidate.startswith("$"):
        return colorize(candidate, *CandidateStyles.VARIABLE)
    return candidate
