"""Terminal message helpers. Every wrapper-authored message goes to stderr."""

from __future__ import annotations

import os
import sys
from typing import TextIO


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    YELLOW = "\033[33m"


def _supports_color(stream: TextIO | None = None) -> bool:
    stream = stream or sys.stderr
    if os.environ.get("NO_COLOR"):
        return False
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return True


def colorize(text: str, color: str, bold: bool = False, stream: TextIO | None = None) -> str:
    """Apply color to text if terminal supports it."""
    if not _supports_color(stream):
        return text
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{text}{Colors.RESET}"


def print_error(message: str, hint: str | None = None, stream: TextIO | None = None) -> None:
    """Print ``Error: message`` (plus an indented hint) in red."""
    stream = stream or sys.stderr
    print(colorize("Error:", Colors.RED, bold=True, stream=stream) + " " + message, file=stream)
    if hint:
        for line in hint.splitlines():
            print(colorize(f"  {line}", Colors.DIM, stream=stream), file=stream)


def print_warning(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stderr
    print(colorize("Warning:", Colors.YELLOW, bold=True, stream=stream) + " " + message, file=stream)


__all__ = ["Colors", "colorize", "print_error", "print_warning"]
