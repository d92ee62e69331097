"""Coloured CLI output helpers."""

import os
import sys

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color() -> bool:
    """Check if stdout is a colour-capable TTY (honours NO_COLOR)."""
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colorize(text: str, color: str) -> str:
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def _emit(symbol: str, color: str, message: str) -> None:
    print(f"{_colorize(symbol, color)} {message}")


def success(message: str) -> None:
    """Print success message with green checkmark."""
    _emit(CHECK, GREEN, message)


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    _emit(BULLET, YELLOW, message)


def error(message: str) -> None:
    """Print error message with red cross."""
    _emit(CROSS, RED, message)


def header(message: str) -> None:
    """Print header message in blue."""
    print(_colorize(message, BLUE))
