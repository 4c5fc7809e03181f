"""Console presentation helpers for the RSA session."""
from __future__ import annotations

import os
import shutil
import sys
from typing import Callable, Optional

import colorama
import pyfiglet
from colorama import Fore, Style

__all__ = [
    "init",
    "banner",
    "section",
    "kv",
    "success",
    "warning",
    "error",
    "elapsed",
    "ask_yes_no",
    "preview",
    "rule",
    "line",
]

_width = 100
_plain_mode = False
_use_color = False
_color_prefix = {
    "success": "",
    "warning": "",
    "error": "",
}

_symbol_success = "✓"
_symbol_warning = "!"
_symbol_error = "✗"


def init(plain: bool = False) -> None:
    """Initialise console helpers with optional colour output."""

    global _width, _plain_mode, _use_color, _color_prefix
    global _symbol_success, _symbol_warning, _symbol_error

    _width = shutil.get_terminal_size(fallback=(100, 24)).columns or 100

    env_plain = bool(os.environ.get("NO_COLOR"))
    isatty = getattr(sys.stdout, "isatty", None)
    is_tty = bool(isatty()) if callable(isatty) else False

    _plain_mode = plain or env_plain or not is_tty
    _use_color = not _plain_mode
    if _use_color:
        colorama.init(autoreset=True)

    if _plain_mode:
        _symbol_success = "[OK]"
        _symbol_warning = "[!]"
        _symbol_error = "[X]"
    else:
        _symbol_success = "✓"
        _symbol_warning = "!"
        _symbol_error = "✗"

    if _use_color:
        _color_prefix = {
            "success": Fore.GREEN + Style.BRIGHT,
            "warning": Fore.YELLOW + Style.BRIGHT,
            "error": Fore.RED + Style.BRIGHT,
        }
    else:
        _color_prefix = {"success": "", "warning": "", "error": ""}


def _apply(style: str, message: str) -> str:
    if not _use_color:
        return message
    return f"{style}{message}{Style.RESET_ALL}"


def rule(char: str = "=", width: Optional[int] = None) -> None:
    """Print a horizontal rule spanning the console width."""

    count = width if width is not None else _width
    print(char * max(1, count))


def banner(title: str) -> None:
    """Display a banner heading for the CLI."""

    if _plain_mode:
        print(f"=== {title} ===".center(_width))
        return
    print(pyfiglet.figlet_format(title, width=_width))


def section(title: str) -> None:
    """Display a section divider with the given title."""

    rule("=")
    print(f" {title.upper()}")
    rule("=")


def kv(key: str, value: str) -> None:
    print(f"{key}: {value}")


def success(msg: str) -> None:
    print(_apply(_color_prefix["success"], f"{_symbol_success} {msg}"))


def warning(msg: str) -> None:
    print(_apply(_color_prefix["warning"], f"{_symbol_warning} {msg}"))


def error(msg: str) -> None:
    print(_apply(_color_prefix["error"], f"{_symbol_error} {msg}"), file=sys.stderr)


def elapsed(prefix: str, seconds: float) -> None:
    """Print a formatted elapsed time entry."""

    print(f"{prefix} {seconds:.2f}s")


def preview(text: str, limit: int = 50) -> str:
    """Shorten *text* for display, marking truncation with an ellipsis."""

    return text if len(text) <= limit else text[:limit] + "..."


def ask_yes_no(question: str, reader: Optional[Callable[[str], str]] = None) -> bool:
    """Ask a Y/N question; only a case-insensitive ``Y`` counts as yes."""

    answer = (reader or input)(f"\n{question} (Y/N): ")
    return answer.upper() == "Y"


def line() -> None:
    """Print a thin separator line."""

    rule("-")
