"""Cross-platform single-keypress reader for the terminal frontend.

Handles arrow keys and the 3x3 letter block around ``s`` without
requiring Enter.  Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys

from backend.models.board import Direction


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- shared key mapping --------------------------------------------------------

# Letter block laid out like the compass rose:
#   q w e
#   a   d
#   z x c
_KEY_MAP: dict[str, str] = {
    "q": "NW",
    "w": "N",
    "e": "NE",
    "a": "W",
    "d": "E",
    "z": "SW",
    "x": "S",
    "c": "SE",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "h": "help",
    "?": "help",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "N",
    "B": "S",
    "C": "E",
    "D": "W",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    if ch == "Q":
        return "quit"
    return _KEY_MAP.get(ch.lower(), ch if ch.isprintable() else "")


def to_direction(action: str) -> Direction | None:
    """Return the direction named by an action string, if any."""
    try:
        return Direction(action)
    except ValueError:
        return None


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "N", "NE", "E", ... "NW"   — movement (see :func:`to_direction`)
        "quit"                     — Shift-Q / Ctrl-C / Escape
        "restart"                  — r
        "help"                     — h / ?
        "enter"                    — Enter / Return
        "<char>"                   — unmapped printable char
        ""                         — unrecognised key
    """
    ch = _getch()

    # Arrow keys (Unix escape sequences: ESC [ A/B/C/D)
    if ch == "\x1b":
        ch2 = _getch()
        if ch2 == "[":
            ch3 = _getch()
            return _ARROW_MAP.get(ch3, "")
        return "quit"  # bare Escape

    return _resolve(ch)
