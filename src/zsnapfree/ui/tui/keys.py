"""
Summary: Raw keyboard input for the interactive session.
Why: Read single key presses without waiting for Enter and decode arrow keys.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from enum import Enum
from types import TracebackType
from typing import TextIO


class Key(str, Enum):
    """Named keys produced by :func:`decode_key` besides printable characters."""

    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ENTER = "enter"
    ESCAPE = "escape"
    SPACE = "space"


_SEQUENCES: dict[bytes, Key] = {
    b"\x1b[A": Key.UP,
    b"\x1bOA": Key.UP,
    b"\x1b[B": Key.DOWN,
    b"\x1bOB": Key.DOWN,
    b"\x1b[H": Key.HOME,
    b"\x1bOH": Key.HOME,
    b"\x1b[1~": Key.HOME,
    b"\x1b[7~": Key.HOME,
    b"\x1b[F": Key.END,
    b"\x1bOF": Key.END,
    b"\x1b[4~": Key.END,
    b"\x1b[8~": Key.END,
    b"\x1b[5~": Key.PAGE_UP,
    b"\x1b[6~": Key.PAGE_DOWN,
    b"\x1b": Key.ESCAPE,
    b"\r": Key.ENTER,
    b"\n": Key.ENTER,
    b" ": Key.SPACE,
}


def decode_key(data: bytes) -> str | None:
    """Translate raw bytes from the terminal into a key name.

    Returns ``None`` for empty input and unknown escape sequences.
    """
    if not data:
        return None
    key = _SEQUENCES.get(data)
    if key is not None:
        return key
    if data.startswith(b"\x1b"):
        return None
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return text[0] if text.isprintable() else None


class KeyReader:
    """Put the terminal in cbreak mode and read one key at a time.

    Usage:
        with KeyReader() as keys:
            key = keys.read_key(timeout=0.1)
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdin
        self._fd = self._stream.fileno()
        self._saved: list | None = None

    def __enter__(self) -> KeyReader:
        self._saved = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def read_key(self, timeout: float | None = None) -> str | None:
        """Wait up to ``timeout`` seconds for a key press."""

        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(self._fd, 1)
        if data == b"\x1b":
            # Collect the rest of an escape sequence when it is already buffered.
            while True:
                more, _, _ = select.select([self._fd], [], [], 0.01)
                if not more:
                    break
                data += os.read(self._fd, 1)
                if len(data) >= 3 and (data[-1:].isalpha() or data.endswith(b"~")):
                    break
        elif data and data[0] >= 0xC0:
            # Multi-byte UTF-8 character.
            needed = 1 if data[0] < 0xE0 else 2 if data[0] < 0xF0 else 3
            data += os.read(self._fd, needed)
        return decode_key(data)


__all__ = ["Key", "KeyReader", "decode_key"]
