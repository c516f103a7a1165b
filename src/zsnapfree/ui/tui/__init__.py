"""Full-screen interactive snapshot picker."""

from zsnapfree.ui.tui.app import TerminalSession
from zsnapfree.ui.tui.controller import InteractionController
from zsnapfree.ui.tui.keys import Key, KeyReader, decode_key
from zsnapfree.ui.tui.view import render

__all__ = [
    "InteractionController",
    "Key",
    "KeyReader",
    "TerminalSession",
    "decode_key",
    "render",
]
