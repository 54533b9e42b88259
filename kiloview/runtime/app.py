"""Viewer bootstrap: settings, terminal setup, and the run loop.

Falls back to plain output when stdin is not a terminal and there is content
to print.
"""

from __future__ import annotations

import os
import sys

from ..buffer import LineBuffer
from ..viewport import ViewportEngine
from .config import load_viewer_settings
from .loop import LoopState, run_main_loop
from .terminal import TerminalController


def write_plain(buffer: LineBuffer) -> None:
    """Print buffer lines without paging.

    Lines are printed as loaded, so tabs are already expanded and control
    bytes are escaped.
    """
    if buffer.is_blank:
        return
    sys.stdout.write("\n".join(buffer.lines) + "\n")
    sys.stdout.flush()


def run_viewer(buffer: LineBuffer, nopager: bool = False) -> LoopState | None:
    """Initialize the terminal session and run the interactive loop.

    Terminal setup errors (attributes, window size) surface before raw mode
    is entered. A non-terminal stdin only falls back to plain output when
    there is content to print; otherwise terminal setup fails as usual.
    Returns ``None`` when output was written without paging.
    """
    if nopager or (not buffer.is_blank and not os.isatty(sys.stdin.fileno())):
        write_plain(buffer)
        return None

    settings = load_viewer_settings()
    terminal = TerminalController(stdin_fd=sys.stdin.fileno(), stdout_fd=sys.stdout.fileno())
    terminal.window_size()
    engine = ViewportEngine(welcome_message=settings.welcome_message)
    return run_main_loop(
        engine,
        buffer,
        terminal,
        stdin_fd=terminal.stdin_fd,
        escape_timeout_ms=settings.escape_timeout_ms,
    )
