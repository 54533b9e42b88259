"""Terminal control helpers for the viewer session.

Owns the raw-mode lifecycle, window-size queries, and frame painting.
``raw_mode`` is the scoped guard that always restores the saved tty state.
"""

from __future__ import annotations

import contextlib
import os
import sys
import termios
import tty

from ..errors import TerminalError
from ..render import compose_clear_screen, compose_frame
from ..viewport import RenderPlan, WindowSize


class TerminalController:
    """Manage terminal mode transitions and screen output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"could not read terminal attributes: {exc}") from exc
        self._raw_mode_enabled = False

    @property
    def raw_mode_enabled(self) -> bool:
        return self._raw_mode_enabled

    def enable_raw_mode(self) -> None:
        """Switch stdin to raw mode (no echo, no line buffering, no signals)."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalError(f"could not enable raw mode: {exc}") from exc
        self._raw_mode_enabled = True

    def disable_raw_mode(self) -> None:
        """Restore the tty attributes captured at construction.

        A no-op when raw mode is not active, so restoration happens once.
        """
        if not self._raw_mode_enabled:
            return
        self._raw_mode_enabled = False
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except termios.error as exc:
            raise TerminalError(f"could not disable raw mode: {exc}") from exc

    def window_size(self) -> WindowSize:
        """Query the current window size in character cells."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            raise TerminalError(f"could not query window size: {exc}") from exc
        return WindowSize(rows=size.lines, columns=size.columns)

    def _write(self, payload: str) -> None:
        try:
            os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))
        except OSError as exc:
            raise TerminalError(f"could not write to terminal: {exc}") from exc

    def paint(self, plan: RenderPlan) -> None:
        self._write(compose_frame(plan))

    def clear_screen(self) -> None:
        self._write(compose_clear_screen())

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/exit calls.

        When the body fails, a restore failure is reported on stderr so the
        original error is the one that propagates.
        """
        try:
            self.enable_raw_mode()
            yield self
        except BaseException:
            try:
                self.disable_raw_mode()
            except TerminalError as restore_exc:
                print(f"kiloview: {restore_exc}", file=sys.stderr)
            raise
        self.disable_raw_mode()
