"""Main interactive loop for the viewer.

Each cycle paints one frame, blocks for one key, and feeds it to the engine.
Raw mode is held for the whole loop and released on every exit path.
"""

from __future__ import annotations

from enum import Enum

from ..buffer import LineBuffer
from ..input import ESC_SEQUENCE_TIMEOUT_MS, decode_key, read_key
from ..viewport import ViewportEngine
from .terminal import TerminalController


class LoopState(Enum):
    RUNNING = "running"
    EXITING = "exiting"


def run_main_loop(
    engine: ViewportEngine,
    buffer: LineBuffer,
    terminal: TerminalController,
    stdin_fd: int,
    escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS,
) -> LoopState:
    """Run the viewer until the quit key is pressed.

    The window size is queried every cycle so a resize shows up on the next
    frame. Errors from the terminal or key reader propagate after the
    ``raw_mode`` guard has restored the terminal.
    """
    state = LoopState.RUNNING
    with terminal.raw_mode():
        while state is LoopState.RUNNING:
            window = terminal.window_size()
            terminal.paint(engine.render_plan(buffer, window))
            key = decode_key(read_key(stdin_fd, escape_timeout_ms))
            if not engine.handle_key(key, buffer, window):
                state = LoopState.EXITING
        terminal.clear_screen()
    return state
