"""ANSI frame composition for render plans.

Turns a ``RenderPlan`` into one escape-sequence string that repaints the
whole window. Writing the bytes is left to the terminal controller.
"""

from __future__ import annotations

from .viewport import RenderPlan

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
CURSOR_HOME = "\033[H"
CLEAR_TO_EOL = "\033[K"
CLEAR_SCREEN = "\033[2J"


def move_cursor(row: int, col: int) -> str:
    """Return the CUP sequence for zero-based screen coordinates."""
    return f"\033[{max(0, row) + 1};{max(0, col) + 1}H"


def compose_frame(plan: RenderPlan) -> str:
    out: list[str] = [HIDE_CURSOR, CURSOR_HOME]
    for row in plan.rows:
        out.append(row.text)
        # Erase leftovers from a longer line painted in the previous frame.
        out.append(CLEAR_TO_EOL)
        if row.newline:
            out.append("\r\n")
    cursor_row, cursor_col = plan.cursor
    out.append(move_cursor(cursor_row, cursor_col))
    out.append(SHOW_CURSOR)
    return "".join(out)


def compose_clear_screen() -> str:
    return CLEAR_SCREEN + CURSOR_HOME
