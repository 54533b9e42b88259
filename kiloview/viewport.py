"""Cursor, scroll, and render-plan engine for the viewer.

Owns the cursor and scroll offsets in buffer coordinates and derives the
visible slice of a ``LineBuffer`` for one terminal frame.
This module has no terminal I/O; ``kiloview.render`` turns plans into bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import __version__
from .buffer import LineBuffer
from .input.keys import KeyEvent, KeyKind

FILLER = "~"
DEFAULT_WELCOME_MESSAGE = f"Kiloview -- version {__version__}"


@dataclass(frozen=True)
class WindowSize:
    """Terminal dimensions in character cells."""

    rows: int
    columns: int


@dataclass
class Cursor:
    col: int = 0
    row: int = 0


@dataclass
class ScrollOffset:
    col_offset: int = 0
    row_offset: int = 0


@dataclass(frozen=True)
class DrawRow:
    """Text painted on one screen row.

    The row is always followed by clear-to-end-of-line. ``newline`` is false
    only for the last screen row.
    """

    text: str
    newline: bool


@dataclass(frozen=True)
class RenderPlan:
    rows: tuple[DrawRow, ...]
    cursor: tuple[int, int]

    @property
    def texts(self) -> list[str]:
        return [row.text for row in self.rows]


def welcome_row(message: str, columns: int) -> str:
    """Center ``message`` in ``columns`` cells, keeping the filler at column 0."""
    banner = message[: max(0, columns)]
    padding = (columns - len(banner)) // 2
    if padding > 0:
        return FILLER + " " * (padding - 1) + banner
    return banner


@dataclass
class ViewportEngine:
    """Cursor/scroll state machine driven by decoded keys.

    ``move`` applies one navigation key, ``reconcile_scroll`` makes the
    viewport follow the cursor, and ``render_plan`` builds one frame.
    """

    cursor: Cursor = field(default_factory=Cursor)
    scroll: ScrollOffset = field(default_factory=ScrollOffset)
    welcome_message: str = DEFAULT_WELCOME_MESSAGE

    def _clamp_col_to_row(self, buffer: LineBuffer) -> None:
        length = buffer.line_length(self.cursor.row)
        if length is not None:
            self.cursor.col = min(self.cursor.col, length)

    def move(self, key: KeyEvent, buffer: LineBuffer, window: WindowSize) -> None:
        """Move the cursor one step for an arrow key.

        Down past the last line snaps the row to the window row count, not
        the line count. Non-arrow keys only re-clamp the column.
        """
        kind = key.kind
        cursor = self.cursor
        if kind is KeyKind.ARROW_LEFT:
            cursor.col = max(0, cursor.col - 1)
        elif kind is KeyKind.ARROW_RIGHT:
            length = buffer.line_length(cursor.row)
            if length is not None:
                cursor.col = min(cursor.col + 1, length)
        elif kind is KeyKind.ARROW_UP:
            cursor.row = max(0, cursor.row - 1)
        elif kind is KeyKind.ARROW_DOWN:
            if cursor.row < buffer.line_count:
                cursor.row += 1
            else:
                cursor.row = window.rows
        self._clamp_col_to_row(buffer)

    def page(self, key: KeyEvent, buffer: LineBuffer, window: WindowSize) -> None:
        """Repeat the matching arrow move ``window.rows - 1`` times."""
        step = KeyEvent(KeyKind.ARROW_UP if key.kind is KeyKind.PAGE_UP else KeyKind.ARROW_DOWN)
        for _ in range(1, window.rows):
            self.move(step, buffer, window)

    def home(self) -> None:
        self.cursor.col = 0

    def end(self, window: WindowSize) -> None:
        # Targets the screen width, not the line length.
        self.cursor.col = max(0, window.columns - 1)

    def handle_key(self, key: KeyEvent, buffer: LineBuffer, window: WindowSize) -> bool:
        """Apply one decoded key; return ``False`` only for the quit signal."""
        if key.is_quit:
            return False
        kind = key.kind
        if kind in {KeyKind.ARROW_UP, KeyKind.ARROW_DOWN, KeyKind.ARROW_LEFT, KeyKind.ARROW_RIGHT}:
            self.move(key, buffer, window)
        elif kind in {KeyKind.PAGE_UP, KeyKind.PAGE_DOWN}:
            self.page(key, buffer, window)
        elif kind is KeyKind.HOME:
            self.home()
        elif kind is KeyKind.END:
            self.end(window)
        return True

    def reconcile_scroll(self, window: WindowSize) -> None:
        """Scroll by the minimal amount that brings the cursor into view."""
        rows = max(1, window.rows)
        columns = max(1, window.columns)
        cursor = self.cursor
        scroll = self.scroll

        if cursor.row < scroll.row_offset:
            scroll.row_offset = cursor.row
        elif cursor.row >= scroll.row_offset + rows:
            scroll.row_offset = cursor.row - rows + 1

        if cursor.col < scroll.col_offset:
            scroll.col_offset = cursor.col
        elif cursor.col >= scroll.col_offset + columns:
            scroll.col_offset = cursor.col - columns + 1

    def render_plan(self, buffer: LineBuffer, window: WindowSize) -> RenderPlan:
        """Reconcile scrolling, then build one draw row per screen row."""
        self.reconcile_scroll(window)
        rows = max(0, window.rows)
        columns = max(0, window.columns)
        row_offset = self.scroll.row_offset
        col_offset = self.scroll.col_offset
        blank = buffer.is_blank
        content_rows = 0 if blank else buffer.line_count

        out: list[DrawRow] = []
        for y in range(rows):
            buffer_row = row_offset + y
            if buffer_row >= content_rows:
                if blank and y == rows // 3:
                    text = welcome_row(self.welcome_message, columns)
                else:
                    text = FILLER[:columns]
            else:
                text = buffer.lines[buffer_row][col_offset : col_offset + columns]
            out.append(DrawRow(text=text, newline=y < rows - 1))

        screen_cursor = (self.cursor.row - row_offset, self.cursor.col - col_offset)
        return RenderPlan(rows=tuple(out), cursor=screen_cursor)
