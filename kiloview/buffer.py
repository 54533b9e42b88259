"""Line buffer loading for the viewer.

Reads a file once with tolerant decoding and splits it into display lines.
Control bytes are neutralized so painting a line never moves the terminal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .errors import BufferLoadError

TAB_STOP = 8
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_line(line: str) -> str:
    """Escape control characters and expand tabs so one char is one column."""
    if "\t" in line:
        line = line.expandtabs(TAB_STOP)
    if _CONTROL_RE.search(line) is None:
        return line
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", line)


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n``/``\\r\\n`` terminators; a trailing newline adds no line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [sanitize_line(line[:-1] if line.endswith("\r") else line) for line in lines]


@dataclass(frozen=True)
class LineBuffer:
    """Immutable, ordered sequence of text lines.

    Always holds at least one line. The single-empty-line buffer is the
    "blank" buffer that renders the welcome banner.
    """

    lines: tuple[str, ...] = ("",)

    def __post_init__(self) -> None:
        if not self.lines:
            object.__setattr__(self, "lines", ("",))

    @classmethod
    def empty(cls) -> LineBuffer:
        return cls()

    @classmethod
    def from_text(cls, text: str) -> LineBuffer:
        return cls(tuple(split_lines(text)))

    @classmethod
    def from_path(cls, path: Path) -> LineBuffer:
        """Load ``path`` into a buffer, raising ``BufferLoadError`` on failure."""
        if path.is_dir():
            raise BufferLoadError(f"could not read file at {str(path)!r}: is a directory")
        try:
            text = read_text(path)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise BufferLoadError(f"could not read file at {str(path)!r}: {reason}") from exc
        return cls.from_text(text)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_blank(self) -> bool:
        """Return whether this is the single-empty-line default buffer."""
        return self.lines == ("",)

    def line(self, row: int) -> str | None:
        """Return the line at ``row`` or ``None`` when it does not exist."""
        if 0 <= row < len(self.lines):
            return self.lines[row]
        return None

    def line_length(self, row: int) -> int | None:
        line = self.line(row)
        return None if line is None else len(line)
