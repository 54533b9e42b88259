"""Closed set of logical keys consumed by the viewport engine.

``decode_key`` maps the reader's normalized tokens onto ``KeyEvent`` values.
The engine dispatches on ``KeyKind`` and never sees raw terminal bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CTRL_PREFIX = "CTRL_"
QUIT_CHAR = "q"


class KeyKind(Enum):
    CTRL = "ctrl"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    DELETE = "delete"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key; ``char`` is set only for ``KeyKind.CTRL``."""

    kind: KeyKind
    char: str | None = None

    @property
    def is_quit(self) -> bool:
        return self.kind is KeyKind.CTRL and self.char == QUIT_CHAR


QUIT = KeyEvent(KeyKind.CTRL, QUIT_CHAR)
UNRECOGNIZED = KeyEvent(KeyKind.UNRECOGNIZED)

_NAMED_TOKENS: dict[str, KeyKind] = {
    "UP": KeyKind.ARROW_UP,
    "DOWN": KeyKind.ARROW_DOWN,
    "LEFT": KeyKind.ARROW_LEFT,
    "RIGHT": KeyKind.ARROW_RIGHT,
    "PAGE_UP": KeyKind.PAGE_UP,
    "PAGE_DOWN": KeyKind.PAGE_DOWN,
    "HOME": KeyKind.HOME,
    "END": KeyKind.END,
    "DELETE": KeyKind.DELETE,
}


def decode_key(token: str) -> KeyEvent:
    """Translate one reader token into a ``KeyEvent``.

    ``CTRL_<LETTER>`` tokens become ``KeyKind.CTRL`` carrying the lowercase
    letter; unknown tokens become ``UNRECOGNIZED``.
    """
    kind = _NAMED_TOKENS.get(token)
    if kind is not None:
        return KeyEvent(kind)
    if token.startswith(CTRL_PREFIX):
        letter = token[len(CTRL_PREFIX) :]
        if len(letter) == 1 and letter.isalpha():
            return KeyEvent(KeyKind.CTRL, letter.lower())
    return UNRECOGNIZED
