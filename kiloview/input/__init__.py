"""Input-layer public API for key reading and decoding.

``read_key`` turns raw terminal bytes into tokens; ``decode_key`` maps tokens
onto the closed ``KeyEvent`` set used by the viewport engine.
"""

from .keys import QUIT, UNRECOGNIZED, KeyEvent, KeyKind, decode_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyEvent",
    "KeyKind",
    "QUIT",
    "UNRECOGNIZED",
    "decode_key",
]
