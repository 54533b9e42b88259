"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing for arrows, paging, home/end, and delete.
"""

from __future__ import annotations

import os
import select

from ..errors import KeyReadError

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

# Plain control bytes that keep their own meaning instead of CTRL_<LETTER>.
_SPECIAL_CONTROL_BYTES: dict[bytes, str] = {
    b"\t": "TAB",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"3": "DELETE",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}


def _read_byte(fd: int) -> bytes:
    """Block for one byte, raising ``KeyReadError`` on failure or end of input."""
    try:
        ch = os.read(fd, 1)
    except OSError as exc:
        raise KeyReadError(f"failed to read key: {exc}") from exc
    if not ch:
        raise KeyReadError("failed to read key: end of input")
    return ch


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    try:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(fd, 1)
    except OSError as exc:
        raise KeyReadError(f"failed to read key: {exc}") from exc
    if not ch:
        return None
    return ch


def _drain_csi(fd: int, ch: bytes, timeout_ms: int) -> None:
    """Consume the rest of an unsupported CSI sequence starting at ``ch``.

    Parameter and intermediate bytes are skipped up to the final byte. A byte
    outside the sequence grammar is queued for the next ``read_key`` call.
    """
    while True:
        code = ch[0]
        if 0x40 <= code <= 0x7E:
            return
        if not 0x20 <= code <= 0x3F:
            _PENDING_BYTES.append(ch)
            return
        part = _read_ready_byte(fd, timeout_ms)
        if part is None:
            return
        ch = part


def read_key(fd: int, escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> str:
    """Block until one key is available and return its token."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        ch = _read_byte(fd)

    special = _SPECIAL_CONTROL_BYTES.get(ch)
    if special is not None:
        return special
    code = ch[0]
    if 1 <= code <= 26:
        return f"CTRL_{chr(ord('A') + code - 1)}"

    if ch != b"\x1b":
        if code < 0x80:
            return ch.decode("ascii")
        # Collect the remaining bytes of a UTF-8 sequence.
        width = 2 if code >= 0xC0 else 1
        width = 3 if code >= 0xE0 else width
        width = 4 if code >= 0xF0 else width
        data = ch
        while len(data) < width:
            part = _read_ready_byte(fd, escape_timeout_ms)
            if part is None:
                break
            data += part
        return data.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, escape_timeout_ms)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    introducer = seq
    seq = _read_ready_byte(fd, escape_timeout_ms)
    if seq is None:
        return "ESC"
    final = _CSI_FINAL_KEYS.get(seq)
    if final is not None:
        return final
    if introducer == b"[" and seq in _CSI_TILDE_KEYS:
        tilde = _read_ready_byte(fd, escape_timeout_ms)
        if tilde == b"~":
            return _CSI_TILDE_KEYS[seq]
        if tilde is not None:
            _drain_csi(fd, tilde, escape_timeout_ms)
    return "ESC"
