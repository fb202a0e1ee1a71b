"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` values.
Handles ESC-sequence timing, CSI modifier parameters, and UTF-8 characters.
"""

from __future__ import annotations

import os
import select

from .keys import (
    BACKSPACE,
    BACKTAB,
    DELETE,
    DOWN,
    END,
    ENTER,
    ESC,
    HOME,
    INSERT,
    LEFT,
    PAGE_DOWN,
    PAGE_UP,
    RIGHT,
    TAB,
    UNKNOWN,
    UP,
    KeyEvent,
    Modifier,
)

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS: dict[str, str] = {
    "A": UP,
    "B": DOWN,
    "C": RIGHT,
    "D": LEFT,
    "H": HOME,
    "F": END,
}

_CSI_TILDE_KEYS: dict[str, str] = {
    "1": HOME,
    "2": INSERT,
    "3": DELETE,
    "4": END,
    "5": PAGE_UP,
    "6": PAGE_DOWN,
    "7": HOME,
    "8": END,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _modifiers_from_param(param: str) -> Modifier:
    """Decode the xterm modifier parameter (``1 + bitmask``)."""
    try:
        value = int(param) - 1
    except ValueError:
        return Modifier.NONE
    modifiers = Modifier.NONE
    if value & 1:
        modifiers |= Modifier.SHIFT
    if value & 2:
        modifiers |= Modifier.ALT
    if value & 4:
        modifiers |= Modifier.CTRL
    return modifiers


def _utf8_length(first: int) -> int:
    if first >= 0xF0:
        return 4
    if first >= 0xE0:
        return 3
    if first >= 0xC0:
        return 2
    return 1


def _decode_csi(fd: int) -> KeyEvent:
    payload: list[str] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent(ESC)
        ch = part.decode("ascii", errors="replace")
        if "@" <= ch <= "~":
            final = ch
            break
        payload.append(ch)
        if len(payload) > 16:
            return KeyEvent(UNKNOWN)

    params = "".join(payload).split(";")
    modifiers = _modifiers_from_param(params[1]) if len(params) > 1 else Modifier.NONE
    if final == "Z":
        return KeyEvent(BACKTAB, Modifier.SHIFT)
    if final in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[final], modifiers)
    if final == "~" and params[0] in _CSI_TILDE_KEYS:
        return KeyEvent(_CSI_TILDE_KEYS[params[0]], modifiers)
    return KeyEvent(UNKNOWN)


def _decode_escape(fd: int) -> KeyEvent:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent(ESC)
    if seq == b"[":
        return _decode_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return KeyEvent(ESC)
        name = _CSI_FINAL_KEYS.get(final.decode("ascii", errors="replace"))
        return KeyEvent(name) if name else KeyEvent(UNKNOWN)
    # Not a sequence: report ESC now and keep the byte for the next read.
    _PENDING_BYTES.append(seq)
    return KeyEvent(ESC)


def read_key(fd: int, timeout_ms: int | None = None) -> KeyEvent | None:
    """Read one key from ``fd``.

    Returns ``None`` when ``timeout_ms`` elapses without input or the stream
    is closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        ch = os.read(fd, 1)
        if not ch:
            return None

    if ch in {b"\r", b"\n"}:
        return KeyEvent(ENTER)
    if ch == b"\t":
        return KeyEvent(TAB)
    if ch in {b"\x08", b"\x7f"}:
        return KeyEvent(BACKSPACE)
    if ch == b"\x1b":
        return _decode_escape(fd)

    code = ch[0]
    if 1 <= code <= 26:
        return KeyEvent(chr(code + 96), Modifier.CTRL)
    if code < 0x20:
        return KeyEvent(UNKNOWN)

    raw = bytearray(ch)
    for _ in range(_utf8_length(code) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        raw.extend(nxt)
    text = raw.decode("utf-8", errors="replace")
    return KeyEvent(text[:1] or UNKNOWN)
