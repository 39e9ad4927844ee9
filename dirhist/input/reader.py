"""Low-level terminal input decoding.

Reads raw bytes from a tty and translates them into normalized key tokens.
Handles ESC-sequence timing, shift-modified arrows, Alt-prefixed keys,
UTF-8 text, and SGR mouse reports. Sequences that name no supported key
decode to ``UNKNOWN`` so they can never be mistaken for a lone Escape.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
CSI_MAX_LENGTH = 32
_PENDING_BYTES: list[bytes] = []

ENTER = "ENTER"
TAB = "TAB"
ESC = "ESC"
BACKSPACE = "BACKSPACE"
HOME = "HOME"
END = "END"
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
SHIFT_UP = "SHIFT_UP"
SHIFT_DOWN = "SHIFT_DOWN"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
DELETE = "DELETE"
CTRL_A = "CTRL_A"
CTRL_Q = "CTRL_Q"
MOUSE = "MOUSE"
UNKNOWN = "UNKNOWN"

_CSI_LETTERS = {
    "A": UP,
    "B": DOWN,
    "C": RIGHT,
    "D": LEFT,
    "H": HOME,
    "F": END,
}
_CSI_TILDE = {
    "1": HOME,
    "7": HOME,
    "4": END,
    "8": END,
    "3": DELETE,
    "5": PAGE_UP,
    "6": PAGE_DOWN,
}
_SHIFTED = {UP: SHIFT_UP, DOWN: SHIFT_DOWN}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_text(fd: int, first: bytes) -> str:
    """Decode one possibly multi-byte UTF-8 character starting at ``first``."""
    raw = bytearray(first)
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        raw += nxt
    return raw.decode("utf-8", errors="replace")


def _control_token(ch: bytes) -> str | None:
    code = ch[0]
    if ch in {b"\r", b"\n"}:
        return ENTER
    if ch == b"\t":
        return TAB
    if ch in {b"\x08", b"\x7f"}:
        return BACKSPACE
    if 1 <= code <= 26:
        return f"CTRL_{chr(code + 64)}"
    return None


def _decode_csi(params: str, final: str) -> str:
    """Map a CSI parameter string and final byte to a key token."""
    if final == "~":
        return _CSI_TILDE.get(params.split(";")[0], UNKNOWN)
    token = _CSI_LETTERS.get(final)
    if token is None:
        return UNKNOWN
    parts = params.split(";")
    # ESC [ 1 ; <modifier> <letter>; modifier 2 is Shift.
    if len(parts) == 2 and parts[1] == "2" and token in _SHIFTED:
        return _SHIFTED[token]
    return token


def _decode_sgr_mouse(fd: int) -> str:
    payload: list[bytes] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > CSI_MAX_LENGTH:
            return UNKNOWN
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn, col, row = int(btn_s), int(col_s), int(row_s)
    except ValueError:
        return UNKNOWN
    return f"{MOUSE}:{btn}:{col}:{row}"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Block for one key and return its token.

    Returns ``""`` when ``timeout_ms`` elapses without input or the tty is
    closed. Printable input is returned as the character itself.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""
        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch != b"\x1b":
        token = _control_token(ch)
        if token is not None:
            return token
        return _decode_text(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return ESC
    if seq == b"O":
        # SS3 form sent by some terminals in application cursor mode.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "O"
        return _CSI_LETTERS.get(final.decode("ascii", errors="replace"), UNKNOWN)
    if seq != b"[":
        if seq == b"\x1b":
            _PENDING_BYTES.append(seq)
            return ESC
        # Alt+<key> arrives as ESC followed by the key itself.
        return _control_token(seq) or _decode_text(fd, seq)

    first = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if first is None:
        return "["
    if first == b"<":
        return _decode_sgr_mouse(fd)

    params = bytearray()
    part: bytes | None = first
    while part is not None and not (0x40 <= part[0] <= 0x7E):
        params += part
        if len(params) > CSI_MAX_LENGTH:
            return UNKNOWN
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if part is None:
        return UNKNOWN
    return _decode_csi(params.decode("ascii", errors="replace"), part.decode("ascii"))
