"""Keyboard input: decode a raw terminal byte stream into key events."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .constants import EditorConstants

logger = logging.getLogger(__name__)

ESCAPE = 0x1b
CSI_TERMINATORS = frozenset(b'ABCDFHR~')
ALTERNATE_ESCAPE = ord('O')
ALTERNATE_TERMINATORS = frozenset(b'FH')
PARAMETER_SEPARATOR = b';'


class KeyType(Enum):
    """Types of key events."""
    KEY = "key"  # A single byte, possibly a control character
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    DELETE = "delete"
    CURSOR_POSITION = "cursor_position"  # Terminal reply to a status report
    UNIDENTIFIED = "unidentified"


@dataclass(frozen=True)
class KeyEvent:
    """Represents a decoded input event.

    For ``KeyType.KEY`` events ``code`` is the byte value; control bytes are
    reported as the lowercase letter they map to with ``is_ctrl`` set, so
    Ctrl-Q is ``KeyEvent.key(ord('q'), ctrl=True)``. Cursor position reports
    carry the 1-based ``row`` and ``column``.
    """
    key_type: KeyType
    code: Optional[int] = None
    is_ctrl: bool = False
    row: Optional[int] = None
    column: Optional[int] = None

    @classmethod
    def key(cls, code: int, ctrl: bool = False) -> 'KeyEvent':
        return cls(KeyType.KEY, code=code, is_ctrl=ctrl)

    @classmethod
    def ctrl(cls, letter: str) -> 'KeyEvent':
        return cls(KeyType.KEY, code=ord(letter), is_ctrl=True)

    @classmethod
    def cursor_position(cls, row: int, column: int) -> 'KeyEvent':
        return cls(KeyType.CURSOR_POSITION, row=row, column=column)

    @property
    def char(self) -> Optional[str]:
        """The character for a plain key, or None."""
        if self.key_type != KeyType.KEY or self.is_ctrl:
            return None
        return chr(self.code)


UNIDENTIFIED = KeyEvent(KeyType.UNIDENTIFIED)

# Final byte of a CSI sequence -> event
_CSI_FINAL_KEYS = {
    ord('A'): KeyType.UP,
    ord('B'): KeyType.DOWN,
    ord('C'): KeyType.RIGHT,
    ord('D'): KeyType.LEFT,
    ord('H'): KeyType.HOME,
    ord('F'): KeyType.END,
}

# First parameter of a ``CSI n ~`` sequence -> event
_TILDE_KEYS = {
    1: KeyType.HOME,
    3: KeyType.DELETE,
    4: KeyType.END,
    5: KeyType.PAGE_UP,
    6: KeyType.PAGE_DOWN,
    7: KeyType.HOME,
    8: KeyType.END,
}


class ByteSource(Protocol):
    def read_byte(self) -> Optional[int]:
        """Return the next byte, or None if nothing arrived within the read timeout."""


def parse_parameters(params: bytes) -> list[Optional[int]]:
    """Split CSI parameter bytes on ';' into unsigned integers (None when not a number)."""
    values: list[Optional[int]] = []
    for part in params.split(PARAMETER_SEPARATOR):
        values.append(int(part) if part.isdigit() else None)
    return values


def decode_sequence(final: int, params: bytes) -> KeyEvent:
    """Map the final byte and parameters of a CSI sequence to an event."""
    if final == ord('R'):
        values = parse_parameters(params)
        if len(values) >= 2 and values[0] is not None and values[1] is not None:
            return KeyEvent.cursor_position(values[0], values[1])
        return UNIDENTIFIED
    if final == ord('~'):
        first = parse_parameters(params)[0]
        key_type = _TILDE_KEYS.get(first)
        return KeyEvent(key_type) if key_type else UNIDENTIFIED
    key_type = _CSI_FINAL_KEYS.get(final)
    return KeyEvent(key_type) if key_type else UNIDENTIFIED


class InputDecoder:
    """Turns a byte source into an endless stream of key events.

    Iterating never stops on its own; each step blocks for at most one read
    timeout unless it is in the middle of an escape sequence. A byte read
    while looking for ``[`` after Escape is held in a one-byte lookahead and
    decoded on the next step.
    """

    def __init__(self, source: ByteSource):
        self.source = source
        self._pending: Optional[int] = None

    def __iter__(self) -> 'InputDecoder':
        return self

    def __next__(self) -> KeyEvent:
        return self.read_event()

    def read_event(self) -> KeyEvent:
        """Read and decode the next event.

        A read that times out with no byte yields an unidentified event.
        """
        if self._pending is not None:
            byte, self._pending = self._pending, None
        else:
            byte = self.source.read_byte()
            if byte is None:
                return UNIDENTIFIED
        return self._decode(byte)

    def _read_blocking(self) -> int:
        """Chain timed-out reads until a byte arrives."""
        while True:
            byte = self.source.read_byte()
            if byte is not None:
                return byte

    def _decode(self, byte: int) -> KeyEvent:
        if byte == ESCAPE:
            return self._decode_escape()
        if 0x20 <= byte <= 0x7f:
            return KeyEvent.key(byte)
        if 0x01 <= byte <= 0x1f:
            return KeyEvent.key(byte | 0x60, ctrl=True)
        return UNIDENTIFIED

    def _decode_escape(self) -> KeyEvent:
        lone_escape = KeyEvent.key(ESCAPE)
        byte = self.source.read_byte()
        if byte is None:
            return lone_escape
        if byte != ord('['):
            self._pending = byte
            return lone_escape

        params = bytearray()
        overflow = False

        def keep(b: int):
            nonlocal overflow
            if len(params) < EditorConstants.MAX_SEQUENCE_LENGTH:
                params.append(b)
            else:
                overflow = True

        while True:
            byte = self._read_blocking()
            if byte == ALTERNATE_ESCAPE:
                # ESC [ ... O F / ESC [ ... O H
                keep(byte)
                byte = self._read_blocking()
                if byte in ALTERNATE_TERMINATORS:
                    break
            elif byte in CSI_TERMINATORS:
                break
            keep(byte)

        if overflow:
            logger.debug("Discarded overlong escape sequence ending in %r", chr(byte))
            return UNIDENTIFIED
        event = decode_sequence(byte, bytes(params))
        if event is UNIDENTIFIED:
            logger.debug("Unidentified escape sequence: %r", b'\x1b[' + bytes(params) + bytes([byte]))
        return event
