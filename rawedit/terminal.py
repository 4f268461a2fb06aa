"""Terminal interface: raw-mode tty session plus Blessed for output and geometry."""

import logging
import os
import signal
import sys
import termios
from typing import Optional

import blessed

from .constants import AnsiSequences, EditorConstants

logger = logging.getLogger(__name__)


def make_raw_attributes(attrs: list) -> list:
    """Return a copy of termios attributes configured for raw input.

    Echo, canonical mode, signals, extended input processing, flow control,
    CR-to-NL translation, parity checking and output post-processing are
    switched off and characters are forced to 8 bits. Reads return after
    ``READ_TIMEOUT_DECISECONDS`` even when no byte is available.
    """
    iflag, oflag, cflag, lflag, ispeed, ospeed, cc = attrs
    iflag &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    oflag &= ~termios.OPOST
    cflag |= termios.CS8
    lflag &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    cc = list(cc)
    cc[termios.VMIN] = 0
    cc[termios.VTIME] = EditorConstants.READ_TIMEOUT_DECISECONDS
    return [iflag, oflag, cflag, lflag, ispeed, ospeed, cc]


class RawTerminalSession:
    """Raw mode on a terminal for the duration of a ``with`` block.

    The attributes in effect on entry are restored on exit no matter how the
    block is left. SIGTERM and SIGHUP are turned into ``SystemExit`` while the
    session is active so that being killed unwinds through the restore too.
    """

    TERMINATING_SIGNALS = (signal.SIGTERM, signal.SIGHUP)

    def __init__(self, fd: int):
        self.fd = fd
        self._original_attrs: Optional[list] = None
        self._original_handlers: dict = {}

    def __enter__(self) -> 'RawTerminalSession':
        """Switch to raw mode.

        Raises:
            OSError: If the terminal attributes cannot be read or set, for
                instance when the input is not a terminal
        """
        try:
            self._original_attrs = termios.tcgetattr(self.fd)
        except termios.error as e:
            raise OSError(*e.args) from e
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, make_raw_attributes(self._original_attrs))
            for signum in self.TERMINATING_SIGNALS:
                self._original_handlers[signum] = signal.signal(signum, self._handle_terminate)
        except termios.error as e:
            self.restore()
            raise OSError(*e.args) from e
        except BaseException:
            self.restore()
            raise
        logger.debug("Raw mode enabled on fd %d", self.fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False

    @property
    def active(self) -> bool:
        return self._original_attrs is not None

    def restore(self) -> None:
        """Put back the signal handlers and terminal attributes captured on entry."""
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()
        if self._original_attrs is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._original_attrs)
            logger.debug("Terminal attributes restored on fd %d", self.fd)
        except (termios.error, OSError) as e:
            # Raising here would hide whatever exception is unwinding
            logger.warning("Could not restore terminal attributes on fd %d: %s", self.fd, e)
        finally:
            self._original_attrs = None

    def _handle_terminate(self, signum, frame):
        del frame  # Unused
        raise SystemExit(128 + signum)

    def read_byte(self) -> Optional[int]:
        """Read one byte, or return None if none arrived within the read timeout."""
        data = os.read(self.fd, 1)
        if not data:
            return None
        return data[0]


class TerminalInterface:
    """Handles terminal output and window geometry using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None, input_fd: Optional[int] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self._input_fd = input_fd

    @property
    def input_fd(self) -> int:
        if self._input_fd is None:
            self._input_fd = sys.stdin.fileno()
        return self._input_fd

    def raw_mode(self) -> RawTerminalSession:
        """Return a session that puts the input terminal into raw mode when entered."""
        return RawTerminalSession(self.input_fd)

    def window_size(self) -> Optional[tuple[int, int]]:
        """Return ``(rows, columns)`` as reported by the host, or None if unknown.

        Blessed falls back to default dimensions when the output is not a
        terminal, so those are not trusted.
        """
        if not self.term.is_a_tty:
            return None
        rows, cols = self.term.height, self.term.width
        if not rows or not cols:
            return None
        return rows, cols

    def write(self, data: str) -> None:
        """Write a complete chunk of output and flush it."""
        stream = self.term.stream
        stream.write(data)
        stream.flush()

    def request_cursor_position(self) -> None:
        """Move the cursor to the far corner and ask the terminal to report it."""
        self.write(AnsiSequences.QUERY_WINDOW_SIZE)

    def clear_screen(self) -> None:
        """Clear the entire screen and home the cursor."""
        self.write(AnsiSequences.CLEAR_SCREEN + AnsiSequences.CURSOR_HOME)
