"""Main editor controller."""

import logging
import os
import stat
import tempfile
import time
from typing import Callable, Optional

from .commands import CommandRegistry, QuitCommand
from .constants import EditorConstants
from .keyboard import InputDecoder, KeyEvent, KeyType
from .model import FilePath, StatusMessage, TextBuffer
from .renderer import Renderer
from .terminal import TerminalInterface
from .view import ViewportCursor

logger = logging.getLogger(__name__)


def split_lines(content: str) -> list[str]:
    """Split file contents into rows.

    Lines end at ``\\n``; one ``\\r`` before it is dropped. A final newline
    does not start another row, and empty content has no rows.
    """
    if not content:
        return []
    lines = content.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def write_atomically(filename: str, data: bytes):
    """Write ``data`` to ``filename`` through a temporary file and a rename.

    The temporary file lives in the same directory so the rename stays on
    one filesystem. An existing file keeps its permission bits. Errors
    propagate after the temporary file is removed.
    """
    dir_name = os.path.dirname(filename) or '.'
    try:
        mode = stat.S_IMODE(os.stat(filename).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        mode = 0o666 & ~umask

    with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name,
                                     suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                     delete=False) as temp_file:
        temp_filename = temp_file.name
        try:
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        except BaseException:
            os.remove(temp_filename)
            raise
    try:
        os.chmod(temp_filename, mode)
        os.replace(temp_filename, filename)
    except BaseException:
        if os.path.exists(temp_filename):
            os.remove(temp_filename)
        raise


class Editor:
    """Main editor application controller.

    Each cycle of the main loop repaints the screen, reads one input event
    and applies the command bound to it.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 clock: Callable[[], float] = time.monotonic):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.clock = clock
        self.buffer = TextBuffer()
        self.view = ViewportCursor(self.buffer)
        self.renderer = Renderer(self.buffer, self.view)
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.file: Optional[FilePath] = None
        self.status_message: Optional[StatusMessage] = None
        self.quit_armed = False  # True after Ctrl-Q on a modified buffer
        self.running = False

    @property
    def modified(self) -> bool:
        return self.buffer.dirty

    def set_status_message(self, text: str):
        self.status_message = StatusMessage(text, self.clock())

    def run(self):
        """Run the main editor loop until the user quits."""
        with self.terminal.raw_mode() as session:
            try:
                decoder = InputDecoder(session)
                self.update_screen_size(decoder)
                if self.status_message is None:
                    self.set_status_message(EditorConstants.HELP_MESSAGE)
                self.running = True
                while self.running:
                    self.refresh_screen()
                    self.process_event(decoder.read_event())
            finally:
                self.terminal.clear_screen()

    def update_screen_size(self, decoder: Optional[InputDecoder] = None):
        """Size the text area from the terminal window.

        When the host cannot report the size and a decoder is given, the
        terminal itself is asked where the cursor ends up in the far corner.
        """
        size = self.terminal.window_size()
        if size is None and decoder is not None:
            size = self.query_window_size(decoder)
            logger.debug("Window size from cursor position report: %s", size)
        if size is None:
            if self.view.screen_rows and self.view.screen_cols:
                return
            raise OSError("Unable to determine terminal window size")
        rows, cols = size
        self.view.set_screen_size(rows - EditorConstants.STATUS_LINES, cols)

    def query_window_size(self, decoder: InputDecoder) -> Optional[tuple[int, int]]:
        self.terminal.request_cursor_position()
        for _ in range(EditorConstants.SIZE_QUERY_ATTEMPTS):
            event = decoder.read_event()
            if event.key_type == KeyType.CURSOR_POSITION:
                return event.row, event.column
        return None

    def refresh_screen(self):
        """Repaint the whole screen as a single write."""
        self.update_screen_size()
        self.view.scroll()
        frame = self.renderer.render(self.file, self.status_message, self.clock())
        self.terminal.write(frame)

    def process_event(self, key_event: KeyEvent):
        """Handle one decoded input event.

        Events without a command are dropped with no side effects. Any
        other key than quit disarms a pending quit confirmation.
        """
        command = self.command_registry.get_command(key_event)
        if command is None:
            return
        if not isinstance(command, QuitCommand):
            self.quit_armed = False
        command.execute(self, key_event)

    def request_quit(self):
        """Quit, unless the buffer is modified and this is the first request."""
        if not self.modified or self.quit_armed:
            self.running = False
            return
        self.quit_armed = True
        self.set_status_message(EditorConstants.QUIT_WARNING_MESSAGE)

    def insert_char(self, ch: str):
        view = self.view
        if view.cy == self.buffer.row_count:
            self.buffer.insert_blank_row(view.cy)
        self.buffer.insert_char(view.cy, view.cx, ch)
        view.cx += 1

    def insert_newline(self):
        view = self.view
        self.buffer.split_row_at(view.cy, view.cx)
        view.set_position(view.cy + 1, 0)

    def delete_char(self):
        """Delete the character before the cursor, joining rows at column 0."""
        cy, cx = self.buffer.delete_char(self.view.cy, self.view.cx)
        self.view.set_position(cy, cx)

    def open_file(self, filename: str):
        """Load a file into the editor.

        Errors opening or decoding the file propagate; the buffer and file
        association are left as they were.

        Args:
            filename: Path to file to load
        """
        with open(filename, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
        self.buffer.replace(split_lines(content))
        self.file = FilePath.from_path(filename)
        self.view.reset()
        logger.debug("Opened %s with %d rows", filename, self.buffer.row_count)

    def save(self) -> bool:
        """Write the buffer to its file, one newline-terminated line per row.

        Returns:
            True if the buffer was written, False if it has no file name
        """
        if self.file is None:
            self.set_status_message(EditorConstants.NO_FILENAME_MESSAGE)
            return False
        data = ''.join(line + '\n' for line in self.buffer.lines()).encode('utf-8')
        write_atomically(self.file.path, data)
        self.buffer.dirty = False
        self.set_status_message(EditorConstants.SAVED_MESSAGE.format(len(data), self.file.display_name))
        logger.debug("Saved %d bytes to %s", len(data), self.file.path)
        return True
