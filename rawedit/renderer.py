"""Full-screen repaint of the text area, status bar and message line."""

from typing import Optional

from . import __version__
from .constants import AnsiSequences, EditorConstants
from .model import FilePath, StatusMessage, TextBuffer
from .view import ViewportCursor


class Renderer:
    """Builds one complete frame per call.

    Nothing is diffed against the previous frame: every visible row is
    redrawn and cleared to the end of the line, so a resize or a stale
    screen can never leave garbage behind.
    """

    def __init__(self, buffer: TextBuffer, view: ViewportCursor):
        self.buffer = buffer
        self.view = view

    def render(self, file: Optional[FilePath], message: Optional[StatusMessage], now: float) -> str:
        """Return the escape sequences and text for the whole screen.

        Args:
            file: File associated with the buffer, or None for an untitled buffer
            message: Current status message, shown only while it is fresh
            now: Current time on the same clock as ``message.created_at``
        """
        out: list[str] = [AnsiSequences.HIDE_CURSOR, AnsiSequences.CURSOR_HOME]
        self.draw_rows(out)
        self.draw_status_bar(out, file)
        self.draw_message_bar(out, message, now)
        row, col = self.view.screen_cursor
        out.append(AnsiSequences.CURSOR_POSITION.format(row, col))
        out.append(AnsiSequences.SHOW_CURSOR)
        return ''.join(out)

    def trim_line(self, line: str) -> str:
        """The part of a rendered line that falls inside the window."""
        start = self.view.col_offset
        return line[start:start + self.view.screen_cols]

    def welcome_line(self) -> str:
        cols = self.view.screen_cols
        welcome = EditorConstants.WELCOME_MESSAGE.format(__version__)[:cols]
        padding = (cols - len(welcome)) // 2
        if padding > 0:
            return '~' + ' ' * (padding - 1) + welcome
        return welcome

    def draw_rows(self, out: list[str]):
        view = self.view
        for y in range(view.screen_rows):
            file_row = y + view.row_offset
            if file_row < self.buffer.row_count:
                out.append(self.trim_line(self.buffer[file_row].render))
            elif self.buffer.is_empty and y == view.screen_rows // 3:
                out.append(self.welcome_line())
            else:
                out.append('~')
            out.append(AnsiSequences.CLEAR_LINE)
            out.append(AnsiSequences.NEWLINE)

    def status_text(self, file: Optional[FilePath]) -> str:
        """Status bar contents padded to exactly the screen width."""
        cols = self.view.screen_cols
        name = file.display_name if file else EditorConstants.UNTITLED_NAME
        total = self.buffer.row_count
        left = f"{name[:EditorConstants.STATUS_FILENAME_WIDTH]} - {total} lines"
        if self.buffer.dirty:
            left += " (modified)"
        left = left[:cols]
        right = f"{self.view.cy + 1}/{total}"
        rest = cols - len(left)
        if len(right) > rest:
            return left + ' ' * rest
        return left + right.rjust(rest)

    def draw_status_bar(self, out: list[str], file: Optional[FilePath]):
        out.append(AnsiSequences.INVERSE)
        out.append(self.status_text(file))
        out.append(AnsiSequences.RESET_ATTRIBUTES)
        out.append(AnsiSequences.NEWLINE)

    def draw_message_bar(self, out: list[str], message: Optional[StatusMessage], now: float):
        out.append(AnsiSequences.CLEAR_LINE)
        if message is not None and message.is_visible(now):
            out.append(message.text[:self.view.screen_cols])
