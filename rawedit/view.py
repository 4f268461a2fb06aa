from .model import TextBuffer


class ViewportCursor:
    """Cursor position and the scrolled window onto a TextBuffer.

    ``cx``/``cy`` are the character index and row of the cursor; ``cy`` may be
    one past the last row so text can be appended there. ``rx`` is the render
    column of the cursor after tab expansion and is refreshed by ``scroll()``.
    ``row_offset``/``col_offset`` are the buffer row and render column shown
    at the top-left of the text area.
    """
    cx: int = 0
    cy: int = 0
    rx: int = 0
    row_offset: int = 0
    col_offset: int = 0

    def __init__(self, buffer: TextBuffer, screen_rows: int = 0, screen_cols: int = 0):
        self.buffer = buffer
        self.screen_rows = screen_rows
        self.screen_cols = screen_cols

    def set_screen_size(self, screen_rows: int, screen_cols: int):
        self.screen_rows = max(screen_rows, 1)
        self.screen_cols = max(screen_cols, 1)

    def reset(self):
        """Put the cursor and window back at the top of the document."""
        self.cx = self.cy = self.rx = 0
        self.row_offset = self.col_offset = 0

    def set_position(self, cy: int, cx: int):
        self.cy = cy
        self.cx = cx
        self._clamp_cx()

    def _clamp_cx(self):
        self.cx = min(self.cx, self.buffer.row_length(self.cy))

    def move_left(self):
        if self.cx > 0:
            self.cx -= 1
        elif self.cy > 0:
            self.cy -= 1
            self.cx = self.buffer.row_length(self.cy)
        self._clamp_cx()

    def move_right(self):
        if self.cy < self.buffer.row_count:
            if self.cx < self.buffer.row_length(self.cy):
                self.cx += 1
            else:
                self.cy += 1
                self.cx = 0
        self._clamp_cx()

    def move_up(self):
        self.cy = max(self.cy - 1, 0)
        self._clamp_cx()

    def move_down(self):
        if self.cy < self.buffer.row_count:
            self.cy += 1
        self._clamp_cx()

    def move_home(self):
        self.cx = 0

    def move_end(self):
        if self.cy < self.buffer.row_count:
            self.cx = self.buffer.row_length(self.cy)

    def page_up(self):
        """Jump to the top of the window, then a screenful further up."""
        self.cy = self.row_offset
        self._clamp_cx()
        for _ in range(self.screen_rows):
            self.move_up()

    def page_down(self):
        """Jump to the bottom of the window, then a screenful further down."""
        self.cy = min(self.row_offset + self.screen_rows - 1, self.buffer.row_count)
        self._clamp_cx()
        for _ in range(self.screen_rows):
            self.move_down()

    def scroll(self):
        """Refresh ``rx`` and shift the window just enough to contain the cursor."""
        if self.cy < self.buffer.row_count:
            self.rx = self.buffer[self.cy].rx_from_cx(self.cx)
        else:
            self.rx = 0

        if self.cy < self.row_offset:
            self.row_offset = self.cy
        if self.cy >= self.row_offset + self.screen_rows:
            self.row_offset = self.cy - self.screen_rows + 1
        if self.rx < self.col_offset:
            self.col_offset = self.rx
        if self.rx >= self.col_offset + self.screen_cols:
            self.col_offset = self.rx - self.screen_cols + 1

    @property
    def screen_cursor(self) -> tuple[int, int]:
        """1-based terminal ``(row, column)`` of the cursor."""
        return self.cy - self.row_offset + 1, self.rx - self.col_offset + 1
