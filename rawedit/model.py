import os
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import EditorConstants


@dataclass(frozen=True)
class FilePath:
    """A file associated with the buffer and the name shown for it."""
    path: str
    display_name: str

    @classmethod
    def from_path(cls, path: str) -> 'FilePath':
        return cls(path=path, display_name=os.fsdecode(path))


@dataclass(frozen=True)
class StatusMessage:
    """Text for the message line, visible for a fixed time after it is set."""
    text: str
    created_at: float

    def is_visible(self, now: float) -> bool:
        return now - self.created_at < EditorConstants.STATUS_MESSAGE_TTL


def expand_tabs(text: str, tab_stop: int = EditorConstants.TAB_STOP) -> str:
    """Return ``text`` as displayed: each tab padded with spaces to the next tab stop."""
    out: list[str] = []
    column = 0
    for ch in text:
        if ch == '\t':
            out.append(' ')
            column += 1
            while column % tab_stop:
                out.append(' ')
                column += 1
        else:
            out.append(ch)
            column += 1
    return ''.join(out)


def rx_from_cx(text: str, cx: int, tab_stop: int = EditorConstants.TAB_STOP) -> int:
    """Render column of character index ``cx`` in ``text``."""
    rx = 0
    for ch in text[:cx]:
        if ch == '\t':
            rx += tab_stop - (rx % tab_stop)
        else:
            rx += 1
    return rx


class Row:
    """One line of the document.

    ``content`` is the text as stored in the file; ``render`` is what gets
    drawn. Assigning ``content`` recomputes ``render`` immediately, so the two
    never disagree.
    """

    def __init__(self, content: str = ""):
        self.content = content

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, value: str):
        self._content = value
        self._render = expand_tabs(value)

    @property
    def render(self) -> str:
        return self._render

    def __len__(self) -> int:
        return len(self._content)

    def __repr__(self) -> str:
        return f"Row({self._content!r})"

    def rx_from_cx(self, cx: int) -> int:
        return rx_from_cx(self._content, cx)

    def insert_char(self, at: int, ch: str):
        at = min(at, len(self._content))
        self.content = self._content[:at] + ch + self._content[at:]

    def delete_char(self, at: int):
        if 0 <= at < len(self._content):
            self.content = self._content[:at] + self._content[at + 1:]

    def append_text(self, text: str):
        self.content = self._content + text

    def truncate(self, at: int) -> str:
        """Cut the row at ``at`` and return the removed tail."""
        tail = self._content[at:]
        self.content = self._content[:at]
        return tail


class TextBuffer:
    """Ordered rows of a document plus its modified flag.

    Every mutating method sets ``dirty``. Row indices that do not name an
    existing row make the call a no-op, except where one-past-the-end is
    allowed for appending.
    """
    rows: list[Row]
    dirty: bool

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self.rows = [Row(line) for line in (lines or [])]
        self.dirty = False

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def lines(self) -> list[str]:
        return [row.content for row in self.rows]

    def row_length(self, index: int) -> int:
        """Length of row ``index``, or 0 past the end."""
        if 0 <= index < len(self.rows):
            return len(self.rows[index])
        return 0

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self.rows)

    def replace(self, lines: Iterable[str]):
        """Replace the whole document, e.g. after loading a file. Clears ``dirty``."""
        self.rows = [Row(line) for line in lines]
        self.dirty = False

    def insert_blank_row(self, index: int):
        if not 0 <= index <= len(self.rows):
            return
        self.rows.insert(index, Row())
        self.dirty = True

    def insert_char(self, row: int, col: int, ch: str):
        """Insert ``ch`` at ``col``; a column past the end appends."""
        if not self._valid(row):
            return
        self.rows[row].insert_char(col, ch)
        self.dirty = True

    def delete_char(self, row: int, col: int) -> tuple[int, int]:
        """Delete the character before ``col`` and return where that point is now.

        At column 0 the row is joined onto the one above. At the very start
        of the document nothing happens.
        """
        if not self._valid(row) or (row == 0 and col == 0):
            return row, col
        if col == 0:
            join_col = len(self.rows[row - 1])
            self.join_row(row)
            return row - 1, join_col
        col = min(col, len(self.rows[row]))
        self.rows[row].delete_char(col - 1)
        self.dirty = True
        return row, col - 1

    def append_text(self, row: int, text: str):
        if not text or not self._valid(row):
            return
        self.rows[row].append_text(text)
        self.dirty = True

    def split_row_at(self, row: int, col: int):
        """Break ``row`` at ``col``, moving the tail into a new row below.

        Splitting at the one-past-the-end row appends an empty row.
        """
        if row == len(self.rows):
            self.insert_blank_row(row)
            return
        if not self._valid(row):
            return
        tail = self.rows[row].truncate(col)
        self.rows.insert(row + 1, Row(tail))
        self.dirty = True

    def join_row(self, row: int):
        """Append ``row`` onto the row above and remove it."""
        if row <= 0 or not self._valid(row):
            return
        removed = self.rows.pop(row)
        self.rows[row - 1].append_text(removed.content)
        self.dirty = True
