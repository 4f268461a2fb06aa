"""Tests for full-screen frame rendering."""

from rawedit import __version__
from rawedit.constants import AnsiSequences, EditorConstants
from rawedit.model import FilePath, StatusMessage, TextBuffer
from rawedit.renderer import Renderer
from rawedit.view import ViewportCursor

ROW_END = AnsiSequences.CLEAR_LINE + AnsiSequences.NEWLINE


def create_renderer(lines, rows=24, cols=80):
    buffer = TextBuffer(lines)
    view = ViewportCursor(buffer)
    view.set_screen_size(rows - EditorConstants.STATUS_LINES, cols)
    return Renderer(buffer, view)


def split_frame(frame, screen_rows):
    """Return (body rows, status bar, message line, tail) of a rendered frame."""
    prefix = AnsiSequences.HIDE_CURSOR + AnsiSequences.CURSOR_HOME
    assert frame.startswith(prefix)
    rest = frame[len(prefix):]
    body = rest.split(ROW_END)[:screen_rows]
    rest = rest.split(ROW_END, screen_rows)[-1]
    status, rest = rest.split(AnsiSequences.NEWLINE, 1)
    assert rest.startswith(AnsiSequences.CLEAR_LINE)
    message, tail = rest[len(AnsiSequences.CLEAR_LINE):].split("\x1b[", 1)
    return body, status, message, "\x1b[" + tail


def render(renderer, file=None, message=None, now=0.0):
    renderer.view.scroll()
    return renderer.render(file, message, now)


def test_empty_buffer_shows_welcome_banner():
    """80x24: banner on the 8th screen row, tildes on every other text row."""
    renderer = create_renderer([])
    body, _, _, _ = split_frame(render(renderer), 22)

    assert len(body) == 22
    welcome = EditorConstants.WELCOME_MESSAGE.format(__version__)
    padding = (80 - len(welcome)) // 2
    assert body[7] == "~" + " " * (padding - 1) + welcome
    for y, line in enumerate(body):
        if y != 7:
            assert line == "~"


def test_banner_only_for_empty_buffer():
    renderer = create_renderer(["text"])
    body, _, _, _ = split_frame(render(renderer), 22)
    assert body[0] == "text"
    assert body[1:] == ["~"] * 21


def test_banner_trimmed_on_narrow_screen():
    renderer = create_renderer([], rows=10, cols=12)
    body, _, _, _ = split_frame(render(renderer), 8)
    welcome = EditorConstants.WELCOME_MESSAGE.format(__version__)
    assert body[8 // 3] == welcome[:12]


def test_rows_render_tabs_and_are_windowed():
    renderer = create_renderer(["a\tb", "0123456789abcdef"], rows=5, cols=6)
    renderer.view.col_offset = 4
    frame = renderer.render(None, None, 0.0)
    body, _, _, _ = split_frame(frame, 3)
    # "a" + 7 spaces + "b", columns 4..9
    assert body[0] == "    b"
    assert body[1] == "456789"
    assert body[2] == "~"


def test_rows_follow_row_offset():
    renderer = create_renderer([f"line {i}" for i in range(100)], rows=7)
    renderer.view.set_position(50, 0)
    body, _, _, _ = split_frame(render(renderer), 5)
    assert body == [f"line {i}" for i in range(46, 51)]


def test_status_bar_untitled():
    renderer = create_renderer(["a", "b", "c"])
    _, status, _, _ = split_frame(render(renderer), 22)

    assert status.startswith(AnsiSequences.INVERSE)
    assert status.endswith(AnsiSequences.RESET_ATTRIBUTES)
    text = status[len(AnsiSequences.INVERSE):-len(AnsiSequences.RESET_ATTRIBUTES)]
    assert len(text) == 80
    assert text.startswith("[No Name] - 3 lines")
    assert text.endswith("1/3")
    assert "(modified)" not in text


def test_status_bar_file_and_modified():
    renderer = create_renderer(["a", "b"])
    renderer.buffer.insert_char(0, 0, "x")
    renderer.view.set_position(1, 0)
    text = renderer.status_text(FilePath.from_path("a_rather_long_file_name.txt"))
    assert text.startswith("a_rather_long_file_n - 2 lines (modified)")
    assert text.endswith("2/2")
    assert len(text) == 80


def test_status_bar_narrow_screen():
    renderer = create_renderer(["a"], cols=10)
    text = renderer.status_text(None)
    assert text == "[No Name] "


def test_message_shown_while_fresh():
    renderer = create_renderer(["a"])
    message = StatusMessage("hello there", created_at=100.0)

    _, _, shown, _ = split_frame(render(renderer, message=message, now=104.9), 22)
    assert shown == "hello there"

    _, _, shown, _ = split_frame(render(renderer, message=message, now=105.0), 22)
    assert shown == ""


def test_message_trimmed_to_width():
    renderer = create_renderer(["a"], cols=5)
    _, _, shown, _ = split_frame(render(renderer, message=StatusMessage("abcdefgh", 0.0)), 22)
    assert shown == "abcde"


def test_frame_ends_with_cursor_position_and_show():
    renderer = create_renderer(["x", "\tb", "c"], rows=10)
    renderer.view.set_position(1, 1)
    frame = render(renderer)
    assert frame.endswith("\x1b[2;9H" + AnsiSequences.SHOW_CURSOR)


def test_cursor_position_accounts_for_offsets():
    renderer = create_renderer(["y" * 200] * 100, rows=12, cols=40)
    renderer.view.set_position(60, 150)
    frame = render(renderer)
    _, _, _, tail = split_frame(frame, 10)
    assert tail == "\x1b[10;40H" + AnsiSequences.SHOW_CURSOR
