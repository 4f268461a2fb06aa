"""Tests for rows, tab expansion and buffer mutations."""

import pytest
from rawedit.model import Row, TextBuffer, expand_tabs, rx_from_cx


def test_expand_tabs_to_next_multiple_of_eight():
    assert expand_tabs("\tx") == " " * 8 + "x"
    assert expand_tabs("ab\tc") == "ab" + " " * 6 + "c"
    assert expand_tabs("12345678\tx") == "12345678" + " " * 8 + "x"
    assert expand_tabs("1234567\tx") == "1234567 x"
    assert expand_tabs("\t\t") == " " * 16
    assert expand_tabs("") == ""


def test_rx_from_cx():
    assert rx_from_cx("a\tb", 0) == 0
    assert rx_from_cx("a\tb", 1) == 1
    assert rx_from_cx("a\tb", 2) == 8
    assert rx_from_cx("a\tb", 3) == 9
    # Past the end counts only the characters that exist
    assert rx_from_cx("ab", 10) == 2


@pytest.mark.parametrize("text", ["", "plain", "a\tb\t\tc", "\t\t\t", "1234567\t8\t"])
def test_rx_from_cx_steps(text):
    """Each tab advances to the next multiple of 8, anything else by one."""
    previous = 0
    for cx in range(1, len(text) + 1):
        rx = rx_from_cx(text, cx)
        assert rx >= previous
        if text[cx - 1] == '\t':
            assert rx % 8 == 0
            assert previous < rx <= previous + 8
        else:
            assert rx == previous + 1
        previous = rx
    # The cursor past the last character sits right after the rendered text
    assert rx_from_cx(text, len(text)) == len(expand_tabs(text))


def test_row_render_follows_every_mutation():
    row = Row("a\tb")
    assert row.render == "a" + " " * 7 + "b"

    row.insert_char(0, "\t")
    assert row.content == "\ta\tb"
    assert row.render == expand_tabs("\ta\tb")

    row.delete_char(0)
    assert row.render == expand_tabs("a\tb")

    row.append_text("\tc")
    assert row.render == expand_tabs("a\tb\tc")

    tail = row.truncate(2)
    assert tail == "b\tc"
    assert row.content == "a\t"
    assert row.render == "a" + " " * 7

    row.content = "xyz"
    assert row.render == "xyz"


def test_insert_char():
    buf = TextBuffer(["abc"])
    buf.insert_char(0, 1, "X")
    assert buf.lines() == ["aXbc"]
    assert buf.dirty


def test_insert_char_past_end_appends():
    buf = TextBuffer(["abc"])
    buf.insert_char(0, 99, "!")
    assert buf.lines() == ["abc!"]


def test_insert_then_delete_restores_row():
    for col in range(4):
        buf = TextBuffer(["a\tc"])
        buf.insert_char(0, col, "x")
        assert buf.delete_char(0, col + 1) == (0, col)
        assert buf.lines() == ["a\tc"]
        assert buf[0].render == expand_tabs("a\tc")


def test_delete_char_removes_preceding_character():
    buf = TextBuffer(["hello"])
    assert buf.delete_char(0, 5) == (0, 4)
    assert buf.lines() == ["hell"]
    assert buf.dirty


def test_delete_at_start_of_document_is_noop():
    buf = TextBuffer(["hello", "world"])
    assert buf.delete_char(0, 0) == (0, 0)
    assert buf.lines() == ["hello", "world"]
    assert not buf.dirty


def test_delete_at_start_of_row_joins_with_previous():
    buf = TextBuffer(["first", "second"])
    assert buf.delete_char(1, 0) == (0, 5)
    assert buf.lines() == ["firstsecond"]
    assert buf.dirty


def test_delete_past_last_row_is_noop():
    buf = TextBuffer(["only"])
    assert buf.delete_char(1, 0) == (1, 0)
    assert buf.lines() == ["only"]
    assert not buf.dirty


def test_append_text():
    buf = TextBuffer(["ab"])
    buf.append_text(0, "")
    assert not buf.dirty
    buf.append_text(0, "\tc")
    assert buf.lines() == ["ab\tc"]
    assert buf[0].render == "ab" + " " * 6 + "c"
    assert buf.dirty


def test_split_row_at():
    buf = TextBuffer(["abcdef", "next"])
    buf.split_row_at(0, 2)
    assert buf.lines() == ["ab", "cdef", "next"]
    assert buf.dirty


def test_split_at_end_and_start():
    buf = TextBuffer(["abc"])
    buf.split_row_at(0, 3)
    assert buf.lines() == ["abc", ""]
    buf.split_row_at(0, 0)
    assert buf.lines() == ["", "abc", ""]


def test_split_one_past_end_appends_blank_row():
    buf = TextBuffer(["abc"])
    buf.split_row_at(1, 0)
    assert buf.lines() == ["abc", ""]


def test_split_then_join_restores_row():
    for col in range(5):
        buf = TextBuffer(["x", "ab\tc", "y"])
        buf.split_row_at(1, col)
        buf.join_row(2)
        assert buf.lines() == ["x", "ab\tc", "y"]
        assert buf[1].render == expand_tabs("ab\tc")


def test_join_row_ignores_first_and_missing_rows():
    buf = TextBuffer(["a", "b"])
    buf.join_row(0)
    buf.join_row(2)
    assert buf.lines() == ["a", "b"]
    assert not buf.dirty


def test_insert_blank_row():
    buf = TextBuffer(["a", "b"])
    buf.insert_blank_row(1)
    assert buf.lines() == ["a", "", "b"]
    buf.insert_blank_row(3)
    assert buf.lines() == ["a", "", "b", ""]
    assert buf.dirty


def test_invalid_rows_are_noops():
    buf = TextBuffer(["a"])
    buf.insert_char(5, 0, "x")
    buf.append_text(-1, "x")
    buf.split_row_at(7, 0)
    buf.insert_blank_row(9)
    assert buf.lines() == ["a"]
    assert not buf.dirty


def test_empty_buffer():
    buf = TextBuffer()
    assert buf.row_count == 0
    assert buf.is_empty
    assert buf.row_length(0) == 0


def test_replace_clears_dirty():
    buf = TextBuffer(["a"])
    buf.insert_char(0, 0, "b")
    buf.replace(["x", "y"])
    assert buf.lines() == ["x", "y"]
    assert not buf.dirty
