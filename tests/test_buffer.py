from __future__ import annotations

from kilo import syntax
from kilo.buffer import Buffer, Row


def test_insert_then_delete_restores_row() -> None:
    row = Row("hello")

    row.insert_char(2, "X")
    assert row.chars == "heXllo"
    row.delete_char(2)

    assert row.chars == "hello"
    assert row.size == 5


def test_insert_char_out_of_range_appends() -> None:
    row = Row("ab")

    row.insert_char(10, "c")
    row.insert_char(-1, "d")

    assert row.chars == "abcd"


def test_delete_char_out_of_bounds_is_noop() -> None:
    buf = Buffer.from_lines(["ab"])

    buf.row_delete_char(0, 2)
    buf.row_delete_char(0, -1)

    assert buf.rows[0].chars == "ab"
    assert buf.dirty == 0


def test_mutations_regenerate_render_and_highlight() -> None:
    buf = Buffer.from_lines(["x"])

    buf.row_insert_char(0, 0, "\t")
    assert buf.rows[0].render == " " * 8 + "x"

    buf.row_append_string(0, "7")
    assert buf.rows[0].render.endswith("x7")
    assert buf.rows[0].hl[-1] == syntax.HL_NUMBER
    assert len(buf.rows[0].hl) == buf.rows[0].rsize


def test_insert_and_delete_row_bounds() -> None:
    buf = Buffer.from_lines(["a", "c"])

    buf.insert_row(1, "b")
    buf.insert_row(5, "ignored")
    buf.insert_row(-1, "ignored")
    assert [row.chars for row in buf.rows] == ["a", "b", "c"]

    buf.delete_row(3)
    buf.delete_row(0)
    assert [row.chars for row in buf.rows] == ["b", "c"]
    assert buf.dirty == 2


def test_from_lines_is_clean() -> None:
    buf = Buffer.from_lines(["one", "two"], "notes.txt")

    assert buf.dirty == 0
    assert buf.filename == "notes.txt"
    assert buf.num_rows == 2


def test_every_edit_marks_dirty() -> None:
    buf = Buffer.from_lines(["abc"])

    buf.row_insert_char(0, 1, "x")
    buf.row_delete_char(0, 1)
    buf.row_append_string(0, "d")

    assert buf.dirty == 3


def test_insert_char_on_virtual_row_appends_a_row() -> None:
    buf = Buffer()

    buf.insert_char("a")

    assert buf.num_rows == 1
    assert buf.rows[0].chars == "a"
    assert (buf.cx, buf.cy) == (1, 0)


def test_newline_at_column_zero_inserts_row_above() -> None:
    buf = Buffer.from_lines(["first", "second"])
    buf.cy = 1

    buf.insert_newline()

    assert [row.chars for row in buf.rows] == ["first", "", "second"]
    assert (buf.cx, buf.cy) == (0, 2)


def test_newline_splits_row_at_cursor() -> None:
    buf = Buffer.from_lines(["hello world"])
    buf.cx = 5

    buf.insert_newline()

    assert [row.chars for row in buf.rows] == ["hello", " world"]
    assert buf.rows[0].render == "hello"
    assert (buf.cx, buf.cy) == (0, 1)


def test_backspace_deletes_previous_character() -> None:
    buf = Buffer.from_lines(["abc"])
    buf.cx = 2

    buf.delete_char()

    assert buf.rows[0].chars == "ac"
    assert buf.cx == 1


def test_backspace_at_column_zero_merges_rows() -> None:
    buf = Buffer.from_lines(["abc", "de", "f"])
    buf.cy, buf.cx = 1, 0

    buf.delete_char()

    assert buf.num_rows == 2
    assert buf.rows[0].chars == "abcde"
    assert buf.rows[0].size == 3 + 2
    assert (buf.cx, buf.cy) == (3, 0)


def test_backspace_is_noop_at_document_start_and_past_end() -> None:
    buf = Buffer.from_lines(["abc"])

    buf.delete_char()
    buf.cy = 1
    buf.delete_char()

    assert buf.rows[0].chars == "abc"
    assert buf.dirty == 0


def test_to_string_ends_every_row_with_newline() -> None:
    buf = Buffer.from_lines(["a", "", "b\tc"])

    assert buf.to_string() == "a\n\nb\tc\n"
