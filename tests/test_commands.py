from __future__ import annotations

import pytest

from kilo import commands


def test_read_lines_strips_line_endings(tmp_path) -> None:
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\n\nthree")

    assert commands.read_lines(str(path)) == ["one", "two", "", "three"]


def test_load_then_save_is_byte_identical(make_context, tmp_path) -> None:
    original = b"first line\n\tindented 42\n\nlast\n"
    path = tmp_path / "doc.txt"
    path.write_bytes(original)
    context = make_context()

    commands.open_file(context, str(path))
    assert context.buffer.num_rows == 4
    assert context.buffer.dirty == 0

    assert commands.save(context)
    assert path.read_bytes() == original


def test_save_adds_final_newline(make_context, tmp_path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"a\nb")
    context = make_context()

    commands.open_file(context, str(path))
    commands.save(context)

    assert path.read_bytes() == b"a\nb\n"


def test_save_truncates_longer_file(make_context, tmp_path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"a much longer previous content\n")
    context = make_context(["short"], filename=str(path))

    commands.save(context)

    assert path.read_bytes() == b"short\n"


def test_undecodable_bytes_round_trip(make_context, tmp_path) -> None:
    original = b"caf\xe9\n\xff\xfe\n"
    path = tmp_path / "latin1.txt"
    path.write_bytes(original)
    context = make_context()

    commands.open_file(context, str(path))
    commands.save(context)

    assert path.read_bytes() == original


def test_lone_carriage_return_stays_in_row(make_context, tmp_path) -> None:
    path = tmp_path / "cr.txt"
    path.write_bytes(b"a\rb\n")
    context = make_context()

    commands.open_file(context, str(path))
    assert [row.chars for row in context.buffer.rows] == ["a\rb"]

    commands.save(context)
    assert path.read_bytes() == b"a\rb\n"


def test_repeated_carriage_returns_before_newline_are_stripped(tmp_path) -> None:
    path = tmp_path / "crcr.txt"
    path.write_bytes(b"abc\r\r\ndef\n")

    assert commands.read_lines(str(path)) == ["abc", "def"]


def test_open_missing_file_raises(make_context, tmp_path) -> None:
    context = make_context()

    with pytest.raises(FileNotFoundError):
        commands.open_file(context, str(tmp_path / "missing.txt"))


def test_open_uses_configured_tab_stop(make_context, tmp_path) -> None:
    path = tmp_path / "tabs.txt"
    path.write_text("\tx\n")
    context = make_context()
    context.config.tab_stop = 4

    commands.open_file(context, str(path))

    assert context.buffer.rows[0].render == "    x"


def test_save_failure_keeps_buffer_dirty(make_context, tmp_path) -> None:
    context = make_context(["text"], filename=str(tmp_path / "no" / "such" / "dir.txt"))
    context.buffer.dirty = 2

    assert not commands.save(context)

    assert context.buffer.dirty == 2
    assert context.status_message.startswith("Can't save! I/O error:")


def test_save_as_prompts_for_name(make_context, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    context = make_context(["hello"], chunks=[b"new.txt\r"])
    context.buffer.dirty = 1

    assert commands.save(context)

    assert context.buffer.filename == "new.txt"
    assert (tmp_path / "new.txt").read_text() == "hello\n"
    assert context.buffer.dirty == 0


def test_save_as_escape_aborts(make_context) -> None:
    context = make_context(["hello"], chunks=[b"new", b"\x1b"])
    context.buffer.dirty = 1

    assert not commands.save(context)

    assert context.buffer.filename is None
    assert context.buffer.dirty == 1
    assert context.status_message == "Save aborted"
