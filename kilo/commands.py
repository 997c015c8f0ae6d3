"""
Command implementations for the kilo text editor.

Loading a file into the buffer, saving the buffer back to disk (asking for a name
when the document has none) and the interactive find command.
"""
import os

from kilo import buffer, logger, search
from kilo.ui import screen

def read_lines(path: str) -> list:
    """
    Return the lines of `path` with trailing newline/carriage-return characters
    stripped. Raises OSError if the file cannot be read.
    """
    # Only "\n" ends a line; a lone "\r" stays part of the row
    with open(path, 'r', encoding='utf-8', errors='surrogateescape', newline='\n') as f:
        return [line.rstrip("\r\n") for line in f]

def open_file(context, path: str):
    """Replace the current buffer with the contents of `path`."""
    lines = read_lines(path)
    context.buffer = buffer.Buffer.from_lines(lines, path, context.config.tab_stop)
    logger.log(f"opened {path} ({len(lines)} lines)")

def write_file(path: str, data: bytes) -> int:
    """Write `data` to `path`, truncating the file to exactly its length."""
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    try:
        os.ftruncate(fd, len(data))
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]
    finally:
        os.close(fd)
    return len(data)

def save(context) -> bool:
    """
    Write the buffer to its file, prompting for a name if it has none.
    Errors are reported in the message bar; the buffer then stays modified.
    """
    buf = context.buffer
    if buf.filename is None:
        name = screen.prompt_input(context, "Save as: {} (ESC to cancel)")
        if name is None:
            context.set_status_message("Save aborted")
            return False
        buf.filename = name

    data = buf.to_string().encode("utf-8", "surrogateescape")
    try:
        num_bytes = write_file(buf.filename, data)
    except OSError as e:
        context.set_status_message("Can't save! I/O error: {}", e.strerror or e)
        logger.log(f"save of {buf.filename} failed: {e}")
        return False

    buf.dirty = 0
    context.set_status_message("{} bytes written to disk", num_bytes)
    logger.log(f"w: write {buf.filename} ({num_bytes} bytes)")
    return True

def find(context):
    """
    Incremental search. Escape puts the cursor and viewport back where they were
    before the search started; Enter leaves the cursor on the match.
    """
    buf = context.buffer
    saved_cx, saved_cy = buf.cx, buf.cy
    saved_col_off, saved_row_off = buf.col_off, buf.row_off

    query = screen.prompt_input(context, "Search: {} (Use ESC/Arrows/Enter)",
                                search.Search(buf))

    if query is None:
        buf.cx, buf.cy = saved_cx, saved_cy
        buf.col_off, buf.row_off = saved_col_off, saved_row_off
