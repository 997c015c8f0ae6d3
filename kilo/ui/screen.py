"""
kilo/ui/screen.py

Implements all screen drawing for the kilo text editor: keeps the cursor inside the
viewport, assembles a complete frame (text rows, status bar, message bar, cursor
placement) into one buffer and writes it to the terminal in a single call. Also
hosts the generic one-line prompt shown in the message bar.
"""
import os
import time

from wcwidth import wcwidth

from kilo import __version__, syntax
from kilo.ui import keys

# Escape sequences
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CURSOR_HOME = "\x1b[H"
CLEAR_LINE = "\x1b[K"
INVERT = "\x1b[7m"
RESET_ATTRS = "\x1b[m"

WELCOME = "Kilo editor -- version {}"

def char_width(ch: str) -> int:
    return max(wcwidth(ch), 0)

def visual_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)

def cell_width(ch: str) -> int:
    """Columns taken by one rendered character; control characters draw as one cell."""
    if ch < " " or ch == "\x7f":
        return 1
    return char_width(ch)

def row_width(render: str) -> int:
    return sum(cell_width(ch) for ch in render)

def trim_line(text: str, width: int) -> str:
    """Trim a string to at most `width` columns."""
    out = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)

def pad_line(text: str, width: int) -> str:
    """Pad or trim a string to match the visual width."""
    trimmed = trim_line(text, width)
    return trimmed + " " * (width - visual_width(trimmed))

def scroll(context):
    """Move the viewport so the cursor is inside it."""
    buf = context.buffer
    buf.rx = 0
    row = buf.current_row()
    if row is not None:
        buf.rx = row.cx_to_rx(buf.cx)

    if buf.cy < buf.row_off:
        buf.row_off = buf.cy
    if buf.cy >= buf.row_off + context.screen_rows:
        buf.row_off = buf.cy - context.screen_rows + 1
    if buf.rx < buf.col_off:
        buf.col_off = buf.rx
    if buf.rx >= buf.col_off + context.screen_cols:
        buf.col_off = buf.rx - context.screen_cols + 1

    # Wide characters can still push the cursor cell past the right edge
    if row is not None:
        render = row.render
        while buf.col_off < buf.rx:
            cursor_cell = cell_width(render[buf.rx]) if buf.rx < len(render) else 1
            if row_width(render[buf.col_off:buf.rx]) + cursor_cell <= context.screen_cols:
                break
            buf.col_off += 1

def draw_welcome(context, out):
    welcome = WELCOME.format(__version__)[:context.screen_cols]
    padding = (context.screen_cols - len(welcome)) // 2
    if padding:
        out.append("~")
        padding -= 1
    out.append(" " * padding)
    out.append(welcome)

def draw_row(context, row, out):
    """Append the visible slice of `row`, switching colour only where the tag changes."""
    start = context.buffer.col_off
    theme = context.config.theme
    current_color = None
    used = 0
    for ch, hl in zip(row.render[start:], row.hl[start:]):
        used += cell_width(ch)
        if used > context.screen_cols:
            break
        if ch < " " or ch == "\x7f":
            # Control characters are shown inverted as ^-style symbols
            symbol = "?" if ch == "\x7f" else chr(ord("@") + ord(ch))
            out.append(INVERT + symbol + RESET_ATTRS)
            if current_color is not None:
                out.append(f"\x1b[{current_color}m")
        elif hl == syntax.HL_NORMAL:
            if current_color is not None:
                out.append(f"\x1b[{theme['normal']}m")
                current_color = None
            out.append(ch)
        else:
            color = syntax.syntax_to_color(hl, theme)
            if color != current_color:
                current_color = color
                out.append(f"\x1b[{color}m")
            out.append(ch)
    out.append(f"\x1b[{theme['normal']}m")

def draw_rows(context, out):
    buf = context.buffer
    for y in range(context.screen_rows):
        file_row = y + buf.row_off
        if file_row >= buf.num_rows:
            if buf.num_rows == 0 and y == context.screen_rows // 3:
                draw_welcome(context, out)
            else:
                out.append("~")
        else:
            draw_row(context, buf.rows[file_row], out)
        out.append(CLEAR_LINE)
        out.append("\r\n")

def draw_status_bar(context, out):
    """
    Draw the inverted status bar: file name, line count and modified flag on the
    left, current line / total lines flush right, exactly one screen wide.
    """
    buf = context.buffer
    name = (os.path.basename(buf.filename) if buf.filename else "[No Name]")[:20]
    modified = "(modified)" if buf.dirty else ""
    status = f"{name} - {buf.num_rows} lines {modified}"
    rstatus = f"{buf.cy + 1}/{buf.num_rows}"

    width = context.screen_cols
    left = trim_line(status, width)
    used = visual_width(left)
    rlen = len(rstatus)
    if used + rlen <= width:
        line = left + " " * (width - used - rlen) + rstatus
    else:
        line = pad_line(left, width)

    out.append(INVERT)
    out.append(line)
    out.append(RESET_ATTRS)
    out.append("\r\n")

def draw_message_bar(context, out):
    out.append(CLEAR_LINE)
    message = context.status_message
    if message and time.time() - context.status_message_time < context.config.message_timeout:
        out.append(trim_line(message, context.screen_cols))

def build_frame(context) -> str:
    """Assemble one complete frame for the current editor state."""
    buf = context.buffer
    out = [HIDE_CURSOR, CURSOR_HOME]
    draw_rows(context, out)
    draw_status_bar(context, out)
    draw_message_bar(context, out)
    row = buf.current_row()
    if row is not None:
        column = row_width(row.render[buf.col_off:buf.rx]) + 1
    else:
        column = buf.rx - buf.col_off + 1
    out.append(f"\x1b[{buf.cy - buf.row_off + 1};{column}H")
    out.append(SHOW_CURSOR)
    return "".join(out)

def display(context):
    """Re-draw the entire screen."""
    scroll(context)
    frame = build_frame(context)
    context.terminal.write(frame.encode("utf-8", "surrogateescape"))

def prompt_input(context, template: str, callback=None):
    """
    Prompt the user for one line of input in the message bar.
    `template` holds a "{}" where the typed text goes. `callback(text, key)`, if
    given, runs after every key press. Returns the entered string, or None if
    cancelled with Escape.
    """
    text = ""
    while True:
        context.set_status_message(template, text)
        display(context)
        key = context.read_key()
        if key in (keys.DEL_KEY, keys.BACKSPACE, keys.ctrl_key('h')):
            text = text[:-1]
        elif key == keys.ESC:
            context.set_status_message("")
            if callback:
                callback(text, key)
            return None
        elif key == keys.ENTER:
            if text:
                context.set_status_message("")
                if callback:
                    callback(text, key)
                return text
        elif key < keys.ARROW_LEFT and chr(key).isprintable():
            text += chr(key)

        if callback:
            callback(text, key)
