"""
Input handling for the kilo text editor.

Maps each decoded key to its action on the editor context: cursor movement,
editing, saving, searching and the guarded quit.
"""
from kilo import commands, logger
from kilo.ui import keys

QUIT_KEY = keys.ctrl_key('q')
SAVE_KEY = keys.ctrl_key('s')
FIND_KEY = keys.ctrl_key('f')
REFRESH_KEY = keys.ctrl_key('l')

def move_cursor(context, key: int):
    """Move the cursor one step, wrapping across line ends, then snap it to the row."""
    buf = context.buffer
    row = buf.current_row()

    if key == keys.ARROW_LEFT:
        if buf.cx != 0:
            buf.cx -= 1
        elif buf.cy > 0:
            buf.cy -= 1
            buf.cx = buf.rows[buf.cy].size
    elif key == keys.ARROW_RIGHT:
        if row is not None and buf.cx < row.size:
            buf.cx += 1
        elif row is not None and buf.cx == row.size:
            buf.cy += 1
            buf.cx = 0
    elif key == keys.ARROW_UP:
        if buf.cy != 0:
            buf.cy -= 1
    elif key == keys.ARROW_DOWN:
        if buf.cy < buf.num_rows:
            buf.cy += 1

    row = buf.current_row()
    row_len = row.size if row is not None else 0
    if buf.cx > row_len:
        buf.cx = row_len

def page(context, key: int):
    """Page Up/Down: jump to the edge of the screen, then move one screen further."""
    buf = context.buffer
    if key == keys.PAGE_UP:
        buf.cy = buf.row_off
    else:
        buf.cy = min(buf.row_off + context.screen_rows - 1, buf.num_rows)
    direction = keys.ARROW_UP if key == keys.PAGE_UP else keys.ARROW_DOWN
    for _ in range(context.screen_rows):
        move_cursor(context, direction)

def handle_quit(context):
    """
    Quit, unless there are unsaved changes: then the quit key has to be pressed
    quit_times times in a row.
    """
    if context.buffer.dirty:
        context.quit_times -= 1
        if context.quit_times > 0:
            context.set_status_message(
                "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit.",
                context.quit_times)
            return
    logger.log("q: quit")
    context.graceful_exit()

def process_keypress(context, key: int):
    """Handle one key press."""
    buf = context.buffer

    if key == QUIT_KEY:
        handle_quit(context)
        return

    if key == keys.ENTER:
        buf.insert_newline()
    elif key == SAVE_KEY:
        commands.save(context)
    elif key == FIND_KEY:
        commands.find(context)
    elif key == keys.HOME_KEY:
        buf.cx = 0
    elif key == keys.END_KEY:
        row = buf.current_row()
        if row is not None:
            buf.cx = row.size
    elif key in (keys.BACKSPACE, keys.ctrl_key('h'), keys.DEL_KEY):
        if key == keys.DEL_KEY:
            move_cursor(context, keys.ARROW_RIGHT)
        buf.delete_char()
    elif key in (keys.PAGE_UP, keys.PAGE_DOWN):
        page(context, key)
    elif key in (keys.ARROW_UP, keys.ARROW_DOWN, keys.ARROW_LEFT, keys.ARROW_RIGHT):
        move_cursor(context, key)
    elif key in (REFRESH_KEY, keys.ESC):
        pass
    elif key == keys.TAB or (key < keys.ARROW_LEFT and chr(key).isprintable()):
        buf.insert_char(chr(key))

    # Any key other than quit starts the confirmation count over
    context.quit_times = context.config.quit_times
