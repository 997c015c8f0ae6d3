"""
Buffer module for the kilo text editor.

Defines the Row class holding one line of text together with its rendered form and
highlight tags, and the Buffer class managing the ordered rows of the open document,
its cursor, viewport offsets and modification state.
"""
from kilo import syntax

class Row:
    """One line of the document plus its derived render/highlight form."""
    def __init__(self, chars: str = "", tab_stop: int = syntax.TAB_STOP):
        self.chars = chars
        self.tab_stop = tab_stop
        self.render = ""
        self.hl = []
        self.update()

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def update(self):
        """Regenerate render and hl from chars. Must follow every change to chars."""
        self.render = syntax.render_of(self.chars, self.tab_stop)
        self.hl = syntax.classify(self.render)

    def cx_to_rx(self, cx: int) -> int:
        return syntax.cx_to_rx(self.chars, cx, self.tab_stop)

    def rx_to_cx(self, rx: int) -> int:
        return syntax.rx_to_cx(self.chars, rx, self.tab_stop)

    def insert_char(self, at: int, ch: str):
        if at < 0 or at > self.size:
            at = self.size
        self.chars = self.chars[:at] + ch + self.chars[at:]
        self.update()

    def delete_char(self, at: int) -> bool:
        """Delete the character at `at`. Returns False when out of bounds."""
        if at < 0 or at >= self.size:
            return False
        self.chars = self.chars[:at] + self.chars[at + 1:]
        self.update()
        return True

    def append_string(self, text: str):
        self.chars += text
        self.update()

    def truncate(self, at: int):
        self.chars = self.chars[:at]
        self.update()

class Buffer:
    """Represents the open document with its editing operations."""
    def __init__(self, filename: str = None, tab_stop: int = syntax.TAB_STOP):
        self.filename = filename  # Path to file or None for new/unsaved
        self.tab_stop = tab_stop
        self.rows = []
        # Number of edits since the last load or save
        self.dirty = 0
        # Cursor position: cy indexes rows, cx indexes characters in row cy
        self.cx = 0
        self.cy = 0
        # Display column of the cursor, recomputed on every scroll
        self.rx = 0
        # First visible row and first visible display column
        self.row_off = 0
        self.col_off = 0

    @classmethod
    def from_lines(cls, lines, filename: str = None, tab_stop: int = syntax.TAB_STOP):
        """Build a clean buffer holding `lines` in order."""
        buf = cls(filename, tab_stop)
        for line in lines:
            buf.insert_row(buf.num_rows, line)
        buf.dirty = 0
        return buf

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def current_row(self):
        """Return the row under the cursor, or None on the virtual row past the end."""
        if self.cy < self.num_rows:
            return self.rows[self.cy]
        return None

    def to_string(self) -> str:
        """Serialize every row followed by a single newline."""
        return "".join(row.chars + "\n" for row in self.rows)

    ##########################################
    # ROW OPERATIONS
    ##########################################
    def insert_row(self, at: int, text: str):
        if at < 0 or at > self.num_rows:
            return
        self.rows.insert(at, Row(text, self.tab_stop))
        self.dirty += 1

    def delete_row(self, at: int):
        if at < 0 or at >= self.num_rows:
            return
        del self.rows[at]
        self.dirty += 1

    def row_insert_char(self, row: int, at: int, ch: str):
        self.rows[row].insert_char(at, ch)
        self.dirty += 1

    def row_delete_char(self, row: int, at: int):
        if self.rows[row].delete_char(at):
            self.dirty += 1

    def row_append_string(self, row: int, text: str):
        self.rows[row].append_string(text)
        self.dirty += 1

    ##########################################
    # CURSOR-RELATIVE EDITING
    ##########################################
    def insert_char(self, ch: str):
        """Insert `ch` at the cursor and move the cursor past it."""
        if self.cy == self.num_rows:
            self.insert_row(self.num_rows, "")
        self.row_insert_char(self.cy, self.cx, ch)
        self.cx += 1

    def insert_newline(self):
        """Split the current line at the cursor, moving the remainder to a new line below."""
        if self.cx == 0:
            self.insert_row(self.cy, "")
        else:
            row = self.rows[self.cy]
            self.insert_row(self.cy + 1, row.chars[self.cx:])
            row.truncate(self.cx)
        self.cy += 1
        self.cx = 0

    def delete_char(self):
        """
        Backspace: delete the character left of the cursor, or merge the current
        line into the previous one when the cursor is at column 0.
        """
        if self.cy == self.num_rows:
            return
        if self.cx == 0 and self.cy == 0:
            return
        if self.cx > 0:
            self.row_delete_char(self.cy, self.cx - 1)
            self.cx -= 1
        else:
            self.cx = self.rows[self.cy - 1].size
            self.row_append_string(self.cy - 1, self.rows[self.cy].chars)
            self.delete_row(self.cy)
            self.cy -= 1
