"""
Incremental search for the kilo text editor.

A Search object is handed to the generic prompt as its per-key callback. It keeps
the state that has to survive between keystrokes: the row of the last match, the
direction to move in, and a saved copy of the highlight tags of the row currently
showing the match marker, so the marker can be taken off again exactly.
"""
from kilo import syntax
from kilo.ui import keys

FORWARD = 1
BACKWARD = -1

class Search:
    """Incremental search state over one buffer."""
    def __init__(self, buf):
        self.buf = buf
        self.last_match = None
        self.direction = FORWARD
        self.saved_hl_line = None
        self.saved_hl = None

    def restore_highlight(self):
        """Put back the highlight tags saved before the match marker was applied."""
        if self.saved_hl is None:
            return
        if self.saved_hl_line < self.buf.num_rows:
            self.buf.rows[self.saved_hl_line].hl = self.saved_hl
        self.saved_hl_line = None
        self.saved_hl = None

    def reset(self):
        self.last_match = None
        self.direction = FORWARD

    def __call__(self, query: str, key: int):
        self.restore_highlight()

        if key in (keys.ENTER, keys.ESC):
            self.reset()
            return
        if key in (keys.ARROW_RIGHT, keys.ARROW_DOWN):
            self.direction = FORWARD
        elif key in (keys.ARROW_LEFT, keys.ARROW_UP):
            self.direction = BACKWARD
        else:
            self.reset()

        if not query:
            return
        self.step(query)

    def step(self, query: str) -> bool:
        """
        Move to the next row containing `query` in the current direction, wrapping
        around the document. Returns False when nothing matches.
        """
        buf = self.buf
        if self.last_match is None:
            self.direction = FORWARD
        current = -1 if self.last_match is None else self.last_match

        for _ in range(buf.num_rows):
            current += self.direction
            if current == -1:
                current = buf.num_rows - 1
            elif current == buf.num_rows:
                current = 0

            row = buf.rows[current]
            offset = row.render.find(query)
            if offset == -1:
                continue

            self.last_match = current
            buf.cy = current
            buf.cx = row.rx_to_cx(offset)
            # Push the viewport past the end so the next scroll brings the match to the top
            buf.row_off = buf.num_rows

            self.saved_hl_line = current
            self.saved_hl = list(row.hl)
            row.hl[offset:offset + len(query)] = [syntax.HL_MATCH] * len(query)
            return True
        return False
