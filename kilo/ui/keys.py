"""
Key decoding for the kilo text editor.

Reads raw bytes from the terminal and turns them into logical keys: plain byte
values, decoded Unicode code points, or one of the named keys below for the
escape sequences terminals send for arrows, Home/End, Page Up/Down and Delete.
"""

ESC = 27
ENTER = 13
TAB = 9
BACKSPACE = 127

# Named keys live above the Unicode range so they never collide with a character
ARROW_LEFT = 0x110000
ARROW_RIGHT = ARROW_LEFT + 1
ARROW_UP = ARROW_LEFT + 2
ARROW_DOWN = ARROW_LEFT + 3
DEL_KEY = ARROW_LEFT + 4
HOME_KEY = ARROW_LEFT + 5
END_KEY = ARROW_LEFT + 6
PAGE_UP = ARROW_LEFT + 7
PAGE_DOWN = ARROW_LEFT + 8

# ESC [ <letter>
CSI_LETTER_KEYS = {
    b"A": ARROW_UP,
    b"B": ARROW_DOWN,
    b"C": ARROW_RIGHT,
    b"D": ARROW_LEFT,
    b"H": HOME_KEY,
    b"F": END_KEY,
}

# ESC [ <digit> ~
CSI_TILDE_KEYS = {
    b"1": HOME_KEY,
    b"3": DEL_KEY,
    b"4": END_KEY,
    b"5": PAGE_UP,
    b"6": PAGE_DOWN,
    b"7": HOME_KEY,
    b"8": END_KEY,
}

# ESC O <letter>
SS3_KEYS = {
    b"H": HOME_KEY,
    b"F": END_KEY,
}

def ctrl_key(ch: str) -> int:
    """Return the byte value produced by holding Ctrl with `ch`."""
    return ord(ch) & 0x1f

def _utf8_length(lead: int) -> int:
    if lead >> 5 == 0b110:
        return 2
    if lead >> 4 == 0b1110:
        return 3
    if lead >> 3 == 0b11110:
        return 4
    return 1

def _read_escape(read) -> int:
    seq0 = read(1)
    if not seq0:
        return ESC
    seq1 = read(1)
    if not seq1:
        return ESC

    if seq0 == b"[":
        if seq1.isdigit():
            seq2 = read(1)
            if seq2 == b"~":
                return CSI_TILDE_KEYS.get(seq1, ESC)
            return ESC
        return CSI_LETTER_KEYS.get(seq1, ESC)
    if seq0 == b"O":
        return SS3_KEYS.get(seq1, ESC)
    return ESC

def _read_utf8(lead: bytes, read):
    """
    Complete the character started by `lead`. Returns None when the bytes do not
    form a valid character; they are dropped.
    """
    length = _utf8_length(lead[0])
    if length == 1:
        return None
    data = lead
    while len(data) < length:
        ch = read(1)
        if not ch:
            return None
        if ch[0] & 0xC0 != 0x80:
            # Not a continuation byte: drop the lead, the byte starts the next key
            return _decode(ch, read)
        data += ch
    try:
        return ord(data.decode("utf-8"))
    except UnicodeDecodeError:
        return None

def _decode(c: bytes, read):
    if c[0] == ESC:
        return _read_escape(read)
    if c[0] >= 0x80:
        return _read_utf8(c, read)
    return c[0]

def read_key(read) -> int:
    """
    Block until one logical key is available and return it.
    `read(n)` must return up to n bytes, or b"" when its timeout expired.
    """
    while True:
        c = read(1)
        if not c:
            continue
        key = _decode(c, read)
        if key is not None:
            return key
