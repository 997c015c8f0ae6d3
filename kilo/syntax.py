"""
Render and highlight engine for the kilo text editor.

Turns the characters stored in a row into the characters drawn on screen (tabs
expanded to spaces) and produces one highlight tag per drawn character. Also maps
cursor columns between the two coordinate spaces.
"""

TAB_STOP = 8

# Highlight tags, one per rendered character
HL_NORMAL = 0
HL_NUMBER = 1
HL_MATCH = 2

HL_NAMES = {
    HL_NORMAL: "normal",
    HL_NUMBER: "number",
    HL_MATCH: "match",
}

def render_of(chars: str, tab_stop: int = TAB_STOP) -> str:
    """Expand tabs in `chars` to spaces, stopping at the next multiple of tab_stop."""
    out = []
    col = 0
    for ch in chars:
        if ch == '\t':
            out.append(' ')
            col += 1
            while col % tab_stop != 0:
                out.append(' ')
                col += 1
        else:
            out.append(ch)
            col += 1
    return "".join(out)

def cx_to_rx(chars: str, cx: int, tab_stop: int = TAB_STOP) -> int:
    """Return the display column of character index `cx`."""
    rx = 0
    for ch in chars[:cx]:
        if ch == '\t':
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx

def rx_to_cx(chars: str, rx: int, tab_stop: int = TAB_STOP) -> int:
    """
    Return the character index whose display span covers column `rx`.
    Columns past the end of the row map to the row length.
    """
    cur_rx = 0
    for cx, ch in enumerate(chars):
        if ch == '\t':
            cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return len(chars)

def classify(render: str) -> list:
    """Return one highlight tag per character of `render`."""
    return [HL_NUMBER if ch in "0123456789" else HL_NORMAL for ch in render]

def syntax_to_color(hl: int, theme: dict) -> int:
    """Map a highlight tag to the ANSI foreground code defined by `theme`."""
    return theme.get(HL_NAMES.get(hl, "normal"), theme["normal"])
