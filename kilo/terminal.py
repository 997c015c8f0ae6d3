"""
Terminal session handling for the kilo text editor.

Puts the controlling terminal into raw mode, restores it on every exit path, and
provides the byte-level read/write primitives plus window size detection. The
`wrapper` function plays the role curses.wrapper plays for curses programs.
"""
import errno
import os
import re
import sys
import termios

from kilo import logger

# Escape sequences
CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"
CURSOR_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
QUERY_CURSOR_POSITION = b"\x1b[6n"

CURSOR_POSITION_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")

class TerminalError(OSError):
    """Raised when the terminal cannot be configured, read, written or measured."""

class Terminal:
    """Raw-mode session on a pair of terminal file descriptors."""
    def __init__(self, fd_in: int = None, fd_out: int = None):
        self.fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self.fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        # Attributes captured by enter(), restored by leave()
        self.orig_attrs = None

    def enter(self):
        """Capture the current attributes and switch the terminal to raw mode."""
        try:
            self.orig_attrs = termios.tcgetattr(self.fd_in)
        except termios.error as e:
            raise TerminalError(f"tcgetattr: {e}") from e

        raw = termios.tcgetattr(self.fd_in)
        iflag, oflag, cflag, lflag = 0, 1, 2, 3
        # No break signal, CR to NL translation, parity check, 8th bit strip, flow control
        raw[iflag] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK |
                        termios.ISTRIP | termios.IXON)
        # No output post-processing (NL is not translated to CR NL)
        raw[oflag] &= ~termios.OPOST
        raw[cflag] |= termios.CS8
        # No echo, canonical mode, Ctrl-V, Ctrl-C/Ctrl-Z signals
        raw[lflag] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        # read() returns as soon as a byte arrives, or after 100ms with nothing
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1

        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, raw)
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e

    def leave(self):
        """Restore the attributes captured by enter()."""
        if self.orig_attrs is None:
            return
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, self.orig_attrs)
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e

    def read(self, n: int = 1) -> bytes:
        """Read up to n bytes. Returns b"" when the read timeout expires."""
        try:
            return os.read(self.fd_in, n)
        except OSError as e:
            if e.errno in (errno.EAGAIN, errno.EINTR):
                return b""
            raise TerminalError(f"read: {e}") from e

    def write(self, data: bytes):
        """Write all of `data` to the terminal."""
        view = memoryview(data)
        try:
            while view:
                written = os.write(self.fd_out, view)
                view = view[written:]
        except OSError as e:
            raise TerminalError(f"write: {e}") from e

    def get_cursor_position(self):
        """Ask the terminal where the cursor is. Returns (rows, cols)."""
        self.write(QUERY_CURSOR_POSITION)
        response = b""
        while len(response) < 31:
            ch = self.read(1)
            if not ch or ch == b"R":
                break
            response += ch
        match = CURSOR_POSITION_RE.match(response)
        if not match:
            raise TerminalError(f"unexpected cursor position report: {response!r}")
        return int(match.group(1)), int(match.group(2))

    def get_window_size(self):
        """Return the terminal size as (rows, cols)."""
        try:
            size = os.get_terminal_size(self.fd_out)
        except OSError:
            size = None
        if size is not None and size.columns > 0:
            return size.lines, size.columns
        # Push the cursor to the bottom-right corner and ask where it ended up
        self.write(CURSOR_BOTTOM_RIGHT)
        return self.get_cursor_position()

def wrapper(func, *args):
    """
    Enter raw mode, call func(terminal, *args), and restore the terminal no matter
    how func exits.
    """
    terminal = Terminal()
    terminal.enter()
    try:
        return func(terminal, *args)
    finally:
        terminal.leave()

def die(message: str, fd_out: int = None):
    """Clear the screen, report a fatal error and terminate the process."""
    fd_out = sys.stdout.fileno() if fd_out is None else fd_out
    try:
        os.write(fd_out, CLEAR_SCREEN + CURSOR_HOME)
    except OSError:
        pass
    logger.log(f"fatal: {message}")
    sys.stderr.write(f"kilo: {message}\n")
    sys.exit(1)
