from __future__ import annotations

from collections import deque

import pytest

from kilo import config, logger, themes
from kilo.__main__ import EditorContext
from kilo.buffer import Buffer


class FakeTerminal:
    """
    Scripted stand-in for kilo.terminal.Terminal.

    Input is given as chunks of bytes; between two chunks one read returns b""
    the way a real raw-mode read does when its timeout expires.
    """

    def __init__(self, chunks=(), rows: int = 12, cols: int = 40) -> None:
        self.queue = deque(chunks)
        self.current = b""
        self.rows = rows
        self.cols = cols
        self.writes: list[bytes] = []
        self.empty_reads = 0

    def read(self, n: int = 1) -> bytes:
        if self.current:
            data, self.current = self.current[:n], self.current[n:]
            return data
        if self.queue:
            self.current = self.queue.popleft()
            return b""
        self.empty_reads += 1
        if self.empty_reads > 100:
            raise RuntimeError("scripted input exhausted")
        return b""

    def write(self, data: bytes) -> None:
        self.writes.append(bytes(data))

    def get_window_size(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def output(self) -> str:
        return b"".join(self.writes).decode("utf-8", "surrogateescape")

    @property
    def last_frame(self) -> str:
        return self.writes[-1].decode("utf-8", "surrogateescape")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep logs, configuration and user themes out of the real home directory."""
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(tmp_path / "kilo.log"))
    monkeypatch.setattr(config, "CONFIG_PATH", str(tmp_path / "kilo.conf"))
    monkeypatch.setattr(themes, "THEMES_DIR", str(tmp_path / "themes"))


@pytest.fixture
def make_context():
    def factory(lines=None, chunks=(), rows: int = 12, cols: int = 40,
                filename: str | None = None, settings=None) -> EditorContext:
        term = FakeTerminal(chunks, rows=rows, cols=cols)
        context = EditorContext(term, settings)
        if lines is not None:
            context.buffer = Buffer.from_lines(lines, filename, context.config.tab_stop)
        return context

    return factory
