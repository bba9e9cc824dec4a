"""Shared fixtures: a scripted dialer so no test touches the network."""

from __future__ import annotations

from pathlib import Path

import pytest

from gemlink.config import Settings
from gemlink.protocol.transport import Dialer
from gemlink.search.engines import SearchEngine


class FakeStream:
    """Socket stand-in that replays *payload* in small chunks."""

    def __init__(self, payload: bytes, chunk_size: int = 5, error: Exception | None = None) -> None:
        self._payload = payload
        self._chunk_size = chunk_size
        self._error = error
        self.sent = b""
        self.closed = False

    def sendall(self, data: bytes) -> None:
        self.sent += data

    def recv(self, bufsize: int) -> bytes:
        if self._error is not None and not self._payload:
            raise self._error
        size = min(bufsize, self._chunk_size)
        chunk, self._payload = self._payload[:size], self._payload[size:]
        return chunk

    def close(self) -> None:
        self.closed = True


class ScriptedDialer(Dialer):
    """Answers each dial with the next scripted response, in order.

    A script entry is either raw response bytes, an exception raised by
    ``dial`` itself, or a ``FakeStream`` used as-is.
    """

    def __init__(self, *script) -> None:
        self.script = list(script)
        self.dials: list[tuple[str, int]] = []
        self.streams: list[FakeStream] = []

    @property
    def requests(self) -> list[str]:
        return [s.sent.decode("utf-8") for s in self.streams]

    def dial(self, host: str, port: int) -> FakeStream:
        self.dials.append((host, port))
        if not self.script:
            raise AssertionError(f"unexpected dial to {host}:{port}")
        entry = self.script.pop(0)
        if isinstance(entry, Exception):
            raise entry
        stream = entry if isinstance(entry, FakeStream) else FakeStream(entry)
        self.streams.append(stream)
        return stream


@pytest.fixture
def scripted():
    """Factory: ``scripted(b"20 text/gemini\\r\\n...", ...)``."""
    return ScriptedDialer


@pytest.fixture
def fake_stream():
    return FakeStream


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        state_dir=tmp_path / "state",
        max_redirects=5,
        connect_timeout=1.0,
        read_timeout=1.0,
        color=False,
        search_engines=(
            SearchEngine("alpha", "gemini://alpha.example/search"),
            SearchEngine("beta", "gemini://beta.example/search"),
        ),
    )
