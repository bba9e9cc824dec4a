"""TLS transport: one request line out, everything until close back.

The network is reached through a :class:`Dialer` so the protocol engine can
be driven by a scripted fake in tests.
"""

from __future__ import annotations

import socket
import ssl
from abc import ABC, abstractmethod
from typing import Protocol

from gemlink.protocol.errors import NetworkError, ProtocolError
from gemlink.protocol.models import GemUrl

CRLF = b"\r\n"
_CHUNK_SIZE = 4096


class Stream(Protocol):
    """The subset of a socket the transport needs."""

    def sendall(self, data: bytes) -> None: ...

    def recv(self, bufsize: int) -> bytes: ...

    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Dialers
# ---------------------------------------------------------------------------

class Dialer(ABC):
    """Opens an encrypted byte stream to ``host:port``."""

    @abstractmethod
    def dial(self, host: str, port: int) -> Stream:
        """Return a connected stream.  May raise any ``OSError``."""


class TlsDialer(Dialer):
    """Real TLS connections with certificate verification disabled.

    Gemini capsules overwhelmingly use self-signed certificates, so the
    server's identity is *not* authenticated here.
    """

    def __init__(self, connect_timeout: float | None = None, read_timeout: float | None = None) -> None:
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout

    def _context(self) -> ssl.SSLContext:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        return context

    def dial(self, host: str, port: int) -> Stream:
        sock = socket.create_connection((host, port), timeout=self.connect_timeout)
        try:
            tls = self._context().wrap_socket(sock, server_hostname=host)
        except BaseException:
            sock.close()
            raise
        tls.settimeout(self.read_timeout)
        return tls


# ---------------------------------------------------------------------------
# Exchange
# ---------------------------------------------------------------------------

def _read_all(stream: Stream) -> bytes:
    chunks: list[bytes] = []
    while True:
        chunk = stream.recv(_CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def fetch(url: GemUrl, dialer: Dialer) -> tuple[str, bytes]:
    """Send the request for *url* and return ``(header_line, body)``.

    The response has no length field; it ends when the server closes the
    connection.

    Raises:
        NetworkError: On any socket-level failure, wrapping the cause.
        ProtocolError: If the response contains no CRLF.
    """
    target = f"{url.host}:{url.port}"
    try:
        stream = dialer.dial(url.host, url.port)
    except OSError as exc:
        raise NetworkError(f"cannot connect to {target}: {exc}", cause=exc) from exc

    try:
        stream.sendall(str(url).encode("utf-8") + CRLF)
        raw = _read_all(stream)
    except OSError as exc:
        raise NetworkError(f"error talking to {target}: {exc}", cause=exc) from exc
    finally:
        stream.close()

    header, sep, body = raw.partition(CRLF)
    if not sep:
        raise ProtocolError("no CRLF in response")
    return header.decode("utf-8", errors="replace"), body
