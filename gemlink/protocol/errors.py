"""Exception hierarchy shared by every gem component.

Everything the client reports to the user derives from :class:`GemError`;
the CLI catches that one type, prints its message and exits non-zero.
"""

from __future__ import annotations


class GemError(Exception):
    """Base class for all reportable client failures."""


class MalformedUrl(GemError):
    """The target could not be parsed as a Gemini URL."""


class UnsupportedScheme(MalformedUrl):
    """The target is an absolute URL for some other protocol."""

    def __init__(self, url: str, scheme: str) -> None:
        super().__init__(f"cannot open {scheme}:// URLs, use another client: {url}")
        self.url = url
        self.scheme = scheme


class NetworkError(GemError):
    """DNS, connect, TLS handshake or read failure."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ProtocolError(GemError):
    """The server's response does not follow the wire format."""


class TooManyRedirects(GemError):
    pass


class UnsupportedContentType(GemError):
    def __init__(self, mime_type: str) -> None:
        super().__init__(f"unsupported content type: {mime_type}")
        self.mime_type = mime_type


class UnexpectedStatus(GemError):
    def __init__(self, status: int, meta: str) -> None:
        text = f"unexpected status {status:02d}"
        if meta:
            text += f": {meta}"
        super().__init__(text)
        self.status = status
        self.meta = meta


class ResponseFailure(GemError):
    """A well-formed 4x, 5x or 6x response; status and meta are kept verbatim."""

    label = "failure"

    def __init__(self, status: int, meta: str) -> None:
        text = f"{self.label} {status}"
        if meta:
            text += f": {meta}"
        super().__init__(text)
        self.status = status
        self.meta = meta


class TemporaryFailure(ResponseFailure):
    label = "temporary failure"


class PermanentFailure(ResponseFailure):
    label = "permanent failure"


class CertificateRequired(ResponseFailure):
    label = "client certificate required"


class NoSavedState(GemError):
    """No page or search has been recorded yet."""


class OutOfRange(GemError):
    def __init__(self, number: int, available: int) -> None:
        if available:
            message = f"no link {number}, choose 1-{available}"
        else:
            message = f"no link {number}, the last page had no links"
        super().__init__(message)
        self.number = number
        self.available = available


class NoResults(GemError):
    pass


class EmptyQuery(GemError):
    pass
