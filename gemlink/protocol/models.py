"""Data models for the request/response pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

DEFAULT_PORT = 1965
SCHEME = "gemini://"


@dataclass(frozen=True)
class GemUrl:
    """A parsed ``gemini://`` URL.  ``path`` keeps any query string."""

    host: str
    port: int = DEFAULT_PORT
    path: str = "/"

    @property
    def authority(self) -> str:
        if self.port == DEFAULT_PORT:
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def path_only(self) -> str:
        """The path without its query string."""
        return self.path.partition("?")[0]

    @property
    def query(self) -> str:
        return self.path.partition("?")[2]

    def __str__(self) -> str:
        return f"{SCHEME}{self.authority}{self.path}"


@dataclass(frozen=True)
class ResponseHeader:
    status: int
    meta: str

    @property
    def status_class(self) -> int:
        return self.status // 10


@dataclass
class Response:
    """The outcome of one request/response exchange."""

    url: GemUrl
    header: ResponseHeader
    body: bytes = b""

    @property
    def mime_type(self) -> str:
        """Media type from ``meta``, lowercased; empty means gemtext."""
        mime = self.header.meta.split(";", 1)[0].strip().lower()
        return mime or "text/gemini"

    @property
    def charset(self) -> str:
        for param in self.header.meta.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return "utf-8"

    @property
    def is_gemtext(self) -> bool:
        return self.mime_type == "text/gemini"

    def text(self) -> str:
        """Decode the body with the declared charset, replacing bad bytes."""
        try:
            return self.body.decode(self.charset, errors="replace")
        except LookupError:
            return self.body.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Visit outcomes
# ---------------------------------------------------------------------------

@dataclass
class PageView:
    """A successfully retrieved and rendered page."""

    url: GemUrl
    mime_type: str
    text: str
    links: List[str] = field(default_factory=list)


@dataclass
class InputRequest:
    """The capsule asked for input (status class 1)."""

    url: GemUrl
    prompt: str
    sensitive: bool = False

    @property
    def template(self) -> str:
        """URL to re-invoke with the answer appended after the ``?``."""
        return f"{SCHEME}{self.url.authority}{self.url.path_only}?"
