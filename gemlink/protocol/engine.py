"""The request/response state machine.

One call to :meth:`GeminiClient.visit` is one logical visit: it keeps
requesting while the capsule answers with redirects, then ends in exactly
one terminal outcome.  Success and input are returned; everything else is
raised as a :class:`~gemlink.protocol.errors.GemError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from gemlink.gemtext.renderer import PLAIN, Style, render
from gemlink.protocol.errors import (
    CertificateRequired,
    PermanentFailure,
    ProtocolError,
    TemporaryFailure,
    TooManyRedirects,
    UnexpectedStatus,
    UnsupportedContentType,
    UnsupportedScheme,
)
from gemlink.protocol.models import GemUrl, InputRequest, PageView, Response, ResponseHeader
from gemlink.protocol.transport import Dialer, fetch
from gemlink.protocol.url import normalize, parse, resolve, scheme_of
from gemlink.state.store import LinkStateStore

if TYPE_CHECKING:
    from gemlink.config import Settings

# Status classes
INPUT = 1
SUCCESS = 2
REDIRECT = 3
TEMPORARY_FAILURE = 4
PERMANENT_FAILURE = 5
CERTIFICATE_REQUIRED = 6

_FAILURES = {
    TEMPORARY_FAILURE: TemporaryFailure,
    PERMANENT_FAILURE: PermanentFailure,
    CERTIFICATE_REQUIRED: CertificateRequired,
}

FOOTER = "Follow a link with: gem <number>"

VisitOutcome = Union[PageView, InputRequest]


def parse_header(line: str) -> ResponseHeader:
    """Parse ``<2-digit status>[<space><meta>]``.

    Raises:
        ProtocolError: If the line is shorter than two characters or the
            status is not numeric.
    """
    if len(line) < 2:
        raise ProtocolError(f"malformed response header: {line!r}")
    code = line[:2]
    if not code.isdigit():
        raise ProtocolError(f"malformed status code in header: {line!r}")
    return ResponseHeader(status=int(code), meta=line[2:].strip())


class GeminiClient:
    """Drives exchanges through *dialer* and records links in *store*."""

    def __init__(
        self,
        settings: Settings,
        dialer: Dialer,
        store: LinkStateStore,
        style: Style | None = None,
        footer: str = FOOTER,
    ) -> None:
        self.settings = settings
        self.dialer = dialer
        self.store = store
        self.style = style or PLAIN
        self.footer = footer

    # ------------------------------------------------------------------
    # Single exchange
    # ------------------------------------------------------------------
    def request(self, url: GemUrl) -> Response:
        header_line, body = fetch(url, self.dialer)
        return Response(url=url, header=parse_header(header_line), body=body)

    # ------------------------------------------------------------------
    # Visits
    # ------------------------------------------------------------------
    def visit(self, target: str) -> VisitOutcome:
        """Visit *target* (a URL or bare host), following redirects."""
        next_url = normalize(target)

        for _ in range(self.settings.max_redirects + 1):
            url = parse(next_url)
            response = self.request(url)
            status_class = response.header.status_class

            if status_class == REDIRECT:
                next_url = resolve(url, response.header.meta)
                scheme = scheme_of(next_url)
                if scheme and scheme != "gemini":
                    raise UnsupportedScheme(next_url, scheme)
                continue
            if status_class == INPUT:
                return InputRequest(
                    url=url,
                    prompt=response.header.meta,
                    sensitive=response.header.status == 11,
                )
            if status_class == SUCCESS:
                return self._show(response)
            if status_class in _FAILURES:
                raise _FAILURES[status_class](response.header.status, response.header.meta)
            raise UnexpectedStatus(response.header.status, response.header.meta)

        raise TooManyRedirects(
            f"more than {self.settings.max_redirects} redirects, last target {next_url}"
        )

    def follow(self, number: int) -> VisitOutcome:
        """Visit link *number* from the last saved page or search."""
        url = self.store.resolve(number)
        scheme = scheme_of(url)
        if scheme and scheme != "gemini":
            raise UnsupportedScheme(url, scheme)
        return self.visit(url)

    def _show(self, response: Response) -> PageView:
        url = response.url
        mime = response.mime_type
        if response.is_gemtext:
            page = render(response.text(), url, footer=self.footer, style=self.style)
            self.store.save(str(url), page.links)
            return PageView(url=url, mime_type=mime, text=page.text, links=page.links)
        if mime.startswith("text/"):
            # Plain text has no links; clear the old ones so stale numbers fail.
            self.store.save(str(url), [])
            return PageView(url=url, mime_type=mime, text=response.text())
        raise UnsupportedContentType(mime)
