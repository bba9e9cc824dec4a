"""Protocol package: URLs, transport and the error taxonomy.

The state machine lives in :mod:`gemlink.protocol.engine` and is imported
from there directly.
"""

from gemlink.protocol.errors import GemError
from gemlink.protocol.models import GemUrl, InputRequest, PageView, Response, ResponseHeader
from gemlink.protocol.transport import Dialer, TlsDialer, fetch
from gemlink.protocol.url import encode_query, normalize, parse, resolve

__all__ = [
    "GemError",
    "GemUrl",
    "InputRequest",
    "PageView",
    "Response",
    "ResponseHeader",
    "Dialer",
    "TlsDialer",
    "fetch",
    "encode_query",
    "normalize",
    "parse",
    "resolve",
]
