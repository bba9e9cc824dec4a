"""Parsing, serialising and resolving ``gemini://`` URLs.

Hosts are split from ports on the *last* colon of the authority.  IPv6
literals are not supported: a colon inside the host is indistinguishable
from the port separator.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from gemlink.protocol.errors import MalformedUrl, UnsupportedScheme
from gemlink.protocol.models import DEFAULT_PORT, SCHEME, GemUrl

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*)://")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def scheme_of(url: str) -> str:
    """Return the lowercased scheme of an absolute URL, or ``""``."""
    match = _SCHEME_RE.match(url)
    return match.group(1).lower() if match else ""


def parse(raw: str) -> GemUrl:
    """Parse *raw* into a :class:`GemUrl`.

    Raises:
        MalformedUrl: If the scheme is missing, the host is empty, the port
            is not a positive decimal integer, or the URL holds a control
            character.
    """
    raw = raw.strip()
    if not raw.lower().startswith(SCHEME):
        raise MalformedUrl(f"not a gemini:// URL: {raw!r}")
    if _CONTROL_RE.search(raw):
        raise MalformedUrl(f"control character in URL: {raw!r}")

    rest = raw[len(SCHEME):].split("#", 1)[0]
    end = len(rest)
    for delimiter in "/?":
        index = rest.find(delimiter)
        if index != -1:
            end = min(end, index)
    authority, path = rest[:end], rest[end:]
    if not path.startswith("/"):
        path = "/" + path

    host, sep, port_text = authority.rpartition(":")
    if not sep:
        host, port = authority, DEFAULT_PORT
    else:
        if not (port_text.isascii() and port_text.isdigit()) or int(port_text) <= 0:
            raise MalformedUrl(f"invalid port {port_text!r} in {raw!r}")
        port = int(port_text)

    if not host:
        raise MalformedUrl(f"missing host in {raw!r}")
    return GemUrl(host=host, port=port, path=path)


def serialize(url: GemUrl) -> str:
    return str(url)


def normalize(target: str) -> str:
    """Turn user input into an absolute ``gemini://`` URL string.

    A bare host or host/path gets the scheme prepended.  Absolute URLs for
    other protocols are refused.
    """
    target = target.strip()
    scheme = scheme_of(target)
    if not scheme:
        return SCHEME + target
    if scheme != "gemini":
        raise UnsupportedScheme(target, scheme)
    return target


def _remove_dot_segments(path: str) -> str:
    """Collapse ``.`` and ``..`` segments without climbing above ``/``."""
    path, sep, query = path.partition("?")
    if "/." not in path:
        return path + sep + query

    output: list[str] = []
    segments = path.split("/")[1:]
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if segment == ".":
            if last:
                output.append("")
        elif segment == "..":
            if output:
                output.pop()
            if last:
                output.append("")
        else:
            output.append(segment)
    return "/" + "/".join(output) + sep + query


def resolve(base: GemUrl, link: str) -> str:
    """Resolve *link* against *base* and return an absolute URL string.

    Links carrying their own scheme (``https://...``) are returned unchanged
    so callers can special-case them later.
    """
    link = link.strip()
    if "://" in link:
        return link
    if link.startswith("//"):
        return "gemini:" + link
    if not link:
        return str(base)

    origin = f"{SCHEME}{base.authority}"
    if link.startswith("/"):
        return origin + _remove_dot_segments(link)
    if link.startswith("?"):
        return origin + base.path_only + link

    base_path = base.path_only
    directory = base_path[: base_path.rfind("/") + 1] or "/"
    return origin + _remove_dot_segments(directory + link)


def encode_query(text: str) -> str:
    """Percent-encode every byte of *text* outside ``[A-Za-z0-9._~-]``."""
    return quote(text, safe="")
