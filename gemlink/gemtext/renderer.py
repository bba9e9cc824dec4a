"""Gemtext → terminal text, plus the page's numbered link list."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from gemlink.protocol.models import GemUrl
from gemlink.protocol.url import resolve, scheme_of

PREFORMAT_TOGGLE = "```"

# Line types, checked in order; the prefixes are mutually exclusive.
LINK = "link"
HEADING_3 = "heading3"
HEADING_2 = "heading2"
HEADING_1 = "heading1"
BULLET = "bullet"
QUOTE = "quote"
TEXT = "text"

_LINE_TYPES: tuple[tuple[str, str], ...] = (
    ("=> ", LINK),
    ("### ", HEADING_3),
    ("## ", HEADING_2),
    ("# ", HEADING_1),
    ("* ", BULLET),
    ("> ", QUOTE),
)

_BLANK_RUN_RE = re.compile(r"\n{3,}")


# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------

class Style:
    """ANSI SGR styling that can be switched off (``NO_COLOR``, pipes, tests)."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    ITALIC = "\033[3m"
    UNDERLINE = "\033[4m"
    CYAN = "\033[36m"

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def apply(self, text: str, *codes: str) -> str:
        if not self.enabled or not codes or not text:
            return text
        return "".join(codes) + text + self.RESET

    def bold(self, text: str) -> str:
        return self.apply(text, self.BOLD)

    def dim(self, text: str) -> str:
        return self.apply(text, self.DIM)

    def italic(self, text: str) -> str:
        return self.apply(text, self.ITALIC)

    def underline(self, text: str) -> str:
        return self.apply(text, self.UNDERLINE)

    def link_number(self, number: int) -> str:
        return self.apply(f"[{number}]", self.BOLD, self.CYAN)


PLAIN = Style(enabled=False)


@dataclass
class RenderedPage:
    text: str
    links: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Line handling
# ---------------------------------------------------------------------------

def classify_line(line: str) -> tuple[str, str]:
    """Return ``(line_type, rest)`` for a line outside a preformatted block."""
    for prefix, line_type in _LINE_TYPES:
        if line.startswith(prefix):
            rest = line[len(prefix):]
            if line_type == LINK and not rest.strip():
                return TEXT, line
            return line_type, rest
    return TEXT, line


def split_link(rest: str) -> tuple[str, str]:
    """Split the text after ``=> `` into ``(target, label)``."""
    parts = rest.strip().split(maxsplit=1)
    target = parts[0]
    label = parts[1].strip() if len(parts) > 1 else target
    return target, label


def _format_link(number: int, url: str, label: str, style: Style) -> str:
    line = f"{style.link_number(number)} {label}"
    scheme = scheme_of(url)
    if scheme and scheme != "gemini":
        line += " " + style.dim(f"({scheme})")
    return line


def _format_line(line_type: str, rest: str, style: Style) -> str:
    if line_type == HEADING_1:
        return style.apply(rest.strip(), Style.BOLD, Style.UNDERLINE)
    if line_type == HEADING_2:
        return style.bold(rest.strip())
    if line_type == HEADING_3:
        return "  " + style.underline(rest.strip())
    if line_type == BULLET:
        return "  • " + rest.strip()
    if line_type == QUOTE:
        return "  │ " + style.italic(rest)
    return rest


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render(
    body: str,
    page_url: GemUrl,
    link_offset: int = 0,
    footer: str = "",
    style: Style | None = None,
) -> RenderedPage:
    """Render gemtext *body* fetched from *page_url*.

    Links are resolved to absolute URLs and numbered from
    ``link_offset + 1`` so several pages can share one numbering.
    """
    style = style or PLAIN
    out: list[str] = []
    links: list[str] = []
    preformatted = False

    for line in body.split("\n"):
        line = line.rstrip("\r")

        if line.startswith(PREFORMAT_TOGGLE):
            if not preformatted:
                alt_text = line[len(PREFORMAT_TOGGLE):].strip()
                if alt_text:
                    out.append(style.dim(alt_text))
            preformatted = not preformatted
            continue

        if preformatted:
            out.append(style.dim(line))
            continue

        line_type, rest = classify_line(line)
        if line_type == LINK:
            target, label = split_link(rest)
            url = resolve(page_url, target)
            links.append(url)
            out.append(_format_link(link_offset + len(links), url, label, style))
        else:
            out.append(_format_line(line_type, rest, style))

    text = _BLANK_RUN_RE.sub("\n\n", "\n".join(out)).rstrip("\n")
    if footer:
        text = f"{text}\n\n{footer}" if text else footer
    return RenderedPage(text=text, links=links)
