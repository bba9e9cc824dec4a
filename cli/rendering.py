"""Utilities for turning client outcomes into terminal text."""

from __future__ import annotations

from gemlink.gemtext.renderer import PLAIN, Style
from gemlink.protocol.models import InputRequest
from gemlink.search.aggregator import SearchResult
from gemlink.state.store import LinkState

SEARCH_FOOTER = "Open a result with: gem <number>"


def render_input(request: InputRequest, style: Style = PLAIN) -> str:
    """Explain how to answer an input prompt from the shell."""
    kind = "Sensitive input" if request.sensitive else "Input"
    lines = [
        style.bold(f"{kind} requested by {request.url}"),
        f"  {request.prompt or '(no prompt)'}",
        "",
        f"Answer with: gem {request.template}<answer>",
        f"         or: gem {request.url} <answer words>",
    ]
    return "\n".join(lines)


def render_search(result: SearchResult, style: Style = PLAIN) -> str:
    """One section per engine, in the order they were queried."""
    blocks: list[str] = []
    for section in result.sections:
        title = f"── {section.engine.name} "
        # The reason was already reported on stderr.
        body = section.text if section.text is not None else style.dim("(skipped)")
        blocks.append(f"{style.bold(title.ljust(40, '─'))}\n{body}")
    blocks.append(f"{len(result.links)} link(s) for {result.query!r}. {SEARCH_FOOTER}")
    return "\n\n".join(blocks)


def render_saved(state: LinkState, style: Style = PLAIN) -> str:
    """List the links the next ``gem <number>`` would choose from."""
    if state.is_search:
        heading = f"Last search: {state.query}"
    else:
        heading = f"Last page: {state.context}"
    lines = [style.bold(heading)]
    if not state.links:
        lines.append("  (no links)")
    for number, url in enumerate(state.links, start=1):
        lines.append(f"{style.link_number(number)} {url}")
    return "\n".join(lines)
