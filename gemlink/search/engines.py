"""The search backends queried by ``gem search``."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchEngine:
    name: str
    query_endpoint: str


DEFAULT_ENGINES: tuple[SearchEngine, ...] = (
    SearchEngine("geminispace.info", "gemini://geminispace.info/search"),
    SearchEngine("kennedy", "gemini://kennedy.gemi.dev/search"),
    SearchEngine("tlgs", "gemini://tlgs.one/search"),
)


def parse_engines(value: str) -> tuple[SearchEngine, ...]:
    """Parse ``"name=gemini://host/search,other=gemini://..."``.

    Raises:
        ValueError: If an entry has no ``=`` or an empty name or endpoint.
    """
    engines: list[SearchEngine] = []
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, endpoint = entry.partition("=")
        if not sep or not name.strip() or not endpoint.strip():
            raise ValueError(f"invalid search engine entry {entry!r}, expected name=url")
        engines.append(SearchEngine(name.strip(), endpoint.strip()))
    return tuple(engines)
