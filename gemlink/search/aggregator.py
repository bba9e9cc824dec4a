"""Query several Gemini search engines and merge their links.

Every engine sees the same query, in declaration order.  Each engine's page
is rendered with a link offset equal to the number of links collected so
far, which gives the whole search a single numbering: if the first engine
contributes ``[1]`` and ``[2]``, the second engine starts at ``[3]``.

A failing engine never aborts the search; its problem is printed to stderr
as a notice and the next engine is tried.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Sequence

from gemlink.gemtext.renderer import PLAIN, Style, render
from gemlink.protocol.engine import INPUT, REDIRECT, SUCCESS, GeminiClient
from gemlink.protocol.errors import EmptyQuery, GemError, NoResults
from gemlink.protocol.models import Response
from gemlink.protocol.url import encode_query, parse, resolve
from gemlink.search.engines import SearchEngine
from gemlink.state.store import LinkStateStore, search_context


@dataclass
class EngineSection:
    """What one engine contributed to a search."""

    engine: SearchEngine
    text: str | None = None
    notice: str | None = None
    first_number: int = 1
    links: List[str] = field(default_factory=list)


@dataclass
class SearchResult:
    query: str
    sections: List[EngineSection] = field(default_factory=list)
    links: List[str] = field(default_factory=list)


class _Skip(Exception):
    """Internal: this engine produced nothing usable."""


class SearchAggregator:
    def __init__(
        self,
        client: GeminiClient,
        engines: Sequence[SearchEngine],
        store: LinkStateStore,
        style: Style | None = None,
    ) -> None:
        self.client = client
        self.engines = list(engines)
        self.store = store
        self.style = style or PLAIN

    def _query(self, engine: SearchEngine, query: str) -> Response:
        url = parse(f"{engine.query_endpoint}?{encode_query(query)}")
        response = self.client.request(url)
        if response.header.status_class == REDIRECT:
            # Search endpoints commonly redirect once; a second hop is not followed.
            url = parse(resolve(url, response.header.meta))
            response = self.client.request(url)
        return response

    def _search_engine(self, engine: SearchEngine, query: str, offset: int) -> EngineSection:
        response = self._query(engine, query)
        header = response.header
        status_class = header.status_class

        if status_class == INPUT:
            raise _Skip(f"endpoint rejected the query ({header.status} {header.meta})")
        if status_class != SUCCESS:
            detail = f"status {header.status}"
            if header.meta:
                detail += f": {header.meta}"
            raise _Skip(detail)
        if not response.is_gemtext:
            raise _Skip(f"unexpected content type {response.mime_type}")

        page = render(response.text(), response.url, link_offset=offset, style=self.style)
        return EngineSection(engine=engine, text=page.text, first_number=offset + 1, links=page.links)

    def search(self, query: str) -> SearchResult:
        """Run *query* against every engine and save the combined links.

        Raises:
            EmptyQuery: If *query* is blank.
            NoResults: If no engine produced a single link.
        """
        # One line in the state file: newlines and tabs fold into single spaces.
        query = " ".join(query.split())
        if not query:
            raise EmptyQuery("search needs a query")

        result = SearchResult(query=query)
        for engine in self.engines:
            offset = len(result.links)
            try:
                section = self._search_engine(engine, query, offset)
            except (GemError, _Skip) as exc:
                print(f"[{engine.name}] {exc}", file=sys.stderr)
                section = EngineSection(engine=engine, notice=str(exc), first_number=offset + 1)
            result.sections.append(section)
            result.links.extend(section.links)

        if not result.links:
            raise NoResults(f"no results for {query!r}")

        self.store.save(search_context(query), result.links)
        return result
