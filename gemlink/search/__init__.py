"""Search package: engine list and the multi-engine aggregator."""

from gemlink.search.engines import DEFAULT_ENGINES, SearchEngine, parse_engines

__all__ = ["SearchEngine", "DEFAULT_ENGINES", "parse_engines"]
