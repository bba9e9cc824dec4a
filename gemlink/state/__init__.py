"""Link-state persistence package."""

from gemlink.state.store import (
    FileLinkStateStore,
    LinkState,
    LinkStateStore,
    MemoryLinkStateStore,
    search_context,
)

__all__ = [
    "LinkState",
    "LinkStateStore",
    "FileLinkStateStore",
    "MemoryLinkStateStore",
    "search_context",
]
