"""Persistence for the last page's (or search's) link list.

Each invocation of the CLI is a fresh process, so "follow link 3" only works
because the previous invocation wrote its links here.

File layout (plain text, no escaping)::

    <context>
    <link 1>
    <link 2>
    ...

``context`` is the visited page URL, or ``gem:search:<query>`` after a
search.  The file is replaced whole on every save; there is no locking, so
two shells racing on the same file is an accepted limitation.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from gemlink.protocol.errors import NoSavedState, OutOfRange

SEARCH_PREFIX = "gem:search:"


def search_context(query: str) -> str:
    """Return the context sentinel recorded for a search."""
    return SEARCH_PREFIX + query


def _check_lines(context: str, links: Sequence[str]) -> None:
    """Every field must fit on one line of the state file."""
    for value in (context, *links):
        if "\n" in value or "\r" in value:
            raise ValueError(f"line break in link state entry {value!r}")


@dataclass
class LinkState:
    context: str
    links: List[str] = field(default_factory=list)

    @property
    def is_search(self) -> bool:
        return self.context.startswith(SEARCH_PREFIX)

    @property
    def query(self) -> str | None:
        """The search query, or ``None`` for a page visit."""
        if not self.is_search:
            return None
        return self.context[len(SEARCH_PREFIX):]

    def to_text(self) -> str:
        return "\n".join([self.context, *self.links]) + "\n"

    @classmethod
    def from_text(cls, data: str) -> LinkState:
        lines = data.split("\n")
        while lines and not lines[-1].strip():
            lines.pop()
        if not lines:
            raise NoSavedState("saved link state is empty")
        return cls(context=lines[0].rstrip("\r"), links=[line.rstrip("\r") for line in lines[1:]])


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class LinkStateStore(ABC):
    """Where the most recent link list lives between invocations."""

    @abstractmethod
    def load(self) -> LinkState:
        """Return the saved state.  Raises ``NoSavedState`` if there is none."""

    @abstractmethod
    def save(self, context: str, links: Sequence[str]) -> None:
        """Replace the saved state with *context* and *links*.

        Raises:
            ValueError: If any entry contains a line break.
        """

    def resolve(self, number: int) -> str:
        """Return the URL shown as ``[number]`` on the last page."""
        state = self.load()
        if not 1 <= number <= len(state.links):
            raise OutOfRange(number, len(state.links))
        return state.links[number - 1]


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------

class FileLinkStateStore(LinkStateStore):
    """Plain-text file in the user's state directory."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> LinkState:
        if not self.path.exists():
            raise NoSavedState("no saved links yet, visit a page or run a search first")
        return LinkState.from_text(self.path.read_text(encoding="utf-8"))

    def save(self, context: str, links: Sequence[str]) -> None:
        _check_lines(context, links)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(LinkState(context, list(links)).to_text(), encoding="utf-8")
        os.replace(tmp, self.path)


class MemoryLinkStateStore(LinkStateStore):
    """In-process store, used by tests and embedders."""

    def __init__(self, state: LinkState | None = None) -> None:
        self.state = state

    def load(self) -> LinkState:
        if self.state is None:
            raise NoSavedState("no saved links yet, visit a page or run a search first")
        return LinkState(self.state.context, list(self.state.links))

    def save(self, context: str, links: Sequence[str]) -> None:
        _check_lines(context, links)
        self.state = LinkState(context, list(links))
