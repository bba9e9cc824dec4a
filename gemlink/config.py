"""Runtime settings for gem: where the link list lives, protocol limits,
colour, and which search engines to query.

Each field reads a ``GEM_*`` variable (or ``XDG_STATE_HOME`` / ``NO_COLOR``)
when a ``Settings`` is created; a ``.env`` in the project root can set them
too.  Core modules never import this: the CLI passes a ``Settings`` in.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from gemlink.search.engines import DEFAULT_ENGINES, SearchEngine, parse_engines

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _default_state_dir() -> Path:
    explicit = os.environ.get("GEM_STATE_DIR")
    if explicit:
        return Path(explicit).expanduser()
    xdg = os.environ.get("XDG_STATE_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "state"
    return base / "gem"


def _default_engines() -> tuple[SearchEngine, ...]:
    raw = os.environ.get("GEM_SEARCH_ENGINES", "").strip()
    if not raw:
        return DEFAULT_ENGINES
    return parse_engines(raw)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Link-state persistence
    # ------------------------------------------------------------------
    state_dir: Path = field(default_factory=_default_state_dir)

    @property
    def link_state_path(self) -> Path:
        """Absolute path to the file holding the last page's link list."""
        return self.state_dir / "links"

    # ------------------------------------------------------------------
    # Protocol
    # ------------------------------------------------------------------
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("GEM_MAX_REDIRECTS", "5"))
    )
    connect_timeout: float = field(
        default_factory=lambda: float(os.environ.get("GEM_CONNECT_TIMEOUT", "15.0"))
    )
    read_timeout: float = field(
        default_factory=lambda: float(os.environ.get("GEM_READ_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    # https://no-color.org: any non-empty value disables ANSI styling.
    color: bool = field(default_factory=lambda: not os.environ.get("NO_COLOR"))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    search_engines: tuple[SearchEngine, ...] = field(default_factory=_default_engines)


# Module-level singleton, import this everywhere:
#   from gemlink.config import settings
settings = Settings()
