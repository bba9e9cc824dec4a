"""Per-invocation wiring for the gem CLI.

Every command runs in a fresh process; the only thing carried between
invocations is the link-state file in ``settings.state_dir``.
"""

from __future__ import annotations

from pathlib import Path

from gemlink.config import Settings, settings
from gemlink.gemtext.renderer import Style
from gemlink.protocol.engine import GeminiClient
from gemlink.protocol.transport import TlsDialer
from gemlink.search.aggregator import SearchAggregator
from gemlink.state.store import FileLinkStateStore, LinkStateStore


def _get_state_path(cfg: Settings | None = None) -> Path:
    """Return the path to the link-state file."""
    return (cfg or settings).link_state_path


def get_store(cfg: Settings | None = None) -> LinkStateStore:
    return FileLinkStateStore(_get_state_path(cfg))


def get_style(cfg: Settings | None = None) -> Style:
    cfg = cfg or settings
    return Style(enabled=cfg.color)


def build_client(cfg: Settings | None = None) -> GeminiClient:
    """Return a client talking real TLS and persisting to the state file."""
    cfg = cfg or settings
    dialer = TlsDialer(connect_timeout=cfg.connect_timeout, read_timeout=cfg.read_timeout)
    return GeminiClient(cfg, dialer, get_store(cfg), style=get_style(cfg))


def build_aggregator(client: GeminiClient, cfg: Settings | None = None) -> SearchAggregator:
    cfg = cfg or settings
    return SearchAggregator(client, cfg.search_engines, client.store, style=client.style)
