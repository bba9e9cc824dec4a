"""gem CLI, the entry-point invoked by the host shell's plugin protocol.

Usage:
    gem capabilities
    gem help
    gem run gem <url | host>           visit a page
    gem run gem <url> <answer words>   answer an input prompt
    gem run gem <number>               follow link <number> of the last page
    gem run gem search <query>         search every configured engine
    gem run gem                        list the saved links

Each invocation is a separate process: the link list of the last page or
search is persisted so a later ``<number>`` can be resolved.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from gemlink.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import List, Optional

import typer

from cli.context import build_aggregator, build_client
from cli.rendering import render_input, render_saved, render_search
from gemlink.protocol.engine import GeminiClient
from gemlink.protocol.errors import GemError
from gemlink.protocol.models import InputRequest
from gemlink.protocol.url import encode_query, normalize

COMMAND_NAME = "gem"

app = typer.Typer(
    name="gem",
    help="Minimal Gemini client with numbered links.",
    no_args_is_help=True,
    add_completion=False,
)


# ---------------------------------------------------------------------------
# Plugin protocol
# ---------------------------------------------------------------------------
@app.command("capabilities")
def capabilities() -> None:
    """Describe the commands this plugin registers."""
    typer.echo(
        json.dumps(
            {
                "commands": [
                    {
                        "name": COMMAND_NAME,
                        "description": "Browse Gemini capsules and search geminispace.",
                        "usage": f"{COMMAND_NAME} <url | number | search <query>>",
                    }
                ]
            },
            indent=2,
        )
    )


@app.command("help")
def help_() -> None:
    """Print usage for the registered command."""
    typer.echo(__doc__.strip())


@app.command(
    "run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run(
    command: str = typer.Argument(..., help=f"Registered command name ({COMMAND_NAME})."),
    args: Optional[List[str]] = typer.Argument(
        None, help="A URL, a link number, or 'search' followed by a query."
    ),
) -> None:
    """Run a registered command."""
    if command != COMMAND_NAME:
        typer.echo(f"{COMMAND_NAME}: unknown command {command!r}", err=True)
        raise typer.Exit(code=1)

    try:
        output = _dispatch(list(args or []))
    except GemError as exc:
        typer.echo(f"{COMMAND_NAME}: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(output)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
def _with_answer(target: str, answer: str) -> str:
    """Replace the query of *target* with the percent-encoded *answer*."""
    base = normalize(target).partition("?")[0]
    return f"{base}?{encode_query(answer)}"


def _dispatch(args: list[str]) -> str:
    client = build_client()

    if not args:
        return render_saved(client.store.load(), client.style)

    head, rest = args[0], args[1:]
    if head == "search":
        result = build_aggregator(client).search(" ".join(rest))
        return render_search(result, client.style)

    if head.isascii() and head.isdigit():
        outcome = client.follow(int(head))
    elif rest:
        outcome = client.visit(_with_answer(head, " ".join(rest)))
    else:
        outcome = client.visit(head)
    return _render_outcome(client, outcome)


def _render_outcome(client: GeminiClient, outcome) -> str:
    if isinstance(outcome, InputRequest):
        return render_input(outcome, client.style)
    return outcome.text


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
