"""The `links` command: show a page's links grouped by context."""

import json
from typing import Optional

import typer

from backend.links.fetcher import collect_links
from backend.links.models import filter_groups
from cli.rendering import render_groups


def links_command(
    url: str = typer.Argument(..., help="Page whose links should be listed."),
    as_json: bool = typer.Option(False, "--json", help="Print the groups as JSON."),
    same_origin_only: bool = typer.Option(
        False, "--same-origin-only", help="Hide links to other hosts."
    ),
    match: Optional[str] = typer.Option(
        None, "--match", help="Only show links whose text or URL contains TEXT."
    ),
) -> None:
    """Fetch a page and list its links, grouped by where they sit on the page."""
    try:
        groups = collect_links(url)
    except Exception as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    groups = filter_groups(groups, match=match, same_origin_only=same_origin_only)

    if as_json:
        typer.echo(json.dumps([g.to_dict() for g in groups], indent=2))
        return

    typer.echo(render_groups(groups))
