"""The `pdf` command: capture a page (and chosen links) into one PDF."""

from pathlib import Path
from typing import List, Optional

import typer

from backend.assembler import OutputSettings
from backend.config import settings
from backend.errors import NothingCapturedError, SurfaceError
from backend.jobs.runner import build_pdf
from backend.links.fetcher import collect_links
from backend.links.models import LinkGroup
from cli.context import load_preferences


def _select_links(
    groups: List[LinkGroup],
    group_names: List[str],
    all_links: bool,
    same_origin_only: bool,
    match: Optional[str] = None,
) -> List[str]:
    """Return the URLs of the chosen groups, in page order.

    With *match* and no group names, every group is searched.
    """
    wanted = {name.strip().lower() for name in group_names}
    all_links = all_links or bool(match and not wanted)
    matched: set[str] = set()
    urls: List[str] = []
    for group in groups:
        keys = {group.group_name.lower(), group.group_id.lower()}
        hit = keys & wanted
        if not (all_links or hit):
            continue
        matched |= hit
        for link in group.links:
            if same_origin_only and not link.same_origin:
                continue
            if match and not link.matches(match):
                continue
            urls.append(link.url)

    for name in sorted(wanted - matched):
        typer.echo(f"⚠️ No link group named {name!r}.")
    return urls


def _progress(done: int, total: int, url: str) -> None:
    typer.echo(f"📸 [{done}/{total}] {url}")


def pdf_command(
    url: str = typer.Argument(..., help="Source page URL."),
    link: Optional[List[str]] = typer.Option(
        None, "--link", "-l", help="Extra page to include (repeatable)."
    ),
    group: Optional[List[str]] = typer.Option(
        None, "--group", "-g", help="Include every link of this group (repeatable)."
    ),
    all_links: bool = typer.Option(False, "--all-links", help="Include every link on the page."),
    same_origin_only: bool = typer.Option(
        False, "--same-origin-only", help="Only include grouped links on the source host."
    ),
    match: Optional[str] = typer.Option(
        None, "--match", help="Only include grouped links whose text or URL contains TEXT."
    ),
    no_source: bool = typer.Option(False, "--no-source", help="Leave the source page out."),
    paper_size: Optional[str] = typer.Option(None, "--paper-size", help="A4 | Letter | Legal"),
    orientation: Optional[str] = typer.Option(None, "--orientation", help="portrait | landscape"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write the PDF."),
) -> None:
    """Capture the page, plus any selected links, into a single PDF."""
    prefs = load_preferences()

    try:
        output_settings = OutputSettings.from_strings(
            paper_size or prefs.paper_size or settings.default_paper_size,
            orientation or prefs.orientation or settings.default_orientation,
        )
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

    targets: List[str] = [] if no_source else [url]

    if group or all_links or match:
        typer.echo(f"🔍 Collecting links from {url} …")
        try:
            groups = collect_links(url)
        except Exception as e:
            typer.echo(f"❌ Error: {e}")
            raise typer.Exit(code=1)
        targets.extend(_select_links(groups, group or [], all_links, same_origin_only, match))

    targets.extend(link or [])
    # Keep the first occurrence of each URL, preserving order.
    targets = list(dict.fromkeys(targets))

    if not targets:
        typer.echo("❌ Please select at least one page to include in the PDF.")
        raise typer.Exit(code=1)

    typer.echo(
        f"📄 Capturing {len(targets)} page(s) on "
        f"{output_settings.paper_size.value} {output_settings.orientation.value} …"
    )
    try:
        job = build_pdf(targets, output_settings=output_settings, on_progress=_progress)
    except (NothingCapturedError, SurfaceError) as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    if output is None:
        out_dir = Path(prefs.output_dir) if prefs.output_dir else Path.cwd()
        output = out_dir / job.filename
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(job.pdf)

    for failure in job.failures:
        typer.echo(f"⚠️ Failed to capture: {failure.url} ({failure.message})")
    typer.echo(f"✅ Saved {job.page_count} page(s) to {output}")
