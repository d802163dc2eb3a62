"""Preference commands: defaults for paper, orientation and output folder."""

from typing import Optional

import typer

from backend.assembler import Orientation, PaperSize
from cli.context import CliPreferences, load_preferences, save_preferences

prefs_app = typer.Typer(help="Show or change saved defaults.")


@prefs_app.command("show")
def prefs_show() -> None:
    """Print the saved preferences."""
    prefs = load_preferences()
    typer.echo(f"Paper size : {prefs.paper_size or '(default)'}")
    typer.echo(f"Orientation: {prefs.orientation or '(default)'}")
    typer.echo(f"Output dir : {prefs.output_dir or '(current directory)'}")


@prefs_app.command("set")
def prefs_set(
    paper_size: Optional[str] = typer.Option(None, "--paper-size", help="A4 | Letter | Legal"),
    orientation: Optional[str] = typer.Option(None, "--orientation", help="portrait | landscape"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help="Folder for new PDFs."),
) -> None:
    """Change one or more saved preferences."""
    prefs = load_preferences()

    try:
        if paper_size is not None:
            prefs.paper_size = PaperSize.parse(paper_size).value
        if orientation is not None:
            prefs.orientation = Orientation.parse(orientation).value
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

    if output_dir is not None:
        prefs.output_dir = output_dir

    save_preferences(prefs)
    typer.echo("✅ Preferences saved.")


@prefs_app.command("reset")
def prefs_reset() -> None:
    """Forget every saved preference."""
    save_preferences(CliPreferences())
    typer.echo("✅ Preferences reset.")
