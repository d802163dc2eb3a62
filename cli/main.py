"""Page Binder CLI — entry-point for all backend operations.

Usage:
    python cli/main.py --help

Commands:
    links   → list a page's links, grouped by context
    pdf     → capture a page and selected links into one PDF
    prefs   → saved defaults (paper size, orientation, output folder)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import typer

from cli.commands.links import links_command
from cli.commands.pdf import pdf_command
from cli.commands.prefs import prefs_app

app = typer.Typer(
    name="binder",
    help="Bind web pages into a single PDF.",
    no_args_is_help=True,
)

app.command("links")(links_command)
app.command("pdf")(pdf_command)
app.add_typer(prefs_app, name="prefs")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
