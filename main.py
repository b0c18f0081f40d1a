"""
main.py

Command line entry point for the wildlight gallery.
"""

import logging
import os
from datetime import date
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typer import Option, Typer

app = Typer()
logger = logging.getLogger(__name__)


def _setup_django() -> None:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "wildlight.settings")
    # The commands below prepare the store themselves and report failures
    os.environ.setdefault("WILDLIGHT_PREPARE_STORE", "false")
    import django
    django.setup()


def _prepare_store() -> None:
    from django.core.exceptions import ImproperlyConfigured
    from gallery.services import prepare_store

    try:
        prepare_store()
    except (ImproperlyConfigured, OSError) as exc:
        logger.error("Failed to initialize data files: %s", exc)
        raise typer.Exit(code=1) from exc


@app.callback()
def callback(
        verbose: bool = Option(False, "-v", "--verbose", help='Show verbose output.')
):
    logging.basicConfig(
        level="DEBUG" if verbose else "INFO", format="%(message)s", datefmt="[%X]", handlers=[RichHandler()]
    )


@app.command()
def init():
    """Create the data directories, seed sample photos and apply pending like resets."""
    _setup_django()
    _prepare_store()
    from common.store import data_root
    logger.info("Store ready at %s", data_root())


@app.command()
def timeline(
        today: Annotated[str, Option(help='Date to treat as today, YYYY-MM-DD. Defaults to the local date.')] = None,
):
    """Print the season timeline."""
    _setup_django()
    from django.utils import timezone
    from gallery.services import compute_timeline, load_photos

    try:
        day = date.fromisoformat(today) if today else timezone.localdate()
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid date: {today}") from exc

    table = Table(title=f"Timeline as of {day.isoformat()}")
    table.add_column("Season")
    table.add_column("Year", justify="right")
    table.add_column("Photos", justify="right")
    table.add_column("Cover")
    for summary in compute_timeline(load_photos(), day):
        entry = summary.to_dict()
        table.add_row(entry["seasonLabel"], str(entry["year"]), str(entry["count"]), entry["coverImage"] or "-")
    Console().print(table)


@app.command()
def serve(
        host: Annotated[str, Option(help='Interface to bind.')] = "127.0.0.1",
        port: Annotated[int, Option(help='Port to listen on.')] = 3000,
):
    """Prepare the store and run the development server."""
    _setup_django()
    _prepare_store()
    from django.core.management import call_command
    logger.info("Wildlight gallery running at http://%s:%s", host, port)
    call_command("runserver", f"{host}:{port}", use_reloader=False)


if __name__ == '__main__':
    app()
