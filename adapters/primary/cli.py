"""Command line entry point for the interactive record console."""

from __future__ import annotations

from typing import Optional

import typer

from adapters.primary.console import ConsoleMenu
from adapters.secondary.memory.record_adapter import InMemoryRecordAdapter
from config.logging import configure_logging
from config.settings import ConsoleSettings, SettingsError

app = typer.Typer(
    name="records",
    help="Create, edit and undo changes to a validated record.",
    add_completion=False,
)


@app.command()
def main(
    value_type: str = typer.Option(
        "str",
        "--value-type",
        "-t",
        help="Type of the record values: str, int or float.",
    ),
    min_value: Optional[float] = typer.Option(
        None,
        "--min-value",
        help="Smallest accepted value (numeric types only).",
    ),
    max_value: Optional[float] = typer.Option(
        None,
        "--max-value",
        help="Largest accepted value (numeric types only).",
    ),
    log_noop_removals: bool = typer.Option(
        False,
        "--log-noop-removals",
        help="Record removals of absent values as undoable steps.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit logs as JSON lines.",
    ),
) -> None:
    """Start the interactive record menu."""
    try:
        settings = ConsoleSettings(
            value_type=value_type,  # type: ignore[arg-type]
            min_value=min_value,
            max_value=max_value,
            log_noop_removals=log_noop_removals,
        )
    except SettingsError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING")
    adapter = InMemoryRecordAdapter(config=settings.record_config())
    ConsoleMenu(adapter, settings).run()


if __name__ == "__main__":
    app()
