"""Interactive menu driving a record through the record port."""

from __future__ import annotations

from typing import Callable, Dict, Tuple

import structlog
import typer

from config.settings import ConsoleSettings
from core.domain.value_objects import RecordProfileError, ValidationError
from ports.record_port import NoActiveRecordError, RecordPort, RecordRequest

logger = structlog.get_logger(__name__)

MENU: Tuple[Tuple[str, str], ...] = (
    ("1", "Create a record"),
    ("2", "Add a value"),
    ("3", "Remove a value"),
    ("4", "Rename the record"),
    ("5", "Undo the last change"),
    ("6", "Print the record"),
    ("7", "Show statistics"),
    ("8", "Quit"),
)

QUIT = "8"


class ConsoleMenu:
    """Menu loop reading choices with ``typer.prompt`` until quit or end of input."""

    def __init__(self, port: RecordPort, settings: ConsoleSettings | None = None) -> None:
        self._port = port
        self._settings = settings or ConsoleSettings()
        self._handlers: Dict[str, Callable[[], None]] = {
            "1": self._create,
            "2": self._add,
            "3": self._remove,
            "4": self._rename,
            "5": self._undo,
            "6": self._show,
            "7": self._statistics,
        }

    def run(self) -> None:
        while True:
            self._print_menu()
            try:
                choice = typer.prompt("Select an option").strip()
            except typer.Abort:
                break
            if choice == QUIT:
                break
            handler = self._handlers.get(choice)
            if handler is None:
                typer.echo("Invalid choice. Please enter a valid option.")
                continue
            try:
                handler()
            except typer.Abort:
                break
            except NoActiveRecordError:
                typer.echo("Create a record first.")
            except (ValidationError, RecordProfileError) as exc:
                logger.debug("Console operation rejected", choice=choice, error=str(exc))
                typer.secho(f"Error: {exc}", fg=typer.colors.RED)
        typer.echo("Goodbye.")

    def _print_menu(self) -> None:
        typer.echo("Menu:")
        for key, label in MENU:
            typer.echo(f"{key}. {label}")

    def _create(self) -> None:
        name = typer.prompt("Enter record name")
        snapshot = self._port.create(
            RecordRequest(name=name, validator=self._settings.build_validator())
        )
        typer.echo(f"Record {snapshot.name} was created")

    def _ensure_record(self) -> None:
        # Fail before prompting for input.
        self._port.snapshot()

    def _add(self) -> None:
        self._ensure_record()
        value = self._settings.parse_value(typer.prompt("Enter a value"))
        snapshot = self._port.add_value(value)
        typer.echo(snapshot.rendered)

    def _remove(self) -> None:
        before = self._port.snapshot()
        value = self._settings.parse_value(typer.prompt("Enter a value to remove"))
        after = self._port.remove_value(value)
        if len(after.values) == len(before.values):
            typer.echo(f"Value {value} is not present.")
        else:
            typer.echo(after.rendered)

    def _rename(self) -> None:
        self._ensure_record()
        snapshot = self._port.rename(typer.prompt("Enter a new name"))
        typer.echo(f"Record renamed to {snapshot.name}")

    def _undo(self) -> None:
        before = self._port.snapshot()
        if before.undo_depth == 0:
            typer.echo("Nothing to undo.")
            return
        typer.echo(self._port.undo().rendered)

    def _show(self) -> None:
        typer.echo(self._port.snapshot().rendered)

    def _statistics(self) -> None:
        typer.echo(str(self._port.profile()))
