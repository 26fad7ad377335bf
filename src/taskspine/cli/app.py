"""
Root Typer application for the taskspine CLI.
"""

from __future__ import annotations

from enum import Enum

import typer
from pydantic import ValidationError as PydanticValidationError
from typer import Typer

from taskspine.cli.utils import fail
from taskspine.core.errors import ConfigError
from taskspine.core.logging import configure_logging
from taskspine.core.settings import get_settings

app = Typer(
    name="taskspine",
    help="taskspine — named tasks, series/parallel composition and task trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from taskspine import __version__

        typer.echo(f"taskspine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: LogLevel | None = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Override TASKSPINE_LOG_LEVEL.",
    ),
) -> None:
    """taskspine CLI — list and visualize the tasks of a taskfile."""
    try:
        settings = get_settings()
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ()))
        message = f"Invalid setting TASKSPINE_{field.upper()}: {first.get('msg', e)}"
        fail(ConfigError(message, cause=e))

    configure_logging(
        level=log_level.value if log_level is not None else settings.log_level,
        json_format=settings.log_format == "json",
    )


# ── Sub-command registration ─────────────────────────────────────────────

from taskspine.cli.tasks import app as tasks_app  # noqa: E402

app.add_typer(tasks_app, name="tasks", help="Inspect taskfile tasks.")
