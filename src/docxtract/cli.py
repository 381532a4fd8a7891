"""Command line interface for docxtract."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import typer
from pydantic import TypeAdapter

from docxtract.commands import RecognizedCommand
from docxtract.config import get_settings
from docxtract.errors import DocxtractError
from docxtract.executable import Executable, OutputResult
from docxtract.logging_utils import configure_logging
from docxtract.reader import read_document
from docxtract.rules import FragmentRules, HtmlRules, StyledFragment

_FRAGMENTS = TypeAdapter(list[StyledFragment])


class OutputFormat(StrEnum):
    TEXT = "text"
    HTML = "html"
    JSON = "json"


app = typer.Typer(
    name="docxtract",
    help="Extract lightly formatted text from .docx documents.",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(None, "--log-level", help="Log level, overrides DOCXTRACT_LOG_LEVEL"),
) -> None:
    configure_logging(profile="cli", level=log_level or get_settings().log_level)


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"error: {exc}", err=True)
    return typer.Exit(1)


@app.command()
def extract(
    path: Path = typer.Argument(..., help="Document to extract"),  # noqa: B008
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    keep: bool = typer.Option(False, "--keep", help="Keep the extraction directory"),
) -> None:
    """Print the text of a .docx document."""
    settings = get_settings(keep_extracted=True) if keep else get_settings()
    try:
        if output_format is OutputFormat.HTML:
            rendered = read_document(path, HtmlRules, settings=settings) or []
            typer.echo(" ".join(item for item in rendered if item))
            return
        fragments = read_document(path, FragmentRules, settings=settings) or []
    except DocxtractError as exc:
        raise _fail(exc) from exc

    if output_format is OutputFormat.JSON:
        typer.echo(_FRAGMENTS.dump_json(fragments, indent=2).decode("utf-8"))
    else:
        typer.echo(" ".join(fragment.text for fragment in fragments if fragment.text))


@app.command(
    "run",
    context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True},
)
def run_command(
    command: str = typer.Argument(..., help="unzip, bash, sh or an executable path"),
    arguments: list[str] | None = typer.Argument(None, help="Arguments passed to the command"),  # noqa: B008
    timeout: float | None = typer.Option(None, "--timeout", "-t", help="Deadline in seconds"),
    stream: bool = typer.Option(False, "--stream", help="Print output chunks as they are delivered"),
) -> None:
    """Run a command through the execution engine and print its output."""
    try:
        executable = Executable(RecognizedCommand.from_name(command), arguments or [], timeout)
        if not stream:
            typer.echo(executable.execute(), nl=False)
            return
    except (DocxtractError, ValueError) as exc:
        raise _fail(exc) from exc

    failures: list[OutputResult] = []

    def _print(result: OutputResult) -> None:
        if result.ok:
            typer.echo(result.text, nl=False)
        else:
            failures.append(result)
            typer.echo(f"error: {result.error}", err=True)

    executable.execute_streaming(_print)
    if failures:
        raise typer.Exit(1)
