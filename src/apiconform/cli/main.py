"""apiconform CLI application."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

import typer
from rich import print as rprint

import apiconform as apiconform_pkg


class OutputFormat(StrEnum):
    """Output format for CLI commands."""

    human = "human"
    json = "json"
    jsonl = "jsonl"


app = typer.Typer(
    name="apiconform",
    help="Grade a JSON API against declarative response schemas.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        rprint(f"apiconform {apiconform_pkg.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """apiconform — grade a JSON API against declarative response schemas."""
    from dotenv import load_dotenv

    load_dotenv()


@app.command("run")
def run(
    suite: Annotated[
        str,
        typer.Argument(help="Test suite as module:attribute naming a TestRegistry"),
    ],
    dataset_id: Annotated[
        str | None,
        typer.Option("--dataset-id", "-d", help="Dataset identifier passed to every test"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Give up on unfinished tests after N seconds"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.human,
) -> None:
    """Run every test in a suite and print the score."""
    from apiconform.runner.cli import run_command

    exit_code = run_command(
        suite=suite,
        dataset_id=dataset_id,
        timeout_seconds=timeout,
        format=format.value,
    )
    raise typer.Exit(exit_code)
