"""CLI commands for running test suites."""

import importlib
import json
import logging
import os
import sys

import rich
from rich.markup import escape

from apiconform.config import load_config
from apiconform.runner.executor import TestExecutor
from apiconform.runner.registry import TestRegistry
from apiconform.scoring.models import RunReport, ScoreColor

logger = logging.getLogger(__name__)

_COLOR_STYLES = {
    ScoreColor.ERROR: "red",
    ScoreColor.LOW: "yellow",
    ScoreColor.HIGH: "cyan",
    ScoreColor.PERFECT: "green",
}


def load_registry(target: str) -> TestRegistry:
    """Resolve ``module:attribute`` to a TestRegistry.

    The attribute may be a registry or a zero-argument callable returning one.
    Modules are also looked up in the current working directory.

    Raises:
        ValueError: If the target is malformed or does not name a registry
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Suite must look like 'module:attribute', got {target!r}")

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    module = importlib.import_module(module_name)
    try:
        obj = getattr(module, attr)
    except AttributeError:
        raise ValueError(f"Module {module_name!r} has no attribute {attr!r}") from None

    if callable(obj) and not isinstance(obj, TestRegistry):
        obj = obj()
    if not isinstance(obj, TestRegistry):
        raise ValueError(f"{target!r} is not a TestRegistry")
    return obj


def run_command(
    suite: str,
    dataset_id: str | None = None,
    timeout_seconds: float | None = None,
    format: str = "human",
) -> int:
    """Run a test suite and print its score.

    Args:
        suite: ``module:attribute`` naming the suite's TestRegistry
        dataset_id: Dataset identifier passed to every test
        timeout_seconds: Optional limit on the whole run
        format: Output format: "human", "json", or "jsonl"

    Returns:
        Exit code (0 = every point scored, 1 = otherwise)
    """
    try:
        config = load_config(dataset_id=dataset_id, timeout_seconds=timeout_seconds)
        registry = load_registry(suite)

        executor = TestExecutor(registry, timeout_seconds=config.timeout_seconds)
        report = executor.run_sync(config.dataset_id)

        _output_report(report, format)

        return 0 if report.passed else 1

    except Exception as e:
        logger.debug("Run of %s failed", suite, exc_info=True)
        if format == "human":
            rich.print(f"[red]Error:[/red] {escape(str(e))}")
        else:
            print(json.dumps({"error": str(e)}))
        return 1


def _output_report(report: RunReport, format: str) -> None:
    """Output a run report in the specified format.

    Args:
        report: RunReport to output
        format: Output format ("human", "json", or "jsonl")
    """
    if format == "json":
        print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2))

    elif format == "jsonl":
        # One JSON object per test
        for test in report.tests:
            print(json.dumps(test.model_dump(mode="json", by_alias=True)))

        summary = {
            "dataset_id": report.dataset_id,
            "total_score": report.overall.total_score,
            "total_points": report.overall.total_points,
            "color": report.overall.color.value,
            "duration_ms": report.duration_ms,
        }
        print(json.dumps(summary))

    else:  # human
        rich.print("")
        for test in report.tests:
            style = _COLOR_STYLES[test.color]
            running = ""
            if test.running_time_ms is not None:
                running = f"{test.running_time_ms} milliseconds"
            rich.print(
                f"[{style}]{test.label:>7}[/{style}] "
                f"[bold]{escape(test.title)}[/bold] [dim]{running}[/dim]"
            )
            rich.print(f"        [dim]{escape(test.description)}[/dim]")

            for assertion in test.failed_assertions:
                rich.print(f"        [red]✗[/red] {escape(assertion.message)}")
            for error in test.fatal_errors:
                rich.print(f"        [red]![/red] {escape(error)}")
            if test.fatal_errors:
                rich.print("        [red]Testing could not complete due to errors[/red]")

        overall = report.overall
        style = _COLOR_STYLES[overall.color]
        rich.print(
            f"\nthis API scores [{style}]{overall.total_score}[/{style}] "
            f"out of {overall.total_points} points"
        )
        rich.print(f"[dim]{len(report.tests)} tests in {report.duration_ms / 1000:.2f}s[/dim]\n")
