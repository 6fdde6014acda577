"""TestExecutor — runs every registered test concurrently and scores them."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Callable
from functools import partial

from apiconform.runner.models import TestDefinition
from apiconform.runner.recorder import AssertionRecorder
from apiconform.runner.registry import TestRegistry
from apiconform.scoring.aggregator import ScoreAggregator
from apiconform.scoring.models import OverallScore, RunReport, TestReport

logger = logging.getLogger(__name__)

TestFinishedCallback = Callable[[TestReport, OverallScore], None]


class TestExecutor:
    """Starts all tests at once and waits for each to signal completion.

    A test is complete only when its body calls ``recorder.test_finished()``.
    Without a timeout, a body that never does so stalls the run.
    """

    def __init__(self, registry: TestRegistry, timeout_seconds: float | None = None) -> None:
        """Initialize executor.

        Args:
            registry: Tests to run
            timeout_seconds: Optional limit on the whole run (no limit if None)

        Raises:
            ValueError: If timeout_seconds is not positive
        """
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self.registry = registry
        self.timeout_seconds = timeout_seconds

    async def run(
        self, dataset_id: str = "", on_test_finished: TestFinishedCallback | None = None
    ) -> RunReport:
        """Run every registered test.

        Args:
            dataset_id: Passed to every recorder, opaque to the executor
            on_test_finished: Called in completion order with each test's report
                and the overall score so far

        Returns:
            RunReport with tests in registration order
        """
        self.registry.freeze()
        tests = list(self.registry)
        start_time = time.time()
        aggregator = ScoreAggregator()
        reports: list[TestReport | None] = [None] * len(tests)

        logger.debug("Starting %d tests for dataset %r", len(tests), dataset_id)

        loop = asyncio.get_running_loop()
        completions: asyncio.Queue[int] = asyncio.Queue()
        recorders: list[AssertionRecorder] = []
        tasks: list[asyncio.Task[object]] = []

        for index, test in enumerate(tests):
            recorder = AssertionRecorder(
                dataset_id, on_finish=partial(_signal_from_any_thread, loop, completions, index)
            )
            recorders.append(recorder)
            task = self._start(test, recorder)
            if task is not None:
                tasks.append(task)

        def finish(index: int) -> None:
            report = aggregator.add(tests[index], recorders[index])
            reports[index] = report
            logger.debug("Test %s finished: %s", report.id, report.label)
            if on_test_finished is not None:
                on_test_finished(report, aggregator.overall)

        deadline = None if self.timeout_seconds is None else loop.time() + self.timeout_seconds

        while aggregator.finished_count < len(tests):
            timeout = None if deadline is None else max(0.0, deadline - loop.time())
            try:
                index = await asyncio.wait_for(completions.get(), timeout)
            except TimeoutError:
                self._expire(tests, recorders, reports, finish)
                break
            finish(index)

        await _cancel_stragglers(tasks)

        return RunReport(
            dataset_id=dataset_id,
            tests=[r for r in reports if r is not None],
            overall=aggregator.overall,
            duration_ms=int((time.time() - start_time) * 1000),
        )

    def run_sync(
        self, dataset_id: str = "", on_test_finished: TestFinishedCallback | None = None
    ) -> RunReport:
        """Run every registered test from synchronous code."""
        return asyncio.run(self.run(dataset_id, on_test_finished))

    def _start(
        self, test: TestDefinition, recorder: AssertionRecorder
    ) -> asyncio.Task[object] | None:
        """Invoke a test body, scheduling it as a task if it returns an awaitable."""
        try:
            result = test.body(recorder)
        except Exception as e:
            _fail(test, recorder, e)
            return None

        if not inspect.isawaitable(result):
            return None

        task = asyncio.ensure_future(result)
        task.add_done_callback(partial(_on_body_done, test, recorder))
        return task

    def _expire(
        self,
        tests: list[TestDefinition],
        recorders: list[AssertionRecorder],
        reports: list[TestReport | None],
        finish: Callable[[int], None],
    ) -> None:
        """Finish every test not yet aggregated once the timeout has passed."""
        for index, recorder in enumerate(recorders):
            if reports[index] is not None:
                continue
            if recorder.finish_with_error(f"Test did not finish within {self.timeout_seconds}s"):
                logger.warning(
                    "Test %s did not finish within %ss", tests[index].id, self.timeout_seconds
                )
            finish(index)


def _signal_from_any_thread(
    loop: asyncio.AbstractEventLoop,
    completions: asyncio.Queue[int],
    index: int,
    recorder: AssertionRecorder,
) -> None:
    loop.call_soon_threadsafe(completions.put_nowait, index)


def _on_body_done(
    test: TestDefinition, recorder: AssertionRecorder, task: asyncio.Task[object]
) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if isinstance(exc, Exception):
        _fail(test, recorder, exc)


def _fail(test: TestDefinition, recorder: AssertionRecorder, exc: Exception) -> None:
    """Turn an exception escaping a test body into a fatal error."""
    logger.warning("Test %s raised %s: %s", test.id, type(exc).__name__, exc)
    recorder.finish_with_error(f"Test raised {type(exc).__name__}: {exc}")


async def _cancel_stragglers(tasks: list[asyncio.Task[object]]) -> None:
    """Cancel bodies still running after the run completed."""
    running = [t for t in tasks if not t.done()]
    for task in running:
        task.cancel()
    if running:
        await asyncio.gather(*running, return_exceptions=True)
