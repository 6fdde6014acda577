"""AssertionRecorder — per-run state written by a test body."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from apiconform.types import Assertion, RequestLogEntry, RequestMeta

CORS_HINT = (
    "This backend isn't callable, it may not support CORS. "
    "See http://enable-cors.org/server.html"
)


class AssertionRecorder:
    """Accumulates assertions, fatal errors and a request log for one test run.

    Owned by a single test body. Once the body calls ``test_finished`` the
    recorder is read-only.
    """

    def __init__(
        self,
        dataset_id: str,
        on_finish: Callable[[AssertionRecorder], None] | None = None,
    ) -> None:
        """Initialize recorder.

        Args:
            dataset_id: Opaque identifier of the backend dataset under test
            on_finish: Called once when the test body signals completion
        """
        self.dataset_id = dataset_id
        self.fatal_errors: list[str] = []
        self.assertions: list[Assertion] = []
        self.request_log: list[RequestLogEntry] = []
        self.start_time = datetime.now(UTC)
        self.running_time_ms: int | None = None
        self._started = time.monotonic()
        self._on_finish = on_finish
        self._finished = False
        self._lock = threading.Lock()

    @property
    def finished(self) -> bool:
        """True once the test body has signalled completion."""
        return self._finished

    def check(self, test: bool, message: str) -> bool:
        """Record an assertion.

        Args:
            test: Whether the checked condition holds
            message: Human-readable description of the condition

        Returns:
            The warning flag, True when the check failed
        """
        warning = not test
        with self._lock:
            self._ensure_open()
            self.assertions.append(Assertion(message=message, warning=warning))
        return warning

    def error(self, message: str) -> None:
        """Record a fatal error. Any fatal error zeroes the test's score."""
        with self._lock:
            self._ensure_open()
            self.fatal_errors.append(message)

    def log_request(self, request: RequestMeta, json_body: Any) -> None:
        """Append a request and its response body to the debug log."""
        entry = RequestLogEntry(
            url=f"{request.method} {request.url}",
            data=request.data,
            json_body=json_body,
        )
        with self._lock:
            self._ensure_open()
            self.request_log.append(entry)

    def test_finished(self) -> None:
        """Signal that the test body is done. Later calls are ignored."""
        self._finish(None)

    def finish_with_error(self, message: str) -> bool:
        """Record a fatal error and finish, unless the test already finished.

        Safe to call while the body is still running on another thread.

        Returns:
            True if this call finished the test
        """
        return self._finish(message)

    def _finish(self, error: str | None) -> bool:
        with self._lock:
            if self._finished:
                return False
            if error is not None:
                self.fatal_errors.append(error)
            self.running_time_ms = int((time.monotonic() - self._started) * 1000)
            self._finished = True
        if self._on_finish is not None:
            self._on_finish(self)
        return True

    def _ensure_open(self) -> None:
        if self._finished:
            raise RuntimeError("Recorder is read-only after test_finished()")


def check_http_error(
    recorder: AssertionRecorder, json_body: Any, request: RequestMeta
) -> bool:
    """Record a fatal error if a response body describes a failed request.

    A body carrying a ``status`` field is treated as a backend error. Status 0
    means the request never reached the backend. The request is logged whether
    or not it failed.

    Args:
        recorder: Recorder of the running test
        json_body: Parsed response body
        request: The request that produced the body

    Returns:
        True if an error was recorded
    """
    failed = isinstance(json_body, Mapping) and "status" in json_body
    if failed:
        status = json_body["status"]
        if status in (0, "0"):
            status = CORS_HINT
        status_text = json_body.get("statusText", "unknown")
        recorder.error(f"Http error: {status_text} ({status})")

    recorder.log_request(request, json_body)
    return failed
