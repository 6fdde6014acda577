"""apiconform runner — test registration, per-run recording and concurrent execution.

Public API for runner module.
"""

from apiconform.runner.cli import load_registry, run_command
from apiconform.runner.executor import TestExecutor, TestFinishedCallback
from apiconform.runner.models import TestBody, TestDefinition
from apiconform.runner.recorder import AssertionRecorder, check_http_error
from apiconform.runner.registry import TestRegistry, derive_test_id

__all__ = [
    "AssertionRecorder",
    "TestBody",
    "TestDefinition",
    "TestExecutor",
    "TestFinishedCallback",
    "TestRegistry",
    "check_http_error",
    "derive_test_id",
    "load_registry",
    "run_command",
]
