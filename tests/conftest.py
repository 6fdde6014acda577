"""Shared test fixtures."""

import pytest

from apiconform.runner.recorder import AssertionRecorder
from apiconform.runner.registry import TestRegistry


@pytest.fixture
def recorder() -> AssertionRecorder:
    """A fresh recorder outside of any executor."""
    return AssertionRecorder(dataset_id="dataset-1")


@pytest.fixture
def registry() -> TestRegistry:
    """An empty, unfrozen registry."""
    return TestRegistry()
