#!/usr/bin/env python3
"""Smoke test for the field validator, runner and scoring.

This is a standalone script that checks a full run works outside the test
harness.

Run with: uv run python tests/smoke/smoke_test_runner.py

Exit codes:
- 0: All smoke tests passed
- 1: At least one smoke test failed
"""

import asyncio
import sys


def test_imports() -> bool:
    """Test that all public modules can be imported."""
    print("Testing imports...")

    try:
        from apiconform.fields import (  # noqa: F401
            FieldType,
            assert_array_object,
            assert_fields,
        )
        from apiconform.runner import (  # noqa: F401
            AssertionRecorder,
            TestExecutor,
            TestRegistry,
            check_http_error,
        )
        from apiconform.scoring import ScoreAggregator, ScoreColor  # noqa: F401

        print("✓ All modules imported successfully")
        return True
    except ImportError as e:
        print(f"✗ Import error: {e}")
        return False


def test_validator() -> bool:
    """Test field checks against a sample object."""
    print("\nTesting validator...")

    try:
        from apiconform.fields import assert_fields
        from apiconform.runner import AssertionRecorder

        recorder = AssertionRecorder(dataset_id="smoke")
        assert_fields(
            recorder,
            {"name": "Bob", "age": 30, "joined": 1621000000000},
            "",
            ["name", ("age", "int"), ("joined", "date")],
        )
        assert len(recorder.assertions) == 3
        assert not any(a.warning for a in recorder.assertions)

        print("✓ Validator works correctly")
        return True
    except Exception as e:
        print(f"✗ Validator test failed: {e}")
        return False


def test_run() -> bool:
    """Test a concurrent run with one fatal error."""
    print("\nTesting run...")

    try:
        from apiconform.runner import AssertionRecorder, TestExecutor, TestRegistry
        from apiconform.runner import check_http_error
        from apiconform.scoring import ScoreColor
        from apiconform.types import RequestMeta

        registry = TestRegistry()

        @registry.test("Good", "passes", "http://docs")
        async def good(recorder: AssertionRecorder) -> None:
            await asyncio.sleep(0)
            recorder.check(True, "ok")
            recorder.test_finished()

        @registry.test("Bad", "backend error", "http://docs")
        def bad(recorder: AssertionRecorder) -> None:
            check_http_error(recorder, {"status": 500}, RequestMeta(url="http://x"))
            recorder.check(True, "ok")
            recorder.test_finished()

        report = TestExecutor(registry, timeout_seconds=5).run_sync("smoke")
        assert report.overall.total_score == 1
        assert report.overall.total_points == 2
        assert report.tests[1].color == ScoreColor.ERROR

        print("✓ Run works correctly")
        return True
    except Exception as e:
        print(f"✗ Run test failed: {e}")
        return False


def main() -> int:
    """Run all smoke tests."""
    print("=" * 60)
    print("apiconform smoke tests")
    print("=" * 60)

    tests = [
        test_imports,
        test_validator,
        test_run,
    ]

    results = []
    for test in tests:
        try:
            results.append(test())
        except Exception as e:
            print(f"\n✗ Test {test.__name__} crashed: {e}")
            results.append(False)

    print("\n" + "=" * 60)
    passed = sum(results)
    total = len(results)
    print(f"Results: {passed}/{total} tests passed")
    print("=" * 60)

    if all(results):
        print("\n✅ All smoke tests passed!")
        return 0
    else:
        print("\n❌ Some smoke tests failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
