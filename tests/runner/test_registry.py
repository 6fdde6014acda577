"""Tests for TestRegistry."""

import pytest

from apiconform.runner.recorder import AssertionRecorder
from apiconform.runner.registry import TestRegistry, derive_test_id


def _noop(recorder: AssertionRecorder) -> None:
    recorder.test_finished()


class TestDeriveTestId:
    """Test id derivation from titles."""

    def test_each_character_replaced(self) -> None:
        assert derive_test_id("Test (One).Two") == "Test--One--Two"

    def test_runs_not_collapsed(self) -> None:
        assert derive_test_id("a  ..()b") == "a------b"

    def test_other_characters_kept(self) -> None:
        assert derive_test_id("Search readsets/v1beta") == "Search-readsets/v1beta"


class TestTestRegistry:
    """Test registration and freezing."""

    def test_register_builds_definition(self, registry: TestRegistry) -> None:
        test = registry.register("Get readset", "Fetches one readset", "http://docs", _noop)

        assert test.id == "Get-readset"
        assert test.title == "Get readset"
        assert test.description == "Fetches one readset"
        assert test.doc_link == "http://docs"
        assert test.body is _noop

    def test_registration_order_preserved(self, registry: TestRegistry) -> None:
        for title in ["b", "a", "c"]:
            registry.register(title, "", "", _noop)

        assert [t.title for t in registry] == ["b", "a", "c"]
        assert len(registry) == 3

    def test_duplicate_titles_allowed(self, registry: TestRegistry) -> None:
        registry.register("Same (1)", "", "", _noop)
        registry.register("Same (1)", "", "", _noop)

        assert [t.id for t in registry] == ["Same--1-", "Same--1-"]

    def test_decorator(self, registry: TestRegistry) -> None:
        @registry.test("Decorated test", "desc", "http://docs")
        def body(recorder: AssertionRecorder) -> None:
            recorder.test_finished()

        assert callable(body)
        assert [t.id for t in registry] == ["Decorated-test"]
        assert next(iter(registry)).body is body

    def test_frozen_registry_rejects_registration(self, registry: TestRegistry) -> None:
        registry.register("first", "", "", _noop)
        registry.freeze()

        assert registry.frozen is True
        with pytest.raises(RuntimeError, match="frozen"):
            registry.register("second", "", "", _noop)
        assert len(registry) == 1

    def test_definitions_are_immutable(self, registry: TestRegistry) -> None:
        test = registry.register("t", "", "", _noop)
        with pytest.raises(Exception):  # noqa: B017
            test.title = "other"  # type: ignore[misc]
