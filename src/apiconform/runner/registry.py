"""TestRegistry — ordered, append-only collection of test definitions."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

from apiconform.runner.models import TestBody, TestDefinition

_ID_CHARS = re.compile(r"[ ().]")


def derive_test_id(title: str) -> str:
    """Build a stable id from a title by replacing each space, paren and period with a dash."""
    return _ID_CHARS.sub("-", title)


class TestRegistry:
    """Holds registered tests in registration order.

    Populated at startup, then frozen when a run starts. Titles are not required
    to be unique, so two tests may share an id.
    """

    def __init__(self) -> None:
        self._tests: list[TestDefinition] = []
        self._frozen = False

    def register(
        self, title: str, description: str, doc_link: str, body: TestBody
    ) -> TestDefinition:
        """Register a test case.

        Args:
            title: Display title, also the source of the test id
            description: What the test checks
            doc_link: Link to the API documentation for the endpoint
            body: Called with a fresh AssertionRecorder; may be a coroutine function

        Returns:
            The registered TestDefinition

        Raises:
            RuntimeError: If the registry is frozen
        """
        if self._frozen:
            raise RuntimeError(f"Cannot register {title!r}: registry is frozen")

        test = TestDefinition(
            id=derive_test_id(title),
            title=title,
            description=description,
            doc_link=doc_link,
            body=body,
        )
        self._tests.append(test)
        return test

    def test(self, title: str, description: str, doc_link: str) -> Callable[[TestBody], TestBody]:
        """Decorator form of ``register``. Returns the body unchanged."""

        def decorator(body: TestBody) -> TestBody:
            self.register(title, description, doc_link, body)
            return body

        return decorator

    def freeze(self) -> None:
        """Stop accepting registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __iter__(self) -> Iterator[TestDefinition]:
        return iter(self._tests)

    def __len__(self) -> int:
        return len(self._tests)
