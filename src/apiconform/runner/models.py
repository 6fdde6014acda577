"""Test registration data models."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from apiconform.runner.recorder import AssertionRecorder

TestBody = Callable[["AssertionRecorder"], Awaitable[None] | None]


class TestDefinition(BaseModel):
    """A registered test case.

    The id is derived from the title and is stable across runs, so it can be
    used as a key by whatever renders the results.
    """

    id: str
    title: str
    description: str
    doc_link: str
    body: Callable[..., Any]

    model_config = ConfigDict(frozen=True)
