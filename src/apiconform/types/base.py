"""Foundational record types.

These types are shared across modules and form the core vocabulary of a run:
- Assertion: outcome of one check
- RequestMeta / RequestLogEntry: requests a test made and the JSON they returned

These types have no dependencies on other apiconform modules (pure foundation layer).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Assertion(BaseModel):
    """Outcome of a single check made by a test body."""

    message: str
    warning: bool

    model_config = ConfigDict(frozen=True)


class RequestMeta(BaseModel):
    """The request that produced a JSON body, as reported by the test body."""

    method: str = "GET"
    url: str
    data: Any = None

    model_config = ConfigDict(frozen=True)


class RequestLogEntry(BaseModel):
    """Debug record of one request and the JSON it returned."""

    url: str
    data: Any = None
    json_body: Any = Field(default=None, serialization_alias="json")

    model_config = ConfigDict(frozen=True)
