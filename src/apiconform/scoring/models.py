"""Score data models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from apiconform.types import Assertion, RequestLogEntry


class ScoreColor(StrEnum):
    """Qualitative bucket for a score fraction."""

    ERROR = "error"
    LOW = "low"
    HIGH = "high"
    PERFECT = "perfect"


class TestReport(BaseModel):
    """Result of one finished test, ready for rendering."""

    id: str
    title: str
    description: str
    doc_link: str
    assertions: list[Assertion]
    fatal_errors: list[str]
    request_log: list[RequestLogEntry]
    running_time_ms: int | None = None
    score: int
    total: int
    label: str
    color: ScoreColor

    model_config = ConfigDict(frozen=True)

    @property
    def failed_assertions(self) -> list[Assertion]:
        """Assertions that did not count towards the score."""
        if self.fatal_errors:
            return list(self.assertions)
        return [a for a in self.assertions if a.warning]


class OverallScore(BaseModel):
    """Score summed over every finished test."""

    total_score: int = 0
    total_points: int = 0
    label: str = "0"
    color: ScoreColor = ScoreColor.PERFECT

    model_config = ConfigDict(frozen=True)


class RunReport(BaseModel):
    """Aggregate result of running every registered test.

    Tests are listed in registration order regardless of completion order.
    """

    dataset_id: str
    tests: list[TestReport]
    overall: OverallScore
    duration_ms: int

    @property
    def passed(self) -> bool:
        """True when every available point was scored."""
        return self.overall.total_score == self.overall.total_points and not any(
            t.fatal_errors for t in self.tests
        )
