"""Score aggregation for finished test runs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from apiconform.scoring.models import OverallScore, ScoreColor, TestReport
from apiconform.types import Assertion

if TYPE_CHECKING:
    from apiconform.runner.models import TestDefinition
    from apiconform.runner.recorder import AssertionRecorder


def count_passes(assertions: Sequence[Assertion], fatal_errors: Sequence[str]) -> int:
    """Count passing assertions. Any fatal error makes every assertion fail."""
    if fatal_errors:
        return 0
    return sum(1 for a in assertions if not a.warning)


def score_label(total: int, score: int) -> str:
    """Format a score as ``"4"`` when perfect, otherwise ``"3/4"``."""
    if score == total:
        return str(total)
    return f"{score}/{total}"


def score_color(total: int, score: int) -> ScoreColor:
    """Bucket a score by the fraction of points earned.

    A score with no points available counts as perfect.
    """
    if total == 0:
        return ScoreColor.PERFECT
    fraction = score / total
    if fraction == 0:
        return ScoreColor.ERROR
    elif fraction == 1:
        return ScoreColor.PERFECT
    elif fraction > 0.5:
        return ScoreColor.HIGH
    else:
        return ScoreColor.LOW


def build_test_report(test: TestDefinition, recorder: AssertionRecorder) -> TestReport:
    """Fold a finished recorder into a TestReport.

    Args:
        test: Definition of the test that ran
        recorder: Its recorder, after test_finished()

    Returns:
        TestReport with score, label and color
    """
    total = len(recorder.assertions)
    score = count_passes(recorder.assertions, recorder.fatal_errors)
    color = ScoreColor.ERROR if recorder.fatal_errors else score_color(total, score)

    return TestReport(
        id=test.id,
        title=test.title,
        description=test.description,
        doc_link=test.doc_link,
        assertions=list(recorder.assertions),
        fatal_errors=list(recorder.fatal_errors),
        request_log=list(recorder.request_log),
        running_time_ms=recorder.running_time_ms,
        score=score,
        total=total,
        label=score_label(total, score),
        color=color,
    )


class ScoreAggregator:
    """Keeps running totals as tests finish."""

    def __init__(self) -> None:
        self.total_score = 0
        self.total_points = 0
        self.reports: list[TestReport] = []

    @property
    def finished_count(self) -> int:
        return len(self.reports)

    def add(self, test: TestDefinition, recorder: AssertionRecorder) -> TestReport:
        """Score a finished test and add it to the running totals."""
        report = build_test_report(test, recorder)
        self.total_score += report.score
        self.total_points += report.total
        self.reports.append(report)
        return report

    @property
    def overall(self) -> OverallScore:
        """Overall score over the tests added so far."""
        return OverallScore(
            total_score=self.total_score,
            total_points=self.total_points,
            label=score_label(self.total_points, self.total_score),
            color=score_color(self.total_points, self.total_score),
        )
