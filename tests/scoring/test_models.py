"""Tests for scoring models."""

from apiconform.scoring.models import OverallScore, RunReport, ScoreColor, TestReport
from apiconform.types import Assertion, RequestLogEntry


def _report(score: int, total: int, fatal: list[str] | None = None) -> TestReport:
    return TestReport(
        id="t",
        title="t",
        description="",
        doc_link="",
        assertions=[Assertion(message="m", warning=False)] * total,
        fatal_errors=fatal or [],
        request_log=[RequestLogEntry(url="GET http://x", json_body={"a": 1})],
        score=score,
        total=total,
        label=str(total),
        color=ScoreColor.PERFECT,
    )


class TestScoreColor:
    """Test ScoreColor enum."""

    def test_values(self) -> None:
        assert [c.value for c in ScoreColor] == ["error", "low", "high", "perfect"]


class TestRunReport:
    """Test RunReport helpers and serialization."""

    def test_passed_when_every_point_scored(self) -> None:
        report = RunReport(
            dataset_id="d",
            tests=[_report(2, 2)],
            overall=OverallScore(total_score=2, total_points=2, label="2"),
            duration_ms=5,
        )
        assert report.passed is True

    def test_not_passed_with_missing_points(self) -> None:
        report = RunReport(
            dataset_id="d",
            tests=[_report(1, 2)],
            overall=OverallScore(total_score=1, total_points=2, label="1/2"),
            duration_ms=5,
        )
        assert report.passed is False

    def test_not_passed_with_fatal_error_and_no_assertions(self) -> None:
        report = RunReport(
            dataset_id="d",
            tests=[_report(0, 0, fatal=["Http error: x (500)"])],
            overall=OverallScore(),
            duration_ms=5,
        )
        assert report.passed is False

    def test_dump_uses_json_key_for_request_log(self) -> None:
        report = RunReport(
            dataset_id="d",
            tests=[_report(1, 1)],
            overall=OverallScore(total_score=1, total_points=1, label="1"),
            duration_ms=5,
        )

        dumped = report.model_dump(mode="json", by_alias=True)

        assert dumped["tests"][0]["request_log"][0]["json"] == {"a": 1}
        assert dumped["tests"][0]["color"] == "perfect"
        assert dumped["overall"]["total_points"] == 1
