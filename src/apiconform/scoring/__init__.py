"""apiconform scoring — per-test and overall scores with color buckets."""

from apiconform.scoring.aggregator import (
    ScoreAggregator,
    build_test_report,
    count_passes,
    score_color,
    score_label,
)
from apiconform.scoring.models import OverallScore, RunReport, ScoreColor, TestReport

__all__ = [
    "OverallScore",
    "RunReport",
    "ScoreAggregator",
    "ScoreColor",
    "TestReport",
    "build_test_report",
    "count_passes",
    "score_color",
    "score_label",
]
