import pytest
from pydantic import ValidationError

from core.review_engine.models import AnalysisIssue, AnalysisResult, AnalysisSummary


def issue(**overrides):
    fields = dict(type="warning", severity="low", line=3, message="m", category="c")
    fields.update(overrides)
    return AnalysisIssue(**fields)


class TestAnalysisIssue:
    def test_accepts_known_values(self):
        for kind in ("error", "warning", "suggestion", "optimization"):
            for severity in ("high", "medium", "low"):
                assert issue(type=kind, severity=severity).type == kind

    def test_line_zero_means_whole_snippet(self):
        assert issue(line=0).line == 0

    def test_negative_line_rejected(self):
        with pytest.raises(ValidationError):
            issue(line=-1)

    @pytest.mark.parametrize("field,value", [("type", "info"), ("severity", "critical")])
    def test_unknown_enum_value_rejected(self, field, value):
        with pytest.raises(ValidationError):
            issue(**{field: value})


class TestSummary:
    def test_counts_by_type(self):
        issues = [
            issue(type="error"),
            issue(type="warning"),
            issue(type="warning"),
            issue(type="optimization"),
        ]
        summary = AnalysisSummary.from_issues(issues)
        assert summary.total_issues == 4
        assert summary.error_count == 1
        assert summary.warning_count == 2
        assert summary.suggestion_count == 0
        assert summary.optimization_count == 1

    def test_wire_names_are_camel_case(self):
        result = AnalysisResult(quality_score=80, issues=[issue()])
        result.summary = AnalysisSummary.from_issues(result.issues)
        body = result.to_dict()
        assert set(body) == {"qualityScore", "issues", "summary"}
        assert body["summary"]["totalIssues"] == 1
        assert "warningCount" in body["summary"]
