from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

IssueType = Literal["error", "warning", "suggestion", "optimization"]
Severity = Literal["high", "medium", "low"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisIssue(_CamelModel):
    """A single finding. ``line == 0`` means the whole snippet."""

    type: IssueType
    severity: Severity
    line: int = Field(ge=0)
    message: str
    category: str


class AnalysisSummary(_CamelModel):
    total_issues: int = 0
    error_count: int = 0
    warning_count: int = 0
    suggestion_count: int = 0
    optimization_count: int = 0

    @classmethod
    def from_issues(cls, issues: List[AnalysisIssue]) -> "AnalysisSummary":
        return cls(
            total_issues=len(issues),
            error_count=len([i for i in issues if i.type == "error"]),
            warning_count=len([i for i in issues if i.type == "warning"]),
            suggestion_count=len([i for i in issues if i.type == "suggestion"]),
            optimization_count=len([i for i in issues if i.type == "optimization"]),
        )


class AnalysisResult(_CamelModel):
    quality_score: int
    issues: List[AnalysisIssue] = Field(default_factory=list)
    optimized_code: Optional[str] = None
    summary: AnalysisSummary = Field(default_factory=AnalysisSummary)

    def to_dict(self) -> dict:
        # optimizedCode is left out entirely when there is no rewrite
        return self.model_dump(by_alias=True, exclude_none=True)


class CodeAnalysis(_CamelModel):
    """Stored form of an analysis."""

    id: int
    code: str
    language: str
    quality_score: int
    issues: List[AnalysisIssue] = Field(default_factory=list)
    optimized_code: Optional[str] = None
    created_at: datetime

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
