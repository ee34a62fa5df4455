"""Unscored hints appended after the rule catalog has run.

These never change the quality score; they only add to the issue list.
"""

import re
from typing import List

from core.review_engine.models import AnalysisIssue
from core.review_engine.rules import JS_FAMILY

COMPLEXITY_PATTERNS = [
    re.compile(r"if\s*\("),
    re.compile(r"else\s*if\s*\("),
    re.compile(r"while\s*\("),
    re.compile(r"for\s*\("),
    re.compile(r"switch\s*\("),
    re.compile(r"catch\s*\("),
    re.compile(r"&&"),
    re.compile(r"\|\|"),
]
COMPLEXITY_LIMIT = 10

DOC_MARKERS = {
    "javascript": ("/**", "//"),
    "typescript": ("/**", "//"),
    "java": ("/**", "//"),
    "python": ('"""', "#"),
}


def calculate_complexity(code: str) -> int:
    complexity = 1
    for pattern in COMPLEXITY_PATTERNS:
        complexity += len(pattern.findall(code))
    return complexity


def has_documentation(code: str, language: str) -> bool:
    markers = DOC_MARKERS.get(language, ())
    return any(marker in code for marker in markers)


def find_performance_issues(code: str, language: str) -> List[AnalysisIssue]:
    issues: List[AnalysisIssue] = []
    for index, line in enumerate(code.split("\n")):
        line_num = index + 1
        if language in JS_FAMILY:
            if "for" in line and ".length" in line:
                issues.append(AnalysisIssue(
                    type="optimization",
                    severity="low",
                    line=line_num,
                    message="Consider caching array length in loop for better performance",
                    category="Performance",
                ))
            if "document." in line and "querySelector" in line:
                issues.append(AnalysisIssue(
                    type="optimization",
                    severity="medium",
                    line=line_num,
                    message="Consider caching DOM queries to avoid repeated lookups",
                    category="Performance",
                ))
        if language == "python" and "+=" in line and '"' in line:
            issues.append(AnalysisIssue(
                type="optimization",
                severity="medium",
                line=line_num,
                message="Consider using join() for string concatenation in loops",
                category="Performance",
            ))
    return issues


def generate_insights(code: str, language: str) -> List[AnalysisIssue]:
    insights: List[AnalysisIssue] = []

    complexity = calculate_complexity(code)
    if complexity > COMPLEXITY_LIMIT:
        insights.append(AnalysisIssue(
            type="optimization",
            severity="medium",
            line=0,
            message=f"Code complexity is high ({complexity}). Consider breaking into smaller functions.",
            category="Code Complexity",
        ))

    if not has_documentation(code, language):
        insights.append(AnalysisIssue(
            type="suggestion",
            severity="low",
            line=0,
            message="Consider adding documentation comments to improve code maintainability.",
            category="Documentation",
        ))

    insights.extend(find_performance_issues(code, language))
    return insights
