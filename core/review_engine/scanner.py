import logging
import re
from typing import List

from core.review_engine.models import AnalysisIssue
from core.review_engine.rules import LineContext, rules_for

logger = logging.getLogger(__name__)

_FUNCTION_MARKER = re.compile(r"function|def ")
MAX_LINES_PER_FUNCTION = 50


class ScanResult:
    def __init__(self) -> None:
        self.issues: List[AnalysisIssue] = []
        self.penalty = 0

    def add(self, issue: AnalysisIssue, penalty: int) -> None:
        self.issues.append(issue)
        self.penalty += penalty

    def extend(self, other: "ScanResult") -> None:
        self.issues.extend(other.issues)
        self.penalty += other.penalty


def scan_lines(code: str, language: str) -> ScanResult:
    """Run every applicable catalog rule over each line, in order."""
    res = ScanResult()
    rules = rules_for(language)
    for index, line in enumerate(code.split("\n")):
        ctx = LineContext(line, index + 1, code, language)
        for rule in rules:
            issue = rule.evaluate(ctx)
            if issue is not None:
                res.add(issue, rule.penalty)
    logger.debug("scan_lines: %d rules, %d issues", len(rules), len(res.issues))
    return res


def check_whole_source(code: str) -> ScanResult:
    """Checks that need the complete text. Both report at line 0."""
    res = ScanResult()
    lowered = code.lower()

    if "try" in lowered and "catch" not in lowered and "except" not in lowered:
        res.add(
            AnalysisIssue(
                type="error",
                severity="high",
                line=0,
                message="Error handling appears incomplete",
                category="Error Handling",
            ),
            15,
        )

    function_count = len(_FUNCTION_MARKER.findall(lowered))
    line_count = len(code.split("\n"))
    if function_count > 0 and line_count / function_count > MAX_LINES_PER_FUNCTION:
        res.add(
            AnalysisIssue(
                type="optimization",
                severity="medium",
                line=0,
                message="Functions appear to be quite large, consider breaking them down",
                category="Code Organization",
            ),
            10,
        )
    return res
