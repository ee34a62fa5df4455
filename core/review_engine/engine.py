import logging

from core.review_engine.grouping import group_similar_issues
from core.review_engine.insights import generate_insights
from core.review_engine.models import AnalysisResult, AnalysisSummary
from core.review_engine.rewriter import optimize_javascript, should_rewrite
from core.review_engine.scanner import check_whole_source, scan_lines

logger = logging.getLogger(__name__)

BASELINE_SCORE = 85


class ReviewAnalyzer:
    """Rule-based reviewer for one declared language.

    Scoring starts at BASELINE_SCORE and only ever goes down; the final
    score is floored at 0. Insights are appended after scoring and do not
    count towards the score or the rewrite decision.
    """

    def __init__(self, language: str) -> None:
        self.language = language.lower()

    def analyze(self, code: str) -> AnalysisResult:
        logger.info("ReviewAnalyzer: analyze start (language=%s, chars=%d)", self.language, len(code))

        scan = scan_lines(code, self.language)
        scan.extend(check_whole_source(code))
        score = max(0, BASELINE_SCORE - scan.penalty)

        optimized_code = None
        if should_rewrite(self.language, scan.issues):
            optimized_code = optimize_javascript(code)

        issues = group_similar_issues(scan.issues + generate_insights(code, self.language))

        logger.info(
            "ReviewAnalyzer: analyze end (score=%d, raw=%d, grouped=%d)",
            score,
            len(scan.issues),
            len(issues),
        )
        return AnalysisResult(
            quality_score=score,
            issues=issues,
            optimized_code=optimized_code,
            summary=AnalysisSummary.from_issues(issues),
        )


def analyze_code(code: str, language: str) -> AnalysisResult:
    return ReviewAnalyzer(language).analyze(code)
