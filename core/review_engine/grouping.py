from typing import Dict, List, Tuple

from core.review_engine.models import AnalysisIssue


def _line_suffix(lines: List[int]) -> str:
    if len(lines) == 2:
        return f" (lines {lines[0]} and {lines[1]})"
    if len(lines) <= 5:
        return f" (lines {', '.join(str(n) for n in lines)})"
    return f" ({len(lines)} occurrences)"


def group_similar_issues(issues: List[AnalysisIssue]) -> List[AnalysisIssue]:
    """Collapse issues sharing (message, category) into one entry.

    Type and severity are not part of the key: the first-seen issue of a
    group is the template. Output follows first-seen key order.
    """
    groups: Dict[Tuple[str, str], List[AnalysisIssue]] = {}
    for issue in issues:
        groups.setdefault((issue.message, issue.category), []).append(issue)

    grouped: List[AnalysisIssue] = []
    for similar in groups.values():
        if len(similar) == 1:
            grouped.append(similar[0])
            continue
        lines = sorted(i.line for i in similar)
        first = similar[0]
        grouped.append(first.model_copy(update={
            "line": lines[0],
            "message": first.message + _line_suffix(lines),
        }))
    return grouped
