"""Pattern catalog for the line scanner.

Every rule is a plain substring/regex heuristic over one source line. A
rule fires at most once per line; several rules may fire on the same line.
Rules are grouped by language family and evaluated in catalog order, with
the language-agnostic rules last.
"""

import re
from typing import Callable, Dict, List, Optional

from core.review_engine.models import AnalysisIssue

JS_FAMILY = ("javascript", "typescript")

_DEF_UPPER = re.compile(r"def [A-Z]")
_CLASS_LOWER = re.compile(r"class [a-z]")
_PUBLIC_UPPER = re.compile(r"public [A-Z]")
_MAGIC_NUMBER = re.compile(r"\b([0-9]{2,})\b", re.ASCII)

MAGIC_NUMBER_EXEMPT = {"10", "100", "1000"}
MAX_LINE_LENGTH = 120


class LineContext:
    """Inputs a rule may look at for one line."""

    def __init__(self, line: str, line_number: int, code: str, language: str) -> None:
        self.line = line
        self.trimmed = line.strip()
        self.line_number = line_number
        self.code = code
        self.language = language


class Rule:
    def __init__(
        self,
        name: str,
        trigger: Callable[[LineContext], bool],
        type: str,
        severity: str,
        message: str,
        category: str,
        penalty: int,
    ) -> None:
        self.name = name
        self.trigger = trigger
        self.type = type
        self.severity = severity
        self.message = message
        self.category = category
        self.penalty = penalty

    def evaluate(self, ctx: LineContext) -> Optional[AnalysisIssue]:
        if not self.trigger(ctx):
            return None
        return AnalysisIssue(
            type=self.type,
            severity=self.severity,
            line=ctx.line_number,
            message=self.message,
            category=self.category,
        )

    def __repr__(self) -> str:
        return f"Rule({self.name!r}, penalty={self.penalty})"


# ---------- JavaScript / TypeScript ----------
def _uses_var(ctx: LineContext) -> bool:
    return "var " in ctx.line


def _loose_equality(ctx: LineContext) -> bool:
    line = ctx.line
    return "==" in line and "===" not in line and "!=" not in line and "!==" not in line


def _console_statement(ctx: LineContext) -> bool:
    line = ctx.line
    return "console.log" in line or "console.warn" in line or "console.error" in line


def _function_without_space(ctx: LineContext) -> bool:
    return "function(" in ctx.line and "function (" not in ctx.line


def _single_return_function(ctx: LineContext) -> bool:
    line = ctx.line
    return "function(" in line and "return " in line and len(line.split("return")) == 2


def _try_without_catch(ctx: LineContext) -> bool:
    return "try {" in ctx.line and "catch" not in ctx.code


def _eval_or_inner_html(ctx: LineContext) -> bool:
    return "eval(" in ctx.line or "innerHTML" in ctx.line


JAVASCRIPT_RULES: List[Rule] = [
    Rule("var-declaration", _uses_var, "suggestion", "medium",
         "Consider using let or const instead of var for better scoping",
         "Modern JavaScript", 8),
    Rule("loose-equality", _loose_equality, "warning", "medium",
         "Use strict equality (===) instead of loose equality (==)",
         "Best Practices", 10),
    Rule("console-statement", _console_statement, "warning", "low",
         "Remove console statements in production code",
         "Code Quality", 3),
    Rule("function-spacing", _function_without_space, "suggestion", "low",
         "Add space after function keyword for better readability",
         "Code Style", 2),
    Rule("arrow-function", _single_return_function, "optimization", "low",
         "Consider using arrow function for concise syntax",
         "Modern JavaScript", 3),
    Rule("try-without-catch", _try_without_catch, "error", "high",
         "Try block should have corresponding catch block",
         "Error Handling", 15),
    Rule("eval-innerhtml", _eval_or_inner_html, "error", "high",
         "Avoid eval() and innerHTML for security reasons",
         "Security", 20),
]


# ---------- Python ----------
def _late_import(ctx: LineContext) -> bool:
    return ctx.trimmed.startswith("import ") and ctx.line_number > 10


def _capitalized_function(ctx: LineContext) -> bool:
    return ctx.trimmed.startswith("def ") and _DEF_UPPER.search(ctx.trimmed) is not None


def _bare_except(ctx: LineContext) -> bool:
    return "except:" in ctx.trimmed and "except Exception:" not in ctx.trimmed


def _print_concatenation(ctx: LineContext) -> bool:
    return "print(" in ctx.line and "+" in ctx.line


def _unsafe_dict_access(ctx: LineContext) -> bool:
    line = ctx.line
    return "['" in line and "']" in line and "=" not in line and "if " not in line


def _datetime_without_import(ctx: LineContext) -> bool:
    return (
        "datetime.now()" in ctx.line
        and "import datetime" not in ctx.code
        and "from datetime" not in ctx.code
    )


def _mutation_in_loop(ctx: LineContext) -> bool:
    line = ctx.line
    return (
        "for " in line
        and " in " in line
        and ("del " in line or ".pop(" in line or ".remove(" in line)
    )


def _append_loop(ctx: LineContext) -> bool:
    return "for " in ctx.line and "append(" in ctx.line and "results = []" in ctx.code


PYTHON_RULES: List[Rule] = [
    Rule("late-import", _late_import, "suggestion", "medium",
         "Imports should be at the top of the file (PEP 8)",
         "PEP 8 Style", 8),
    Rule("function-naming", _capitalized_function, "warning", "medium",
         "Function names should be lowercase with underscores (snake_case)",
         "PEP 8 Style", 8),
    Rule("bare-except", _bare_except, "warning", "high",
         "Avoid bare except clauses, specify exception type",
         "Error Handling", 12),
    Rule("print-concatenation", _print_concatenation, "suggestion", "low",
         "Consider using f-strings or .format() for string formatting",
         "Modern Python", 3),
    Rule("dict-access", _unsafe_dict_access, "suggestion", "low",
         "Consider using .get() method for safer dictionary access",
         "Best Practices", 3),
    Rule("datetime-import", _datetime_without_import, "error", "high",
         "Missing import for datetime module",
         "Import Error", 20),
    Rule("mutation-in-loop", _mutation_in_loop, "warning", "medium",
         "Modifying dictionary/list structure during iteration can cause issues",
         "Data Safety", 10),
    Rule("list-comprehension", _append_loop, "optimization", "low",
         "Consider using list comprehension for better performance",
         "Performance", 5),
]


# ---------- Java ----------
def _lowercase_class(ctx: LineContext) -> bool:
    return ctx.trimmed.startswith("class ") and _CLASS_LOWER.search(ctx.trimmed) is not None


def _uppercase_public_member(ctx: LineContext) -> bool:
    trimmed = ctx.trimmed
    return (
        "public " in trimmed
        and _PUBLIC_UPPER.search(trimmed) is not None
        and "class" not in trimmed
    )


JAVA_RULES: List[Rule] = [
    Rule("class-naming", _lowercase_class, "warning", "medium",
         "Class names should start with uppercase (PascalCase)",
         "Java Conventions", 8),
    Rule("method-naming", _uppercase_public_member, "warning", "medium",
         "Method names should start with lowercase (camelCase)",
         "Java Conventions", 8),
]


# ---------- Any language ----------
def _long_line(ctx: LineContext) -> bool:
    return len(ctx.line) > MAX_LINE_LENGTH


def _magic_number(ctx: LineContext) -> bool:
    line = ctx.line
    match = _MAGIC_NUMBER.search(line)
    if match is None:
        return False
    if "//" in line or "#" in line or "range(" in line or "print(" in line:
        return False
    return match.group(1) not in MAGIC_NUMBER_EXEMPT


def _todo_marker(ctx: LineContext) -> bool:
    return "TODO" in ctx.line or "FIXME" in ctx.line


GENERAL_RULES: List[Rule] = [
    Rule("line-length", _long_line, "suggestion", "low",
         f"Line exceeds {MAX_LINE_LENGTH} characters, consider breaking it up",
         "Code Style", 2),
    Rule("magic-number", _magic_number, "suggestion", "medium",
         "Consider extracting magic numbers into named constants",
         "Maintainability", 5),
    Rule("todo-comment", _todo_marker, "warning", "low",
         "TODO/FIXME comment found - consider addressing",
         "Code Quality", 3),
]


RULEBOOK: Dict[str, List[Rule]] = {
    "javascript": JAVASCRIPT_RULES,
    "typescript": JAVASCRIPT_RULES,
    "python": PYTHON_RULES,
    "java": JAVA_RULES,
}


def rules_for(language: str) -> List[Rule]:
    """Language family rules followed by the language-agnostic ones."""
    return RULEBOOK.get(language, []) + GENERAL_RULES
