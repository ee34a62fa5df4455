from core.review_engine.grouping import group_similar_issues
from core.review_engine.models import AnalysisIssue


def make_issue(line, message="Remove console statements in production code", category="Code Quality", **kw):
    fields = {"type": "warning", "severity": "low"}
    fields.update(kw)
    return AnalysisIssue(line=line, message=message, category=category, **fields)


def test_single_issue_passes_through():
    issue = make_issue(4)
    assert group_similar_issues([issue]) == [issue]


def test_two_members():
    grouped = group_similar_issues([make_issue(7), make_issue(3)])
    assert len(grouped) == 1
    assert grouped[0].message.endswith(" (lines 3 and 7)")
    assert grouped[0].line == 3


def test_three_to_five_members_list_lines():
    grouped = group_similar_issues([make_issue(n) for n in (9, 2, 5, 11, 4)])
    assert grouped[0].message.endswith(" (lines 2, 4, 5, 9, 11)")


def test_more_than_five_members_count_occurrences():
    grouped = group_similar_issues([make_issue(n) for n in range(1, 7)])
    assert len(grouped) == 1
    assert grouped[0].message.endswith(" (6 occurrences)")


def test_key_ignores_type_and_severity():
    first = make_issue(2, type="error", severity="high")
    second = make_issue(8, type="suggestion", severity="low")
    grouped = group_similar_issues([first, second])
    assert len(grouped) == 1
    assert (grouped[0].type, grouped[0].severity) == ("error", "high")


def test_same_message_different_category_stays_apart():
    grouped = group_similar_issues([make_issue(1), make_issue(2, category="Other")])
    assert [i.category for i in grouped] == ["Code Quality", "Other"]


def test_output_follows_first_seen_key_order():
    issues = [
        make_issue(10, message="B"),
        make_issue(1, message="A"),
        make_issue(2, message="B"),
    ]
    grouped = group_similar_issues(issues)
    assert [i.message for i in grouped] == ["B (lines 2 and 10)", "A"]


def test_inputs_are_not_mutated():
    issues = [make_issue(1), make_issue(2)]
    group_similar_issues(issues)
    assert [i.message for i in issues] == ["Remove console statements in production code"] * 2


def test_regrouping_is_a_no_op():
    issues = [make_issue(n) for n in range(1, 8)] + [make_issue(3, message="X"), make_issue(4, message="X")]
    once = group_similar_issues(issues)
    assert group_similar_issues(once) == once
