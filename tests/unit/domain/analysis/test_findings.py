# analysis/test_findings.py

import pytest

from web_resource_checker.domain.analysis.findings import (
    issue,
    make_issue,
    make_passed,
    passed,
)
from web_resource_checker.schemas import Severity

pytestmark = pytest.mark.unit


def test_make_issue_keeps_context_fields() -> None:
    """
    ARRANGE: issue with line and count context
    ACT:     make_issue
    ASSERT:  context fields are set on the Issue
    """
    actual = make_issue(Severity.IMPORTANT, "rule", "Broken", "Fix it", line=3, count=2)

    assert (actual.line, actual.count) == (3, 2)


def test_make_issue_rejects_plain_string_severity() -> None:
    """
    ARRANGE: severity given as a string rather than a Severity
    ACT:     make_issue
    ASSERT:  TypeError
    """
    with pytest.raises(TypeError):
        make_issue("fatal", "rule", "Broken", "Fix it")


def test_make_issue_rejects_blank_fix() -> None:
    """
    ARRANGE: whitespace-only fix text
    ACT:     make_issue
    ASSERT:  ValueError
    """
    with pytest.raises(ValueError):
        make_issue(Severity.CRITICAL, "rule", "Broken", "  ")


def test_make_passed_records_value() -> None:
    """
    ARRANGE: passed check with a preview
    ACT:     make_passed
    ASSERT:  value and preview are kept
    """
    actual = make_passed("summary", "42 characters", preview="A site")

    assert (actual.value, actual.preview) == ("42 characters", "A site")


def test_issue_and_passed_combine_into_one_result() -> None:
    """
    ARRANGE: one issue result and one passed result
    ACT:     add them
    ASSERT:  result holds both findings
    """
    actual = issue(Severity.RECOMMENDED, "a", "Msg", "Fix") + passed("b", "ok")

    assert (len(actual.issues), len(actual.passed)) == (1, 1)
