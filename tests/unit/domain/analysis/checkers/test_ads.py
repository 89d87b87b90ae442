# checkers/test_ads.py

import pytest

from web_resource_checker.domain.analysis.checkers.ads import check_ads_txt
from web_resource_checker.schemas import Severity

from ._helpers import SETTINGS, checks, find_issue, make_context

pytestmark = pytest.mark.unit


def _check(text: str):
    return check_ads_txt(text.encode(), make_context(), SETTINGS)


def test_check_ads_txt_valid_records_have_no_issues() -> None:
    """
    ARRANGE: DIRECT and RESELLER records, one with a certification id
    ACT:     check_ads_txt
    ASSERT:  no issues
    """
    text = (
        "# ads.txt for example.com\n"
        "google.com, pub-0000000000000000, DIRECT, f08c47fec0942fa0\n"
        "adnetwork.example, 12345, reseller\n"
    )

    actual = _check(text)

    assert actual.issues == ()


def test_check_ads_txt_records_stats() -> None:
    """
    ARRANGE: two DIRECT records, one RESELLER record and a contact variable
    ACT:     check_ads_txt
    ASSERT:  stats count each kind
    """
    text = (
        "contact=ads@example.com\n"
        "google.com, pub-1, DIRECT\n"
        "openx.com, 99, DIRECT\n"
        "adnetwork.example, 12345, RESELLER\n"
    )

    actual = _check(text)

    assert actual.stats == {"records": 3, "direct": 2, "reseller": 1, "variables": 1}


def test_check_ads_txt_missing_relationship_is_important() -> None:
    """
    ARRANGE: record with only two fields
    ACT:     check_ads_txt
    ASSERT:  important malformed-record issue carrying the line
    """
    actual = _check("google.com, DIRECT\n")

    issue = find_issue(actual, "malformed-record")
    assert (issue.severity, issue.line, issue.content) == (
        Severity.IMPORTANT,
        1,
        "google.com, DIRECT",
    )


def test_check_ads_txt_unknown_relationship_is_malformed() -> None:
    """
    ARRANGE: record with an unsupported relationship value
    ACT:     check_ads_txt
    ASSERT:  malformed-record issue
    """
    actual = _check("google.com, pub-1, PARTNER\n")

    assert checks(actual) == ["malformed-record"]


def test_check_ads_txt_domain_without_dot_is_malformed() -> None:
    """
    ARRANGE: record whose domain is a single label
    ACT:     check_ads_txt
    ASSERT:  malformed-record issue
    """
    actual = _check("localhost, pub-1, DIRECT\n")

    assert checks(actual) == ["malformed-record"]


def test_check_ads_txt_unknown_variable_is_recommended() -> None:
    """
    ARRANGE: unsupported variable next to a valid record
    ACT:     check_ads_txt
    ASSERT:  recommended unknown-variable issue
    """
    actual = _check("colour=blue\ngoogle.com, pub-1, DIRECT\n")

    assert find_issue(actual, "unknown-variable").severity is Severity.RECOMMENDED


def test_check_ads_txt_comment_only_file_is_recommended_empty() -> None:
    """
    ARRANGE: file containing only comments
    ACT:     check_ads_txt
    ASSERT:  recommended empty-file issue
    """
    actual = _check("# nothing sold here\n")

    assert find_issue(actual, "empty-file").severity is Severity.RECOMMENDED
