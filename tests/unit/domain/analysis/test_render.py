# analysis/test_render.py

import json

import pytest

from web_resource_checker.domain.analysis.findings import issue, passed
from web_resource_checker.domain.analysis.render import (
    exit_code,
    render_json,
    render_text,
)
from web_resource_checker.domain.analysis.report import (
    build_analysis_report,
    build_file_report,
    build_not_found_report,
)
from web_resource_checker.domain.analysis.resources import RESOURCES
from web_resource_checker.schemas import AnalysisReport, Severity

pytestmark = pytest.mark.unit


def _report(**files) -> AnalysisReport:
    return build_analysis_report("/srv/site", files, timestamp="2026-01-15T12:00:00Z")


def _clean_robots():
    return build_file_report(
        RESOURCES["robots"],
        "/srv/site/robots.txt",
        passed("user-agents", "1 group(s)") + passed("sitemap", "1 sitemap(s)"),
    )


def _security_with_issues():
    return build_file_report(
        RESOURCES["security"],
        "/srv/site/.well-known/security.txt",
        issue(Severity.RECOMMENDED, "missing-canonical", "Missing Canonical", "Add it")
        + issue(
            Severity.IMPORTANT,
            "expires-soon",
            "security.txt expires in 5 day(s)",
            "Move Expires forward",
            days_until_expiry=5,
        ),
    )


def test_render_json_round_trips() -> None:
    """
    ARRANGE: report with found, missing and flagged files
    ACT:     render_json then parse with AnalysisReport
    ASSERT:  parsed report equals the original
    """
    report = _report(
        sitemap=build_not_found_report(RESOURCES["sitemap"], "/srv/site/sitemap.xml"),
        robots=_clean_robots(),
        security=_security_with_issues(),
    )

    actual = AnalysisReport.model_validate_json(render_json(report))

    assert actual == report


def test_render_json_uses_camel_case_keys() -> None:
    """
    ARRANGE: report with an issue carrying days_until_expiry
    ACT:     render_json
    ASSERT:  camelCase keys in the output
    """
    report = _report(security=_security_with_issues())

    payload = json.loads(render_json(report))

    assert payload["files"]["security"]["issues"][1]["daysUntilExpiry"] == 5


def test_render_json_includes_derived_summary_and_valid() -> None:
    """
    ARRANGE: report with a missing sitemap
    ACT:     render_json
    ASSERT:  per-file summary and valid flag are serialised
    """
    report = _report(
        sitemap=build_not_found_report(RESOURCES["sitemap"], "/srv/site/sitemap.xml"),
    )

    sitemap = json.loads(render_json(report))["files"]["sitemap"]

    assert (sitemap["valid"], sitemap["summary"]["critical"]) == (False, 1)


def test_render_json_omits_unset_context_fields() -> None:
    """
    ARRANGE: issue without line information
    ACT:     render_json
    ASSERT:  no line key in the serialised issue
    """
    report = _report(security=_security_with_issues())

    first = json.loads(render_json(report))["files"]["security"]["issues"][0]

    assert "line" not in first


def test_render_text_lists_critical_files_before_clean_ones() -> None:
    """
    ARRANGE: clean robots before a missing sitemap in report order
    ACT:     render_text
    ASSERT:  sitemap section comes first
    """
    report = _report(
        robots=_clean_robots(),
        sitemap=build_not_found_report(RESOURCES["sitemap"], "/srv/site/sitemap.xml"),
    )

    text = render_text(report)

    assert text.index("### sitemap.xml") < text.index("### robots.txt")


def test_render_text_orders_issues_by_severity() -> None:
    """
    ARRANGE: recommended issue reported before an important one
    ACT:     render_text
    ASSERT:  important issue listed first
    """
    text = render_text(_report(security=_security_with_issues()))

    assert text.index("expires in 5 day(s)") < text.index("Missing Canonical")


def test_render_text_reports_clean_file() -> None:
    """
    ARRANGE: robots file with two passed checks and no issues
    ACT:     render_text
    ASSERT:  all-passed line is shown
    """
    text = render_text(_report(robots=_clean_robots()))

    assert "All 2 checks passed." in text


def test_render_text_recommends_creating_missing_files() -> None:
    """
    ARRANGE: missing security.txt
    ACT:     render_text
    ASSERT:  recommendation names the preferred path
    """
    report = _report(
        security=build_not_found_report(RESOURCES["security"], "/srv/site/x"),
    )

    assert "- Create .well-known/security.txt" in render_text(report)


def test_exit_code_is_one_with_critical_issue() -> None:
    """
    ARRANGE: report with a missing sitemap
    ACT:     exit_code
    ASSERT:  1
    """
    report = _report(
        sitemap=build_not_found_report(RESOURCES["sitemap"], "/srv/site/sitemap.xml"),
    )

    assert exit_code(report) == 1


def test_exit_code_is_zero_without_critical_issue() -> None:
    """
    ARRANGE: report with only important and recommended issues
    ACT:     exit_code
    ASSERT:  0
    """
    assert exit_code(_report(security=_security_with_issues())) == 0
