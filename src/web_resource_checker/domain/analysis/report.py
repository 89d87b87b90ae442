# analysis/report.py

from collections.abc import Mapping
from datetime import UTC, datetime

from web_resource_checker.schemas import (
    AnalysisReport,
    FileReport,
    IssueTotals,
    ReportSummary,
    Severity,
)

from .findings import make_issue
from .models import CheckResult
from .resources import WellKnownResource


def build_file_report(
    resource: WellKnownResource,
    source: str,
    result: CheckResult,
) -> FileReport:
    """
    Convert a checker result into the FileReport of a found file.

    Args:
        resource: The file that was checked.
        source: Local path or URL the content came from.
        result: Findings produced by the resource's checker.

    Returns:
        FileReport: Report with found set and derived summary.
    """
    return FileReport(
        file=resource.key,
        source=source,
        found=True,
        issues=result.issues,
        passed=result.passed,
        stats=result.stats,
        fields=result.fields,
        structure=result.structure,
    )


def build_not_found_report(resource: WellKnownResource, source: str) -> FileReport:
    """
    Build the report of a file absent from every candidate path.

    Returns:
        FileReport: Report holding the single not-found issue.
    """
    return FileReport(
        file=resource.key,
        source=source,
        found=False,
        issues=(
            make_issue(
                resource.absent_severity,
                "not-found",
                f"{resource.file_name} not found",
                resource.absent_fix,
            ),
        ),
    )


def build_fetch_error_report(
    resource: WellKnownResource,
    source: str,
    cause: str,
) -> FileReport:
    """
    Build the report of a file that could not be retrieved.

    The file is reported as not found because its content is unknown, with
    the cause kept in error so it is not mistaken for a confirmed absence.

    Returns:
        FileReport: Report holding the single fetch-error issue.
    """
    return FileReport(
        file=resource.key,
        source=source,
        found=False,
        error=cause,
        issues=(
            make_issue(
                resource.absent_severity,
                "fetch-error",
                f"Could not retrieve {resource.file_name}: {cause}",
                "Check that the target is reachable and retry",
            ),
        ),
    )


def build_check_error_report(
    resource: WellKnownResource,
    source: str,
    error: Exception,
) -> FileReport:
    """
    Build the report of a file whose content could not be checked.

    Returns:
        FileReport: Found but invalid report with one critical issue.
    """
    message = str(error) or type(error).__name__
    return FileReport(
        file=resource.key,
        source=source,
        found=True,
        error=message,
        issues=(
            make_issue(
                Severity.CRITICAL,
                "check-error",
                f"Error checking {resource.file_name}: {message}",
                f"Make sure {resource.file_name} is valid UTF-8 text in the "
                "expected format",
            ),
        ),
    )


def build_analysis_report(
    target: str,
    files: Mapping[str, FileReport],
    *,
    timestamp: str | None = None,
) -> AnalysisReport:
    """
    Fold per-file reports into the run-level AnalysisReport.

    Every rollup count is summed from the file reports.

    Args:
        target: The target path or URL as supplied by the caller.
        files: File reports keyed by file key, in report order.
        timestamp: ISO 8601 run time; defaults to now (UTC).

    Returns:
        AnalysisReport: The complete report.
    """
    reports = tuple(files.values())

    summary = ReportSummary(
        target=target,
        timestamp=timestamp or datetime.now(UTC).isoformat(),
        total_files=len(reports),
        found=sum(1 for report in reports if report.found),
        valid=sum(1 for report in reports if report.valid),
        issues=IssueTotals(
            critical=sum(report.summary.critical for report in reports),
            important=sum(report.summary.important for report in reports),
            recommended=sum(report.summary.recommended for report in reports),
        ),
    )

    return AnalysisReport(summary=summary, files=dict(files))
