# analysis/render.py

import json

from web_resource_checker.schemas import AnalysisReport, FileReport, Issue, Severity

from .resources import RESOURCES

_SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.IMPORTANT: 1,
    Severity.RECOMMENDED: 2,
}


def render_json(report: AnalysisReport) -> str:
    """
    Serialise the report verbatim as indented JSON.

    Unset optional context fields are omitted; parsing the output with
    AnalysisReport.model_validate_json yields an equal report.

    Returns:
        str: JSON document.
    """
    return json.dumps(
        report.model_dump(mode="json", by_alias=True, exclude_none=True),
        indent=2,
        ensure_ascii=False,
    )


def render_text(report: AnalysisReport) -> str:
    """
    Render the report as a Markdown-like document for humans.

    Files with issues come first, worst severity first, and issues within a
    file are listed critical, then important, then recommended.

    Returns:
        str: The rendered report.
    """
    summary = report.summary
    lines = [
        "# Web Resource Audit Report",
        "",
        f"## Target: {summary.target}",
        f"Analyzed at: {summary.timestamp}",
        "",
        "---",
        "",
        *_files_table(report),
        "",
        "---",
        "",
        "## Files",
        "",
    ]

    for file_report in sorted(report.files.values(), key=_file_rank):
        lines.extend(_file_section(file_report))

    lines.extend(
        [
            "---",
            "",
            "## Summary",
            "",
            f"- Files checked: {summary.total_files} ({summary.found} found)",
            f"- Valid files: {summary.valid}",
            f"- Critical issues: {summary.issues.critical}",
            f"- Important issues: {summary.issues.important}",
            f"- Recommended improvements: {summary.issues.recommended}",
        ],
    )

    missing = [key for key, file_report in report.files.items() if not file_report.found]
    if missing:
        lines.extend(["", "## Recommendations", ""])
        lines.extend(
            f"- Create {RESOURCES[key].paths[0]} for better web presence"
            for key in missing
            if key in RESOURCES
        )

    return "\n".join(lines)


def exit_code(report: AnalysisReport) -> int:
    """
    Map a report to a process exit code.

    Returns:
        int: 0 when no file has a critical issue, 1 otherwise.
    """
    return 1 if report.summary.issues.critical else 0


def _files_table(report: AnalysisReport) -> list[str]:
    rows = [
        "## Files Found",
        "",
        "| File | Status | Issues |",
        "|------|--------|--------|",
    ]
    for file_report in report.files.values():
        status = "Found" if file_report.found else "Not Found"
        count = len(file_report.issues) if file_report.found else "-"
        rows.append(f"| {_display_name(file_report)} | {status} | {count} |")
    return rows


def _file_section(file_report: FileReport) -> list[str]:
    """
    Render one file: status line, sorted issues and a counts line.

    Returns:
        list[str]: Lines of the section, ending with a blank line.
    """
    found = "found" if file_report.found else "not found"
    valid = "valid" if file_report.valid else "invalid"
    lines = [
        f"### {_display_name(file_report)}",
        "",
        f"Status: {found}, {valid} ({file_report.source})",
    ]

    if file_report.error:
        lines.append(f"Error: {file_report.error}")

    lines.append("")

    if not file_report.issues:
        lines.extend([f"All {len(file_report.passed)} checks passed.", ""])
        return lines

    issues = sorted(file_report.issues, key=_issue_rank)
    for index, issue in enumerate(issues, start=1):
        lines.append(f"{index}. **{issue.message}** ({issue.severity.value.title()})")
        lines.append(f"   - Fix: {issue.fix}")

    counts = file_report.summary
    lines.extend(
        [
            "",
            f"Critical: {counts.critical}, Important: {counts.important}, "
            f"Recommended: {counts.recommended}, Passed: {counts.passed}",
            "",
        ],
    )
    return lines


def _display_name(file_report: FileReport) -> str:
    resource = RESOURCES.get(file_report.file)
    return resource.file_name if resource else file_report.file


def _issue_rank(issue: Issue) -> int:
    return _SEVERITY_ORDER[issue.severity]


def _file_rank(file_report: FileReport) -> int:
    """
    Sort key putting files with the worst issues first and clean files last.
    """
    return min(
        (_issue_rank(issue) for issue in file_report.issues),
        default=len(_SEVERITY_ORDER),
    )
