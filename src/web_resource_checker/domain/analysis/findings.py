# analysis/findings.py

from web_resource_checker.schemas import Issue, PassedCheck, Severity

from .models import CheckResult


def make_issue(
    severity: Severity,
    check: str,
    message: str,
    fix: str,
    **context: object,
) -> Issue:
    """
    Build an Issue, the only sanctioned way for a checker to report one.

    Args:
        severity: One of the three severity buckets.
        check: Rule identifier, unique within the file type.
        message: Human-readable description of the violation.
        fix: Actionable remediation text.
        **context: Optional context fields relevant to the rule (line, count,
            max, size_bytes, days_until_expiry, ...).

    Returns:
        Issue: The validated issue.

    Raises:
        TypeError: If severity is not a Severity member.
        ValueError: If message or fix is blank.
    """
    if not isinstance(severity, Severity):
        raise TypeError(f"Unknown severity {severity!r} for check {check}")

    if not message.strip() or not fix.strip():
        raise ValueError(f"Issue {check} needs both a message and a fix")

    return Issue(severity=severity, check=check, message=message, fix=fix, **context)


def make_passed(check: str, value: str, **context: object) -> PassedCheck:
    """
    Build a PassedCheck recording a rule that held.

    Returns:
        PassedCheck: The validated passed check.
    """
    return PassedCheck(check=check, value=value, **context)


def issue(
    severity: Severity,
    check: str,
    message: str,
    fix: str,
    **context: object,
) -> CheckResult:
    """
    Wrap a single issue in a CheckResult.

    Returns:
        CheckResult: Result holding exactly one issue.
    """
    return CheckResult(issues=(make_issue(severity, check, message, fix, **context),))


def passed(check: str, value: str, **context: object) -> CheckResult:
    """
    Wrap a single passed check in a CheckResult.

    Returns:
        CheckResult: Result holding exactly one passed check.
    """
    return CheckResult(passed=(make_passed(check, value, **context),))
