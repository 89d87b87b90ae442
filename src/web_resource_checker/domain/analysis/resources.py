# analysis/resources.py

from collections.abc import Callable
from dataclasses import dataclass

from web_resource_checker.schemas import Severity

from .checkers import (
    check_ads_txt,
    check_humans_txt,
    check_llms_full_txt,
    check_llms_txt,
    check_robots,
    check_security_txt,
    check_sitemap,
)
from .models import CheckContext, CheckerSettings, CheckResult

Checker = Callable[[bytes, CheckContext, CheckerSettings], CheckResult]


@dataclass(frozen=True, slots=True)
class WellKnownResource:
    """
    A well-known file: where to look for it and how to judge it.

    Attributes:
        key: Short name used in options and report keys.
        file_name: Conventional file name, used in messages.
        paths: Candidate relative paths, preferred first.
        checker: Function validating the file content.
        absent_severity: Severity of the issue raised when the file is missing.
        absent_fix: Remediation text for a missing file.
    """

    key: str
    file_name: str
    paths: tuple[str, ...]
    checker: Checker
    absent_severity: Severity
    absent_fix: str


# canonical order; report files follow it regardless of completion order
RESOURCES: dict[str, WellKnownResource] = {
    resource.key: resource
    for resource in (
        WellKnownResource(
            key="sitemap",
            file_name="sitemap.xml",
            paths=("sitemap.xml", "sitemap_index.xml"),
            checker=check_sitemap,
            absent_severity=Severity.CRITICAL,
            absent_fix="Create sitemap.xml at the site root for better SEO "
            "discoverability",
        ),
        WellKnownResource(
            key="robots",
            file_name="robots.txt",
            paths=("robots.txt",),
            checker=check_robots,
            absent_severity=Severity.CRITICAL,
            absent_fix="Add robots.txt at the site root to control crawler access",
        ),
        WellKnownResource(
            key="llms",
            file_name="llms.txt",
            paths=("llms.txt",),
            checker=check_llms_txt,
            absent_severity=Severity.CRITICAL,
            absent_fix="Add llms.txt to improve LLM accessibility, see llmstxt.org",
        ),
        WellKnownResource(
            key="llms-full",
            file_name="llms-full.txt",
            paths=("llms-full.txt",),
            checker=check_llms_full_txt,
            absent_severity=Severity.CRITICAL,
            absent_fix="Add llms-full.txt with the full documentation content, "
            "see llmstxt.org",
        ),
        WellKnownResource(
            key="security",
            file_name="security.txt",
            paths=(".well-known/security.txt", "security.txt"),
            checker=check_security_txt,
            absent_severity=Severity.CRITICAL,
            absent_fix="Create /.well-known/security.txt per RFC 9116 for "
            "vulnerability disclosure",
        ),
        WellKnownResource(
            key="humans",
            file_name="humans.txt",
            paths=("humans.txt",),
            checker=check_humans_txt,
            # humans.txt is informal and never required
            absent_severity=Severity.RECOMMENDED,
            absent_fix="Consider adding humans.txt to credit the team, see "
            "humanstxt.org",
        ),
        WellKnownResource(
            key="ads",
            file_name="ads.txt",
            paths=("ads.txt",),
            checker=check_ads_txt,
            absent_severity=Severity.CRITICAL,
            absent_fix="Publish ads.txt listing authorised digital sellers "
            "(IAB ads.txt)",
        ),
    )
}


def parse_only(value: str | None) -> frozenset[str] | None:
    """
    Parse a comma-separated file key filter such as "sitemap, robots".

    Keys are trimmed and lower-cased; empty entries are ignored.

    Returns:
        frozenset[str] | None: Selected keys, or None when value is empty.

    Raises:
        ValueError: If any key is not a known file key.
    """
    if not value:
        return None

    keys = frozenset(part.strip().lower() for part in value.split(",") if part.strip())
    validate_keys(keys)
    return keys or None


def validate_keys(keys: frozenset[str] | None) -> None:
    """
    Reject file keys that do not name a well-known file.

    Raises:
        ValueError: If any key is not in RESOURCES.
    """
    if keys is None:
        return

    unknown = sorted(keys - RESOURCES.keys())
    if unknown:
        raise ValueError(
            f"Unknown file key(s): {', '.join(unknown)}. "
            f"Valid keys: {', '.join(RESOURCES)}",
        )


def select_resources(only: frozenset[str] | None) -> tuple[WellKnownResource, ...]:
    """
    Return the resources to check, in canonical order.

    Returns:
        tuple[WellKnownResource, ...]: All resources, or those named in only.
    """
    return tuple(
        resource for key, resource in RESOURCES.items() if only is None or key in only
    )
