# analysis/models.py

from dataclasses import dataclass, field
from datetime import datetime

from web_resource_checker.adapters.resource_locator import default_timeout_seconds
from web_resource_checker.schemas import Issue, PassedCheck


@dataclass(frozen=True)
class CheckerSettings:
    """
    Configuration values controlling rule thresholds.
    """

    # sitemaps.org: a single sitemap may list at most 50,000 URLs
    max_sitemap_urls: int = 50_000
    # sitemaps.org: a single sitemap may be at most 50MB uncompressed
    max_sitemap_bytes: int = 52_428_800
    # RFC 9309: crawlers must parse at least the first 500KiB
    max_robots_bytes: int = 512_000
    # llms-full.txt should fit the context window of common models
    max_llms_full_tokens: int = 100_000
    # characters per token for the llms-full.txt size estimate
    chars_per_token: int = 4
    # llms.txt summaries shorter than this give too little context
    min_summary_length: int = 20
    # characters of the llms.txt summary shown in the passed check
    summary_preview_length: int = 100
    # security.txt expiring within this many days is flagged
    expiry_warning_days: int = 30
    # RFC 9116 recommends an Expires less than a year in the future
    max_validity_days: int = 365


def default_settings() -> CheckerSettings:
    """
    Return default rule thresholds.

    Returns:
        CheckerSettings: Default configuration values.
    """
    return CheckerSettings()


@dataclass(frozen=True)
class CheckOptions:
    """
    Per-run options supplied by the caller.

    Attributes:
        only: File keys to check, or None for all of them.
        timeout: Per-file read/fetch timeout in seconds.
    """

    only: frozenset[str] | None = None
    timeout: float = field(default_factory=default_timeout_seconds)


@dataclass(frozen=True)
class CheckContext:
    """
    What a checker knows about where its bytes came from.

    Attributes:
        source: Local path or URL the content was read from.
        is_remote: Whether the content was fetched over the network.
        origin: scheme://host of a remote target, None for local ones.
        well_known: Whether the content came from a .well-known/ path.
        now: Reference time for date-based rules.
    """

    source: str
    is_remote: bool
    origin: str | None
    well_known: bool
    now: datetime


@dataclass(frozen=True)
class CheckResult:
    """
    The outcome of one or more rules applied to a file.

    Results from individual rules are combined with +, concatenating findings
    and merging the optional stats, fields and structure payloads.
    """

    issues: tuple[Issue, ...] = ()
    passed: tuple[PassedCheck, ...] = ()
    stats: dict[str, int] | None = None
    fields: tuple[str, ...] | None = None
    structure: dict[str, bool | int] | None = None

    def __add__(self, other: "CheckResult") -> "CheckResult":
        return CheckResult(
            issues=self.issues + other.issues,
            passed=self.passed + other.passed,
            stats=_merge(self.stats, other.stats),
            fields=other.fields if other.fields is not None else self.fields,
            structure=_merge(self.structure, other.structure),
        )


def _merge(left: dict | None, right: dict | None) -> dict | None:
    """
    Merge two optional payload dicts, right-hand keys winning.

    Returns:
        dict | None: Combined dict, or None when both sides are None.
    """
    if left is None or right is None:
        return left if right is None else right
    return {**left, **right}
