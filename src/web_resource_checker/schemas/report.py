# schemas/report.py

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class Severity(StrEnum):
    """
    The three severity buckets a finding can fall into.

    Attributes:
        CRITICAL: The file is broken or missing; it fails validation.
        IMPORTANT: The file works but violates its specification.
        RECOMMENDED: An improvement that makes the file more useful.
    """

    CRITICAL = "critical"
    IMPORTANT = "important"
    RECOMMENDED = "recommended"


_REPORT_CONFIG = ConfigDict(
    strict=True,
    frozen=True,
    # wire format uses camelCase keys (daysUntilExpiry, totalFiles, ...)
    alias_generator=to_camel,
    populate_by_name=True,
)


class Issue(BaseModel):
    """
    A single rule violation found in a well-known file.

    Only the context fields relevant to the rule are populated; the rest are
    left as None and omitted when the report is serialised.
    """

    model_config = _REPORT_CONFIG

    severity: Severity
    check: str = Field(min_length=1)
    message: str = Field(min_length=1)
    fix: str = Field(min_length=1)

    line: int | None = None
    value: str | None = None
    url: str | None = None
    content: str | None = None
    directive: str | None = None
    field: str | None = None
    email: str | None = None
    expires: str | None = None
    user_agent: str | None = None
    agents: tuple[str, ...] | None = None
    count: int | None = None
    total: int | None = None
    max: int | None = None
    size_bytes: int | None = None
    max_bytes: int | None = None
    days_until_expiry: int | None = None
    estimated_tokens: int | None = None


class PassedCheck(BaseModel):
    """
    A rule that was verified and held, kept so reports show what was checked
    and not only what failed.
    """

    model_config = _REPORT_CONFIG

    check: str = Field(min_length=1)
    value: str

    line: int | None = None
    user_agent: str | None = None
    preview: str | None = None
    urls: tuple[str, ...] | None = None
    sections: tuple[str, ...] | None = None
    count: int | None = None
    total: int | None = None
    max: int | None = None
    size_bytes: int | None = None
    max_bytes: int | None = None
    days_until_expiry: int | None = None
    estimated_tokens: int | None = None


class Summary(BaseModel):
    """
    Per-file counts of issues by severity and of passed checks.
    """

    model_config = _REPORT_CONFIG

    critical: int
    important: int
    recommended: int
    passed: int


class FileReport(BaseModel):
    """
    Validation results for one well-known file.

    The summary and the valid flag are derived from the issue and passed
    collections on access, so they can never disagree with them.
    """

    model_config = _REPORT_CONFIG

    file: str
    source: str
    found: bool
    issues: tuple[Issue, ...] = ()
    passed: tuple[PassedCheck, ...] = ()
    error: str | None = None
    stats: dict[str, int] | None = None
    fields: tuple[str, ...] | None = None
    structure: dict[str, bool | int] | None = None

    @computed_field
    @property
    def summary(self) -> Summary:
        return Summary(
            critical=self._count(Severity.CRITICAL),
            important=self._count(Severity.IMPORTANT),
            recommended=self._count(Severity.RECOMMENDED),
            passed=len(self.passed),
        )

    @computed_field
    @property
    def valid(self) -> bool:
        return self._count(Severity.CRITICAL) == 0

    def _count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity is severity)


class IssueTotals(BaseModel):
    """
    Issue counts by severity across every checked file.
    """

    model_config = _REPORT_CONFIG

    critical: int
    important: int
    recommended: int


class ReportSummary(BaseModel):
    """
    Run-level rollup of the per-file reports.
    """

    model_config = _REPORT_CONFIG

    target: str
    timestamp: str
    total_files: int
    found: int
    valid: int
    issues: IssueTotals


class AnalysisReport(BaseModel):
    """
    Machine-readable envelope for a complete web resource analysis.

    Files are keyed by their short name (sitemap, robots, llms, llms-full,
    security, humans, ads) in a fixed order, independent of the order in
    which the checks completed.
    """

    model_config = _REPORT_CONFIG

    summary: ReportSummary
    files: dict[str, FileReport]
