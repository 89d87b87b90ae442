# schemas/__init__.py

from .report import (
    AnalysisReport,
    FileReport,
    Issue,
    IssueTotals,
    PassedCheck,
    ReportSummary,
    Severity,
    Summary,
)

__all__ = [
    "AnalysisReport",
    "FileReport",
    "Issue",
    "IssueTotals",
    "PassedCheck",
    "ReportSummary",
    "Severity",
    "Summary",
]
