# web_resource_checker/__init__.py

from .domain import (
    CheckerSettings,
    CheckOptions,
    analyse_web_resources,
    check_web_resources,
    exit_code,
    parse_only,
    render_json,
    render_text,
)
from .exceptions import TargetUnreachableError, WebResourceCheckerError
from .schemas import AnalysisReport, FileReport, Issue, PassedCheck, Severity

__all__ = [
    "analyse_web_resources",
    "check_web_resources",
    "exit_code",
    "parse_only",
    "render_json",
    "render_text",
    "AnalysisReport",
    "CheckOptions",
    "CheckerSettings",
    "FileReport",
    "Issue",
    "PassedCheck",
    "Severity",
    "TargetUnreachableError",
    "WebResourceCheckerError",
]
