# analysis/__init__.py

from .analyse import analyse_web_resources, check_web_resources
from .findings import make_issue, make_passed
from .models import (
    CheckContext,
    CheckerSettings,
    CheckOptions,
    CheckResult,
    default_settings,
)
from .render import exit_code, render_json, render_text
from .resources import (
    RESOURCES,
    WellKnownResource,
    parse_only,
    select_resources,
    validate_keys,
)

__all__ = [
    "RESOURCES",
    "CheckContext",
    "CheckOptions",
    "CheckResult",
    "CheckerSettings",
    "WellKnownResource",
    "analyse_web_resources",
    "check_web_resources",
    "default_settings",
    "exit_code",
    "make_issue",
    "make_passed",
    "parse_only",
    "render_json",
    "render_text",
    "select_resources",
    "validate_keys",
]
