# domain/__init__.py

from .analysis import (
    CheckerSettings,
    CheckOptions,
    analyse_web_resources,
    check_web_resources,
    exit_code,
    parse_only,
    render_json,
    render_text,
)

__all__ = [
    "CheckOptions",
    "CheckerSettings",
    "analyse_web_resources",
    "check_web_resources",
    "exit_code",
    "parse_only",
    "render_json",
    "render_text",
]
