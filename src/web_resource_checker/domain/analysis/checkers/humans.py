# checkers/humans.py

from web_resource_checker.schemas import Severity

from ..findings import passed
from ..models import CheckContext, CheckerSettings, CheckResult
from ._helpers import empty_file, format_size


def check_humans_txt(
    content: bytes,
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Check humans.txt, which has no formal grammar: it only needs to hold text.

    Undecodable bytes are replaced rather than rejected.

    Returns:
        CheckResult: A recommended issue for an empty file, a passed check
            otherwise.
    """
    text = content.decode("utf-8-sig", errors="replace")
    if not text.strip():
        return empty_file(
            Severity.RECOMMENDED,
            "humans.txt",
            "Credit the people behind the site, see humanstxt.org",
        )

    lines = sum(1 for line in text.splitlines() if line.strip())
    return passed(
        "content",
        format_size(len(content)),
        size_bytes=len(content),
    ) + CheckResult(stats={"lines": lines})
