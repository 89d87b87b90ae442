# checkers/_helpers.py

from collections.abc import Iterator

from web_resource_checker.schemas import Severity

from ..findings import issue
from ..models import CheckResult


def decode_text(content: bytes) -> str:
    """
    Decode file content as UTF-8, tolerating a leading byte order mark.

    Returns:
        str: Decoded text.

    Raises:
        UnicodeDecodeError: If the content is not valid UTF-8.
    """
    return content.decode("utf-8-sig")


def numbered_lines(
    text: str,
    *,
    inline_comments: bool = True,
) -> Iterator[tuple[int, str]]:
    """
    Yield (line_number, stripped_line) pairs, skipping blanks and comments.

    With inline_comments, anything after a "#" is dropped; otherwise only
    lines starting with "#" are treated as comments.

    Returns:
        Iterator[tuple[int, str]]: One-based line numbers with content.
    """
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0] if inline_comments else raw
        line = line.strip()
        if line and not line.startswith("#"):
            yield number, line


def split_directive(line: str) -> tuple[str, str] | None:
    """
    Split a "Name: value" line into a lower-cased name and a stripped value.

    Returns:
        tuple[str, str] | None: (name, value), or None without a colon.
    """
    name, colon, value = line.partition(":")
    if not colon:
        return None
    return name.strip().lower(), value.strip()


def empty_file(severity: Severity, file_name: str, fix: str) -> CheckResult:
    """
    Report a file that exists but holds nothing but whitespace.

    Returns:
        CheckResult: Result with a single empty-file issue.
    """
    return issue(severity, "empty-file", f"{file_name} is empty", fix)


def format_size(size_bytes: int) -> str:
    """
    Format a byte count as kilobytes with one decimal.

    Returns:
        str: e.g. "1.5KB".
    """
    return f"{size_bytes / 1024:.1f}KB"
