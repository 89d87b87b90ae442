# checkers/llms.py

import math
import re
from dataclasses import dataclass, field

from web_resource_checker.schemas import Severity

from ..findings import issue, passed
from ..models import CheckContext, CheckerSettings, CheckResult
from ._helpers import decode_text, empty_file, format_size

_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


@dataclass
class _Heading:
    text: str
    line: int


@dataclass
class _LlmsStructure:
    first_content_line: int | None = None
    titles: list[_Heading] = field(default_factory=list)
    summary: str | None = None
    sections: list[_Heading] = field(default_factory=list)
    links: list[tuple[int, str]] = field(default_factory=list)


def check_llms_txt(
    content: bytes,
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Validate llms.txt against the llmstxt.org convention.

    Returns:
        CheckResult: Issues, passed checks and a structure outline.
    """
    return _check(content, settings, file_name="llms.txt", full=False)


def check_llms_full_txt(
    content: bytes,
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Validate llms-full.txt, which adds a context-size budget to the llms.txt
    structure rules.

    Returns:
        CheckResult: Issues, passed checks and a structure outline.
    """
    return _check(content, settings, file_name="llms-full.txt", full=True)


def _check(
    content: bytes,
    settings: CheckerSettings,
    *,
    file_name: str,
    full: bool,
) -> CheckResult:
    text = decode_text(content)
    if not text.strip():
        return empty_file(
            Severity.CRITICAL,
            file_name,
            "Add an H1 title and content per the llmstxt.org specification",
        )

    structure = _parse(text)

    return (
        check_title(structure, full=full)
        + check_summary(structure, settings)
        + check_sections(structure, full=full)
        + check_links(structure)
        + check_size(text, len(content), settings, full=full)
        + CheckResult(
            structure={
                "hasTitle": bool(structure.titles),
                "hasSummary": structure.summary is not None,
                "sectionCount": len(structure.sections),
                "linkCount": len(structure.links),
            },
        )
    )


def _parse(text: str) -> _LlmsStructure:
    """
    Outline the Markdown: H1 titles, the summary blockquote right after the
    first title, H2 sections and inline links anywhere in the file.

    Returns:
        _LlmsStructure: The parsed outline.
    """
    structure = _LlmsStructure()
    summary_lines: list[str] = []
    # None: not started, True: collecting, False: finished
    in_summary: bool | None = None

    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip()
        stripped = line.strip()

        if stripped and structure.first_content_line is None:
            structure.first_content_line = number

        structure.links.extend(
            (number, match.group(2).strip()) for match in _LINK_PATTERN.finditer(line)
        )

        if line.startswith("# "):
            structure.titles.append(_Heading(line[2:].strip(), number))
            if in_summary:
                in_summary = False
            continue

        if in_summary is None and len(structure.titles) == 1 and stripped:
            in_summary = stripped.startswith(">")

        if in_summary:
            if stripped.startswith(">"):
                summary_lines.append(stripped.lstrip(">").strip())
                continue
            in_summary = False

        if line.startswith("## "):
            structure.sections.append(_Heading(line[3:].strip(), number))

    if summary_lines:
        structure.summary = " ".join(part for part in summary_lines if part)

    return structure


def check_title(structure: _LlmsStructure, *, full: bool) -> CheckResult:
    """
    Require a single H1 title as the first non-blank line.

    llms-full.txt commonly concatenates whole documents, each with its own
    H1, so only llms.txt is held to a single title.

    Returns:
        CheckResult: Findings about the title.
    """
    if not structure.titles:
        return issue(
            Severity.CRITICAL,
            "missing-title",
            "Missing H1 title at start of file",
            "Start the file with # Your Site Name",
        )

    title = structure.titles[0]
    result = CheckResult()

    if title.line != structure.first_content_line:
        result += issue(
            Severity.CRITICAL,
            "title-not-first",
            f"H1 title found at line {title.line}, should be the first line",
            "Move the H1 title to the beginning of the file",
            line=title.line,
        )

    if not full and len(structure.titles) > 1:
        result += issue(
            Severity.IMPORTANT,
            "multiple-titles",
            f"{len(structure.titles)} H1 titles found, expected exactly one",
            "Keep one # title and turn the others into ## sections",
            count=len(structure.titles),
            line=structure.titles[1].line,
        )

    return result + passed("title", title.text, line=title.line)


def check_summary(structure: _LlmsStructure, settings: CheckerSettings) -> CheckResult:
    """
    Check for the blockquote summary that should follow the title.

    Returns:
        CheckResult: Findings about the summary.
    """
    if structure.summary is None:
        return issue(
            Severity.RECOMMENDED,
            "missing-summary",
            "Missing summary blockquote after title",
            "Add > Brief description of your site after the H1 title",
        )

    length = len(structure.summary)
    if length < settings.min_summary_length:
        return issue(
            Severity.RECOMMENDED,
            "summary-too-short",
            f"Summary is very short ({length} chars)",
            "Add more context to help LLMs understand your site",
            count=length,
        )

    return passed(
        "summary",
        f"{length} characters",
        preview=structure.summary[: settings.summary_preview_length],
    )


def check_sections(structure: _LlmsStructure, *, full: bool) -> CheckResult:
    """
    Count H2 sections and look for the conventional Optional section.

    The Optional section only matters for llms.txt files with more than one
    section, where it separates secondary resources from primary ones.

    Returns:
        CheckResult: Findings about sections.
    """
    if not structure.sections:
        return issue(
            Severity.RECOMMENDED,
            "no-sections",
            "No H2 sections found",
            "Add ## Section headings to organise content",
        )

    titles = tuple(section.text for section in structure.sections)
    result = CheckResult()

    has_optional = any(title.lower() == "optional" for title in titles)
    if not full and len(titles) > 1 and not has_optional:
        result += issue(
            Severity.RECOMMENDED,
            "no-optional-section",
            'No "Optional" section found',
            "Add ## Optional section for less critical resources",
        )

    return result + passed(
        "sections",
        f"{len(titles)} section(s) found",
        sections=titles,
        count=len(titles),
    )


def check_links(structure: _LlmsStructure) -> CheckResult:
    """
    Check that the file links to navigable content with usable URLs.

    Returns:
        CheckResult: Findings about Markdown links.
    """
    if not structure.links:
        return issue(
            Severity.RECOMMENDED,
            "no-links",
            "No markdown links found",
            "Add links in format: - [Link Text](https://example.com/page): Description",
        )

    invalid = [
        (number, url)
        for number, url in structure.links
        if not url.lower().startswith(("http://", "https://", "/"))
    ]

    result = CheckResult()
    if invalid:
        line, url = invalid[0]
        result += issue(
            Severity.IMPORTANT,
            "invalid-links",
            f"{len(invalid)} link(s) have potentially invalid URLs",
            "Use absolute URLs (https://...) or root-relative paths (/...)",
            count=len(invalid),
            line=line,
            url=url,
        )

    return result + passed(
        "links",
        f"{len(structure.links)} link(s) found",
        count=len(structure.links),
    )


def check_size(
    text: str,
    size_bytes: int,
    settings: CheckerSettings,
    *,
    full: bool,
) -> CheckResult:
    """
    Check that llms-full.txt fits a typical model context window.

    Tokens are estimated as characters divided by chars_per_token. This is a
    rough heuristic for English text, not a real tokenizer.

    Returns:
        CheckResult: An important issue above the budget, a passed check
            otherwise. llms.txt only records its size.
    """
    if not full:
        return passed("size", format_size(size_bytes), size_bytes=size_bytes)

    estimated = math.ceil(len(text) / settings.chars_per_token)
    limit = settings.max_llms_full_tokens

    if estimated > limit:
        return issue(
            Severity.IMPORTANT,
            "too-large",
            f"File may exceed typical LLM context windows "
            f"(~{estimated:,} estimated tokens)",
            "Split the content or prioritise the most important pages",
            estimated_tokens=estimated,
            max=limit,
            size_bytes=size_bytes,
        )

    return passed(
        "size",
        f"~{estimated:,} estimated tokens",
        estimated_tokens=estimated,
        max=limit,
        size_bytes=size_bytes,
    )
