# checkers/robots.py

from dataclasses import dataclass, field

from web_resource_checker.schemas import Severity

from ..findings import issue, passed
from ..models import CheckContext, CheckerSettings, CheckResult
from ._helpers import decode_text, empty_file, format_size, numbered_lines, split_directive

# RFC 9309 records plus the widely supported non-standard ones
_KNOWN_DIRECTIVES = (
    "user-agent",
    "disallow",
    "allow",
    "sitemap",
    "crawl-delay",
    "host",
)

_GROUP_DIRECTIVES = frozenset({"disallow", "allow", "crawl-delay"})

_DISPLAY_NAMES = {
    "disallow": "Disallow",
    "allow": "Allow",
    "crawl-delay": "Crawl-delay",
}


@dataclass
class _Group:
    """
    One robots.txt group: consecutive User-agent lines and their rules.
    """

    line: int
    agents: list[str] = field(default_factory=list)
    disallow: list[str] = field(default_factory=list)
    allow: list[str] = field(default_factory=list)


@dataclass
class _ParsedRobots:
    groups: list[_Group] = field(default_factory=list)
    sitemaps: list[tuple[int, str]] = field(default_factory=list)


def check_robots(
    content: bytes,
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Validate robots.txt against RFC 9309.

    Directive names are matched case-insensitively; blank lines and comments
    are ignored. Rules are grouped the RFC 9309 way: consecutive User-agent
    lines open one group that collects the rules following them.

    Args:
        content: Raw robots.txt bytes.
        context: Where the content came from.
        settings: Rule thresholds.

    Returns:
        CheckResult: Issues, passed checks and group statistics.
    """
    text = decode_text(content)
    if not text.strip():
        return empty_file(
            Severity.IMPORTANT,
            "robots.txt",
            "Add User-agent and Disallow/Allow directives",
        )

    parsed, syntax = _parse(text)

    return (
        check_size(len(content), settings)
        + syntax
        + check_user_agents(parsed.groups)
        + check_sitemaps(parsed.sitemaps)
        + check_blocking_all(parsed.groups)
        + CheckResult(
            stats={
                "groups": len(parsed.groups),
                "userAgents": sum(len(group.agents) for group in parsed.groups),
                "sitemaps": len(parsed.sitemaps),
                "rules": sum(
                    len(group.disallow) + len(group.allow) for group in parsed.groups
                ),
            },
        )
    )


def _parse(text: str) -> tuple[_ParsedRobots, CheckResult]:
    """
    Parse robots.txt into groups and sitemap references.

    Returns:
        tuple[_ParsedRobots, CheckResult]: The parsed structure and any
            line-level syntax findings.
    """
    parsed = _ParsedRobots()
    findings = CheckResult()
    current: _Group | None = None
    collecting_agents = False

    for number, line in numbered_lines(text):
        split = split_directive(line)
        if split is None:
            findings += issue(
                Severity.IMPORTANT,
                "syntax-error",
                f"Invalid syntax at line {number}: missing colon",
                "Use format: Directive: value",
                line=number,
                content=line,
            )
            continue

        directive, value = split

        if directive not in _KNOWN_DIRECTIVES:
            findings += issue(
                Severity.RECOMMENDED,
                "unknown-directive",
                f'Unknown directive "{directive}" at line {number}',
                f"Valid directives: {', '.join(_KNOWN_DIRECTIVES)}",
                line=number,
                directive=directive,
            )
            continue

        if directive == "user-agent":
            if current is None or not collecting_agents:
                current = _Group(line=number)
                parsed.groups.append(current)
            current.agents.append(value)
            collecting_agents = True
            continue

        if directive == "sitemap":
            parsed.sitemaps.append((number, value))
            continue

        if directive not in _GROUP_DIRECTIVES:
            continue

        collecting_agents = False

        if current is None:
            findings += issue(
                Severity.CRITICAL,
                "directive-without-agent",
                f"{_DISPLAY_NAMES[directive]} directive before any User-agent "
                f"at line {number}",
                "Add User-agent: * before this directive",
                line=number,
                directive=directive,
            )
            continue

        findings += _record_rule(current, directive, value, number)

    return parsed, findings


def _record_rule(group: _Group, directive: str, value: str, number: int) -> CheckResult:
    """
    Attach a group rule to its group, validating Crawl-delay values.

    Returns:
        CheckResult: An issue for a non-numeric Crawl-delay, else empty.
    """
    if directive == "disallow":
        group.disallow.append(value)
    elif directive == "allow":
        group.allow.append(value)
    elif not _is_number(value):
        return issue(
            Severity.IMPORTANT,
            "invalid-crawl-delay",
            f"Crawl-delay at line {number} is not a number",
            "Use a number of seconds, e.g. Crawl-delay: 10",
            line=number,
            value=value,
        )
    return CheckResult()


def check_size(size_bytes: int, settings: CheckerSettings) -> CheckResult:
    """
    Flag robots.txt files larger than crawlers are required to parse.

    Returns:
        CheckResult: An important issue above the limit, a passed check
            otherwise.
    """
    limit = settings.max_robots_bytes
    if size_bytes > limit:
        return issue(
            Severity.IMPORTANT,
            "file-too-large",
            f"robots.txt is {format_size(size_bytes)} (max 500KB)",
            "Reduce file size or simplify rules",
            size_bytes=size_bytes,
            max_bytes=limit,
        )
    return passed(
        "file-size",
        format_size(size_bytes),
        size_bytes=size_bytes,
        max_bytes=limit,
    )


def check_user_agents(groups: list[_Group]) -> CheckResult:
    """
    Check that rules are addressed to crawlers, including a * fallback.

    Returns:
        CheckResult: Findings about User-agent coverage.
    """
    if not groups:
        return issue(
            Severity.IMPORTANT,
            "no-user-agent",
            "No User-agent directive found",
            "Add User-agent: * to apply rules to all crawlers",
        )

    agents = tuple(agent for group in groups for agent in group.agents)
    result = passed("user-agents", f"{len(groups)} user-agent group(s) found")

    if "*" in agents:
        return result + passed("user-agent-wildcard", "User-agent: * found")

    return result + issue(
        Severity.RECOMMENDED,
        "no-wildcard-agent",
        "No wildcard User-agent: * found",
        "Add User-agent: * as fallback for unspecified crawlers",
        agents=agents,
    )


def check_sitemaps(sitemaps: list[tuple[int, str]]) -> CheckResult:
    """
    Check that robots.txt advertises at least one absolute sitemap URL.

    Returns:
        CheckResult: Findings about Sitemap directives.
    """
    if not sitemaps:
        return issue(
            Severity.RECOMMENDED,
            "missing-sitemap",
            "No Sitemap directive found",
            "Add Sitemap: https://example.com/sitemap.xml for better discoverability",
        )

    result = CheckResult()
    for number, url in sitemaps:
        if not url.lower().startswith(("http://", "https://")):
            result += issue(
                Severity.IMPORTANT,
                "relative-sitemap-url",
                f"Sitemap URL at line {number} is not absolute",
                "Use absolute URL: Sitemap: https://example.com/sitemap.xml",
                line=number,
                url=url,
            )

    return result + passed(
        "sitemap",
        f"{len(sitemaps)} Sitemap directive(s) found",
        urls=tuple(url for _, url in sitemaps),
    )


def check_blocking_all(groups: list[_Group]) -> CheckResult:
    """
    Surface groups that disallow the whole site.

    A * group with Disallow: / and no Allow blocks every compliant crawler.
    It stays an important finding rather than critical because staging sites
    do this on purpose. Fully blocked named bots are listed as passed checks.

    Returns:
        CheckResult: Findings about site-wide blocking.
    """
    result = CheckResult()

    for group in groups:
        if "/" not in group.disallow or group.allow:
            continue

        if "*" in group.agents:
            result += issue(
                Severity.IMPORTANT,
                "blocking-all",
                "Disallow: / under User-agent: * blocks all crawlers from the "
                "entire site",
                "Remove or narrow the rule unless the site should not be "
                "indexed (e.g. staging)",
                user_agent="*",
                line=group.line,
            )
            continue

        for agent in group.agents:
            result += passed(
                "bot-blocked",
                f"{agent} is blocked from site",
                user_agent=agent,
            )

    return result


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True
