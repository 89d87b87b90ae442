# checkers/sitemap.py

import xml.etree.ElementTree as ET
from urllib.parse import urlsplit

from web_resource_checker.schemas import Severity

from ..findings import issue, passed
from ..models import CheckContext, CheckerSettings, CheckResult
from ._helpers import empty_file, format_size

_OPTIONAL_URL_ELEMENTS = (
    ("lastmod", "Add <lastmod>YYYY-MM-DD</lastmod> to improve crawl efficiency"),
    ("changefreq", "Add <changefreq> (e.g. weekly) to hint at update frequency"),
    ("priority", "Add <priority> between 0.0 and 1.0 to rank important pages"),
)


def check_sitemap(
    content: bytes,
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Validate a sitemap against the sitemaps.org protocol.

    Accepts both a <urlset> sitemap and a <sitemapindex>. Namespaces are
    ignored when matching element names.

    Args:
        content: Raw sitemap bytes.
        context: Where the content came from.
        settings: Rule thresholds.

    Returns:
        CheckResult: Issues, passed checks and URL statistics.
    """
    if not content.strip():
        return empty_file(
            Severity.CRITICAL,
            "sitemap.xml",
            "Add valid sitemap XML content",
        )

    try:
        root = ET.fromstring(content)
    except ET.ParseError as error:
        return issue(
            Severity.CRITICAL,
            "invalid-xml",
            f"Invalid XML: {error}",
            "Fix XML syntax errors",
        )

    result = check_size(len(content), settings)
    root_name = _local_name(root.tag)

    if root_name == "urlset":
        return (
            passed("root-element", "urlset")
            + check_urls(_children(root, "url"), context, settings)
            + result
        )

    if root_name == "sitemapindex":
        return (
            passed("root-element", "sitemapindex")
            + check_sitemap_index(_children(root, "sitemap"), settings)
            + result
        )

    return (
        issue(
            Severity.CRITICAL,
            "missing-root",
            "Missing <urlset> or <sitemapindex> root element",
            'Wrap URLs in <urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
            value=root_name,
        )
        + result
    )


def check_urls(
    urls: list[ET.Element],
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Check the <url> entries of a <urlset> sitemap.

    Returns:
        CheckResult: Findings about URL count, <loc> values and optional
            per-URL metadata.
    """
    stats = CheckResult(stats={"urls": len(urls)})

    if not urls:
        return stats + issue(
            Severity.CRITICAL,
            "no-urls",
            "Sitemap contains no URLs",
            "Add at least one <url><loc>...</loc></url> entry",
        )

    locs = [_child_text(url, "loc") for url in urls]
    present = [loc for loc in locs if loc]

    result = stats + check_url_count(len(urls), settings)

    missing = len(locs) - len(present)
    if missing:
        result += issue(
            Severity.CRITICAL,
            "missing-loc",
            f"{missing} URL entries missing <loc> element",
            "Add <loc>https://example.com/page</loc> to each URL entry",
            count=missing,
            total=len(urls),
        )

    result += check_loc_values(present, context)

    for element, fix in _OPTIONAL_URL_ELEMENTS:
        result += check_optional_element(urls, element, fix)

    return result


def check_url_count(count: int, settings: CheckerSettings) -> CheckResult:
    """
    Flag sitemaps listing more URLs than the protocol allows.

    Returns:
        CheckResult: An important issue above the limit, a passed check
            otherwise.
    """
    limit = settings.max_sitemap_urls
    if count > limit:
        return issue(
            Severity.IMPORTANT,
            "exceeds-limit",
            f"Sitemap contains {count:,} URLs (max {limit:,})",
            "Split into multiple sitemaps and reference them from a sitemap index",
            count=count,
            max=limit,
        )
    return passed("url-count", f"{count} URLs", count=count, max=limit)


def check_loc_values(locs: list[str], context: CheckContext) -> CheckResult:
    """
    Check that every <loc> is an absolute URL on the target's origin.

    The origin rule only applies to remote targets, where the origin is known.

    Returns:
        CheckResult: Recommended issues for relative or cross-origin URLs.
    """
    relative = [loc for loc in locs if not _is_absolute(loc)]
    foreign = [
        loc
        for loc in locs
        if context.origin and _is_absolute(loc) and _origin(loc) != context.origin
    ]

    result = CheckResult()

    if relative:
        result += issue(
            Severity.RECOMMENDED,
            "relative-url",
            f"{len(relative)} URLs are not absolute",
            "Use absolute URLs starting with https://",
            count=len(relative),
            url=relative[0],
        )

    if foreign:
        result += issue(
            Severity.RECOMMENDED,
            "cross-origin-url",
            f"{len(foreign)} URLs are not on {context.origin}",
            "List only URLs of the site that serves the sitemap",
            count=len(foreign),
            url=foreign[0],
        )

    if not relative and not foreign and locs:
        result += passed("loc-urls", "All URLs are absolute", count=len(locs))

    return result


def check_optional_element(
    urls: list[ET.Element],
    element: str,
    fix: str,
) -> CheckResult:
    """
    Report <url> entries lacking an optional element such as <lastmod>.

    Returns:
        CheckResult: A recommended issue with counts, or a passed check.
    """
    missing = sum(1 for url in urls if not _child_text(url, element))
    if missing:
        return issue(
            Severity.RECOMMENDED,
            f"missing-{element}",
            f"{missing}/{len(urls)} URLs missing <{element}>",
            fix,
            count=missing,
            total=len(urls),
        )
    return passed(element, f"All URLs have <{element}>")


def check_sitemap_index(
    sitemaps: list[ET.Element],
    settings: CheckerSettings,
) -> CheckResult:
    """
    Check the <sitemap> entries of a sitemap index.

    Returns:
        CheckResult: Findings about entry count and <loc> presence.
    """
    stats = CheckResult(stats={"sitemaps": len(sitemaps)})

    if not sitemaps:
        return stats + issue(
            Severity.CRITICAL,
            "no-sitemaps",
            "Sitemap index contains no sitemaps",
            "Add at least one <sitemap><loc>...</loc></sitemap> entry",
        )

    result = stats + passed(
        "sitemap-index",
        f"Contains {len(sitemaps)} sitemaps",
        count=len(sitemaps),
    )

    if len(sitemaps) > settings.max_sitemap_urls:
        result += issue(
            Severity.IMPORTANT,
            "exceeds-limit",
            f"Sitemap index lists {len(sitemaps):,} sitemaps "
            f"(max {settings.max_sitemap_urls:,})",
            "Split the index into several indexes",
            count=len(sitemaps),
            max=settings.max_sitemap_urls,
        )

    missing = sum(1 for sitemap in sitemaps if not _child_text(sitemap, "loc"))
    if missing:
        result += issue(
            Severity.CRITICAL,
            "missing-sitemap-loc",
            f"{missing} sitemap entries missing <loc>",
            "Add <loc>https://example.com/sitemap.xml</loc> to each entry",
            count=missing,
        )

    return result


def check_size(size_bytes: int, settings: CheckerSettings) -> CheckResult:
    """
    Flag sitemaps larger than the uncompressed size limit.

    Returns:
        CheckResult: An important issue above the limit, a passed check
            otherwise.
    """
    limit = settings.max_sitemap_bytes
    if size_bytes > limit:
        return issue(
            Severity.IMPORTANT,
            "file-too-large",
            f"Sitemap is {size_bytes / 1024 / 1024:.1f}MB (max 50MB uncompressed)",
            "Split into multiple sitemaps referenced from a sitemap index",
            size_bytes=size_bytes,
            max_bytes=limit,
        )
    return passed(
        "file-size",
        format_size(size_bytes),
        size_bytes=size_bytes,
        max_bytes=limit,
    )


def _local_name(tag: str) -> str:
    """
    Strip the "{namespace}" prefix ElementTree puts on qualified tags.
    """
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> str:
    """
    Return the stripped text of the first child called name, or "".
    """
    for child in _children(element, name):
        return (child.text or "").strip()
    return ""


def _is_absolute(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"
