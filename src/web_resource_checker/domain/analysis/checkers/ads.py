# checkers/ads.py

from web_resource_checker.schemas import Severity

from ..findings import issue, passed
from ..models import CheckContext, CheckerSettings, CheckResult
from ._helpers import decode_text, empty_file, numbered_lines

_RELATIONSHIPS = frozenset({"DIRECT", "RESELLER"})

# IAB ads.txt 1.1 variable declarations
_VARIABLES = frozenset(
    {
        "contact",
        "subdomain",
        "ownerdomain",
        "managerdomain",
        "inventorypartnerdomain",
    },
)

_RECORD_FORMAT = "<domain>, <publisher-id>, <DIRECT|RESELLER>[, <cert-authority-id>]"


def check_ads_txt(
    content: bytes,
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Validate ads.txt records against the IAB ads.txt specification.

    Each data line must read "<domain>, <publisher-id>, <relationship>" with
    an optional certification authority id. Variable lines (name=value) are
    accepted for the names the specification defines.

    Returns:
        CheckResult: One issue per malformed line plus record statistics.
    """
    text = decode_text(content)
    result = CheckResult()
    counts = {"records": 0, "direct": 0, "reseller": 0, "variables": 0}

    for number, line in numbered_lines(text):
        if "=" in line and "," not in line:
            result += _check_variable(number, line, counts)
            continue

        relationship = _parse_record(line)
        if relationship is None:
            result += issue(
                Severity.IMPORTANT,
                "malformed-record",
                f"Malformed ads.txt record at line {number}",
                f"Use format: {_RECORD_FORMAT}",
                line=number,
                content=line,
            )
            continue

        counts["records"] += 1
        counts[relationship.lower()] += 1

    if not counts["records"] and not counts["variables"] and not result.issues:
        return empty_file(
            Severity.RECOMMENDED,
            "ads.txt",
            f"List authorised sellers, one per line: {_RECORD_FORMAT}",
        ) + CheckResult(stats=counts)

    if counts["records"]:
        result += passed(
            "records",
            f"{counts['records']} seller record(s) found",
            count=counts["records"],
        )

    return result + CheckResult(stats=counts)


def _parse_record(line: str) -> str | None:
    """
    Validate a data record and return its upper-cased relationship.

    Returns:
        str | None: "DIRECT" or "RESELLER", or None if the line is malformed.
    """
    parts = [part.strip() for part in line.split(",")]
    if len(parts) not in (3, 4):
        return None

    domain, publisher_id, relationship = parts[:3]
    if "." not in domain or " " in domain or not publisher_id:
        return None

    relationship = relationship.upper()
    if relationship not in _RELATIONSHIPS:
        return None

    if len(parts) == 4 and not parts[3]:
        return None

    return relationship


def _check_variable(number: int, line: str, counts: dict[str, int]) -> CheckResult:
    """
    Accept a known variable declaration or flag an unknown one.

    Returns:
        CheckResult: Empty for known variables, a recommended issue otherwise.
    """
    name, _, value = line.partition("=")
    name = name.strip().lower()

    if name in _VARIABLES and value.strip():
        counts["variables"] += 1
        return CheckResult()

    return issue(
        Severity.RECOMMENDED,
        "unknown-variable",
        f'Unknown or empty variable "{name}" at line {number}',
        f"Supported variables: {', '.join(sorted(_VARIABLES))}",
        line=number,
        content=line,
    )
