# checkers/security_txt.py

import math
import re
from collections import defaultdict
from datetime import UTC, datetime
from urllib.parse import urlsplit

from web_resource_checker.schemas import Severity

from ..findings import issue, passed
from ..models import CheckContext, CheckerSettings, CheckResult
from ._helpers import decode_text, empty_file, split_directive

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_CONTACT_SCHEMES = ("mailto:", "https://", "tel:")

# informational fields reported as passed checks when present
_INFORMATIONAL_FIELDS = (
    "encryption",
    "policy",
    "preferred-languages",
    "acknowledgments",
    "hiring",
)

_SIGNED_MESSAGE = "-----BEGIN PGP SIGNED MESSAGE-----"
_SIGNATURE_START = "-----BEGIN PGP SIGNATURE-----"
_SIGNATURE_END = "-----END PGP SIGNATURE-----"

Fields = dict[str, list[tuple[int, str]]]


def check_security_txt(
    content: bytes,
    context: CheckContext,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Validate security.txt against RFC 9116.

    Field names are case-insensitive. Unknown fields are ignored because the
    RFC allows extension fields. OpenPGP cleartext signatures are tolerated.

    Args:
        content: Raw security.txt bytes.
        context: Where the content came from; used for the transport and
            .well-known location rules and as the reference time.
        settings: Rule thresholds.

    Returns:
        CheckResult: Issues, passed checks and the list of fields present.
    """
    text = decode_text(content)
    if not text.strip():
        return empty_file(
            Severity.CRITICAL,
            "security.txt",
            "Add Contact and Expires fields per RFC 9116",
        )

    fields, syntax = _parse(text)

    return (
        syntax
        + check_contact(fields.get("contact", []))
        + check_expires(fields.get("expires", []), context.now, settings)
        + check_canonical(fields.get("canonical", []))
        + check_location(context)
        + check_informational_fields(fields)
        + CheckResult(fields=tuple(sorted(fields)))
    )


def _parse(text: str) -> tuple[Fields, CheckResult]:
    """
    Collect "Field: value" lines by lower-cased field name.

    Returns:
        tuple[Fields, CheckResult]: Values with their line numbers, and any
            syntax findings.
    """
    fields: Fields = defaultdict(list)
    findings = CheckResult()
    in_armor_headers = False
    in_signature = False

    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()

        if line == _SIGNED_MESSAGE:
            in_armor_headers = True
            continue
        if in_armor_headers:
            # armor headers (Hash: ...) end at the first blank line
            in_armor_headers = bool(line)
            continue
        if line == _SIGNATURE_START:
            in_signature = True
            continue
        if in_signature:
            in_signature = line != _SIGNATURE_END
            continue

        # dash-escaped lines in signed messages
        line = line.removeprefix("- ")

        if not line or line.startswith("#"):
            continue

        split = split_directive(line)
        if split is None:
            findings += issue(
                Severity.IMPORTANT,
                "syntax-error",
                f"Invalid syntax at line {number}: missing colon",
                "Use format: Field: value",
                line=number,
                content=line,
            )
            continue

        name, value = split
        fields[name].append((number, value))

    return dict(fields), findings


def check_contact(contacts: list[tuple[int, str]]) -> CheckResult:
    """
    Require at least one Contact and check each is a usable URI.

    Returns:
        CheckResult: Findings about Contact fields.
    """
    if not contacts:
        return issue(
            Severity.CRITICAL,
            "missing-contact",
            "Missing required Contact field",
            "Add Contact: mailto:security@example.com or "
            "Contact: https://example.com/security",
        )

    result = passed("contact", f"{len(contacts)} Contact field(s) found")

    for number, value in contacts:
        lowered = value.lower()

        if not lowered.startswith(_CONTACT_SCHEMES):
            result += issue(
                Severity.IMPORTANT,
                "invalid-contact-format",
                f"Contact at line {number} should start with mailto:, https://, or tel:",
                "Use format: Contact: mailto:security@example.com",
                line=number,
                value=value,
            )
            continue

        if lowered.startswith("mailto:"):
            email = value[len("mailto:") :]
            if not _EMAIL_PATTERN.match(email):
                result += issue(
                    Severity.IMPORTANT,
                    "invalid-email",
                    f"Invalid email format in Contact at line {number}",
                    "Use valid email: mailto:security@example.com",
                    line=number,
                    email=email,
                )

    return result


def check_expires(
    expires: list[tuple[int, str]],
    now: datetime,
    settings: CheckerSettings,
) -> CheckResult:
    """
    Require a single, parsable, current Expires field.

    An Expires in the past invalidates the whole file; one close to expiry
    or unreasonably far in the future is flagged with lower severity.

    Returns:
        CheckResult: Findings about the Expires field.
    """
    if not expires:
        return issue(
            Severity.CRITICAL,
            "missing-expires",
            "Missing required Expires field",
            "Add Expires: 2026-12-31T23:59:59.000Z",
        )

    result = CheckResult()
    if len(expires) > 1:
        result += issue(
            Severity.IMPORTANT,
            "multiple-expires",
            "Multiple Expires fields found (only one allowed)",
            "Keep only one Expires field",
            count=len(expires),
        )

    number, value = expires[0]
    expiry = parse_expires(value)

    if expiry is None:
        return result + issue(
            Severity.CRITICAL,
            "invalid-expires",
            "Expires field is not a valid ISO 8601 date-time",
            "Use format: YYYY-MM-DDTHH:MM:SS.sssZ (e.g. 2026-12-31T23:59:59.000Z)",
            line=number,
            value=value,
        )

    days = math.ceil((expiry - _as_utc(now)).total_seconds() / 86_400)

    if expiry <= _as_utc(now):
        return result + issue(
            Severity.CRITICAL,
            "expired",
            f"Expires date {value} is in the past: the file has expired and "
            "crawlers and researchers should disregard it",
            "Update Expires to a future date and keep it refreshed",
            line=number,
            expires=value,
            days_until_expiry=days,
        )

    if days <= settings.expiry_warning_days:
        return result + issue(
            Severity.IMPORTANT,
            "expires-soon",
            f"security.txt expires in {days} day(s)",
            "Move Expires forward before it lapses",
            line=number,
            expires=value,
            days_until_expiry=days,
        )

    if days > settings.max_validity_days:
        return result + issue(
            Severity.RECOMMENDED,
            "expires-too-far",
            "Expires date is more than 1 year in the future",
            "RFC 9116 recommends an Expires less than a year ahead",
            line=number,
            expires=value,
            days_until_expiry=days,
        )

    return result + passed(
        "expires-valid",
        f"Expires: {value}",
        line=number,
        days_until_expiry=days,
    )


def parse_expires(value: str) -> datetime | None:
    """
    Parse an Expires value as an ISO 8601 date-time.

    Naive values are taken as UTC.

    Returns:
        datetime | None: Timezone-aware datetime, or None if unparsable.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return _as_utc(parsed)


def check_canonical(canonicals: list[tuple[int, str]]) -> CheckResult:
    """
    Recommend a Canonical field naming the file's authoritative URL.

    Returns:
        CheckResult: A recommended issue when absent, a passed check otherwise.
    """
    if not canonicals:
        return issue(
            Severity.RECOMMENDED,
            "missing-canonical",
            "Missing Canonical field",
            "Add Canonical: https://example.com/.well-known/security.txt",
        )
    return passed("canonical", canonicals[0][1])


def check_location(context: CheckContext) -> CheckResult:
    """
    Check where the file was served from.

    RFC 9116 requires HTTPS and the /.well-known/ path; the root path is
    only a legacy fallback. Transport can only be judged for remote targets.

    Returns:
        CheckResult: Findings about transport and location.
    """
    result = CheckResult()

    if context.is_remote:
        if urlsplit(context.source).scheme.lower() == "https":
            result += passed("https", "Served over HTTPS", urls=(context.source,))
        else:
            result += issue(
                Severity.RECOMMENDED,
                "insecure-transport",
                "security.txt is served over plain HTTP",
                "Serve security.txt over HTTPS",
                url=context.source,
            )

    if context.well_known:
        return result + passed("well-known-path", ".well-known/security.txt")

    return result + issue(
        Severity.RECOMMENDED,
        "not-well-known-path",
        "security.txt found only at the site root",
        "Move the file to /.well-known/security.txt (the root path is legacy)",
    )


def check_informational_fields(fields: Fields) -> CheckResult:
    """
    Record optional fields that are present.

    Returns:
        CheckResult: One passed check per informational field found.
    """
    result = CheckResult()
    for name in _INFORMATIONAL_FIELDS:
        values = fields.get(name)
        if values:
            result += passed(
                name,
                values[0][1],
                count=len(values),
                line=values[0][0],
            )
    return result


def _as_utc(value: datetime) -> datetime:
    """
    Coerce a datetime to UTC-aware, treating naive values as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
