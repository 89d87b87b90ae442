# web_resource_checker/cli.py

import argparse
import logging
import sys
from collections.abc import Sequence

from .adapters.resource_locator import default_timeout_seconds
from .domain import (
    CheckOptions,
    check_web_resources,
    exit_code,
    parse_only,
    render_json,
    render_text,
)
from .exceptions import TargetUnreachableError

logger = logging.getLogger(__name__)

EXIT_OPERATIONAL_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for the web-resource-checker command.

    Returns:
        argparse.ArgumentParser: Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="web-resource-checker",
        description="Validate sitemap.xml, robots.txt, llms.txt, llms-full.txt, "
        "security.txt, humans.txt and ads.txt of a site or directory.",
    )
    parser.add_argument("target", help="URL or local directory path to check")
    parser.add_argument(
        "--only",
        type=_only_argument,
        default=None,
        help="comma-separated subset of: sitemap, robots, llms, llms-full, "
        "security, humans, ads",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print the report as JSON",
    )
    parser.add_argument(
        "--timeout",
        type=_timeout_argument,
        default=None,
        help="per-file timeout in seconds (default: $WEB_RESOURCE_TIMEOUT_SECONDS or 10)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log every path tried",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the checker from the command line.

    Returns:
        int: 0 when no critical issue was found, 1 when at least one was,
            2 when the target could not be reached at all.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)-8s %(message)s",
        stream=sys.stderr,
    )

    options = CheckOptions(
        only=args.only,
        timeout=args.timeout if args.timeout else default_timeout_seconds(),
    )

    try:
        report = check_web_resources(args.target, options)
    except TargetUnreachableError as error:
        logger.error("%s", error)
        return EXIT_OPERATIONAL_FAILURE

    print(render_json(report) if args.json else render_text(report))
    return exit_code(report)


def _timeout_argument(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}") from error

    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive, got {value}")
    return seconds


def _only_argument(value: str) -> frozenset[str] | None:
    try:
        return parse_only(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from error


if __name__ == "__main__":
    sys.exit(main())
