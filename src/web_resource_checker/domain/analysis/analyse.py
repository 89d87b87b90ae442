# analysis/analyse.py

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx

from web_resource_checker.adapters._utils import make_client
from web_resource_checker.adapters.resource_locator import (
    FetchError,
    Located,
    LocateResult,
    NotFound,
    Target,
    locate,
)
from web_resource_checker.exceptions import TargetUnreachableError
from web_resource_checker.schemas import AnalysisReport, FileReport

from .models import CheckContext, CheckerSettings, CheckOptions, default_settings
from .report import (
    build_analysis_report,
    build_check_error_report,
    build_fetch_error_report,
    build_file_report,
    build_not_found_report,
)
from .resources import WellKnownResource, select_resources, validate_keys

logger = logging.getLogger(__name__)

_WELL_KNOWN_PREFIX = ".well-known/"


async def analyse_web_resources(
    target: str | Target,
    options: CheckOptions | None = None,
    *,
    settings: CheckerSettings | None = None,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
    now: datetime | None = None,
) -> AnalysisReport:
    """
    Check the well-known files of a site or directory and report findings.

    Each selected file is located and checked in its own task. A failure in
    one file is recorded in that file's report and never aborts the others;
    cancelling the run cancels every in-flight task.

    Args:
        target: Local directory path or http(s) base URL.
        options: File filter and per-file timeout (defaults to all files).
        settings: Rule thresholds (defaults to standard settings).
        client_factory: Factory for the HTTP client; defaults to make_client.
        now: Reference time for date rules; defaults to the current time.

    Returns:
        AnalysisReport: Per-file reports with a rolled-up summary.

    Raises:
        ValueError: If options name an unknown file key.
        TargetUnreachableError: If the target as a whole cannot be read.
    """
    resolved = target if isinstance(target, Target) else Target.parse(target)
    active_options = options or CheckOptions()
    validate_keys(active_options.only)

    if not resolved.is_remote and not resolved.root.is_dir():
        raise TargetUnreachableError(resolved.value, "not a directory")

    resources = select_resources(active_options.only)
    active_settings = settings or default_settings()
    reference_time = now or datetime.now(UTC)
    logger.info(
        "Checking %d well-known file(s) on %s",
        len(resources),
        resolved.value,
    )

    async with _open_client(resolved, client_factory) as client:
        outcomes = await asyncio.gather(
            *(
                _check_resource(
                    resource,
                    resolved,
                    client=client,
                    timeout=active_options.timeout,
                    settings=active_settings,
                    now=reference_time,
                )
                for resource in resources
            ),
        )

    _raise_if_unreachable(resolved, [located for _, located in outcomes])

    report = build_analysis_report(
        resolved.value,
        {report.file: report for report, _ in outcomes},
    )

    logger.info(
        "Web resource analysis complete: %d/%d found, %d valid, %d critical issue(s)",
        report.summary.found,
        report.summary.total_files,
        report.summary.valid,
        report.summary.issues.critical,
    )

    return report


def check_web_resources(
    target: str | Target,
    options: CheckOptions | None = None,
    **kwargs: object,
) -> AnalysisReport:
    """
    Synchronous wrapper around analyse_web_resources.

    Returns:
        AnalysisReport: The completed analysis report.
    """
    return asyncio.run(analyse_web_resources(target, options, **kwargs))


async def _check_resource(
    resource: WellKnownResource,
    target: Target,
    *,
    client: httpx.AsyncClient | None,
    timeout: float,
    settings: CheckerSettings,
    now: datetime,
) -> tuple[FileReport, LocateResult]:
    """
    Locate and check one file, converting any failure into its report.

    Returns:
        tuple[FileReport, LocateResult]: The file report and how the file
            was located.
    """
    try:
        located = await locate(target, resource.paths, client=client, timeout=timeout)
    except Exception as error:
        logger.error("Locating %s failed: %s", resource.file_name, error, exc_info=True)
        located = FetchError(
            source=_primary_source(target, resource),
            cause=str(error) or type(error).__name__,
        )

    if isinstance(located, NotFound):
        logger.debug("%s not found at %s", resource.file_name, located.source)
        return build_not_found_report(resource, located.source), located

    if isinstance(located, FetchError):
        return build_fetch_error_report(resource, located.source, located.cause), located

    return _run_checker(resource, located, target, settings, now), located


def _run_checker(
    resource: WellKnownResource,
    located: Located,
    target: Target,
    settings: CheckerSettings,
    now: datetime,
) -> FileReport:
    """
    Apply the resource's checker to located content.

    Returns:
        FileReport: The checked report, or a check-error report if the
            checker raised.
    """
    context = CheckContext(
        source=located.source,
        is_remote=target.is_remote,
        origin=target.origin,
        well_known=located.path.startswith(_WELL_KNOWN_PREFIX),
        now=now,
    )

    try:
        result = resource.checker(located.content, context, settings)
    except Exception as error:
        logger.error(
            "Checking %s failed: %s",
            resource.file_name,
            error,
            exc_info=True,
        )
        return build_check_error_report(resource, located.source, error)

    return build_file_report(resource, located.source, result)


@asynccontextmanager
async def _open_client(
    target: Target,
    client_factory: Callable[[], httpx.AsyncClient] | None,
) -> AsyncIterator[httpx.AsyncClient | None]:
    """
    Open one HTTP client for a remote run; local runs need none.

    Yields:
        httpx.AsyncClient | None: The client, or None for local targets.
    """
    if not target.is_remote:
        yield None
        return

    factory = client_factory or make_client
    async with factory() as client:
        yield client


def _raise_if_unreachable(target: Target, outcomes: list[LocateResult]) -> None:
    """
    Escalate a run where every file failed to fetch for the same reason.

    That pattern means the target itself is down (DNS failure, refused
    connection, ...), which is an operational failure rather than a set of
    non-compliant files.

    Raises:
        TargetUnreachableError: If all outcomes are FetchErrors sharing one
            cause.
    """
    if not outcomes or not all(isinstance(o, FetchError) for o in outcomes):
        return

    causes = {outcome.cause for outcome in outcomes}
    if len(causes) == 1:
        raise TargetUnreachableError(target.value, causes.pop())


def _primary_source(target: Target, resource: WellKnownResource) -> str:
    if target.is_remote:
        return target.url_for(resource.paths[0])
    return str(target.root / resource.paths[0])
