# resource_locator/locate.py

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from .target import Target

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Located:
    """
    A well-known file that was found.

    Attributes:
        content: Raw bytes of the file.
        source: Local path or final URL (after redirects) the bytes came from.
        path: The relative path that matched, e.g. ".well-known/security.txt".
    """

    content: bytes
    source: str
    path: str


@dataclass(frozen=True, slots=True)
class NotFound:
    """
    Every candidate path answered authoritatively that the file is absent.
    """

    source: str


@dataclass(frozen=True, slots=True)
class FetchError:
    """
    At least one candidate path could not be read or fetched, so absence
    cannot be asserted.
    """

    source: str
    cause: str


LocateResult = Located | NotFound | FetchError


async def locate(
    target: Target,
    paths: tuple[str, ...],
    *,
    client: httpx.AsyncClient | None,
    timeout: float,
) -> LocateResult:
    """
    Obtain the bytes of a well-known file from a local directory or a site.

    Candidate paths are tried in order and the first hit wins, so callers put
    the preferred location first. No retries are made.

    Args:
        target: Local directory or remote base URL.
        paths: Candidate relative paths, preferred first.
        client: HTTP client for remote targets; ignored for local ones.
        timeout: Per-attempt timeout in seconds, covering the whole request
            including a slowly delivered body.

    Returns:
        LocateResult: Located on success, NotFound when every path is absent,
            FetchError when any path failed without an answer.
    """
    if target.is_remote:
        if client is None:
            raise ValueError("A remote target requires an HTTP client")
        return await _locate_remote(target, paths, client=client, timeout=timeout)

    return await _locate_local(target.root, paths, timeout=timeout)


async def _locate_remote(
    target: Target,
    paths: tuple[str, ...],
    *,
    client: httpx.AsyncClient,
    timeout: float,
) -> LocateResult:
    """
    Fetch the first candidate URL that answers with a 2xx status.

    Returns:
        LocateResult: Located, NotFound or FetchError.
    """
    failure: FetchError | None = None

    for path in paths:
        url = target.url_for(path)
        logger.debug("Fetching %s", url)

        # httpx timeouts bound each phase; wait_for bounds the whole request
        try:
            response = await asyncio.wait_for(
                client.get(url, timeout=timeout),
                timeout=timeout,
            )
        except (httpx.HTTPError, TimeoutError) as error:
            logger.warning("Fetch of %s failed: %s", url, _describe(error))
            failure = failure or FetchError(source=url, cause=_describe(error))
            continue

        if response.is_success:
            return Located(
                content=response.content,
                source=str(response.url),
                path=path,
            )

        logger.debug("%s answered HTTP %d", url, response.status_code)

    return failure or NotFound(source=target.url_for(paths[0]))


async def _locate_local(
    root: Path,
    paths: tuple[str, ...],
    *,
    timeout: float,
) -> LocateResult:
    """
    Read the first candidate path that exists as a regular file under root.

    Returns:
        LocateResult: Located, NotFound or FetchError.
    """
    for path in paths:
        candidate = root / path
        logger.debug("Reading %s", candidate)

        if not candidate.is_file():
            continue

        try:
            content = await asyncio.wait_for(
                asyncio.to_thread(candidate.read_bytes),
                timeout=timeout,
            )
        except (OSError, TimeoutError) as error:
            logger.warning("Read of %s failed: %s", candidate, _describe(error))
            return FetchError(source=str(candidate), cause=_describe(error))

        return Located(content=content, source=str(candidate), path=path)

    return NotFound(source=str(root / paths[0]))


def _describe(error: Exception) -> str:
    """
    Render an exception as a short, stable cause string.

    Some httpx and asyncio errors carry an empty message, so the exception
    type is always included.

    Returns:
        str: "TypeName: message" or just "TypeName".
    """
    message = str(error).strip()
    name = type(error).__name__
    return f"{name}: {message}" if message else name
