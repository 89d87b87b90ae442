# resource_locator/test_locate.py

import asyncio
import time
from pathlib import Path

import httpx
import pytest

from web_resource_checker.adapters.resource_locator import (
    FetchError,
    Located,
    NotFound,
    Target,
    locate,
)

from ._helpers import make_client_factory

pytestmark = pytest.mark.unit

_SECURITY_PATHS = (".well-known/security.txt", "security.txt")


async def _locate_remote(handler, paths=_SECURITY_PATHS, base="https://example.com"):
    async with make_client_factory(handler)() as client:
        return await locate(Target.parse(base), paths, client=client, timeout=5.0)


async def test_locate_local_reads_first_existing_path(tmp_path: Path) -> None:
    """
    ARRANGE: only the fallback security.txt exists
    ACT:     locate both candidate paths
    ASSERT:  Located with the fallback path and its bytes
    """
    (tmp_path / "security.txt").write_bytes(b"Contact: mailto:a@b.com\n")

    actual = await locate(
        Target.parse(str(tmp_path)),
        _SECURITY_PATHS,
        client=None,
        timeout=5.0,
    )

    assert actual == Located(
        content=b"Contact: mailto:a@b.com\n",
        source=str(tmp_path.resolve() / "security.txt"),
        path="security.txt",
    )


async def test_locate_local_prefers_well_known_path(tmp_path: Path) -> None:
    """
    ARRANGE: security.txt present at both locations
    ACT:     locate both candidate paths
    ASSERT:  .well-known copy wins
    """
    (tmp_path / ".well-known").mkdir()
    (tmp_path / ".well-known" / "security.txt").write_bytes(b"well-known")
    (tmp_path / "security.txt").write_bytes(b"root")

    actual = await locate(
        Target.parse(str(tmp_path)),
        _SECURITY_PATHS,
        client=None,
        timeout=5.0,
    )

    assert actual.content == b"well-known"


async def test_locate_local_missing_file_is_not_found(tmp_path: Path) -> None:
    """
    ARRANGE: empty directory
    ACT:     locate robots.txt
    ASSERT:  NotFound naming the primary path
    """
    actual = await locate(
        Target.parse(str(tmp_path)),
        ("robots.txt",),
        client=None,
        timeout=5.0,
    )

    assert actual == NotFound(source=str(tmp_path.resolve() / "robots.txt"))


async def test_locate_local_directory_named_like_file_is_not_found(
    tmp_path: Path,
) -> None:
    """
    ARRANGE: a directory called robots.txt
    ACT:     locate robots.txt
    ASSERT:  NotFound
    """
    (tmp_path / "robots.txt").mkdir()

    actual = await locate(
        Target.parse(str(tmp_path)),
        ("robots.txt",),
        client=None,
        timeout=5.0,
    )

    assert isinstance(actual, NotFound)


async def test_locate_remote_prefers_well_known_path() -> None:
    """
    ARRANGE: server answering both security.txt locations
    ACT:     locate security.txt remotely
    ASSERT:  .well-known URL is used
    """

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=request.url.path.encode())

    actual = await _locate_remote(handler)

    assert actual.source == "https://example.com/.well-known/security.txt"


async def test_locate_remote_falls_back_after_404() -> None:
    """
    ARRANGE: .well-known path answers 404, root path answers 200
    ACT:     locate security.txt remotely
    ASSERT:  Located with the root path
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/.well-known/"):
            return httpx.Response(404)
        return httpx.Response(200, content=b"Contact: mailto:a@b.com")

    actual = await _locate_remote(handler)

    assert (actual.path, actual.content) == ("security.txt", b"Contact: mailto:a@b.com")


async def test_locate_remote_all_404_is_not_found() -> None:
    """
    ARRANGE: server answering 404 everywhere
    ACT:     locate security.txt remotely
    ASSERT:  NotFound naming the preferred URL
    """
    actual = await _locate_remote(lambda request: httpx.Response(404))

    assert actual == NotFound(source="https://example.com/.well-known/security.txt")


async def test_locate_remote_server_error_is_not_found() -> None:
    """
    ARRANGE: server answering 500 everywhere
    ACT:     locate robots.txt remotely
    ASSERT:  NotFound, since the server gave a definite non-2xx answer
    """
    actual = await _locate_remote(lambda request: httpx.Response(500), ("robots.txt",))

    assert isinstance(actual, NotFound)


async def test_locate_remote_follows_redirects_to_final_url() -> None:
    """
    ARRANGE: robots.txt redirecting to www host
    ACT:     locate robots.txt remotely
    ASSERT:  source is the final URL after the redirect
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "example.com":
            return httpx.Response(
                301,
                headers={"Location": "https://www.example.com/robots.txt"},
            )
        return httpx.Response(200, content=b"User-agent: *")

    actual = await _locate_remote(handler, ("robots.txt",))

    assert actual.source == "https://www.example.com/robots.txt"


async def test_locate_remote_connection_error_is_fetch_error() -> None:
    """
    ARRANGE: transport raising ConnectError
    ACT:     locate robots.txt remotely
    ASSERT:  FetchError with the error type in its cause
    """

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    actual = await _locate_remote(handler, ("robots.txt",))

    assert actual == FetchError(
        source="https://example.com/robots.txt",
        cause="ConnectError: connection refused",
    )


async def test_locate_remote_error_then_404_is_fetch_error() -> None:
    """
    ARRANGE: first path times out, second answers 404
    ACT:     locate security.txt remotely
    ASSERT:  FetchError, since absence cannot be asserted
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/.well-known/"):
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(404)

    actual = await _locate_remote(handler)

    assert isinstance(actual, FetchError)


async def test_locate_remote_without_client_raises() -> None:
    """
    ARRANGE: remote target and no client
    ACT:     locate
    ASSERT:  ValueError
    """
    with pytest.raises(ValueError):
        await locate(
            Target.parse("https://example.com"),
            ("robots.txt",),
            client=None,
            timeout=5.0,
        )


async def test_locate_remote_slow_body_times_out_as_a_whole() -> None:
    """
    ARRANGE: server trickling robots.txt one byte every 0.1 s
    ACT:     locate with a 0.3 s timeout
    ASSERT:  FetchError well before the body would have completed
    """

    async def trickle():
        for byte in b"User-agent: *":
            await asyncio.sleep(0.1)
            yield bytes([byte])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=trickle())

    started = time.monotonic()
    async with make_client_factory(handler)() as client:
        actual = await locate(
            Target.parse("https://example.com"),
            ("robots.txt",),
            client=client,
            timeout=0.3,
        )

    assert (actual, time.monotonic() - started < 1.0) == (
        FetchError(source="https://example.com/robots.txt", cause="TimeoutError"),
        True,
    )
