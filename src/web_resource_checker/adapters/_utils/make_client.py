# _utils/make_client.py

import httpx

from ..resource_locator.config import ResourceCheckerConfig, default_timeout_seconds

_config = ResourceCheckerConfig()


def make_client(**overrides: object) -> httpx.AsyncClient:
    """
    Create the shared async HTTP client used to fetch well-known files.

    Redirects are followed transparently, so a redirected response that ends
    in a 2xx status counts as a successful fetch. Keyword overrides are passed
    straight to httpx.AsyncClient.

    Returns:
        httpx.AsyncClient: Configured client; the caller owns its lifecycle.
    """
    options: dict[str, object] = {
        "headers": {"User-Agent": _config.user_agent},
        "follow_redirects": True,
        "timeout": httpx.Timeout(default_timeout_seconds()),
    }
    options.update(overrides)
    return httpx.AsyncClient(**options)
