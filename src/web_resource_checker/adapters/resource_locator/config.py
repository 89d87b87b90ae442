# resource_locator/config.py

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_TIMEOUT_ENV_VAR = "WEB_RESOURCE_TIMEOUT_SECONDS"


@dataclass(frozen=True, slots=True)
class ResourceCheckerConfig:
    """
    Immutable configuration for retrieving well-known files.

    Centralises the request identity and timing defaults so the locator and
    the HTTP client factory agree on them.

    Returns:
        ResourceCheckerConfig: Immutable configuration object.
    """

    # sent with every remote request
    user_agent: str = "WebResourceChecker/1.0"

    # per-file read/fetch timeout when neither caller nor environment sets one
    default_timeout: float = 10.0


def default_timeout_seconds() -> float:
    """
    Return the per-file timeout, honouring WEB_RESOURCE_TIMEOUT_SECONDS.

    Missing, unparsable or non-positive values fall back to the configured
    default.

    Returns:
        float: Timeout in seconds.
    """
    fallback = ResourceCheckerConfig().default_timeout
    raw = os.getenv(_TIMEOUT_ENV_VAR)
    if raw is None:
        return fallback

    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", _TIMEOUT_ENV_VAR, raw)
        return fallback

    return value if value > 0 else fallback
