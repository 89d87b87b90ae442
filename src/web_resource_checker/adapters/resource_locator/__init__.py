# resource_locator/__init__.py

from .config import ResourceCheckerConfig, default_timeout_seconds
from .locate import FetchError, Located, LocateResult, NotFound, locate
from .target import Target

__all__ = [
    "FetchError",
    "Located",
    "LocateResult",
    "NotFound",
    "ResourceCheckerConfig",
    "Target",
    "default_timeout_seconds",
    "locate",
]
