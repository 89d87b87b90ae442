# adapters/__init__.py

from .resource_locator import (
    FetchError,
    Located,
    LocateResult,
    NotFound,
    Target,
    locate,
)

__all__ = [
    "FetchError",
    "Located",
    "LocateResult",
    "NotFound",
    "Target",
    "locate",
]
