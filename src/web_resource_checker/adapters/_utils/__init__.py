# _utils/__init__.py

from .make_client import make_client

__all__ = ["make_client"]
