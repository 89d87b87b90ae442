# checkers/__init__.py

from .ads import check_ads_txt
from .humans import check_humans_txt
from .llms import check_llms_full_txt, check_llms_txt
from .robots import check_robots
from .security_txt import check_security_txt, parse_expires
from .sitemap import check_sitemap

__all__ = [
    "check_ads_txt",
    "check_humans_txt",
    "check_llms_full_txt",
    "check_llms_txt",
    "check_robots",
    "check_security_txt",
    "check_sitemap",
    "parse_expires",
]
