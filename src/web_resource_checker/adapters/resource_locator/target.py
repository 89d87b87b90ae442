# resource_locator/target.py

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urljoin, urlsplit


@dataclass(frozen=True, slots=True)
class Target:
    """
    The site or directory whose well-known files are checked.

    A target is remote when its value is an http(s) URL and local otherwise.
    It is immutable for the duration of a run.
    """

    value: str
    is_remote: bool

    @classmethod
    def parse(cls, value: str) -> "Target":
        """
        Build a Target from a path or URL string.

        Returns:
            Target: Remote for http:// and https:// values, local otherwise.
        """
        stripped = value.strip()
        is_remote = stripped.lower().startswith(("http://", "https://"))
        return cls(value=stripped, is_remote=is_remote)

    @property
    def origin(self) -> str | None:
        """
        The scheme://host[:port] origin of a remote target, None for local ones.
        """
        if not self.is_remote:
            return None
        parts = urlsplit(self.value)
        return f"{parts.scheme.lower()}://{parts.netloc.lower()}"

    @property
    def root(self) -> Path:
        """
        Resolved directory of a local target.
        """
        return Path(self.value).expanduser().resolve()

    def url_for(self, relative_path: str) -> str:
        """
        Resolve a well-known relative path under the base URL.

        Query strings and fragments on the base URL are dropped.

        Returns:
            str: Absolute URL of the file.
        """
        parts = urlsplit(self.value)
        path = parts.path if parts.path.endswith("/") else f"{parts.path}/"
        return urljoin(f"{self.origin}{path}", relative_path)
