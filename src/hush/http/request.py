"""Immutable mapping request.

Carries the URL a mapper should look at plus the URL the request
arrived with before any mapper in the chain rewrote it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from hush.http.url import Url


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request as seen by a request mapper.

    ``original_url`` defaults to ``url`` and is never changed by
    ``clone_with_url``, so every mapper in a chain can compare what it
    was handed against what the client actually sent. Read it through
    ``original``, which is never ``None``.
    """

    url: Url
    method: str = "GET"
    original_url: Url | None = None

    def __post_init__(self) -> None:
        if self.original_url is None:
            object.__setattr__(self, "original_url", self.url)

    @classmethod
    def from_path(cls, path: str, method: str = "GET") -> Request:
        """Build a request from a context-relative path (``"a/b?x=1"``).

        A leading ``/`` is stripped so that mappers see the same segments
        for ``/a/b`` and ``a/b``.
        """
        return cls(Url.parse(path.lstrip("/")), method=method.upper())

    @property
    def original(self) -> Url:
        """The URL the client sent, before any mapper rewrote it."""
        return self.url if self.original_url is None else self.original_url

    @property
    def path(self) -> str:
        """The current URL's path, with a leading ``/``."""
        return f"/{self.url.path}"

    def clone_with_url(self, url: Url) -> Request:
        """Return a copy of this request pointing at *url*."""
        return replace(self, url=url)
