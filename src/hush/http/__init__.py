"""URL and request value types."""

from hush.http.request import Request
from hush.http.url import QueryParameter, Url

__all__ = ["QueryParameter", "Request", "Url"]
