"""Request mapper protocol.

A request mapper translates in both directions between URLs and request
handlers::

    map_handler(handler) -> Url | None      # build a link
    map_request(request) -> handler | None  # resolve an incoming request

No base class required. Mappers wrap other mappers by composition, so
the crypto mapper, the compound mapper and the route mapper all just
match this shape.
"""

from typing import Protocol, runtime_checkable

from hush._internal.types import RequestHandler
from hush.http.request import Request
from hush.http.url import Url


@runtime_checkable
class RequestMapper(Protocol):
    """Protocol for hush request mappers.

    ``None`` from either direction means "not mine": callers move on to
    the next mapper. ``compatibility_score`` orders mappers inside a
    ``CompoundRequestMapper``; higher scores are tried first.
    """

    def map_handler(self, handler: RequestHandler) -> Url | None: ...

    def map_request(self, request: Request) -> RequestHandler | None: ...

    def compatibility_score(self, request: Request) -> int: ...
