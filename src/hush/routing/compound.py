"""Compound request mapper — an ordered set of mappers.

Incoming requests go to the mapper with the highest compatibility score
first; outgoing handlers go to each mapper in registration order until
one of them produces a URL.
"""

from __future__ import annotations

from collections.abc import Iterator

from hush._internal.types import RequestHandler
from hush.http.request import Request
from hush.http.url import Url
from hush.routing.protocol import RequestMapper


class CompoundRequestMapper:
    """Dispatch across several request mappers.

    Usage::

        root = CompoundRequestMapper()
        root.add(RouteMapper(router))
        root.add(CryptoMapper(RouteMapper(internal_router), crypt_factory))
        handler = root.map_request(Request.from_path("shop/cart"))

    Mappers are added during setup; lookups never mutate the list.
    """

    __slots__ = ("_mappers",)

    def __init__(self, *mappers: RequestMapper) -> None:
        self._mappers: list[RequestMapper] = list(mappers)

    def add(self, mapper: RequestMapper) -> CompoundRequestMapper:
        """Register *mapper*. Returns ``self`` for chaining."""
        self._mappers.append(mapper)
        return self

    def remove(self, mapper: RequestMapper) -> CompoundRequestMapper:
        """Unregister *mapper*. Raises ``ValueError`` if absent."""
        self._mappers.remove(mapper)
        return self

    def unmount(self, path: str) -> None:
        """Remove every mapper that resolves *path*."""
        request = Request.from_path(path)
        self._mappers = [m for m in self._mappers if m.map_request(request) is None]

    def __len__(self) -> int:
        return len(self._mappers)

    def __iter__(self) -> Iterator[RequestMapper]:
        return iter(self._mappers)

    def _by_score(self, request: Request) -> list[RequestMapper]:
        # sorted() is stable: equal scores keep registration order
        scored = [(mapper.compatibility_score(request), mapper) for mapper in self._mappers]
        return [mapper for _, mapper in sorted(scored, key=lambda pair: -pair[0])]

    def map_request(self, request: Request) -> RequestHandler | None:
        for mapper in self._by_score(request):
            handler = mapper.map_request(request)
            if handler is not None:
                return handler
        return None

    def map_handler(self, handler: RequestHandler) -> Url | None:
        for mapper in self._mappers:
            url = mapper.map_handler(handler)
            if url is not None:
                return url
        return None

    def compatibility_score(self, request: Request) -> int:
        return max((m.compatibility_score(request) for m in self._mappers), default=0)
