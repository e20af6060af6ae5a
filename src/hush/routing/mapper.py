"""Route mapper — exposes a compiled ``Router`` as a request mapper.

Incoming requests resolve to a ``RouteMatch``; a ``RouteMatch`` renders
back to the ``Url`` that would resolve to it. This is the plain mapper a
``CryptoMapper`` usually wraps::

    router = Router()
    router.add(Route("/wicket/page/{id:int}", show_page))
    router.compile()

    mapper = CryptoMapper(RouteMapper(router), lambda: crypt)
"""

from hush._internal.types import RequestHandler
from hush.errors import HTTPError
from hush.http.request import Request
from hush.http.url import Url
from hush.routing.route import RouteMatch
from hush.routing.router import Router, build_segments, parse_path


class RouteMapper:
    """Request mapper backed by a trie ``Router``."""

    __slots__ = ("_router",)

    def __init__(self, router: Router) -> None:
        self._router = router

    @property
    def router(self) -> Router:
        return self._router

    def map_request(self, request: Request) -> RouteMatch | None:
        """Resolve *request* to a ``RouteMatch``, or ``None`` if unrouted.

        The match carries the request's query parameters so that
        page/component info reaches the handler.
        """
        url = request.url
        if url.is_absolute:
            return None
        try:
            match = self._router.match_segments(request.method, url.segments)
        except HTTPError:
            return None
        return RouteMatch(
            route=match.route,
            path_params=match.path_params,
            query=url.query_parameters,
        )

    def map_handler(self, handler: RequestHandler) -> Url | None:
        """Build the URL for a ``RouteMatch``.

        Returns ``None`` for anything that is not a ``RouteMatch`` of a
        route registered with this router, or when the parameters do not
        fit the route.
        """
        if not isinstance(handler, RouteMatch):
            return None
        if handler.route not in self._router:
            return None
        segments = build_segments(handler.route, handler.path_params)
        if segments is None:
            return None
        return Url(segments, handler.query)

    def compatibility_score(self, request: Request) -> int:
        """Number of static segments of the route *request* resolves to."""
        match = self.map_request(request)
        if match is None:
            return 0
        return sum(1 for seg in parse_path(match.route.path) if not seg.is_param)
