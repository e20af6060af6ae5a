"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass, field

from hush._internal.types import Handler
from hush.http.url import QueryParameter


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Registered with a ``Router`` during setup. A ``RouteMapper`` only
    builds URLs for the exact ``Route`` objects its router holds.
    """

    path: str
    handler: Handler
    methods: frozenset[str] = frozenset({"GET"})


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """A route resolved together with its parameters.

    Returned by ``RouteMapper.map_request`` and accepted by
    ``RouteMapper.map_handler`` to build the matching URL.
    """

    route: Route
    path_params: dict[str, str] = field(default_factory=dict)
    query: tuple[QueryParameter, ...] = ()
