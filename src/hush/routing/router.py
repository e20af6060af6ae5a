"""Route table for request mappers.

Routes are added during setup and frozen with ``compile()``. Lookup runs
on decoded path segments, the form a ``Url`` holds, so a percent-encoded
``/`` inside a segment never splits it. ``build_segments`` goes the other
way and renders a route with its parameters back to segments.

Route paths use ``{name}`` or ``{name:type}`` parameters::

    /shop/cart
    /wicket/page/{id:int}
    /static/{file:path}      # must be last; spans several segments
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import NoReturn, TypeAlias

from hush.errors import ConfigurationError, MethodNotAllowed, NotFound
from hush.routing.route import PathSegment, Route, RouteMatch

# Segment regex per converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

_PARAM = re.compile(r"\{(?P<name>[^{}:]+)(?::(?P<type>[^{}]+))?\}")
_FLASK_PARAM = re.compile(r"<[^>]*>")


def parse_path(path: str) -> list[PathSegment]:
    """Split a route path into static and parameter segments.

    ``"/wicket/page/{id:int}"`` gives ``wicket``, ``page`` and an ``int``
    parameter named ``id``. Raises ``ConfigurationError`` for ``<param>``
    segments, unknown converters and a ``path`` parameter that is not last.
    """
    if _FLASK_PARAM.search(path):
        msg = (
            f"Route path {path!r} uses <param> syntax. "
            "Hush route parameters are written {param} or {param:type}."
        )
        raise ConfigurationError(msg)

    parts = [part for part in path.split("/") if part]
    segments: list[PathSegment] = []
    for index, part in enumerate(parts):
        param = _PARAM.fullmatch(part)
        if param is None:
            segments.append(PathSegment(value=part))
            continue

        kind = param["type"] or "str"
        if kind not in CONVERTERS:
            msg = f"Unknown converter {kind!r} in route path {path!r}."
            raise ConfigurationError(msg)
        if kind == "path" and index != len(parts) - 1:
            msg = f"Route path {path!r}: a path parameter must be the last segment."
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(value=part, is_param=True, param_name=param["name"], param_type=kind)
        )
    return segments


def build_segments(route: Route, params: Mapping[str, object]) -> list[str] | None:
    """Render *route*'s path with *params*, as decoded segments.

    Returns ``None`` if a parameter is missing or does not match its
    converter. ``path`` parameters may span several segments.
    """
    segments: list[str] = []
    for seg in parse_path(route.path):
        if not seg.is_param:
            segments.append(seg.value)
            continue
        value = params.get(seg.param_name or "")
        if value is None:
            return None
        text = str(value)
        if not re.fullmatch(CONVERTERS[seg.param_type], text):
            return None
        if seg.param_type == "path":
            segments.extend(text.split("/"))
        else:
            segments.append(text)
    return segments


_Methods: TypeAlias = dict[str, Route]


@dataclass(slots=True)
class _Node:
    """One trie level: static children, at most one parameter, a tail."""

    static: dict[str, "_Node"] = field(default_factory=dict)
    param: "_Param | None" = None
    tail: "_Tail | None" = None
    methods: _Methods = field(default_factory=dict)


@dataclass(slots=True)
class _Param:
    name: str
    kind: str
    pattern: re.Pattern[str]
    node: _Node = field(default_factory=_Node)


@dataclass(slots=True)
class _Tail:
    """A ``{name:path}`` parameter: takes every remaining segment."""

    name: str
    methods: _Methods = field(default_factory=dict)


def _lookup(node: _Node, parts: list[str], index: int) -> tuple[_Methods, dict[str, str]] | None:
    if index == len(parts):
        return (node.methods, {}) if node.methods else None

    part = parts[index]
    child = node.static.get(part)
    if child is not None:
        found = _lookup(child, parts, index + 1)
        if found is not None:
            return found

    # static beats parameter beats tail
    param = node.param
    if param is not None and param.pattern.fullmatch(part):
        found = _lookup(param.node, parts, index + 1)
        if found is not None:
            found[1][param.name] = part
            return found

    if node.tail is not None:
        return node.tail.methods, {node.tail.name: "/".join(parts[index:])}
    return None


class Router:
    """Segment-trie route table.

    Usage::

        router = Router()
        router.add(Route("/wicket/page/{id:int}", show_page))
        router.compile()
        match = router.match_segments("GET", ("wicket", "page", "3"))
    """

    __slots__ = ("_compiled", "_ids", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _Node()
        self._routes: list[Route] = []
        self._ids: set[int] = set()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Register *route*. Must be called before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        target = node.methods
        for seg in parse_path(route.path):
            name = seg.param_name or ""
            if not seg.is_param:
                node = node.static.setdefault(seg.value, _Node())
                target = node.methods
            elif seg.param_type == "path":
                if node.tail is None:
                    node.tail = _Tail(name)
                elif node.tail.name != name:
                    self._conflict(route, node.tail.name)
                target = node.tail.methods
            else:
                if node.param is None:
                    pattern = re.compile(CONVERTERS[seg.param_type])
                    node.param = _Param(name, seg.param_type, pattern)
                elif (node.param.name, node.param.kind) != (name, seg.param_type):
                    self._conflict(route, node.param.name)
                node = node.param.node
                target = node.methods

        for method in route.methods:
            target[method] = route
        if id(route) not in self._ids:
            self._ids.add(id(route))
            self._routes.append(route)

    @staticmethod
    def _conflict(route: Route, existing: str) -> NoReturn:
        msg = (
            f"Route path {route.path!r} declares a parameter where another route "
            f"already declares {{{existing}}} with a different name or type."
        )
        raise ConfigurationError(msg)

    def __contains__(self, route: object) -> bool:
        """True if this very ``Route`` object was added (identity, not equality)."""
        return id(route) in self._ids

    @property
    def routes(self) -> list[Route]:
        """Registered routes, in the order they were added."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match_segments(self, method: str, segments: Sequence[str]) -> RouteMatch:
        """Resolve decoded path *segments* for *method*.

        Empty segments are ignored, so ``("", "shop", "")`` matches
        ``/shop``. Raises ``NotFound`` when no route has this path and
        ``MethodNotAllowed`` when routes exist but none for *method*.
        """
        parts = [p for p in segments if p]
        found = _lookup(self._root, parts, 0)
        if found is None:
            path = "/" + "/".join(parts)
            raise NotFound(f"No route matches {method} {path!r}")

        methods, params = found
        route = methods.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(methods))
        return RouteMatch(route=route, path_params=params)
