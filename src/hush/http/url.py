"""Immutable URL model.

A ``Url`` is an ordered tuple of path segments plus an ordered tuple of
query parameters. Segment order encodes path depth, and parameter order
is kept as received (duplicate names allowed), so both survive a
``parse`` -> ``str`` round trip unchanged.

Parsing follows what a servlet-style request path looks like::

    Url.parse("foo/bar?a=1")   -> segments ("foo", "bar")
    Url.parse("/foo")          -> segments ("", "foo")   # context absolute
    Url.parse("/")             -> segments ("", "")
    Url.parse("")              -> segments ()
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from urllib.parse import quote, quote_plus, unquote, unquote_plus

# RFC 3986 pchar minus the unreserved set (which quote never escapes)
_SEGMENT_SAFE = "!$&'()*+,;=:@"
# Query components escape the pair separators and '+' (decoded as space)
_QUERY_SAFE = "!$'()*,;:@/?"


@dataclass(frozen=True, slots=True)
class QueryParameter:
    """A single ``name=value`` query pair."""

    name: str
    value: str = ""

    def __str__(self) -> str:
        name = quote_plus(self.name, safe=_QUERY_SAFE)
        if not self.value:
            return name
        return f"{name}={quote_plus(self.value, safe=_QUERY_SAFE)}"


@dataclass(frozen=True, slots=True)
class Url:
    """An immutable URL: path segments, query parameters, optional origin.

    Attributes:
        segments: Decoded path segments, in order.
        query_parameters: Decoded query pairs, in order.
        protocol: Scheme for full URLs (``"https"``), else ``None``.
        host: Host for full URLs, else ``None``.
        port: Explicit port, if any.
    """

    segments: tuple[str, ...] = ()
    query_parameters: tuple[QueryParameter, ...] = ()
    protocol: str | None = None
    host: str | None = None
    port: int | None = None

    def __post_init__(self) -> None:
        # Accept any iterable, store tuples
        object.__setattr__(self, "segments", tuple(self.segments))
        object.__setattr__(self, "query_parameters", tuple(self.query_parameters))

    # -- Parsing --

    @classmethod
    def parse(cls, url: str) -> Url:
        """Parse a URL string.

        Accepts full URLs (``https://host:8080/a/b?x=1``), context-absolute
        paths (``/a/b``) and relative paths (``a/b``). A ``#fragment`` is
        dropped. Raises ``ValueError`` on a malformed port.
        """
        url, _, _fragment = url.partition("#")
        path, has_query, query = url.partition("?")

        protocol = host = None
        port: int | None = None
        scheme, sep, rest = path.partition("://")
        if sep and scheme and "/" not in scheme:
            protocol = scheme.lower()
            # Segments of a full URL are relative to the root
            authority, _, path = rest.partition("/")
            host, colon, port_text = authority.rpartition(":")
            if not colon or "]" in port_text:
                host = authority
            elif port_text:
                port = int(port_text)

        segments = tuple(unquote(s) for s in path.split("/")) if path else ()
        params = _parse_query(query) if has_query else ()
        return cls(segments, params, protocol=protocol, host=host, port=port)

    # -- Rendering --

    def __str__(self) -> str:
        path = self.path
        if self.is_absolute:
            origin = f"{self.protocol}://{self.host}"
            if self.port is not None:
                origin = f"{origin}:{self.port}"
            path = f"{origin}/{path}" if path else origin
        if self.query_parameters:
            query = "&".join(str(p) for p in self.query_parameters)
            return f"{path}?{query}"
        return path

    @property
    def path(self) -> str:
        """The rendered path without query string."""
        return "/".join(quote(s, safe=_SEGMENT_SAFE) for s in self.segments)

    # -- Computed properties --

    @property
    def is_absolute(self) -> bool:
        """True if the URL carries a scheme and host (cross-origin capable)."""
        return self.protocol is not None and self.host is not None

    @property
    def is_context_absolute(self) -> bool:
        """True if the path starts with ``/``."""
        return not self.is_absolute and bool(self.segments) and self.segments[0] == ""

    # -- Query helpers --

    def query_parameter(self, name: str) -> QueryParameter | None:
        """Return the first parameter named *name*, or ``None``."""
        for param in self.query_parameters:
            if param.name == name:
                return param
        return None

    def query_value(self, name: str, default: str | None = None) -> str | None:
        """Return the value of the first parameter named *name*."""
        param = self.query_parameter(name)
        return default if param is None else param.value

    # -- Derived copies --

    def with_segments(self, segments: Iterable[str]) -> Url:
        return replace(self, segments=tuple(segments))

    def with_query_parameters(self, params: Iterable[QueryParameter]) -> Url:
        return replace(self, query_parameters=tuple(params))

    def with_query_parameter(self, name: str, value: str = "") -> Url:
        """Return a copy where *name* has exactly one value, appended last."""
        kept = [p for p in self.query_parameters if p.name != name]
        kept.append(QueryParameter(name, value))
        return self.with_query_parameters(kept)

    def without_query_parameter(self, name: str) -> Url:
        return self.with_query_parameters(p for p in self.query_parameters if p.name != name)

    def resolve(self, relative: str | Url) -> Url:
        """Resolve *relative* against this URL the way a user agent does.

        ``Url.parse("a/b/c").resolve("../d?x=1")`` -> ``a/d?x=1``.

        The last segment of this URL is the "file" and is dropped first.
        A trailing ``.`` or ``..`` produces a directory (trailing empty
        segment). ``..`` never climbs above a context-absolute root; on a
        relative base with nothing left to drop it is kept literally.
        """
        if isinstance(relative, str):
            relative = Url.parse(relative)
        if relative.is_absolute or relative.is_context_absolute:
            if relative.is_absolute or not self.is_absolute:
                return relative
            return replace(
                relative,
                segments=relative.segments[1:],
                protocol=self.protocol,
                host=self.host,
                port=self.port,
            )
        if not relative.segments:
            return self.with_query_parameters(relative.query_parameters)

        result = list(self.segments[:-1])
        directory = False
        for segment in relative.segments:
            if segment == ".":
                directory = True
            elif segment == "..":
                directory = True
                if result == [""]:
                    continue
                if result and result[-1] != "..":
                    result.pop()
                else:
                    result.append("..")
            else:
                directory = False
                result.append(segment)
        if directory and result and (result[-1] != "" or len(result) == 1):
            result.append("")
        return replace(self, segments=tuple(result), query_parameters=relative.query_parameters)


def _parse_query(query: str) -> tuple[QueryParameter, ...]:
    params: list[QueryParameter] = []
    for pair in query.split("&"):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        params.append(QueryParameter(unquote_plus(name), unquote_plus(value)))
    return tuple(params)
