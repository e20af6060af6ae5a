"""Routing — compiled route table and request mappers.

A request mapper turns URLs into handlers and handlers into URLs. Mappers
compose: a ``CompoundRequestMapper`` dispatches across several, a
``CryptoMapper`` (``hush.security``) encrypts what it wraps.
"""

from hush.routing.compound import CompoundRequestMapper
from hush.routing.mapper import RouteMapper
from hush.routing.page_info import (
    ComponentInfo,
    PageComponentInfo,
    is_page_component_info,
    parse_page_component_info,
)
from hush.routing.protocol import RequestMapper
from hush.routing.route import Route, RouteMatch
from hush.routing.router import Router

__all__ = [
    "ComponentInfo",
    "CompoundRequestMapper",
    "PageComponentInfo",
    "RequestMapper",
    "Route",
    "RouteMatch",
    "RouteMapper",
    "Router",
    "is_page_component_info",
    "parse_page_component_info",
]
