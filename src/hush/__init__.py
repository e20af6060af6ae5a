"""Hush — encrypted URLs for request mappers.

Wraps a request mapper so the URLs it generates cannot be read or
tampered with, while relative links inside the page keep working.

Basic usage::

    from hush import AESGCMCrypt, CryptoMapper, Route, RouteMapper, Router

    router = Router()
    router.add(Route("/wicket/page/{id:int}", show_page))
    router.compile()

    key = AESGCMCrypt.generate_key()
    mapper = CryptoMapper(RouteMapper(router), lambda: AESGCMCrypt(key))
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "AESGCMCrypt",
    "CompoundRequestMapper",
    "ConfigurationError",
    "CryptoConfig",
    "CryptoMapper",
    "DecryptionError",
    "ExpiredLink",
    "HTTPError",
    "HushError",
    "MethodNotAllowed",
    "NoCrypt",
    "NotFound",
    "QueryParameter",
    "Request",
    "Route",
    "RouteMapper",
    "Router",
    "SignedCrypt",
    "Url",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AESGCMCrypt": "hush.security.crypt",
    "CompoundRequestMapper": "hush.routing.compound",
    "ConfigurationError": "hush.errors",
    "CryptoConfig": "hush.config",
    "CryptoMapper": "hush.security.crypto_mapper",
    "DecryptionError": "hush.errors",
    "ExpiredLink": "hush.errors",
    "HTTPError": "hush.errors",
    "HushError": "hush.errors",
    "MethodNotAllowed": "hush.errors",
    "NoCrypt": "hush.security.crypt",
    "NotFound": "hush.errors",
    "QueryParameter": "hush.http.url",
    "Request": "hush.http.request",
    "Route": "hush.routing.route",
    "RouteMapper": "hush.routing.mapper",
    "Router": "hush.routing.router",
    "SignedCrypt": "hush.security.crypt",
    "Url": "hush.http.url",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import hush`` fast while providing a clean top-level API.
    """
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
