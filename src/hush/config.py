"""Crypto mapper configuration.

Field defaults match the stock URL layout (``wicket`` namespace,
``wicket-crypt`` parameter). ``CryptoMapper`` validates the values.
"""

from collections.abc import Callable
from dataclasses import dataclass

from hush.http.url import QueryParameter
from hush.routing.page_info import is_page_component_info


@dataclass(frozen=True, slots=True)
class CryptoConfig:
    """Crypto mapper configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CryptoConfig(namespace="app", mark_encrypted_urls=True)
    """

    # First path segment of the internal namespace (whole-URL encryption)
    namespace: str = "wicket"

    # Query parameter carrying the encrypted page/component info
    encrypted_param_key: str = "wicket-crypt"

    # Prefix of marked encrypted URLs (only used when mark_encrypted_urls=True)
    marker_prefix: str = "crypt."
    mark_encrypted_urls: bool = False

    # Recognizes the query parameter that carries routing state
    is_routing_parameter: Callable[[QueryParameter], bool] = is_page_component_info
