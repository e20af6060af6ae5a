"""Tests for hush.config — CryptoConfig frozen dataclass."""

import pytest

from hush.config import CryptoConfig
from hush.http.url import QueryParameter


class TestCryptoConfig:
    def test_defaults(self) -> None:
        cfg = CryptoConfig()

        assert cfg.namespace == "wicket"
        assert cfg.encrypted_param_key == "wicket-crypt"
        assert cfg.marker_prefix == "crypt."
        assert cfg.mark_encrypted_urls is False

    def test_override(self) -> None:
        cfg = CryptoConfig(namespace="app", mark_encrypted_urls=True, marker_prefix="enc.")

        assert cfg.namespace == "app"
        assert cfg.mark_encrypted_urls is True
        assert cfg.marker_prefix == "enc."

    def test_frozen(self) -> None:
        cfg = CryptoConfig()

        with pytest.raises(AttributeError):
            cfg.namespace = "other"  # type: ignore[misc]

    def test_default_routing_parameter(self) -> None:
        cfg = CryptoConfig()

        assert cfg.is_routing_parameter(QueryParameter("3-1.0-link")) is True
        assert cfg.is_routing_parameter(QueryParameter("x", "1")) is False
