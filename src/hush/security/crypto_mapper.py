"""Crypto mapper — encrypts the URLs another request mapper generates.

URLs in the internal namespace (first segment ``CryptoConfig.namespace``)
are encrypted whole: segments and query become one opaque first segment.
Checksum segments are appended until the encrypted URL has as many
segments as the original, so relative links inside the page (``../img/a.png``
from a stylesheet) climb the same number of levels. When the browser sends
such a URL back, every position whose checksum still matches is an
untouched segment of the original; from the first mismatch on, segments are
literal path components added by relative resolution::

    wicket/page/sub/action       ->  <C>/h1/h2/h3
    <C>/h1/other.css             ->  wicket/page/other.css

Other URLs keep their path; only the page/component info query
parameter is encrypted, into ``CryptoConfig.encrypted_param_key``::

    shop/cart?3-1.0-form&x=1     ->  shop/cart?wicket-crypt=<V>&x=1

With ``mark_encrypted_urls`` the encrypted segment carries
``marker_prefix``, and a marked URL that no longer decrypts (for example
after a per-session key is gone) raises ``ExpiredLink`` instead of falling
through to a 404.

The mapper keeps no per-request state: each call builds its own checksum
generator and asks the crypt factory for a crypt.
"""

import logging
from dataclasses import dataclass
from itertools import islice

from hush._internal.types import RequestHandler
from hush.config import CryptoConfig
from hush.errors import ConfigurationError, ExpiredLink
from hush.http.request import Request
from hush.http.url import QueryParameter, Url
from hush.routing.protocol import RequestMapper
from hush.security.audit import emit_security_event
from hush.security.crypt import Crypt, CryptFactory
from hush.security.segments import SegmentChecksumGenerator

_log = logging.getLogger("hush.security")


@dataclass(frozen=True, slots=True)
class RequestSettingHandler:
    """A handler resolved from a decrypted request.

    ``request`` is the request the wrapped mapper actually saw, so code
    running the handler can read decrypted parameters from it.
    """

    request: Request
    delegate: RequestHandler


class CryptoMapper:
    """Request mapper that encrypts URLs generated by a wrapped mapper.

    Usage::

        key = AESGCMCrypt.generate_key()
        mapper = CryptoMapper(
            RouteMapper(router),
            lambda: AESGCMCrypt(key),
            CryptoConfig(mark_encrypted_urls=True),
        )
        url = mapper.map_handler(match)         # encrypted Url
        handler = mapper.map_request(request)   # RequestSettingHandler | None

    Several crypto mappers may be stacked; each one only decrypts what
    it encrypted and passes plaintext produced by an earlier one through.
    """

    __slots__ = ("_config", "_crypt_factory", "_wrapped")

    def __init__(
        self,
        wrapped: RequestMapper,
        crypt_factory: CryptFactory,
        config: CryptoConfig | None = None,
    ) -> None:
        config = config or CryptoConfig()
        if not config.namespace:
            msg = "CryptoConfig.namespace must not be empty."
            raise ConfigurationError(msg)
        if not config.encrypted_param_key:
            msg = "CryptoConfig.encrypted_param_key must not be empty."
            raise ConfigurationError(msg)
        if config.mark_encrypted_urls and not config.marker_prefix:
            msg = "CryptoConfig.marker_prefix must not be empty when marking encrypted URLs."
            raise ConfigurationError(msg)

        self._wrapped = wrapped
        self._crypt_factory = crypt_factory
        self._config = config

    @property
    def config(self) -> CryptoConfig:
        return self._config

    @property
    def delegate(self) -> RequestMapper:
        """The wrapped, non-encrypting mapper."""
        return self._wrapped

    def _crypt(self) -> Crypt:
        return self._crypt_factory()

    # -- RequestMapper --

    def compatibility_score(self, request: Request) -> int:
        """Score of the wrapped mapper for the decrypted request.

        Raises ``ExpiredLink`` like ``map_request``.
        """
        url = self.decrypt_url(request, request.url)
        if url is None:
            return 0
        return self._wrapped.compatibility_score(request.clone_with_url(url))

    def map_handler(self, handler: RequestHandler) -> Url | None:
        url = self._wrapped.map_handler(handler)
        if url is None:
            return None
        return self.encrypt_url(url)

    def map_request(self, request: Request) -> RequestSettingHandler | None:
        """Decrypt *request* and resolve it with the wrapped mapper.

        Returns ``None`` when the URL is not routable, including when it
        carries plaintext routing state that should have been encrypted.
        Raises ``ExpiredLink`` for marked URLs that no longer decrypt.
        """
        url = self.decrypt_url(request, request.url)
        if url is None:
            return None

        decrypted = request.clone_with_url(url)
        handler = self._wrapped.map_request(decrypted)
        if handler is None:
            return None
        return RequestSettingHandler(request=decrypted, delegate=handler)

    # -- Encryption --

    def encrypt_url(self, url: Url) -> Url:
        """Encrypt *url*: whole if it is in the namespace, else its page info.

        Absolute URLs point at another origin and are returned unchanged.
        """
        if url.is_absolute:
            return url
        if url.segments and url.segments[0] == self._config.namespace:
            return self.encrypt_entire_url(url)
        return self.encrypt_listener_parameter(url)

    def encrypt_entire_url(self, url: Url) -> Url:
        """Encrypt segments and query into the first segment.

        The result has the same number of segments as *url*; all but the
        first are checksum segments.
        """
        cfg = self._config
        encrypted = self._crypt().encrypt(str(url))

        first = cfg.marker_prefix + encrypted if cfg.mark_encrypted_urls else encrypted
        generator = SegmentChecksumGenerator.seeded(encrypted)
        checksums = islice(generator, len(url.segments) - 1)
        return Url((first, *checksums))

    def encrypt_listener_parameter(self, url: Url) -> Url:
        """Encrypt the first page/component info parameter, if any.

        The encrypted parameter moves to the front of the query; *url* is
        returned unchanged when it has no such parameter.
        """
        cfg = self._config
        params = list(url.query_parameters)
        for index, param in enumerate(params):
            if cfg.is_routing_parameter(param):
                del params[index]
                value = self._crypt().encrypt(param.name)
                params.insert(0, QueryParameter(cfg.encrypted_param_key, value))
                return url.with_query_parameters(params)
        return url

    # -- Decryption --

    def decrypt_url(self, request: Request, encrypted_url: Url) -> Url | None:
        """Decrypt *encrypted_url*, or return ``None`` if it must not be routed.

        ``request.original`` is the URL before any mapper in the chain
        touched it; plaintext routing state is only accepted when it was
        not already there, i.e. when an earlier mapper produced it.
        """
        url = self.decrypt_entire_url(request, encrypted_url)
        if url is not None:
            return url

        namespace = self._config.namespace
        if encrypted_url.segments and encrypted_url.segments[0] == namespace:
            original = request.original
            if original.segments and original.segments[0] == namespace:
                _log.warning("Rejected unencrypted namespace URL %s", request.path)
                emit_security_event("crypto.reject.plaintext_url", request, namespace=namespace)
                return None
            # decrypted by an earlier crypto mapper
            return encrypted_url

        return self.decrypt_listener_parameter(request, encrypted_url)

    def decrypt_entire_url(self, request: Request, encrypted_url: Url) -> Url | None:
        """Reverse ``encrypt_entire_url``.

        Returns ``None`` if *encrypted_url* was not encrypted by this
        mapper. Raises ``ExpiredLink`` in mark-mode when a marked segment
        does not decrypt.
        """
        cfg = self._config
        segments = encrypted_url.segments
        if not segments or not segments[0]:
            return None

        encrypted = segments[0]
        if cfg.mark_encrypted_urls:
            if not encrypted.startswith(cfg.marker_prefix):
                return None
            encrypted = encrypted[len(cfg.marker_prefix) :]
            if not encrypted:
                return self._decrypt_failed(request, None)

        try:
            original = Url.parse(self._crypt().decrypt(encrypted))
        except Exception as exc:
            return self._decrypt_failed(request, exc)
        if not original.segments or original.is_absolute:
            return self._decrypt_failed(request, None)

        # The first segment is always the original's: relative links
        # resolve against the encrypted segment, which is still in place.
        result = [original.segments[0]]
        generator = SegmentChecksumGenerator.seeded(encrypted)
        index = 1
        limit = min(len(original.segments), len(segments))
        while index < limit and next(generator) == segments[index]:
            result.append(original.segments[index])
            index += 1
        # modified or additional segments, as sent by the browser
        result.extend(segments[index:])

        return Url(result, original.query_parameters + encrypted_url.query_parameters)

    def _decrypt_failed(self, request: Request, exc: Exception | None) -> None:
        if exc is not None:
            _log.debug("Error decrypting URL %s", request.path, exc_info=exc)
        if self._config.mark_encrypted_urls:
            _log.info("Encrypted URL %s is no longer decryptable", request.path)
            emit_security_event("crypto.expired", request)
            raise ExpiredLink()
        return None

    def decrypt_listener_parameter(self, request: Request, encrypted_url: Url) -> Url | None:
        """Reverse ``encrypt_listener_parameter``.

        Returns ``None`` if the URL carries plaintext page/component info
        that the client sent itself.
        """
        cfg = self._config
        params: list[QueryParameter] = []

        for param in encrypted_url.query_parameters:
            if cfg.is_routing_parameter(param):
                # Should have been encrypted. Only accept it if an earlier
                # crypto mapper in the chain produced it.
                if request.original.query_parameter(param.name) is not None:
                    _log.warning("Rejected unencrypted page info on %s", request.path)
                    emit_security_event(
                        "crypto.reject.plaintext_parameter", request, parameter=param.name
                    )
                    return None
                params.append(param)
            elif param.name == cfg.encrypted_param_key and param.value:
                decrypted = self._decrypt_parameter(request, param.value)
                if decrypted:
                    params.insert(0, QueryParameter(decrypted))
                else:
                    params.append(param)
            else:
                params.append(param)

        return encrypted_url.with_query_parameters(params)

    def _decrypt_parameter(self, request: Request, value: str) -> str | None:
        try:
            return self._crypt().decrypt(value)
        except Exception as exc:
            _log.debug(
                "Error decrypting page info parameter on %s", request.path, exc_info=exc
            )
            return None
