"""Crypt providers — URL-safe string encryption.

A crypt is any object with ``encrypt(str) -> str`` and
``decrypt(str) -> str``. Ciphertexts must be usable as a single URL path
segment or query value without further escaping. ``decrypt`` raises
``DecryptionError`` for anything it cannot decrypt.

Built-in providers:
    AESGCMCrypt -- AES-GCM authenticated encryption (requires cryptography)
    SignedCrypt -- Signed, readable tokens (requires itsdangerous)
    NoCrypt -- Identity, for tests and debugging

The crypto mapper asks a factory for a crypt on every call, so a factory
may hand out per-session or rotating keys::

    key = AESGCMCrypt.generate_key()
    mapper = CryptoMapper(wrapped, lambda: AESGCMCrypt(key))
"""

import base64
import os
from collections.abc import Callable
from typing import Protocol, TypeAlias, runtime_checkable

from hush.errors import ConfigurationError, DecryptionError

_NONCE_SIZE = 12
_TAG_SIZE = 16
_ASSOCIATED_DATA = b"hush.url"


@runtime_checkable
class Crypt(Protocol):
    """Protocol for URL-safe string encryption."""

    def encrypt(self, plaintext: str) -> str: ...
    def decrypt(self, ciphertext: str) -> str: ...


CryptFactory: TypeAlias = Callable[[], Crypt]


def b64url_encode(raw: bytes) -> str:
    """URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def b64url_decode(text: str) -> bytes:
    """Inverse of ``b64url_encode``. Raises ``ValueError`` on bad input."""
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


class AESGCMCrypt:
    """AES-GCM encryption with a random nonce per token.

    Tokens are ``b64url(nonce || ciphertext || tag)``. The same plaintext
    encrypts to a different token every time; any change to a token makes
    ``decrypt`` fail.

    Usage::

        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        token = crypt.encrypt("wicket/page?3")
        crypt.decrypt(token)  # "wicket/page?3"
    """

    __slots__ = ("_aead",)

    def __init__(self, key: str | bytes) -> None:
        try:
            from cryptography.hazmat.primitives.ciphers.aead import AESGCM
        except ImportError:
            msg = (
                "AESGCMCrypt requires the 'cryptography' package. "
                "Install it with: pip install cryptography"
            )
            raise ConfigurationError(msg) from None

        if isinstance(key, str):
            try:
                key = b64url_decode(key)
            except ValueError:
                msg = "AESGCMCrypt key must be URL-safe base64 text or raw bytes."
                raise ConfigurationError(msg) from None
        if len(key) not in (16, 24, 32):
            msg = f"AESGCMCrypt key must be 16, 24 or 32 bytes, got {len(key)}."
            raise ConfigurationError(msg)

        self._aead = AESGCM(key)

    @staticmethod
    def generate_key() -> str:
        """Return a fresh 256-bit key as URL-safe text."""
        return b64url_encode(os.urandom(32))

    def encrypt(self, plaintext: str) -> str:
        nonce = os.urandom(_NONCE_SIZE)
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), _ASSOCIATED_DATA)
        return b64url_encode(nonce + sealed)

    def decrypt(self, ciphertext: str) -> str:
        from cryptography.exceptions import InvalidTag

        try:
            raw = b64url_decode(ciphertext)
        except ValueError as exc:
            raise DecryptionError("Ciphertext is not URL-safe base64") from exc
        if len(raw) < _NONCE_SIZE + _TAG_SIZE:
            raise DecryptionError("Ciphertext is too short")

        try:
            plaintext = self._aead.decrypt(raw[:_NONCE_SIZE], raw[_NONCE_SIZE:], _ASSOCIATED_DATA)
        except InvalidTag as exc:
            raise DecryptionError("Ciphertext failed authentication") from exc
        return plaintext.decode("utf-8")


class SignedCrypt:
    """Signed tokens via ``itsdangerous``.

    Tampering is detected but the plaintext stays readable (it is only
    base64 encoded). Use it where routing state may be visible but must
    not be forged; use ``AESGCMCrypt`` to hide it.
    """

    __slots__ = ("_serializer",)

    def __init__(self, secret_key: str, salt: str = "hush.url") -> None:
        try:
            from itsdangerous import URLSafeSerializer
        except ImportError:
            msg = (
                "SignedCrypt requires the 'itsdangerous' package. "
                "Install it with: pip install itsdangerous"
            )
            raise ConfigurationError(msg) from None

        if not secret_key:
            msg = "SignedCrypt secret_key must not be empty."
            raise ConfigurationError(msg)

        self._serializer = URLSafeSerializer(secret_key, salt=salt)

    def encrypt(self, plaintext: str) -> str:
        return self._serializer.dumps(plaintext)

    def decrypt(self, ciphertext: str) -> str:
        from itsdangerous import BadData

        try:
            value = self._serializer.loads(ciphertext)
        except BadData as exc:
            raise DecryptionError("Token signature does not match") from exc
        if not isinstance(value, str):
            raise DecryptionError("Token does not hold a string")
        return value


class NoCrypt:
    """Identity crypt. Leaves every string unchanged."""

    __slots__ = ()

    def encrypt(self, plaintext: str) -> str:
        return plaintext

    def decrypt(self, ciphertext: str) -> str:
        return ciphertext
