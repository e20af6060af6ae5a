"""Hush exception hierarchy.

Shared across the router, the mappers and the crypt providers so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class HushError(Exception):
    """Base for all hush-specific errors."""


class ConfigurationError(HushError):
    """Raised when configuration is invalid.

    Typically caught at startup, when a mapper or router is built.
    """


class DecryptionError(HushError):
    """A ciphertext could not be decrypted.

    Raised by crypt providers for malformed, forged or expired tokens.
    The crypto mapper converts it to "not our URL" or ``ExpiredLink``.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(HushError):
    """An error that maps directly to an HTTP status code.

    Raised by the router and the mappers. The integrating server is
    expected to turn these into responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods and embeds
    the allowed methods in the detail string for developer visibility.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class ExpiredLink(HTTPError):  # noqa: N818 — mirrors NotFound
    """410 — a marked encrypted URL can no longer be decrypted.

    Only raised when ``CryptoConfig.mark_encrypted_urls`` is enabled.
    Usually means the key that encrypted the URL is gone (for example a
    per-session key after the session expired), so the user should be
    told the link has expired rather than shown a plain 404.
    """

    def __init__(self, detail: str = "Encrypted URL is no longer decryptable") -> None:
        super().__init__(status=410, detail=detail)
