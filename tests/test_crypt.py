"""Tests for hush.security.crypt — crypt providers."""

import re

import pytest

from hush.errors import ConfigurationError, DecryptionError
from hush.security.crypt import (
    AESGCMCrypt,
    Crypt,
    NoCrypt,
    SignedCrypt,
    b64url_decode,
    b64url_encode,
)

URL_SAFE = re.compile(r"[A-Za-z0-9_\-]+")
TEXT = "abcdefghijkABC: A test which creates a '/' and/or a '+'"


class TestBase64Url:
    def test_no_padding(self) -> None:
        assert b64url_encode(b"hi") == "aGk"

    def test_round_trip(self) -> None:
        for raw in (b"", b"A", b"OK", b"hello world", b"\x00\xff\x10"):
            assert b64url_decode(b64url_encode(raw)) == raw

    def test_bad_input_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            b64url_decode("abcde")


class TestAESGCMCrypt:
    def test_round_trip(self) -> None:
        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        assert crypt.decrypt(crypt.encrypt(TEXT)) == TEXT

    def test_ciphertext_is_url_safe(self) -> None:
        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        assert URL_SAFE.fullmatch(crypt.encrypt(TEXT))

    def test_random_nonce(self) -> None:
        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        assert crypt.encrypt("wicket/page") != crypt.encrypt("wicket/page")

    def test_unicode(self) -> None:
        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        assert crypt.decrypt(crypt.encrypt("wicket/päge?q=ü")) == "wicket/päge?q=ü"

    def test_raw_bytes_key(self) -> None:
        crypt = AESGCMCrypt(b"k" * 16)
        assert crypt.decrypt(crypt.encrypt("x")) == "x"

    def test_wrong_key_fails(self) -> None:
        token = AESGCMCrypt(AESGCMCrypt.generate_key()).encrypt(TEXT)
        with pytest.raises(DecryptionError, match="authentication"):
            AESGCMCrypt(AESGCMCrypt.generate_key()).decrypt(token)

    def test_tampered_token_fails(self) -> None:
        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        token = crypt.encrypt(TEXT)
        flipped = ("A" if token[0] != "A" else "B") + token[1:]
        with pytest.raises(DecryptionError):
            crypt.decrypt(flipped)

    def test_short_token_fails(self) -> None:
        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        with pytest.raises(DecryptionError, match="too short"):
            crypt.decrypt("wicket")

    def test_non_base64_fails(self) -> None:
        crypt = AESGCMCrypt(AESGCMCrypt.generate_key())
        with pytest.raises(DecryptionError):
            crypt.decrypt("abcde")

    def test_bad_key_length(self) -> None:
        with pytest.raises(ConfigurationError, match="16, 24 or 32 bytes"):
            AESGCMCrypt(b"short")

    def test_generated_key_is_text(self) -> None:
        key = AESGCMCrypt.generate_key()
        assert URL_SAFE.fullmatch(key)
        assert len(b64url_decode(key)) == 32

    def test_satisfies_protocol(self) -> None:
        assert isinstance(AESGCMCrypt(AESGCMCrypt.generate_key()), Crypt)


class TestSignedCrypt:
    def test_round_trip(self) -> None:
        crypt = SignedCrypt("secret")
        assert crypt.decrypt(crypt.encrypt(TEXT)) == TEXT

    def test_no_slash_in_token(self) -> None:
        assert "/" not in SignedCrypt("secret").encrypt(TEXT)

    def test_other_secret_fails(self) -> None:
        token = SignedCrypt("secret").encrypt(TEXT)
        with pytest.raises(DecryptionError, match="signature"):
            SignedCrypt("other").decrypt(token)

    def test_garbage_fails(self) -> None:
        with pytest.raises(DecryptionError):
            SignedCrypt("secret").decrypt("wicket")

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="must not be empty"):
            SignedCrypt("")


class TestNoCrypt:
    def test_identity(self) -> None:
        crypt = NoCrypt()
        assert crypt.encrypt("test") == "test"
        assert crypt.decrypt("test") == "test"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(NoCrypt(), Crypt)
