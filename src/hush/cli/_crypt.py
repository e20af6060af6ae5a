"""``hush keygen | encrypt | decrypt`` — inspect encrypted URLs.

Runs the crypto mapper's encode/decode directly on a URL string, with
the same configuration an application would use.
"""

import argparse
import os
import sys
from dataclasses import replace

from hush.config import CryptoConfig
from hush.errors import ConfigurationError, ExpiredLink
from hush.http.request import Request
from hush.http.url import Url
from hush.routing.compound import CompoundRequestMapper
from hush.security.crypt import AESGCMCrypt
from hush.security.crypto_mapper import CryptoMapper

KEY_ENV = "HUSH_SECRET_KEY"


def _build_mapper(args: argparse.Namespace) -> CryptoMapper:
    key = args.key or os.environ.get(KEY_ENV)
    if not key:
        print(f"Error: no key given. Pass --key or set {KEY_ENV}.", file=sys.stderr)
        raise SystemExit(1)

    config = CryptoConfig(mark_encrypted_urls=args.mark)
    if args.namespace:
        config = replace(config, namespace=args.namespace)

    try:
        crypt = AESGCMCrypt(key)
        # Nothing to route: only encrypt_url/decrypt_url are used
        return CryptoMapper(CompoundRequestMapper(), lambda: crypt, config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_keygen(args: argparse.Namespace) -> None:
    """Print a fresh URL-safe AES-GCM key."""
    print(AESGCMCrypt.generate_key())


def run_encrypt(args: argparse.Namespace) -> None:
    """Print the encrypted form of ``args.url``."""
    mapper = _build_mapper(args)
    print(mapper.encrypt_url(Url.parse(args.url.lstrip("/"))))


def run_decrypt(args: argparse.Namespace) -> None:
    """Print the decrypted form of ``args.url``.

    Exits with code 1 if the URL is rejected or has expired.
    """
    mapper = _build_mapper(args)
    request = Request.from_path(args.url)
    try:
        url = mapper.decrypt_url(request, request.url)
    except ExpiredLink as exc:
        print(f"Error: {exc.detail}", file=sys.stderr)
        raise SystemExit(1) from exc

    if url is None:
        print("Error: URL was rejected (unencrypted routing state).", file=sys.stderr)
        raise SystemExit(1)
    print(url)
