"""Hush CLI — key generation and URL encryption for debugging.

Entry point registered as ``hush`` in ``pyproject.toml``::

    [project.scripts]
    hush = "hush.cli:main"
"""

import argparse
import sys


def _add_mapper_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", help="Context-relative URL (e.g. wicket/page?3)")
    parser.add_argument(
        "--key",
        default=None,
        help="AES-GCM key (defaults to $HUSH_SECRET_KEY)",
    )
    parser.add_argument(
        "--namespace",
        default=None,
        help="First segment of fully encrypted URLs (default: wicket)",
    )
    parser.add_argument(
        "--mark",
        action="store_true",
        help="Mark encrypted URLs with the crypt. prefix",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``hush`` command."""
    parser = argparse.ArgumentParser(
        prog="hush",
        description="Hush — encrypted URLs for request mappers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- hush keygen ------------------------------------------------------
    subparsers.add_parser("keygen", help="Print a new AES-GCM key")

    # -- hush encrypt -----------------------------------------------------
    encrypt_parser = subparsers.add_parser("encrypt", help="Encrypt a URL")
    _add_mapper_options(encrypt_parser)

    # -- hush decrypt -----------------------------------------------------
    decrypt_parser = subparsers.add_parser("decrypt", help="Decrypt a URL")
    _add_mapper_options(decrypt_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from hush.cli import _crypt

    if args.command == "keygen":
        _crypt.run_keygen(args)
    elif args.command == "encrypt":
        _crypt.run_encrypt(args)
    elif args.command == "decrypt":
        _crypt.run_decrypt(args)
