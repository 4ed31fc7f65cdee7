"""
Command line front end for Cipherly.

    cipherly encrypt --input notes.txt --output notes.enc
    echo '{"a": 1}' | cipherly encrypt --json
    cipherly decrypt --input notes.enc

The passphrase is read from the environment variable named by
``--passphrase-env`` (``CIPHERLY_PASSPHRASE`` by default) or prompted for.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
import sys
from typing import List, Optional

from .cipher import DEFAULT_NONCE_LENGTH, Cipher
from .exceptions import CipherlyError, ConfigurationError
from .logging_config import configure_logging
from .serialization import dump_json, load_json

logger = logging.getLogger(__name__)

PASSPHRASE_ENV = "CIPHERLY_PASSPHRASE"


def _read_input(path: Optional[str]) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _write_output(path: Optional[str], data: bytes) -> None:
    if path is None:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
        return
    with open(path, "wb") as f:
        f.write(data)


def _resolve_passphrase(env_name: str) -> str:
    passphrase = os.environ.get(env_name)
    if passphrase:
        logger.debug("using passphrase from $%s", env_name)
        return passphrase
    try:
        return getpass.getpass("Passphrase: ")
    except EOFError as exc:
        raise ConfigurationError(
            f"No passphrase: ${env_name} is not set and none could be read from the terminal"
        ) from exc


def _run_encrypt(cipher: Cipher, args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    if args.json:
        # any JSON document, scalars included, is sealed in compact form
        data = dump_json(load_json(raw))
    else:
        data = raw

    blob = cipher.encrypt(data)
    _write_output(args.output, (blob + "\n").encode("ascii"))


def _run_decrypt(cipher: Cipher, args: argparse.Namespace) -> None:
    blob = _read_input(args.input)
    if args.json:
        value = cipher.decrypt_json(blob)
        text = json.dumps(value, ensure_ascii=False, indent=2) + "\n"
        _write_output(args.output, text.encode("utf-8"))
    else:
        _write_output(args.output, cipher.decrypt_bytes(blob))


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cipherly",
        description="Encrypt and decrypt data with a passphrase (AES-256-GCM, base64 output).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr",
    )

    # options shared by both subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--input",
        "-i",
        default=None,
        help="File to read from (default: stdin)",
    )
    common.add_argument(
        "--output",
        "-o",
        default=None,
        help="File to write to (default: stdout)",
    )
    common.add_argument(
        "--json",
        action="store_true",
        help="Treat the plaintext as a JSON document",
    )
    common.add_argument(
        "--nonce-length",
        type=int,
        default=DEFAULT_NONCE_LENGTH,
        help=f"Nonce length in bytes, must match on both sides (default: {DEFAULT_NONCE_LENGTH})",
    )
    common.add_argument(
        "--passphrase-env",
        default=PASSPHRASE_ENV,
        help=f"Environment variable holding the passphrase (default: {PASSPHRASE_ENV})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    enc = subparsers.add_parser("encrypt", parents=[common], help="Encrypt plaintext to a base64 blob")
    enc.set_defaults(handler=_run_encrypt)
    dec = subparsers.add_parser("decrypt", parents=[common], help="Decrypt a base64 blob")
    dec.set_defaults(handler=_run_decrypt)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        cipher = Cipher(_resolve_passphrase(args.passphrase_env), nonce_length=args.nonce_length)
        args.handler(cipher, args)
    except CipherlyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
