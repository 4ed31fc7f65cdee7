"""Passphrase to AES-256 key derivation."""

import hashlib

KEY_LENGTH = 32


def derive_key(passphrase) -> bytes:
    """
    Derive a 256-bit key from a passphrase using a single SHA-256 digest.
    The same passphrase always yields the same key.
    """
    if isinstance(passphrase, str):
        passphrase = passphrase.encode("utf-8")

    return hashlib.sha256(passphrase).digest()


def key_fingerprint(passphrase, length: int = 8) -> str:
    # Short hex id of the derived key, safe to log or display.
    return hashlib.sha256(derive_key(passphrase)).hexdigest()[:length]
