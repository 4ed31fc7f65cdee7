"""Unit tests for passphrase key derivation."""

import hashlib

from cipherly.kdf import KEY_LENGTH, derive_key, key_fingerprint


def test_derive_key_is_sha256_of_utf8():
    """The key is the SHA-256 digest of the UTF-8 passphrase."""
    assert derive_key("my-secret-key") == hashlib.sha256(b"my-secret-key").digest()


def test_derive_key_length():
    key = derive_key("anything")
    assert isinstance(key, bytes)
    assert len(key) == KEY_LENGTH == 32


def test_derive_key_consistency():
    """Same passphrase as str or bytes, or twice in a row, yields the same key."""
    assert derive_key("password123") == derive_key("password123")
    assert derive_key("password123") == derive_key(b"password123")


def test_derive_key_non_ascii():
    assert derive_key("pässwörd") == hashlib.sha256("pässwörd".encode("utf-8")).digest()


def test_different_passphrases_give_different_keys():
    assert derive_key("alpha") != derive_key("beta")


def test_key_fingerprint():
    fp = key_fingerprint("my-secret-key")
    assert len(fp) == 8
    int(fp, 16)
    assert fp == key_fingerprint(b"my-secret-key")
    assert fp != key_fingerprint("other-key")
    # never the leading bytes of the key itself
    assert fp != derive_key("my-secret-key").hex()[:8]


def test_key_fingerprint_custom_length():
    assert len(key_fingerprint("k", length=16)) == 16
