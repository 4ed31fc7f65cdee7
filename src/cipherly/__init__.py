"""Cipherly: passphrase-based AES-GCM encryption of strings, bytes and JSON values.

Blobs are ``base64(nonce || ciphertext || tag)`` with the key derived from the
passphrase by SHA-256.
"""

from .cipher import Cipher, DEFAULT_NONCE_LENGTH, TAG_LENGTH
from .exceptions import (
    CipherlyError,
    ConfigurationError,
    UnsupportedInputTypeError,
    MalformedInputError,
    AuthenticationFailureError,
)
from .kdf import derive_key, key_fingerprint
from .serialization import to_bytes, from_bytes, dump_json, load_json, encode_blob, decode_blob

__all__ = [
    "Cipher",
    "DEFAULT_NONCE_LENGTH",
    "TAG_LENGTH",
    "CipherlyError",
    "ConfigurationError",
    "UnsupportedInputTypeError",
    "MalformedInputError",
    "AuthenticationFailureError",
    "derive_key",
    "key_fingerprint",
    "to_bytes",
    "from_bytes",
    "dump_json",
    "load_json",
    "encode_blob",
    "decode_blob",
]

__version__ = "1.0.0"
