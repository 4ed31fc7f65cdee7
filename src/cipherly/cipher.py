"""
Passphrase-based AES-GCM encryption of strings, bytes and JSON-style values.

A Cipher is built around one passphrase. Every call derives the AES-256 key
from it, seals the serialized payload under a fresh random nonce and returns
``base64(nonce || ciphertext || tag)``. Blobs are self-contained: only the
passphrase and the nonce length are needed to open them again.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Callable, Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .exceptions import AuthenticationFailureError, ConfigurationError
from .kdf import derive_key
from .serialization import (
    decode_blob,
    encode_blob,
    from_bytes,
    load_json,
    payload_kind,
    to_bytes,
)

logger = logging.getLogger(__name__)

DEFAULT_NONCE_LENGTH = 12
# bounds accepted by cryptography's AESGCM
MIN_NONCE_LENGTH = 8
MAX_NONCE_LENGTH = 128
TAG_LENGTH = 16

NonceFactory = Callable[[int], bytes]


class Cipher:
    """
    Encrypt and decrypt payloads with a key derived from ``passphrase``.

    ``nonce_length`` must match between the encrypting and the decrypting
    side; it is not stored in the blob. ``nonce_factory`` is the random
    source for nonces and defaults to :func:`os.urandom`; tests can pass a
    deterministic one.

    Instances hold no mutable state after construction, so one Cipher can
    be shared between threads and tasks.
    """

    def __init__(
        self,
        passphrase: Union[str, bytes],
        nonce_length: int = DEFAULT_NONCE_LENGTH,
        nonce_factory: Optional[NonceFactory] = None,
    ):
        if not isinstance(passphrase, (str, bytes)) or not passphrase:
            raise ConfigurationError("Passphrase must be a non-empty str or bytes")
        if isinstance(nonce_length, bool) or not isinstance(nonce_length, int):
            raise ConfigurationError("nonce_length must be an integer")
        if not MIN_NONCE_LENGTH <= nonce_length <= MAX_NONCE_LENGTH:
            raise ConfigurationError(
                f"nonce_length must be between {MIN_NONCE_LENGTH} and {MAX_NONCE_LENGTH} bytes"
            )

        self._passphrase = passphrase
        self.nonce_length = nonce_length
        self._nonce_factory = nonce_factory or os.urandom

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nonce_length={self.nonce_length})"

    # ------------------------------------------------------------------
    # Key and nonce helpers
    # ------------------------------------------------------------------

    def _aead(self) -> AESGCM:
        return AESGCM(derive_key(self._passphrase))

    def _new_nonce(self) -> bytes:
        nonce = self._nonce_factory(self.nonce_length)
        if not isinstance(nonce, (bytes, bytearray)):
            raise ConfigurationError(
                f"nonce_factory must return bytes, got {type(nonce).__name__}"
            )
        if len(nonce) != self.nonce_length:
            raise ConfigurationError(
                f"nonce_factory returned {len(nonce)} bytes, expected {self.nonce_length}"
            )
        return bytes(nonce)

    # ------------------------------------------------------------------
    # Encryption
    # ------------------------------------------------------------------

    def encrypt(self, data: Any) -> str:
        """
        Encrypt ``data`` and return a base64 string.

        ``data`` may be a ``str`` (sealed as UTF-8), bytes-like (sealed
        as-is) or a mapping/list/tuple (sealed as compact JSON). Anything
        else raises :class:`UnsupportedInputTypeError` before any
        cryptographic work is done.

        Two calls with the same input never return the same string since
        each one uses a new random nonce.
        """
        kind = payload_kind(data)
        payload = to_bytes(data)

        nonce = self._new_nonce()
        sealed = self._aead().encrypt(nonce, payload, None)
        logger.debug("encrypted %s payload: %d plaintext bytes", kind, len(payload))
        return encode_blob(nonce, sealed)

    # ------------------------------------------------------------------
    # Decryption
    # ------------------------------------------------------------------

    def decrypt_bytes(self, blob: Union[str, bytes]) -> bytes:
        """
        Decrypt a blob produced by :meth:`encrypt` and return the plaintext bytes.

        Raises:
            MalformedInputError: the blob is not base64 or is shorter than the nonce.
            AuthenticationFailureError: the tag does not verify (wrong passphrase,
                corrupted or tampered data, different nonce length).
        """
        nonce, sealed = decode_blob(blob, self.nonce_length)
        try:
            plaintext = self._aead().decrypt(nonce, sealed, None)
        except InvalidTag as exc:
            logger.debug("authentication failed for %d byte ciphertext", len(sealed))
            raise AuthenticationFailureError(
                "Decryption failed: authentication tag mismatch "
                "(wrong passphrase or corrupted data)"
            ) from exc
        logger.debug("decrypted %d plaintext bytes", len(plaintext))
        return plaintext

    def decrypt(self, blob: Union[str, bytes]) -> Any:
        """
        Decrypt a blob and rebuild the original value on a best-effort basis.

        The plaintext is parsed as JSON first; if that fails the text is
        returned, and if it is not UTF-8 the raw bytes are returned. The
        caller is trusted to know what was encrypted: a string that happens
        to be valid JSON (``"42"``) comes back parsed. Use
        :meth:`decrypt_bytes` or :meth:`decrypt_json` when the exact type matters.
        """
        return from_bytes(self.decrypt_bytes(blob))

    def decrypt_json(self, blob: Union[str, bytes]) -> Any:
        """Decrypt a blob whose plaintext must be a JSON document."""
        return load_json(self.decrypt_bytes(blob))

    # ------------------------------------------------------------------
    # Async variants
    # ------------------------------------------------------------------

    async def encrypt_async(self, data: Any) -> str:
        return await asyncio.to_thread(self.encrypt, data)

    async def decrypt_async(self, blob: Union[str, bytes]) -> Any:
        return await asyncio.to_thread(self.decrypt, blob)
