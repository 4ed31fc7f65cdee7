"""Payload serialization and blob framing.

Plaintext payloads are turned into bytes before sealing:

- ``str``: UTF-8
- bytes-like (``bytes``, ``bytearray``, ``memoryview``): passed through
- structured values (mappings, lists, tuples): compact JSON, UTF-8 encoded

A sealed blob travels as ``base64(nonce || ciphertext || tag)`` using the
standard alphabet with padding. No version byte or algorithm id is stored,
so both sides must agree on the nonce length out of band.
"""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Mapping
from typing import Any, Tuple, Union

from .exceptions import MalformedInputError, UnsupportedInputTypeError

logger = logging.getLogger(__name__)

BYTES_TYPES = (bytes, bytearray, memoryview)
STRUCTURED_TYPES = (Mapping, list, tuple)


def payload_kind(data: Any) -> str:
    """Return ``"text"``, ``"bytes"`` or ``"json"`` for a supported payload."""
    if isinstance(data, str):
        return "text"
    if isinstance(data, BYTES_TYPES):
        return "bytes"
    if isinstance(data, STRUCTURED_TYPES):
        return "json"
    raise UnsupportedInputTypeError(f"Unsupported data type: {type(data).__name__}")


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not part of standard JSON
    raise ValueError(f"Out of range float value: {name}")


def _mapping_to_dict(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_json(value: Any) -> bytes:
    """Compact UTF-8 JSON, the same shape ``JSON.stringify`` produces."""
    try:
        text = json.dumps(
            value,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=_mapping_to_dict,
        )
    except (TypeError, ValueError) as exc:
        # non-serializable member, NaN/Infinity or a circular reference
        raise UnsupportedInputTypeError(f"Unsupported data type: {exc}") from exc
    return text.encode("utf-8")


def load_json(raw: bytes) -> Any:
    # Strict variant of from_bytes(): the payload must be a standard JSON document.
    try:
        return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedInputError(f"Payload is not a JSON document: {exc}") from exc


def to_bytes(data: Any) -> bytes:
    kind = payload_kind(data)
    if kind == "text":
        return data.encode("utf-8")
    if kind == "bytes":
        return bytes(data)
    return dump_json(data)


def from_bytes(raw: bytes) -> Union[str, bytes, Any]:
    """
    Best-effort reconstruction of a decrypted payload.

    JSON documents come back as Python values, other UTF-8 text comes back
    as ``str`` and anything that is not UTF-8 is returned as raw ``bytes``.
    ``NaN`` and ``Infinity`` are not JSON, so those strings stay text.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("plaintext is not UTF-8, returning %d raw bytes", len(raw))
        return raw

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        # json.JSONDecodeError is a ValueError too
        return text


def encode_blob(nonce: bytes, sealed: bytes) -> str:
    return base64.b64encode(nonce + sealed).decode("ascii")


def decode_blob(blob: Union[str, bytes], nonce_length: int) -> Tuple[bytes, bytes]:
    """
    Decode a base64 blob and split it into ``(nonce, sealed)``.

    Raises MalformedInputError if the text is not valid base64 or if the
    decoded data is shorter than ``nonce_length``.
    """
    if not isinstance(blob, (str, bytes)):
        raise MalformedInputError(f"Expected base64 text, got {type(blob).__name__}")

    try:
        combined = base64.b64decode(blob.strip(), validate=True)
    except ValueError as exc:
        # binascii.Error is a ValueError; non-ASCII str input raises ValueError directly
        raise MalformedInputError(f"Invalid base64 input: {exc}") from exc

    if len(combined) < nonce_length:
        raise MalformedInputError(
            f"Ciphertext too short to contain nonce ({len(combined)} < {nonce_length} bytes)"
        )
    return combined[:nonce_length], combined[nonce_length:]
