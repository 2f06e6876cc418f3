# backend/dmserver/crypto/hashcodec.py
"""
Encoding of Argon2id parameters, salt and derived key into one string.

Format (six ``$``-separated fields, the first one empty)::

    $argon2id$v=19$t=<time>,m=<memory>,p=<parallelism>$<salt>$<key>

Salt and key use standard base64 without ``=`` padding.
"""
from __future__ import annotations

import base64
import re
import string
from dataclasses import dataclass

from dmserver.core.exceptions import (
    FieldCountError,
    IncompatibleAlgorithmError,
    InvalidEncodingError,
    MalformedFieldError,
    MalformedPrefixError,
)
from dmserver.crypto.kdf import current_version

ALGORITHM_ID = "argon2id"
FIELD_COUNT = 6

_UINT8_MAX = 2**8 - 1
_UINT32_MAX = 2**32 - 1

_VERSION_RE = re.compile(r"v=([+-]?[0-9]{1,10})")
_PARAMS_RE = re.compile(r"t=([0-9]{1,10}),m=([0-9]{1,10}),p=([0-9]{1,3})")
_B64_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/")


@dataclass(frozen=True)
class Argon2Params:
    version: int
    time_cost: int
    memory_cost: int  # KiB
    parallelism: int
    salt: bytes
    key: bytes

    @property
    def key_len(self) -> int:
        return len(self.key)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def _b64decode(field: str, value: str) -> bytes:
    for position, char in enumerate(value):
        if char not in _B64_ALPHABET:
            raise InvalidEncodingError(field, position)
    # a lone trailing character cannot carry a full byte
    if len(value) % 4 == 1:
        raise InvalidEncodingError(field, len(value) - 1)
    return base64.b64decode(value + "=" * (-len(value) % 4), validate=True)


def _parse_uint(field: str, raw: str, text: str, limit: int) -> int:
    value = int(text)
    if value > limit:
        raise MalformedFieldError(field, raw)
    return value


def encode_hash(params: Argon2Params) -> str:
    return "${}$v={}$t={},m={},p={}${}${}".format(
        ALGORITHM_ID,
        params.version,
        params.time_cost,
        params.memory_cost,
        params.parallelism,
        _b64encode(params.salt),
        _b64encode(params.key),
    )


def decode_hash(encoded: str) -> Argon2Params:
    """
    Parse an encoded hash back into its parameters.

    Raises:
        FieldCountError: not exactly six ``$``-separated fields.
        IncompatibleAlgorithmError: wrong algorithm id, wrong argon2 version,
            or (as ``MalformedPrefixError``) text before the first ``$``.
        MalformedFieldError: version or cost field does not match its pattern.
        InvalidEncodingError: salt or key is not unpadded base64.
    """
    fields = encoded.split("$")
    if len(fields) != FIELD_COUNT:
        raise FieldCountError(expected=FIELD_COUNT, actual=len(fields))

    prefix, algorithm, version_field, params_field, salt_field, key_field = fields
    if prefix != "":
        raise MalformedPrefixError(prefix)
    if algorithm != ALGORITHM_ID:
        raise IncompatibleAlgorithmError(f"incompatible algorithm: {algorithm!r}")

    match = _VERSION_RE.fullmatch(version_field)
    if match is None:
        raise MalformedFieldError("version", version_field)
    version = int(match.group(1))
    if version != current_version():
        raise IncompatibleAlgorithmError(f"incompatible argon2 version: {version}")

    match = _PARAMS_RE.fullmatch(params_field)
    if match is None:
        raise MalformedFieldError("parameters", params_field)
    time_cost = _parse_uint("parameters", params_field, match.group(1), _UINT32_MAX)
    memory_cost = _parse_uint("parameters", params_field, match.group(2), _UINT32_MAX)
    parallelism = _parse_uint("parameters", params_field, match.group(3), _UINT8_MAX)

    salt = _b64decode("salt", salt_field)
    key = _b64decode("key", key_field)

    return Argon2Params(
        version=version,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        salt=salt,
        key=key,
    )
