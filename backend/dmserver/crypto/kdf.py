# backend/dmserver/crypto/kdf.py
from __future__ import annotations

import os
from dataclasses import dataclass

from argon2.low_level import ARGON2_VERSION, Type, hash_secret_raw

from dmserver.core.exceptions import RandomSourceError


@dataclass(frozen=True)
class Argon2Profile:
    time_cost: int = 1
    memory_cost: int = 64 * 1024  # KiB (64 MiB)
    parallelism: int = 4
    hash_len: int = 32
    salt_len: int = 16


def default_profile() -> Argon2Profile:
    return Argon2Profile()


def current_version() -> int:
    return ARGON2_VERSION


def new_salt(size: int) -> bytes:
    salt = os.urandom(size)
    if len(salt) != size:
        raise RandomSourceError(requested=size, received=len(salt))
    return salt


def _secret_bytes(secret: str | bytes) -> bytes:
    if isinstance(secret, bytes):
        return secret
    return secret.encode("utf-8", "surrogatepass")


def derive_key(
    secret: str | bytes,
    salt: bytes,
    time_cost: int,
    memory_cost: int,
    parallelism: int,
    hash_len: int,
) -> bytes:
    """Run Argon2id over ``secret``.

    Raises ``argon2.exceptions.HashingError`` when libargon2 rejects the
    parameters (salt too short, memory below 8 * parallelism, ...).
    """
    return hash_secret_raw(
        secret=_secret_bytes(secret),
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=hash_len,
        type=Type.ID,
        version=ARGON2_VERSION,
    )
