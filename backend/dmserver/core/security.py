from __future__ import annotations

import hmac
import logging

from argon2.exceptions import HashingError

from dmserver.core.exceptions import HashDecodeError
from dmserver.crypto.hashcodec import Argon2Params, decode_hash, encode_hash
from dmserver.crypto.kdf import current_version, default_profile, derive_key, new_salt

logger = logging.getLogger(__name__)

# Argon2id profile used for every new hash: t=1, m=64 MiB, p=4, 32-byte key
_profile = default_profile()


def hash_password(password: str | bytes) -> str:
    """Hash a password with a fresh random salt and return the encoded string.

    Raises RandomSourceError if the OS returns a short salt.
    """
    salt = new_salt(_profile.salt_len)
    key = derive_key(
        password,
        salt,
        time_cost=_profile.time_cost,
        memory_cost=_profile.memory_cost,
        parallelism=_profile.parallelism,
        hash_len=_profile.hash_len,
    )
    return encode_hash(
        Argon2Params(
            version=current_version(),
            time_cost=_profile.time_cost,
            memory_cost=_profile.memory_cost,
            parallelism=_profile.parallelism,
            salt=salt,
            key=key,
        )
    )


def verify_password(password: str | bytes, password_hash: str) -> bool:
    """Check a password against an encoded hash. Never raises."""
    try:
        params = decode_hash(password_hash)
    except HashDecodeError as e:
        logger.warning("error verifying hash: %s", e)
        return False

    try:
        candidate = derive_key(
            password,
            params.salt,
            time_cost=params.time_cost,
            memory_cost=params.memory_cost,
            parallelism=params.parallelism,
            hash_len=params.key_len,
        )
    except (HashingError, MemoryError) as e:
        logger.warning("error verifying hash: argon2 rejected parameters: %s", e)
        return False

    return hmac.compare_digest(candidate, params.key)
