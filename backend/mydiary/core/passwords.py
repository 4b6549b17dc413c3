"""Argon2id hashing for passwords and verification codes.

Pipeline:
- hash_secret: salted, memory-hard one-way hash; the encoded result embeds
  salt and cost parameters so verification needs no external state
- verify_secret: recompute and compare, never raises on mismatch
- verify_against_dummy: burns the same time as a real verification when
  there is nothing to verify against (user enumeration defense)

Cost parameters are read from settings on every call, so tests can lower
them without touching this module.
"""

from functools import lru_cache

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from mydiary.core.config import settings

_HASH_LENGTH = 32
_SALT_LENGTH = 16
_DUMMY_SECRET = "mydiary-dummy-secret"  # nosec B105


@lru_cache(maxsize=4)
def _build_hasher(time_cost: int, memory_cost: int, parallelism: int) -> PasswordHasher:
    return PasswordHasher(
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=_HASH_LENGTH,
        salt_len=_SALT_LENGTH,
        type=Type.ID,
    )


def _current_hasher() -> PasswordHasher:
    return _build_hasher(
        settings.argon2_time_cost,
        settings.argon2_memory_cost,
        settings.argon2_parallelism,
    )


@lru_cache(maxsize=4)
def _dummy_hash(time_cost: int, memory_cost: int, parallelism: int) -> str:
    # Built lazily: one full Argon2 run is too slow to pay at import time
    hasher = _build_hasher(time_cost, memory_cost, parallelism)
    return hasher.hash(_DUMMY_SECRET)


def _wipe(buffer: bytearray) -> None:
    buffer[:] = bytes(len(buffer))


def hash_secret(secret: str) -> str:
    """Hash a password or verification code.

    The secret is encoded into a mutable buffer that is zeroed once the
    hash has been computed.

    Args:
        secret: Plain-text secret. Never logged.

    Returns:
        Argon2 encoded hash string (``$argon2id$v=19$m=...``).
    """
    buffer = bytearray(secret.encode("utf-8"))
    try:
        return _current_hasher().hash(bytes(buffer))
    finally:
        _wipe(buffer)


def verify_secret(secret: str, encoded_hash: str) -> bool:
    """Check a plain-text secret against a stored Argon2 hash.

    Args:
        secret: Plain-text secret to check.
        encoded_hash: Hash produced by hash_secret().

    Returns:
        True on match. False on mismatch or a malformed hash.
    """
    buffer = bytearray(secret.encode("utf-8"))
    try:
        return _current_hasher().verify(encoded_hash, bytes(buffer))
    except (VerificationError, InvalidHashError):
        return False
    finally:
        _wipe(buffer)


def verify_against_dummy(secret: str) -> bool:
    """Run a full verification against a fixed dummy hash.

    Security: called when the account lookup misses so the response time
    does not reveal whether the username exists. Always returns False.
    """
    dummy = _dummy_hash(
        settings.argon2_time_cost,
        settings.argon2_memory_cost,
        settings.argon2_parallelism,
    )
    verify_secret(secret, dummy)
    return False
