"""Password hashing with bcrypt.

bcrypt is CPU bound, so both operations run in the threadpool to keep the
event loop free while a hash is computed.
"""

import logging

import bcrypt
from starlette.concurrency import run_in_threadpool

from ..config import config

logger = logging.getLogger(__name__)

# bcrypt only considers the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def _hash(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _check(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("password.verify_failed reason=unusable_hash_or_input")
        return False


async def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
    return await run_in_threadpool(_hash, password, config.BCRYPT_ROUNDS)


async def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash; malformed input never matches."""
    return await run_in_threadpool(_check, password, password_hash)


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES
