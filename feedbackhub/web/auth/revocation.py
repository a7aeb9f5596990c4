"""Token revocation.

Tokens are stateless, so logging out records the token's ``jti`` until the
token would have expired anyway. Entries past their expiry are evicted.
"""

import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from datetime import datetime
from typing import Optional

from ...shared.redis import get_redis
from ..config import config
from ..logging_safety import RefKind, log_ref
from .jwt import Principal

logger = logging.getLogger(__name__)


class RevocationStore(ABC):
    """Set of revoked token ids."""

    @abstractmethod
    async def revoke(self, token_id: str, expires_at: datetime) -> None:
        """Revoke ``token_id`` until ``expires_at`` (naive UTC)."""

    @abstractmethod
    async def is_revoked(self, token_id: str) -> bool:
        """Check whether ``token_id`` has been revoked."""


class InMemoryRevocationStore(RevocationStore):
    """Process-local revocation set with expiry eviction and a size bound.

    When the bound is reached after evicting expired entries, the entry
    inserted first is dropped.
    """

    def __init__(self, max_entries: int = 10000):
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, datetime]" = OrderedDict()

    def _evict_expired(self, now: datetime) -> None:
        expired = [jti for jti, exp in self._entries.items() if exp <= now]
        for jti in expired:
            del self._entries[jti]

    async def revoke(self, token_id: str, expires_at: datetime) -> None:
        now = datetime.utcnow()
        if expires_at <= now:
            return
        self._evict_expired(now)
        while len(self._entries) >= self.max_entries:
            dropped, _ = self._entries.popitem(last=False)
            logger.warning(
                "revocation.capacity_evicted token_id=%s",
                log_ref(dropped, RefKind.TOKEN),
            )
        self._entries[token_id] = expires_at

    async def is_revoked(self, token_id: str) -> bool:
        exp = self._entries.get(token_id)
        if exp is None:
            return False
        if exp <= datetime.utcnow():
            del self._entries[token_id]
            return False
        return True

    def __len__(self) -> int:
        return len(self._entries)


class RedisRevocationStore(RevocationStore):
    """Revocation set shared between processes; Redis expires the keys."""

    KEY_PREFIX = "feedbackhub:revoked:"

    async def revoke(self, token_id: str, expires_at: datetime) -> None:
        ttl = int((expires_at - datetime.utcnow()).total_seconds())
        if ttl <= 0:
            return
        client = await get_redis()
        await client.set(f"{self.KEY_PREFIX}{token_id}", "1", ex=ttl)

    async def is_revoked(self, token_id: str) -> bool:
        client = await get_redis()
        return bool(await client.exists(f"{self.KEY_PREFIX}{token_id}"))


_store: Optional[RevocationStore] = None


def get_revocation_store() -> RevocationStore:
    """Get or create the process-wide revocation store."""
    global _store
    if _store is None:
        if config.REVOCATION_BACKEND == "redis":
            _store = RedisRevocationStore()
        else:
            _store = InMemoryRevocationStore(max_entries=config.REVOCATION_MAX_ENTRIES)
    return _store


def reset_revocation_store() -> None:
    """Drop the process-wide store (used on shutdown)."""
    global _store
    _store = None


async def revoke_token(principal: Principal, revocations: RevocationStore) -> None:
    """Revoke the token that authenticated ``principal`` until it expires."""
    if not principal.token_id or not principal.expires_at:
        return
    await revocations.revoke(principal.token_id, principal.expires_at)
    logger.info(
        "auth.logout principal_id=%s kind=%s",
        log_ref(principal.id),
        principal.kind.value,
    )
