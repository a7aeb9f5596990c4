"""In-memory token revocation store."""

import asyncio
import unittest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

from feedbackhub.web.auth.revocation import InMemoryRevocationStore, RedisRevocationStore


class InMemoryRevocationStoreTests(unittest.TestCase):
    def test_revoked_token_is_reported_until_expiry(self) -> None:
        store = InMemoryRevocationStore()
        later = datetime.utcnow() + timedelta(minutes=5)

        async def scenario():
            await store.revoke("jti-1", later)
            return await store.is_revoked("jti-1"), await store.is_revoked("jti-2")

        revoked, unknown = asyncio.run(scenario())

        self.assertTrue(revoked)
        self.assertFalse(unknown)

    def test_already_expired_token_is_not_stored(self) -> None:
        store = InMemoryRevocationStore()

        asyncio.run(store.revoke("jti-old", datetime.utcnow() - timedelta(seconds=1)))

        self.assertEqual(len(store), 0)

    def test_expired_entries_are_evicted(self) -> None:
        store = InMemoryRevocationStore()
        # Simulate an entry whose token has since expired
        store._entries["jti-stale"] = datetime.utcnow() - timedelta(seconds=1)

        async def scenario():
            await store.revoke("jti-fresh", datetime.utcnow() + timedelta(minutes=5))
            return await store.is_revoked("jti-stale")

        self.assertFalse(asyncio.run(scenario()))
        self.assertEqual(len(store), 1)

    def test_size_bound_drops_oldest_entry(self) -> None:
        store = InMemoryRevocationStore(max_entries=2)
        later = datetime.utcnow() + timedelta(minutes=5)

        async def scenario():
            for jti in ("a", "b", "c"):
                await store.revoke(jti, later)
            return [await store.is_revoked(jti) for jti in ("a", "b", "c")]

        self.assertEqual(asyncio.run(scenario()), [False, True, True])
        self.assertEqual(len(store), 2)


class RedisRevocationStoreTests(unittest.TestCase):
    def test_revoke_sets_key_with_remaining_lifetime(self) -> None:
        client = AsyncMock()
        client.exists.return_value = 1
        store = RedisRevocationStore()

        async def scenario():
            with patch("feedbackhub.web.auth.revocation.get_redis", AsyncMock(return_value=client)):
                await store.revoke("jti-1", datetime.utcnow() + timedelta(minutes=10))
                return await store.is_revoked("jti-1")

        self.assertTrue(asyncio.run(scenario()))
        key = client.set.await_args.args[0]
        ttl = client.set.await_args.kwargs["ex"]
        self.assertEqual(key, "feedbackhub:revoked:jti-1")
        self.assertTrue(590 <= ttl <= 600)
        client.exists.assert_awaited_once_with("feedbackhub:revoked:jti-1")
