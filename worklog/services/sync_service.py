"""
Persistence Sync - keeps the cache tier and the durable tier consistent.

Architecture Decision: Write-through conduit
Every mutation is written synchronously to the cache tier and then handed
to the durable tier in the background. The sync layer holds no copy of
the data other than the single payload per key still waiting for its
durable write.

Durable writes are serialized per key: at most one write per key is in
flight, and a newer payload replaces an older one still waiting, so the
last mutation always lands last.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from worklog.domain.models import ResourceKey
from worklog.infra.cache import LocalCache
from worklog.infra.durable_store import DurableStore

logger = logging.getLogger(__name__)


class PersistenceSync:
    """
    Dual-tier store for accounts, per-account logs and per-account settings.
    """

    def __init__(self, cache: LocalCache, durable: Optional[DurableStore] = None):
        self.cache = cache
        self.durable = durable
        self._pending: Dict[ResourceKey, Any] = {}
        self._writers: Dict[ResourceKey, asyncio.Task] = {}

    @property
    def has_durable(self) -> bool:
        return self.durable is not None

    def read_cached(self, key: ResourceKey) -> Any:
        """Read a JSON resource from the cache tier, or None"""
        raw = self.cache.get(key.name)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt cache entry {key}: {e}")
            return None

    async def read_durable(self, key: ResourceKey) -> Any:
        """Read a resource from the durable tier, or None if absent/unavailable"""
        if self.durable is None:
            return None
        return await self.durable.load(key)

    def save(self, key: ResourceKey, value: Any) -> None:
        """
        Persist a JSON resource to both tiers.

        The cache write is complete when this returns; the durable write is
        scheduled on the running event loop.
        """
        self.cache.set(key.name, json.dumps(value, ensure_ascii=False))
        self._schedule(key, value)

    def refresh_cache(self, key: ResourceKey, value: Any) -> None:
        """Update only the cache tier with a value read from the durable tier"""
        self.cache.set(key.name, json.dumps(value, ensure_ascii=False))

    def save_backup(self, key: ResourceKey, text: str) -> None:
        """Schedule a durable-only raw text write (human-readable backup)"""
        self._schedule(key, text)

    def _schedule(self, key: ResourceKey, value: Any) -> None:
        if self.durable is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop, durable write for {key} skipped")
            return
        self._pending[key] = value
        writer = self._writers.get(key)
        if writer is None or writer.done():
            self._writers[key] = loop.create_task(self._drain(key))

    async def _drain(self, key: ResourceKey) -> None:
        while key in self._pending:
            value = self._pending.pop(key)
            result = await self.durable.save(key, value)
            if not result.success:
                logger.warning(f"Durable write for {key} failed, cache tier remains current: {result.error}")

    def pending_keys(self, account_id: Optional[str] = None):
        """Keys with a durable write queued or in flight"""
        return [key for key, writer in self._writers.items()
                if not writer.done() and (account_id is None or key.account_id == account_id)]

    async def flush(self, account_id: Optional[str] = None) -> None:
        """
        Wait until queued durable writes have landed.

        Args:
            account_id: Only wait for this account's resources (None = all)
        """
        while True:
            writers = [self._writers[key] for key in self.pending_keys(account_id)]
            if not writers:
                return
            await asyncio.gather(*writers)

    async def close(self) -> None:
        await self.flush()
        if self.durable is not None:
            await self.durable.close()
