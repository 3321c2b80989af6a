"""
Durable tier - slower, authoritative-when-present storage.

Architecture Decision: Strategy Pattern + Factory Pattern
Defines an abstract async interface with two backends (SQLite through
async SQLAlchemy, or a plain directory of files). The factory picks one
from the application settings; `None` means the session runs against the
cache tier alone.

Every failure is caught at this boundary: `save` reports it in the
SaveResult and `load` returns None.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from sqlalchemy import select

from worklog.domain.models import ResourceKey, SaveResult
from worklog.infra.db import DatabaseEngine, ResourceModel

logger = logging.getLogger(__name__)


def encode_value(key: ResourceKey, value: Any) -> str:
    """Encode a payload according to the key's encoding tag"""
    if key.is_raw:
        return value if isinstance(value, str) else str(value)
    return json.dumps(value, indent=2, ensure_ascii=False)


def decode_value(key: ResourceKey, content: str) -> Any:
    """Inverse of encode_value"""
    if key.is_raw:
        return content
    return json.loads(content)


class DurableStore(ABC):
    """
    Abstract base class for the durable tier.

    Backends implement the raw read/write; this class handles encoding
    and turns exceptions into SaveResult / None.
    """

    @abstractmethod
    async def _write(self, key: ResourceKey, content: str) -> None:
        """Persist encoded content under the key"""

    @abstractmethod
    async def _read(self, key: ResourceKey) -> Optional[str]:
        """Return encoded content or None when the key was never saved"""

    async def save(self, key: ResourceKey, value: Any) -> SaveResult:
        """Encode and store a value. Never raises."""
        try:
            content = encode_value(key, value)
            await self._write(key, content)
            return SaveResult(success=True)
        except Exception as e:
            logger.warning(f"Durable save failed for {key}: {e}")
            return SaveResult(success=False, error=str(e))

    async def load(self, key: ResourceKey) -> Any:
        """Load and decode a value, or None if absent or unreadable. Never raises."""
        try:
            content = await self._read(key)
            if content is None:
                return None
            return decode_value(key, content)
        except Exception as e:
            logger.warning(f"Durable load failed for {key}: {e}")
            return None

    async def close(self) -> None:
        """Release backend resources"""


class SqlDurableStore(DurableStore):
    """
    Durable tier backed by a SQLite database via async SQLAlchemy.
    """

    def __init__(self, engine: Optional[DatabaseEngine] = None):
        self.engine = engine or DatabaseEngine.get_instance()
        self._schema_ready = False
        self._schema_lock = asyncio.Lock()

    async def _ensure_schema(self) -> None:
        async with self._schema_lock:
            if not self._schema_ready:
                await self.engine.create_tables()
                self._schema_ready = True

    async def _write(self, key: ResourceKey, content: str) -> None:
        await self._ensure_schema()
        session = self.engine.get_session()
        async with session:
            # Fetch-modify-commit keeps one row per logical key
            result = await session.execute(
                select(ResourceModel).where(ResourceModel.key == key.name)
            )
            model = result.scalar_one_or_none()
            if model is None:
                model = ResourceModel(key=key.name, encoding=key.encoding.value, content=content,
                                      account_id=key.account_id)
                session.add(model)
            else:
                model.encoding = key.encoding.value
                model.content = content
                model.updated_at = datetime.now()
            await session.commit()

    async def _read(self, key: ResourceKey) -> Optional[str]:
        await self._ensure_schema()
        session = self.engine.get_session()
        async with session:
            result = await session.execute(
                select(ResourceModel.content).where(ResourceModel.key == key.name)
            )
            return result.scalar_one_or_none()

    async def close(self) -> None:
        await self.engine.dispose()


class FileDurableStore(DurableStore):
    """
    Durable tier backed by one file per key in a data directory.

    JSON resources get a `.json` suffix; raw text keys already carry their
    own extension (e.g. `backup-<id>.csv`) and are written verbatim.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, key: ResourceKey) -> Path:
        file_name = key.name if key.is_raw else f"{key.name}.json"
        return self.data_dir / file_name

    def _write_sync(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_text(content, encoding='utf-8')
        tmp_path.replace(path)

    def _read_sync(self, path: Path) -> Optional[str]:
        if not path.exists():
            return None
        return path.read_text(encoding='utf-8')

    async def _write(self, key: ResourceKey, content: str) -> None:
        await asyncio.to_thread(self._write_sync, self.path_for(key), content)

    async def _read(self, key: ResourceKey) -> Optional[str]:
        return await asyncio.to_thread(self._read_sync, self.path_for(key))


def create_durable_store(settings) -> Optional[DurableStore]:
    """
    Create the durable store selected in the preferences.

    Returns:
        DurableStore instance, or None when running cache-only
    """
    backend = (settings.preferences.durable_backend or "none").lower()

    if backend == "sqlite":
        return SqlDurableStore(DatabaseEngine(settings.get_db_url()))
    elif backend == "files":
        return FileDurableStore(settings.files_dir)
    elif backend == "none":
        return None
    else:
        logger.warning(f"Unknown durable backend '{backend}', running without durable storage")
        return None
