"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest
import pytest_asyncio

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.i18n import set_language
from worklog.infra.cache import LocalCache
from worklog.infra.db import DatabaseEngine
from worklog.infra.durable_store import SqlDurableStore, FileDurableStore
from worklog.services.calendar_service import CalendarService
from worklog.services.session import WorkLogSession
from worklog.services.sync_service import PersistenceSync


@pytest.fixture(autouse=True)
def japanese_labels():
    """Exports and holiday names are checked against the Japanese labels"""
    set_language("ja")
    yield
    set_language("ja")


@pytest.fixture
def calendar_service():
    return CalendarService(country="JP", first_weekday=6, language="ja")


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    """SQLite-backed durable store in a temporary file"""
    engine = DatabaseEngine(f"sqlite+aiosqlite:///{tmp_path / 'worklog-test.db'}")
    store = SqlDurableStore(engine)
    yield store
    await store.close()


@pytest.fixture
def file_store(tmp_path):
    return FileDurableStore(tmp_path / "data")


@pytest.fixture
def cache(tmp_path):
    return LocalCache(tmp_path / "cache.json")


@pytest_asyncio.fixture
async def session(cache, sql_store, calendar_service):
    """An opened session on a fresh cache and SQLite durable tier"""
    work_session = WorkLogSession(PersistenceSync(cache, sql_store), calendar_service,
                                  default_account_name="メイン案件")
    await work_session.open()
    yield work_session
    await work_session.flush()
