"""
Tests for the durable tier backends.
"""

import json
import pytest
from worklog.domain.models import AppPreferences, ResourceKey
from worklog.infra.durable_store import DurableStore, FileDurableStore, SqlDurableStore, create_durable_store
from worklog.infra.config import Settings


class BrokenStore(DurableStore):
    """Backend whose storage is gone"""

    async def _write(self, key, content):
        raise OSError("disk full")

    async def _read(self, key):
        raise OSError("disk gone")


@pytest.mark.asyncio
async def test_sql_store_round_trips_json(sql_store):
    key = ResourceKey.logs("acc")
    payload = {"2024-06-03": {"start": "09:00", "end": "18:00", "breakTime": 60, "isOffice": False, "duration": 8.0}}

    result = await sql_store.save(key, payload)

    assert result.success
    assert await sql_store.load(key) == payload


@pytest.mark.asyncio
async def test_sql_store_overwrites_same_key(sql_store):
    key = ResourceKey.settings("acc")
    await sql_store.save(key, {"maxHours": 100})
    await sql_store.save(key, {"maxHours": 120})

    assert await sql_store.load(key) == {"maxHours": 120}


@pytest.mark.asyncio
async def test_sql_store_keeps_raw_text_verbatim(sql_store):
    key = ResourceKey.backup("acc")
    text = "案件名: メイン案件\n日付,曜日\n"

    await sql_store.save(key, text)

    assert await sql_store.load(key) == text


@pytest.mark.asyncio
async def test_sql_store_missing_key_is_none(sql_store):
    assert await sql_store.load(ResourceKey.logs("nobody")) is None


@pytest.mark.asyncio
async def test_file_store_layout(file_store):
    await file_store.save(ResourceKey.accounts(), [{"id": "default", "name": "メイン案件"}])
    await file_store.save(ResourceKey.backup("default"), "a,b\n")

    accounts_file = file_store.data_dir / "accounts.json"
    backup_file = file_store.data_dir / "backup-default.csv"
    assert json.loads(accounts_file.read_text(encoding="utf-8")) == [{"id": "default", "name": "メイン案件"}]
    assert backup_file.read_text(encoding="utf-8") == "a,b\n"
    assert not (file_store.data_dir / "backup-default.csv.json").exists()


@pytest.mark.asyncio
async def test_file_store_round_trip(file_store):
    key = ResourceKey.settings("x")
    await file_store.save(key, {"defaultStart": "08:30"})

    assert await file_store.load(key) == {"defaultStart": "08:30"}
    assert await file_store.load(ResourceKey.settings("y")) is None


@pytest.mark.asyncio
async def test_file_store_corrupt_file_loads_as_none(file_store):
    key = ResourceKey.logs("x")
    path = file_store.path_for(key)
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    assert await file_store.load(key) is None


@pytest.mark.asyncio
async def test_failures_are_reported_not_raised():
    store = BrokenStore()

    result = await store.save(ResourceKey.accounts(), [])

    assert result.success is False
    assert "disk full" in result.error
    assert await store.load(ResourceKey.accounts()) is None


def test_factory_selects_backend(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def settings_for(backend):
        return Settings(config_dir=tmp_path / "config", data_dir=tmp_path / "data",
                        preferences=AppPreferences(durable_backend=backend))

    store = create_durable_store(settings_for("files"))
    assert isinstance(store, FileDurableStore)
    assert store.data_dir == tmp_path / "data" / "data"

    assert isinstance(create_durable_store(settings_for("sqlite")), SqlDurableStore)
    assert create_durable_store(settings_for("none")) is None
    assert create_durable_store(settings_for("cloud")) is None
