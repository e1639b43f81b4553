"""
ConfigStore 테스트

config_store 테이블 CRUD 및 스케줄러 상태 저장 테스트
"""

import json

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.config_store import (
    DEFAULT_CONFIGS,
    ConfigStore,
    init_default_configs,
)


@pytest_asyncio.fixture
async def config_store(db: SQLiteAdapter) -> ConfigStore:
    """ConfigStore 인스턴스"""
    return ConfigStore(db)


class TestConfigStoreGet:
    """get() 메서드 테스트"""

    @pytest.mark.asyncio
    async def test_get_returns_default_when_not_exists(
        self,
        config_store: ConfigStore,
    ) -> None:
        """존재하지 않는 키는 기본값 반환"""
        result = await config_store.get("scheduler")

        assert result == DEFAULT_CONFIGS["scheduler"]

    @pytest.mark.asyncio
    async def test_default_is_copy(self, config_store: ConfigStore) -> None:
        """반환된 기본값을 수정해도 DEFAULT_CONFIGS는 그대로"""
        result = await config_store.get("scheduler")
        result["enabled"] = False

        assert DEFAULT_CONFIGS["scheduler"]["enabled"] is True

    @pytest.mark.asyncio
    async def test_unknown_key_returns_empty(self, config_store: ConfigStore) -> None:
        assert await config_store.get("unknown") == {}

    @pytest.mark.asyncio
    async def test_get_uses_cache(self, config_store: ConfigStore) -> None:
        """캐시 사용 확인"""
        await config_store.set("test_key", {"test": "value"})

        assert await config_store.get("test_key") == {"test": "value"}
        assert "test_key" in config_store._cache

    @pytest.mark.asyncio
    async def test_get_bypass_cache(
        self,
        config_store: ConfigStore,
        db: SQLiteAdapter,
    ) -> None:
        """캐시 무시하고 DB에서 직접 읽기"""
        await config_store.set("test_key", {"test": "value"})
        await config_store.get("test_key")  # 캐시에 저장

        # DB에서 직접 수정 (다른 프로세스의 변경)
        await db.execute(
            "UPDATE config_store SET value_json = ? WHERE config_key = ?",
            (json.dumps({"test": "modified"}), "test_key"),
        )
        await db.commit()

        assert await config_store.get("test_key") == {"test": "value"}
        assert await config_store.get("test_key", use_cache=False) == {"test": "modified"}


class TestConfigStoreSet:
    """set() / get_value() 테스트"""

    @pytest.mark.asyncio
    async def test_set_updates_existing_config(self, config_store: ConfigStore) -> None:
        await config_store.set("test", {"version": 1})
        await config_store.set("test", {"version": 2})

        assert await config_store.get("test", use_cache=False) == {"version": 2}

    @pytest.mark.asyncio
    async def test_set_increments_version(
        self, config_store: ConfigStore, db: SQLiteAdapter
    ) -> None:
        await config_store.set("test", {"v": 1})
        await config_store.set("test", {"v": 2})

        row = await db.fetchone("SELECT version FROM config_store WHERE config_key = 'test'")
        assert row[0] == 2

    @pytest.mark.asyncio
    async def test_set_invalidates_cache(self, config_store: ConfigStore) -> None:
        await config_store.set("test", {"v": 1})
        await config_store.get("test")
        assert "test" in config_store._cache

        await config_store.set("test", {"v": 2})

        assert "test" not in config_store._cache

    @pytest.mark.asyncio
    async def test_get_value(self, config_store: ConfigStore) -> None:
        await config_store.set("config", {"field1": "value1"})

        assert await config_store.get_value("config", "field1") == "value1"
        assert await config_store.get_value("config", "missing", default="d") == "d"


class TestConfigStoreDefaults:
    """기본 설정 초기화 테스트"""

    @pytest.mark.asyncio
    async def test_init_default_configs(
        self, db: SQLiteAdapter, config_store: ConfigStore
    ) -> None:
        await init_default_configs(db)

        rows = await db.fetchall("SELECT config_key FROM config_store")

        assert {row[0] for row in rows} == set(DEFAULT_CONFIGS)

    @pytest.mark.asyncio
    async def test_ensure_defaults_keeps_existing(self, config_store: ConfigStore) -> None:
        """이미 저장된 값은 덮어쓰지 않음"""
        await config_store.set("scheduler", {"enabled": False, "poll_interval_sec": 60})

        await config_store.ensure_defaults()

        assert await config_store.is_scheduler_enabled() is False


class TestSchedulerStatus:
    """스케줄러 상태 저장/조회"""

    @pytest.mark.asyncio
    async def test_scheduler_enabled_by_default(self, config_store: ConfigStore) -> None:
        assert await config_store.is_scheduler_enabled() is True

    @pytest.mark.asyncio
    async def test_disable_scheduler(self, config_store: ConfigStore) -> None:
        await config_store.set(
            "scheduler", {"enabled": False, "poll_interval_sec": None}, updated_by="web:admin"
        )

        assert await config_store.is_scheduler_enabled() is False

    @pytest.mark.asyncio
    async def test_update_and_clear_status(self, config_store: ConfigStore) -> None:
        await config_store.update_scheduler_status(
            is_running=True, processed_total=3, started_at="2024-01-01T00:00:00+00:00"
        )

        status = await config_store.get_scheduler_status()
        assert status["is_running"] is True
        assert status["processed_total"] == 3
        assert status["last_heartbeat"] is not None

        await config_store.clear_scheduler_status()

        status = await config_store.get_scheduler_status()
        assert status["is_running"] is False
        assert status["processed_total"] == 3
        assert status["started_at"] == "2024-01-01T00:00:00+00:00"
