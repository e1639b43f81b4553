"""
ConfigStore - 런타임 설정 저장소

config_store 테이블을 통해 런타임 설정 관리.
Web과 Scheduler가 공유하는 값을 저장/조회.

설정 키 구조:
- "scheduler": 스케줄러 설정 (enabled, poll_interval_sec)
- "scheduler_status": 스케줄러 프로세스 상태 (/health 응답에 포함)
- "poller_<name>_last_poll": Poller별 마지막 실행 시간
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


# 기본 설정값
DEFAULT_CONFIGS: dict[str, dict[str, Any]] = {
    "scheduler": {
        "enabled": True,  # False면 반복 거래 자동 처리 중지 (수동 트리거는 가능)
        "poll_interval_sec": None,  # None이면 secrets.yaml 값 사용
    },
    "scheduler_status": {
        "is_running": False,
        "last_heartbeat": None,  # ISO 형식
        "started_at": None,
        "processed_total": 0,  # 프로세스 시작 이후 생성한 발생분 수
    },
}


class ConfigStore:
    """설정 저장소

    config_store 테이블을 읽고 쓰는 클래스.

    Args:
        db: SQLiteAdapter 인스턴스

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        config_store = ConfigStore(db)

        scheduler_config = await config_store.get("scheduler")
        enabled = scheduler_config.get("enabled", True)

        await config_store.set("scheduler", {"enabled": False})
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self._cache: dict[str, dict[str, Any]] = {}

    async def get(self, key: str, use_cache: bool = True) -> dict[str, Any]:
        """설정 조회

        Args:
            key: 설정 키
            use_cache: 캐시 사용 여부 (기본 True)

        Returns:
            설정 값 (dict). 없으면 기본값 사본 반환.
        """
        if use_cache and key in self._cache:
            return self._cache[key]

        try:
            row = await self.db.fetchone(
                """
                SELECT value_json
                FROM config_store
                WHERE config_key = ?
                """,
                (key,),
            )

            if row:
                value = json.loads(row[0]) if isinstance(row[0], str) else row[0]

                self._cache[key] = value

                return value

        except Exception as e:
            logger.warning(f"Failed to get config '{key}': {e}")

        return dict(DEFAULT_CONFIGS.get(key, {}))

    async def get_value(
        self,
        key: str,
        field: str,
        default: Any = None,
    ) -> Any:
        """설정의 특정 필드 조회"""
        config = await self.get(key)
        return config.get(field, default)

    async def set(
        self,
        key: str,
        value: dict[str, Any],
        updated_by: str = "scheduler:system",
    ) -> bool:
        """설정 저장 (UPSERT)

        Args:
            key: 설정 키
            value: 설정 값
            updated_by: 업데이트 주체

        Returns:
            성공 여부
        """
        now = datetime.now(timezone.utc).isoformat()
        value_json = json.dumps(value, ensure_ascii=False)

        try:
            async with self.db.transaction():
                await self.db.execute(
                    """
                    INSERT INTO config_store (config_key, value_json, version, updated_by, created_at, updated_at)
                    VALUES (?, ?, 1, ?, ?, ?)
                    ON CONFLICT(config_key) DO UPDATE SET
                        value_json = excluded.value_json,
                        version = config_store.version + 1,
                        updated_by = excluded.updated_by,
                        updated_at = excluded.updated_at
                    """,
                    (key, value_json, updated_by, now, now),
                )

            self._cache.pop(key, None)

            # heartbeat 로그는 너무 자주 발생하므로 표시하지 않음
            if updated_by != "scheduler:heartbeat":
                logger.info(f"Config '{key}' updated by {updated_by}")
            return True

        except Exception as e:
            logger.error(f"Failed to set config '{key}': {e}")
            return False

    async def ensure_defaults(self) -> None:
        """기본 설정이 없으면 생성

        Scheduler/Web 시작 시 호출하여 필수 설정이 존재하도록 보장.
        """
        for key, default_value in DEFAULT_CONFIGS.items():
            row = await self.db.fetchone(
                "SELECT 1 FROM config_store WHERE config_key = ?",
                (key,),
            )
            if not row:
                await self.set(key, default_value, updated_by="scheduler:init")
                logger.info(f"Created default config: {key}")

    # =========================================================================
    # Scheduler 상태 저장/조회 (/health에서 조회)
    # =========================================================================

    async def is_scheduler_enabled(self) -> bool:
        """자동 처리 활성화 여부 (다른 프로세스의 변경을 반영하도록 캐시 미사용)"""
        config = await self.get("scheduler", use_cache=False)
        return bool(config.get("enabled", True))

    async def get_scheduler_status(self) -> dict[str, Any]:
        """Scheduler 상태 조회

        Returns:
            상태 딕셔너리:
            - is_running: 실행 중 여부
            - last_heartbeat: 마지막 heartbeat 시간
            - started_at: 시작 시간
            - processed_total: 누적 생성 발생분 수
        """
        return await self.get("scheduler_status", use_cache=False)

    async def update_scheduler_status(
        self,
        is_running: bool,
        processed_total: int = 0,
        started_at: str | None = None,
    ) -> bool:
        """Scheduler 상태 업데이트 (heartbeat 포함)"""
        status = {
            "is_running": is_running,
            "last_heartbeat": datetime.now(timezone.utc).isoformat(),
            "started_at": started_at,
            "processed_total": processed_total,
        }
        return await self.set("scheduler_status", status, updated_by="scheduler:heartbeat")

    async def clear_scheduler_status(self) -> bool:
        """Scheduler 종료 시 is_running을 False로 설정"""
        current = dict(await self.get("scheduler_status", use_cache=False))
        current["is_running"] = False
        current["last_heartbeat"] = datetime.now(timezone.utc).isoformat()
        return await self.set("scheduler_status", current, updated_by="scheduler:shutdown")


async def init_default_configs(db: SQLiteAdapter) -> None:
    """기본 설정 초기화

    Scheduler/Web 시작 시 호출하여 기본 설정이 존재하도록 보장.

    Args:
        db: SQLiteAdapter 인스턴스
    """
    config_store = ConfigStore(db)
    await config_store.ensure_defaults()
