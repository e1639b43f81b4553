"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """요청 단위 DB 세션 반환

    변경 작업은 각 서비스가 SQLiteAdapter.transaction()으로 작업 단위를 엶.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path) as db:
        yield db


def get_verbose_errors() -> bool:
    """저장소 오류 로그에 traceback 포함 여부 (운영 모드에서는 제외)"""
    return not get_settings().is_production
