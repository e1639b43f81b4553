"""
헬스 체크 엔드포인트

GET /health - 서버 상태와 스케줄러 상태 확인 (인증 불필요)
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.storage.config_store import ConfigStore
from web.dependencies import get_app_settings, get_db
from web.models.responses import HealthResponse, SchedulerStatusResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    db: SQLiteAdapter = Depends(get_db),
) -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: status, mode, version, scheduler 상태
    """
    config_store = ConfigStore(db)
    status = await config_store.get_scheduler_status()

    return HealthResponse(
        status="ok",
        mode=settings.mode.value,
        version=API_VERSION,
        scheduler=SchedulerStatusResponse(
            enabled=await config_store.is_scheduler_enabled(),
            is_running=bool(status.get("is_running", False)),
            last_heartbeat=status.get("last_heartbeat"),
            started_at=status.get("started_at"),
            processed_total=int(status.get("processed_total", 0)),
        ),
    )
