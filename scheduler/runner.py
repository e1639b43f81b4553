"""
Scheduler Runner

설정 로드, 의존성 구성, 메인 루프 관리.
Web과 별도 프로세스로 실행되며 같은 SQLite DB(WAL)를 공유.
"""

import asyncio
import logging
import signal
import sys
from datetime import datetime, timezone

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings, get_settings
from core.constants import Defaults
from core.ledger.engine import LedgerEngine
from core.logging import setup_logging
from core.recurring.advancer import RecurringAdvancer
from core.storage.config_store import ConfigStore, init_default_configs
from scheduler.poller.recurring_poller import RecurringPoller

logger = logging.getLogger(__name__)


class SchedulerRunner:
    """스케줄러 실행기

    Args:
        settings: 애플리케이션 설정
        db: 연결된 SQLiteAdapter
        tick_interval: 메인 루프 주기 (초)
    """

    def __init__(
        self,
        settings: Settings,
        db: SQLiteAdapter,
        tick_interval: float = Defaults.SCHEDULER_TICK_SEC,
    ):
        self.settings = settings
        self.db = db
        self.tick_interval = tick_interval

        self.config_store = ConfigStore(db)
        self.advancer = RecurringAdvancer(db, LedgerEngine(db))
        self.poller: RecurringPoller | None = None

        self._tick_count = 0
        self._processed_total = 0
        self._started_at: str | None = None

    async def initialize(self) -> None:
        """기본 설정 보장 및 Poller 초기화"""
        await init_default_configs(self.db)

        interval = await self.config_store.get_value("scheduler", "poll_interval_sec")
        if not interval:
            interval = self.settings.scheduler_poll_interval_sec

        self.poller = RecurringPoller(
            advancer=self.advancer,
            config_store=self.config_store,
            poll_interval_seconds=int(interval),
        )
        await self.poller.initialize()

        self._started_at = datetime.now(timezone.utc).isoformat()
        await self.config_store.update_scheduler_status(
            is_running=True,
            processed_total=0,
            started_at=self._started_at,
        )

        logger.info("스케줄러 초기화 완료", extra={"poll_interval_sec": interval})

    async def tick(self) -> int:
        """한 번의 tick: 주기가 되었으면 반복 거래 처리

        Returns:
            이번 tick에서 생성된 발생분 수
        """
        self._tick_count += 1

        if self.poller is None or not await self.poller.should_poll():
            return 0

        result = await self.poller.poll()
        processed = result.get("processed_count", 0)
        self._processed_total += processed

        await self.config_store.update_scheduler_status(
            is_running=True,
            processed_total=self._processed_total,
            started_at=self._started_at,
        )
        return processed

    async def run_main_loop(self, shutdown_event: asyncio.Event) -> None:
        """메인 루프 (shutdown_event가 설정될 때까지 tick 반복)"""
        logger.info("메인 루프 시작")

        while not shutdown_event.is_set():
            try:
                await self.tick()
            except Exception as e:
                logger.error(f"메인 루프 에러: {e}", exc_info=True)

            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=self.tick_interval)
            except asyncio.TimeoutError:
                pass

        logger.info("메인 루프 종료")

    async def stop(self) -> None:
        """종료 처리 (마지막 폴링 시간 저장, 상태 초기화)"""
        if self.poller:
            await self.poller.stop()
        await self.config_store.clear_scheduler_status()


def _install_signal_handlers(shutdown_event: asyncio.Event) -> None:
    """SIGINT/SIGTERM 수신 시 shutdown_event 설정 (지원하지 않는 플랫폼은 Ctrl+C 예외로 처리)"""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except (NotImplementedError, RuntimeError):
            pass


async def main() -> None:
    """Scheduler 메인 함수"""
    setup_logging("scheduler")

    logger.info("=" * 60)
    logger.info("Finance Scheduler 시작")
    logger.info("=" * 60)

    # 1. 설정 로드
    try:
        settings = get_settings()
    except Exception as e:
        logger.error(f"설정 로드 실패: {e}")
        sys.exit(1)

    logger.info(f"Mode: {settings.mode.value}")
    logger.info(f"DB: {settings.db_path}")

    # 2. DB 연결 및 스키마 초기화
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)

        runner = SchedulerRunner(settings, db)
        await runner.initialize()

        shutdown_event = asyncio.Event()
        _install_signal_handlers(shutdown_event)

        logger.info("Scheduler 메인 루프 시작 (종료: Ctrl+C)")

        try:
            await runner.run_main_loop(shutdown_event)
        except asyncio.CancelledError:
            logger.info("메인 루프 취소됨")
        except KeyboardInterrupt:
            logger.info("Ctrl+C 감지")
        finally:
            await runner.stop()

    logger.info("=" * 60)
    logger.info("Finance Scheduler 정상 종료")
    logger.info("=" * 60)
