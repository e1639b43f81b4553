"""
BasePoller

모든 Poller의 베이스 클래스.
공통 폴링 로직과 마지막 폴링 시간 관리 제공.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from core.storage.config_store import ConfigStore

logger = logging.getLogger(__name__)


class BasePoller(ABC):
    """Poller 베이스 클래스

    주기적으로 작업을 실행하는 공통 로직 제공.
    마지막 실행 시간은 config_store에 저장되어 재시작 후에도 주기가 유지됨.

    Args:
        config_store: 설정 저장소 (마지막 폴링 시간 저장)
        poll_interval_seconds: 폴링 간격 (초)
    """

    def __init__(
        self,
        config_store: ConfigStore,
        poll_interval_seconds: int,
    ):
        self.config_store = config_store
        self.poll_interval_seconds = poll_interval_seconds

        self._last_poll_time: datetime | None = None
        self._is_running: bool = False

    @property
    @abstractmethod
    def poller_name(self) -> str:
        """Poller 이름 (로깅 및 설정 키용)"""
        ...

    @property
    def config_key(self) -> str:
        """설정 저장 키"""
        return f"poller_{self.poller_name}_last_poll"

    @property
    def last_poll_time(self) -> datetime | None:
        """마지막 폴링 시간"""
        return self._last_poll_time

    async def initialize(self) -> None:
        """초기화: 마지막 폴링 시간 복구"""
        saved_state = await self.config_store.get(self.config_key, use_cache=False)

        if saved_state and saved_state.get("last_poll_time"):
            last_poll_str = saved_state["last_poll_time"]
            self._last_poll_time = datetime.fromisoformat(last_poll_str)

            logger.info(
                f"{self.poller_name} Poller 초기화: 마지막 폴링 시간 복구됨",
                extra={"last_poll_time": last_poll_str},
            )
        else:
            self._last_poll_time = None
            logger.info(f"{self.poller_name} Poller 초기화: 첫 실행")

    async def should_poll(self) -> bool:
        """폴링 필요 여부 확인

        마지막 폴링 이후 poll_interval_seconds가 경과했는지 확인.
        """
        if self._is_running:
            return False

        if self._last_poll_time is None:
            return True

        now = datetime.now(timezone.utc)
        elapsed = (now - self._last_poll_time).total_seconds()

        return elapsed >= self.poll_interval_seconds

    async def poll(self) -> dict[str, Any]:
        """폴링 실행

        Returns:
            폴링 결과:
            {
                "processed_count": int,
                "poll_time": datetime,
                "duration_ms": float,
            }
        """
        if self._is_running:
            logger.warning(f"{self.poller_name} Poller가 이미 실행 중입니다")
            return {"processed_count": 0, "skipped": True}

        self._is_running = True
        start_time = datetime.now(timezone.utc)

        try:
            logger.debug(f"{self.poller_name} Poller 시작")

            processed_count = await self._do_poll(start_time)

            self._last_poll_time = start_time
            await self._save_last_poll_time()

            duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000

            if processed_count > 0:
                logger.info(
                    f"{self.poller_name} Poller 완료",
                    extra={
                        "processed_count": processed_count,
                        "duration_ms": duration_ms,
                    },
                )
            else:
                logger.debug(f"{self.poller_name} Poller 완료: 처리 대상 없음")

            return {
                "processed_count": processed_count,
                "poll_time": start_time,
                "duration_ms": duration_ms,
            }

        except Exception as e:
            logger.error(
                f"{self.poller_name} Poller 실패",
                extra={"error": str(e)},
                exc_info=True,
            )
            return {"processed_count": 0, "error": str(e)}

        finally:
            self._is_running = False

    async def _save_last_poll_time(self) -> None:
        """마지막 폴링 시간 저장"""
        if self._last_poll_time:
            await self.config_store.set(
                self.config_key,
                {"last_poll_time": self._last_poll_time.isoformat()},
            )

    @abstractmethod
    async def _do_poll(self, poll_time: datetime) -> int:
        """실제 폴링 로직 구현

        Args:
            poll_time: 이번 폴링 시작 시간 (UTC)

        Returns:
            처리 건수
        """
        ...

    async def stop(self) -> None:
        """Poller 정지"""
        logger.info(f"{self.poller_name} Poller 정지")
        await self._save_last_poll_time()
