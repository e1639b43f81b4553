"""
RecurringPoller

전체 소유자의 도래한 반복 거래를 주기적으로 처리.
"""

import logging
from datetime import datetime

from core.recurring.advancer import RecurringAdvancer
from core.storage.config_store import ConfigStore
from scheduler.poller.base import BasePoller

logger = logging.getLogger(__name__)


class RecurringPoller(BasePoller):
    """반복 거래 처리 Poller

    기준일은 폴링 시작 시각의 UTC 날짜.
    config_store의 scheduler.enabled가 False면 건너뜀.

    Args:
        advancer: RecurringAdvancer
        config_store: 설정 저장소
        poll_interval_seconds: 폴링 간격 (초)
    """

    def __init__(
        self,
        advancer: RecurringAdvancer,
        config_store: ConfigStore,
        poll_interval_seconds: int,
    ):
        super().__init__(config_store, poll_interval_seconds)
        self.advancer = advancer

    @property
    def poller_name(self) -> str:
        return "recurring"

    async def _do_poll(self, poll_time: datetime) -> int:
        if not await self.config_store.is_scheduler_enabled():
            logger.debug("반복 거래 자동 처리 비활성화 상태")
            return 0

        return await self.advancer.process_due(poll_time.date())
