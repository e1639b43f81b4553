"""
RecurringAdvancer - 반복 거래 스케줄 처리기

기준일까지 도래한 반복 거래 정의마다:
1. 작업 단위 시작 (BEGIN IMMEDIATE)
2. 정의를 다시 읽어 여전히 활성/도래 상태인지 확인 (아니면 건너뜀)
3. next_run_date 날짜로 거래 1건 생성 (LedgerEngine 경유, 잔액 반영)
4. next_run_date 전진, last_run_date 기록, end_date 초과 시 비활성화
5. 커밋

정의 하나의 실패는 로그만 남기고 나머지 처리를 계속함.
발생분 키(rt:{id}:{날짜})가 UNIQUE이므로 중복 트리거로 같은 발생분이 두 번 생성되지 않음.
"""

import logging
from datetime import date

import aiosqlite

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.state_machines import RecurringState, RecurringStateMachine
from core.errors import FinanceError
from core.ledger.engine import LedgerEngine
from core.recurring.schedule import plan_advance
from core.storage.recurring_store import RecurringStore
from core.utils.idempotency import make_occurrence_key

logger = logging.getLogger(__name__)


class RecurringAdvancer:
    """반복 거래 스케줄 처리기

    Args:
        db: 연결된 SQLiteAdapter
        ledger: LedgerEngine (없으면 같은 db로 생성)
    """

    def __init__(self, db: SQLiteAdapter, ledger: LedgerEngine | None = None):
        self.db = db
        self.ledger = ledger or LedgerEngine(db)
        self.store = RecurringStore(db)

    async def process_due(self, as_of: date, user_id: str | None = None) -> int:
        """도래한 반복 거래 처리

        정의당 한 번의 실행에서 발생분 1건만 생성.
        (밀린 발생분은 다음 실행에서 이어서 처리)

        Args:
            as_of: 기준일
            user_id: 특정 소유자만 처리 (None이면 전체)

        Returns:
            생성된 발생분 수
        """
        due_ids = await self.store.list_due_ids(as_of, user_id)
        if not due_ids:
            return 0

        processed = 0
        for recurring_id in due_ids:
            try:
                if await self._process_one(recurring_id, as_of, user_id):
                    processed += 1
            except FinanceError as e:
                logger.warning(
                    f"반복 거래 처리 실패: {e.message}",
                    extra={"recurring_id": recurring_id},
                )
            except Exception as e:
                logger.error(
                    f"반복 거래 처리 중 오류: {e}",
                    extra={"recurring_id": recurring_id},
                    exc_info=True,
                )

        logger.info(
            "반복 거래 처리 완료",
            extra={
                "as_of": as_of.isoformat(),
                "user_id": user_id,
                "due": len(due_ids),
                "processed": processed,
            },
        )
        return processed

    async def _process_one(
        self,
        recurring_id: str,
        as_of: date,
        user_id: str | None,
    ) -> bool:
        """정의 하나 처리 (독립 작업 단위)

        Returns:
            발생분 생성 여부 (건너뛰면 False)
        """
        try:
            async with self.db.transaction():
                if user_id is None:
                    rt = await self.store.get_by_id(recurring_id)
                else:
                    rt = await self.store.get(user_id, recurring_id)

                if rt is None:
                    return False

                machine = RecurringStateMachine.from_schedule(
                    rt.is_active, rt.next_run_date, as_of, rt.end_date
                )
                if not machine.is_due:
                    # 다른 트리거가 먼저 처리함
                    logger.debug(
                        "이미 처리된 반복 거래 건너뜀",
                        extra={"recurring_id": recurring_id, "state": machine.state},
                    )
                    return False

                advance = plan_advance(rt.next_run_date, rt.frequency, rt.end_date)

                tx = self.ledger.build_transaction(
                    user_id=rt.user_id,
                    amount=rt.amount,
                    type=rt.type,
                    category=rt.category,
                    date=advance.run_date,
                    description=rt.description,
                    account_id=rt.account_id,
                    occurrence_key=make_occurrence_key(rt.id, advance.run_date),
                )
                await self.ledger.record_transaction(tx)
                await self.store.apply_advance(rt.id, advance)

                machine.transition(
                    RecurringState.ACTIVE_PENDING if advance.is_active else RecurringState.INACTIVE
                )

        except aiosqlite.IntegrityError:
            # 같은 발생분 키가 이미 존재 (롤백됨)
            logger.info(
                "이미 생성된 발생분 건너뜀",
                extra={"recurring_id": recurring_id},
            )
            return False

        logger.info(
            "반복 거래 발생분 생성",
            extra={
                "recurring_id": recurring_id,
                "user_id": rt.user_id,
                "run_date": advance.run_date.isoformat(),
                "next_run_date": advance.next_run_date.isoformat(),
                "state": machine.state,
            },
        )
        return True
