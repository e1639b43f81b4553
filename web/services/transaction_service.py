"""
Transaction 서비스

거래 추가/삭제/수정, 최근 거래/단건 조회, 수입/지출 합계.
잔액 반영은 LedgerEngine이 담당.
"""

import logging
from typing import Any

from core.constants import Defaults, ErrorMessages
from core.ledger.engine import LedgerEngine
from core.types import ActionResult
from web.services.base import BaseService

logger = logging.getLogger(__name__)


class TransactionService(BaseService):
    """Transaction 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        verbose_errors: traceback 로그 여부
    """

    def __init__(self, db, verbose_errors: bool = True):
        super().__init__(db, verbose_errors)
        self.engine = LedgerEngine(db)

    async def add_transaction(
        self,
        user_id: str | None,
        amount: Any,
        type: Any,
        category: Any,
        date: Any,
        description: Any = None,
        account_id: Any = None,
    ) -> ActionResult:
        """거래 추가 (연결 계좌 잔액 반영)"""

        async def operation() -> dict[str, Any]:
            tx = await self.engine.add_transaction(
                user_id,
                amount=amount,
                type=type,
                category=category,
                date=date,
                description=description,
                account_id=account_id,
            )
            return tx.to_dict()

        return await self.run_action(
            user_id, "거래 추가", operation, ErrorMessages.CREATE_FAILED
        )

    async def delete_transaction(self, user_id: str | None, transaction_id: Any) -> ActionResult:
        """거래 삭제 (잔액 역반영)"""

        async def operation() -> None:
            await self.engine.delete_transaction(user_id, transaction_id)

        return await self.run_action(
            user_id, "거래 삭제", operation, ErrorMessages.DELETE_FAILED
        )

    async def update_transaction(
        self,
        user_id: str | None,
        transaction_id: Any,
        fields: dict[str, Any],
    ) -> ActionResult:
        """거래 수정 (잔액 재계산 없음)"""

        async def operation() -> dict[str, Any]:
            tx = await self.engine.update_transaction(user_id, transaction_id, fields)
            return tx.to_dict()

        return await self.run_action(
            user_id, "거래 수정", operation, ErrorMessages.UPDATE_FAILED
        )

    async def get_transactions(
        self,
        user_id: str | None,
        limit: int = Defaults.RECENT_TRANSACTIONS_LIMIT,
    ) -> list[dict[str, Any]]:
        """최근 거래 목록 (세션 없으면 빈 목록)"""
        if not user_id:
            return []

        transactions = await self.engine.get_transactions(user_id, limit)
        return [tx.to_dict() for tx in transactions]

    async def get_transaction(self, user_id: str | None, transaction_id: Any) -> ActionResult:
        """거래 단건 조회 (없음/타인 소유는 NOT_FOUND)"""

        async def operation() -> dict[str, Any]:
            tx = await self.engine.get_transaction(user_id, transaction_id)
            return tx.to_dict()

        return await self.run_action(
            user_id, "거래 조회", operation, ErrorMessages.LOAD_FAILED
        )

    async def get_transaction_summary(self, user_id: str | None) -> dict[str, int]:
        """수입/지출/순합계 (세션 없으면 0)"""
        if not user_id:
            return {"income": 0, "expense": 0, "net": 0}

        summary = await self.engine.get_transaction_summary(user_id)
        return summary.to_dict()
