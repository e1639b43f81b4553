"""
Budget 서비스

예산 추가/삭제 및 지출 합계를 포함한 조회.
"""

import uuid
from typing import Any

from core.constants import ErrorMessages
from core.domain.models import Budget
from core.domain.validation import (
    validate_amount,
    validate_budget_period,
    validate_category,
    validate_date,
    validate_date_range,
    validate_entity_id,
)
from core.errors import NotFoundError
from core.storage.budget_store import BudgetStore
from core.types import ActionResult
from web.services.base import BaseService


class BudgetService(BaseService):
    """Budget 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        verbose_errors: traceback 로그 여부
    """

    def __init__(self, db, verbose_errors: bool = True):
        super().__init__(db, verbose_errors)
        self.store = BudgetStore(db)

    async def get_budgets(self, user_id: str | None) -> list[dict[str, Any]]:
        """예산 목록 (spent는 매 조회 시 계산, 캐시하지 않음)"""
        if not user_id:
            return []

        budgets = await self.store.list_with_spent(user_id)
        return [budget.to_dict() for budget in budgets]

    async def add_budget(
        self,
        user_id: str | None,
        category: Any,
        amount: Any,
        period: Any,
        start_date: Any,
        end_date: Any,
    ) -> ActionResult:
        """예산 추가 (금액 > 0, 시작일 ≤ 종료일)"""

        async def operation() -> dict[str, Any]:
            start = validate_date(start_date, "Start date")
            end = validate_date(end_date, "End date")
            validate_date_range(start, end)

            budget = Budget(
                id=str(uuid.uuid4()),
                user_id=user_id,
                category=validate_category(category),
                amount=validate_amount(amount, positive=True),
                period=validate_budget_period(period),
                start_date=start,
                end_date=end,
            )

            async with self.db.transaction():
                await self.store.insert(budget)
            return budget.to_dict()

        return await self.run_action(
            user_id, "예산 추가", operation, ErrorMessages.CREATE_FAILED
        )

    async def delete_budget(self, user_id: str | None, budget_id: Any) -> ActionResult:
        """예산 삭제"""

        async def operation() -> None:
            bid = validate_entity_id(budget_id, "budget ID")
            async with self.db.transaction():
                if not await self.store.delete(user_id, bid):
                    raise NotFoundError(ErrorMessages.NOT_FOUND)

        return await self.run_action(
            user_id, "예산 삭제", operation, ErrorMessages.DELETE_FAILED
        )
