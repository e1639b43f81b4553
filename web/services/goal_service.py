"""
Goal 서비스

저축 목표 추가/진행도 갱신/삭제/조회. 거래와 연동하지 않음.
"""

import uuid
from typing import Any

from core.constants import ErrorMessages
from core.domain.models import Goal
from core.domain.validation import (
    validate_amount,
    validate_date,
    validate_entity_id,
    validate_goal_name,
)
from core.errors import NotFoundError
from core.storage.goal_store import GoalStore
from core.types import ActionResult
from web.services.base import BaseService


class GoalService(BaseService):
    """Goal 서비스"""

    def __init__(self, db, verbose_errors: bool = True):
        super().__init__(db, verbose_errors)
        self.store = GoalStore(db)

    async def get_goals(self, user_id: str | None) -> list[dict[str, Any]]:
        if not user_id:
            return []

        goals = await self.store.list(user_id)
        return [goal.to_dict() for goal in goals]

    async def add_goal(
        self,
        user_id: str | None,
        name: Any,
        target_amount: Any,
        current_amount: Any = 0,
        deadline: Any = None,
    ) -> ActionResult:

        async def operation() -> dict[str, Any]:
            goal = Goal(
                id=str(uuid.uuid4()),
                user_id=user_id,
                name=validate_goal_name(name),
                target_amount=validate_amount(target_amount, label="Target amount"),
                current_amount=validate_amount(current_amount, label="Current amount"),
                deadline=validate_date(deadline, "Deadline") if deadline else None,
            )

            async with self.db.transaction():
                await self.store.insert(goal)
            return goal.to_dict()

        return await self.run_action(
            user_id, "목표 추가", operation, ErrorMessages.CREATE_FAILED
        )

    async def update_goal_progress(
        self,
        user_id: str | None,
        goal_id: Any,
        current_amount: Any,
    ) -> ActionResult:
        """진행 금액 갱신 (목표 금액 초과 허용)"""

        async def operation() -> dict[str, Any]:
            gid = validate_entity_id(goal_id, "goal ID")
            amount = validate_amount(current_amount, label="Current amount")

            async with self.db.transaction():
                if not await self.store.update_progress(user_id, gid, amount):
                    raise NotFoundError(ErrorMessages.NOT_FOUND)
                goal = await self.store.get(user_id, gid)
            return goal.to_dict()

        return await self.run_action(
            user_id, "목표 진행도 갱신", operation, ErrorMessages.UPDATE_FAILED
        )

    async def delete_goal(self, user_id: str | None, goal_id: Any) -> ActionResult:

        async def operation() -> None:
            gid = validate_entity_id(goal_id, "goal ID")
            async with self.db.transaction():
                if not await self.store.delete(user_id, gid):
                    raise NotFoundError(ErrorMessages.NOT_FOUND)

        return await self.run_action(
            user_id, "목표 삭제", operation, ErrorMessages.DELETE_FAILED
        )
