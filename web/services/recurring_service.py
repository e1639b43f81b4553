"""
Recurring 서비스

반복 거래 정의 CRUD 및 처리 트리거.

처리(process_recurring_transactions)는 조회와 분리된 명시적 작업.
Scheduler 프로세스가 전체 소유자를 주기적으로 처리하며,
이 서비스는 소유자 한 명에 대한 수동 트리거를 제공.
"""

import logging
import uuid
from datetime import date
from typing import Any

from core.constants import ErrorMessages
from core.domain.models import RecurringTransaction
from core.domain.validation import (
    validate_amount,
    validate_category,
    validate_date,
    validate_date_range,
    validate_description,
    validate_entity_id,
    validate_frequency,
    validate_optional_account_id,
    validate_transaction_type,
)
from core.errors import NotFoundError, ValidationError
from core.ledger.engine import LedgerEngine
from core.recurring.advancer import RecurringAdvancer
from core.storage.account_store import AccountStore
from core.storage.recurring_store import RecurringStore
from core.types import ActionResult
from core.utils.timezone import today_utc
from web.services.base import BaseService

logger = logging.getLogger(__name__)


class RecurringService(BaseService):
    """Recurring 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        verbose_errors: traceback 로그 여부
    """

    def __init__(self, db, verbose_errors: bool = True):
        super().__init__(db, verbose_errors)
        self.store = RecurringStore(db)
        self.accounts = AccountStore(db)
        self.advancer = RecurringAdvancer(db, LedgerEngine(db))

    async def add_recurring_transaction(
        self,
        user_id: str | None,
        amount: Any,
        type: Any,
        category: Any,
        frequency: Any,
        start_date: Any,
        end_date: Any = None,
        description: Any = None,
        account_id: Any = None,
    ) -> ActionResult:
        """반복 거래 정의 추가

        next_run_date = start_date, is_active = True로 생성.
        """

        async def operation() -> dict[str, Any]:
            start = validate_date(start_date, "Start date")
            end = validate_date(end_date, "End date") if end_date else None
            validate_date_range(start, end)

            rt = RecurringTransaction(
                id=str(uuid.uuid4()),
                user_id=user_id,
                account_id=validate_optional_account_id(account_id),
                amount=validate_amount(amount),
                type=validate_transaction_type(type),
                category=validate_category(category),
                description=validate_description(description),
                frequency=validate_frequency(frequency),
                start_date=start,
                end_date=end,
                next_run_date=start,
                last_run_date=None,
                is_active=True,
            )

            async with self.db.transaction():
                await self._ensure_account(user_id, rt.account_id)
                await self.store.insert(rt)

            logger.info(
                "반복 거래 추가",
                extra={
                    "user_id": user_id,
                    "recurring_id": rt.id,
                    "frequency": rt.frequency.value,
                },
            )
            return rt.to_dict()

        return await self.run_action(
            user_id, "반복 거래 추가", operation, ErrorMessages.CREATE_FAILED
        )

    async def update_recurring_transaction(
        self,
        user_id: str | None,
        recurring_id: Any,
        fields: dict[str, Any],
    ) -> ActionResult:
        """반복 거래 정의 수정

        is_active를 다시 True로 바꿀 수 있으나 next_run_date는 다시 계산하지 않음.
        """

        async def operation() -> dict[str, Any]:
            rid = validate_entity_id(recurring_id, "recurring ID")
            values = self._validate_fields(fields)

            async with self.db.transaction():
                current = await self.store.get(user_id, rid)
                if current is None:
                    raise NotFoundError(ErrorMessages.NOT_FOUND)

                start = validate_date(values.get("start_date", current.start_date))
                end_value = values["end_date"] if "end_date" in values else current.end_date
                end = validate_date(end_value) if end_value else None
                validate_date_range(start, end)

                if values.get("account_id"):
                    await self._ensure_account(user_id, values["account_id"])

                await self.store.update(user_id, rid, values)
                updated = await self.store.get(user_id, rid)

            logger.info(
                "반복 거래 수정",
                extra={"user_id": user_id, "recurring_id": rid, "fields": list(values)},
            )
            return updated.to_dict()

        return await self.run_action(
            user_id, "반복 거래 수정", operation, ErrorMessages.UPDATE_FAILED
        )

    async def delete_recurring_transaction(
        self,
        user_id: str | None,
        recurring_id: Any,
    ) -> ActionResult:
        """반복 거래 정의 삭제 (이미 생성된 거래는 유지)"""

        async def operation() -> None:
            rid = validate_entity_id(recurring_id, "recurring ID")
            async with self.db.transaction():
                if not await self.store.delete(user_id, rid):
                    raise NotFoundError(ErrorMessages.NOT_FOUND)
            logger.info("반복 거래 삭제", extra={"user_id": user_id, "recurring_id": rid})

        return await self.run_action(
            user_id, "반복 거래 삭제", operation, ErrorMessages.DELETE_FAILED
        )

    async def get_recurring_transactions(self, user_id: str | None) -> list[dict[str, Any]]:
        """반복 거래 목록 (계좌 이름/유형 포함)"""
        if not user_id:
            return []
        return await self.store.list_with_account(user_id)

    async def process_recurring_transactions(
        self,
        user_id: str | None,
        as_of: date | None = None,
    ) -> ActionResult:
        """소유자의 도래한 반복 거래 처리

        Args:
            user_id: 소유자 ID
            as_of: 기준일 (기본 오늘, UTC)

        Returns:
            ActionResult(data={"processed_count": n})
        """

        async def operation() -> dict[str, int]:
            processed = await self.advancer.process_due(as_of or today_utc(), user_id)
            return {"processed_count": processed}

        return await self.run_action(
            user_id, "반복 거래 처리", operation, ErrorMessages.PROCESS_FAILED
        )

    async def _ensure_account(self, user_id: str, account_id: str | None) -> None:
        """연결 계좌가 소유자의 계좌인지 확인"""
        if account_id is None:
            return
        if await self.accounts.get(user_id, account_id) is None:
            raise NotFoundError(ErrorMessages.ACCOUNT_NOT_FOUND)

    def _validate_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """수정 요청 값 검증 후 DB 저장 형식으로 변환"""
        values: dict[str, Any] = {}

        if "amount" in fields:
            values["amount"] = validate_amount(fields["amount"])
        if "type" in fields:
            values["type"] = validate_transaction_type(fields["type"]).value
        if "category" in fields:
            values["category"] = validate_category(fields["category"])
        if "description" in fields:
            values["description"] = validate_description(fields["description"])
        if "frequency" in fields:
            values["frequency"] = validate_frequency(fields["frequency"]).value
        if "start_date" in fields:
            values["start_date"] = validate_date(fields["start_date"], "Start date").isoformat()
        if "end_date" in fields:
            end = fields["end_date"]
            values["end_date"] = validate_date(end, "End date").isoformat() if end else None
        if "account_id" in fields:
            values["account_id"] = validate_optional_account_id(fields["account_id"])
        if "is_active" in fields:
            if not isinstance(fields["is_active"], bool):
                raise ValidationError("is_active must be true or false.")
            values["is_active"] = int(fields["is_active"])

        return values
