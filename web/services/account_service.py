"""
Account 서비스

계좌 추가/삭제/조회.
"""

from typing import Any

from core.constants import ErrorMessages
from core.ledger.engine import LedgerEngine
from core.types import ActionResult
from web.services.base import BaseService


class AccountService(BaseService):
    """Account 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        verbose_errors: traceback 로그 여부
    """

    def __init__(self, db, verbose_errors: bool = True):
        super().__init__(db, verbose_errors)
        self.engine = LedgerEngine(db)

    async def add_account(
        self,
        user_id: str | None,
        name: Any,
        type: Any,
        balance: Any = 0,
    ) -> ActionResult:
        """계좌 추가 (이름은 소유자 내 대소문자 무시 고유)"""

        async def operation() -> dict[str, Any]:
            account = await self.engine.add_account(user_id, name, type, balance)
            return account.to_dict()

        return await self.run_action(
            user_id, "계좌 추가", operation, ErrorMessages.CREATE_FAILED
        )

    async def delete_account(self, user_id: str | None, account_id: Any) -> ActionResult:
        """계좌 삭제 (거래가 남아 있으면 거부)"""

        async def operation() -> None:
            await self.engine.delete_account(user_id, account_id)

        return await self.run_action(
            user_id, "계좌 삭제", operation, ErrorMessages.DELETE_FAILED
        )

    async def get_accounts(self, user_id: str | None) -> list[dict[str, Any]]:
        """계좌 목록 (세션 없으면 빈 목록)"""
        if not user_id:
            return []

        accounts = await self.engine.get_accounts(user_id)
        return [account.to_dict() for account in accounts]
