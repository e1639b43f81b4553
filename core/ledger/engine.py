"""
LedgerEngine - 계좌 잔액 일관성 엔진

거래 추가/삭제/수정과 계좌 잔액을 하나의 작업 단위 안에서 동기화.

잔액 규칙:
- INCOME: balance += amount
- EXPENSE: balance -= amount
- TRANSFER: 잔액 변동 없음
- 계좌 없는 거래: 잔액 변동 없음

잔액 변경은 항상 `balance = balance + ?` 원자적 UPDATE로 처리하며,
대상 계좌가 없으면(또는 타인 소유면) 작업 단위 전체를 롤백.
"""

import logging
import uuid
from typing import Any

import aiosqlite

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults, ErrorMessages
from core.domain.models import Account, Transaction, TransactionSummary
from core.domain.validation import (
    validate_account_name,
    validate_account_type,
    validate_amount,
    validate_category,
    validate_date,
    validate_description,
    validate_entity_id,
    validate_optional_account_id,
    validate_transaction_type,
)
from core.errors import ConflictError, NotFoundError
from core.storage.account_store import AccountStore
from core.storage.transaction_store import TransactionStore
from core.types import TransactionType

logger = logging.getLogger(__name__)


class LedgerEngine:
    """계좌 잔액 일관성 엔진

    공개 메서드는 각각 하나의 작업 단위(SQLiteAdapter.transaction())를 엶.
    `record_transaction`은 이미 열린 작업 단위 안에서 호출하는 용도
    (RecurringAdvancer가 발생분 생성과 스케줄 진행을 한 단위로 묶을 때 사용).

    Args:
        db: 연결된 SQLiteAdapter
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.accounts = AccountStore(db)
        self.transactions = TransactionStore(db)

    # =========================================================================
    # 거래
    # =========================================================================

    async def add_transaction(
        self,
        user_id: str,
        amount: Any,
        type: Any,
        category: Any,
        date: Any,
        description: Any = None,
        account_id: Any = None,
    ) -> Transaction:
        """거래 추가 + 잔액 반영

        Args:
            user_id: 소유자 ID
            amount: 금액 (0 이상 정수)
            type: INCOME / EXPENSE / TRANSFER
            category: 카테고리
            date: 거래일
            description: 설명 (선택)
            account_id: 연결 계좌 ID (빈 문자열이면 계좌 없음)

        Returns:
            저장된 Transaction

        Raises:
            ValidationError: 입력 검증 실패
            NotFoundError: 계좌 없음 또는 타인 소유 (롤백)
        """
        tx = self.build_transaction(
            user_id=user_id,
            amount=amount,
            type=type,
            category=category,
            date=date,
            description=description,
            account_id=account_id,
        )

        async with self.db.transaction():
            await self.record_transaction(tx)

        logger.info(
            "거래 추가",
            extra={
                "user_id": user_id,
                "transaction_id": tx.id,
                "type": tx.type.value,
                "balance_effect": tx.balance_effect,
            },
        )
        return tx

    def build_transaction(
        self,
        user_id: str,
        amount: Any,
        type: Any,
        category: Any,
        date: Any,
        description: Any = None,
        account_id: Any = None,
        occurrence_key: str | None = None,
    ) -> Transaction:
        """입력 검증 후 Transaction 생성 (저장하지 않음)

        Raises:
            ValidationError: 입력 검증 실패
        """
        return Transaction(
            id=str(uuid.uuid4()),
            user_id=user_id,
            account_id=validate_optional_account_id(account_id),
            amount=validate_amount(amount),
            type=validate_transaction_type(type),
            category=validate_category(category),
            date=validate_date(date),
            description=validate_description(description),
            occurrence_key=occurrence_key,
        )

    async def record_transaction(self, tx: Transaction) -> None:
        """거래 저장 + 잔액 반영 (열린 작업 단위 안에서 호출)

        커밋/롤백은 호출자의 작업 단위가 담당.

        Raises:
            NotFoundError: 계좌 없음 또는 타인 소유
            aiosqlite.IntegrityError: occurrence_key 중복
        """
        if tx.account_id is not None:
            if tx.type.affects_balance:
                applied = await self.accounts.apply_delta(
                    tx.user_id, tx.account_id, tx.balance_effect
                )
                if not applied:
                    raise NotFoundError(ErrorMessages.ACCOUNT_NOT_FOUND)
            elif await self.accounts.get(tx.user_id, tx.account_id) is None:
                # TRANSFER도 타인 계좌를 참조할 수 없음
                raise NotFoundError(ErrorMessages.ACCOUNT_NOT_FOUND)

        await self.transactions.insert(tx)

    async def delete_transaction(self, user_id: str, transaction_id: Any) -> Transaction:
        """거래 삭제 + 잔액 역반영

        저장된 금액/유형 기준으로 추가 시 반영분을 정확히 되돌림.

        Raises:
            ValidationError: ID 형식 오류
            NotFoundError: 거래 없음 또는 타인 소유
        """
        transaction_id = validate_entity_id(transaction_id, "transaction ID")

        async with self.db.transaction():
            tx = await self.transactions.get(user_id, transaction_id)
            if tx is None:
                raise NotFoundError(ErrorMessages.TRANSACTION_NOT_FOUND)

            effect = tx.balance_effect
            if effect != 0:
                # 계좌가 사라졌으면 되돌릴 잔액도 없음
                await self.accounts.apply_delta(user_id, tx.account_id, -effect)

            await self.transactions.delete(user_id, transaction_id)

        logger.info(
            "거래 삭제",
            extra={
                "user_id": user_id,
                "transaction_id": transaction_id,
                "reverted": -tx.balance_effect,
            },
        )
        return tx

    async def update_transaction(
        self,
        user_id: str,
        transaction_id: Any,
        fields: dict[str, Any],
    ) -> Transaction:
        """거래 필드 수정

        주의: 잔액은 다시 계산하지 않음. 금액/유형을 바꿔도 계좌 잔액은 추가 시점 값 유지.

        Args:
            user_id: 소유자 ID
            transaction_id: 거래 ID
            fields: amount, type, category, date, description 중 변경할 값

        Returns:
            수정 후 Transaction

        Raises:
            ValidationError: 입력 검증 실패
            NotFoundError: 거래 없음 또는 타인 소유
        """
        transaction_id = validate_entity_id(transaction_id, "transaction ID")
        values = self._validate_transaction_fields(fields)

        async with self.db.transaction():
            updated = await self.transactions.update(user_id, transaction_id, values)
            if not updated:
                raise NotFoundError(ErrorMessages.TRANSACTION_NOT_FOUND)
            tx = await self.transactions.get(user_id, transaction_id)

        logger.info(
            "거래 수정",
            extra={"user_id": user_id, "transaction_id": transaction_id, "fields": list(values)},
        )
        return tx

    def _validate_transaction_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """수정 요청 값 검증 후 DB 저장 형식으로 변환"""
        values: dict[str, Any] = {}
        if "amount" in fields:
            values["amount"] = validate_amount(fields["amount"])
        if "type" in fields:
            values["type"] = validate_transaction_type(fields["type"]).value
        if "category" in fields:
            values["category"] = validate_category(fields["category"])
        if "date" in fields:
            values["date"] = validate_date(fields["date"]).isoformat()
        if "description" in fields:
            values["description"] = validate_description(fields["description"])
        return values

    async def get_transactions(
        self,
        user_id: str,
        limit: int = Defaults.RECENT_TRANSACTIONS_LIMIT,
    ) -> list[Transaction]:
        """최근 거래 조회 (거래일 내림차순)"""
        return await self.transactions.list_recent(user_id, limit)

    async def get_transaction(self, user_id: str, transaction_id: Any) -> Transaction:
        """거래 단건 조회

        Raises:
            ValidationError: ID 형식 오류
            NotFoundError: 거래 없음 또는 타인 소유
        """
        transaction_id = validate_entity_id(transaction_id, "transaction ID")
        tx = await self.transactions.get(user_id, transaction_id)
        if tx is None:
            raise NotFoundError(ErrorMessages.TRANSACTION_NOT_FOUND)
        return tx

    async def get_transaction_summary(self, user_id: str) -> TransactionSummary:
        """소유자의 수입/지출 합계 (매번 계산, 캐시 없음)"""
        totals = await self.transactions.sum_by_type(user_id)
        return TransactionSummary(
            income=totals.get(TransactionType.INCOME.value, 0),
            expense=totals.get(TransactionType.EXPENSE.value, 0),
        )

    # =========================================================================
    # 계좌
    # =========================================================================

    async def add_account(
        self,
        user_id: str,
        name: Any,
        type: Any,
        balance: Any = 0,
    ) -> Account:
        """계좌 추가

        이름 중복 검사(대소문자 무시)는 INSERT와 같은 작업 단위에서 수행.

        Raises:
            ValidationError: 입력 검증 실패
            ConflictError: 같은 이름의 계좌 존재
        """
        account = Account(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=validate_account_name(name),
            type=validate_account_type(type),
            balance=validate_amount(balance, label="Balance"),
        )

        try:
            async with self.db.transaction():
                if await self.accounts.name_exists(user_id, account.name):
                    raise ConflictError(ErrorMessages.ACCOUNT_DUPLICATE)
                await self.accounts.insert(account)
        except aiosqlite.IntegrityError:
            # 다른 연결이 같은 이름을 먼저 커밋한 경우 (고유 인덱스)
            raise ConflictError(ErrorMessages.ACCOUNT_DUPLICATE) from None

        logger.info(
            "계좌 추가",
            extra={"user_id": user_id, "account_id": account.id, "type": account.type.value},
        )
        return account

    async def delete_account(self, user_id: str, account_id: Any) -> None:
        """계좌 삭제 (참조 거래가 있으면 거부)

        Raises:
            ValidationError: ID 형식 오류
            ConflictError: 거래가 남아 있음
            NotFoundError: 계좌 없음 또는 타인 소유
        """
        account_id = validate_entity_id(account_id, "account ID")

        async with self.db.transaction():
            if await self.accounts.has_transactions(user_id, account_id):
                raise ConflictError(ErrorMessages.ACCOUNT_IN_USE)
            if not await self.accounts.delete(user_id, account_id):
                raise NotFoundError(ErrorMessages.ACCOUNT_NOT_FOUND)

        logger.info("계좌 삭제", extra={"user_id": user_id, "account_id": account_id})

    async def get_accounts(self, user_id: str) -> list[Account]:
        """소유자의 계좌 목록"""
        return await self.accounts.list(user_id)

    async def get_account(self, user_id: str, account_id: str) -> Account:
        """계좌 단건 조회

        Raises:
            NotFoundError: 계좌 없음 또는 타인 소유
        """
        account = await self.accounts.get(user_id, account_id)
        if account is None:
            raise NotFoundError(ErrorMessages.ACCOUNT_NOT_FOUND)
        return account
