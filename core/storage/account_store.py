"""
AccountStore - 계좌 저장소

모든 쿼리는 user_id(소유자)로 범위를 제한.
쓰기 메서드는 커밋하지 않음 (호출자가 SQLiteAdapter.transaction() 내부에서 사용).
"""

import logging

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import Account, account_name_key

logger = logging.getLogger(__name__)


class AccountStore:
    """계좌 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, account: Account) -> None:
        """계좌 추가"""
        await self.db.execute(
            """
            INSERT INTO account (id, user_id, name, name_key, type, balance)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                account.id,
                account.user_id,
                account.name,
                account.name_key,
                account.type.value,
                account.balance,
            ),
        )

    async def get(self, user_id: str, account_id: str) -> Account | None:
        """계좌 단건 조회 (타인 소유면 None)"""
        row = await self.db.fetchone(
            f"SELECT {Account.COLUMNS} FROM account WHERE id = ? AND user_id = ?",
            (account_id, user_id),
        )
        return Account.from_row(row) if row else None

    async def list(self, user_id: str) -> list[Account]:
        """소유자의 전체 계좌 (최신순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {Account.COLUMNS} FROM account
            WHERE user_id = ?
            ORDER BY created_at DESC, rowid DESC
            """,
            (user_id,),
        )
        return [Account.from_row(row) for row in rows]

    async def name_exists(self, user_id: str, name: str) -> bool:
        """같은 소유자에게 대소문자 무시 동일 이름 계좌가 있는지 (name_key 비교)"""
        row = await self.db.fetchone(
            """
            SELECT 1 FROM account
            WHERE user_id = ? AND name_key = ?
            LIMIT 1
            """,
            (user_id, account_name_key(name)),
        )
        return row is not None

    async def apply_delta(self, user_id: str, account_id: str, delta: int) -> bool:
        """잔액 증분 반영 (원자적 UPDATE)

        읽기-수정-쓰기 없이 balance = balance + delta 로 처리하므로
        동시 호출 시에도 합계가 정확함.

        Returns:
            반영 여부 (False면 계좌 없음 또는 타인 소유)
        """
        cursor = await self.db.execute(
            """
            UPDATE account
            SET balance = balance + ?, updated_at = datetime('now')
            WHERE id = ? AND user_id = ?
            """,
            (delta, account_id, user_id),
        )
        return cursor.rowcount > 0

    async def has_transactions(self, user_id: str, account_id: str) -> bool:
        """계좌를 참조하는 거래 존재 여부"""
        row = await self.db.fetchone(
            """
            SELECT 1 FROM transactions
            WHERE account_id = ? AND user_id = ?
            LIMIT 1
            """,
            (account_id, user_id),
        )
        return row is not None

    async def delete(self, user_id: str, account_id: str) -> bool:
        """계좌 삭제

        Returns:
            삭제 여부
        """
        cursor = await self.db.execute(
            "DELETE FROM account WHERE id = ? AND user_id = ?",
            (account_id, user_id),
        )
        return cursor.rowcount > 0
