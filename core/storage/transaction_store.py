"""
TransactionStore - 거래 저장소

쓰기 메서드는 커밋하지 않음.
잔액 반영은 LedgerEngine이 AccountStore.apply_delta로 같은 작업 단위 안에서 처리.
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import Transaction

logger = logging.getLogger(__name__)

# update()에서 변경 가능한 컬럼
UPDATABLE_FIELDS = ("amount", "type", "category", "date", "description")


class TransactionStore:
    """거래 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, tx: Transaction) -> None:
        """거래 추가

        Raises:
            aiosqlite.IntegrityError: occurrence_key 중복
        """
        await self.db.execute(
            """
            INSERT INTO transactions (
                id, user_id, account_id, amount, type, category,
                date, description, occurrence_key
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                tx.id,
                tx.user_id,
                tx.account_id,
                tx.amount,
                tx.type.value,
                tx.category,
                tx.date.isoformat(),
                tx.description,
                tx.occurrence_key,
            ),
        )

    async def get(self, user_id: str, tx_id: str) -> Transaction | None:
        """거래 단건 조회 (타인 소유면 None)"""
        row = await self.db.fetchone(
            f"SELECT {Transaction.COLUMNS} FROM transactions WHERE id = ? AND user_id = ?",
            (tx_id, user_id),
        )
        return Transaction.from_row(row) if row else None

    async def list_recent(self, user_id: str, limit: int) -> list[Transaction]:
        """최근 거래 (거래일 내림차순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {Transaction.COLUMNS} FROM transactions
            WHERE user_id = ?
            ORDER BY date DESC, created_at DESC, rowid DESC
            LIMIT ?
            """,
            (user_id, limit),
        )
        return [Transaction.from_row(row) for row in rows]

    async def sum_by_type(self, user_id: str) -> dict[str, int]:
        """소유자의 거래 유형별 금액 합계 ({"INCOME": 합계, ...}, 거래 없는 유형은 생략)"""
        rows = await self.db.fetchall(
            """
            SELECT type, SUM(amount) FROM transactions
            WHERE user_id = ?
            GROUP BY type
            """,
            (user_id,),
        )
        return {row[0]: int(row[1]) for row in rows}

    async def update(self, user_id: str, tx_id: str, fields: dict[str, Any]) -> bool:
        """거래 필드 수정 (잔액은 건드리지 않음)

        Args:
            user_id: 소유자 ID
            tx_id: 거래 ID
            fields: 검증된 변경 값 (UPDATABLE_FIELDS 중 일부)

        Returns:
            수정 여부
        """
        columns = [name for name in UPDATABLE_FIELDS if name in fields]
        if not columns:
            return await self.get(user_id, tx_id) is not None

        assignments = ", ".join(f"{name} = ?" for name in columns)
        params = tuple(fields[name] for name in columns)

        cursor = await self.db.execute(
            f"""
            UPDATE transactions
            SET {assignments}, updated_at = datetime('now')
            WHERE id = ? AND user_id = ?
            """,
            (*params, tx_id, user_id),
        )
        return cursor.rowcount > 0

    async def delete(self, user_id: str, tx_id: str) -> bool:
        """거래 삭제"""
        cursor = await self.db.execute(
            "DELETE FROM transactions WHERE id = ? AND user_id = ?",
            (tx_id, user_id),
        )
        return cursor.rowcount > 0
