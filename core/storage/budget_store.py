"""
BudgetStore - 예산 저장소

spent(지출 합계)는 저장하지 않고 조회할 때마다 거래 테이블에서 계산.
"""

import logging

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import Budget

logger = logging.getLogger(__name__)


class BudgetStore:
    """예산 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, budget: Budget) -> None:
        """예산 추가"""
        await self.db.execute(
            """
            INSERT INTO budget (id, user_id, category, amount, period, start_date, end_date)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                budget.id,
                budget.user_id,
                budget.category,
                budget.amount,
                budget.period.value,
                budget.start_date.isoformat(),
                budget.end_date.isoformat(),
            ),
        )

    async def list_with_spent(self, user_id: str) -> list[Budget]:
        """예산 목록 + 기간 내 지출 합계

        spent = 같은 카테고리, [start_date, end_date] 범위의 EXPENSE 금액 합.
        INCOME/TRANSFER는 포함하지 않으며 해당 거래가 없으면 0.
        """
        rows = await self.db.fetchall(
            """
            SELECT b.id, b.user_id, b.category, b.amount, b.period,
                   b.start_date, b.end_date, b.created_at,
                   COALESCE((
                       SELECT SUM(t.amount) FROM transactions t
                       WHERE t.user_id = b.user_id
                         AND t.type = 'EXPENSE'
                         AND t.category = b.category
                         AND t.date >= b.start_date
                         AND t.date <= b.end_date
                   ), 0)
            FROM budget b
            WHERE b.user_id = ?
            ORDER BY b.created_at DESC, b.rowid DESC
            """,
            (user_id,),
        )
        return [Budget.from_row(row[:8], spent=int(row[8])) for row in rows]

    async def delete(self, user_id: str, budget_id: str) -> bool:
        """예산 삭제"""
        cursor = await self.db.execute(
            "DELETE FROM budget WHERE id = ? AND user_id = ?",
            (budget_id, user_id),
        )
        return cursor.rowcount > 0
