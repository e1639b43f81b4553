"""
RecurringStore - 반복 거래 정의 저장소

스케줄 진행(next_run_date, last_run_date, is_active)은 RecurringAdvancer만 변경.
사용자 수정(update)은 next_run_date를 다시 계산하지 않음.
"""

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import RecurringTransaction

if TYPE_CHECKING:
    from core.recurring.schedule import ScheduleAdvance

logger = logging.getLogger(__name__)

# update()에서 변경 가능한 컬럼
UPDATABLE_FIELDS = (
    "amount",
    "type",
    "category",
    "description",
    "frequency",
    "start_date",
    "end_date",
    "account_id",
    "is_active",
)

_SELECT = f"SELECT {RecurringTransaction.COLUMNS} FROM recurring_transaction"


class RecurringStore:
    """반복 거래 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, rt: RecurringTransaction) -> None:
        """반복 거래 정의 추가"""
        await self.db.execute(
            """
            INSERT INTO recurring_transaction (
                id, user_id, account_id, amount, type, category, description,
                frequency, start_date, end_date, next_run_date, last_run_date,
                is_active
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                rt.id,
                rt.user_id,
                rt.account_id,
                rt.amount,
                rt.type.value,
                rt.category,
                rt.description,
                rt.frequency.value,
                rt.start_date.isoformat(),
                rt.end_date.isoformat() if rt.end_date else None,
                rt.next_run_date.isoformat(),
                rt.last_run_date.isoformat() if rt.last_run_date else None,
                int(rt.is_active),
            ),
        )

    async def get(self, user_id: str, recurring_id: str) -> RecurringTransaction | None:
        """소유자 범위 단건 조회"""
        row = await self.db.fetchone(
            f"{_SELECT} WHERE id = ? AND user_id = ?",
            (recurring_id, user_id),
        )
        return RecurringTransaction.from_row(row) if row else None

    async def get_by_id(self, recurring_id: str) -> RecurringTransaction | None:
        """ID 단건 조회 (스케줄러 전용, 소유자 무관)"""
        row = await self.db.fetchone(f"{_SELECT} WHERE id = ?", (recurring_id,))
        return RecurringTransaction.from_row(row) if row else None

    async def list_with_account(self, user_id: str) -> list[dict[str, Any]]:
        """소유자의 반복 거래 목록 (계좌 이름/유형 포함, 최신순)"""
        rows = await self.db.fetchall(
            """
            SELECT r.id, r.user_id, r.account_id, r.amount, r.type, r.category,
                   r.description, r.frequency, r.start_date, r.end_date,
                   r.next_run_date, r.last_run_date, r.is_active, r.created_at,
                   a.name, a.type
            FROM recurring_transaction r
            LEFT JOIN account a ON a.id = r.account_id
            WHERE r.user_id = ?
            ORDER BY r.created_at DESC, r.rowid DESC
            """,
            (user_id,),
        )

        result = []
        for row in rows:
            item = RecurringTransaction.from_row(row[:14]).to_dict()
            item["account"] = {"name": row[14], "type": row[15]} if row[14] else None
            result.append(item)
        return result

    async def list_due_ids(self, as_of: date, user_id: str | None = None) -> list[str]:
        """실행 대상 ID 목록 (is_active AND next_run_date ≤ as_of, 만료 제외)

        Args:
            as_of: 기준일
            user_id: None이면 전체 소유자 (스케줄러)
        """
        sql = """
            SELECT id FROM recurring_transaction
            WHERE is_active = 1 AND next_run_date <= ?
              AND (end_date IS NULL OR next_run_date <= end_date)
        """
        params: tuple[Any, ...] = (as_of.isoformat(),)
        if user_id is not None:
            sql += " AND user_id = ?"
            params += (user_id,)
        sql += " ORDER BY next_run_date, id"

        rows = await self.db.fetchall(sql, params)
        return [row[0] for row in rows]

    async def apply_advance(self, recurring_id: str, advance: "ScheduleAdvance") -> None:
        """스케줄 진행 결과 저장"""
        await self.db.execute(
            """
            UPDATE recurring_transaction
            SET next_run_date = ?, last_run_date = ?, is_active = ?,
                updated_at = datetime('now')
            WHERE id = ?
            """,
            (
                advance.next_run_date.isoformat(),
                advance.last_run_date.isoformat(),
                int(advance.is_active),
                recurring_id,
            ),
        )

    async def update(
        self,
        user_id: str,
        recurring_id: str,
        fields: dict[str, Any],
    ) -> bool:
        """정의 수정 (fields 값은 DB 저장 형식)"""
        columns = [name for name in UPDATABLE_FIELDS if name in fields]
        if not columns:
            return await self.get(user_id, recurring_id) is not None

        assignments = ", ".join(f"{name} = ?" for name in columns)
        params = tuple(fields[name] for name in columns)

        cursor = await self.db.execute(
            f"""
            UPDATE recurring_transaction
            SET {assignments}, updated_at = datetime('now')
            WHERE id = ? AND user_id = ?
            """,
            (*params, recurring_id, user_id),
        )
        return cursor.rowcount > 0

    async def delete(self, user_id: str, recurring_id: str) -> bool:
        """정의 삭제 (이미 생성된 거래는 유지)"""
        cursor = await self.db.execute(
            "DELETE FROM recurring_transaction WHERE id = ? AND user_id = ?",
            (recurring_id, user_id),
        )
        return cursor.rowcount > 0
