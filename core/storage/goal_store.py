"""
GoalStore - 저축 목표 저장소
"""

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import Goal


class GoalStore:
    """저축 목표 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, goal: Goal) -> None:
        await self.db.execute(
            """
            INSERT INTO goal (id, user_id, name, target_amount, current_amount, deadline)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                goal.id,
                goal.user_id,
                goal.name,
                goal.target_amount,
                goal.current_amount,
                goal.deadline.isoformat() if goal.deadline else None,
            ),
        )

    async def get(self, user_id: str, goal_id: str) -> Goal | None:
        row = await self.db.fetchone(
            f"SELECT {Goal.COLUMNS} FROM goal WHERE id = ? AND user_id = ?",
            (goal_id, user_id),
        )
        return Goal.from_row(row) if row else None

    async def list(self, user_id: str) -> list[Goal]:
        rows = await self.db.fetchall(
            f"""
            SELECT {Goal.COLUMNS} FROM goal
            WHERE user_id = ?
            ORDER BY created_at DESC, rowid DESC
            """,
            (user_id,),
        )
        return [Goal.from_row(row) for row in rows]

    async def update_progress(self, user_id: str, goal_id: str, current_amount: int) -> bool:
        cursor = await self.db.execute(
            """
            UPDATE goal
            SET current_amount = ?, updated_at = datetime('now')
            WHERE id = ? AND user_id = ?
            """,
            (current_amount, goal_id, user_id),
        )
        return cursor.rowcount > 0

    async def delete(self, user_id: str, goal_id: str) -> bool:
        cursor = await self.db.execute(
            "DELETE FROM goal WHERE id = ? AND user_id = ?",
            (goal_id, user_id),
        )
        return cursor.rowcount > 0
