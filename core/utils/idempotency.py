"""
Idempotency 유틸리티

반복 거래 발생분(occurrence) 키 생성
규칙: rt:{recurring_id}:{run_date}
"""

from datetime import date

# 반복 거래 occurrence_key 접두사
OCCURRENCE_PREFIX: str = "rt"


def make_occurrence_key(recurring_id: str, run_date: date) -> str:
    """결정적 occurrence_key 생성

    같은 반복 거래의 같은 실행일은 항상 같은 키를 가지므로
    transactions.occurrence_key UNIQUE 제약으로 중복 생성이 차단됨.

    Args:
        recurring_id: RecurringTransaction ID (UUID)
        run_date: 실행 예정일 (next_run_date)

    Returns:
        occurrence_key: rt:{recurring_id}:{YYYY-MM-DD} 형식

    Example:
        >>> make_occurrence_key("550e8400-e29b-41d4-a716-446655440000", date(2024, 1, 31))
        'rt:550e8400-e29b-41d4-a716-446655440000:2024-01-31'
    """
    if not recurring_id:
        raise ValueError("recurring_id는 비어 있을 수 없습니다")

    return f"{OCCURRENCE_PREFIX}:{recurring_id}:{run_date.isoformat()}"

