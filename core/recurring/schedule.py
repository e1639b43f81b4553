"""
반복 주기 날짜 계산

월/연 단위 더하기는 dateutil.relativedelta를 사용하여 말일을 보정.
- 2023-01-31 + 1개월 → 2023-02-28 (03-03 아님)
- 2024-02-29 + 1년 → 2025-02-28
"""

from dataclasses import dataclass
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from core.types import Frequency


def advance_date(current: date, frequency: Frequency | str) -> date:
    """주기 한 단위만큼 날짜 전진

    Args:
        current: 기준 날짜
        frequency: DAILY / WEEKLY / MONTHLY / YEARLY

    Returns:
        다음 날짜

    Raises:
        ValueError: 알 수 없는 주기
    """
    frequency = Frequency(frequency)

    if frequency == Frequency.DAILY:
        return current + timedelta(days=1)
    if frequency == Frequency.WEEKLY:
        return current + timedelta(weeks=1)
    if frequency == Frequency.MONTHLY:
        return current + relativedelta(months=1)
    if frequency == Frequency.YEARLY:
        return current + relativedelta(years=1)

    raise ValueError(f"Unknown frequency: {frequency}")


@dataclass(frozen=True)
class ScheduleAdvance:
    """한 번의 발생분 처리 후 스케줄 값

    Attributes:
        run_date: 이번에 생성할 거래의 날짜 (기존 next_run_date)
        next_run_date: 다음 실행일
        last_run_date: 마지막 실행일 (= run_date)
        is_active: 다음 실행일이 end_date를 넘으면 False
    """

    run_date: date
    next_run_date: date
    last_run_date: date
    is_active: bool


def plan_advance(
    next_run_date: date,
    frequency: Frequency | str,
    end_date: date | None,
) -> ScheduleAdvance:
    """발생분 처리 후의 스케줄 계산

    Args:
        next_run_date: 현재 예정일 (이번 발생분 날짜)
        frequency: 반복 주기
        end_date: 종료일 (None이면 무기한)

    Returns:
        ScheduleAdvance
    """
    candidate = advance_date(next_run_date, frequency)
    is_active = not (end_date is not None and candidate > end_date)

    return ScheduleAdvance(
        run_date=next_run_date,
        next_run_date=candidate,
        last_run_date=next_run_date,
        is_active=is_active,
    )
