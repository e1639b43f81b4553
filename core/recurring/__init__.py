"""
반복 거래 모듈

- schedule: 주기별 다음 실행일 계산 (말일/윤일 보정)
- advancer: 도래한 정의를 거래로 생성하고 스케줄 전진
"""

from core.recurring.schedule import ScheduleAdvance, advance_date, plan_advance

__all__ = [
    "ScheduleAdvance",
    "advance_date",
    "plan_advance",
]
