"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수
"""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """현재 UTC 날짜 반환

    반복 거래의 기한 도래 판정 기준일.
    """
    return now_utc().date()


def parse_date(value: str | date | datetime) -> date:
    """DB 문자열 또는 datetime을 date로 변환

    Args:
        value: ISO 형식 문자열, date 또는 datetime

    Returns:
        date 객체
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])
