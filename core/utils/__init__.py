"""
유틸리티 패키지

occurrence_key 생성, 타임존 처리 등 공통 유틸리티
"""

from core.utils.idempotency import make_occurrence_key
from core.utils.timezone import now_utc, parse_date, today_utc

__all__ = [
    "make_occurrence_key",
    "now_utc",
    "parse_date",
    "today_utc",
]
