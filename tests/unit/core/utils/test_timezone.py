"""
core/utils/timezone.py 테스트
"""

from datetime import date, datetime, timezone

from core.utils.timezone import now_utc, parse_date, today_utc


class TestNowUtc:
    def test_has_utc_tzinfo(self) -> None:
        assert now_utc().tzinfo == timezone.utc

    def test_today_is_date(self) -> None:
        today = today_utc()
        assert isinstance(today, date)
        assert not isinstance(today, datetime)


class TestParseDate:
    """parse_date 테스트"""

    def test_iso_string(self) -> None:
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    def test_datetime_string_truncated(self) -> None:
        assert parse_date("2024-02-29 13:00:00") == date(2024, 2, 29)

    def test_date_passthrough(self) -> None:
        assert parse_date(date(2024, 1, 1)) == date(2024, 1, 1)

    def test_datetime(self) -> None:
        assert parse_date(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)
