"""
core/domain/validation.py 테스트

금액 경계값, 허용 목록, 길이 제한, 제어 문자 검증
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from core.constants import Limits
from core.domain.validation import (
    has_control_characters,
    validate_account_name,
    validate_account_type,
    validate_amount,
    validate_budget_period,
    validate_category,
    validate_date,
    validate_date_range,
    validate_description,
    validate_entity_id,
    validate_frequency,
    validate_goal_name,
    validate_optional_account_id,
    validate_transaction_type,
)
from core.errors import ValidationError
from core.types import AccountType, BudgetPeriod, Frequency, TransactionType


class TestValidateAmount:
    """금액 검증"""

    def test_zero_allowed(self) -> None:
        assert validate_amount(0) == 0

    def test_max_safe_integer_accepted(self) -> None:
        """MAX_SAFE_INTEGER는 허용"""
        assert validate_amount(Limits.MAX_SAFE_INTEGER) == Limits.MAX_SAFE_INTEGER

    def test_above_max_safe_integer_rejected(self) -> None:
        """MAX_SAFE_INTEGER + 1은 거부"""
        with pytest.raises(ValidationError, match="exceeds maximum"):
            validate_amount(Limits.MAX_SAFE_INTEGER + 1)

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError, match="cannot be negative"):
            validate_amount(-1)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        with pytest.raises(ValidationError, match="valid number"):
            validate_amount(value)

    def test_decimal_nan_rejected(self) -> None:
        with pytest.raises(ValidationError, match="valid number"):
            validate_amount(Decimal("NaN"))

    @pytest.mark.parametrize("value", ["100", None, True])
    def test_non_number_rejected(self, value: object) -> None:
        with pytest.raises(ValidationError, match="valid number"):
            validate_amount(value)

    def test_fraction_rejected(self) -> None:
        with pytest.raises(ValidationError, match="whole number of currency units"):
            validate_amount(10.5)

    def test_integral_float_accepted(self) -> None:
        result = validate_amount(100.0)

        assert result == 100
        assert isinstance(result, int)

    def test_positive_rejects_zero(self) -> None:
        with pytest.raises(ValidationError, match="Budget must be positive"):
            validate_amount(0, label="Budget", positive=True)


class TestValidateTransactionType:
    """거래 유형 검증"""

    def test_valid(self) -> None:
        assert validate_transaction_type("INCOME") is TransactionType.INCOME
        assert validate_transaction_type(" expense ") is TransactionType.EXPENSE
        assert validate_transaction_type(TransactionType.TRANSFER) is TransactionType.TRANSFER

    def test_invalid(self) -> None:
        with pytest.raises(ValidationError, match="Invalid transaction type"):
            validate_transaction_type("REFUND")


class TestValidateText:
    """카테고리/설명 검증"""

    def test_category_trimmed(self) -> None:
        assert validate_category("  Food  ") == "Food"

    def test_category_empty(self) -> None:
        with pytest.raises(ValidationError, match="Category cannot be empty"):
            validate_category("   ")

    def test_category_length_boundary(self) -> None:
        assert validate_category("a" * 100) == "a" * 100
        with pytest.raises(ValidationError, match="too long"):
            validate_category("a" * 101)

    def test_description_optional(self) -> None:
        assert validate_description(None) is None
        assert validate_description("") is None
        assert validate_description("lunch") == "lunch"

    def test_description_length_boundary(self) -> None:
        assert validate_description("a" * 500) == "a" * 500
        with pytest.raises(ValidationError, match="too long"):
            validate_description("a" * 501)


class TestValidateIds:
    """ID 검증"""

    def test_optional_account_id(self) -> None:
        assert validate_optional_account_id(None) is None
        assert validate_optional_account_id("") is None
        assert validate_optional_account_id("acc-1") == "acc-1"

    def test_optional_account_id_too_long(self) -> None:
        with pytest.raises(ValidationError):
            validate_optional_account_id("a" * 256)

    def test_entity_id_trimmed(self) -> None:
        assert validate_entity_id("  abc  ") == "abc"

    @pytest.mark.parametrize("value", ["", "   ", None, 123])
    def test_entity_id_empty(self, value: object) -> None:
        with pytest.raises(ValidationError, match="Invalid"):
            validate_entity_id(value)

    def test_entity_id_control_characters(self) -> None:
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_entity_id("ab\x00c")

    def test_entity_id_length_boundary(self) -> None:
        assert validate_entity_id("a" * 255) == "a" * 255
        with pytest.raises(ValidationError, match="too long"):
            validate_entity_id("a" * 256)


class TestValidateAccount:
    """계좌 이름/유형 검증"""

    def test_name_trimmed(self) -> None:
        assert validate_account_name("  Main Bank ") == "Main Bank"

    def test_name_empty(self) -> None:
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_account_name("  ")

    def test_name_length_boundary(self) -> None:
        assert validate_account_name("a" * 100) == "a" * 100
        with pytest.raises(ValidationError, match="cannot exceed 100"):
            validate_account_name("a" * 101)

    def test_name_control_characters(self) -> None:
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_account_name("Main\x07Bank")

    def test_type_case_insensitive(self) -> None:
        assert validate_account_type("BANK") is AccountType.BANK
        assert validate_account_type(" E-Wallet ") is AccountType.E_WALLET

    def test_type_not_in_allow_list(self) -> None:
        with pytest.raises(ValidationError, match="Invalid account type"):
            validate_account_type("crypto")

    def test_type_too_long(self) -> None:
        with pytest.raises(ValidationError, match="cannot exceed 50"):
            validate_account_type("x" * 51)

    def test_has_control_characters(self) -> None:
        assert has_control_characters("a\tb") is True
        assert has_control_characters("a\x7fb") is True
        assert has_control_characters("plain") is False


class TestValidateSchedule:
    """주기/기간/날짜 검증"""

    def test_frequency(self) -> None:
        assert validate_frequency("monthly") is Frequency.MONTHLY

    def test_frequency_invalid(self) -> None:
        with pytest.raises(ValidationError, match="Invalid frequency"):
            validate_frequency("HOURLY")

    def test_budget_period(self) -> None:
        assert validate_budget_period("WEEKLY") is BudgetPeriod.WEEKLY
        with pytest.raises(ValidationError):
            validate_budget_period("DAILY")

    def test_date_inputs(self) -> None:
        assert validate_date(date(2024, 2, 29)) == date(2024, 2, 29)
        assert validate_date(datetime(2024, 2, 29, 13, 0)) == date(2024, 2, 29)
        assert validate_date("2024-02-29") == date(2024, 2, 29)
        assert validate_date("2024-02-29T10:00:00Z") == date(2024, 2, 29)

    @pytest.mark.parametrize(
        "value",
        ["2023-02-29", "not-a-date", None, 20240101, "2024-01-01xyz", "2024-01-01 garbage"],
    )
    def test_date_invalid(self, value: object) -> None:
        with pytest.raises(ValidationError, match="not a valid date"):
            validate_date(value)

    def test_date_range(self) -> None:
        validate_date_range(date(2024, 1, 1), date(2024, 1, 1))
        validate_date_range(date(2024, 1, 1), None)

        with pytest.raises(ValidationError, match="Start date cannot be after end date"):
            validate_date_range(date(2024, 2, 1), date(2024, 1, 1))

    def test_goal_name(self) -> None:
        assert validate_goal_name(" Vacation ") == "Vacation"
        with pytest.raises(ValidationError):
            validate_goal_name("")
