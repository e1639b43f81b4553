"""
입력 검증

모든 검증 함수는 정규화된 값을 반환하고, 실패 시 ValidationError 발생.
쓰기 전에 호출하여 잘못된 값이 저장되지 않도록 함.
"""

import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from core.constants import Limits
from core.errors import ValidationError
from core.types import AccountType, BudgetPeriod, Frequency, TransactionType

# 제어 문자 (0x00-0x1F, 0x7F)
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def has_control_characters(value: str) -> bool:
    """제어 문자 포함 여부"""
    return _CONTROL_CHARS.search(value) is not None


def validate_amount(
    value: Any,
    label: str = "Amount",
    positive: bool = False,
) -> int:
    """금액 검증

    유한한 수, 0 이상(positive=True면 0 초과), MAX_SAFE_INTEGER 이하,
    정수 금액만 허용.

    Args:
        value: int, float, Decimal
        label: 오류 메시지에 사용할 필드명
        positive: 0 금지 여부

    Returns:
        정수 금액

    Raises:
        ValidationError: 검증 실패
    """
    invalid = f"{label} must be a valid number."

    # bool은 int의 하위 타입이므로 명시적으로 제외
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError(invalid)

    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(invalid)
    if isinstance(value, Decimal) and not value.is_finite():
        raise ValidationError(invalid)

    if value < 0:
        raise ValidationError(f"{label} cannot be negative.")
    if positive and value == 0:
        raise ValidationError(f"{label} must be positive.")
    if value > Limits.MAX_SAFE_INTEGER:
        raise ValidationError(f"{label} exceeds maximum allowed value.")

    if value != int(value):
        raise ValidationError(f"{label} must be a whole number of currency units.")

    return int(value)


def validate_transaction_type(value: Any) -> TransactionType:
    """거래 유형 검증 (INCOME / EXPENSE / TRANSFER)"""
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().upper())
    except ValueError:
        valid = ", ".join(t.value for t in TransactionType)
        raise ValidationError(f"Invalid transaction type. Choose: {valid}.") from None


def validate_category(value: Any) -> str:
    """카테고리 검증 (공백 제거 후 비어있지 않고 100자 이하)"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Category cannot be empty.")

    category = value.strip()
    if len(category) > Limits.MAX_CATEGORY_LENGTH:
        raise ValidationError("Category is too long.")

    return category


def validate_description(value: Any) -> str | None:
    """설명 검증 (빈 문자열은 None으로 저장)"""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Description must be text.")
    if len(value) > Limits.MAX_DESCRIPTION_LENGTH:
        raise ValidationError("Description is too long.")

    return value or None


def validate_optional_account_id(value: Any) -> str | None:
    """거래에 연결할 계좌 ID 검증 (빈 문자열은 계좌 없음)"""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("Invalid account ID.")
    if len(value) > Limits.MAX_ID_LENGTH:
        raise ValidationError("Account ID is too long.")

    return value


def validate_entity_id(value: Any, label: str = "ID") -> str:
    """삭제/수정 대상 ID 검증"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid {label}.")

    entity_id = value.strip()
    if has_control_characters(entity_id):
        raise ValidationError(f"{label} contains invalid characters.")
    if len(entity_id) > Limits.MAX_ID_LENGTH:
        raise ValidationError(f"{label} is too long.")

    return entity_id


def validate_account_name(value: Any) -> str:
    """계좌 이름 검증 (공백 제거, 100자 이하, 제어 문자 금지)"""
    name = value.strip() if isinstance(value, str) else ""
    if not name:
        raise ValidationError("Account name cannot be empty.")
    if len(name) > Limits.MAX_ACCOUNT_NAME_LENGTH:
        raise ValidationError(
            f"Account name cannot exceed {Limits.MAX_ACCOUNT_NAME_LENGTH} characters."
        )
    if has_control_characters(name):
        raise ValidationError("Account name contains invalid characters.")

    return name


def validate_account_type(value: Any) -> AccountType:
    """계좌 유형 검증 (대소문자 무시, 허용 목록)"""
    if isinstance(value, AccountType):
        return value

    type_str = value.strip().lower() if isinstance(value, str) else ""
    if not type_str:
        raise ValidationError("Account type cannot be empty.")
    if len(type_str) > Limits.MAX_ACCOUNT_TYPE_LENGTH:
        raise ValidationError(
            f"Account type cannot exceed {Limits.MAX_ACCOUNT_TYPE_LENGTH} characters."
        )

    try:
        return AccountType(type_str)
    except ValueError:
        valid = ", ".join(t.value for t in AccountType)
        raise ValidationError(f"Invalid account type. Choose: {valid}.") from None


def validate_frequency(value: Any) -> Frequency:
    """반복 주기 검증"""
    if isinstance(value, Frequency):
        return value
    try:
        return Frequency(str(value).strip().upper())
    except ValueError:
        valid = ", ".join(f.value for f in Frequency)
        raise ValidationError(f"Invalid frequency. Choose: {valid}.") from None


def validate_budget_period(value: Any) -> BudgetPeriod:
    """예산 기간 검증"""
    if isinstance(value, BudgetPeriod):
        return value
    try:
        return BudgetPeriod(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Invalid budget period.") from None


def validate_date(value: Any, label: str = "Date") -> date:
    """날짜 검증 (date, datetime, ISO 문자열 허용)

    문자열은 전체가 ISO 날짜 또는 ISO 일시여야 함 ("2024-01-01xyz" 거부).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise ValidationError(f"{label} is not a valid date.")


def validate_date_range(start: date, end: date | None) -> None:
    """시작일 ≤ 종료일 검증 (종료일 없으면 통과)"""
    if end is not None and start > end:
        raise ValidationError("Start date cannot be after end date.")


def validate_goal_name(value: Any) -> str:
    """목표 이름 검증"""
    name = value.strip() if isinstance(value, str) else ""
    if not name:
        raise ValidationError("Goal name cannot be empty.")
    if len(name) > Limits.MAX_GOAL_NAME_LENGTH:
        raise ValidationError("Goal name is too long.")

    return name
