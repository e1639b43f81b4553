"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AppMode(str, Enum):
    """실행 모드 (운영 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class AccountType(str, Enum):
    """계좌 유형 (허용 목록)"""

    BANK = "bank"
    CASH = "cash"
    E_WALLET = "e-wallet"
    CREDIT_CARD = "credit_card"
    OTHER = "other"


class TransactionType(str, Enum):
    """거래 유형

    TRANSFER는 계좌 잔액에 영향을 주지 않음.
    """

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"

    @property
    def affects_balance(self) -> bool:
        """잔액 반영 대상 여부"""
        return self is not TransactionType.TRANSFER

    def signed(self, amount: int) -> int:
        """잔액 변동분 (INCOME +, EXPENSE -, TRANSFER 0)"""
        if self is TransactionType.INCOME:
            return amount
        if self is TransactionType.EXPENSE:
            return -amount
        return 0


class Frequency(str, Enum):
    """반복 주기"""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class BudgetPeriod(str, Enum):
    """예산 기간"""

    MONTHLY = "MONTHLY"
    WEEKLY = "WEEKLY"


class ErrorKind(str, Enum):
    """ActionResult 오류 분류 (HTTP 상태 매핑용)"""

    SESSION = "SESSION"
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORAGE = "STORAGE"


@dataclass(frozen=True)
class ActionResult:
    """서비스 작업 결과 (불변)

    Web 레이어에 노출되는 모든 변경 작업은 예외 대신 이 구조로 결과를 반환.
    """

    success: bool
    data: Any = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        """성공 결과 생성"""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind) -> "ActionResult":
        """실패 결과 생성"""
        return cls(success=False, error=error, error_kind=kind)
