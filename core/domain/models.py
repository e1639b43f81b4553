"""
도메인 모델

Account, Transaction, RecurringTransaction, Budget, Goal.
모든 엔티티는 user_id(소유자) 한 명에게 귀속됨.
금액은 통화 최소 단위가 아닌 정수 금액(int)으로 저장.
"""

import unicodedata
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from core.types import AccountType, BudgetPeriod, Frequency, TransactionType
from core.utils.timezone import parse_date


def _opt_date(value: str | None) -> date | None:
    return parse_date(value) if value else None


def account_name_key(name: str) -> str:
    """계좌 이름 중복 판정 키 (유니코드 대소문자 무시)

    NFC 정규화 후 casefold. "Épargne"와 "épargne", 조합형과 완성형 "é"가 같은 키.
    """
    return unicodedata.normalize("NFC", name).casefold()


@dataclass
class Account:
    """계좌

    Attributes:
        id: 계좌 ID (UUID)
        user_id: 소유자 ID
        name: 계좌 이름 (소유자 내 대소문자 무시 고유)
        type: 계좌 유형
        balance: 현재 잔액 (거래 추가/삭제 시 증분 반영)
        created_at: 생성 시간 (UTC 문자열)
    """

    id: str
    user_id: str
    name: str
    type: AccountType
    balance: int
    created_at: str | None = None

    COLUMNS = "id, user_id, name, type, balance, created_at"

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Account":
        return cls(
            id=row[0],
            user_id=row[1],
            name=row[2],
            type=AccountType(row[3]),
            balance=int(row[4]),
            created_at=row[5],
        )

    @property
    def name_key(self) -> str:
        return account_name_key(self.name)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass
class Transaction:
    """거래

    Attributes:
        id: 거래 ID (UUID)
        user_id: 소유자 ID
        account_id: 연결 계좌 ID (없을 수 있음)
        amount: 금액 (0 이상)
        type: INCOME / EXPENSE / TRANSFER
        category: 카테고리
        date: 거래일
        description: 설명
        occurrence_key: 반복 거래에서 생성된 경우의 발생분 키
    """

    id: str
    user_id: str
    account_id: str | None
    amount: int
    type: TransactionType
    category: str
    date: date
    description: str | None = None
    occurrence_key: str | None = None
    created_at: str | None = None

    COLUMNS = (
        "id, user_id, account_id, amount, type, category, date, "
        "description, occurrence_key, created_at"
    )

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Transaction":
        return cls(
            id=row[0],
            user_id=row[1],
            account_id=row[2],
            amount=int(row[3]),
            type=TransactionType(row[4]),
            category=row[5],
            date=parse_date(row[6]),
            description=row[7],
            occurrence_key=row[8],
            created_at=row[9],
        )

    @property
    def balance_effect(self) -> int:
        """연결 계좌 잔액에 반영되는 부호 있는 금액 (계좌 없으면 0)"""
        if self.account_id is None:
            return 0
        return self.type.signed(self.amount)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        data["date"] = self.date.isoformat()
        return data


@dataclass
class TransactionSummary:
    """소유자 거래 합계 (계좌 잔액과 무관, TRANSFER 제외)

    Attributes:
        income: INCOME 합계
        expense: EXPENSE 합계
        net: income - expense
    """

    income: int = 0
    expense: int = 0

    @property
    def net(self) -> int:
        return self.income - self.expense

    def to_dict(self) -> dict[str, Any]:
        return {"income": self.income, "expense": self.expense, "net": self.net}


@dataclass
class RecurringTransaction:
    """반복 거래 정의

    생성 시 next_run_date = start_date, is_active = True.
    자동 삭제되지 않음 (만료 시 is_active = False).
    """

    id: str
    user_id: str
    account_id: str | None
    amount: int
    type: TransactionType
    category: str
    description: str | None
    frequency: Frequency
    start_date: date
    end_date: date | None
    next_run_date: date
    last_run_date: date | None
    is_active: bool
    created_at: str | None = None

    COLUMNS = (
        "id, user_id, account_id, amount, type, category, description, "
        "frequency, start_date, end_date, next_run_date, last_run_date, "
        "is_active, created_at"
    )

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "RecurringTransaction":
        return cls(
            id=row[0],
            user_id=row[1],
            account_id=row[2],
            amount=int(row[3]),
            type=TransactionType(row[4]),
            category=row[5],
            description=row[6],
            frequency=Frequency(row[7]),
            start_date=parse_date(row[8]),
            end_date=_opt_date(row[9]),
            next_run_date=parse_date(row[10]),
            last_run_date=_opt_date(row[11]),
            is_active=bool(row[12]),
            created_at=row[13],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "account_id": self.account_id,
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category,
            "description": self.description,
            "frequency": self.frequency.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "next_run_date": self.next_run_date.isoformat(),
            "last_run_date": self.last_run_date.isoformat() if self.last_run_date else None,
            "is_active": self.is_active,
            "created_at": self.created_at,
        }


@dataclass
class Budget:
    """예산

    spent는 저장하지 않고 조회 시마다 계산 (BudgetStore.get_budgets_with_spent).
    """

    id: str
    user_id: str
    category: str
    amount: int
    period: BudgetPeriod
    start_date: date
    end_date: date
    spent: int = 0
    created_at: str | None = None

    COLUMNS = "id, user_id, category, amount, period, start_date, end_date, created_at"

    @classmethod
    def from_row(cls, row: tuple[Any, ...], spent: int = 0) -> "Budget":
        return cls(
            id=row[0],
            user_id=row[1],
            category=row[2],
            amount=int(row[3]),
            period=BudgetPeriod(row[4]),
            start_date=parse_date(row[5]),
            end_date=parse_date(row[6]),
            spent=spent,
            created_at=row[7],
        )

    @property
    def remaining(self) -> int:
        """남은 예산 (초과 시 음수)"""
        return self.amount - self.spent

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category": self.category,
            "amount": self.amount,
            "period": self.period.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "spent": self.spent,
            "remaining": self.remaining,
            "created_at": self.created_at,
        }


@dataclass
class Goal:
    """저축 목표 (진행도는 수동 갱신)"""

    id: str
    user_id: str
    name: str
    target_amount: int
    current_amount: int
    deadline: date | None = None
    created_at: str | None = None

    COLUMNS = "id, user_id, name, target_amount, current_amount, deadline, created_at"

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Goal":
        return cls(
            id=row[0],
            user_id=row[1],
            name=row[2],
            target_amount=int(row[3]),
            current_amount=int(row[4]),
            deadline=_opt_date(row[5]),
            created_at=row[6],
        )

    @property
    def progress(self) -> float:
        """달성률 (0.0 ~ 1.0 이상 가능)"""
        if self.target_amount == 0:
            return 1.0
        return self.current_amount / self.target_amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "target_amount": self.target_amount,
            "current_amount": self.current_amount,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "progress": self.progress,
            "created_at": self.created_at,
        }
