"""
요청 스키마 (Pydantic)

Web API 요청 데이터 형식 정의.
값 범위 검증(금액 한도, 길이, 허용 목록)은 core.domain.validation에서 수행하므로
여기서는 타입만 선언.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

# JSON 숫자 입력 (정수 여부는 서비스에서 검증)
Amount = int | float | Decimal


class AccountCreateRequest(BaseModel):
    """계좌 추가 요청"""

    name: str = Field(..., description="계좌 이름 (소유자 내 고유)")
    type: str = Field(..., description="계좌 유형 (bank, cash, e-wallet, credit_card, other)")
    balance: Amount = Field(default=0, description="시작 잔액")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Main Bank", "type": "bank", "balance": 1000000},
            ]
        }
    }


class TransactionCreateRequest(BaseModel):
    """거래 추가 요청"""

    amount: Amount = Field(..., description="금액 (0 이상 정수)")
    type: str = Field(..., description="거래 유형 (INCOME/EXPENSE/TRANSFER)")
    category: str = Field(..., description="카테고리")
    date: datetime.date = Field(..., description="거래일")
    description: str | None = Field(default=None, description="설명")
    account_id: str | None = Field(default=None, description="연결 계좌 ID")


class TransactionUpdateRequest(BaseModel):
    """거래 수정 요청 (지정한 필드만 변경, 잔액 재계산 없음)"""

    amount: Amount | None = Field(default=None, description="금액")
    type: str | None = Field(default=None, description="거래 유형")
    category: str | None = Field(default=None, description="카테고리")
    date: datetime.date | None = Field(default=None, description="거래일")
    description: str | None = Field(default=None, description="설명")


class RecurringCreateRequest(BaseModel):
    """반복 거래 정의 추가 요청"""

    amount: Amount = Field(..., description="금액")
    type: str = Field(..., description="거래 유형")
    category: str = Field(..., description="카테고리")
    frequency: str = Field(..., description="반복 주기 (DAILY/WEEKLY/MONTHLY/YEARLY)")
    start_date: datetime.date = Field(..., description="시작일 (첫 실행일)")
    end_date: datetime.date | None = Field(default=None, description="종료일")
    description: str | None = Field(default=None, description="설명")
    account_id: str | None = Field(default=None, description="연결 계좌 ID")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "amount": 50000,
                    "type": "EXPENSE",
                    "category": "Rent",
                    "frequency": "MONTHLY",
                    "start_date": "2024-01-31",
                },
            ]
        }
    }


class RecurringUpdateRequest(BaseModel):
    """반복 거래 정의 수정 요청 (next_run_date는 다시 계산하지 않음)"""

    amount: Amount | None = Field(default=None, description="금액")
    type: str | None = Field(default=None, description="거래 유형")
    category: str | None = Field(default=None, description="카테고리")
    description: str | None = Field(default=None, description="설명")
    frequency: str | None = Field(default=None, description="반복 주기")
    start_date: datetime.date | None = Field(default=None, description="시작일")
    end_date: datetime.date | None = Field(default=None, description="종료일")
    account_id: str | None = Field(default=None, description="연결 계좌 ID")
    is_active: bool | None = Field(default=None, description="활성 여부")


class RecurringProcessRequest(BaseModel):
    """반복 거래 처리 요청"""

    as_of: datetime.date | None = Field(default=None, description="기준일 (기본 오늘, UTC)")


class BudgetCreateRequest(BaseModel):
    """예산 추가 요청"""

    category: str = Field(..., description="카테고리")
    amount: Amount = Field(..., description="예산 금액 (0 초과)")
    period: str = Field(..., description="기간 (MONTHLY/WEEKLY)")
    start_date: datetime.date = Field(..., description="시작일")
    end_date: datetime.date = Field(..., description="종료일")


class GoalCreateRequest(BaseModel):
    """목표 추가 요청"""

    name: str = Field(..., description="목표 이름")
    target_amount: Amount = Field(..., description="목표 금액")
    current_amount: Amount = Field(default=0, description="현재 금액")
    deadline: datetime.date | None = Field(default=None, description="기한")


class GoalProgressRequest(BaseModel):
    """목표 진행도 갱신 요청"""

    current_amount: Amount = Field(..., description="현재 금액")
