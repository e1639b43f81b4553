"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화
"""

from pydantic import BaseModel, Field


class SchedulerStatusResponse(BaseModel):
    """반복 거래 스케줄러 상태 (config_store에 기록된 값)"""

    enabled: bool = Field(..., description="자동 처리 활성화 여부")
    is_running: bool = Field(default=False, description="스케줄러 프로세스 실행 중 여부")
    last_heartbeat: str | None = Field(default=None, description="마지막 heartbeat (ISO)")
    started_at: str | None = Field(default=None, description="시작 시간 (ISO)")
    processed_total: int = Field(default=0, description="시작 이후 생성한 발생분 수")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="실행 모드 (development/production)")
    version: str = Field(..., description="API 버전")
    scheduler: SchedulerStatusResponse = Field(..., description="스케줄러 상태")


class AccountResponse(BaseModel):
    """계좌 응답"""

    id: str = Field(..., description="계좌 ID")
    name: str = Field(..., description="계좌 이름")
    type: str = Field(..., description="계좌 유형")
    balance: int = Field(..., description="현재 잔액")
    created_at: str | None = Field(default=None, description="생성 시간")


class TransactionResponse(BaseModel):
    """거래 응답"""

    id: str = Field(..., description="거래 ID")
    account_id: str | None = Field(default=None, description="연결 계좌 ID")
    amount: int = Field(..., description="금액")
    type: str = Field(..., description="거래 유형")
    category: str = Field(..., description="카테고리")
    date: str = Field(..., description="거래일 (YYYY-MM-DD)")
    description: str | None = Field(default=None, description="설명")
    occurrence_key: str | None = Field(default=None, description="반복 거래 발생분 키")
    created_at: str | None = Field(default=None, description="생성 시간")


class TransactionSummaryResponse(BaseModel):
    """수입/지출 합계 응답 (TRANSFER 제외)"""

    income: int = Field(..., description="수입 합계")
    expense: int = Field(..., description="지출 합계")
    net: int = Field(..., description="수입 - 지출")


class RecurringAccountInfo(BaseModel):
    """반복 거래에 연결된 계좌 요약"""

    name: str
    type: str


class RecurringResponse(BaseModel):
    """반복 거래 정의 응답"""

    id: str = Field(..., description="정의 ID")
    account_id: str | None = Field(default=None, description="연결 계좌 ID")
    amount: int = Field(..., description="금액")
    type: str = Field(..., description="거래 유형")
    category: str = Field(..., description="카테고리")
    description: str | None = Field(default=None, description="설명")
    frequency: str = Field(..., description="반복 주기")
    start_date: str = Field(..., description="시작일")
    end_date: str | None = Field(default=None, description="종료일")
    next_run_date: str = Field(..., description="다음 실행일")
    last_run_date: str | None = Field(default=None, description="마지막 실행일")
    is_active: bool = Field(..., description="활성 여부")
    created_at: str | None = Field(default=None, description="생성 시간")
    account: RecurringAccountInfo | None = Field(default=None, description="연결 계좌")


class ProcessResultResponse(BaseModel):
    """반복 거래 처리 결과"""

    processed_count: int = Field(..., description="생성된 발생분 수")


class BudgetResponse(BaseModel):
    """예산 응답 (spent는 조회 시 계산)"""

    id: str = Field(..., description="예산 ID")
    category: str = Field(..., description="카테고리")
    amount: int = Field(..., description="예산 금액")
    period: str = Field(..., description="기간")
    start_date: str = Field(..., description="시작일")
    end_date: str = Field(..., description="종료일")
    spent: int = Field(..., description="기간 내 지출 합계")
    remaining: int = Field(..., description="남은 금액 (초과 시 음수)")
    created_at: str | None = Field(default=None, description="생성 시간")


class GoalResponse(BaseModel):
    """목표 응답"""

    id: str = Field(..., description="목표 ID")
    name: str = Field(..., description="목표 이름")
    target_amount: int = Field(..., description="목표 금액")
    current_amount: int = Field(..., description="현재 금액")
    deadline: str | None = Field(default=None, description="기한")
    progress: float = Field(..., description="달성률")
    created_at: str | None = Field(default=None, description="생성 시간")


class MessageResponse(BaseModel):
    """단순 메시지 응답"""

    message: str
