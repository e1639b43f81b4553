"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountCreateRequest,
    BudgetCreateRequest,
    GoalCreateRequest,
    GoalProgressRequest,
    RecurringCreateRequest,
    RecurringProcessRequest,
    RecurringUpdateRequest,
    TransactionCreateRequest,
    TransactionUpdateRequest,
)
from web.models.responses import (
    AccountResponse,
    BudgetResponse,
    GoalResponse,
    HealthResponse,
    MessageResponse,
    ProcessResultResponse,
    RecurringResponse,
    SchedulerStatusResponse,
    TransactionResponse,
    TransactionSummaryResponse,
)

__all__ = [
    # Requests
    "AccountCreateRequest",
    "BudgetCreateRequest",
    "GoalCreateRequest",
    "GoalProgressRequest",
    "RecurringCreateRequest",
    "RecurringProcessRequest",
    "RecurringUpdateRequest",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    # Responses
    "AccountResponse",
    "BudgetResponse",
    "GoalResponse",
    "HealthResponse",
    "MessageResponse",
    "ProcessResultResponse",
    "RecurringResponse",
    "SchedulerStatusResponse",
    "TransactionResponse",
    "TransactionSummaryResponse",
]
