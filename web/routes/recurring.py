"""
Recurring 라우트

반복 거래 정의 CRUD 및 수동 처리 트리거 API
"""

from fastapi import APIRouter, Depends, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.auth import get_current_owner
from web.dependencies import get_db, get_verbose_errors
from web.models.requests import (
    RecurringCreateRequest,
    RecurringProcessRequest,
    RecurringUpdateRequest,
)
from web.models.responses import MessageResponse, ProcessResultResponse, RecurringResponse
from web.routes.errors import ensure_success
from web.services.recurring_service import RecurringService

router = APIRouter(prefix="/api", tags=["Recurring"])


def _service(
    db: SQLiteAdapter = Depends(get_db),
    verbose_errors: bool = Depends(get_verbose_errors),
) -> RecurringService:
    return RecurringService(db, verbose_errors)


@router.get("/recurring", response_model=list[RecurringResponse])
async def get_recurring_transactions(
    owner_id: str = Depends(get_current_owner),
    service: RecurringService = Depends(_service),
) -> list[RecurringResponse]:
    """반복 거래 정의 목록 (계좌 이름/유형 포함)"""
    items = await service.get_recurring_transactions(owner_id)
    return [RecurringResponse(**item) for item in items]


@router.post("/recurring", response_model=RecurringResponse, status_code=201)
async def add_recurring_transaction(
    request: RecurringCreateRequest,
    owner_id: str = Depends(get_current_owner),
    service: RecurringService = Depends(_service),
) -> RecurringResponse:
    """반복 거래 정의 추가 (첫 실행일 = 시작일)"""
    result = await service.add_recurring_transaction(
        owner_id,
        amount=request.amount,
        type=request.type,
        category=request.category,
        frequency=request.frequency,
        start_date=request.start_date,
        end_date=request.end_date,
        description=request.description,
        account_id=request.account_id,
    )
    return RecurringResponse(**ensure_success(result))


@router.post("/recurring/process", response_model=ProcessResultResponse)
async def process_recurring_transactions(
    request: RecurringProcessRequest | None = None,
    owner_id: str = Depends(get_current_owner),
    service: RecurringService = Depends(_service),
) -> ProcessResultResponse:
    """도래한 반복 거래 처리

    같은 기준일로 여러 번 호출해도 발생분은 한 번만 생성됨.
    """
    as_of = request.as_of if request else None
    result = await service.process_recurring_transactions(owner_id, as_of)
    return ProcessResultResponse(**ensure_success(result))


@router.patch("/recurring/{recurring_id}", response_model=RecurringResponse)
async def update_recurring_transaction(
    request: RecurringUpdateRequest,
    recurring_id: str = Path(..., description="정의 ID"),
    owner_id: str = Depends(get_current_owner),
    service: RecurringService = Depends(_service),
) -> RecurringResponse:
    """반복 거래 정의 수정 (next_run_date는 유지)"""
    fields = request.model_dump(exclude_unset=True)
    result = await service.update_recurring_transaction(owner_id, recurring_id, fields)
    return RecurringResponse(**ensure_success(result))


@router.delete("/recurring/{recurring_id}", response_model=MessageResponse)
async def delete_recurring_transaction(
    recurring_id: str = Path(..., description="정의 ID"),
    owner_id: str = Depends(get_current_owner),
    service: RecurringService = Depends(_service),
) -> MessageResponse:
    """반복 거래 정의 삭제"""
    ensure_success(await service.delete_recurring_transaction(owner_id, recurring_id))
    return MessageResponse(message="Recurring transaction deleted")
