"""
Transaction 라우트

거래 조회/추가/수정/삭제 및 수입/지출 합계 API.
추가/삭제 시 연결 계좌 잔액이 같은 작업 단위에서 반영됨.
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from web.auth import get_current_owner
from web.dependencies import get_db, get_verbose_errors
from web.models.requests import TransactionCreateRequest, TransactionUpdateRequest
from web.models.responses import (
    MessageResponse,
    TransactionResponse,
    TransactionSummaryResponse,
)
from web.routes.errors import ensure_success
from web.services.transaction_service import TransactionService

router = APIRouter(prefix="/api", tags=["Transactions"])


def _service(
    db: SQLiteAdapter = Depends(get_db),
    verbose_errors: bool = Depends(get_verbose_errors),
) -> TransactionService:
    return TransactionService(db, verbose_errors)


@router.get("/transactions", response_model=list[TransactionResponse])
async def get_transactions(
    limit: int = Query(
        default=Defaults.RECENT_TRANSACTIONS_LIMIT, ge=1, le=100, description="조회 개수"
    ),
    owner_id: str = Depends(get_current_owner),
    service: TransactionService = Depends(_service),
) -> list[TransactionResponse]:
    """최근 거래 조회 (거래일 내림차순)"""
    transactions = await service.get_transactions(owner_id, limit)
    return [TransactionResponse(**t) for t in transactions]


@router.get("/transactions/summary", response_model=TransactionSummaryResponse)
async def get_transaction_summary(
    owner_id: str = Depends(get_current_owner),
    service: TransactionService = Depends(_service),
) -> TransactionSummaryResponse:
    """수입/지출 합계"""
    return TransactionSummaryResponse(**await service.get_transaction_summary(owner_id))


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str = Path(..., description="거래 ID"),
    owner_id: str = Depends(get_current_owner),
    service: TransactionService = Depends(_service),
) -> TransactionResponse:
    """거래 단건 조회"""
    result = await service.get_transaction(owner_id, transaction_id)
    return TransactionResponse(**ensure_success(result))


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
async def add_transaction(
    request: TransactionCreateRequest,
    owner_id: str = Depends(get_current_owner),
    service: TransactionService = Depends(_service),
) -> TransactionResponse:
    """거래 추가"""
    result = await service.add_transaction(
        owner_id,
        amount=request.amount,
        type=request.type,
        category=request.category,
        date=request.date,
        description=request.description,
        account_id=request.account_id,
    )
    return TransactionResponse(**ensure_success(result))


@router.patch("/transactions/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    request: TransactionUpdateRequest,
    transaction_id: str = Path(..., description="거래 ID"),
    owner_id: str = Depends(get_current_owner),
    service: TransactionService = Depends(_service),
) -> TransactionResponse:
    """거래 수정

    주의: 금액/유형을 바꿔도 계좌 잔액은 다시 계산하지 않음.
    """
    fields = request.model_dump(exclude_unset=True)
    result = await service.update_transaction(owner_id, transaction_id, fields)
    return TransactionResponse(**ensure_success(result))


@router.delete("/transactions/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: str = Path(..., description="거래 ID"),
    owner_id: str = Depends(get_current_owner),
    service: TransactionService = Depends(_service),
) -> MessageResponse:
    """거래 삭제 (잔액 역반영)"""
    ensure_success(await service.delete_transaction(owner_id, transaction_id))
    return MessageResponse(message="Transaction deleted")
