"""
Account 라우트

계좌 조회/추가/삭제 API
"""

from fastapi import APIRouter, Depends, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.auth import get_current_owner
from web.dependencies import get_db, get_verbose_errors
from web.models.requests import AccountCreateRequest
from web.models.responses import AccountResponse, MessageResponse
from web.routes.errors import ensure_success
from web.services.account_service import AccountService

router = APIRouter(prefix="/api", tags=["Accounts"])


def _service(
    db: SQLiteAdapter = Depends(get_db),
    verbose_errors: bool = Depends(get_verbose_errors),
) -> AccountService:
    return AccountService(db, verbose_errors)


@router.get("/accounts", response_model=list[AccountResponse])
async def get_accounts(
    owner_id: str = Depends(get_current_owner),
    service: AccountService = Depends(_service),
) -> list[AccountResponse]:
    """계좌 목록 조회"""
    accounts = await service.get_accounts(owner_id)
    return [AccountResponse(**a) for a in accounts]


@router.post("/accounts", response_model=AccountResponse, status_code=201)
async def add_account(
    request: AccountCreateRequest,
    owner_id: str = Depends(get_current_owner),
    service: AccountService = Depends(_service),
) -> AccountResponse:
    """계좌 추가

    같은 이름(대소문자 무시)의 계좌가 있으면 409.
    """
    result = await service.add_account(
        owner_id,
        name=request.name,
        type=request.type,
        balance=request.balance,
    )
    return AccountResponse(**ensure_success(result))


@router.delete("/accounts/{account_id}", response_model=MessageResponse)
async def delete_account(
    account_id: str = Path(..., description="계좌 ID"),
    owner_id: str = Depends(get_current_owner),
    service: AccountService = Depends(_service),
) -> MessageResponse:
    """계좌 삭제

    거래가 남아 있으면 409.
    """
    ensure_success(await service.delete_account(owner_id, account_id))
    return MessageResponse(message="Account deleted")
