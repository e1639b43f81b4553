"""
Budget 라우트

예산 조회(지출 합계 포함)/추가/삭제 API
"""

from fastapi import APIRouter, Depends, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.auth import get_current_owner
from web.dependencies import get_db, get_verbose_errors
from web.models.requests import BudgetCreateRequest
from web.models.responses import BudgetResponse, MessageResponse
from web.routes.errors import ensure_success
from web.services.budget_service import BudgetService

router = APIRouter(prefix="/api", tags=["Budgets"])


def _service(
    db: SQLiteAdapter = Depends(get_db),
    verbose_errors: bool = Depends(get_verbose_errors),
) -> BudgetService:
    return BudgetService(db, verbose_errors)


@router.get("/budgets", response_model=list[BudgetResponse])
async def get_budgets(
    owner_id: str = Depends(get_current_owner),
    service: BudgetService = Depends(_service),
) -> list[BudgetResponse]:
    """예산 목록 (spent = 기간 내 같은 카테고리 EXPENSE 합계)"""
    budgets = await service.get_budgets(owner_id)
    return [BudgetResponse(**b) for b in budgets]


@router.post("/budgets", response_model=BudgetResponse, status_code=201)
async def add_budget(
    request: BudgetCreateRequest,
    owner_id: str = Depends(get_current_owner),
    service: BudgetService = Depends(_service),
) -> BudgetResponse:
    """예산 추가"""
    result = await service.add_budget(
        owner_id,
        category=request.category,
        amount=request.amount,
        period=request.period,
        start_date=request.start_date,
        end_date=request.end_date,
    )
    return BudgetResponse(**ensure_success(result))


@router.delete("/budgets/{budget_id}", response_model=MessageResponse)
async def delete_budget(
    budget_id: str = Path(..., description="예산 ID"),
    owner_id: str = Depends(get_current_owner),
    service: BudgetService = Depends(_service),
) -> MessageResponse:
    """예산 삭제"""
    ensure_success(await service.delete_budget(owner_id, budget_id))
    return MessageResponse(message="Budget deleted")
