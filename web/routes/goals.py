"""
Goal 라우트

저축 목표 조회/추가/진행도 갱신/삭제 API
"""

from fastapi import APIRouter, Depends, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.auth import get_current_owner
from web.dependencies import get_db, get_verbose_errors
from web.models.requests import GoalCreateRequest, GoalProgressRequest
from web.models.responses import GoalResponse, MessageResponse
from web.routes.errors import ensure_success
from web.services.goal_service import GoalService

router = APIRouter(prefix="/api", tags=["Goals"])


def _service(
    db: SQLiteAdapter = Depends(get_db),
    verbose_errors: bool = Depends(get_verbose_errors),
) -> GoalService:
    return GoalService(db, verbose_errors)


@router.get("/goals", response_model=list[GoalResponse])
async def get_goals(
    owner_id: str = Depends(get_current_owner),
    service: GoalService = Depends(_service),
) -> list[GoalResponse]:
    """목표 목록"""
    goals = await service.get_goals(owner_id)
    return [GoalResponse(**g) for g in goals]


@router.post("/goals", response_model=GoalResponse, status_code=201)
async def add_goal(
    request: GoalCreateRequest,
    owner_id: str = Depends(get_current_owner),
    service: GoalService = Depends(_service),
) -> GoalResponse:
    """목표 추가"""
    result = await service.add_goal(
        owner_id,
        name=request.name,
        target_amount=request.target_amount,
        current_amount=request.current_amount,
        deadline=request.deadline,
    )
    return GoalResponse(**ensure_success(result))


@router.patch("/goals/{goal_id}/progress", response_model=GoalResponse)
async def update_goal_progress(
    request: GoalProgressRequest,
    goal_id: str = Path(..., description="목표 ID"),
    owner_id: str = Depends(get_current_owner),
    service: GoalService = Depends(_service),
) -> GoalResponse:
    """목표 진행 금액 갱신"""
    result = await service.update_goal_progress(owner_id, goal_id, request.current_amount)
    return GoalResponse(**ensure_success(result))


@router.delete("/goals/{goal_id}", response_model=MessageResponse)
async def delete_goal(
    goal_id: str = Path(..., description="목표 ID"),
    owner_id: str = Depends(get_current_owner),
    service: GoalService = Depends(_service),
) -> MessageResponse:
    """목표 삭제"""
    ensure_success(await service.delete_goal(owner_id, goal_id))
    return MessageResponse(message="Goal deleted")
