"""
ActionResult → HTTP 응답 변환
"""

from fastapi import HTTPException

from core.types import ActionResult, ErrorKind

# 오류 분류별 HTTP 상태 코드
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.SESSION: 401,
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE: 500,
}


def ensure_success(result: ActionResult):
    """실패한 ActionResult면 HTTPException 발생, 성공이면 data 반환"""
    if result.success:
        return result.data

    status_code = STATUS_BY_KIND.get(result.error_kind, 500)
    raise HTTPException(status_code=status_code, detail=result.error)
