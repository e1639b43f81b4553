"""
도메인 예외

Core 레이어는 예외를 발생시키고, 서비스 레이어가 ActionResult로 변환.
"""

from core.types import ErrorKind


class FinanceError(Exception):
    """도메인 예외 베이스

    message는 사용자에게 그대로 노출 가능한 문구여야 함.
    """

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FinanceError):
    """입력 검증 실패 (저장 전 차단)"""

    kind = ErrorKind.VALIDATION


class NotFoundError(FinanceError):
    """대상 없음 또는 소유자 불일치

    존재하지 않음과 타인 소유를 구분하지 않음.
    """

    kind = ErrorKind.NOT_FOUND


class ConflictError(FinanceError):
    """중복 이름, 사용 중인 계좌 삭제 등 상태 충돌"""

    kind = ErrorKind.CONFLICT
