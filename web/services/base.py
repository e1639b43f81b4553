"""
서비스 공통 기반

Core 레이어의 예외(FinanceError)를 ActionResult로 변환.
예상하지 못한 오류(저장소 오류 등)는 로그를 남기고 일반 메시지로 반환.
"""

import logging
from typing import Any, Awaitable, Callable

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import ErrorMessages
from core.errors import FinanceError
from core.types import ActionResult, ErrorKind

logger = logging.getLogger(__name__)


class BaseService:
    """서비스 베이스 클래스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        verbose_errors: 저장소 오류 로그에 traceback 포함 여부 (운영 모드에서는 False)
    """

    def __init__(self, db: SQLiteAdapter, verbose_errors: bool = True):
        self.db = db
        self.verbose_errors = verbose_errors

    async def run_action(
        self,
        user_id: str | None,
        action: str,
        operation: Callable[[], Awaitable[Any]],
        failure_message: str,
    ) -> ActionResult:
        """변경 작업 실행 후 ActionResult로 변환

        Args:
            user_id: 소유자 ID (비어 있으면 세션 오류)
            action: 로그용 작업 이름
            operation: 실행할 코루틴 함수 (반환값이 ActionResult.data)
            failure_message: 저장소 오류 시 사용자 노출 메시지

        Returns:
            ActionResult
        """
        if not user_id:
            return ActionResult.fail(ErrorMessages.SESSION_INVALID, ErrorKind.SESSION)

        try:
            data = await operation()
        except FinanceError as e:
            logger.info(
                f"{action} 거부: {e.message}",
                extra={"user_id": user_id, "kind": e.kind.value},
            )
            return ActionResult.fail(e.message, e.kind)
        except Exception as e:
            logger.error(
                f"{action} 실패: {e}",
                extra={"user_id": user_id},
                exc_info=self.verbose_errors,
            )
            return ActionResult.fail(failure_message, ErrorKind.STORAGE)

        return ActionResult.ok(data)
