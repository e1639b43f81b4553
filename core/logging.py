"""
로깅 설정 유틸리티

Web과 Scheduler 공통 로깅 설정.
- 콘솔: stdout
- 파일: logs/<process>/<process>.log (자정 롤링, 7일 보관)

모듈은 logging.getLogger(__name__)를 사용하고, 소유자/대상 식별자는
extra={"user_id": ..., "recurring_id": ...} 형태로 전달.
ContextFormatter가 extra 필드를 메시지 뒤에 key=value로 붙임.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# extra로 전달되면 메시지 뒤에 출력되는 필드 (출력 순서 유지)
CONTEXT_FIELDS = (
    "user_id",
    "account_id",
    "transaction_id",
    "recurring_id",
    "type",
    "state",
    "fields",
    "kind",
    "mode",
    "db_path",
    "poll_interval_sec",
    "last_poll_time",
    "error",
)

NOISY_LOGGERS = [
    "aiosqlite",
    "asyncio",
    "httpcore",
    "httpx",
    "uvicorn.access",
]


class ContextFormatter(logging.Formatter):
    """extra 컨텍스트 필드를 메시지 뒤에 붙이는 Formatter"""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if not context:
            return message

        # traceback이 붙은 경우 첫 줄에만 컨텍스트 추가
        first, sep, rest = message.partition("\n")
        return f"{first} [{' '.join(context)}]{sep}{rest}"


def get_log_dir(process_name: str) -> Path:
    if process_name == "web":
        return Paths.WEB_LOGS_DIR
    if process_name == "scheduler":
        return Paths.SCHEDULER_LOGS_DIR
    return Paths.LOGS_DIR


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거에 콘솔/파일 핸들러 설치

    여러 번 호출해도 핸들러가 중복되지 않음 (기존 핸들러 교체).

    Args:
        process_name: "web" 또는 "scheduler" (로그 디렉토리/파일 이름)
        console_level: 콘솔 핸들러 레벨
        file_level: 파일 핸들러 레벨
        log_dir: 로그 디렉토리 (None이면 프로세스별 기본 경로)

    Returns:
        설정된 루트 Logger
    """
    log_dir = log_dir or get_log_dir(process_name)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{process_name}.log"

    formatter = ContextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(console_level, file_level))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"로깅 초기화 완료: {process_name} ({log_file})")
    return root_logger
