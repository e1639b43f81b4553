"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 스케줄러: 반복 거래 처리 주기 (초)
    SCHEDULER_POLL_INTERVAL_SEC: int = 3600
    SCHEDULER_TICK_SEC: int = 30

    # JWT 액세스 토큰 유효 시간 (분)
    TOKEN_TTL_MINUTES: int = 60

    RECENT_TRANSACTIONS_LIMIT: int = 10


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    SCHEDULER_LOGS_DIR: Path = LOGS_DIR / "scheduler"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "finance_prod.db"
    DEV_DB: Path = DATA_DIR / "finance_dev.db"


class Limits:
    """입력 검증 한도"""

    # JavaScript Number.MAX_SAFE_INTEGER와 동일 (2^53 - 1)
    MAX_SAFE_INTEGER: int = 9_007_199_254_740_991

    MAX_ACCOUNT_NAME_LENGTH: int = 100
    MAX_ACCOUNT_TYPE_LENGTH: int = 50
    MAX_CATEGORY_LENGTH: int = 100
    MAX_DESCRIPTION_LENGTH: int = 500
    MAX_ID_LENGTH: int = 255
    MAX_GOAL_NAME_LENGTH: int = 255


class ErrorMessages:
    """사용자 노출 오류 메시지

    내부 오류 상세는 절대 포함하지 않음.
    """

    SESSION_INVALID: str = "Invalid session. Please sign in again."
    NOT_FOUND: str = "Data not found."
    ACCOUNT_NOT_FOUND: str = "Account not found."
    TRANSACTION_NOT_FOUND: str = "Transaction not found."

    ACCOUNT_DUPLICATE: str = "An account with that name already exists."
    ACCOUNT_IN_USE: str = "Account cannot be deleted because it still has transactions."

    CREATE_FAILED: str = "Failed to save data."
    UPDATE_FAILED: str = "Failed to update data."
    DELETE_FAILED: str = "Failed to delete data."
    PROCESS_FAILED: str = "Failed to process recurring transactions."
    LOAD_FAILED: str = "Failed to load data."
