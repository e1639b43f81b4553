"""
설정 로더

secrets.yaml 로드 및 실행 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths
from core.types import AppMode


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    mode: AppMode
    web_secret_key: str
    token_ttl_minutes: int = Defaults.TOKEN_TTL_MINUTES
    scheduler_poll_interval_sec: int = Defaults.SCHEDULER_POLL_INTERVAL_SEC
    db_path: Path | None = None


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    # mode 검증
    mode_str = data.get("mode")
    if mode_str is None:
        raise SecretsLoadError("secrets.yaml에 'mode' 필드가 없습니다")

    try:
        mode = AppMode(mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in AppMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    # Web secret key 로드 (JWT 서명용)
    web_config = data.get("web") or {}
    web_secret_key = web_config.get("secret_key", "")

    if not web_secret_key:
        raise SecretsLoadError(
            "secrets.yaml의 web 섹션에 'secret_key'가 없습니다"
        )

    token_ttl_minutes = int(
        web_config.get("token_ttl_minutes", Defaults.TOKEN_TTL_MINUTES)
    )

    scheduler_config = data.get("scheduler") or {}
    poll_interval_sec = int(
        scheduler_config.get(
            "poll_interval_sec", Defaults.SCHEDULER_POLL_INTERVAL_SEC
        )
    )

    # DB 경로 override (선택)
    db_config = data.get("database") or {}
    db_path_str = db_config.get("path")

    return Secrets(
        mode=mode,
        web_secret_key=web_secret_key,
        token_ttl_minutes=token_ttl_minutes,
        scheduler_poll_interval_sec=poll_interval_sec,
        db_path=Path(db_path_str) if db_path_str else None,
    )


def get_db_path(secrets: Secrets) -> Path:
    """모드에 따른 DB 경로 반환

    Args:
        secrets: Secrets 인스턴스

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if secrets.db_path is not None:
        return secrets.db_path
    if secrets.mode == AppMode.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            self._secrets = load_secrets(secrets_path)

    @property
    def mode(self) -> AppMode:
        """현재 실행 모드"""
        assert self._secrets is not None
        return self._secrets.mode

    @property
    def is_production(self) -> bool:
        """운영 모드 여부 (내부 오류 로그 억제 기준)"""
        return self.mode == AppMode.PRODUCTION

    @property
    def web_secret_key(self) -> str:
        """Web JWT Secret Key"""
        assert self._secrets is not None
        return self._secrets.web_secret_key

    @property
    def token_ttl_minutes(self) -> int:
        """액세스 토큰 유효 시간 (분)"""
        assert self._secrets is not None
        return self._secrets.token_ttl_minutes

    @property
    def scheduler_poll_interval_sec(self) -> int:
        """반복 거래 처리 주기 (초)"""
        assert self._secrets is not None
        return self._secrets.scheduler_poll_interval_sec

    @property
    def db_path(self) -> Path:
        """현재 모드의 DB 경로"""
        assert self._secrets is not None
        return get_db_path(self._secrets)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
