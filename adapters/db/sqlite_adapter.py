"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
Web과 Scheduler가 동시에 접근 가능하도록 설정.

쓰기 단위(transaction)는 BEGIN IMMEDIATE로 시작하여 Writer를 DB 수준에서 직렬화.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.domain.models import account_name_key

logger = logging.getLogger(__name__)


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    if db_path_str != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path_str)

    # WAL 모드 설정
    await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    # 외래 키 제약 활성화
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)

    사용 예시:
    ```python
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()

    async with adapter.transaction():
        await adapter.execute("INSERT INTO ...")

    await adapter.close()
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._conn: aiosqlite.Connection | None = None
        # 같은 연결을 공유하는 코루틴끼리 작업 단위가 섞이지 않도록 직렬화
        self._write_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.debug("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저 (원자적 작업 단위)

        성공 시 자동 커밋, 예외 시 자동 롤백.
        BEGIN IMMEDIATE로 쓰기 잠금을 먼저 획득하므로 다른 연결의 Writer와
        교차 실행되지 않음. 중첩 호출은 지원하지 않음 (Lock 재진입 불가).

        사용 예시:
        ```python
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        async with self._write_lock:
            conn = self._conn
            if not conn.in_transaction:
                await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                await conn.commit()
            except BaseException:
                await conn.rollback()
                raise

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    Args:
        adapter: 연결된 SQLiteAdapter

    주의: 앱/스케줄러 시작 시 호출. 여러 번 호출해도 안전 (IF NOT EXISTS).
    """
    # account (잔액은 거래 추가/삭제 시 증분 반영)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS account (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            name             TEXT NOT NULL,
            name_key         TEXT NOT NULL,
            type             TEXT NOT NULL,
            balance          INTEGER NOT NULL DEFAULT 0,

            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)
    await _ensure_account_name_key(adapter)

    # transactions (occurrence_key: 반복 거래 발생분 중복 방지)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            account_id       TEXT REFERENCES account(id),

            amount           INTEGER NOT NULL CHECK (amount >= 0),
            type             TEXT NOT NULL,
            category         TEXT NOT NULL,
            date             TEXT NOT NULL,
            description      TEXT,

            occurrence_key   TEXT UNIQUE,

            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # recurring_transaction (계좌 삭제 시 참조만 해제)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS recurring_transaction (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            account_id       TEXT REFERENCES account(id) ON DELETE SET NULL,

            amount           INTEGER NOT NULL CHECK (amount >= 0),
            type             TEXT NOT NULL,
            category         TEXT NOT NULL,
            description      TEXT,

            frequency        TEXT NOT NULL,
            start_date       TEXT NOT NULL,
            end_date         TEXT,
            next_run_date    TEXT NOT NULL,
            last_run_date    TEXT,
            is_active        INTEGER NOT NULL DEFAULT 1,

            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # budget (spent는 저장하지 않음)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS budget (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            category         TEXT NOT NULL,
            amount           INTEGER NOT NULL,
            period           TEXT NOT NULL,
            start_date       TEXT NOT NULL,
            end_date         TEXT NOT NULL,

            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # goal (거래와 연동 없음)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS goal (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            name             TEXT NOT NULL,
            target_amount    INTEGER NOT NULL,
            current_amount   INTEGER NOT NULL DEFAULT 0,
            deadline         TEXT,

            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # config_store (스케줄러 상태 등 런타임 값)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS config_store (
            id           INTEGER PRIMARY KEY AUTOINCREMENT,
            config_key   TEXT NOT NULL UNIQUE,
            value_json   TEXT NOT NULL,
            version      INTEGER NOT NULL DEFAULT 1,

            updated_by   TEXT NOT NULL,
            created_at   TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at   TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE UNIQUE INDEX IF NOT EXISTS ux_account_user_name_key
        ON account(user_id, name_key)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_user_date
        ON transactions(user_id, date)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_account
        ON transactions(account_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_budget
        ON transactions(user_id, type, category, date)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_recurring_due
        ON recurring_transaction(is_active, next_run_date)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")


async def _ensure_account_name_key(adapter: SQLiteAdapter) -> None:
    """name_key 컬럼이 없는 기존 DB 보정

    이전 스키마는 name COLLATE NOCASE 인덱스(ASCII만 대소문자 무시)를 사용.
    name_key를 채운 뒤 이전 인덱스 삭제.
    """
    columns = await adapter.fetchall("PRAGMA table_info(account)")
    if any(column[1] == "name_key" for column in columns):
        return

    await adapter.execute(
        "ALTER TABLE account ADD COLUMN name_key TEXT NOT NULL DEFAULT ''"
    )
    for account_id, name in await adapter.fetchall("SELECT id, name FROM account"):
        await adapter.execute(
            "UPDATE account SET name_key = ? WHERE id = ?",
            (account_name_key(name), account_id),
        )
    await adapter.execute("DROP INDEX IF EXISTS ux_account_user_name")

    logger.info("account.name_key 마이그레이션 완료", extra={"db_path": str(adapter.db_path)})
