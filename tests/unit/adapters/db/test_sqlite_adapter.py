"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, create_connection, init_schema


async def _table_exists(db: SQLiteAdapter, table: str) -> bool:
    row = await db.fetchone(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?", (table,)
    )
    return row is not None


async def _columns(db: SQLiteAdapter, table: str) -> set[str]:
    return {row[1] for row in await db.fetchall(f"PRAGMA table_info({table})")}


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_wal_mode(self, tmp_path: Path) -> None:
        """WAL 모드 및 외래 키 활성화"""
        conn = await create_connection(tmp_path / "test.db")

        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0].upper() == "WAL"

        cursor = await conn.execute("PRAGMA foreign_keys")
        row = await cursor.fetchone()
        assert row[0] == 1

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest_asyncio.fixture
    async def adapter(self, tmp_path: Path) -> SQLiteAdapter:
        """어댑터 픽스처"""
        adapter = SQLiteAdapter(tmp_path / "test.db")
        await adapter.connect()
        await adapter.execute("CREATE TABLE tx_test (id INTEGER PRIMARY KEY)")
        await adapter.commit()
        yield adapter
        await adapter.close()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, tmp_path: Path) -> None:
        """연결 및 종료"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        assert adapter.is_connected is False

        await adapter.connect()
        assert adapter.is_connected is True

        await adapter.close()
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_execute_without_connection(self, tmp_path: Path) -> None:
        """연결 없이 실행 시 에러"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        with pytest.raises(RuntimeError):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_transaction_commit(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 커밋"""
        async with adapter.transaction():
            await adapter.execute("INSERT INTO tx_test (id) VALUES (1)")
            await adapter.execute("INSERT INTO tx_test (id) VALUES (2)")

        rows = await adapter.fetchall("SELECT id FROM tx_test ORDER BY id")
        assert [r[0] for r in rows] == [1, 2]

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, adapter: SQLiteAdapter) -> None:
        """예외 시 작업 단위 전체 롤백"""
        with pytest.raises(ValueError):
            async with adapter.transaction():
                await adapter.execute("INSERT INTO tx_test (id) VALUES (1)")
                raise ValueError("중단")

        row = await adapter.fetchone("SELECT COUNT(*) FROM tx_test")
        assert row[0] == 0

    @pytest.mark.asyncio
    async def test_transaction_rollback_on_integrity_error(
        self, adapter: SQLiteAdapter
    ) -> None:
        """제약 위반 시 앞선 쓰기도 롤백"""
        async with adapter.transaction():
            await adapter.execute("INSERT INTO tx_test (id) VALUES (1)")

        with pytest.raises(aiosqlite.IntegrityError):
            async with adapter.transaction():
                await adapter.execute("INSERT INTO tx_test (id) VALUES (2)")
                await adapter.execute("INSERT INTO tx_test (id) VALUES (1)")

        rows = await adapter.fetchall("SELECT id FROM tx_test")
        assert [r[0] for r in rows] == [1]

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        """async with 사용"""
        async with SQLiteAdapter(tmp_path / "test.db") as adapter:
            assert adapter.is_connected is True

        assert adapter.is_connected is False


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_creates_tables(self, db: SQLiteAdapter) -> None:
        """필수 테이블 생성"""
        for table in (
            "account",
            "transactions",
            "recurring_transaction",
            "budget",
            "goal",
            "config_store",
        ):
            assert await _table_exists(db, table), table

    @pytest.mark.asyncio
    async def test_idempotent(self, db: SQLiteAdapter) -> None:
        """여러 번 호출해도 안전"""
        await init_schema(db)
        await init_schema(db)

        assert await _table_exists(db, "account")

    @pytest.mark.asyncio
    async def test_transaction_columns(self, db: SQLiteAdapter) -> None:
        """발생분 키와 계좌 참조 컬럼 존재"""
        columns = await _columns(db, "transactions")

        assert "occurrence_key" in columns
        assert "account_id" in columns

    @pytest.mark.asyncio
    async def test_account_name_key_unique_per_owner(self, db: SQLiteAdapter) -> None:
        """같은 소유자의 name_key는 고유, 다른 소유자는 허용"""
        insert = "INSERT INTO account (id, user_id, name, name_key, type) VALUES (?, ?, ?, ?, 'bank')"
        await db.execute(insert, ("a1", "u1", "Épargne", "épargne"))

        with pytest.raises(aiosqlite.IntegrityError):
            await db.execute(insert, ("a2", "u1", "ÉPARGNE", "épargne"))

        await db.execute(insert, ("a3", "u2", "épargne", "épargne"))
        await db.commit()


class TestAccountNameKeyMigration:
    """name_key 컬럼이 없는 기존 DB 보정"""

    @pytest.mark.asyncio
    async def test_backfills_name_key(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "legacy.db") as adapter:
            # 이전 스키마: name COLLATE NOCASE 인덱스, name_key 없음
            await adapter.execute("""
                CREATE TABLE account (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    type TEXT NOT NULL,
                    balance INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL DEFAULT (datetime('now')),
                    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
                )
            """)
            await adapter.execute(
                "CREATE UNIQUE INDEX ux_account_user_name ON account(user_id, name COLLATE NOCASE)"
            )
            await adapter.execute(
                "INSERT INTO account (id, user_id, name, type) VALUES ('a1', 'u1', 'Épargne', 'bank')"
            )
            await adapter.commit()

            await init_schema(adapter)

            row = await adapter.fetchone("SELECT name_key FROM account WHERE id = 'a1'")
            assert row[0] == "épargne"

            index = await adapter.fetchone(
                "SELECT name FROM sqlite_master WHERE type = 'index' AND name = 'ux_account_user_name'"
            )
            assert index is None

            with pytest.raises(aiosqlite.IntegrityError):
                await adapter.execute(
                    "INSERT INTO account (id, user_id, name, name_key, type) "
                    "VALUES ('a2', 'u1', 'ÉPARGNE', 'épargne', 'bank')"
                )
