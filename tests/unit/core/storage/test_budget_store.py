"""
BudgetStore 테스트

지출 합계(spent)는 조회 시마다 거래에서 계산.
"""

import uuid
from datetime import date

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import Budget
from core.ledger.engine import LedgerEngine
from core.storage.budget_store import BudgetStore
from core.types import BudgetPeriod


@pytest_asyncio.fixture
async def store(db: SQLiteAdapter) -> BudgetStore:
    return BudgetStore(db)


@pytest_asyncio.fixture
async def engine(db: SQLiteAdapter) -> LedgerEngine:
    return LedgerEngine(db)


async def _budget(db: SQLiteAdapter, store: BudgetStore, user_id: str) -> Budget:
    """2024년 1월 Food 예산 1000"""
    budget = Budget(
        id=str(uuid.uuid4()),
        user_id=user_id,
        category="Food",
        amount=1000,
        period=BudgetPeriod.MONTHLY,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )
    async with db.transaction():
        await store.insert(budget)
    return budget


class TestListWithSpent:
    """list_with_spent 테스트"""

    @pytest.mark.asyncio
    async def test_zero_when_no_transactions(
        self, db: SQLiteAdapter, store: BudgetStore, owner_id: str
    ) -> None:
        await _budget(db, store, owner_id)

        [budget] = await store.list_with_spent(owner_id)

        assert budget.spent == 0
        assert budget.remaining == 1000

    @pytest.mark.asyncio
    async def test_sums_expenses_in_range(
        self,
        db: SQLiteAdapter,
        store: BudgetStore,
        engine: LedgerEngine,
        owner_id: str,
    ) -> None:
        """기간 경계(시작일/종료일 포함) 안의 같은 카테고리 EXPENSE만 합산"""
        await _budget(db, store, owner_id)

        await engine.add_transaction(owner_id, 100, "EXPENSE", "Food", date(2024, 1, 1))
        await engine.add_transaction(owner_id, 250, "EXPENSE", "Food", date(2024, 1, 31))
        # 제외 대상
        await engine.add_transaction(owner_id, 900, "EXPENSE", "Food", date(2024, 2, 1))
        await engine.add_transaction(owner_id, 900, "EXPENSE", "Food", date(2023, 12, 31))
        await engine.add_transaction(owner_id, 900, "EXPENSE", "Rent", date(2024, 1, 10))
        await engine.add_transaction(owner_id, 900, "INCOME", "Food", date(2024, 1, 10))
        await engine.add_transaction(owner_id, 900, "TRANSFER", "Food", date(2024, 1, 10))

        [budget] = await store.list_with_spent(owner_id)

        assert budget.spent == 350
        assert budget.remaining == 650

    @pytest.mark.asyncio
    async def test_repeated_reads_are_identical(
        self,
        db: SQLiteAdapter,
        store: BudgetStore,
        engine: LedgerEngine,
        owner_id: str,
    ) -> None:
        """같은 데이터에서 반복 조회해도 같은 값"""
        await _budget(db, store, owner_id)
        await engine.add_transaction(owner_id, 300, "EXPENSE", "Food", date(2024, 1, 15))

        first = await store.list_with_spent(owner_id)
        second = await store.list_with_spent(owner_id)

        assert first[0].spent == second[0].spent == 300

    @pytest.mark.asyncio
    async def test_reflects_deleted_transactions(
        self,
        db: SQLiteAdapter,
        store: BudgetStore,
        engine: LedgerEngine,
        owner_id: str,
    ) -> None:
        """거래 삭제 후 조회하면 즉시 반영 (캐시 없음)"""
        await _budget(db, store, owner_id)
        tx = await engine.add_transaction(owner_id, 300, "EXPENSE", "Food", date(2024, 1, 15))

        await engine.delete_transaction(owner_id, tx.id)

        [budget] = await store.list_with_spent(owner_id)
        assert budget.spent == 0

    @pytest.mark.asyncio
    async def test_ignores_other_owner_expenses(
        self,
        db: SQLiteAdapter,
        store: BudgetStore,
        engine: LedgerEngine,
        owner_id: str,
        other_owner_id: str,
    ) -> None:
        await _budget(db, store, owner_id)
        await engine.add_transaction(other_owner_id, 500, "EXPENSE", "Food", date(2024, 1, 15))

        [budget] = await store.list_with_spent(owner_id)

        assert budget.spent == 0
        assert await store.list_with_spent(other_owner_id) == []


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_scoped_to_owner(
        self,
        db: SQLiteAdapter,
        store: BudgetStore,
        owner_id: str,
        other_owner_id: str,
    ) -> None:
        budget = await _budget(db, store, owner_id)

        async with db.transaction():
            assert await store.delete(other_owner_id, budget.id) is False
            assert await store.delete(owner_id, budget.id) is True

        assert await store.list_with_spent(owner_id) == []
