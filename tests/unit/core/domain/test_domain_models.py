"""
도메인 모델 테스트

DB 행 변환, 잔액 효과, 예산 잔여액, 목표 달성률.
"""

from datetime import date

from core.domain.models import Account, Budget, Goal, RecurringTransaction, Transaction
from core.types import AccountType, BudgetPeriod, Frequency, TransactionType


def _tx(type: TransactionType, account_id: str | None = "acc-1") -> Transaction:
    return Transaction(
        id="tx-1",
        user_id="user-1",
        account_id=account_id,
        amount=300,
        type=type,
        category="Food",
        date=date(2024, 1, 15),
    )


class TestTransaction:
    """Transaction 테스트"""

    def test_balance_effect(self) -> None:
        assert _tx(TransactionType.INCOME).balance_effect == 300
        assert _tx(TransactionType.EXPENSE).balance_effect == -300
        assert _tx(TransactionType.TRANSFER).balance_effect == 0

    def test_no_account_has_no_effect(self) -> None:
        assert _tx(TransactionType.INCOME, account_id=None).balance_effect == 0

    def test_from_row(self) -> None:
        row = (
            "tx-1", "user-1", None, 500, "EXPENSE", "Rent",
            "2024-01-31", None, "rt:r1:2024-01-31", "2024-01-31 00:00:00",
        )

        tx = Transaction.from_row(row)

        assert tx.type is TransactionType.EXPENSE
        assert tx.date == date(2024, 1, 31)
        assert tx.occurrence_key == "rt:r1:2024-01-31"

    def test_to_dict(self) -> None:
        data = _tx(TransactionType.EXPENSE).to_dict()

        assert data["type"] == "EXPENSE"
        assert data["date"] == "2024-01-15"


class TestAccount:
    """Account 테스트"""

    def test_from_row_and_to_dict(self) -> None:
        account = Account.from_row(("acc-1", "user-1", "Main", "bank", 1000, None))

        assert account.type is AccountType.BANK
        assert account.to_dict()["type"] == "bank"


class TestRecurringTransaction:
    """RecurringTransaction 테스트"""

    def test_from_row(self) -> None:
        row = (
            "r1", "user-1", None, 100, "EXPENSE", "Gym", None, "MONTHLY",
            "2024-01-31", None, "2024-02-29", "2024-01-31", 1, None,
        )

        rt = RecurringTransaction.from_row(row)

        assert rt.frequency is Frequency.MONTHLY
        assert rt.end_date is None
        assert rt.last_run_date == date(2024, 1, 31)
        assert rt.is_active is True
        assert rt.to_dict()["next_run_date"] == "2024-02-29"


class TestBudget:
    """Budget 테스트"""

    def test_remaining(self) -> None:
        budget = Budget(
            id="b1",
            user_id="user-1",
            category="Food",
            amount=1000,
            period=BudgetPeriod.MONTHLY,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            spent=1200,
        )

        assert budget.remaining == -200
        assert budget.to_dict()["remaining"] == -200


class TestGoal:
    """Goal 테스트"""

    def test_progress(self) -> None:
        goal = Goal(id="g1", user_id="user-1", name="Trip", target_amount=200, current_amount=50)
        assert goal.progress == 0.25

    def test_progress_zero_target(self) -> None:
        goal = Goal(id="g1", user_id="user-1", name="Trip", target_amount=0, current_amount=0)
        assert goal.progress == 1.0
