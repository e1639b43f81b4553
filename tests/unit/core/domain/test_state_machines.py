"""
State Machine 테스트

반복 거래 스케줄 상태 전이 검증.
"""

from datetime import date

import pytest

from core.domain.state_machines import (
    RecurringState,
    RecurringStateMachine,
    StateMachine,
    StateMachineError,
)


class TestStateMachine:
    """기본 StateMachine 테스트"""

    def test_initial_state(self) -> None:
        machine = StateMachine("A", {"A": ["B"]})
        assert machine.state == "A"

    def test_valid_transition(self) -> None:
        machine = StateMachine("A", {"A": ["B"]})

        machine.transition("B")

        assert machine.state == "B"
        assert machine.history == [("A", "B")]

    def test_invalid_transition(self) -> None:
        machine = StateMachine("A", {"A": ["B"]}, name="Test")

        with pytest.raises(StateMachineError, match="Cannot transition from A to C"):
            machine.transition("C")

        assert machine.state == "A"

    def test_history_is_copy(self) -> None:
        machine = StateMachine("A", {"A": ["B"]})
        machine.transition("B")

        machine.history.clear()

        assert len(machine.history) == 1


class TestRecurringStateMachine:
    """반복 거래 상태 머신 테스트"""

    def test_pending_to_due(self) -> None:
        machine = RecurringStateMachine()

        machine.transition(RecurringState.ACTIVE_DUE)

        assert machine.is_due is True

    def test_due_to_pending(self) -> None:
        machine = RecurringStateMachine(RecurringState.ACTIVE_DUE)

        machine.transition(RecurringState.ACTIVE_PENDING)

        assert machine.state == "ACTIVE_PENDING"
        assert machine.is_due is False

    def test_due_to_inactive(self) -> None:
        """만료 시 종료 상태"""
        machine = RecurringStateMachine(RecurringState.ACTIVE_DUE)

        machine.transition(RecurringState.INACTIVE)

        assert machine.is_terminal is True

    def test_pending_cannot_expire_directly(self) -> None:
        machine = RecurringStateMachine()

        assert machine.can_transition(RecurringState.INACTIVE) is False

    def test_inactive_is_terminal(self) -> None:
        """INACTIVE에서는 처리기가 어떤 전이도 하지 않음"""
        machine = RecurringStateMachine(RecurringState.INACTIVE)

        with pytest.raises(StateMachineError):
            machine.transition(RecurringState.ACTIVE_DUE)


class TestFromSchedule:
    """저장된 스케줄 값에서 상태 복원"""

    def test_due_when_as_of_equals_next_run(self) -> None:
        machine = RecurringStateMachine.from_schedule(
            True, date(2024, 1, 31), as_of=date(2024, 1, 31)
        )
        assert machine.is_due is True

    def test_due_when_overdue(self) -> None:
        machine = RecurringStateMachine.from_schedule(
            True, date(2024, 1, 1), as_of=date(2024, 3, 1)
        )
        assert machine.is_due is True

    def test_pending_when_future(self) -> None:
        machine = RecurringStateMachine.from_schedule(
            True, date(2024, 2, 1), as_of=date(2024, 1, 31)
        )
        assert machine.state == "ACTIVE_PENDING"

    def test_inactive_even_if_overdue(self) -> None:
        machine = RecurringStateMachine.from_schedule(
            False, date(2024, 1, 1), as_of=date(2024, 3, 1)
        )
        assert machine.is_terminal is True
        assert machine.is_due is False

    def test_reactivated_past_end_date_stays_inactive(self) -> None:
        """만료 후 is_active만 다시 켠 정의는 생성 대상 아님"""
        machine = RecurringStateMachine.from_schedule(
            True, date(2024, 2, 1), as_of=date(2024, 3, 1), end_date=date(2024, 1, 31)
        )
        assert machine.is_terminal is True

    def test_due_on_end_date(self) -> None:
        machine = RecurringStateMachine.from_schedule(
            True, date(2024, 1, 31), as_of=date(2024, 1, 31), end_date=date(2024, 1, 31)
        )
        assert machine.is_due is True
