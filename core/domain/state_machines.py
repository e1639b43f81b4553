"""
State Machines

반복 거래(RecurringTransaction) 스케줄 상태 전이 관리.
"""

import logging
from datetime import date
from enum import Enum

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class RecurringState(str, Enum):
    """반복 거래 상태

    전이 규칙:
    - ACTIVE_PENDING → ACTIVE_DUE: 기준일 ≥ next_run_date
    - ACTIVE_DUE → ACTIVE_PENDING: 발생분 생성 후 다음 실행일 예약
    - ACTIVE_DUE → INACTIVE: 다음 실행일이 end_date 초과 (만료)
    - INACTIVE: 종료 상태 (처리기는 더 이상 생성하지 않음)
    """
    ACTIVE_PENDING = "ACTIVE_PENDING"
    ACTIVE_DUE = "ACTIVE_DUE"
    INACTIVE = "INACTIVE"


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인"""
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target
        self._history.append((old_state, target))

        logger.debug(f"{self._name}: {old_state} → {target}")

        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """상태 전이 이력"""
        return self._history.copy()


class RecurringStateMachine(StateMachine):
    """반복 거래 스케줄 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "ACTIVE_PENDING": ["ACTIVE_DUE"],
        "ACTIVE_DUE": ["ACTIVE_PENDING", "INACTIVE"],
    }

    def __init__(self, initial_state: str | RecurringState = RecurringState.ACTIVE_PENDING):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="RecurringStateMachine",
        )

    @classmethod
    def from_schedule(
        cls,
        is_active: bool,
        next_run_date: date,
        as_of: date,
        end_date: date | None = None,
    ) -> "RecurringStateMachine":
        """저장된 스케줄 값에서 현재 상태 복원

        만료된 정의는 is_active가 수동으로 다시 켜져도 INACTIVE
        (next_run_date > end_date). end_date를 늘려야 재개됨.

        Args:
            is_active: 활성 여부
            next_run_date: 다음 실행일
            as_of: 기준일
            end_date: 종료일 (None이면 무기한)

        Returns:
            현재 상태의 RecurringStateMachine
        """
        if not is_active:
            return cls(RecurringState.INACTIVE)
        if end_date is not None and next_run_date > end_date:
            return cls(RecurringState.INACTIVE)

        machine = cls(RecurringState.ACTIVE_PENDING)
        if as_of >= next_run_date:
            machine.transition(RecurringState.ACTIVE_DUE)
        return machine

    @property
    def is_due(self) -> bool:
        """실행 대상 여부"""
        return self._state == "ACTIVE_DUE"

    @property
    def is_terminal(self) -> bool:
        """종료 상태 여부"""
        return self._state == "INACTIVE"
