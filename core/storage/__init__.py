"""
스토리지 모듈

계좌, 거래, 반복 거래, 예산, 목표, 런타임 설정 저장소 제공.
모든 도메인 저장소는 user_id(소유자)로 쿼리 범위를 제한.
"""

from core.storage.account_store import AccountStore
from core.storage.budget_store import BudgetStore
from core.storage.config_store import ConfigStore, init_default_configs
from core.storage.goal_store import GoalStore
from core.storage.recurring_store import RecurringStore
from core.storage.transaction_store import TransactionStore

__all__ = [
    "AccountStore",
    "BudgetStore",
    "ConfigStore",
    "GoalStore",
    "RecurringStore",
    "TransactionStore",
    "init_default_configs",
]
