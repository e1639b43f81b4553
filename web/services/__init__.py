"""
Web 서비스 패키지

비즈니스 로직 처리. 변경 작업은 ActionResult를 반환.
"""

from web.services.account_service import AccountService
from web.services.base import BaseService
from web.services.budget_service import BudgetService
from web.services.goal_service import GoalService
from web.services.recurring_service import RecurringService
from web.services.transaction_service import TransactionService

__all__ = [
    "AccountService",
    "BaseService",
    "BudgetService",
    "GoalService",
    "RecurringService",
    "TransactionService",
]
