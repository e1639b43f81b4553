"""
Poller 모듈

주기적으로 실행되는 백그라운드 작업.
"""

from scheduler.poller.base import BasePoller
from scheduler.poller.recurring_poller import RecurringPoller

__all__ = [
    "BasePoller",
    "RecurringPoller",
]
