"""
원장 (Ledger) 모듈

거래와 계좌 잔액의 일관성을 보장하는 LedgerEngine 제공.

사용 예시:
```python
from core.ledger import LedgerEngine

engine = LedgerEngine(db)

account = await engine.add_account(user_id, "Main", "bank", 1000)
await engine.add_transaction(
    user_id, 250, "EXPENSE", "Food", date.today(), account_id=account.id
)
# account.balance == 750 (DB 기준)
```
"""

from core.ledger.engine import LedgerEngine

__all__ = [
    "LedgerEngine",
]
