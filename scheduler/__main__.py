"""
Scheduler 진입점

실행 방법:
    python -m scheduler
"""

import asyncio

from scheduler.runner import main

if __name__ == "__main__":
    asyncio.run(main())
