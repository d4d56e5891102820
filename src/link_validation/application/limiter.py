import asyncio
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


class ConcurrencyLimiter:
    def __init__(self, max_concurrency: int) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self.active = 0
        self.peak = 0

    async def run(self, task_factory: Callable[[], Awaitable[T]]) -> T:
        # waiters are admitted in FIFO order as slots free up
        async with self._semaphore:
            self.active += 1
            self.peak = max(self.peak, self.active)
            try:
                return await task_factory()
            finally:
                self.active -= 1
