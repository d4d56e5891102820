import asyncio
import random
import time
from typing import Awaitable, Callable

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]
JitterSource = Callable[[float, float], float]


class StartThrottle:
    """Spaces out request starts across the whole run.

    Callers line up on a lock, so turns are granted in arrival order. Only the
    start is gated: once a caller returns from ``await_turn`` its request runs
    alongside everyone else's.
    """

    def __init__(
        self,
        min_interval_ms: int,
        *,
        max_jitter_ms: int = 50,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
        jitter: JitterSource = random.uniform,
    ) -> None:
        self.min_interval = max(0, min_interval_ms) / 1000
        self.max_jitter = max(0, max_jitter_ms) / 1000
        self._clock = clock
        self._sleep = sleep
        self._jitter = jitter
        self._last_start: float | None = None
        self._lock = asyncio.Lock()
        self.turns_granted = 0

    async def await_turn(self) -> None:
        async with self._lock:
            if self._last_start is not None:
                wait = max(0.0, self._last_start + self.min_interval - self._clock())
                if wait > 0:
                    # jitter keeps concurrent callers out of lockstep
                    await self._sleep(wait + self._jitter(0.0, self.max_jitter))
            self._last_start = self._clock()
            self.turns_granted += 1
