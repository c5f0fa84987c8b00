import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict

MINUTE_SECONDS = 60
HOUR_SECONDS = 60 * 60
DAY_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class RateLimits:
    per_minute: int = 60
    per_hour: int = 1000
    per_day: int = 5000

    def as_dict(self) -> Dict[str, int]:
        return {"perMinute": self.per_minute, "perHour": self.per_hour, "perDay": self.per_day}


@dataclass(frozen=True)
class RateCheck:
    allowed: bool
    minute: int
    hour: int
    day: int

    def counts(self) -> Dict[str, int]:
        return {"minute": self.minute, "hour": self.hour, "day": self.day}


class SlidingWindowRateLimiter:
    """In-memory request log checked against per-minute, per-hour and per-day ceilings.

    State lives on the instance and resets with the process.
    """

    def __init__(self, limits: RateLimits | None = None, clock: Callable[[], float] = time.time):
        self.limits = limits or RateLimits()
        self._clock = clock
        self._log: Deque[float] = deque()

    def _count_since(self, cutoff: float) -> int:
        count = 0
        for stamp in reversed(self._log):
            if stamp <= cutoff:
                break
            count += 1
        return count

    def check(self) -> RateCheck:
        """Record a request if every window has room, otherwise reject it without recording."""
        now = self._clock()
        while self._log and self._log[0] <= now - DAY_SECONDS:
            self._log.popleft()

        minute = self._count_since(now - MINUTE_SECONDS)
        hour = self._count_since(now - HOUR_SECONDS)
        day = len(self._log)

        if minute >= self.limits.per_minute or hour >= self.limits.per_hour or day >= self.limits.per_day:
            return RateCheck(allowed=False, minute=minute, hour=hour, day=day)

        self._log.append(now)
        return RateCheck(allowed=True, minute=minute, hour=hour, day=day)

    def reset(self) -> None:
        self._log.clear()
