from backend.reader.utils.rate_limit import DAY_SECONDS, HOUR_SECONDS, RateLimits, SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_minute_window_rejects_sixty_first_request() -> None:
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(clock=clock)

    for _ in range(60):
        assert limiter.check().allowed

    rejected = limiter.check()
    assert not rejected.allowed
    assert rejected.counts() == {"minute": 60, "hour": 60, "day": 60}

    clock.advance(61)
    assert limiter.check().allowed


def test_rejected_requests_are_not_recorded() -> None:
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(RateLimits(per_minute=1, per_hour=10, per_day=10), clock=clock)

    assert limiter.check().allowed
    assert not limiter.check().allowed
    assert not limiter.check().allowed
    assert limiter.check().day == 1


def test_hour_and_day_windows() -> None:
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(RateLimits(per_minute=100, per_hour=3, per_day=4), clock=clock)

    for _ in range(3):
        assert limiter.check().allowed
        clock.advance(61)
    assert not limiter.check().allowed

    clock.advance(HOUR_SECONDS)
    assert limiter.check().allowed
    assert not limiter.check().allowed  # day window full

    clock.advance(DAY_SECONDS)
    check = limiter.check()
    assert check.allowed
    assert check.day == 0


def test_limits_payload() -> None:
    assert RateLimits().as_dict() == {"perMinute": 60, "perHour": 1000, "perDay": 5000}
