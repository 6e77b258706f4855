from jobboard.core.rate_limiter import InMemoryRateLimiter


class _Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_rate_limiter_allows_then_blocks_then_recovers():
    clock = _Clock()
    limiter = InMemoryRateLimiter(clock=clock)
    key = "ip:/auth/login"

    ok1, retry1 = limiter.allow(key, limit=2, window_seconds=60)
    ok2, retry2 = limiter.allow(key, limit=2, window_seconds=60)
    clock.now += 15
    ok3, retry3 = limiter.allow(key, limit=2, window_seconds=60)

    assert ok1 is True and retry1 == 0
    assert ok2 is True and retry2 == 0
    assert ok3 is False
    assert retry3 == 45

    clock.now += 45
    ok4, retry4 = limiter.allow(key, limit=2, window_seconds=60)
    assert ok4 is True
    assert retry4 == 0


def test_keys_are_independent_and_resettable():
    limiter = InMemoryRateLimiter(clock=_Clock())
    assert limiter.allow("a", limit=1, window_seconds=60)[0] is True
    assert limiter.allow("a", limit=1, window_seconds=60)[0] is False
    assert limiter.allow("b", limit=1, window_seconds=60)[0] is True

    limiter.reset("a")
    assert limiter.allow("a", limit=1, window_seconds=60)[0] is True
    limiter.reset()
    assert limiter.allow("b", limit=1, window_seconds=60)[0] is True


def test_expired_windows_are_dropped_past_max_keys():
    clock = _Clock()
    limiter = InMemoryRateLimiter(clock=clock, max_keys=2)
    limiter.allow("a", limit=5, window_seconds=60)
    limiter.allow("b", limit=5, window_seconds=60)
    assert limiter.tracked_keys() == 2

    clock.now += 61
    limiter.allow("c", limit=5, window_seconds=60)
    assert limiter.tracked_keys() == 1
