import pytest

from autodiag.errors import RateLimitExceeded
from autodiag.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_allows_up_to_limit_then_blocks():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=3, window_seconds=60, clock=clock)

    assert [limiter.check("u1") for _ in range(4)] == [True, True, True, False]
    assert limiter.remaining("u1") == 0
    assert limiter.reset_time("u1") == 1060.0


def test_keys_are_independent():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.check("u1")
    assert not limiter.check("u1")
    assert limiter.check("u2")


def test_window_expiry_resets_count():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    assert limiter.check("u1")
    assert not limiter.check("u1")

    clock.now += 60
    assert limiter.remaining("u1") == 1
    assert limiter.reset_time("u1") is None
    assert limiter.check("u1")


def test_blocked_requests_do_not_extend_window():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    limiter.check("u1")
    clock.now += 30
    limiter.check("u1")

    assert limiter.reset_time("u1") == 1060.0


def test_manual_reset():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    limiter.check("u1")
    limiter.reset("u1")
    limiter.reset("never-seen")

    assert limiter.remaining("u1") == 1
    assert limiter.check("u1")


def test_acquire_raises_with_reset_time():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    limiter.acquire("u1")
    with pytest.raises(RateLimitExceeded) as excinfo:
        limiter.acquire("u1")

    assert excinfo.value.key == "u1"
    assert excinfo.value.reset_at == 1060.0


def test_expired_window_is_dropped_on_lookup():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    limiter.check("u1")
    assert limiter.tracked_keys == 1

    clock.now += 60
    assert limiter.remaining("u1") == 1
    assert limiter.tracked_keys == 0


def test_prune_sweeps_only_expired_windows():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    limiter.check("old-1")
    limiter.check("old-2")
    clock.now += 30
    limiter.check("fresh")
    clock.now += 30

    assert limiter.prune() == 2
    assert limiter.tracked_keys == 1
    assert limiter.remaining("fresh") == 0


def test_new_keys_trigger_a_sweep_at_threshold(monkeypatch):
    from autodiag.services import rate_limiter

    monkeypatch.setattr(rate_limiter, "PRUNE_THRESHOLD", 3)
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    for key in ("a", "b", "c"):
        limiter.check(key)
    clock.now += 60
    limiter.check("d")

    assert limiter.tracked_keys == 1
