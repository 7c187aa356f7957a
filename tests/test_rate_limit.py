from vibefid_server.utils.rate_limit import RateLimiter


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_blocks_inside_window_and_allows_after(db):
    clock = FakeClock()
    limiter = RateLimiter("mint", 10000, clock=clock)

    assert limiter.check("0xABC") == 0
    clock.now += 1
    assert limiter.check("0xabc") == 9000
    clock.now += 8.5
    assert not limiter.allow("0xAbC")
    clock.now += 0.5
    assert limiter.allow("0xabc")


def test_blocked_check_does_not_extend_window(db):
    clock = FakeClock()
    limiter = RateLimiter("mint", 10000, clock=clock)
    limiter.check("a")
    clock.now += 5
    limiter.check("a")
    clock.now += 5
    assert limiter.check("a") == 0


def test_scopes_and_keys_are_independent(db):
    clock = FakeClock()
    mint = RateLimiter("mint", 10000, clock=clock)
    webhook = RateLimiter("webhook", 5000, clock=clock)

    assert mint.allow("123")
    assert webhook.allow("123")
    assert mint.allow("456")
    assert not mint.allow("123")


def test_reset_clears_only_its_scope(db):
    clock = FakeClock()
    mint = RateLimiter("mint", 10000, clock=clock)
    webhook = RateLimiter("webhook", 5000, clock=clock)
    mint.check("a")
    webhook.check("a")

    assert mint.reset() == 1
    assert mint.allow("a")
    assert not webhook.allow("a")


def test_state_is_shared_between_limiter_instances(db):
    clock = FakeClock()
    RateLimiter("mint", 10000, clock=clock).check("0xabc")
    assert not RateLimiter("mint", 10000, clock=clock).allow("0xABC")
