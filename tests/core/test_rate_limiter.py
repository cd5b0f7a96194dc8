from ecocycle.core.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestSlidingWindowRateLimiter:
    def test_allows_up_to_limit(self) -> None:
        limiter = SlidingWindowRateLimiter(clock=FakeClock())

        results = [limiter.is_allowed("detect", 3, 60) for _ in range(4)]

        assert results == [True, True, True, False]

    def test_window_slides(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(clock=clock)
        assert limiter.is_allowed("detect", 1, 60)
        assert not limiter.is_allowed("detect", 1, 60)

        clock.now += 60

        assert limiter.is_allowed("detect", 1, 60)

    def test_actions_are_independent(self) -> None:
        limiter = SlidingWindowRateLimiter(clock=FakeClock())
        assert limiter.is_allowed("upload:a", 1, 60)

        assert limiter.is_allowed("upload:b", 1, 60)

    def test_remaining(self) -> None:
        limiter = SlidingWindowRateLimiter(clock=FakeClock())
        limiter.is_allowed("redeem", 5, 60)
        limiter.is_allowed("redeem", 5, 60)

        assert limiter.remaining("redeem", 5, 60) == 3
        assert limiter.remaining("other", 5, 60) == 5

    def test_denied_requests_are_not_counted(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(clock=clock)
        limiter.is_allowed("x", 1, 10)
        clock.now += 5
        limiter.is_allowed("x", 1, 10)

        clock.now += 5

        assert limiter.is_allowed("x", 1, 10)

    def test_reset_and_clear_all(self) -> None:
        limiter = SlidingWindowRateLimiter(clock=FakeClock())
        limiter.is_allowed("a", 1, 60)
        limiter.is_allowed("b", 1, 60)

        limiter.reset("a")
        assert limiter.is_allowed("a", 1, 60)
        assert not limiter.is_allowed("b", 1, 60)

        limiter.clear_all()
        assert limiter.is_allowed("b", 1, 60)


class TestIdleKeySweep:
    def test_idle_keys_are_dropped(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(clock=clock, sweep_interval=60)
        for user in ("a", "b", "c"):
            assert limiter.is_allowed(f"upload:{user}", 10, 60)
        assert limiter.tracked_actions == 3

        clock.now += 120
        assert limiter.is_allowed("upload:d", 10, 60)

        assert limiter.tracked_actions == 1

    def test_keys_inside_the_longest_window_survive(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(clock=clock, sweep_interval=60)
        limiter.is_allowed("reward_redemption", 1, 86400)

        clock.now += 120
        limiter.is_allowed("upload:a", 10, 60)

        assert limiter.tracked_actions == 2
        assert not limiter.is_allowed("reward_redemption", 1, 86400)

    def test_denied_action_with_zero_quota_is_not_kept(self) -> None:
        limiter = SlidingWindowRateLimiter(clock=FakeClock())

        assert not limiter.is_allowed("upload:a", 0, 60)

        assert limiter.tracked_actions == 0
