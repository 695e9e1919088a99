"""Unit tests for request spacing."""

import pytest

from anidb_udp.throttle import Throttle


class FakeClock:
    """Manually advanced monotonic clock whose sleep advances time."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def throttle(clock):
    return Throttle(2.0, clock=clock, sleep=clock.sleep)


class TestThrottle:
    @pytest.mark.asyncio
    async def test_first_acquire_is_immediate(self, throttle, clock):
        assert await throttle.acquire() == 0.0
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_first_slot_opens_at_construction(self, clock):
        throttle = Throttle(2.0, clock=clock, sleep=clock.sleep)
        assert throttle.next_slot == clock.now

    @pytest.mark.asyncio
    async def test_back_to_back_calls_are_spaced(self, throttle, clock):
        await throttle.acquire()
        first_send = clock.now
        await throttle.acquire()
        second_send = clock.now

        assert second_send - first_send >= 2.0
        assert clock.sleeps == [2.0]

    @pytest.mark.asyncio
    async def test_next_slot_booked_before_the_request(self, throttle, clock):
        """The slot is measured from the send, not from the reply."""
        await throttle.acquire()
        assert throttle.next_slot == clock.now + 2.0

        # A slow reply eats into the wait rather than extending it
        clock.now += 1.5
        waited = await throttle.acquire()

        assert waited == pytest.approx(0.5)

    @pytest.mark.asyncio
    async def test_no_wait_after_interval_elapsed(self, throttle, clock):
        await throttle.acquire()
        clock.now += 5.0
        assert await throttle.acquire() == 0.0
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_many_calls_occupy_sequential_slots(self, throttle, clock):
        sends = []
        for _ in range(4):
            await throttle.acquire()
            sends.append(clock.now)

        gaps = [b - a for a, b in zip(sends, sends[1:])]
        assert all(gap >= 2.0 for gap in gaps)

    def test_time_until_next_slot(self, throttle, clock):
        assert throttle.time_until_next_slot() == 0.0

    def test_negative_interval_rejected(self, clock):
        with pytest.raises(ValueError):
            Throttle(-1.0, clock=clock, sleep=clock.sleep)

    @pytest.mark.asyncio
    async def test_zero_interval_never_waits(self, clock):
        throttle = Throttle(0.0, clock=clock, sleep=clock.sleep)
        for _ in range(3):
            assert await throttle.acquire() == 0.0
