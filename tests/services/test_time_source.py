"""Tests for the polling and manual time sources."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from habitpomo_cli.services.time_source import ManualTimeSource, PollingTimeSource


class FakeClock:
    def __init__(self):
        self.value = 100.0

    def __call__(self) -> float:
        return self.value


class TestPollingTimeSource:
    def test_now_uses_wall_clock(self):
        moment = datetime(2026, 1, 1, tzinfo=timezone.utc)
        source = PollingTimeSource(wall_clock=lambda: moment)
        assert source.now() == moment

    def test_default_now_is_aware(self):
        assert PollingTimeSource().now().tzinfo is not None

    def test_pump_fires_nothing_before_due(self):
        clock = FakeClock()
        source = PollingTimeSource(clock=clock)
        calls = []
        source.subscribe_tick(1, lambda: calls.append(1))

        clock.value += 0.5
        assert source.pump() == 0
        assert calls == []

    def test_pump_fires_due_callbacks(self):
        clock = FakeClock()
        source = PollingTimeSource(clock=clock)
        calls = []
        source.subscribe_tick(1, lambda: calls.append(1))

        clock.value += 1
        assert source.pump() == 1
        assert calls == [1]

    def test_pump_catches_up_missed_intervals(self):
        clock = FakeClock()
        source = PollingTimeSource(clock=clock)
        calls = []
        source.subscribe_tick(1, lambda: calls.append(1))

        clock.value += 3.2
        assert source.pump() == 3

    def test_cancelled_subscription_never_fires(self):
        clock = FakeClock()
        source = PollingTimeSource(clock=clock)
        calls = []
        sub = source.subscribe_tick(1, lambda: calls.append(1))

        source.cancel(sub)
        source.cancel(sub)
        clock.value += 5
        source.pump()

        assert calls == []
        assert sub.cancelled
        assert source.active_subscriptions == 0

    def test_callback_cancelling_itself_stops_catch_up(self):
        clock = FakeClock()
        source = PollingTimeSource(clock=clock)
        calls = []

        def once():
            calls.append(1)
            source.cancel(sub)

        sub = source.subscribe_tick(1, once)
        clock.value += 10
        source.pump()

        assert calls == [1]

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            PollingTimeSource().subscribe_tick(0, lambda: None)

    def test_next_due(self):
        clock = FakeClock()
        source = PollingTimeSource(clock=clock)
        assert source.next_due() is None
        source.subscribe_tick(2, lambda: None)
        source.subscribe_tick(1, lambda: None)
        assert source.next_due() == 101.0


class TestManualTimeSource:
    START = datetime(2026, 3, 14, 9, 0, tzinfo=timezone.utc)

    def test_requires_aware_start(self):
        with pytest.raises(ValueError):
            ManualTimeSource(datetime(2026, 3, 14, 9, 0))

    def test_advance_moves_now(self):
        source = ManualTimeSource(self.START)
        source.advance(90)
        assert source.now() == self.START + timedelta(seconds=90)

    def test_advance_fires_one_tick_per_second(self):
        source = ManualTimeSource(self.START)
        calls = []
        source.subscribe_tick(1, lambda: calls.append(source.now()))

        assert source.advance(5) == 5
        assert calls == [self.START + timedelta(seconds=s) for s in range(1, 6)]

    def test_partial_second_does_not_fire(self):
        source = ManualTimeSource(self.START)
        calls = []
        source.subscribe_tick(1, lambda: calls.append(1))

        source.advance(0.5)
        assert calls == []
        source.advance(0.5)
        assert calls == [1]

    def test_rejects_negative_advance(self):
        with pytest.raises(ValueError):
            ManualTimeSource(self.START).advance(-1)

    def test_independent_subscriptions(self):
        source = ManualTimeSource(self.START)
        fast, slow = [], []
        source.subscribe_tick(1, lambda: fast.append(1))
        source.subscribe_tick(2, lambda: slow.append(1))

        source.advance(4)

        assert len(fast) == 4
        assert len(slow) == 2
