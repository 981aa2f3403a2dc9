from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from notification_center.application.use_cases.notifications import SeriesThrottle

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_try_acquire_suppresses_inside_the_window() -> None:
    throttle = SeriesThrottle()

    assert throttle.try_acquire("show", T0) is True
    assert throttle.try_acquire("show", T0 + timedelta(minutes=4, seconds=59)) is False
    assert throttle.try_acquire("other", T0 + timedelta(seconds=1)) is True
    assert throttle.try_acquire("show", T0 + timedelta(minutes=5)) is True


def test_suppressed_attempts_do_not_extend_the_window() -> None:
    throttle = SeriesThrottle()
    throttle.try_acquire("show", T0)

    throttle.try_acquire("show", T0 + timedelta(minutes=3))

    assert throttle.is_recent("show", T0 + timedelta(minutes=4)) is True
    assert throttle.is_recent("show", T0 + timedelta(minutes=5, seconds=1)) is False


def test_is_recent_for_unknown_series() -> None:
    assert SeriesThrottle().is_recent("never-seen", T0) is False


def test_sweep_drops_entries_past_retention() -> None:
    throttle = SeriesThrottle()
    throttle.try_acquire("old", T0)
    throttle.try_acquire("new", T0 + timedelta(minutes=50))

    assert throttle.sweep(T0 + timedelta(minutes=61)) == 1
    assert len(throttle) == 1
    assert throttle.is_recent("new", T0 + timedelta(minutes=52)) is True


def test_concurrent_acquire_lets_exactly_one_caller_through() -> None:
    throttle = SeriesThrottle()
    barrier = threading.Barrier(8)
    results: list[bool] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        acquired = throttle.try_acquire("show", T0)
        with results_lock:
            results.append(acquired)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
    assert len(results) == 8
