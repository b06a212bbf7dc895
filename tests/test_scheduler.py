import matplotlib.pyplot as plt

from ocean_world.visualization.scheduler import ManualScheduler, TimerScheduler, FrameHandle


def test_manual_runs_only_queued_batch():
    scheduler = ManualScheduler()
    calls = []

    def tick():
        calls.append(len(calls))
        scheduler.request(tick)

    scheduler.request(tick)
    assert scheduler.run_pending() == 1
    assert calls == [0]
    assert scheduler.pending_count == 1
    assert scheduler.run(3) == 3
    assert len(calls) == 4


def test_manual_skips_cancelled():
    scheduler = ManualScheduler()
    calls = []
    handle = scheduler.request(lambda: calls.append(1))
    handle.cancel()
    assert scheduler.pending_count == 0
    assert scheduler.run_pending() == 0
    assert calls == []


def test_manual_run_until():
    scheduler = ManualScheduler()
    count = []

    def tick():
        count.append(1)
        scheduler.request(tick)

    scheduler.request(tick)
    scheduler.run(100, until=lambda: len(count) >= 5)
    assert len(count) == 5


def test_handle_states():
    handle = FrameHandle()
    assert handle.pending
    handle.cancel()
    assert handle.cancelled and not handle.pending


def test_timer_scheduler_fires_once():
    fig = plt.figure()
    scheduler = TimerScheduler(fig, interval_ms=16)
    calls = []
    handle = scheduler.request(lambda: calls.append(1))
    assert handle.pending
    TimerScheduler._fire(handle, lambda: calls.append(1))
    TimerScheduler._fire(handle, lambda: calls.append(1))
    assert calls == [1]
    assert handle.fired


def test_timer_scheduler_cancelled_does_not_fire():
    fig = plt.figure()
    scheduler = TimerScheduler(fig)
    calls = []
    handle = scheduler.request(lambda: calls.append(1))
    handle.cancel()
    TimerScheduler._fire(handle, lambda: calls.append(1))
    assert calls == []
