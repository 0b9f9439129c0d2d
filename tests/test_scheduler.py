import pytest

from rocket_shooter.scheduler import Scheduler


def test_task_fires_once_per_interval():
    s = Scheduler()
    calls = []
    s.every("a", 1.0, lambda: calls.append(s.now))
    s.advance(0.5)
    assert calls == []
    s.advance(0.5)
    assert calls == [1.0]
    s.advance(2.0)
    assert calls == [1.0, 2.0, 3.0]


def test_sixty_ticks_per_second():
    s = Scheduler()
    ticks = []
    s.every("tick", 1 / 60, lambda: ticks.append(1))
    for _ in range(60):
        s.advance(1 / 60)
    assert len(ticks) == 60


def test_due_tasks_fire_in_time_order_then_registration_order():
    s = Scheduler()
    order = []
    s.every("slow", 1.0, lambda: order.append("slow"))
    s.every("fast", 0.5, lambda: order.append("fast"))
    s.advance(1.0)
    # at t=1.0 both are due; slow was registered first
    assert order == ["fast", "slow", "fast"]


def test_cancel_all_stops_catch_up_firings():
    s = Scheduler()
    calls = []
    ticks = []

    def tick():
        ticks.append(s.now)
        calls.append(s.now)
        if len(ticks) == 2:
            s.cancel_all()

    s.every("tick", 0.1, tick)
    s.every("other", 0.15, lambda: calls.append("other"))
    s.advance(1.0)
    assert calls == [pytest.approx(0.1), "other", pytest.approx(0.2)]
    assert len(s) == 0
    assert s.now == pytest.approx(1.0)


def test_reregistering_restarts_from_now():
    s = Scheduler()
    calls = []
    s.every("spawn", 1.0, lambda: calls.append(s.now))
    s.advance(0.9)
    s.every("spawn", 1.0, lambda: calls.append(s.now))
    s.advance(0.5)
    assert calls == []
    s.advance(0.5)
    assert calls == [pytest.approx(1.9)]


def test_cancelled_task_is_inactive():
    s = Scheduler()
    task = s.every("x", 1.0, lambda: None)
    assert "x" in s
    s.cancel("x")
    assert "x" not in s
    assert not task.active
    s.cancel("missing")


def test_invalid_arguments():
    s = Scheduler()
    with pytest.raises(ValueError):
        s.every("bad", 0, lambda: None)
    with pytest.raises(ValueError):
        s.advance(-1)
