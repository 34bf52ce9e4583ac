"""Tests for repeating and one-shot timers."""
from business_logic.scheduler import OneShotTimer, RepeatingTask


class TestRepeatingTask:
    """Test the periodic task."""

    def test_ticks_every_interval(self, scheduler):
        """The callback runs once per interval."""
        calls = []
        task = RepeatingTask(scheduler, 10, lambda: calls.append(scheduler.now))
        task.start()
        scheduler.advance(35)
        assert calls == [10, 20, 30]

    def test_start_twice_registers_once(self, scheduler):
        """Starting a running task does nothing."""
        task = RepeatingTask(scheduler, 10, lambda: None)
        task.start()
        task.start()
        assert len(scheduler.active) == 1

    def test_stop(self, scheduler):
        """No ticks after stop."""
        calls = []
        task = RepeatingTask(scheduler, 10, lambda: calls.append(1))
        task.start()
        scheduler.advance(10)
        task.stop()
        scheduler.advance(50)
        assert calls == [1]
        assert not task.running

    def test_queued_tick_after_stop_ignored(self, scheduler):
        """A tick delivered after stop does not run the callback."""
        calls = []
        task = RepeatingTask(scheduler, 10, lambda: calls.append(1))
        task.start()
        task.stop()
        task._tick()
        assert calls == []


class TestOneShotTimer:
    """Test the restartable one-shot timer."""

    def test_fires_once(self, scheduler):
        """The callback runs after the delay, exactly once."""
        calls = []
        timer = OneShotTimer(scheduler, 2, lambda: calls.append(scheduler.now))
        timer.arm()
        scheduler.advance(10)
        assert calls == [2]
        assert not timer.armed

    def test_rearm_restarts(self, scheduler):
        """Arming again cancels the previous countdown."""
        calls = []
        timer = OneShotTimer(scheduler, 2, lambda: calls.append(scheduler.now))
        timer.arm()
        scheduler.advance(1.5)
        timer.arm()
        scheduler.advance(1)
        assert calls == []
        scheduler.advance(1)
        assert calls == [3.5]

    def test_cancel(self, scheduler):
        """A cancelled timer never fires."""
        calls = []
        timer = OneShotTimer(scheduler, 2, lambda: calls.append(1))
        timer.arm()
        timer.cancel()
        scheduler.advance(5)
        assert calls == []

    def test_stale_fire_ignored(self, scheduler):
        """A replaced timer that fires anyway is ignored."""
        calls = []
        timer = OneShotTimer(scheduler, 2, lambda: calls.append(1))
        timer.arm()
        stale = scheduler.timers[0]
        timer.arm()
        stale.callback()
        assert calls == []
        scheduler.advance(2)
        assert calls == [1]
