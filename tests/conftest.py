"""Pytest configuration and shared fixtures."""
from datetime import date, datetime, timedelta

import pytest

from business_logic.controller import TimeEntryController
from config import Config
from models import Customer, Project, Task, TimeEntry
from moco_client import ApiError
from preferences import LastTaskStore

TODAY = date(2024, 1, 3)


class FakeTimer:
    """Timer handle returned by FakeScheduler."""

    def __init__(self, scheduler, due, interval, callback):
        self.scheduler = scheduler
        self.due = due
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeScheduler:
    """Scheduler with a virtual clock. Time only moves with advance()."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def set_interval(self, interval, callback):
        timer = FakeTimer(self, self.now + interval, interval, callback)
        self.timers.append(timer)
        return timer

    def set_timer(self, delay, callback):
        timer = FakeTimer(self, self.now + delay, None, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self):
        return [t for t in self.timers if not t.stopped]

    def advance(self, seconds):
        """Move the clock forward, firing due timers in time order."""
        end = self.now + seconds
        while True:
            due = [t for t in self.active if t.due <= end + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            if timer.interval is None:
                timer.stopped = True
            else:
                timer.due += timer.interval
            timer.callback()
        self.now = end


class FakeGateway:
    """Records calls and returns canned entries. Set ``fail_*`` to raise ApiError."""

    def __init__(self, entries=None):
        self.entries = list(entries or [])
        self.fetch_calls = []
        self.created = []
        self.deleted = []
        self.fail_fetch = False
        self.fail_create = False
        self.fail_delete = False
        self.next_id = 1000

    def fetch_time_entries(self, reference_date):
        self.fetch_calls.append(reference_date)
        if self.fail_fetch:
            raise ApiError("status 500: boom", 500, "boom")
        return list(self.entries)

    def create_time_entry(self, entry):
        if self.fail_create:
            raise ApiError("status 422: invalid", 422, "invalid")
        self.created.append(entry)
        self.next_id += 1
        return self.next_id

    def delete_time_entry(self, entry_id):
        if self.fail_delete:
            raise ApiError("status 404: not found", 404, "not found")
        self.deleted.append(entry_id)
        self.entries = [e for e in self.entries if e.id != entry_id]


@pytest.fixture
def config(tmp_path):
    """Config pointing all files at a temporary directory."""
    return Config(
        domain="acme",
        api_key="secret",
        config_dir=tmp_path / "moco",
        log_dir=tmp_path / "moco" / "logs",
    )


@pytest.fixture
def sample_projects():
    """Two projects with tasks and one without."""
    return [
        Project(
            id=1,
            name="Website",
            customer=Customer(10, "Acme"),
            tasks=[Task(12, "Design", 1), Task(11, "Development", 1)],
        ),
        Project(id=2, name="Internal", customer=Customer(20, "Us"), tasks=[]),
        Project(
            id=3,
            name="Support",
            customer=Customer(30, "Globex"),
            tasks=[Task(31, "Hotline", 3)],
        ),
    ]


@pytest.fixture
def sample_entries():
    """Entries on two days, fetched oldest first."""
    return [
        TimeEntry("2024-01-02", 2.0, 1, 11, "Bugfix", id=1, task_name="Development"),
        TimeEntry("2024-01-03", 1.5, 1, 12, "Mockups", id=2, task_name="Design"),
        TimeEntry("2024-01-03", 0.5, 3, 31, "Call", id=3, task_name="Hotline"),
    ]


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def gateway(sample_entries):
    return FakeGateway(sample_entries)


@pytest.fixture
def store(config):
    return LastTaskStore(config.config_dir)


@pytest.fixture
def make_controller(config, gateway, store, sample_projects, scheduler):
    """Factory building a controller on the fake scheduler and gateway."""
    def make(projects=None, start=True):
        clock_times = iter(datetime(2024, 1, 3, 9, 0, 0) + timedelta(seconds=s) for s in range(100000))
        controller = TimeEntryController(
            config,
            gateway,
            store,
            sample_projects if projects is None else projects,
            scheduler,
            today=lambda: TODAY,
            clock=lambda: next(clock_times),
        )
        controller.handle_resize(120, 40)
        if start:
            controller.start()
        return controller
    return make


@pytest.fixture
def controller(make_controller):
    return make_controller()
