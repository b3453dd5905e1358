"""
Shared fixtures for the task manager tests.

Qt tests run on the offscreen platform so no display is needed.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from data import Task
from history import HistoryStore


class RecordingNotifier:
    def __init__(self):
        self.notices = []

    def notify(self, notice, message):
        self.notices.append((notice, message))

    @property
    def kinds(self):
        return [notice for notice, _ in self.notices]


class FakeTimer:
    def __init__(self, delay_ms, callback):
        self.delay_ms = delay_ms
        self.callback = callback
        self.stopped = False

    def stop(self):
        self.stopped = True

    def fire(self):
        if not self.stopped:
            self.callback()


class FakeScheduler:
    def __init__(self):
        self.timers = []

    def __call__(self, delay_ms, callback):
        timer = FakeTimer(delay_ms, callback)
        self.timers.append(timer)
        return timer


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def store(notifier):
    return HistoryStore(notifier=notifier)


@pytest.fixture
def abc_store(notifier):
    """Store whose present is A, B, C with ids 1, 2, 3; C is completed."""
    return HistoryStore(
        [Task(1, "A"), Task(2, "B"), Task(3, "C", completed=True)],
        notifier=notifier,
    )


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
