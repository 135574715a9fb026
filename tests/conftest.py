import pytest

from fakes import EventRecorder, FakeTimers


@pytest.fixture
def timers():
    return FakeTimers()


@pytest.fixture
def recorder(timers):
    return EventRecorder(timers)
