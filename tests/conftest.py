"""
Shared pytest fixtures for all tests.
"""
import pytest

from tab_config import TabManagerConfig
from tab_management import TabDescriptor, TabKind, TabManager
from utils.event_logger import EventLogger


class FakeClock:
    """Deterministic time source: every reading is one second later"""

    def __init__(self, start: float = 1000.0, step: float = 1.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def event_logger():
    """Silent logger that still records history"""
    return EventLogger(debug_mode=False)


@pytest.fixture
def manager(clock, event_logger):
    """Fresh manager holding only the home tab"""
    return TabManager(config=TabManagerConfig(), event_logger=event_logger, clock=clock)


@pytest.fixture
def clients():
    return TabDescriptor(kind=TabKind.CLIENTS, path="/clients", title="Clients")


@pytest.fixture
def invoices():
    return TabDescriptor(kind=TabKind.INVOICES, path="/invoices", title="Invoices")


@pytest.fixture
def deals():
    return TabDescriptor(kind=TabKind.DEALS, path="/deals", title="Deals")

