from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from tailorbook.config import settings
from tailorbook.dependencies import get_customer_repo, get_notifier, get_order_repo, get_storage
from tailorbook.main import app
from tailorbook.repositories.customer_repo import CustomerRepository
from tailorbook.repositories.order_repo import OrderRepository
from tailorbook.services.notifier import DueSoonNotifier
from tailorbook.storage.memory import MemoryStorage

TODAY = date(2025, 6, 1)


class TickingClock:
    """Returns a later UTC time on every call"""

    def __init__(self, start=datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc), step=timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self):
        moment = self.current
        self.current += self.step
        return moment


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def customer_repo(storage, clock):
    return CustomerRepository(storage, settings.CUSTOMERS_KEY, clock=clock)


@pytest.fixture
def order_repo(storage, clock):
    return OrderRepository(storage, settings.ORDERS_KEY, clock=clock, today=lambda: TODAY)


@pytest.fixture
def client(storage, customer_repo, order_repo):
    notifier = DueSoonNotifier(lambda: order_repo, interval=60)
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_customer_repo] = lambda: customer_repo
    app.dependency_overrides[get_order_repo] = lambda: order_repo
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()
