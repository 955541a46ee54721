import json
from datetime import timedelta

import pytest
from pydantic import ValidationError

from tailorbook.config import settings
from tailorbook.repositories.order_repo import OrderRepository
from tailorbook.storage.base import StorageReadError
from tailorbook.storage.memory import MemoryStorage
from conftest import TODAY

YESTERDAY = (TODAY - timedelta(days=1)).isoformat()
TOMORROW = (TODAY + timedelta(days=1)).isoformat()
DAY_AFTER = (TODAY + timedelta(days=2)).isoformat()


def make_order(repo, due_date, status="pending", name="Jane Doe", **extra):
    return repo.create(
        customer_name=name,
        contact_number="5551234567",
        item_details="Blue gown",
        due_date=due_date,
        status=status,
        **extra,
    )


class TestOrderRepository:
    """CRUD and status transitions"""

    def test_create_defaults_to_pending(self, order_repo):
        order = order_repo.create(
            customer_name="Jane Doe",
            contact_number="5551234567",
            item_details="Blue gown",
            due_date="2025-06-01",
        )
        assert order.status == "pending"
        assert order.customer_id is None
        assert order_repo.get(order.id) == order

    def test_update_status_changes_only_status_and_updated_at(self, order_repo):
        order = make_order(order_repo, TOMORROW, images=["front.png"])

        updated = order_repo.update(order.id, status="completed")

        before = order.model_dump(exclude={"status", "updated_at"})
        after = updated.model_dump(exclude={"status", "updated_at"})
        assert before == after
        assert updated.status == "completed"
        assert updated.updated_at > order.updated_at

    @pytest.mark.parametrize("start,target", [
        ("pending", "completed"),
        ("completed", "pending"),
        ("completed", "in-progress"),
        ("in-progress", "pending"),
    ])
    def test_any_status_transition_is_allowed(self, order_repo, start, target):
        order = make_order(order_repo, TOMORROW, status=start)
        assert order_repo.update(order.id, status=target).status == target

    def test_update_accepts_camel_case_names(self, order_repo):
        order = make_order(order_repo, TOMORROW)

        updated = order_repo.update(order.id, customerName="Janet", updatedAt="1999-01-01T00:00:00.000Z")

        assert updated.customer_name == "Janet"
        assert updated.updated_at > order.updated_at
        assert "customerName" not in updated.model_dump()

    def test_unknown_status_is_rejected(self, order_repo):
        order = make_order(order_repo, TOMORROW)
        with pytest.raises(ValidationError):
            order_repo.update(order.id, status="shipped")
        assert order_repo.get(order.id).status == "pending"

    def test_delete_absent_returns_false_without_writing(self, order_repo, storage):
        make_order(order_repo, TODAY.isoformat())
        before = storage.read(settings.ORDERS_KEY)

        assert order_repo.delete("nope") is False
        assert storage.read(settings.ORDERS_KEY) == before

    def test_list_for_customer_follows_soft_link(self, order_repo, customer_repo):
        jane = customer_repo.create(name="Jane", phone="1")
        linked = make_order(order_repo, TOMORROW, customer_id=jane.id)
        make_order(order_repo, TOMORROW, name="Walk-in")

        assert [o.id for o in order_repo.list_for_customer(jane.id)] == [linked.id]

        # Deleting the customer leaves the order and its dangling link alone
        customer_repo.delete(jane.id)
        assert order_repo.get(linked.id).customer_id == jane.id

    def test_persisted_layout(self, order_repo, storage):
        make_order(order_repo, TOMORROW)
        record = json.loads(storage.read(settings.ORDERS_KEY))[0]
        assert record["customerName"] == "Jane Doe"
        assert record["contactNumber"] == "5551234567"
        assert record["itemDetails"] == "Blue gown"
        assert record["dueDate"] == TOMORROW
        assert "customerId" not in record


class TestUnreadableOrders:
    """A collection with one bad record is never rewritten"""

    @pytest.fixture
    def raw(self):
        stamp = "2025-06-01T09:00:00.000Z"
        return json.dumps([
            {"id": "o-1", "customerName": "Jane", "contactNumber": "1", "itemDetails": "Gown",
             "dueDate": TODAY.isoformat(), "status": "pending", "createdAt": stamp, "updatedAt": stamp},
            {"id": "o-2", "customerName": "Priya", "contactNumber": "2", "itemDetails": "Kurta",
             "dueDate": TODAY.isoformat(), "status": "cancelled", "createdAt": stamp, "updatedAt": stamp},
        ])

    @pytest.fixture
    def storage(self, raw):
        return MemoryStorage({settings.ORDERS_KEY: raw})

    @pytest.fixture
    def repo(self, storage):
        return OrderRepository(storage, settings.ORDERS_KEY, today=lambda: TODAY)

    def test_reads_as_empty(self, repo):
        assert repo.list() == []
        assert repo.due_today() == []
        assert repo.load().corrupt

    def test_create_keeps_existing_records(self, repo, storage, raw):
        with pytest.raises(StorageReadError):
            make_order(repo, TOMORROW)
        assert storage.read(settings.ORDERS_KEY) == raw

    def test_update_and_delete_refused(self, repo, storage, raw):
        with pytest.raises(StorageReadError):
            repo.update("o-1", status="completed")
        with pytest.raises(StorageReadError):
            repo.delete("o-1")
        assert storage.read(settings.ORDERS_KEY) == raw


class TestDerivedQueries:
    """due_today and due_soon date windows"""

    def test_due_today_picks_only_today(self, order_repo):
        make_order(order_repo, YESTERDAY, name="yesterday")
        today = make_order(order_repo, TODAY.isoformat(), name="today")
        make_order(order_repo, TOMORROW, name="tomorrow")

        assert [o.id for o in order_repo.due_today()] == [today.id]

        order_repo.update(today.id, status="completed")
        assert order_repo.due_today() == []

    def test_due_today_includes_in_progress(self, order_repo):
        order = make_order(order_repo, TODAY.isoformat(), status="in-progress")
        assert [o.id for o in order_repo.due_today()] == [order.id]

    def test_due_soon_window_is_today_and_tomorrow(self, order_repo):
        today = make_order(order_repo, TODAY.isoformat())
        tomorrow = make_order(order_repo, TOMORROW)
        make_order(order_repo, DAY_AFTER)
        make_order(order_repo, YESTERDAY)

        assert [o.id for o in order_repo.due_soon()] == [today.id, tomorrow.id]

    def test_due_soon_excludes_completed(self, order_repo):
        make_order(order_repo, TODAY.isoformat(), status="completed")
        make_order(order_repo, TOMORROW, status="completed")
        assert order_repo.due_soon() == []

    def test_queries_on_empty_store(self, order_repo):
        assert order_repo.due_today() == []
        assert order_repo.due_soon() == []


class TestShopScenario:
    def test_customer_and_order_lifecycle(self, customer_repo, order_repo):
        customer = customer_repo.create(name="Jane Doe", phone="5551234567")
        t0 = customer.created_at

        order = order_repo.create(
            customer_name="Jane Doe",
            contact_number="5551234567",
            item_details="Blue gown",
            due_date="2025-06-01",
            status="pending",
        )

        updated = order_repo.update(order.id, status="in-progress")
        assert updated.status == "in-progress"
        assert updated.updated_at > t0
        assert updated.customer_name == "Jane Doe"

        assert order_repo.delete(order.id) is True
        assert order.id not in [o.id for o in order_repo.list()]
        assert customer_repo.get(customer.id) == customer
