from datetime import date, timedelta
from typing import Callable, List, Optional
from tailorbook.repositories.base import JsonCollectionRepository
from tailorbook.schemas.order import Order
from tailorbook.utils.helpers import utc_now


class OrderRepository(JsonCollectionRepository[Order]):
    record_model = Order

    def __init__(self, storage, key: str, clock=utc_now, today: Callable[[], date] = date.today):
        super().__init__(storage, key, clock=clock)
        # Local calendar date; due dates carry no time of day
        self.today = today

    def create(
        self,
        customer_name: str,
        contact_number: str,
        item_details: str,
        due_date: str,
        status: str = "pending",
        customer_id: Optional[str] = None,
        images: Optional[List[str]] = None,
    ) -> Order:
        """Create a new order"""
        return self._insert({
            "customer_name": customer_name,
            "contact_number": contact_number,
            "customer_id": customer_id,
            "item_details": item_details,
            "due_date": due_date,
            "status": status,
            "images": images,
        })

    def list_for_customer(self, customer_id: str) -> List[Order]:
        """Orders whose soft link points at customer_id"""
        return [o for o in self.list() if o.customer_id == customer_id]

    def due_today(self) -> List[Order]:
        """Open orders due on today's date"""
        today = self.today().isoformat()
        return [o for o in self.list() if o.due_date == today and o.status != "completed"]

    def due_soon(self) -> List[Order]:
        """Open orders due today or tomorrow"""
        today = self.today()
        window = {today.isoformat(), (today + timedelta(days=1)).isoformat()}
        return [o for o in self.list() if o.due_date in window and o.status != "completed"]
