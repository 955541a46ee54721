"""
List-view helpers used by the routers.

The stores return records in insertion order and know nothing about
search boxes, sorting or "overdue" badges; everything here is recomputed
from the records and the current date on every call.
"""

import re
from datetime import date
from typing import Dict, List, Optional
from tailorbook.schemas.customer import Customer
from tailorbook.schemas.order import ORDER_STATUSES, Order, OrderView
from tailorbook.utils.helpers import format_phone_number, parse_due_date

DUE_SOON_DAYS = 2

# Searches made only of phone characters with at least this many digits
# are also matched against phone digits, ignoring punctuation
PHONE_SEARCH_MIN_DIGITS = 4
PHONE_SEARCH = re.compile(r"^[\d\s+().-]+$")


def filter_orders(
    orders: List[Order],
    search: Optional[str] = None,
    status: Optional[str] = None,
    due_date: Optional[str] = None,
) -> List[Order]:
    """Substring search on name/item/phone, then exact status and due date matches"""
    filtered = list(orders)

    if search:
        term = search.lower()
        filtered = [
            o for o in filtered
            if term in o.customer_name.lower()
            or term in o.item_details.lower()
            or term in o.contact_number.lower()
        ]

    if status:
        filtered = [o for o in filtered if o.status == status]

    if due_date:
        filtered = [o for o in filtered if o.due_date == due_date]

    return filtered


def sort_by_due_date(orders: List[Order]) -> List[Order]:
    return sorted(orders, key=lambda o: o.due_date)


def days_until_due(order: Order, today: date) -> Optional[int]:
    due = parse_due_date(order.due_date)
    if due is None:
        return None
    return (due - today).days


def is_overdue(order: Order, today: date) -> bool:
    if order.status == "completed":
        return False
    days = days_until_due(order, today)
    return days is not None and days < 0


def is_due_soon(order: Order, today: date) -> bool:
    if order.status == "completed":
        return False
    days = days_until_due(order, today)
    return days is not None and 0 <= days <= DUE_SOON_DAYS


def to_view(order: Order, today: date) -> OrderView:
    return OrderView(
        **order.model_dump(),
        overdue=is_overdue(order, today),
        due_soon=is_due_soon(order, today),
        days_until_due=days_until_due(order, today),
    )


def group_by_status(orders: List[Order]) -> Dict[str, List[Order]]:
    groups = {status: [] for status in ORDER_STATUSES}
    for order in orders:
        groups.setdefault(order.status, []).append(order)
    return groups


def recent_orders(orders: List[Order], limit: int = 5) -> List[Order]:
    """Newest first by creation time"""
    return sorted(orders, key=lambda o: o.created_at, reverse=True)[:limit]


def search_customers(customers: List[Customer], search: Optional[str] = None) -> List[Customer]:
    """Case-insensitive name match, or phone match ignoring punctuation"""
    if not search:
        return list(customers)

    term = search.lower()
    digits = format_phone_number(search)
    if not PHONE_SEARCH.match(search) or len(digits) < PHONE_SEARCH_MIN_DIGITS:
        digits = ""
    return [
        c for c in customers
        if term in c.name.lower()
        or search in c.phone
        or (digits and digits in format_phone_number(c.phone))
    ]


def dashboard_stats(orders: List[Order], customers: List[Customer], due_today: List[Order]) -> dict:
    return {
        "total_orders": len(orders),
        "due_today": len(due_today),
        "in_progress": len([o for o in orders if o.status == "in-progress"]),
        "total_customers": len(customers),
    }
