from fastapi import APIRouter, Depends
from tailorbook.config import settings
from tailorbook.dependencies import get_customer_repo, get_order_repo, get_notifier
from tailorbook.repositories.customer_repo import CustomerRepository
from tailorbook.repositories.order_repo import OrderRepository
from tailorbook.schemas.order import DueSoonCount
from tailorbook.services.notifier import DueSoonNotifier
from tailorbook.utils.views import dashboard_stats, group_by_status, recent_orders, to_view

router = APIRouter(prefix="/api/v1", tags=["Dashboard"])


@router.get("/dashboard")
def dashboard(
    customer_repo: CustomerRepository = Depends(get_customer_repo),
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """Headline counts, latest orders and urgent (due today/tomorrow) orders"""
    orders = order_repo.list()
    today = order_repo.today()

    return {
        "stats": dashboard_stats(orders, customer_repo.list(), order_repo.due_today()),
        "recent_orders": [
            to_view(o, today).model_dump(by_alias=True)
            for o in recent_orders(orders, settings.RECENT_ORDERS_LIMIT)
        ],
        "urgent_orders": [to_view(o, today).model_dump(by_alias=True) for o in order_repo.due_soon()],
    }


@router.get("/daily")
def daily_work(order_repo: OrderRepository = Depends(get_order_repo)):
    """Today's work list, grouped by status"""
    todays_orders = order_repo.due_today()
    groups = group_by_status(todays_orders)

    return {
        "date": order_repo.today().isoformat(),
        "total": len(todays_orders),
        "groups": {
            name: [o.model_dump(by_alias=True) for o in orders]
            for name, orders in groups.items()
        },
    }


@router.get("/notifications", response_model=DueSoonCount)
def notification_count(
    refresh: bool = False,
    notifier: DueSoonNotifier = Depends(get_notifier),
):
    """Badge count of urgent orders, as last computed by the poller"""
    if refresh or notifier.checked_at is None:
        notifier.refresh()
    return {"count": notifier.count, "checked_at": notifier.checked_at}
