from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from tailorbook.dependencies import get_order_repo
from tailorbook.repositories.order_repo import OrderRepository
from tailorbook.schemas.order import (
    Order,
    OrderCreate,
    OrderUpdate,
    OrderStatus,
    OrderStatusUpdate,
    OrderView,
    OrderListResponse,
)
from tailorbook.utils.views import filter_orders, sort_by_due_date, to_view

router = APIRouter(prefix="/api/v1/orders", tags=["Orders"])


def _not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Order not found"
    )


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """Create a new order"""
    return order_repo.create(
        customer_name=order_data.customer_name,
        contact_number=order_data.contact_number,
        customer_id=order_data.customer_id,
        item_details=order_data.item_details,
        due_date=order_data.due_date,
        status=order_data.status,
        images=order_data.images,
    )


@router.get("", response_model=OrderListResponse)
def list_orders(
    search: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    due_date: Optional[str] = Query(None, description="Exact due date, YYYY-MM-DD"),
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """List orders sorted by due date, with optional search/status/due date filters"""
    orders = order_repo.list()
    filtered = sort_by_due_date(filter_orders(orders, search=search, status=status, due_date=due_date))
    today = order_repo.today()

    return {
        "total": len(orders),
        "showing": len(filtered),
        "orders": [to_view(o, today) for o in filtered],
    }


@router.get("/due-today", response_model=List[Order])
def orders_due_today(order_repo: OrderRepository = Depends(get_order_repo)):
    """Open orders due today"""
    return order_repo.due_today()


@router.get("/due-soon", response_model=List[Order])
def orders_due_soon(order_repo: OrderRepository = Depends(get_order_repo)):
    """Open orders due today or tomorrow"""
    return order_repo.due_soon()


@router.get("/{order_id}", response_model=OrderView)
def get_order(
    order_id: str,
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """Get order by ID"""
    order = order_repo.get(order_id)
    if not order:
        raise _not_found()
    return to_view(order, order_repo.today())


@router.put("/{order_id}", response_model=Order)
def update_order(
    order_id: str,
    order_data: OrderUpdate,
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """Update order"""
    # Only fields the client sent; an explicit null clears an optional field
    update_data = order_data.model_dump(exclude_unset=True)

    order = order_repo.update(order_id, **update_data)
    if not order:
        raise _not_found()
    return order


@router.patch("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: str,
    status_data: OrderStatusUpdate,
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """Move an order to any status, including reopening a completed one"""
    order = order_repo.update(order_id, status=status_data.status)
    if not order:
        raise _not_found()
    return order


@router.delete("/{order_id}")
def delete_order(
    order_id: str,
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """Delete order"""
    if not order_repo.delete(order_id):
        raise _not_found()
    return {"message": "Order deleted successfully"}
