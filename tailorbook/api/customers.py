from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional
from tailorbook.dependencies import get_customer_repo, get_order_repo
from tailorbook.repositories.customer_repo import CustomerRepository
from tailorbook.repositories.order_repo import OrderRepository
from tailorbook.schemas.customer import Customer, CustomerCreate, CustomerUpdate, CustomerListResponse
from tailorbook.schemas.order import OrderView
from tailorbook.utils.views import search_customers, sort_by_due_date, to_view

router = APIRouter(prefix="/api/v1/customers", tags=["Customers"])


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
def create_customer(
    customer_data: CustomerCreate,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
):
    """Create a new customer"""
    return customer_repo.create(
        name=customer_data.name,
        phone=customer_data.phone,
        email=customer_data.email,
        address=customer_data.address,
        measurements=customer_data.measurements,
    )


@router.get("", response_model=CustomerListResponse)
def list_customers(
    search: Optional[str] = None,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
):
    """List all customers with optional search on name or phone"""
    customers = search_customers(customer_repo.list(), search)
    return {"total": len(customers), "customers": customers}


@router.get("/{customer_id}", response_model=Customer)
def get_customer(
    customer_id: str,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
):
    """Get customer by ID"""
    customer = customer_repo.get(customer_id)

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )

    return customer


@router.get("/{customer_id}/orders", response_model=List[OrderView])
def list_customer_orders(
    customer_id: str,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
    order_repo: OrderRepository = Depends(get_order_repo),
):
    """Orders linked to this customer by customer_id"""
    if not customer_repo.get(customer_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )

    today = order_repo.today()
    return [to_view(o, today) for o in sort_by_due_date(order_repo.list_for_customer(customer_id))]


@router.put("/{customer_id}", response_model=Customer)
def update_customer(
    customer_id: str,
    customer_data: CustomerUpdate,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
):
    """Update customer"""
    # Only fields the client sent; an explicit null clears an optional field
    update_data = customer_data.model_dump(exclude_unset=True)

    customer = customer_repo.update(customer_id, **update_data)

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )

    return customer


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: str,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
):
    """Delete customer. Orders that reference it are left untouched."""
    success = customer_repo.delete(customer_id)

    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )

    return {"message": "Customer deleted successfully"}
