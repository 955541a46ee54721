from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal
from tailorbook.utils.helpers import parse_due_date

# Any status may move to any other; completed orders can be reopened
OrderStatus = Literal["pending", "in-progress", "completed"]
ORDER_STATUSES = ("pending", "in-progress", "completed")


def _check_due_date(value: Optional[str]) -> Optional[str]:
    if value is not None and parse_due_date(value) is None:
        raise ValueError("due_date must be a calendar date in YYYY-MM-DD form")
    return value


class OrderCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=200)
    contact_number: str
    customer_id: Optional[str] = None
    item_details: str = Field(..., min_length=1)
    due_date: str
    status: OrderStatus = "pending"
    images: Optional[List[str]] = None

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v):
        return _check_due_date(v)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OrderUpdate(BaseModel):
    customer_name: Optional[str] = Field(None, min_length=1, max_length=200)
    contact_number: Optional[str] = None
    customer_id: Optional[str] = None
    item_details: Optional[str] = Field(None, min_length=1)
    due_date: Optional[str] = None
    status: Optional[OrderStatus] = None
    images: Optional[List[str]] = None

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v):
        return _check_due_date(v)

    @field_validator("customer_name", "contact_number", "item_details", "due_date", "status")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class Order(BaseModel):
    """Persisted order record"""

    id: str
    customer_name: str
    contact_number: str = ""
    customer_id: Optional[str] = None
    item_details: str = ""
    due_date: str
    status: OrderStatus = "pending"
    images: Optional[List[str]] = None
    created_at: str
    updated_at: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"


class OrderView(Order):
    """Order plus flags recomputed from the current date on every request"""

    overdue: bool = False
    due_soon: bool = False
    days_until_due: Optional[int] = None


class OrderListResponse(BaseModel):
    total: int
    showing: int
    orders: List[OrderView]


class DueSoonCount(BaseModel):
    count: int
    checked_at: Optional[str] = None
