from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Literal

MeasurementUnit = Literal["inch", "cm"]


class Measurements(BaseModel):
    """Body measurements; values are kept as entered, no unit conversion"""

    unit: MeasurementUnit = "inch"

    # Upper body
    shoulder: Optional[str] = None
    bust: Optional[str] = None
    waist: Optional[str] = None
    chest: Optional[str] = None
    arm_hole: Optional[str] = None
    sleeve_length: Optional[str] = None
    bicep: Optional[str] = None
    wrist: Optional[str] = None
    neck_deep_front: Optional[str] = None
    neck_deep_back: Optional[str] = None

    # Lower body
    hips: Optional[str] = None
    inseam: Optional[str] = None
    waist_to_knee: Optional[str] = None
    ankle: Optional[str] = None

    # Garment lengths
    full_length: Optional[str] = None
    kameez_length: Optional[str] = None
    salwar_length: Optional[str] = None
    churidar_length: Optional[str] = None
    skirt_length: Optional[str] = None

    notes: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    measurements: Measurements = Field(default_factory=Measurements)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    measurements: Optional[Measurements] = None

    @field_validator("name", "phone", "measurements")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Customer(BaseModel):
    """Persisted customer record"""

    id: str
    name: str = Field(..., min_length=1)
    phone: str = ""
    email: Optional[str] = None
    address: Optional[str] = None
    measurements: Measurements = Field(default_factory=Measurements)
    created_at: str
    updated_at: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"


class CustomerListResponse(BaseModel):
    total: int
    customers: list[Customer]
