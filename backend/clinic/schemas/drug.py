from pydantic import Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from clinic.schemas.common import CamelModel, reject_null


class DrugBase(CamelModel):
    name: str
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    dosage: Optional[str] = None
    unit: str
    stock_quantity: int = 0
    unit_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = None
    description: Optional[str] = None


class DrugCreate(DrugBase):
    pass


class DrugUpdate(CamelModel):
    name: Optional[str] = None
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    dosage: Optional[str] = None
    unit: Optional[str] = None
    stock_quantity: Optional[int] = None
    unit_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name", "unit", "stock_quantity", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class DrugResponse(DrugBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
