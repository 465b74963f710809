from pydantic import Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional
from clinic.schemas.common import CamelModel, reject_null
from clinic.schemas.user import UserResponse


class DoctorBase(CamelModel):
    user_id: Optional[str] = None
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: str
    experience: Optional[int] = Field(default=None, ge=0)
    qualification: Optional[str] = None
    license_number: Optional[str] = None
    consultation_fee: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    rating: Optional[Decimal] = Field(default=None, max_digits=3, decimal_places=2)
    is_active: bool = True


class DoctorCreate(DoctorBase):
    pass


class DoctorUpdate(CamelModel):
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: Optional[str] = None
    experience: Optional[int] = Field(default=None, ge=0)
    qualification: Optional[str] = None
    license_number: Optional[str] = None
    consultation_fee: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    rating: Optional[Decimal] = Field(default=None, max_digits=3, decimal_places=2)
    is_active: Optional[bool] = None

    @field_validator("first_name", "last_name", "specialization", "is_active", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class DoctorResponse(DoctorBase):
    id: int
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DoctorWithUserResponse(DoctorResponse):
    user: Optional[UserResponse] = None
