from pydantic import field_validator
from datetime import date, datetime
from typing import Optional
from clinic.schemas.common import CamelModel, reject_null
from clinic.schemas.user import UserResponse


class PatientBase(CamelModel):
    user_id: Optional[str] = None
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_history: Optional[str] = None


class PatientCreate(PatientBase):
    pass


class PatientUpdate(CamelModel):
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_history: Optional[str] = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class PatientResponse(PatientBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PatientWithUserResponse(PatientResponse):
    user: Optional[UserResponse] = None
