from pydantic import field_validator
from datetime import date, datetime
from typing import Literal, Optional
from clinic.schemas.common import CamelModel, reject_null
from clinic.schemas.patient import PatientResponse
from clinic.schemas.doctor import DoctorResponse

AppointmentStatus = Literal["scheduled", "completed", "cancelled"]


class AppointmentBase(CamelModel):
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    appointment_date: date
    appointment_time: str
    status: AppointmentStatus = "scheduled"
    reason: Optional[str] = None
    notes: Optional[str] = None


class AppointmentCreate(AppointmentBase):
    pass


class AppointmentUpdate(CamelModel):
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    reason: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("appointment_date", "appointment_time", "status", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class AppointmentResponse(AppointmentBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AppointmentWithDetailsResponse(AppointmentResponse):
    patient: Optional[PatientResponse] = None
    doctor: Optional[DoctorResponse] = None
