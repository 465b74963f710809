from pydantic import field_validator
from datetime import date, datetime
from typing import Literal, Optional
from clinic.schemas.common import CamelModel, reject_null
from clinic.schemas.patient import PatientResponse
from clinic.schemas.doctor import DoctorResponse

AdmissionStatus = Literal["admitted", "discharged"]


class AdmissionBase(CamelModel):
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    admission_date: date
    discharge_date: Optional[date] = None
    room_number: Optional[str] = None
    bed_number: Optional[str] = None
    status: AdmissionStatus = "admitted"
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    notes: Optional[str] = None


class AdmissionCreate(AdmissionBase):
    pass


class AdmissionUpdate(CamelModel):
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    admission_date: Optional[date] = None
    discharge_date: Optional[date] = None
    room_number: Optional[str] = None
    bed_number: Optional[str] = None
    status: Optional[AdmissionStatus] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("admission_date", "status", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return reject_null(value)


class AdmissionResponse(AdmissionBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdmissionWithDetailsResponse(AdmissionResponse):
    patient: Optional[PatientResponse] = None
    doctor: Optional[DoctorResponse] = None
