"""CSV exports for the list screens (patients, doctors, drugs, appointments)."""

import csv
import io
from typing import Iterable, Optional
from fastapi.responses import StreamingResponse
from clinic.models import Patient, Doctor, Drug
from clinic.services.storage import PatientWithUser, DoctorWithUser, AppointmentWithDetails

PATIENT_COLUMNS = ["ID", "Name", "Email", "Phone", "Date of Birth", "Gender", "Created At"]
DOCTOR_COLUMNS = [
    "ID", "Name", "Email", "Phone", "Specialization", "Experience",
    "Rating", "Consultation Fee", "Active",
]
DRUG_COLUMNS = [
    "ID", "Name", "Category", "Manufacturer", "Stock Quantity",
    "Unit Price", "Expiry Date", "Batch Number",
]
APPOINTMENT_COLUMNS = ["ID", "Patient", "Doctor", "Date", "Time", "Status", "Reason"]


def _cell(value) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _person(first: Optional[str], last: Optional[str]) -> str:
    return " ".join(part for part in (first, last) if part)


def doctor_display_name(doctor: Doctor) -> str:
    return f"Dr. {_person(doctor.first_name, doctor.last_name)}"


def patient_row(row: PatientWithUser) -> list:
    p: Patient = row.patient
    return [
        p.id,
        _person(p.first_name, p.last_name),
        p.email,
        p.phone,
        p.date_of_birth,
        p.gender,
        p.created_at.date() if p.created_at else None,
    ]


def doctor_row(row: DoctorWithUser) -> list:
    d: Doctor = row.doctor
    return [
        d.id,
        doctor_display_name(d),
        d.email,
        d.phone,
        d.specialization,
        f"{d.experience} years" if d.experience is not None else None,
        d.rating,
        d.consultation_fee,
        "Yes" if d.is_active else "No",
    ]


def drug_row(d: Drug) -> list:
    return [
        d.id,
        d.name,
        d.category,
        d.manufacturer,
        d.stock_quantity,
        d.unit_price,
        d.expiry_date,
        d.batch_number,
    ]


def appointment_row(row: AppointmentWithDetails) -> list:
    a = row.appointment
    return [
        a.id,
        _person(row.patient.first_name, row.patient.last_name) if row.patient else "",
        doctor_display_name(row.doctor) if row.doctor else "",
        a.appointment_date,
        a.appointment_time,
        a.status,
        a.reason,
    ]


def to_csv(columns: list[str], rows: Iterable[list]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(columns)
    for row in rows:
        writer.writerow([_cell(v) for v in row])
    return output.getvalue()


def csv_response(filename: str, columns: list[str], rows: Iterable[list]) -> StreamingResponse:
    return StreamingResponse(
        iter([to_csv(columns, rows)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
    )
