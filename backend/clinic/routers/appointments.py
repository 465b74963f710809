from fastapi import APIRouter, Depends, HTTPException, Response
from clinic.schemas.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentResponse,
    AppointmentWithDetailsResponse,
)
from clinic.schemas.patient import PatientResponse
from clinic.schemas.doctor import DoctorResponse
from clinic.services.storage import ClinicStorage, AppointmentWithDetails, get_storage
from clinic.services import export_service

router = APIRouter()


def appointment_response(row: AppointmentWithDetails) -> AppointmentWithDetailsResponse:
    response = AppointmentWithDetailsResponse.model_validate(row.appointment)
    response.patient = PatientResponse.model_validate(row.patient) if row.patient else None
    response.doctor = DoctorResponse.model_validate(row.doctor) if row.doctor else None
    return response


@router.get("", response_model=list[AppointmentWithDetailsResponse])
async def list_appointments(storage: ClinicStorage = Depends(get_storage)):
    return [appointment_response(row) for row in await storage.list_appointments()]


@router.get("/export")
async def export_appointments(storage: ClinicStorage = Depends(get_storage)):
    rows = await storage.list_appointments()
    return export_service.csv_response(
        "appointments",
        export_service.APPOINTMENT_COLUMNS,
        (export_service.appointment_row(r) for r in rows),
    )


@router.get("/{appointment_id}", response_model=AppointmentWithDetailsResponse)
async def get_appointment(appointment_id: int, storage: ClinicStorage = Depends(get_storage)):
    row = await storage.get_appointment(appointment_id)
    if not row:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment_response(row)


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(data: AppointmentCreate, storage: ClinicStorage = Depends(get_storage)):
    appointment = await storage.create_appointment(data.model_dump())
    return AppointmentResponse.model_validate(appointment)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    storage: ClinicStorage = Depends(get_storage),
):
    appointment = await storage.update_appointment(
        appointment_id, data.model_dump(exclude_unset=True)
    )
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return AppointmentResponse.model_validate(appointment)


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(appointment_id: int, storage: ClinicStorage = Depends(get_storage)):
    await storage.delete_appointment(appointment_id)
    return Response(status_code=204)
