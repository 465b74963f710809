from fastapi import APIRouter, Depends, HTTPException, Query, Response
from clinic.schemas.doctor import DoctorCreate, DoctorUpdate, DoctorResponse, DoctorWithUserResponse
from clinic.schemas.user import UserResponse
from clinic.schemas.appointment import AppointmentWithDetailsResponse
from clinic.services.storage import ClinicStorage, DoctorWithUser, get_storage
from clinic.services import export_service
from clinic.routers.appointments import appointment_response

router = APIRouter()


def doctor_response(row: DoctorWithUser) -> DoctorWithUserResponse:
    response = DoctorWithUserResponse.model_validate(row.doctor)
    response.user = UserResponse.model_validate(row.user) if row.user else None
    return response


@router.get("", response_model=list[DoctorWithUserResponse])
async def list_doctors(storage: ClinicStorage = Depends(get_storage)):
    return [doctor_response(row) for row in await storage.list_doctors()]


@router.get("/search", response_model=list[DoctorWithUserResponse])
async def search_doctors(
    q: str = Query("", description="Match first/last name, specialization or email"),
    storage: ClinicStorage = Depends(get_storage),
):
    q = q.strip()
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return [doctor_response(row) for row in await storage.search_doctors(q)]


@router.get("/export")
async def export_doctors(storage: ClinicStorage = Depends(get_storage)):
    rows = await storage.list_doctors()
    return export_service.csv_response(
        "doctors",
        export_service.DOCTOR_COLUMNS,
        (export_service.doctor_row(r) for r in rows),
    )


@router.get("/{doctor_id}/appointments", response_model=list[AppointmentWithDetailsResponse])
async def list_doctor_appointments(doctor_id: int, storage: ClinicStorage = Depends(get_storage)):
    return [appointment_response(r) for r in await storage.get_appointments_by_doctor(doctor_id)]


@router.get("/{doctor_id}", response_model=DoctorWithUserResponse)
async def get_doctor(doctor_id: int, storage: ClinicStorage = Depends(get_storage)):
    row = await storage.get_doctor(doctor_id)
    if not row:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return doctor_response(row)


@router.post("", response_model=DoctorResponse, status_code=201)
async def create_doctor(data: DoctorCreate, storage: ClinicStorage = Depends(get_storage)):
    doctor = await storage.create_doctor(data.model_dump())
    return DoctorResponse.model_validate(doctor)


@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: int,
    data: DoctorUpdate,
    storage: ClinicStorage = Depends(get_storage),
):
    doctor = await storage.update_doctor(doctor_id, data.model_dump(exclude_unset=True))
    if not doctor:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return DoctorResponse.model_validate(doctor)


@router.delete("/{doctor_id}", status_code=204)
async def delete_doctor(doctor_id: int, storage: ClinicStorage = Depends(get_storage)):
    await storage.delete_doctor(doctor_id)
    return Response(status_code=204)
