from fastapi import APIRouter, Depends, HTTPException, Query, Response
from clinic.schemas.patient import PatientCreate, PatientUpdate, PatientResponse, PatientWithUserResponse
from clinic.schemas.user import UserResponse
from clinic.schemas.appointment import AppointmentWithDetailsResponse
from clinic.services.storage import ClinicStorage, PatientWithUser, get_storage
from clinic.services import export_service
from clinic.routers.appointments import appointment_response

router = APIRouter()


def patient_response(row: PatientWithUser) -> PatientWithUserResponse:
    response = PatientWithUserResponse.model_validate(row.patient)
    response.user = UserResponse.model_validate(row.user) if row.user else None
    return response


@router.get("", response_model=list[PatientWithUserResponse])
async def list_patients(storage: ClinicStorage = Depends(get_storage)):
    return [patient_response(row) for row in await storage.list_patients()]


@router.get("/search", response_model=list[PatientWithUserResponse])
async def search_patients(
    q: str = Query("", description="Match first/last name, email or phone"),
    storage: ClinicStorage = Depends(get_storage),
):
    q = q.strip()
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return [patient_response(row) for row in await storage.search_patients(q)]


@router.get("/export")
async def export_patients(storage: ClinicStorage = Depends(get_storage)):
    rows = await storage.list_patients()
    return export_service.csv_response(
        "patients",
        export_service.PATIENT_COLUMNS,
        (export_service.patient_row(r) for r in rows),
    )


@router.get("/{patient_id}/appointments", response_model=list[AppointmentWithDetailsResponse])
async def list_patient_appointments(patient_id: int, storage: ClinicStorage = Depends(get_storage)):
    return [appointment_response(r) for r in await storage.get_appointments_by_patient(patient_id)]


@router.get("/{patient_id}", response_model=PatientWithUserResponse)
async def get_patient(patient_id: int, storage: ClinicStorage = Depends(get_storage)):
    row = await storage.get_patient(patient_id)
    if not row:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient_response(row)


@router.post("", response_model=PatientResponse, status_code=201)
async def create_patient(data: PatientCreate, storage: ClinicStorage = Depends(get_storage)):
    patient = await storage.create_patient(data.model_dump())
    return PatientResponse.model_validate(patient)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    storage: ClinicStorage = Depends(get_storage),
):
    patient = await storage.update_patient(patient_id, data.model_dump(exclude_unset=True))
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return PatientResponse.model_validate(patient)


@router.delete("/{patient_id}", status_code=204)
async def delete_patient(patient_id: int, storage: ClinicStorage = Depends(get_storage)):
    await storage.delete_patient(patient_id)
    return Response(status_code=204)
