from fastapi import APIRouter, Depends, HTTPException, Response
from clinic.schemas.admission import (
    AdmissionCreate,
    AdmissionUpdate,
    AdmissionResponse,
    AdmissionWithDetailsResponse,
)
from clinic.schemas.patient import PatientResponse
from clinic.schemas.doctor import DoctorResponse
from clinic.services.storage import ClinicStorage, AdmissionWithDetails, get_storage

router = APIRouter()


def admission_response(row: AdmissionWithDetails) -> AdmissionWithDetailsResponse:
    response = AdmissionWithDetailsResponse.model_validate(row.admission)
    response.patient = PatientResponse.model_validate(row.patient) if row.patient else None
    response.doctor = DoctorResponse.model_validate(row.doctor) if row.doctor else None
    return response


@router.get("", response_model=list[AdmissionWithDetailsResponse])
async def list_admissions(storage: ClinicStorage = Depends(get_storage)):
    return [admission_response(row) for row in await storage.list_admissions()]


@router.get("/active", response_model=list[AdmissionWithDetailsResponse])
async def list_active_admissions(storage: ClinicStorage = Depends(get_storage)):
    return [admission_response(row) for row in await storage.get_active_admissions()]


@router.get("/{admission_id}", response_model=AdmissionWithDetailsResponse)
async def get_admission(admission_id: int, storage: ClinicStorage = Depends(get_storage)):
    row = await storage.get_admission(admission_id)
    if not row:
        raise HTTPException(status_code=404, detail="Admission not found")
    return admission_response(row)


@router.post("", response_model=AdmissionResponse, status_code=201)
async def create_admission(data: AdmissionCreate, storage: ClinicStorage = Depends(get_storage)):
    admission = await storage.create_admission(data.model_dump())
    return AdmissionResponse.model_validate(admission)


@router.put("/{admission_id}", response_model=AdmissionResponse)
async def update_admission(
    admission_id: int,
    data: AdmissionUpdate,
    storage: ClinicStorage = Depends(get_storage),
):
    admission = await storage.update_admission(admission_id, data.model_dump(exclude_unset=True))
    if not admission:
        raise HTTPException(status_code=404, detail="Admission not found")
    return AdmissionResponse.model_validate(admission)


@router.delete("/{admission_id}", status_code=204)
async def delete_admission(admission_id: int, storage: ClinicStorage = Depends(get_storage)):
    await storage.delete_admission(admission_id)
    return Response(status_code=204)
