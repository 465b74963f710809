from fastapi import APIRouter, Depends, HTTPException, Query
from clinic.schemas.search import SearchResult
from clinic.services.storage import ClinicStorage, get_storage
from clinic.services.export_service import doctor_display_name

router = APIRouter()


@router.get("", response_model=list[SearchResult])
async def search_everything(
    q: str = Query("", description="Searched across patients, doctors and drugs"),
    storage: ClinicStorage = Depends(get_storage),
):
    q = q.strip()
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")

    results = [
        SearchResult(
            id=row.patient.id,
            name=f"{row.patient.first_name} {row.patient.last_name}",
            type="patient",
            subtitle=row.patient.email,
        )
        for row in await storage.search_patients(q)
    ]
    results += [
        SearchResult(
            id=row.doctor.id,
            name=doctor_display_name(row.doctor),
            type="doctor",
            subtitle=row.doctor.specialization,
        )
        for row in await storage.search_doctors(q)
    ]
    results += [
        SearchResult(id=drug.id, name=drug.name, type="drug", subtitle=drug.category)
        for drug in await storage.search_drugs(q)
    ]
    return results
