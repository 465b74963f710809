from fastapi import APIRouter, Depends, HTTPException, Query, Response
from clinic.schemas.drug import DrugCreate, DrugUpdate, DrugResponse
from clinic.services.storage import ClinicStorage, get_storage
from clinic.services import export_service

router = APIRouter()


@router.get("", response_model=list[DrugResponse])
async def list_drugs(storage: ClinicStorage = Depends(get_storage)):
    return [DrugResponse.model_validate(d) for d in await storage.list_drugs()]


@router.get("/search", response_model=list[DrugResponse])
async def search_drugs(
    q: str = Query("", description="Match name, category or manufacturer"),
    storage: ClinicStorage = Depends(get_storage),
):
    q = q.strip()
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return [DrugResponse.model_validate(d) for d in await storage.search_drugs(q)]


@router.get("/low-stock", response_model=list[DrugResponse])
async def list_low_stock_drugs(storage: ClinicStorage = Depends(get_storage)):
    return [DrugResponse.model_validate(d) for d in await storage.get_low_stock_drugs()]


@router.get("/export")
async def export_drugs(storage: ClinicStorage = Depends(get_storage)):
    drugs = await storage.list_drugs()
    return export_service.csv_response(
        "drugs",
        export_service.DRUG_COLUMNS,
        (export_service.drug_row(d) for d in drugs),
    )


@router.get("/{drug_id}", response_model=DrugResponse)
async def get_drug(drug_id: int, storage: ClinicStorage = Depends(get_storage)):
    drug = await storage.get_drug(drug_id)
    if not drug:
        raise HTTPException(status_code=404, detail="Drug not found")
    return DrugResponse.model_validate(drug)


@router.post("", response_model=DrugResponse, status_code=201)
async def create_drug(data: DrugCreate, storage: ClinicStorage = Depends(get_storage)):
    drug = await storage.create_drug(data.model_dump())
    return DrugResponse.model_validate(drug)


@router.put("/{drug_id}", response_model=DrugResponse)
async def update_drug(
    drug_id: int,
    data: DrugUpdate,
    storage: ClinicStorage = Depends(get_storage),
):
    drug = await storage.update_drug(drug_id, data.model_dump(exclude_unset=True))
    if not drug:
        raise HTTPException(status_code=404, detail="Drug not found")
    return DrugResponse.model_validate(drug)


@router.delete("/{drug_id}", status_code=204)
async def delete_drug(drug_id: int, storage: ClinicStorage = Depends(get_storage)):
    await storage.delete_drug(drug_id)
    return Response(status_code=204)
