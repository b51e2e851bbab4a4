"""
Endpoints de configuración del consultorio: tarifario, motivos de consulta
y logo.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.catalog import Logo, ProcedureCreate, ProcedureItem, ReasonCreate
from dentalflow.store import RecordStore

router = APIRouter()


# ── Tarifario ────────────────────────────────────────


@router.get("/procedures", response_model=list[ProcedureItem])
async def list_procedures(store: RecordStore = Depends(get_store)):
    return store.get_procedures()


@router.post("/procedures", response_model=ProcedureItem, status_code=201)
async def create_procedure(data: ProcedureCreate, store: RecordStore = Depends(get_store)):
    return await store.add_procedure(data)


@router.delete("/procedures/{procedure_id}", status_code=204)
async def delete_procedure(procedure_id: UUID, store: RecordStore = Depends(get_store)):
    await store.remove_procedure(procedure_id)


# ── Motivos de consulta ──────────────────────────────


@router.get("/reasons", response_model=list[str])
async def list_reasons(store: RecordStore = Depends(get_store)):
    return store.get_consultation_reasons()


@router.post("/reasons", response_model=list[str], status_code=201)
async def create_reason(data: ReasonCreate, store: RecordStore = Depends(get_store)):
    """Agrega un motivo. Si ya existe la lista queda igual."""
    return await store.add_consultation_reason(data.reason)


@router.delete("/reasons/{reason}", response_model=list[str])
async def delete_reason(reason: str, store: RecordStore = Depends(get_store)):
    return await store.remove_consultation_reason(reason)


# ── Logo ─────────────────────────────────────────────


@router.get("/logo", response_model=Logo | None)
async def get_logo(store: RecordStore = Depends(get_store)):
    """Logo del consultorio, o null si no se cargó ninguno."""
    image = await store.get_logo()
    return Logo(image=image) if image else None


@router.put("/logo", response_model=Logo)
async def save_logo(data: Logo, store: RecordStore = Depends(get_store)):
    await store.save_logo(data.image)
    return data
