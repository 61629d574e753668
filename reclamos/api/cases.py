"""
ENDPOINTS DE GESTIÓN DE CASOS.

Esta capa NO contiene lógica de negocio: traduce HTTP a operaciones del
store / workflow. Los errores de dominio (caso inexistente, validación)
los convierte en JSON el handler global de la app.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from reclamos.core.database import get_db
from reclamos.models.case import Case, CaseBase, SeguimientoEntry, SeguimientoRequest
from reclamos.services import case_store
from reclamos.services.case_search import SearchFilters, filter_cases, sort_cases
from reclamos.services.case_workflow import CaseWorkflow
from reclamos.services.csv_export import export_cases_csv, export_filename

router = APIRouter(
    prefix="/cases",
    tags=["cases"],
)


class RemovedDuplicatesResponse(BaseModel):
    removed: List[str]
    count: int


class FoldersCreatedResponse(BaseModel):
    case_ids: List[str]
    count: int


def get_workflow(db: Session = Depends(get_db)) -> CaseWorkflow:
    return CaseWorkflow(db)


# =========================================================
# LISTADO Y BÚSQUEDA
# =========================================================


@router.get("", response_model=List[Case])
def list_cases(
    search: str = Query(
        "", description="Texto libre (reclamante, id, vendedora, producto, notas)"
    ),
    estado: Optional[List[str]] = Query(None),
    prioridad: Optional[List[str]] = Query(None),
    provincia: Optional[List[str]] = Query(None),
    responsable: Optional[List[str]] = Query(None),
    categoria: Optional[List[str]] = Query(None),
    fecha_ingreso_desde: Optional[date] = None,
    fecha_ingreso_hasta: Optional[date] = None,
    fecha_audiencia_desde: Optional[date] = None,
    fecha_audiencia_hasta: Optional[date] = None,
    monto_minimo: Optional[float] = None,
    monto_maximo: Optional[float] = None,
    sort_by: str = Query("fecha_ingreso"),
    descending: bool = True,
    db: Session = Depends(get_db),
):
    """Lista los casos aplicando los filtros de búsqueda avanzada."""
    filters = SearchFilters(
        search_term=search,
        estado=estado or [],
        prioridad=prioridad or [],
        provincia=provincia or [],
        responsable=responsable or [],
        categoria=categoria or [],
        fecha_ingreso_desde=fecha_ingreso_desde,
        fecha_ingreso_hasta=fecha_ingreso_hasta,
        fecha_audiencia_desde=fecha_audiencia_desde,
        fecha_audiencia_hasta=fecha_audiencia_hasta,
        monto_minimo=monto_minimo,
        monto_maximo=monto_maximo,
    )
    cases = filter_cases(case_store.list_cases(db), filters)
    try:
        return sort_cases(cases, sort_by, descending)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/export/csv")
def export_csv(detailed: bool = False, db: Session = Depends(get_db)) -> Response:
    """Descarga la colección completa en CSV."""
    content = export_cases_csv(case_store.list_cases(db), detailed=detailed)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(detailed)}"'},
    )


# =========================================================
# MANTENIMIENTO
# =========================================================


@router.post("/maintenance/remove-duplicates", response_model=RemovedDuplicatesResponse)
def remove_duplicates(db: Session = Depends(get_db)):
    """Elimina los casos con número de expediente repetido (conserva el primero)."""
    removed = case_store.remove_duplicate_cases(db)
    return RemovedDuplicatesResponse(removed=removed, count=len(removed))


@router.post("/maintenance/create-folders", response_model=FoldersCreatedResponse)
def create_pending_folders(workflow: CaseWorkflow = Depends(get_workflow)):
    """Crea las carpetas de Drive de los casos que aún no tienen enlace."""
    case_ids = workflow.create_pending_folders()
    return FoldersCreatedResponse(case_ids=case_ids, count=len(case_ids))


# =========================================================
# CRUD
# =========================================================


@router.post("", response_model=Case, status_code=status.HTTP_201_CREATED)
def create_case(payload: CaseBase, workflow: CaseWorkflow = Depends(get_workflow)):
    """Registra un caso nuevo (id asignado por el sistema)."""
    return workflow.register_case(payload)


@router.get("/{case_id}", response_model=Case)
def get_case(case_id: str, db: Session = Depends(get_db)):
    return case_store.get_case(db, case_id)


@router.put("/{case_id}", response_model=Case)
def update_case(
    case_id: str,
    payload: CaseBase,
    workflow: CaseWorkflow = Depends(get_workflow),
):
    """Actualiza los datos editables; el id y el historial previo no cambian."""
    return workflow.modify_case(case_id, payload)


@router.delete("/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_case(case_id: str, db: Session = Depends(get_db)):
    """Borra el caso y sus alertas."""
    case_store.delete_case(db, case_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{case_id}/seguimiento",
    response_model=SeguimientoEntry,
    status_code=status.HTTP_201_CREATED,
)
def add_seguimiento(
    case_id: str,
    payload: SeguimientoRequest,
    db: Session = Depends(get_db),
):
    """Añade una entrada al historial de seguimiento."""
    return case_store.add_seguimiento(
        db, case_id, payload.accion, payload.descripcion, payload.usuario
    )
