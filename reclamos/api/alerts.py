"""
ENDPOINTS DE ALERTAS.

Las alertas se generan a partir de los casos y se guardan fusionadas por
id; aquí solo se consultan, se regeneran y se marcan como leídas.
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from reclamos.api.cases import get_workflow
from reclamos.core.database import get_db
from reclamos.models.alert import Alert
from reclamos.services import case_store
from reclamos.services.case_workflow import CaseWorkflow

router = APIRouter(
    prefix="/alerts",
    tags=["alerts"],
)


class RegenerateResponse(BaseModel):
    added: List[Alert]
    count: int


class MarkAllReadResponse(BaseModel):
    updated: int


@router.get("", response_model=List[Alert])
def list_alerts(unread_only: bool = False, db: Session = Depends(get_db)):
    """Alertas ordenadas por fecha de aviso."""
    return case_store.list_alerts(db, unread_only=unread_only)


@router.post("/regenerate", response_model=RegenerateResponse)
def regenerate_alerts(workflow: CaseWorkflow = Depends(get_workflow)):
    """Regenera las alertas de todos los casos; solo se añaden las nuevas."""
    added = workflow.regenerate_all_alerts()
    return RegenerateResponse(added=added, count=len(added))


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(db: Session = Depends(get_db)):
    return MarkAllReadResponse(updated=case_store.mark_all_alerts_read(db))


@router.post("/{alert_id}/read", response_model=Alert)
def mark_read(alert_id: str, db: Session = Depends(get_db)):
    return case_store.mark_alert_read(db, alert_id)
