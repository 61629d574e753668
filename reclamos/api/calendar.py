"""
ENDPOINTS DE CALENDARIO.
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from reclamos.core.database import get_db
from reclamos.models.calendar_event import CalendarEvent
from reclamos.models.case import Case
from reclamos.services import case_store
from reclamos.services.calendar_events import build_calendar_events, upcoming_hearings

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/events", response_model=List[CalendarEvent])
def list_events(db: Session = Depends(get_db)):
    """Audiencias, vencimientos y seguimientos de todos los casos."""
    return build_calendar_events(case_store.list_cases(db))


@router.get("/upcoming", response_model=List[Case])
def list_upcoming_hearings(
    days: int = Query(7, ge=0, le=365),
    db: Session = Depends(get_db),
):
    """Casos con audiencia en los próximos `days` días."""
    return upcoming_hearings(case_store.list_cases(db), days=days)
