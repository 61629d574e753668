from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class CalendarEventType(str, Enum):
    AUDIENCIA = "audiencia"
    REUNION = "reunion"
    VENCIMIENTO = "vencimiento"
    SEGUIMIENTO = "seguimiento"


class CalendarEvent(BaseModel):
    """Evento del calendario derivado de un caso."""

    id: str
    title: str
    start: datetime
    end: datetime
    case_id: str
    type: CalendarEventType
    description: Optional[str] = None
    location: Optional[str] = None
