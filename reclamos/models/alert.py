"""
ALERT - Notificación derivada y efímera asociada a un caso.

El `id` es la ÚNICA clave de deduplicación: se deriva de forma
determinista del caso y del desfase (p.ej. "CASO-20240601-001-3d"),
de modo que regenerar las alertas de un caso sin cambios no crea
duplicados en la colección del llamador.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """Tipos de alerta."""

    AUDIENCIA_10_DIAS = "audiencia_10_dias"
    AUDIENCIA_3_DIAS = "audiencia_3_dias"
    AUDIENCIA_1_DIA = "audiencia_1_dia"
    VENCIMIENTO = "vencimiento"
    SEGUIMIENTO = "seguimiento"


class AlertPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Alert(BaseModel):
    """Alerta de un caso."""

    id: str = Field(..., min_length=1)
    case_id: str = Field(..., min_length=1)
    type: AlertType
    message: str
    date: datetime = Field(..., description="Momento en que la alerta se dispara")
    read: bool = False
    priority: AlertPriority = AlertPriority.MEDIUM
