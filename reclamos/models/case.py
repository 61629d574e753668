"""
CASE - Modelo de dominio del reclamo (expediente).

El caso es la única fuente de verdad del sistema: alertas y reportes
se derivan de la colección de casos y NO la modifican.

Invariantes:
- `id` (formato CASO-YYYYMMDD-NNN) es inmutable una vez asignado y único
  dentro de la colección.
- `historial_seguimiento` es append-only: las entradas nunca se editan
  ni se borran.
- `estado` y `prioridad` son conjuntos abiertos de strings: los valores
  documentados están en CaseStatus / CasePriority, pero no se validan
  transiciones ni se rechazan valores desconocidos.
"""
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CaseStatus(str, Enum):
    """
    Estados documentados del caso.

    Dirección habitual (NO forzada):
    pendiente → en_proceso → audiencia_programada → resuelto → cerrado
    """

    PENDIENTE = "pendiente"
    EN_PROCESO = "en_proceso"
    AUDIENCIA_PROGRAMADA = "audiencia_programada"
    RESUELTO = "resuelto"
    CERRADO = "cerrado"


class CasePriority(str, Enum):
    """Prioridades documentadas del caso."""

    BAJA = "baja"
    MEDIA = "media"
    ALTA = "alta"
    URGENTE = "urgente"


# Estados en los que el caso ya no cuenta como vencido
FINISHED_STATUSES = frozenset({CaseStatus.RESUELTO.value, CaseStatus.CERRADO.value})


class CarpetaInfo(BaseModel):
    """Registro de aprovisionamiento de una carpeta del caso."""

    nombre: str
    created: bool = False
    last_modified: datetime = Field(default_factory=datetime.now)
    drive_id: Optional[str] = None
    url: Optional[str] = None


class DocumentoAdjunto(BaseModel):
    """Referencia a un documento adjunto."""

    id: str
    nombre: str
    tipo: str = ""
    url: str = ""
    fecha_subida: datetime = Field(default_factory=datetime.now)


class SeguimientoEntry(BaseModel):
    """Entrada del historial de seguimiento (append-only)."""

    id: str
    fecha: datetime
    accion: str
    descripcion: str = ""
    usuario: str = "Sistema"


class CaseBase(BaseModel):
    """
    Campos editables de un caso.

    Los campos obligatorios de negocio (reclamante, provincia, localidad)
    tienen default vacío: la validación de entrada la hace
    `validate_case_data`, que devuelve mensajes legibles.
    """

    fecha_ingreso: date = Field(default_factory=date.today)
    nombre_reclamante: str = ""
    email_reclamante: Optional[str] = None
    telefono_reclamante: Optional[str] = None
    provincia: str = ""
    localidad: str = ""
    organismo_interviniente: str = ""
    numero_expediente: str = ""
    fecha_notificacion: Optional[date] = None
    fecha_audiencia: Optional[date] = None
    hora_audiencia: Optional[str] = Field(
        default=None, description="Hora de la audiencia en formato HH:MM"
    )
    producto_servicio: str = ""
    casa_vendedora: str = ""
    estado: str = CaseStatus.PENDIENTE.value
    prioridad: str = CasePriority.MEDIA.value
    categoria: str = "General"
    monto_reclamado: Optional[float] = None
    observaciones: str = ""
    enlace_carpeta: str = ""
    responsable_asignado: str = ""
    documentos_adjuntos: list[DocumentoAdjunto] = Field(default_factory=list)

    @field_validator(
        "fecha_notificacion",
        "fecha_audiencia",
        "hora_audiencia",
        "email_reclamante",
        "telefono_reclamante",
        mode="before",
    )
    @classmethod
    def empty_string_as_none(cls, v):
        """Los formularios envían "" para los campos opcionales vacíos."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("estado", "prioridad", mode="before")
    @classmethod
    def enum_as_value(cls, v):
        if isinstance(v, Enum):
            return v.value
        return v


class Case(CaseBase):
    """Caso registrado en el sistema."""

    id: str = Field(..., description="Identificador CASO-YYYYMMDD-NNN", min_length=1)
    ultima_actualizacion: datetime = Field(default_factory=datetime.now)
    carpetas: list[CarpetaInfo] = Field(default_factory=list)
    historial_seguimiento: list[SeguimientoEntry] = Field(default_factory=list)


class SeguimientoRequest(BaseModel):
    """Petición para añadir una entrada al historial."""

    accion: str = Field(..., min_length=1)
    descripcion: str = ""
    usuario: str = "Usuario"
