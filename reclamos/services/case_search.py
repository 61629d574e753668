"""
Búsqueda avanzada, ordenación y detección de duplicados sobre la colección.

Todos los filtros son conjuntivos; un filtro vacío no restringe.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from reclamos.models.case import Case

SEARCHABLE_TEXT_FIELDS = (
    "nombre_reclamante",
    "id",
    "casa_vendedora",
    "producto_servicio",
    "observaciones",
)

SORTABLE_FIELDS = frozenset(
    {
        "id",
        "fecha_ingreso",
        "fecha_audiencia",
        "nombre_reclamante",
        "provincia",
        "estado",
        "prioridad",
        "categoria",
        "monto_reclamado",
        "responsable_asignado",
        "ultima_actualizacion",
    }
)


class SearchFilters(BaseModel):
    """Criterios de búsqueda avanzada."""

    search_term: str = ""
    estado: list[str] = Field(default_factory=list)
    prioridad: list[str] = Field(default_factory=list)
    provincia: list[str] = Field(default_factory=list)
    responsable: list[str] = Field(default_factory=list)
    categoria: list[str] = Field(default_factory=list)
    fecha_ingreso_desde: Optional[date] = None
    fecha_ingreso_hasta: Optional[date] = None
    fecha_audiencia_desde: Optional[date] = None
    fecha_audiencia_hasta: Optional[date] = None
    monto_minimo: Optional[float] = None
    monto_maximo: Optional[float] = None


def _matches_text(case: Case, term: str) -> bool:
    needle = term.lower()
    return any(
        needle in str(getattr(case, field, "") or "").lower() for field in SEARCHABLE_TEXT_FIELDS
    )


def _in_range(value: Optional[Any], low: Optional[Any], high: Optional[Any]) -> bool:
    """Con algún límite activo, los casos sin valor quedan fuera."""
    if low is None and high is None:
        return True
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def filter_cases(cases: Iterable[Case], filters: SearchFilters) -> list[Case]:
    """Aplica los filtros de búsqueda avanzada."""
    result = []
    for case in cases:
        if filters.search_term and not _matches_text(case, filters.search_term):
            continue
        if filters.estado and case.estado not in filters.estado:
            continue
        if filters.prioridad and case.prioridad not in filters.prioridad:
            continue
        if filters.provincia and case.provincia not in filters.provincia:
            continue
        if filters.responsable and case.responsable_asignado not in filters.responsable:
            continue
        if filters.categoria and case.categoria not in filters.categoria:
            continue
        if not _in_range(case.fecha_ingreso, filters.fecha_ingreso_desde, filters.fecha_ingreso_hasta):
            continue
        if not _in_range(
            case.fecha_audiencia, filters.fecha_audiencia_desde, filters.fecha_audiencia_hasta
        ):
            continue
        if not _in_range(case.monto_reclamado, filters.monto_minimo, filters.monto_maximo):
            continue
        result.append(case)
    return result


def sort_cases(
    cases: Iterable[Case], field: str = "fecha_ingreso", descending: bool = True
) -> list[Case]:
    """
    Ordena por un campo del caso. Los valores vacíos van siempre al final.

    Raises:
        ValueError: si el campo no es ordenable
    """
    if field not in SORTABLE_FIELDS:
        raise ValueError(f"Campo no ordenable: {field}")

    cases = list(cases)
    present = [case for case in cases if getattr(case, field, None) not in (None, "")]
    missing = [case for case in cases if getattr(case, field, None) in (None, "")]
    present.sort(key=lambda case: getattr(case, field), reverse=descending)
    return present + missing


def find_duplicate_cases(cases: Sequence[Case]) -> list[Case]:
    """
    Casos cuyo número de expediente (no vacío) repite el de un caso anterior.

    El primer caso de cada expediente se conserva; se devuelven los siguientes.
    """
    seen: set[str] = set()
    duplicates = []
    for case in cases:
        expediente = (case.numero_expediente or "").strip()
        if not expediente:
            continue
        if expediente in seen:
            duplicates.append(case)
        else:
            seen.add(expediente)
    return duplicates
