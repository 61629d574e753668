"""
Exportación de casos a CSV.

Cabeceras en castellano, una fila por caso. La variante detallada añade
el número de documentos adjuntos y de entradas de seguimiento.
"""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import Any, Iterable, Optional

from reclamos.models.case import Case

CSV_HEADERS = [
    "ID del caso",
    "Fecha de ingreso",
    "Nombre del reclamante",
    "Email",
    "Teléfono",
    "Provincia",
    "Localidad",
    "Organismo interviniente",
    "Nº de expediente",
    "Fecha de notificación",
    "Fecha de audiencia",
    "Hora audiencia",
    "Producto/servicio reclamado",
    "Casa vendedora",
    "Estado del caso",
    "Prioridad",
    "Categoría",
    "Monto reclamado",
    "Observaciones/seguimiento",
    "Enlace a carpeta en Drive",
    "Responsable asignado",
    "Última actualización",
]

DETAILED_HEADERS = CSV_HEADERS + ["Documentos adjuntos", "Historial de seguimiento"]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _row(case: Case) -> list[str]:
    return [
        _cell(case.id),
        _cell(case.fecha_ingreso),
        _cell(case.nombre_reclamante),
        _cell(case.email_reclamante),
        _cell(case.telefono_reclamante),
        _cell(case.provincia),
        _cell(case.localidad),
        _cell(case.organismo_interviniente),
        _cell(case.numero_expediente),
        _cell(case.fecha_notificacion),
        _cell(case.fecha_audiencia),
        _cell(case.hora_audiencia),
        _cell(case.producto_servicio),
        _cell(case.casa_vendedora),
        _cell(case.estado),
        _cell(case.prioridad),
        _cell(case.categoria),
        # 0 se exporta vacío
        _cell(case.monto_reclamado or None),
        _cell(case.observaciones),
        _cell(case.enlace_carpeta),
        _cell(case.responsable_asignado),
        _cell(case.ultima_actualizacion),
    ]


def export_cases_csv(cases: Iterable[Case], detailed: bool = False) -> str:
    """
    Serializa la colección a CSV (separador coma, comillas cuando haga falta).

    Args:
        cases: Casos a exportar, en el orden recibido
        detailed: Añadir conteos de adjuntos y de historial

    Returns:
        Contenido CSV como texto
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(DETAILED_HEADERS if detailed else CSV_HEADERS)

    for case in cases:
        row = _row(case)
        if detailed:
            row.append(str(len(case.documentos_adjuntos)))
            row.append(str(len(case.historial_seguimiento)))
        writer.writerow(row)

    return buffer.getvalue()


def export_filename(detailed: bool = False, day: Optional[date] = None) -> str:
    """Nombre de descarga: casos_export.csv o casos-detallado-YYYY-MM-DD.csv."""
    if not detailed:
        return "casos_export.csv"

    day = day or date.today()
    return f"casos-detallado-{day.isoformat()}.csv"
