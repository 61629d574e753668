"""
Utilidades de casos: generación de IDs, carpetas por defecto,
entradas de seguimiento y validación de entrada.
"""
from __future__ import annotations

import random
import re
import uuid
from datetime import date, datetime
from typing import Any, Container, Mapping, Optional, Union

from reclamos.models.case import CarpetaInfo, CaseBase, SeguimientoEntry

DEFAULT_FOLDER_NAMES = [
    "01 - Denuncia y Documentación Inicial",
    "02 - Notificaciones",
    "03 - Correspondencia",
    "04 - Pruebas y Evidencias",
    "05 - Audiencias",
    "06 - Resoluciones y Dictámenes",
    "07 - Documentos Finales",
]

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def generate_case_id(day: Union[date, datetime], existing_ids: Container[str] = ()) -> str:
    """
    Genera un ID con formato CASO-YYYYMMDD-NNN.

    El sufijo es aleatorio; se reintenta hasta que el ID no esté en
    `existing_ids`.

    Raises:
        RuntimeError: si los 1000 sufijos del día ya están ocupados
    """
    prefix = f"CASO-{day.strftime('%Y%m%d')}"

    suffixes = list(range(1000))
    random.shuffle(suffixes)
    for suffix in suffixes:
        candidate = f"{prefix}-{suffix:03d}"
        if candidate not in existing_ids:
            return candidate

    raise RuntimeError(f"No quedan IDs libres para {prefix}")


def create_default_folders() -> list[CarpetaInfo]:
    """Las siete subcarpetas estándar de un caso, aún sin crear."""
    now = datetime.now()
    return [
        CarpetaInfo(nombre=nombre, created=False, last_modified=now)
        for nombre in DEFAULT_FOLDER_NAMES
    ]


def new_seguimiento_entry(
    accion: str, descripcion: str = "", usuario: str = "Sistema"
) -> SeguimientoEntry:
    """Crea una entrada de historial con id y timestamp propios."""
    return SeguimientoEntry(
        id=f"seg-{uuid.uuid4().hex[:12]}",
        fecha=datetime.now(),
        accion=accion,
        descripcion=descripcion,
        usuario=usuario,
    )


def _get(data: Union[CaseBase, Mapping[str, Any]], field: str) -> Optional[Any]:
    if isinstance(data, Mapping):
        return data.get(field)
    return getattr(data, field, None)


def validate_case_data(data: Union[CaseBase, Mapping[str, Any]]) -> list[str]:
    """
    Valida los datos de entrada de un caso.

    Returns:
        Lista de mensajes de error (vacía si es válido)
    """
    errors: list[str] = []

    if not str(_get(data, "nombre_reclamante") or "").strip():
        errors.append("El nombre del reclamante es requerido")

    if not str(_get(data, "provincia") or "").strip():
        errors.append("La provincia es requerida")

    if not str(_get(data, "localidad") or "").strip():
        errors.append("La localidad es requerida")

    if not _get(data, "fecha_ingreso"):
        errors.append("La fecha de ingreso es requerida")

    email = _get(data, "email_reclamante")
    if email and not _EMAIL_PATTERN.match(str(email)):
        errors.append("El email del reclamante no es válido")

    amount = _get(data, "monto_reclamado")
    if amount is not None:
        try:
            if float(amount) < 0:
                errors.append("El monto reclamado no puede ser negativo")
        except (TypeError, ValueError):
            errors.append("El monto reclamado debe ser numérico")

    hora = _get(data, "hora_audiencia")
    if hora and not re.match(r"^([01]\d|2[0-3]):[0-5]\d$", str(hora)):
        errors.append("La hora de audiencia debe tener formato HH:MM")

    return errors
