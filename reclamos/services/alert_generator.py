"""
Generador de alertas de audiencia.

Dado UN caso, produce los recordatorios implicados por su fecha de
audiencia y la lista de desfases configurada (días antes de la audiencia).

REGLAS:
- Sin fecha de audiencia (o fecha ilegible) → lista vacía, sin error.
- Para cada desfase d: fecha_alerta = audiencia - d días. Solo se emite
  si fecha_alerta >= now (el recordatorio aún no ha pasado).
- id = "<case_id>-<d>d" → regenerar es idempotente.
- Prioridad: d == 1 → urgent, d == 3 → high, resto → medium.
- Tipo: d == 1 → audiencia_1_dia, d == 3 → audiencia_3_dias,
  cualquier otro desfase → audiencia_10_dias.

Función pura de (caso, desfases, now): no lee configuración global ni
persiste nada.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Optional, Sequence

from reclamos.models.alert import Alert, AlertPriority, AlertType
from reclamos.models.case import Case

DEFAULT_REMINDER_OFFSETS: tuple[int, ...] = (10, 3, 1)


# =========================================================
# NORMALIZACIÓN DE ENTRADAS
# =========================================================


def normalize_reminder_offsets(offsets: Any) -> tuple[int, ...]:
    """
    Normaliza la configuración de recordatorios.

    Acepta cualquier iterable de enteros positivos (también strings
    numéricos). Conserva el orden y elimina repetidos.
    Vacío, None o cualquier valor no numérico / no positivo →
    DEFAULT_REMINDER_OFFSETS.
    """
    if offsets is None or isinstance(offsets, (str, bytes)):
        return DEFAULT_REMINDER_OFFSETS

    try:
        items = list(offsets)
    except TypeError:
        return DEFAULT_REMINDER_OFFSETS

    normalized: list[int] = []
    for item in items:
        if isinstance(item, bool):
            return DEFAULT_REMINDER_OFFSETS
        if isinstance(item, float) and not item.is_integer():
            return DEFAULT_REMINDER_OFFSETS
        try:
            value = int(item)
        except (TypeError, ValueError):
            return DEFAULT_REMINDER_OFFSETS
        if value <= 0:
            return DEFAULT_REMINDER_OFFSETS
        if value not in normalized:
            normalized.append(value)

    return tuple(normalized) or DEFAULT_REMINDER_OFFSETS


def coerce_date(value: Any) -> Optional[date]:
    """
    Convierte a `date` tolerando registros mal formados.

    Acepta date, datetime o string ISO (YYYY-MM-DD[...]).
    Cualquier otra cosa → None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def as_naive(moment: Optional[datetime]) -> datetime:
    """`now` por defecto y sin zona horaria (hora local), para comparar con fechas del caso."""
    if moment is None:
        return datetime.now()
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


# =========================================================
# REGLAS DE CLASIFICACIÓN
# =========================================================


def _priority_for_offset(days: int) -> AlertPriority:
    if days == 1:
        return AlertPriority.URGENT
    if days == 3:
        return AlertPriority.HIGH
    return AlertPriority.MEDIUM


def _type_for_offset(days: int) -> AlertType:
    # Cualquier desfase distinto de 1 y 3 cae en el tipo "10 días"
    if days == 1:
        return AlertType.AUDIENCIA_1_DIA
    if days == 3:
        return AlertType.AUDIENCIA_3_DIAS
    return AlertType.AUDIENCIA_10_DIAS


def _build_message(hearing_date: date, days: int) -> str:
    remaining = "MAÑANA" if days == 1 else f"{days} días restantes"
    return f"Audiencia programada para {hearing_date.strftime('%d/%m/%Y')} - {remaining}"


# =========================================================
# API PÚBLICA
# =========================================================


def generate_alerts_for_case(
    case: Case,
    reminder_offsets: Optional[Iterable[int]] = None,
    now: Optional[datetime] = None,
) -> list[Alert]:
    """
    Genera las alertas de audiencia de un caso.

    Args:
        case: Caso a evaluar (no se modifica)
        reminder_offsets: Días antes de la audiencia; por defecto (10, 3, 1)
        now: Momento de referencia; por defecto, ahora

    Returns:
        Lista de alertas (0..len(offsets)), en el orden de los desfases
    """
    case_id = getattr(case, "id", None)
    hearing_date = coerce_date(getattr(case, "fecha_audiencia", None))
    if not case_id or hearing_date is None:
        return []

    reference = as_naive(now)
    hearing_at = datetime.combine(hearing_date, time.min)

    alerts: list[Alert] = []
    for days in normalize_reminder_offsets(reminder_offsets):
        try:
            alert_date = hearing_at - timedelta(days=days)
        except OverflowError:
            continue

        if alert_date < reference:
            continue

        alerts.append(
            Alert(
                id=f"{case_id}-{days}d",
                case_id=case_id,
                type=_type_for_offset(days),
                message=_build_message(hearing_date, days),
                date=alert_date,
                read=False,
                priority=_priority_for_offset(days),
            )
        )

    return alerts


def generate_alerts_for_cases(
    cases: Iterable[Case],
    reminder_offsets: Optional[Iterable[int]] = None,
    now: Optional[datetime] = None,
) -> list[Alert]:
    """Ejecuta el generador sobre toda la colección con un único `now`."""
    reference = as_naive(now)
    offsets = normalize_reminder_offsets(reminder_offsets)

    alerts: list[Alert] = []
    for case in cases:
        alerts.extend(generate_alerts_for_case(case, offsets, reference))
    return alerts


def merge_alerts(existing: Sequence[Alert], new: Iterable[Alert]) -> list[Alert]:
    """
    Fusiona alertas nuevas en la colección existente deduplicando por id.

    Las alertas existentes se conservan tal cual (incluido su flag `read`);
    solo se añaden las nuevas cuyo id no está presente.
    """
    merged = list(existing)
    seen = {alert.id for alert in merged}

    for alert in new:
        if alert.id in seen:
            continue
        seen.add(alert.id)
        merged.append(alert)

    return merged
