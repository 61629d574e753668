"""
Eventos de calendario derivados de los casos.

- audiencia: fecha + hora de audiencia, duración 1 hora.
- vencimiento: casos sin audiencia, con más de 30 días desde el ingreso
  y no resueltos/cerrados; fechado a ingreso + 30 días.
- seguimiento: casos en proceso, fechado a ingreso + 15 días, solo si
  aún está en el futuro.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Iterable, Optional

from reclamos.models.calendar_event import CalendarEvent, CalendarEventType
from reclamos.models.case import Case, CaseStatus, FINISHED_STATUSES
from reclamos.services.alert_generator import as_naive, coerce_date

HEARING_DURATION = timedelta(hours=1)
OVERDUE_AFTER_DAYS = 30
FOLLOW_UP_AFTER_DAYS = 15


def _parse_hour(value: Optional[str]) -> time:
    """"HH:MM" → time; vacío o ilegible → 00:00."""
    if not value:
        return time.min
    try:
        hours, minutes = value.split(":")[:2]
        return time(int(hours), int(minutes))
    except (ValueError, TypeError):
        return time.min


def build_calendar_events(
    cases: Iterable[Case], now: Optional[datetime] = None
) -> list[CalendarEvent]:
    """Eventos de calendario de toda la colección, ordenados por inicio."""
    reference = as_naive(now)
    events: list[CalendarEvent] = []

    for case in cases:
        intake = coerce_date(case.fecha_ingreso)
        hearing = coerce_date(case.fecha_audiencia)

        if hearing is not None:
            start = datetime.combine(hearing, _parse_hour(case.hora_audiencia))
            events.append(
                CalendarEvent(
                    id=f"audiencia-{case.id}",
                    title=f"Audiencia: {case.nombre_reclamante}",
                    start=start,
                    end=start + HEARING_DURATION,
                    case_id=case.id,
                    type=CalendarEventType.AUDIENCIA,
                    description=(
                        f"Caso: {case.id}\n"
                        f"Reclamante: {case.nombre_reclamante}\n"
                        f"Producto: {case.producto_servicio}"
                    ),
                    location=case.organismo_interviniente or None,
                )
            )

        if intake is None:
            continue

        intake_at = datetime.combine(intake, time.min)

        if (
            hearing is None
            and (reference - intake_at).days > OVERDUE_AFTER_DAYS
            and case.estado not in FINISHED_STATUSES
        ):
            due = intake_at + timedelta(days=OVERDUE_AFTER_DAYS)
            events.append(
                CalendarEvent(
                    id=f"vencimiento-{case.id}",
                    title=f"Vencimiento: {case.nombre_reclamante}",
                    start=due,
                    end=due,
                    case_id=case.id,
                    type=CalendarEventType.VENCIMIENTO,
                    description=f"Caso vencido: {case.id}\nReclamante: {case.nombre_reclamante}",
                )
            )

        if case.estado == CaseStatus.EN_PROCESO.value:
            follow_up = intake_at + timedelta(days=FOLLOW_UP_AFTER_DAYS)
            if follow_up > reference:
                events.append(
                    CalendarEvent(
                        id=f"seguimiento-{case.id}",
                        title=f"Seguimiento: {case.nombre_reclamante}",
                        start=follow_up,
                        end=follow_up,
                        case_id=case.id,
                        type=CalendarEventType.SEGUIMIENTO,
                        description=(
                            f"Seguimiento programado: {case.id}\n"
                            f"Reclamante: {case.nombre_reclamante}"
                        ),
                    )
                )

    events.sort(key=lambda event: event.start)
    return events


def upcoming_hearings(
    cases: Iterable[Case], now: Optional[datetime] = None, days: int = 7
) -> list[Case]:
    """Casos con audiencia entre hoy y hoy + `days` (incluidos), por fecha."""
    today = as_naive(now).date()
    limit = today + timedelta(days=days)

    upcoming = []
    for case in cases:
        hearing = coerce_date(case.fecha_audiencia)
        if hearing is not None and today <= hearing <= limit:
            upcoming.append((hearing, case))

    upcoming.sort(key=lambda item: item[0])
    return [case for _, case in upcoming]
