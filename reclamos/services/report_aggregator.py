"""
Agregador de reportes.

Produce una instantánea de solo lectura sobre la colección completa de
casos: conteos por dimensión, vencidos, audiencias próximas, tiempo medio
de resolución, tendencias mensuales y métricas de rendimiento.

Función pura de (casos, now[, alertas]). Los registros con fechas mal
formadas se ignoran en los campos que dependen de esas fechas; nunca se
lanza excepción.
"""
from __future__ import annotations

from collections import Counter
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from reclamos.models.alert import Alert
from reclamos.models.case import Case, CaseStatus, FINISHED_STATUSES
from reclamos.models.report import MonthlyTrend, PerformanceMetrics, Report
from reclamos.services.alert_generator import as_naive, coerce_date

UNASSIGNED_LABEL = "Sin asignar"
UPCOMING_WINDOW_DAYS = 30


def _month_key(case: Case) -> Optional[str]:
    intake = coerce_date(getattr(case, "fecha_ingreso", None))
    if intake is None:
        return None
    return intake.strftime("%Y-%m")


def _hearing_at(case: Case) -> Optional[datetime]:
    hearing = coerce_date(getattr(case, "fecha_audiencia", None))
    if hearing is None:
        return None
    return datetime.combine(hearing, time.min)


def _label(value: Any) -> Optional[str]:
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return None
    return str(value)


def _count_by(cases: Sequence[Case], field: str) -> dict[str, int]:
    """Conteo por valor observado; los registros sin valor no aportan clave."""
    counts: Counter[str] = Counter()
    for case in cases:
        label = _label(getattr(case, field, None))
        if label is not None:
            counts[label] += 1
    return dict(counts)


def _is_resolved(case: Case) -> bool:
    return _label(getattr(case, "estado", None)) == CaseStatus.RESUELTO.value


# =========================================================
# CÁLCULOS PARCIALES
# =========================================================


def count_overdue_cases(cases: Sequence[Case], now: datetime) -> int:
    """Audiencia ya pasada (estrictamente) y caso ni resuelto ni cerrado."""
    total = 0
    for case in cases:
        hearing = _hearing_at(case)
        if hearing is None:
            continue
        if hearing < now and _label(getattr(case, "estado", None)) not in FINISHED_STATUSES:
            total += 1
    return total


def count_upcoming_audiences(
    cases: Sequence[Case], now: datetime, window_days: int = UPCOMING_WINDOW_DAYS
) -> int:
    """
    Audiencias dentro de [now, now + window_days] (ambos extremos incluidos).

    La audiencia se fija a las 00:00 de su día: una audiencia de hoy con
    `now` posterior a medianoche cuenta como vencida y no como próxima.
    """
    limit = now + timedelta(days=window_days)
    total = 0
    for case in cases:
        hearing = _hearing_at(case)
        if hearing is not None and now <= hearing <= limit:
            total += 1
    return total


def average_resolution_days(cases: Sequence[Case]) -> float:
    """
    Media de días entre ingreso y última actualización de los casos resueltos.

    Los resueltos con fechas ilegibles no entran en la media.
    Sin casos resueltos → 0.
    """
    durations: list[int] = []
    for case in cases:
        if not _is_resolved(case):
            continue
        start = coerce_date(getattr(case, "fecha_ingreso", None))
        end = coerce_date(getattr(case, "ultima_actualizacion", None))
        if start is None or end is None:
            continue
        durations.append((end - start).days)

    if not durations:
        return 0.0
    return sum(durations) / len(durations)


def calculate_monthly_trends(cases: Sequence[Case]) -> list[MonthlyTrend]:
    """Creados / resueltos / pendientes por mes de ingreso, orden ascendente."""
    trends: dict[str, MonthlyTrend] = {}

    for case in cases:
        month = _month_key(case)
        if month is None:
            continue

        trend = trends.setdefault(month, MonthlyTrend(month=month))
        trend.created += 1
        if _is_resolved(case):
            trend.resolved += 1
        else:
            trend.pending += 1

    return [trends[month] for month in sorted(trends)]


def calculate_performance_metrics(cases: Sequence[Case]) -> PerformanceMetrics:
    total = len(cases)
    resolved = sum(1 for case in cases if _is_resolved(case))

    workload: Counter[str] = Counter()
    for case in cases:
        workload[_label(getattr(case, "responsable_asignado", None)) or UNASSIGNED_LABEL] += 1

    return PerformanceMetrics(
        resolution_rate=(resolved / total * 100) if total else 0.0,
        workload=dict(workload),
    )


# =========================================================
# API PÚBLICA
# =========================================================


def generate_report(
    cases: Iterable[Case],
    now: Optional[datetime] = None,
    alerts: Optional[Iterable[Alert]] = None,
) -> Report:
    """
    Genera el reporte agregado de la colección.

    Args:
        cases: Colección de casos (no se modifica)
        now: Momento de referencia para vencidos / próximas audiencias
        alerts: Alertas opcionales, solo para contar las no leídas

    Returns:
        Report
    """
    cases = list(cases)
    reference = as_naive(now)

    by_month: Counter[str] = Counter()
    for case in cases:
        month = _month_key(case)
        if month is not None:
            by_month[month] += 1

    active_alerts = 0
    if alerts is not None:
        active_alerts = sum(1 for alert in alerts if not alert.read)

    return Report(
        total_cases=len(cases),
        by_state=_count_by(cases, "estado"),
        by_priority=_count_by(cases, "prioridad"),
        by_category=_count_by(cases, "categoria"),
        by_month=dict(by_month),
        overdue_cases=count_overdue_cases(cases, reference),
        upcoming_audiences=count_upcoming_audiences(cases, reference),
        average_resolution_time=average_resolution_days(cases),
        monthly_trends=calculate_monthly_trends(cases),
        performance_metrics=calculate_performance_metrics(cases),
        active_alerts=active_alerts,
    )


# =========================================================
# DATOS PARA GRÁFICOS (DASHBOARD)
# =========================================================

STATUS_LABELS = {
    "pendiente": "Pendiente",
    "en_proceso": "En Proceso",
    "audiencia_programada": "Audiencia Programada",
    "resuelto": "Resuelto",
    "cerrado": "Cerrado",
}

STATUS_COLORS = {
    "pendiente": "#F59E0B",
    "en_proceso": "#3B82F6",
    "audiencia_programada": "#8B5CF6",
    "resuelto": "#10B981",
    "cerrado": "#6B7280",
}

PRIORITY_LABELS = {
    "baja": "Baja",
    "media": "Media",
    "alta": "Alta",
    "urgente": "Urgente",
}

PRIORITY_COLORS = {
    "baja": "#10B981",
    "media": "#F59E0B",
    "alta": "#EF4444",
    "urgente": "#DC2626",
}

DEFAULT_COLOR = "#6B7280"

MONTH_ABBREVIATIONS = [
    "ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic",
]


def _month_label(month: str) -> str:
    """Convierte "2024-06" en "jun 2024"."""
    try:
        year, number = month.split("-")
        return f"{MONTH_ABBREVIATIONS[int(number) - 1]} {year}"
    except (ValueError, IndexError):
        return month


def build_chart_data(report: Report) -> dict[str, list[dict[str, Any]]]:
    """Series listas para pintar en el dashboard a partir de un reporte."""
    return {
        "status_chart": [
            {
                "name": STATUS_LABELS.get(str(name), str(name)),
                "value": value,
                "color": STATUS_COLORS.get(str(name), DEFAULT_COLOR),
            }
            for name, value in report.by_state.items()
        ],
        "priority_chart": [
            {
                "name": PRIORITY_LABELS.get(str(name), str(name)),
                "value": value,
                "color": PRIORITY_COLORS.get(str(name), DEFAULT_COLOR),
            }
            for name, value in report.by_priority.items()
        ],
        "monthly_trends": [
            {
                "month": _month_label(trend.month),
                "creados": trend.created,
                "resueltos": trend.resolved,
                "pendientes": trend.pending,
            }
            for trend in report.monthly_trends
        ],
        "workload_chart": [
            {"responsable": name, "casos": value}
            for name, value in report.performance_metrics.workload.items()
        ],
    }
