"""
REPORT - Vista derivada de la colección de casos.

No se persiste: se recalcula bajo demanda. Los mapas de conteo usan
como claves exactamente los valores presentes en los datos (sin
rellenar con ceros valores no observados).
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class MonthlyTrend(BaseModel):
    """Casos creados en un mes y su reparto resueltos / pendientes."""

    month: str = Field(..., description="Mes en formato YYYY-MM")
    created: int = 0
    resolved: int = 0
    pending: int = 0


class PerformanceMetrics(BaseModel):
    resolution_rate: float = Field(0.0, description="Porcentaje de casos resueltos (0-100)")
    workload: dict[str, int] = Field(
        default_factory=dict, description="Casos por responsable asignado"
    )


class Report(BaseModel):
    """Resumen agregado de la colección de casos."""

    total_cases: int = 0
    by_state: dict[str, int] = Field(default_factory=dict)
    by_priority: dict[str, int] = Field(default_factory=dict)
    by_category: dict[str, int] = Field(default_factory=dict)
    by_month: dict[str, int] = Field(default_factory=dict)
    overdue_cases: int = 0
    upcoming_audiences: int = 0
    average_resolution_time: float = Field(0.0, description="Días medios hasta resolución")
    monthly_trends: list[MonthlyTrend] = Field(default_factory=list)
    performance_metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    active_alerts: int = Field(0, description="Alertas sin leer (si se aportan alertas)")
