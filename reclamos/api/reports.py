"""
ENDPOINTS DE REPORTES.

El reporte se recalcula en cada petición sobre la colección completa.
"""
from __future__ import annotations

from datetime import datetime
from io import BytesIO
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from reclamos.core.database import get_db
from reclamos.core.logger import get_logger
from reclamos.models.report import Report
from reclamos.reports.pdf import generate_report_pdf, report_pdf_filename
from reclamos.services import case_store
from reclamos.services.report_aggregator import build_chart_data, generate_report

router = APIRouter(prefix="/reports", tags=["reports"])

logger = get_logger()


def _current_report(db: Session, now: datetime) -> Report:
    return generate_report(case_store.list_cases(db), now=now, alerts=case_store.list_alerts(db))


@router.get("", response_model=Report)
def get_report(db: Session = Depends(get_db)):
    """Reporte agregado de todos los casos."""
    return _current_report(db, datetime.now())


@router.get("/charts")
def get_chart_data(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Series para los gráficos del dashboard."""
    return build_chart_data(_current_report(db, datetime.now()))


@router.get("/pdf")
def download_report_pdf(db: Session = Depends(get_db)) -> StreamingResponse:
    """Descarga el reporte en PDF."""
    now = datetime.now()
    pdf_bytes = generate_report_pdf(_current_report(db, now), generated_at=now)
    filename = report_pdf_filename(now)

    logger.info("Reporte PDF generado", action="report_pdf", size_bytes=len(pdf_bytes))

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
