from __future__ import annotations

from datetime import datetime
from io import BytesIO
from typing import Mapping, Optional

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table

from reclamos.models.report import Report
from reclamos.services.report_aggregator import PRIORITY_LABELS, STATUS_LABELS

from .canvas import NumberedCanvas
from .styles import COLOR_GRAY, COLOR_PRIMARY, create_table_style

NO_DATA_TEXT = "Sin datos"


def report_pdf_filename(generated_at: Optional[datetime] = None) -> str:
    generated_at = generated_at or datetime.now()
    return f"reporte-casos-{generated_at.strftime('%Y-%m-%d')}.pdf"


def _distribution_rows(
    counts: Mapping[str, int], labels: Optional[Mapping[str, str]] = None
) -> list[list[str]]:
    total = sum(counts.values())
    rows = []
    for key, value in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        name = labels.get(key, key) if labels else key
        share = f"{value / total * 100:.1f}%" if total else "0.0%"
        rows.append([name, str(value), share])
    return rows


def _table(header: list[str], rows: list[list[str]], col_widths: list[float], numeric: int) -> Table:
    table = Table([header, *rows], colWidths=col_widths, repeatRows=1)
    table.setStyle(create_table_style(numeric_columns=numeric))
    return table


def generate_report_pdf(report: Report, generated_at: Optional[datetime] = None) -> bytes:
    """
    Genera el PDF del reporte de gestión de casos.

    Secciones: métricas principales, distribución por estado, prioridad y
    categoría, tendencias mensuales y carga de trabajo por responsable.

    Args:
        report: Reporte ya calculado (no se recalcula nada aquí)
        generated_at: Fecha de generación impresa en la cabecera

    Returns:
        Bytes del PDF
    """
    generated_at = generated_at or datetime.now()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2.5 * cm,
        title="Reporte de Gestión de Casos",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Heading1"],
        fontSize=20,
        textColor=COLOR_PRIMARY,
        spaceAfter=12,
        alignment=TA_CENTER,
    )
    heading_style = ParagraphStyle(
        "ReportHeading",
        parent=styles["Heading2"],
        fontSize=14,
        textColor=COLOR_PRIMARY,
        spaceBefore=14,
        spaceAfter=8,
    )
    small_gray = ParagraphStyle(
        "ReportSmall",
        parent=styles["Normal"],
        fontSize=9,
        textColor=COLOR_GRAY,
        alignment=TA_CENTER,
    )

    width = A4[0] - 4 * cm
    story = []

    story.append(Paragraph("Reporte de Gestión de Casos", title_style))
    story.append(
        Paragraph(f"Generado el: {generated_at.strftime('%d/%m/%Y %H:%M')}", small_gray)
    )
    story.append(Spacer(1, 0.6 * cm))

    # =========================
    # MÉTRICAS PRINCIPALES
    # =========================
    story.append(Paragraph("Métricas Principales", heading_style))
    metrics = [
        ["Total de casos", str(report.total_cases)],
        ["Casos vencidos", str(report.overdue_cases)],
        ["Audiencias próximas (30 días)", str(report.upcoming_audiences)],
        [
            "Tiempo promedio de resolución",
            f"{report.average_resolution_time:.1f} días",
        ],
        [
            "Tasa de resolución",
            f"{report.performance_metrics.resolution_rate:.1f}%",
        ],
        ["Alertas activas", str(report.active_alerts)],
    ]
    story.append(_table(["Métrica", "Valor"], metrics, [width * 0.7, width * 0.3], numeric=1))

    # =========================
    # DISTRIBUCIONES
    # =========================
    distributions = [
        ("Distribución por Estado", "Estado", report.by_state, STATUS_LABELS),
        ("Distribución por Prioridad", "Prioridad", report.by_priority, PRIORITY_LABELS),
        ("Distribución por Categoría", "Categoría", report.by_category, None),
    ]
    for title, column, counts, labels in distributions:
        story.append(Paragraph(title, heading_style))
        if not counts:
            story.append(Paragraph(NO_DATA_TEXT, styles["Normal"]))
            continue
        story.append(
            _table(
                [column, "Casos", "%"],
                _distribution_rows(counts, labels),
                [width * 0.6, width * 0.2, width * 0.2],
                numeric=2,
            )
        )

    # =========================
    # TENDENCIAS MENSUALES
    # =========================
    story.append(Paragraph("Tendencias Mensuales", heading_style))
    if report.monthly_trends:
        rows = [
            [trend.month, str(trend.created), str(trend.resolved), str(trend.pending)]
            for trend in report.monthly_trends
        ]
        story.append(
            _table(
                ["Mes", "Creados", "Resueltos", "Pendientes"],
                rows,
                [width * 0.4, width * 0.2, width * 0.2, width * 0.2],
                numeric=3,
            )
        )
    else:
        story.append(Paragraph(NO_DATA_TEXT, styles["Normal"]))

    # =========================
    # CARGA DE TRABAJO
    # =========================
    story.append(Paragraph("Carga de Trabajo por Responsable", heading_style))
    workload = report.performance_metrics.workload
    if workload:
        rows = [
            [name, str(value)]
            for name, value in sorted(workload.items(), key=lambda item: (-item[1], item[0]))
        ]
        story.append(_table(["Responsable", "Casos"], rows, [width * 0.7, width * 0.3], numeric=1))
    else:
        story.append(Paragraph(NO_DATA_TEXT, styles["Normal"]))

    doc.build(story, canvasmaker=NumberedCanvas)
    return buffer.getvalue()
