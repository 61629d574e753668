"""
Paquete PDF del sistema de reclamos.

Generador del reporte de gestión (reportlab) con estilos y canvas
numerado separados en módulos pequeños.
"""

from .canvas import NumberedCanvas
from .report_pdf import generate_report_pdf, report_pdf_filename
from .styles import (
    COLOR_DANGER,
    COLOR_GRAY,
    COLOR_PRIMARY,
    COLOR_SECONDARY,
    COLOR_SUCCESS,
    COLOR_TABLE_ALT,
    COLOR_WARNING,
    create_table_style,
)

__all__ = [
    "NumberedCanvas",
    "COLOR_PRIMARY",
    "COLOR_SECONDARY",
    "COLOR_DANGER",
    "COLOR_WARNING",
    "COLOR_SUCCESS",
    "COLOR_GRAY",
    "COLOR_TABLE_ALT",
    "create_table_style",
    "generate_report_pdf",
    "report_pdf_filename",
]
