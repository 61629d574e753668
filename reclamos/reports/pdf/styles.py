from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.platypus import TableStyle

# Colores del dashboard
COLOR_PRIMARY = HexColor("#1e3a8a")  # Azul oscuro
COLOR_SECONDARY = HexColor("#3b82f6")  # Azul (en proceso)
COLOR_DANGER = HexColor("#dc2626")  # Rojo (vencidos / urgente)
COLOR_WARNING = HexColor("#f59e0b")  # Naranja (pendiente)
COLOR_SUCCESS = HexColor("#10b981")  # Verde (resuelto)
COLOR_GRAY = HexColor("#6b7280")  # Gris (cerrado / pie de página)
COLOR_TABLE_ALT = HexColor("#f3f4f6")  # Filas alternadas


def create_table_style(numeric_columns: int = 1) -> TableStyle:
    """
    Estilo de tabla con cabecera coloreada y filas alternadas.

    Las últimas `numeric_columns` columnas se alinean a la derecha.
    """
    commands = [
        # Cabecera
        ("BACKGROUND", (0, 0), (-1, 0), COLOR_PRIMARY),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("TOPPADDING", (0, 0), (-1, 0), 8),
        # Cuerpo
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, COLOR_TABLE_ALT]),
        ("GRID", (0, 0), (-1, -1), 0.5, COLOR_GRAY),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("RIGHTPADDING", (0, 0), (-1, -1), 6),
        ("FONTSIZE", (0, 1), (-1, -1), 9),
    ]
    if numeric_columns > 0:
        commands.append(("ALIGN", (-numeric_columns, 0), (-1, -1), "RIGHT"))
    return TableStyle(commands)
