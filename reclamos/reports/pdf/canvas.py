from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from .styles import COLOR_GRAY

FOOTER_TEXT = "Sistema de Gestión de Casos"


class NumberedCanvas(canvas.Canvas):
    """
    Canvas con doble pasada para el pie "Página X de Y".

    ReportLab no conoce el total de páginas hasta el final:
    1. showPage guarda el estado de cada página sin pintarla
    2. save pinta el pie de todas con el total ya conocido
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        num_pages = len(self._saved_page_states)

        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_footer(num_pages)
            super().showPage()

        super().save()

    def draw_footer(self, page_count: int) -> None:
        self.saveState()
        self.setFont("Helvetica", 9)
        self.setFillColor(COLOR_GRAY)

        self.drawString(2 * cm, 1.5 * cm, FOOTER_TEXT)
        self.drawRightString(A4[0] - 2 * cm, 1.5 * cm, f"Página {self._pageNumber} de {page_count}")

        self.restoreState()
