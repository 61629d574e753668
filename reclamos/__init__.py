"""Sistema de gestión de reclamos de consumidores."""

__version__ = "1.0.0"
