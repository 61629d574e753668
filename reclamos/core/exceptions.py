"""
Sistema de excepciones estandarizado del sistema de reclamos.

Todas las excepciones del sistema heredan de ReclamosException y siguen
un formato consistente con:
- Código de error único
- Mensaje descriptivo
- Detalles adicionales (dict)
- Severity level

Los componentes de cálculo (alertas y reportes) NO lanzan excepciones
ante datos mal formados: las ignoran. Estas excepciones pertenecen a la
capa de persistencia, validación de entrada e integraciones.
"""
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(str, Enum):
    """Niveles de severidad para errores."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ReclamosException(Exception):
    """
    Excepción base del sistema.

    Todas las excepciones custom deben heredar de esta clase.
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        original_error: Optional[Exception] = None
    ):
        """
        Args:
            code: Código único del error (ej: "CASE_NOT_FOUND")
            message: Mensaje descriptivo para humanos
            details: Detalles adicionales (dict)
            severity: Nivel de severidad
            original_error: Excepción original si es un wrap
        """
        self.code = code
        self.message = message
        self.details = details or {}
        self.severity = severity
        self.original_error = original_error

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte la excepción a diccionario (para API/logging)."""
        result = {
            "error_code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details
        }

        if self.original_error:
            result["original_error"] = {
                "type": type(self.original_error).__name__,
                "message": str(self.original_error)
            }

        return result

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base


# =========================================================
# EXCEPCIONES DE BASE DE DATOS
# =========================================================

class DatabaseException(ReclamosException):
    """Error relacionado con base de datos."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(
            code="DATABASE_ERROR",
            message=message,
            **kwargs
        )


class CaseNotFoundException(DatabaseException):
    """Caso no encontrado en base de datos."""

    def __init__(self, case_id: str, **kwargs):
        super().__init__(
            message=f"Caso no encontrado: {case_id}",
            details={"case_id": case_id},
            severity=ErrorSeverity.LOW,
            **kwargs
        )
        self.code = "CASE_NOT_FOUND"


class DuplicateCaseException(DatabaseException):
    """Intento de crear caso con un ID ya existente."""

    def __init__(self, case_id: str, **kwargs):
        super().__init__(
            message=f"Ya existe un caso con ID: {case_id}",
            details={"case_id": case_id},
            severity=ErrorSeverity.MEDIUM,
            **kwargs
        )
        self.code = "DUPLICATE_CASE"


# =========================================================
# EXCEPCIONES DE ALERTAS
# =========================================================

class AlertNotFoundException(ReclamosException):
    """Alerta no encontrada."""

    def __init__(self, alert_id: str, **kwargs):
        super().__init__(
            code="ALERT_NOT_FOUND",
            message=f"Alerta no encontrada: {alert_id}",
            details={"alert_id": alert_id},
            severity=ErrorSeverity.LOW,
            **kwargs
        )


# =========================================================
# EXCEPCIONES DE VALIDACIÓN
# =========================================================

class CaseValidationException(ReclamosException):
    """Los datos del caso no superan la validación de entrada."""

    def __init__(self, errors: List[str], **kwargs):
        super().__init__(
            code="VALIDATION_ERROR",
            message="Los datos del caso no son válidos",
            details={"errors": list(errors)},
            severity=ErrorSeverity.LOW,
            **kwargs
        )
        self.errors = list(errors)


# =========================================================
# EXCEPCIONES DE INTEGRACIONES EXTERNAS
# =========================================================

class DriveException(ReclamosException):
    """Fallo al operar contra Google Drive."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            code="DRIVE_ERROR",
            message=message,
            severity=ErrorSeverity.MEDIUM,
            **kwargs
        )


class DriveDisabledException(DriveException):
    """Operación de carpetas con la integración de Drive deshabilitada."""

    def __init__(self, **kwargs):
        super().__init__(
            "La integración con Google Drive no está habilitada",
            details={"setting": "drive_enabled"},
            **kwargs
        )
        self.code = "DRIVE_DISABLED"
        self.severity = ErrorSeverity.LOW


class NotificationException(ReclamosException):
    """Fallo al enviar una notificación."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            code="NOTIFICATION_ERROR",
            message=message,
            severity=ErrorSeverity.MEDIUM,
            **kwargs
        )


# =========================================================
# HELPERS
# =========================================================

HTTP_STATUS_BY_CODE = {
    "CASE_NOT_FOUND": 404,
    "ALERT_NOT_FOUND": 404,
    "DUPLICATE_CASE": 409,
    "VALIDATION_ERROR": 422,
    "DATABASE_ERROR": 500,
    "DRIVE_DISABLED": 409,
    "DRIVE_ERROR": 502,
    "NOTIFICATION_ERROR": 502,
}


def http_status_for(exc: ReclamosException) -> int:
    """Código HTTP con el que la API expone una excepción del sistema."""
    return HTTP_STATUS_BY_CODE.get(exc.code, 500)
