"""
Sistema de configuración con Pydantic Settings.

Centraliza la configuración del sistema de gestión de reclamos:
- Validación automática de tipos
- Valores por defecto seguros
- Separación por entornos (dev/staging/prod)

Los componentes de cálculo (alertas, reportes) NO leen esta configuración:
la capa de orquestación la lee y les pasa los valores explícitamente.
"""
import json
from pathlib import Path
from typing import Annotated, Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_REMINDER_DAYS = [10, 3, 1]


class Settings(BaseSettings):
    """
    Configuración global del sistema de reclamos.

    Todas las variables se pueden sobrescribir con variables de entorno.
    """

    # =========================================================
    # ENTORNO Y DEPLOYMENT
    # =========================================================

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Entorno de ejecución"
    )

    debug: bool = Field(default=False, description="Modo debug (solo para development)")

    app_name: str = Field(default="Gestión de Reclamos")

    app_version: str = Field(default="1.0.0")

    # =========================================================
    # DATABASE
    # =========================================================

    database_url: str = Field(
        default="sqlite:///./runtime/db/reclamos.db",
        description="URL de conexión a base de datos",
    )

    # =========================================================
    # LOGS
    # =========================================================

    logs_dir: Path = Field(default=Path("runtime/logs"), description="Directorio de logs")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # =========================================================
    # EMAIL (SMTP)
    # =========================================================

    smtp_host: Optional[str] = Field(default=None)
    smtp_port: Optional[int] = Field(default=None)
    smtp_user: Optional[str] = Field(default=None)
    smtp_password: Optional[str] = Field(default=None)
    smtp_use_tls: bool = Field(default=True)
    mail_from: Optional[str] = Field(default=None)

    default_notification_email: str = Field(
        default="admin@sistema-casos.com",
        description="Destinatario por defecto de las notificaciones del sistema",
    )

    # =========================================================
    # GOOGLE DRIVE
    # =========================================================

    drive_enabled: bool = Field(
        default=False, description="Habilitar creación de carpetas en Google Drive"
    )

    drive_api_key: Optional[str] = Field(default=None)

    drive_access_token: Optional[str] = Field(
        default=None, description="Token OAuth con scope drive.file (opcional)"
    )

    drive_base_folder_id: Optional[str] = Field(
        default=None, description="Carpeta raíz donde se crean las carpetas de los casos"
    )

    drive_timeout_seconds: int = Field(default=15, ge=1, le=120)

    # =========================================================
    # AUTOMATIZACIONES DEL SISTEMA
    # =========================================================

    auto_create_folders: bool = Field(
        default=True, description="Crear carpetas al registrar un caso (requiere Drive)"
    )

    auto_send_notifications: bool = Field(
        default=True, description="Enviar emails de alta y actualización al reclamante"
    )

    # NoDecode: el valor crudo del entorno llega al validador ("10,3", "[10, 3]", "abc")
    audience_reminder_days: Annotated[list[int], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_REMINDER_DAYS),
        description="Días antes de la audiencia en los que se genera un recordatorio",
    )

    # =========================================================
    # VALIDACIONES CUSTOM
    # =========================================================

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Valida formato de URL de base de datos."""
        if not v.startswith(("sqlite:///", "postgresql://", "postgresql+psycopg2://")):
            raise ValueError(
                "database_url debe empezar con sqlite:///, postgresql:// o postgresql+psycopg2://"
            )
        return v

    @field_validator("audience_reminder_days", mode="before")
    @classmethod
    def validate_reminder_days(cls, v: Any) -> list[int]:
        """
        Acepta lista, JSON ("[10, 3, 1]") o separado por comas ("10,3,1").

        Valores vacíos o no numéricos vuelven al default [10, 3, 1].
        """
        from reclamos.services.alert_generator import normalize_reminder_offsets

        if isinstance(v, str):
            raw = v.strip()
            if raw.startswith("["):
                try:
                    v = json.loads(raw)
                except ValueError:
                    v = None
            else:
                v = [item.strip() for item in raw.split(",")]

        return list(normalize_reminder_offsets(v))

    # =========================================================
    # PROPIEDADES COMPUTADAS
    # =========================================================

    @property
    def smtp_configured(self) -> bool:
        """Hay datos suficientes para intentar un envío SMTP real."""
        return bool(
            self.smtp_host
            and self.smtp_port
            and self.smtp_user
            and self.smtp_password
            and self.mail_from
        )

    @property
    def drive_configured(self) -> bool:
        return bool(self.drive_api_key and self.drive_base_folder_id)

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )


# =========================================================
# INSTANCIA GLOBAL (SINGLETON)
# =========================================================

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Obtiene la instancia global de configuración (singleton).

    Returns:
        Settings: Configuración global validada
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


settings = get_settings()


def reload_settings() -> Settings:
    """Recarga la configuración (útil para tests)."""
    global _settings
    _settings = None
    return get_settings()
