"""
Cliente de Google Drive para las carpetas de los casos.

Crea la carpeta principal "<id> - <reclamante>" y las siete subcarpetas
estándar mediante la API REST v3 de Drive.

Sin token de acceso, o ante cualquier error HTTP / de red, la carpeta se
SIMULA: se devuelve un id "simulated_<...>" y el flujo sigue adelante.
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Optional

import requests
from pydantic import BaseModel, Field
from requests.exceptions import RequestException

from reclamos.core.config import Settings, get_settings
from reclamos.core.exceptions import DriveException
from reclamos.core.logger import get_logger
from reclamos.services.case_utils import DEFAULT_FOLDER_NAMES

DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
FOLDER_URL_TEMPLATE = "https://drive.google.com/drive/folders/{folder_id}"

logger = get_logger()


class DriveFolder(BaseModel):
    """Carpeta creada (o simulada) en Drive."""

    id: str
    name: str
    mime_type: str = FOLDER_MIME_TYPE
    parents: list[str] = Field(default_factory=list)
    web_view_link: str = ""
    simulated: bool = False


class CaseFolders(BaseModel):
    """Resultado de aprovisionar las carpetas de un caso."""

    main_folder: DriveFolder
    sub_folders: list[DriveFolder] = Field(default_factory=list)


class DriveService:
    """Operaciones de carpetas sobre Google Drive."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            settings: Configuración (por defecto, la global)
            session: Sesión HTTP (inyectable en tests)
        """
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    # =========================================
    # ESTADO
    # =========================================

    def is_configured(self) -> bool:
        """Hay API key y carpeta base configuradas."""
        return self.settings.drive_configured

    def has_auth(self) -> bool:
        return bool(self.settings.drive_access_token)

    @staticmethod
    def generate_folder_url(folder_id: str) -> str:
        return FOLDER_URL_TEMPLATE.format(folder_id=folder_id)

    # =========================================
    # CARPETAS
    # =========================================

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> DriveFolder:
        """
        Crea una carpeta bajo `parent_id` (o bajo la carpeta base).

        Nunca lanza por errores de Drive: cae al modo simulación.
        """
        parent = parent_id or self.settings.drive_base_folder_id
        parents = [parent] if parent else []

        if not self.has_auth():
            logger.info(
                "Drive sin token de acceso, carpeta simulada",
                action="drive_create_folder",
                folder_name=name,
            )
            return self._simulate_folder(name, parents)

        payload: dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parents:
            payload["parents"] = parents

        try:
            response = self.session.post(
                DRIVE_FILES_URL,
                json=payload,
                params={"fields": "id,name,mimeType,parents,webViewLink"},
                headers={"Authorization": f"Bearer {self.settings.drive_access_token}"},
                timeout=self.settings.drive_timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
            folder_id = data.get("id") if isinstance(data, dict) else None
        except (RequestException, ValueError) as e:
            logger.error(
                "Error creando carpeta en Google Drive, fallback a simulación",
                action="drive_create_folder",
                error=e,
                folder_name=name,
            )
            return self._simulate_folder(name, parents)

        if not folder_id:
            logger.warning(
                "Respuesta de Google Drive sin id de carpeta, fallback a simulación",
                action="drive_create_folder",
                folder_name=name,
            )
            return self._simulate_folder(name, parents)

        logger.info(
            "Carpeta creada en Google Drive",
            action="drive_create_folder",
            folder_name=name,
            folder_id=folder_id,
        )
        return DriveFolder(
            id=folder_id,
            name=data.get("name", name),
            mime_type=data.get("mimeType", FOLDER_MIME_TYPE),
            parents=data.get("parents", parents),
            web_view_link=data.get("webViewLink") or self.generate_folder_url(folder_id),
        )

    def create_case_folders(self, case_id: str, claimant: str) -> CaseFolders:
        """
        Crea la carpeta principal del caso y sus subcarpetas estándar.

        Raises:
            DriveException: si la carpeta principal no se pudo obtener
        """
        main_name = f"{case_id} - {claimant}"
        main_folder = self.create_folder(main_name)
        if not main_folder or not main_folder.id:
            raise DriveException(
                "No se pudo crear la carpeta principal", details={"case_id": case_id}
            )

        sub_folders = [
            self.create_folder(folder_name, main_folder.id)
            for folder_name in DEFAULT_FOLDER_NAMES
        ]

        logger.info(
            f"Carpetas creadas: 1 principal + {len(sub_folders)} subcarpetas",
            case_id=case_id,
            action="drive_create_case_folders",
            simulated=main_folder.simulated,
        )
        return CaseFolders(main_folder=main_folder, sub_folders=sub_folders)

    def _simulate_folder(self, name: str, parents: list[str]) -> DriveFolder:
        folder_id = f"simulated_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
        return DriveFolder(
            id=folder_id,
            name=name,
            parents=parents,
            web_view_link=self.generate_folder_url(folder_id),
            simulated=True,
        )
