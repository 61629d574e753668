"""
Orquestación de las operaciones de casos.

Encadena el store con los componentes derivados e integraciones:
1. Alta / edición del caso (store)
2. Regeneración de alertas con los desfases configurados (fusión por id)
3. Carpetas en Drive (solo alta, si auto_create_folders y drive_enabled)
4. Email al reclamante (si auto_send_notifications y hay email)

Los pasos 3 y 4 nunca hacen fallar la operación: el caso ya está guardado.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from reclamos.core.config import Settings, get_settings
from reclamos.core.exceptions import DriveDisabledException, DriveException
from reclamos.core.logger import get_logger
from reclamos.models.alert import Alert
from reclamos.models.case import CarpetaInfo, Case, CaseBase
from reclamos.services import case_store
from reclamos.services.alert_generator import generate_alerts_for_case, generate_alerts_for_cases
from reclamos.services.drive_service import DriveService
from reclamos.services.notification_service import NotificationService

logger = get_logger()


class CaseWorkflow:
    """Operaciones de casos con sus efectos derivados."""

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        drive: Optional[DriveService] = None,
        notifier: Optional[NotificationService] = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.drive = drive or DriveService(self.settings)
        self.notifier = notifier or NotificationService(self.settings)

    # =========================================
    # ALERTAS
    # =========================================

    def refresh_case_alerts(self, case: Case, now: Optional[datetime] = None) -> list[Alert]:
        """Genera las alertas de un caso y guarda las que no existían."""
        alerts = generate_alerts_for_case(case, self.settings.audience_reminder_days, now)
        return case_store.save_new_alerts(self.db, alerts)

    def regenerate_all_alerts(self, now: Optional[datetime] = None) -> list[Alert]:
        """Regenera las alertas de toda la colección con un único `now`."""
        cases = case_store.list_cases(self.db)
        alerts = generate_alerts_for_cases(cases, self.settings.audience_reminder_days, now)
        added = case_store.save_new_alerts(self.db, alerts)

        logger.info(
            f"Alertas regeneradas: {len(added)} nuevas",
            action="alerts_regenerate",
            total_cases=len(cases),
        )
        return added

    # =========================================
    # CASOS
    # =========================================

    def register_case(self, data: CaseBase, now: Optional[datetime] = None) -> Case:
        """Alta de caso con alertas, carpetas y email de bienvenida."""
        case = case_store.create_case(self.db, data)
        self.refresh_case_alerts(case, now)

        if self.settings.auto_create_folders and self.settings.drive_enabled:
            case = self.provision_folders(case)

        if self.settings.auto_send_notifications and case.email_reclamante:
            self.notifier.send_welcome_email(
                case.email_reclamante, case.nombre_reclamante, case.id
            )

        return case

    def modify_case(self, case_id: str, data: CaseBase, now: Optional[datetime] = None) -> Case:
        """Edición de caso con regeneración de alertas y aviso al reclamante."""
        case = case_store.update_case(self.db, case_id, data)
        self.refresh_case_alerts(case, now)

        if self.settings.auto_send_notifications and case.email_reclamante:
            self.notifier.send_status_update(
                case.email_reclamante,
                case.nombre_reclamante,
                case.id,
                case.estado,
                "Su caso ha sido actualizado",
            )

        return case

    # =========================================
    # CARPETAS
    # =========================================

    def provision_folders(self, case: Case) -> Case:
        """
        Crea las carpetas del caso en Drive y guarda enlace y subcarpetas.

        Si Drive falla, el caso se devuelve sin cambios.
        """
        try:
            folders = self.drive.create_case_folders(case.id, case.nombre_reclamante)
        except DriveException as e:
            logger.error(
                "El caso se guardó pero sin carpetas de Google Drive",
                case_id=case.id,
                action="case_folders",
                error=e,
            )
            return case

        main = folders.main_folder
        enlace = main.web_view_link or self.drive.generate_folder_url(main.id)
        carpetas = [
            CarpetaInfo(
                nombre=folder.name,
                created=True,
                last_modified=datetime.now(),
                drive_id=folder.id,
                url=folder.web_view_link,
            )
            for folder in folders.sub_folders
        ]
        return case_store.save_case_folders(self.db, case.id, carpetas, enlace)

    def create_pending_folders(self) -> list[str]:
        """
        Aprovisiona carpetas para todos los casos sin enlace de carpeta.

        Returns:
            Ids de los casos a los que se les crearon carpetas

        Raises:
            DriveDisabledException: si la integración con Drive no está habilitada
        """
        if not self.settings.drive_enabled:
            raise DriveDisabledException()

        pending = [case for case in case_store.list_cases(self.db) if not case.enlace_carpeta]
        provisioned = []
        for case in pending:
            updated = self.provision_folders(case)
            if updated.enlace_carpeta:
                provisioned.append(updated.id)

        logger.info(
            f"Carpetas creadas para {len(provisioned)} casos",
            action="case_create_pending_folders",
            pending=len(pending),
        )
        return provisioned
