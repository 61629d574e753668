"""
Notificaciones por email vía SMTP.

Plantillas: alta de caso, cambio de estado y recordatorio de audiencia.

Con SMTP sin configurar, o si el envío falla, el envío se SIMULA (queda
registrado en el log) y se devuelve True: una notificación fallida nunca
bloquea el alta o la actualización de un caso.
"""
from __future__ import annotations

import smtplib
from datetime import date
from email.message import EmailMessage
from typing import Optional

from reclamos.core.config import Settings, get_settings
from reclamos.core.exceptions import NotificationException
from reclamos.core.logger import get_logger

logger = get_logger()

SIGNATURE = "Saludos cordiales,\nSistema de Gestión de Casos"


class NotificationService:
    """Envío de emails a reclamantes y al buzón del sistema."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def default_email(self) -> str:
        return self.settings.default_notification_email

    # =========================================
    # ENVÍO
    # =========================================

    def send_email_notification(
        self, to: Optional[str], subject: str, message: str, case_id: str
    ) -> bool:
        """
        Envía un email de texto plano. Sin `to`, va al buzón del sistema.

        Returns:
            True siempre (envío real o simulado)

        Raises:
            NotificationException: si no hay destinatario
        """
        to = (to or "").strip() or self.default_email
        if not to:
            raise NotificationException("Destinatario de email vacío", details={"case_id": case_id})

        if not self.settings.smtp_configured:
            self._simulate_email_sent(to, subject, case_id)
            return True

        msg = EmailMessage()
        msg["From"] = self.settings.mail_from
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(message)

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30) as smtp:
                if self.settings.smtp_use_tls:
                    smtp.starttls()
                smtp.login(self.settings.smtp_user, self.settings.smtp_password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Fallo enviando email SMTP",
                case_id=case_id,
                action="send_email",
                error=e,
                to=to,
            )
            self._simulate_email_sent(to, subject, case_id)
            return True

        logger.info("Email enviado", case_id=case_id, action="send_email", to=to, subject=subject)
        return True

    def _simulate_email_sent(self, to: str, subject: str, case_id: str) -> None:
        logger.info(
            "Email simulado enviado",
            case_id=case_id,
            action="send_email_simulated",
            to=to,
            subject=subject,
        )

    # =========================================
    # PLANTILLAS
    # =========================================

    def send_audience_reminder(
        self,
        email: str,
        case_name: str,
        case_id: str,
        audience_date: str,
        audience_time: str,
    ) -> bool:
        subject = f"Recordatorio de Audiencia - Caso {case_id}"
        message = (
            f"Estimado/a {case_name},\n\n"
            "Le recordamos que tiene una audiencia programada:\n\n"
            f"Caso: {case_id}\n"
            f"Fecha: {audience_date}\n"
            f"Hora: {audience_time}\n\n"
            "Por favor, asegúrese de estar presente en la fecha y hora indicadas.\n\n"
            f"{SIGNATURE}\n"
        )
        return self.send_email_notification(email, subject, message, case_id)

    def send_status_update(
        self,
        email: str,
        case_name: str,
        case_id: str,
        new_status: str,
        details: str,
    ) -> bool:
        subject = f"Actualización de Estado - Caso {case_id}"
        message = (
            f"Estimado/a {case_name},\n\n"
            "Su caso ha sido actualizado:\n\n"
            f"Caso: {case_id}\n"
            f"Nuevo Estado: {new_status}\n"
            f"Detalles: {details}\n\n"
            "Para más información, puede contactarnos.\n\n"
            f"{SIGNATURE}\n"
        )
        return self.send_email_notification(email, subject, message, case_id)

    def send_welcome_email(
        self,
        email: str,
        case_name: str,
        case_id: str,
        registered_on: Optional[date] = None,
    ) -> bool:
        registered_on = registered_on or date.today()
        subject = f"Caso Registrado - {case_id}"
        message = (
            f"Estimado/a {case_name},\n\n"
            "Su caso ha sido registrado exitosamente en nuestro sistema:\n\n"
            f"Número de Caso: {case_id}\n"
            f"Fecha de Registro: {registered_on.strftime('%d/%m/%Y')}\n\n"
            "Recibirá actualizaciones sobre el progreso de su caso.\n\n"
            f"{SIGNATURE}\n"
        )
        return self.send_email_notification(email, subject, message, case_id)
