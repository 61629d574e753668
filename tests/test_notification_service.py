"""
Tests del servicio de notificaciones por email.
"""
import smtplib

import pytest

from reclamos.core.config import Settings
from reclamos.core.exceptions import NotificationException
from reclamos.services.notification_service import NotificationService


@pytest.fixture
def smtp_settings():
    return Settings(
        smtp_host="smtp.test.local",
        smtp_port=587,
        smtp_user="user",
        smtp_password="secret",
        mail_from="reclamos@test.local",
    )


def test_sin_smtp_se_simula_y_devuelve_true(mocker):
    smtp = mocker.patch("reclamos.services.notification_service.smtplib.SMTP")
    service = NotificationService(Settings(smtp_host=None))

    assert service.send_welcome_email("juan@example.com", "Juan", "CASO-20240601-001") is True
    smtp.assert_not_called()


def test_envio_real_por_smtp(mocker, smtp_settings):
    smtp = mocker.patch("reclamos.services.notification_service.smtplib.SMTP")
    service = NotificationService(smtp_settings)

    result = service.send_status_update(
        "juan@example.com", "Juan", "CASO-20240601-001", "resuelto", "Caso cerrado con acuerdo"
    )

    assert result is True
    smtp.assert_called_once_with("smtp.test.local", 587, timeout=30)
    session = smtp.return_value.__enter__.return_value
    session.starttls.assert_called_once()
    session.login.assert_called_once_with("user", "secret")

    message = session.send_message.call_args[0][0]
    assert message["To"] == "juan@example.com"
    assert message["Subject"] == "Actualización de Estado - Caso CASO-20240601-001"
    assert "Nuevo Estado: resuelto" in message.get_content()


def test_fallo_smtp_se_simula(mocker, smtp_settings):
    mocker.patch(
        "reclamos.services.notification_service.smtplib.SMTP",
        side_effect=smtplib.SMTPConnectError(421, "no disponible"),
    )
    service = NotificationService(smtp_settings)

    assert service.send_email_notification("a@b.com", "Asunto", "Texto", "CASO-1") is True


def test_recordatorio_de_audiencia(mocker):
    service = NotificationService(Settings(smtp_host=None))
    send = mocker.spy(service, "send_email_notification")

    service.send_audience_reminder(
        "juan@example.com", "Juan", "CASO-20240601-001", "20/06/2024", "10:30"
    )

    to, subject, message, case_id = send.call_args[0]
    assert subject == "Recordatorio de Audiencia - Caso CASO-20240601-001"
    assert "Fecha: 20/06/2024" in message
    assert "Hora: 10:30" in message


def test_sin_destinatario_usa_buzon_del_sistema(mocker):
    service = NotificationService(Settings(default_notification_email="buzon@sistema.test"))
    simulate = mocker.spy(service, "_simulate_email_sent")

    service.send_email_notification(None, "Asunto", "Texto", "CASO-1")

    assert simulate.call_args[0][0] == "buzon@sistema.test"


def test_sin_destinatario_ni_buzon():
    service = NotificationService(Settings(default_notification_email=""))

    with pytest.raises(NotificationException):
        service.send_email_notification("", "Asunto", "Texto", "CASO-1")
