"""
Tests para el sistema de excepciones.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from reclamos.core.exceptions import (
    CaseNotFoundException,
    CaseValidationException,
    DriveDisabledException,
    DuplicateCaseException,
    ErrorSeverity,
    ReclamosException,
    http_status_for,
)
from reclamos.models.case import CaseBase
from reclamos.services import case_store


def test_to_dict():
    exc = CaseNotFoundException("CASO-20240601-001")

    assert exc.to_dict() == {
        "error_code": "CASE_NOT_FOUND",
        "message": "Caso no encontrado: CASO-20240601-001",
        "severity": "low",
        "details": {"case_id": "CASO-20240601-001"},
    }


def test_to_dict_con_error_original():
    exc = DuplicateCaseException("CASO-1", original_error=ValueError("boom"))

    data = exc.to_dict()

    assert data["error_code"] == "DUPLICATE_CASE"
    assert data["original_error"] == {"type": "ValueError", "message": "boom"}


def test_str_incluye_codigo_y_detalles():
    exc = CaseValidationException(["El nombre del reclamante es requerido"])

    assert str(exc).startswith("[VALIDATION_ERROR]")
    assert exc.errors == ["El nombre del reclamante es requerido"]


@pytest.mark.parametrize(
    "exc, status",
    [
        (CaseNotFoundException("x"), 404),
        (DuplicateCaseException("x"), 409),
        (CaseValidationException([]), 422),
        (DriveDisabledException(), 409),
        (ReclamosException("DESCONOCIDO", "?"), 500),
    ],
)
def test_http_status_for(exc, status):
    assert http_status_for(exc) == status


def test_drive_deshabilitado():
    exc = DriveDisabledException()

    assert exc.code == "DRIVE_DISABLED"
    assert exc.severity == ErrorSeverity.LOW


def test_alta_con_id_en_conflicto(db_session, mocker):
    mocker.patch.object(
        db_session,
        "commit",
        side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")),
    )
    rollback = mocker.patch.object(db_session, "rollback")

    with pytest.raises(DuplicateCaseException):
        case_store.create_case(db_session, CaseBase(nombre_reclamante="Ana", provincia="Córdoba", localidad="Córdoba"))

    rollback.assert_called_once()
