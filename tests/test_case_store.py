"""
Tests de persistencia de casos y alertas.
"""
import re
from datetime import date, datetime

import pytest

from reclamos.core.exceptions import (
    AlertNotFoundException,
    CaseNotFoundException,
    CaseValidationException,
)
from reclamos.models.alert import Alert, AlertPriority, AlertType
from reclamos.models.case import CaseBase
from reclamos.services import case_store


def _data(**overrides) -> CaseBase:
    data = {
        "fecha_ingreso": date(2024, 6, 1),
        "nombre_reclamante": "Juan Pérez",
        "provincia": "Córdoba",
        "localidad": "Río Cuarto",
        "numero_expediente": "EXP-1",
    }
    data.update(overrides)
    return CaseBase(**data)


def _alert(alert_id: str, case_id: str) -> Alert:
    return Alert(
        id=alert_id,
        case_id=case_id,
        type=AlertType.AUDIENCIA_1_DIA,
        message="Audiencia programada",
        date=datetime(2024, 6, 19),
        priority=AlertPriority.URGENT,
    )


def test_crear_caso(db_session):
    case = case_store.create_case(db_session, _data())

    assert re.fullmatch(r"CASO-20240601-\d{3}", case.id)
    assert len(case.carpetas) == 7
    assert [e.accion for e in case.historial_seguimiento] == ["Caso creado"]

    stored = case_store.get_case(db_session, case.id)
    assert stored.nombre_reclamante == "Juan Pérez"
    assert stored.historial_seguimiento[0].id == case.historial_seguimiento[0].id


def test_crear_caso_invalido(db_session):
    with pytest.raises(CaseValidationException) as exc_info:
        case_store.create_case(db_session, _data(provincia="", email_reclamante="x"))

    assert "La provincia es requerida" in exc_info.value.errors
    assert case_store.list_cases(db_session) == []


def test_caso_inexistente(db_session):
    with pytest.raises(CaseNotFoundException):
        case_store.get_case(db_session, "CASO-NOPE")


def test_actualizar_conserva_id_e_historial(db_session):
    case = case_store.create_case(db_session, _data())

    updated = case_store.update_case(db_session, case.id, _data(estado="en_proceso"))

    assert updated.id == case.id
    assert updated.estado == "en_proceso"
    assert [e.accion for e in updated.historial_seguimiento] == ["Caso creado", "Caso actualizado"]
    assert updated.historial_seguimiento[0] == case.historial_seguimiento[0]
    assert len(updated.carpetas) == 7


def test_actualizar_caso_inexistente(db_session):
    with pytest.raises(CaseNotFoundException):
        case_store.update_case(db_session, "CASO-NOPE", _data())


def test_agregar_seguimiento(db_session):
    case = case_store.create_case(db_session, _data())

    entry = case_store.add_seguimiento(db_session, case.id, "Llamada", "Sin respuesta", "Ana")

    stored = case_store.get_case(db_session, case.id)
    assert stored.historial_seguimiento[-1].id == entry.id
    assert stored.historial_seguimiento[-1].usuario == "Ana"
    assert len(stored.historial_seguimiento) == 2


def test_listar_mas_recientes_primero(db_session):
    case_store.create_case(db_session, _data(fecha_ingreso=date(2024, 5, 1)))
    case_store.create_case(db_session, _data(fecha_ingreso=date(2024, 6, 1)))

    cases = case_store.list_cases(db_session)

    assert [c.fecha_ingreso for c in cases] == [date(2024, 6, 1), date(2024, 5, 1)]


def test_borrar_caso_borra_sus_alertas(db_session):
    case = case_store.create_case(db_session, _data())
    other = case_store.create_case(db_session, _data(numero_expediente="EXP-2"))
    case_store.save_new_alerts(
        db_session, [_alert(f"{case.id}-1d", case.id), _alert(f"{other.id}-1d", other.id)]
    )

    case_store.delete_case(db_session, case.id)

    assert [c.id for c in case_store.list_cases(db_session)] == [other.id]
    assert [a.case_id for a in case_store.list_alerts(db_session)] == [other.id]


def test_eliminar_duplicados(db_session):
    first = case_store.create_case(db_session, _data(fecha_ingreso=date(2024, 5, 1)))
    duplicate = case_store.create_case(db_session, _data(fecha_ingreso=date(2024, 6, 1)))
    no_file_a = case_store.create_case(db_session, _data(numero_expediente=""))
    no_file_b = case_store.create_case(db_session, _data(numero_expediente=""))

    removed = case_store.remove_duplicate_cases(db_session)

    assert removed == [duplicate.id]
    remaining = {c.id for c in case_store.list_cases(db_session)}
    assert remaining == {first.id, no_file_a.id, no_file_b.id}


def test_guardar_alertas_fusiona_por_id(db_session):
    case = case_store.create_case(db_session, _data())
    case_store.save_new_alerts(db_session, [_alert("A-3d", case.id)])
    case_store.mark_alert_read(db_session, "A-3d")

    added = case_store.save_new_alerts(db_session, [_alert("A-3d", case.id), _alert("A-1d", case.id)])

    assert [a.id for a in added] == ["A-1d"]
    alerts = {a.id: a for a in case_store.list_alerts(db_session)}
    assert alerts["A-3d"].read is True
    assert alerts["A-1d"].read is False


def test_marcar_alertas(db_session):
    case = case_store.create_case(db_session, _data())
    case_store.save_new_alerts(db_session, [_alert("A-3d", case.id), _alert("A-1d", case.id)])

    assert case_store.mark_alert_read(db_session, "A-3d").read is True
    assert [a.id for a in case_store.list_alerts(db_session, unread_only=True)] == ["A-1d"]

    assert case_store.mark_all_alerts_read(db_session) == 1
    assert case_store.list_alerts(db_session, unread_only=True) == []


def test_marcar_alerta_inexistente(db_session):
    with pytest.raises(AlertNotFoundException):
        case_store.mark_alert_read(db_session, "NOPE")
