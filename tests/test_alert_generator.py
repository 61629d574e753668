"""
Tests del generador de alertas de audiencia.
"""
from datetime import date, datetime
from types import SimpleNamespace

from reclamos.models.alert import Alert, AlertPriority, AlertType
from reclamos.services.alert_generator import (
    DEFAULT_REMINDER_OFFSETS,
    generate_alerts_for_case,
    generate_alerts_for_cases,
    merge_alerts,
    normalize_reminder_offsets,
)


def test_solo_se_emiten_recordatorios_futuros(make_case):
    """Audiencia 20/06, now 15/06: el aviso de 10 días ya pasó."""
    case = make_case(id="CASO-20240601-001", fecha_audiencia=date(2024, 6, 20))

    alerts = generate_alerts_for_case(case, [10, 3, 1], now=datetime(2024, 6, 15, 9, 0))

    assert [a.id for a in alerts] == ["CASO-20240601-001-3d", "CASO-20240601-001-1d"]
    assert [a.priority for a in alerts] == [AlertPriority.HIGH, AlertPriority.URGENT]
    assert [a.type for a in alerts] == [AlertType.AUDIENCIA_3_DIAS, AlertType.AUDIENCIA_1_DIA]
    assert alerts[0].date == datetime(2024, 6, 17)
    assert alerts[1].date == datetime(2024, 6, 19)
    assert all(a.read is False for a in alerts)
    assert all(a.case_id == "CASO-20240601-001" for a in alerts)


def test_mensajes(make_case):
    case = make_case(fecha_audiencia=date(2024, 6, 20))

    alerts = generate_alerts_for_case(case, [3, 1], now=datetime(2024, 6, 1))

    assert alerts[0].message == "Audiencia programada para 20/06/2024 - 3 días restantes"
    assert alerts[1].message == "Audiencia programada para 20/06/2024 - MAÑANA"


def test_todos_los_desfases_con_audiencia_lejana(make_case):
    case = make_case(fecha_audiencia=date(2024, 7, 30))

    alerts = generate_alerts_for_case(case, now=datetime(2024, 6, 1))

    assert len(alerts) == 3
    assert alerts[0].type == AlertType.AUDIENCIA_10_DIAS
    assert alerts[0].priority == AlertPriority.MEDIUM


def test_fecha_alerta_igual_a_now_se_emite(make_case):
    case = make_case(fecha_audiencia=date(2024, 6, 20))

    alerts = generate_alerts_for_case(case, [3], now=datetime(2024, 6, 17, 0, 0))

    assert len(alerts) == 1


def test_audiencia_pasada_no_genera_alertas(make_case):
    case = make_case(fecha_audiencia=date(2024, 6, 1))

    assert generate_alerts_for_case(case, now=datetime(2024, 6, 15)) == []


def test_sin_audiencia_no_genera_alertas(make_case):
    case = make_case(fecha_audiencia=None)

    assert generate_alerts_for_case(case, now=datetime(2024, 6, 15)) == []


def test_fecha_ilegible_no_lanza():
    """Registros mal formados se ignoran sin excepción."""
    broken = SimpleNamespace(id="CASO-X", fecha_audiencia="no-es-fecha")

    assert generate_alerts_for_case(broken, now=datetime(2024, 6, 15)) == []


def test_fecha_en_texto_iso():
    raw = SimpleNamespace(id="CASO-X", fecha_audiencia="2024-06-20")

    alerts = generate_alerts_for_case(raw, [1], now=datetime(2024, 6, 15))

    assert [a.id for a in alerts] == ["CASO-X-1d"]


def test_desfase_no_estandar_cae_en_tipo_10_dias(make_case):
    case = make_case(id="CASO-20240601-007", fecha_audiencia=date(2024, 6, 30))

    alerts = generate_alerts_for_case(case, [7], now=datetime(2024, 6, 1))

    assert alerts[0].id == "CASO-20240601-007-7d"
    assert alerts[0].type == AlertType.AUDIENCIA_10_DIAS
    assert alerts[0].priority == AlertPriority.MEDIUM
    assert alerts[0].message.endswith("7 días restantes")


def test_regenerar_es_idempotente(make_case):
    case = make_case(fecha_audiencia=date(2024, 6, 30))
    now = datetime(2024, 6, 1)

    first = generate_alerts_for_case(case, now=now)
    second = generate_alerts_for_case(case, now=now)

    assert [a.id for a in first] == [a.id for a in second]


def test_no_modifica_el_caso(make_case):
    case = make_case(fecha_audiencia=date(2024, 6, 30))
    before = case.model_dump()

    generate_alerts_for_case(case, now=datetime(2024, 6, 1))

    assert case.model_dump() == before


def test_generar_para_coleccion(make_case):
    cases = [
        make_case(fecha_audiencia=date(2024, 6, 30)),
        make_case(fecha_audiencia=None),
        make_case(fecha_audiencia=date(2024, 6, 3)),
    ]

    alerts = generate_alerts_for_cases(cases, [3, 1], now=datetime(2024, 6, 1))

    assert {a.case_id for a in alerts} == {cases[0].id, cases[2].id}
    assert len(alerts) == 3


# =========================================================
# NORMALIZACIÓN DE DESFASES
# =========================================================


def test_normalizar_desfases_validos():
    assert normalize_reminder_offsets([5, "2", 5]) == (5, 2)


def test_normalizar_desfases_invalidos_vuelven_al_default():
    for bad in (None, [], "10,3", ["a"], [0], [-3], [True], 7, [2.5]):
        assert normalize_reminder_offsets(bad) == DEFAULT_REMINDER_OFFSETS


# =========================================================
# FUSIÓN
# =========================================================


def _alert(alert_id: str, read: bool = False) -> Alert:
    return Alert(
        id=alert_id,
        case_id="CASO-20240601-001",
        type=AlertType.AUDIENCIA_3_DIAS,
        message="m",
        date=datetime(2024, 6, 17),
        read=read,
        priority=AlertPriority.HIGH,
    )


def test_merge_conserva_leidas_y_no_duplica():
    existing = [_alert("A-3d", read=True)]
    new = [_alert("A-3d"), _alert("A-1d")]

    merged = merge_alerts(existing, new)

    assert [a.id for a in merged] == ["A-3d", "A-1d"]
    assert merged[0].read is True
