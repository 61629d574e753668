"""
Tests de búsqueda avanzada, ordenación y duplicados.
"""
from datetime import date

import pytest

from reclamos.services.case_search import (
    SearchFilters,
    filter_cases,
    find_duplicate_cases,
    sort_cases,
)


@pytest.fixture
def cases(make_case):
    return [
        make_case(
            nombre_reclamante="María López",
            estado="pendiente",
            prioridad="alta",
            provincia="Córdoba",
            fecha_ingreso=date(2024, 5, 10),
            monto_reclamado=1000,
        ),
        make_case(
            nombre_reclamante="Pedro Gómez",
            estado="resuelto",
            prioridad="baja",
            casa_vendedora="Celulares SA",
            fecha_ingreso=date(2024, 6, 10),
            fecha_audiencia=date(2024, 7, 1),
            monto_reclamado=5000,
        ),
        make_case(
            nombre_reclamante="Lucía Díaz",
            estado="en_proceso",
            prioridad="alta",
            observaciones="Reclamo por garantía",
            fecha_ingreso=date(2024, 6, 20),
        ),
    ]


def test_filtros_vacios_no_restringen(cases):
    assert filter_cases(cases, SearchFilters()) == cases


def test_texto_libre_sin_mayusculas(cases):
    result = filter_cases(cases, SearchFilters(search_term="celulares"))

    assert [c.nombre_reclamante for c in result] == ["Pedro Gómez"]
    assert len(filter_cases(cases, SearchFilters(search_term="GARANTÍA"))) == 1


def test_filtros_conjuntivos(cases):
    result = filter_cases(cases, SearchFilters(prioridad=["alta"], provincia=["Córdoba"]))

    assert [c.nombre_reclamante for c in result] == ["María López"]


def test_rango_de_fechas_y_montos(cases):
    by_date = filter_cases(
        cases,
        SearchFilters(fecha_ingreso_desde=date(2024, 6, 1), fecha_ingreso_hasta=date(2024, 6, 15)),
    )
    by_amount = filter_cases(cases, SearchFilters(monto_minimo=2000))

    assert [c.nombre_reclamante for c in by_date] == ["Pedro Gómez"]
    # Los casos sin monto quedan fuera con un límite activo
    assert [c.nombre_reclamante for c in by_amount] == ["Pedro Gómez"]


def test_rango_de_audiencia(cases):
    result = filter_cases(cases, SearchFilters(fecha_audiencia_desde=date(2024, 6, 1)))

    assert [c.nombre_reclamante for c in result] == ["Pedro Gómez"]


def test_ordenar_por_fecha_descendente(cases):
    result = sort_cases(cases)

    assert [c.fecha_ingreso for c in result] == [
        date(2024, 6, 20),
        date(2024, 6, 10),
        date(2024, 5, 10),
    ]


def test_ordenar_vacios_al_final(cases):
    result = sort_cases(cases, "monto_reclamado", descending=False)

    assert [c.monto_reclamado for c in result] == [1000, 5000, None]


def test_ordenar_campo_invalido(cases):
    with pytest.raises(ValueError):
        sort_cases(cases, "historial_seguimiento")


def test_duplicados_por_expediente(make_case):
    first = make_case(numero_expediente="EXP-1")
    repeated = make_case(numero_expediente="EXP-1")
    other = make_case(numero_expediente="EXP-2")
    no_file_a = make_case(numero_expediente="")
    no_file_b = make_case(numero_expediente="")

    duplicates = find_duplicate_cases([first, repeated, other, no_file_a, no_file_b])

    assert duplicates == [repeated]
