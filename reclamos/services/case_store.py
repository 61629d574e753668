"""
Persistencia de casos y alertas (SQLAlchemy).

Reglas que se mantienen aquí y no en la API:
- El id del caso se asigna al crear y no cambia nunca.
- El historial de seguimiento solo crece: cada alta, edición o acción
  añade una entrada nueva; las existentes no se tocan.
- Las alertas se fusionan por id: regenerar no duplica ni resetea `read`.

Cada operación de escritura hace su propio commit.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from reclamos.core.exceptions import (
    AlertNotFoundException,
    CaseNotFoundException,
    CaseValidationException,
    DuplicateCaseException,
)
from reclamos.core.logger import get_logger
from reclamos.models.alert import Alert
from reclamos.models.case import CarpetaInfo, Case, CaseBase, SeguimientoEntry
from reclamos.models.records import AlertRecord, CaseRecord
from reclamos.services.alert_generator import merge_alerts
from reclamos.services.case_search import find_duplicate_cases
from reclamos.services.case_utils import (
    create_default_folders,
    generate_case_id,
    new_seguimiento_entry,
    validate_case_data,
)

logger = get_logger()

# Campos que gestiona el store y nunca llegan desde la entrada
CASE_MANAGED_FIELDS = {"id", "ultima_actualizacion", "carpetas", "historial_seguimiento"}


# =========================================================
# CASOS
# =========================================================


def _get_record(db: Session, case_id: str) -> CaseRecord:
    record = db.query(CaseRecord).filter(CaseRecord.id == case_id).first()
    if record is None:
        raise CaseNotFoundException(case_id)
    return record


def list_cases(db: Session) -> list[Case]:
    """Todos los casos, los más recientes primero."""
    records = (
        db.query(CaseRecord)
        .order_by(CaseRecord.fecha_ingreso.desc(), CaseRecord.id.desc())
        .all()
    )
    return [record.to_case() for record in records]


def get_case(db: Session, case_id: str) -> Case:
    """
    Raises:
        CaseNotFoundException: si el caso no existe
    """
    return _get_record(db, case_id).to_case()


def _validate(data: CaseBase) -> None:
    errors = validate_case_data(data)
    if errors:
        raise CaseValidationException(errors)


def create_case(db: Session, data: CaseBase) -> Case:
    """
    Registra un caso nuevo.

    Asigna id CASO-YYYYMMDD-NNN (día de ingreso), las carpetas por defecto
    y la primera entrada del historial.

    Raises:
        CaseValidationException: si los datos no son válidos
        DuplicateCaseException: si otro alta concurrente tomó el mismo id
    """
    _validate(data)

    existing_ids = {row[0] for row in db.query(CaseRecord.id).all()}
    case_id = generate_case_id(data.fecha_ingreso, existing_ids)

    case = Case(
        **data.model_dump(exclude=CASE_MANAGED_FIELDS),
        id=case_id,
        ultima_actualizacion=datetime.now(),
        carpetas=create_default_folders(),
        historial_seguimiento=[
            new_seguimiento_entry("Caso creado", "Se registró un nuevo caso en el sistema", "Usuario")
        ],
    )

    db.add(CaseRecord.from_case(case))
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateCaseException(case_id, original_error=e)

    logger.info("Caso creado", case_id=case_id, action="case_create")
    return case


def update_case(db: Session, case_id: str, data: CaseBase) -> Case:
    """
    Reemplaza los campos editables de un caso.

    El id, las carpetas y el historial previo se conservan; se añade
    la entrada "Caso actualizado".

    Raises:
        CaseNotFoundException: si el caso no existe
        CaseValidationException: si los datos no son válidos
    """
    record = _get_record(db, case_id)
    _validate(data)

    current = record.to_case()
    updated = Case(
        **data.model_dump(exclude=CASE_MANAGED_FIELDS),
        id=current.id,
        ultima_actualizacion=datetime.now(),
        carpetas=current.carpetas,
        historial_seguimiento=[
            *current.historial_seguimiento,
            new_seguimiento_entry(
                "Caso actualizado", "Se actualizaron los datos del caso", "Usuario"
            ),
        ],
    )

    record.update_from(updated)
    db.commit()

    logger.info(
        "Caso actualizado",
        case_id=case_id,
        action="case_update",
        estado_anterior=current.estado,
        estado=updated.estado,
    )
    return updated


def add_seguimiento(
    db: Session,
    case_id: str,
    accion: str,
    descripcion: str = "",
    usuario: str = "Usuario",
) -> SeguimientoEntry:
    """
    Añade una entrada al historial del caso.

    Raises:
        CaseNotFoundException: si el caso no existe
    """
    record = _get_record(db, case_id)
    case = record.to_case()

    entry = new_seguimiento_entry(accion, descripcion, usuario)
    case.historial_seguimiento = [*case.historial_seguimiento, entry]
    case.ultima_actualizacion = datetime.now()

    record.update_from(case)
    db.commit()

    logger.info("Seguimiento añadido", case_id=case_id, action="case_seguimiento", accion=accion)
    return entry


def save_case_folders(
    db: Session, case_id: str, carpetas: list[CarpetaInfo], enlace_carpeta: str
) -> Case:
    """
    Guarda el resultado de aprovisionar las carpetas de un caso.

    Raises:
        CaseNotFoundException: si el caso no existe
    """
    record = _get_record(db, case_id)
    case = record.to_case()

    case.carpetas = list(carpetas)
    case.enlace_carpeta = enlace_carpeta
    case.historial_seguimiento = [
        *case.historial_seguimiento,
        new_seguimiento_entry(
            "Carpetas creadas", f"Carpetas del caso disponibles en {enlace_carpeta}"
        ),
    ]
    case.ultima_actualizacion = datetime.now()

    record.update_from(case)
    db.commit()
    return case


def delete_case(db: Session, case_id: str) -> None:
    """
    Borra un caso y sus alertas.

    Raises:
        CaseNotFoundException: si el caso no existe
    """
    record = _get_record(db, case_id)
    db.query(AlertRecord).filter(AlertRecord.case_id == case_id).delete(
        synchronize_session=False
    )
    db.delete(record)
    db.commit()

    logger.info("Caso eliminado", case_id=case_id, action="case_delete")


def remove_duplicate_cases(db: Session) -> list[str]:
    """
    Borra los casos cuyo número de expediente repite el de otro caso.

    Se conserva el primer caso registrado de cada expediente; los casos
    sin expediente nunca se consideran duplicados.

    Returns:
        Ids de los casos eliminados
    """
    records = db.query(CaseRecord).order_by(CaseRecord.fecha_ingreso, CaseRecord.id).all()
    duplicates = find_duplicate_cases([record.to_case() for record in records])
    removed = [case.id for case in duplicates]

    if removed:
        db.query(AlertRecord).filter(AlertRecord.case_id.in_(removed)).delete(
            synchronize_session=False
        )
        db.query(CaseRecord).filter(CaseRecord.id.in_(removed)).delete(
            synchronize_session=False
        )
        db.commit()

    logger.info(
        f"Duplicados eliminados: {len(removed)}",
        action="case_remove_duplicates",
        removed=removed,
    )
    return removed


# =========================================================
# ALERTAS
# =========================================================


def list_alerts(db: Session, unread_only: bool = False) -> list[Alert]:
    """Alertas ordenadas por fecha de aviso."""
    query = db.query(AlertRecord)
    if unread_only:
        query = query.filter(AlertRecord.read.is_(False))
    return [record.to_alert() for record in query.order_by(AlertRecord.date, AlertRecord.id)]


def save_new_alerts(db: Session, alerts: Iterable[Alert]) -> list[Alert]:
    """
    Fusiona alertas recién generadas con las guardadas.

    Las alertas con un id ya existente se ignoran (conservan su `read`).

    Returns:
        Alertas efectivamente añadidas
    """
    existing = list_alerts(db)
    merged = merge_alerts(existing, alerts)
    added = merged[len(existing):]

    for alert in added:
        db.add(AlertRecord.from_alert(alert))
    if added:
        db.commit()
    return added


def _get_alert_record(db: Session, alert_id: str) -> AlertRecord:
    record = db.query(AlertRecord).filter(AlertRecord.id == alert_id).first()
    if record is None:
        raise AlertNotFoundException(alert_id)
    return record


def mark_alert_read(db: Session, alert_id: str) -> Alert:
    """
    Raises:
        AlertNotFoundException: si la alerta no existe
    """
    record = _get_alert_record(db, alert_id)
    record.read = True
    db.commit()
    return record.to_alert()


def mark_all_alerts_read(db: Session, case_id: Optional[str] = None) -> int:
    """
    Marca como leídas todas las alertas (o las de un caso).

    Returns:
        Número de alertas que estaban sin leer
    """
    query = db.query(AlertRecord).filter(AlertRecord.read.is_(False))
    if case_id is not None:
        query = query.filter(AlertRecord.case_id == case_id)
    updated = query.update({AlertRecord.read: True}, synchronize_session=False)
    db.commit()
    return updated
