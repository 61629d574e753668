"""
Tablas SQLAlchemy del sistema.

Los casos se guardan con sus campos escalares en columnas y las listas
(carpetas, adjuntos, historial) como JSON. Las alertas se guardan en su
propia tabla con el id determinista como clave primaria.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reclamos.core.database import Base
from reclamos.models.alert import Alert
from reclamos.models.case import Case


class CaseRecord(Base):
    """Caso (reclamo) persistido."""

    __tablename__ = "casos"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    fecha_ingreso: Mapped[date] = mapped_column(Date, nullable=False)
    nombre_reclamante: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email_reclamante: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    telefono_reclamante: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    provincia: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    localidad: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    organismo_interviniente: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    numero_expediente: Mapped[str] = mapped_column(
        String(128), nullable=False, default="", index=True
    )
    fecha_notificacion: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    fecha_audiencia: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
    hora_audiencia: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    producto_servicio: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    casa_vendedora: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    estado: Mapped[str] = mapped_column(String(32), nullable=False, default="pendiente")
    prioridad: Mapped[str] = mapped_column(String(16), nullable=False, default="media")
    categoria: Mapped[str] = mapped_column(String(128), nullable=False, default="General")
    monto_reclamado: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    observaciones: Mapped[str] = mapped_column(Text, nullable=False, default="")
    enlace_carpeta: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    responsable_asignado: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    ultima_actualizacion: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )

    carpetas: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    documentos_adjuntos: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    historial_seguimiento: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    def to_case(self) -> Case:
        return Case(
            id=self.id,
            fecha_ingreso=self.fecha_ingreso,
            nombre_reclamante=self.nombre_reclamante,
            email_reclamante=self.email_reclamante,
            telefono_reclamante=self.telefono_reclamante,
            provincia=self.provincia,
            localidad=self.localidad,
            organismo_interviniente=self.organismo_interviniente,
            numero_expediente=self.numero_expediente,
            fecha_notificacion=self.fecha_notificacion,
            fecha_audiencia=self.fecha_audiencia,
            hora_audiencia=self.hora_audiencia,
            producto_servicio=self.producto_servicio,
            casa_vendedora=self.casa_vendedora,
            estado=self.estado,
            prioridad=self.prioridad,
            categoria=self.categoria,
            monto_reclamado=self.monto_reclamado,
            observaciones=self.observaciones,
            enlace_carpeta=self.enlace_carpeta,
            responsable_asignado=self.responsable_asignado,
            ultima_actualizacion=self.ultima_actualizacion,
            carpetas=self.carpetas or [],
            documentos_adjuntos=self.documentos_adjuntos or [],
            historial_seguimiento=self.historial_seguimiento or [],
        )

    @classmethod
    def from_case(cls, case: Case) -> "CaseRecord":
        record = cls(id=case.id)
        record.update_from(case)
        return record

    def update_from(self, case: Case) -> None:
        """Copia todos los campos del caso excepto el id (inmutable)."""
        data = case.model_dump(mode="json", exclude={"id"})
        for name in (
            "nombre_reclamante",
            "email_reclamante",
            "telefono_reclamante",
            "provincia",
            "localidad",
            "organismo_interviniente",
            "numero_expediente",
            "hora_audiencia",
            "producto_servicio",
            "casa_vendedora",
            "estado",
            "prioridad",
            "categoria",
            "monto_reclamado",
            "observaciones",
            "enlace_carpeta",
            "responsable_asignado",
            "carpetas",
            "documentos_adjuntos",
            "historial_seguimiento",
        ):
            setattr(self, name, data[name])

        # Fechas con tipos nativos (no su forma JSON)
        self.fecha_ingreso = case.fecha_ingreso
        self.fecha_notificacion = case.fecha_notificacion
        self.fecha_audiencia = case.fecha_audiencia
        self.ultima_actualizacion = case.ultima_actualizacion


class AlertRecord(Base):
    """Alerta persistida (estado leído / no leído)."""

    __tablename__ = "alertas"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    case_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")

    def to_alert(self) -> Alert:
        return Alert(
            id=self.id,
            case_id=self.case_id,
            type=self.type,
            message=self.message,
            date=self.date,
            read=self.read,
            priority=self.priority,
        )

    @classmethod
    def from_alert(cls, alert: Alert) -> "AlertRecord":
        return cls(
            id=alert.id,
            case_id=alert.case_id,
            type=alert.type.value,
            message=alert.message,
            date=alert.date,
            read=alert.read,
            priority=alert.priority.value,
        )
