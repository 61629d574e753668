"""Fixtures pytest: base de datos en memoria, cliente API y factoría de casos."""
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from reclamos.core.database import Base, get_db
from reclamos.models import records  # noqa: F401
from reclamos.models.case import Case


@pytest.fixture(scope="function")
def engine():
    """Engine SQLite en memoria compartido por todas las sesiones del test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """Sesión DB en memoria para tests."""
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    session = Session()

    yield session

    session.close()


@pytest.fixture
def client(engine):
    """Cliente de test con get_db apuntando a la base en memoria."""
    from reclamos.main import app

    Session = sessionmaker(bind=engine, expire_on_commit=False)

    def override_get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_case():
    """Factoría de casos con valores por defecto razonables."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": f"CASO-20240601-{counter['n']:03d}",
            "fecha_ingreso": date(2024, 6, 1),
            "nombre_reclamante": f"Reclamante {counter['n']}",
            "provincia": "Buenos Aires",
            "localidad": "La Plata",
            "organismo_interviniente": "Defensa del Consumidor",
            "producto_servicio": "Heladera",
            "casa_vendedora": "Electro SA",
            "ultima_actualizacion": datetime(2024, 6, 1, 12, 0),
        }
        data.update(overrides)
        return Case(**data)

    return _make


@pytest.fixture
def case_payload():
    """Payload mínimo válido para crear un caso por API."""
    return {
        "fecha_ingreso": "2024-06-01",
        "nombre_reclamante": "Juan Pérez",
        "email_reclamante": "juan@example.com",
        "provincia": "Córdoba",
        "localidad": "Río Cuarto",
        "organismo_interviniente": "Dirección de Defensa del Consumidor",
        "numero_expediente": "EXP-001",
        "producto_servicio": "Lavarropas",
        "casa_vendedora": "Hogar SRL",
        "prioridad": "alta",
        "categoria": "Electrodomésticos",
        "responsable_asignado": "Ana",
    }
