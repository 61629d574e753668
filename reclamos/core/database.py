from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from reclamos.core.config import settings
from reclamos.core.exceptions import DatabaseException

Base = declarative_base()

# Singleton para el engine y session factory
_engine = None
_session_factory = None


def get_database_url() -> str:
    return settings.database_url


def _ensure_sqlite_dir(database_url: str) -> None:
    """Crea el directorio del fichero SQLite si no existe."""
    path = database_url.replace("sqlite:///", "", 1)
    if path and path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)


def get_engine():
    """Obtiene el engine de base de datos (singleton)."""
    global _engine

    if _engine is None:
        database_url = get_database_url()

        connect_args = {}
        if database_url.startswith("sqlite"):
            _ensure_sqlite_dir(database_url)
            connect_args = {
                "check_same_thread": False,
                "timeout": 30,
            }

        _engine = create_engine(
            database_url,
            echo=False,
            connect_args=connect_args,
            pool_pre_ping=True,
        )

        if database_url.startswith("sqlite"):
            @event.listens_for(_engine, "connect")
            def set_sqlite_pragma(dbapi_conn, connection_record):
                cursor = dbapi_conn.cursor()
                try:
                    cursor.execute("PRAGMA journal_mode=WAL")
                    cursor.execute("PRAGMA synchronous=NORMAL")
                    cursor.execute("PRAGMA busy_timeout=30000")
                finally:
                    cursor.close()

    return _engine


def get_session_factory():
    """Obtiene el session factory (singleton)."""
    global _session_factory

    if _session_factory is None:
        engine = get_engine()
        _session_factory = sessionmaker(
            bind=engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    return _session_factory


def get_db():
    """
    Dependency para FastAPI.
    Proporciona una sesión por request.

    NO hace commit automático: cada operación del store hace el suyo.
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> list[str]:
    """
    Crea todas las tablas registradas en los modelos.

    Returns:
        Nombres de las tablas registradas

    Raises:
        DatabaseException: si no se pueden crear las tablas
    """
    from reclamos.models import records  # noqa: F401

    try:
        Base.metadata.create_all(bind=get_engine())
    except SQLAlchemyError as e:
        raise DatabaseException(
            "No se pudo inicializar la base de datos",
            details={"database_url": get_database_url()},
            original_error=e,
        )
    return sorted(Base.metadata.tables.keys())
