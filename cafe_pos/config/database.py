# cafe_pos/config/database.py
from contextlib import contextmanager
from typing import Iterator
import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .settings import Settings
from cafe_pos.shared.database.models import Base, Worker

logger = logging.getLogger(__name__)


def create_db_engine(settings: Settings) -> Engine:
    """Crear el engine de la aplicación a partir de la configuración"""
    engine_kwargs = {
        "pool_pre_ping": True,
        "echo": settings.debug
    }

    if settings.is_sqlite:
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.sqlite_busy_timeout
        }
    else:
        engine_kwargs["pool_recycle"] = 300
        if settings.statement_timeout_ms:
            engine_kwargs["connect_args"] = {
                "options": f"-c statement_timeout={settings.statement_timeout_ms}"
            }

    engine = create_engine(settings.database_url, **engine_kwargs)

    if settings.is_sqlite:
        _configure_sqlite(engine)

    return engine


def _configure_sqlite(engine: Engine) -> None:
    """
    SQLite no soporta SELECT FOR UPDATE: cada transacción toma el lock de
    escritura al comenzar (BEGIN IMMEDIATE) para que las ventas concurrentes
    se serialicen en lugar de fallar con 'database is locked'.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Desactivar el BEGIN implícito de pysqlite
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine, session_factory: sessionmaker, settings: Settings) -> None:
    """Crear tablas y asegurar que exista el trabajador del sistema"""
    Base.metadata.create_all(bind=engine)

    db = session_factory()
    try:
        with transaction_scope(db):
            worker = db.get(Worker, settings.default_worker_id)
            if worker is None:
                db.add(Worker(
                    id=settings.default_worker_id,
                    name=settings.default_worker_name,
                    is_active=True
                ))
                logger.info(f"Trabajador del sistema creado (ID: {settings.default_worker_id})")
    finally:
        db.close()


@contextmanager
def transaction_scope(db: Session) -> Iterator[Session]:
    """
    Delimitar una transacción: commit si el bloque termina bien,
    rollback ante cualquier excepción (que se vuelve a lanzar).
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


# Database dependency
def get_db(request: Request) -> Iterator[Session]:
    """Database dependency for FastAPI"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
