# backend/ticket_logger/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo establece la conexión con la base de datos relacional usando
SQLAlchemy y define los componentes básicos que serán utilizados por toda
la aplicación:
- Motor de base de datos (engine)
- Fábrica de sesiones (AsyncSessionLocal)
- Clase base para modelos (Base)
- Creación del esquema al arrancar (init_db)

La función get_db() vive en ticket_logger/api/deps.py junto al resto de dependencias.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from ticket_logger.core.config import settings # Importamos nuestra configuración

# Clase base declarativa para todos los modelos ORM
# Todos los modelos en db/models/ heredarán de esta clase
Base = declarative_base()


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    SQLite no aplica las claves foráneas (ni ON DELETE CASCADE / SET NULL)
    salvo que se active por conexión. PostgreSQL no necesita nada.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Crea un motor asíncrono con la configuración común de la aplicación."""
    engine = create_async_engine(database_url, echo=settings.SQLALCHEMY_ECHO, **kwargs)
    enable_sqlite_foreign_keys(engine)
    return engine


# Crear el motor de base de datos asíncrono
engine = build_engine(settings.DATABASE_URL, pool_pre_ping=True)

# Crear un sessionmaker asíncrono
# expire_on_commit=False es importante para que los objetos sigan siendo utilizables
# después de que la transacción se haya confirmado.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Crea todas las tablas (y sus restricciones UNIQUE) si no existen.
    """
    # Importar los modelos para que queden registrados en Base.metadata
    from ticket_logger.db import base  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
