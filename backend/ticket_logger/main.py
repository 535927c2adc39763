# backend/ticket_logger/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo la configuración de rutas, manejadores de errores, documentación
automática y el ciclo de vida de la aplicación.

Características principales:
- Configuración centralizada de la aplicación
- Registro de routers de la API con prefijos
- Manejadores globales de excepciones (respuestas {"detail": ...})
- Ciclo de vida: logging y tablas al arrancar; publicaciones pendientes,
  Redis y conexiones de BD al parar
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.api.error_handlers import register_exception_handlers
from ticket_logger.api.v1.api_router import api_router_v1, ws_router  # Routers de la aplicación
from ticket_logger.core.config import settings  # Configuración centralizada de la aplicación
from ticket_logger.core.logging_config import setup_logging
from ticket_logger.crud import notification_crud
from ticket_logger.db.database import engine, init_db
from ticket_logger.services.notification_broker import notification_broker

logger = logging.getLogger(__name__)

# ========================================
# CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Arranque:
    - Configura el logging a partir de la configuración
    - Crea las tablas (y restricciones UNIQUE) que no existan

    Parada:
    - Espera a las publicaciones de notificaciones en curso
    - Cierra el cliente de Redis y el pool de conexiones
    """
    setup_logging(settings)
    logger.info(f"🚀 Iniciando {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}")
    await init_db()
    logger.info("✅ Esquema de base de datos verificado")

    yield

    logger.info("🛑 Deteniendo la aplicación")
    await notification_broker.drain()
    await notification_crud.close_redis_client()
    await engine.dispose()

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API para el registro de tickets de compra por supermercado, ubicación y categoría",
    lifespan=lifespan,
)

register_exception_handlers(app)

# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

# Recursos REST bajo /api
app.include_router(api_router_v1, prefix=settings.API_PREFIX)

# Broker STOMP (/ws) y notificaciones (/ws/notifications)
app.include_router(ws_router)

# ========================================
# ENDPOINTS RAÍZ Y VERIFICACIÓN DE ESTADO
# ========================================

@app.get("/", tags=["Root"])
async def read_root():
    """
    Endpoint raíz para verificación básica del estado de la API.

    Returns:
        dict: Mensaje de bienvenida con información del proyecto

    Example:
        GET /
        Response: {"message": "Bienvenido a Ticket Logger API v0.1.0"}
    """
    return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}


@app.get("/health", tags=["Root"])
async def health_check(db: AsyncSession = Depends(deps.get_db)):
    """Comprueba que la base de datos responde."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok", "version": settings.PROJECT_VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("ticket_logger.main:app", host=settings.HOST, port=settings.PORT)
