# backend/ticket_logger/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API. Sigue el patrón de Dependency Injection de FastAPI
para promover código reutilizable y testeable.

Principales ventajas de este enfoque:
- Separación de responsabilidades: las dependencias están separadas de la lógica de negocio
- Facilita el testing: se pueden sustituir con app.dependency_overrides
- Gestión centralizada de recursos como conexiones de BD, idioma y verificación de tokens
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.config import settings
from ticket_logger.core.i18n import resolve_locale
from ticket_logger.core.security import TokenVerifier
from ticket_logger.db.database import AsyncSessionLocal
from ticket_logger.services.notification_broker import TopicBroker, notification_broker

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with AsyncSessionLocal() as session:
        yield session

def get_settings():
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings

def get_locale(accept_language: Optional[str] = Header(default=None)) -> str:
    """
    Idioma de quien llama, a partir de la cabecera Accept-Language.
    Se usa para los mensajes de error de los servicios.
    """
    return resolve_locale(accept_language)

@lru_cache
def get_token_verifier() -> Optional[TokenVerifier]:
    """
    Verificador de tokens JWT construido con la clave pública configurada.

    Devuelve None si no hay clave: en ese caso ninguna conexión STOMP se
    puede autenticar.
    """
    public_key = settings.get_jwt_public_key()
    if not public_key:
        logger.warning("JWT_PUBLIC_KEY no configurada: las conexiones a /ws serán rechazadas")
        return None
    return TokenVerifier(public_key, settings.JWT_ALGORITHM)

def get_notification_broker() -> TopicBroker:
    return notification_broker
