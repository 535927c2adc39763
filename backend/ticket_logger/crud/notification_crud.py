# backend/ticket_logger/crud/notification_crud.py
"""
Almacén de notificaciones en Redis.

Cada notificación es un documento JSON guardado bajo su propia clave
(notification:<id>) y su ID se añade al final de una lista (notifications)
que conserva el orden de inserción. La lectura recorre esa lista por páginas.
"""
import json
import logging
from typing import Any, AsyncIterator, Dict, Optional
from redis.asyncio import Redis
from ticket_logger.core.config import settings

logger = logging.getLogger(__name__)

NOTIFICATIONS_INDEX_KEY = "notifications"
PAGE_SIZE = 100

# Conexión a Redis (se manejará de forma lazy)
_redis_client: Optional[Redis] = None

def _get_redis_client() -> Redis:
    """Inicializa y devuelve el cliente de Redis."""
    global _redis_client
    if _redis_client is None:
        _redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_client

async def close_redis_client() -> None:
    """Cierra la conexión al apagar la aplicación."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None

def _get_notification_key(notification_id: str) -> str:
    """Genera la clave de Redis para el documento de una notificación."""
    return f"notification:{notification_id}"

# ===============================================
# Operaciones del almacén
# ===============================================

async def insert_notification(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Guarda un documento de notificación. El documento debe traer ya su "id".
    """
    redis = _get_redis_client()
    async with redis.pipeline(transaction=True) as pipe:
        pipe.set(_get_notification_key(document["id"]), json.dumps(document))
        pipe.rpush(NOTIFICATIONS_INDEX_KEY, document["id"])
        await pipe.execute()
    return document

async def get_notification(notification_id: str) -> Optional[Dict[str, Any]]:
    redis = _get_redis_client()
    raw = await redis.get(_get_notification_key(notification_id))
    if raw is None:
        return None
    return json.loads(raw)

async def count_notifications() -> int:
    redis = _get_redis_client()
    return await redis.llen(NOTIFICATIONS_INDEX_KEY)

async def iter_notifications(page_size: int = PAGE_SIZE) -> AsyncIterator[Dict[str, Any]]:
    """
    Recorre las notificaciones en orden de inserción.

    El total se fija al empezar la iteración: lo que se inserte después no
    aparece en este recorrido. Los documentos se leen de page_size en page_size.
    """
    redis = _get_redis_client()
    total = await redis.llen(NOTIFICATIONS_INDEX_KEY)

    for start in range(0, total, page_size):
        end = min(start + page_size, total) - 1
        ids = await redis.lrange(NOTIFICATIONS_INDEX_KEY, start, end)
        if not ids:
            break
        raw_documents = await redis.mget([_get_notification_key(i) for i in ids])
        for notification_id, raw in zip(ids, raw_documents):
            if raw is None:
                logger.warning(f"Notificación {notification_id} indexada pero sin documento")
                continue
            try:
                yield json.loads(raw)
            except json.JSONDecodeError:
                logger.error(f"Error decodificando JSON de la notificación {notification_id}")
