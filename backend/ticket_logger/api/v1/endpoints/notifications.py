# backend/ticket_logger/api/v1/endpoints/notifications.py
"""
Endpoints HTTP de notificaciones (montados en /ws/notifications).

- POST guarda la notificación y la publica en /topic/notifications
- GET devuelve las notificaciones guardadas como un array JSON en streaming
"""

import logging
from typing import AsyncIterator, List

from fastapi import APIRouter, status
from fastapi.responses import StreamingResponse

from ticket_logger.schemas.notification_schema import NotificationCreate, NotificationResponse
from ticket_logger.services.notification_service import notification_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _stream_json_array(notifications: AsyncIterator[NotificationResponse]) -> AsyncIterator[str]:
    """Serializa el iterador como un array JSON sin cargarlo entero en memoria."""
    yield "["
    first = True
    async for notification in notifications:
        if not first:
            yield ","
        first = False
        yield notification.model_dump_json()
    yield "]"


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(notification_in: NotificationCreate) -> NotificationResponse:
    """
    Guarda una notificación. Los suscriptores la reciben de forma asíncrona,
    posiblemente después de esta respuesta.
    """
    logger.info(f"🔔 NOTIFICACIÓN: Nueva notificación '{notification_in.subject}'")
    return await notification_service.save(notification_in)


@router.get("", response_model=List[NotificationResponse])
async def read_notifications() -> StreamingResponse:
    logger.debug("📋 NOTIFICACIONES: Listando")
    return StreamingResponse(
        _stream_json_array(notification_service.list_all()),
        media_type="application/json",
    )
