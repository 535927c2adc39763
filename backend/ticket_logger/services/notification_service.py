# backend/ticket_logger/services/notification_service.py
"""
Servicio de notificaciones.

Guarda la notificación en Redis y, una vez guardada, la publica en el topic
de notificaciones para los clientes conectados por STOMP. La publicación es
asíncrona: la respuesta al llamante no espera a los suscriptores y un fallo
al publicar no deshace el guardado.
"""

import logging
from typing import AsyncIterator, Optional

from ticket_logger.core.config import settings
from ticket_logger.crud import notification_crud
from ticket_logger.mappers import notification_mapper
from ticket_logger.schemas.notification_schema import NotificationCreate, NotificationResponse
from ticket_logger.services.notification_broker import TopicBroker, notification_broker

logger = logging.getLogger(__name__)


class NotificationService:

    def __init__(self, broker: Optional[TopicBroker] = None, topic: Optional[str] = None):
        self.broker = broker or notification_broker
        self.topic = topic or settings.NOTIFICATIONS_TOPIC

    async def save(self, notification_in: NotificationCreate) -> NotificationResponse:
        """
        Persiste la notificación y programa su publicación.

        Returns:
            La notificación guardada, con ID generado y read=False
        """
        document = notification_mapper.to_document(notification_in)
        await notification_crud.insert_notification(document)
        notification = notification_mapper.to_dto(document)
        logger.info(f"Notificación {notification.id} guardada: {notification.subject}")

        self.broker.dispatch(self.topic, notification.model_dump(mode="json"))
        return notification

    async def list_all(self) -> AsyncIterator[NotificationResponse]:
        """
        Recorre las notificaciones guardadas hasta el momento de la llamada.

        No es una suscripción: termina al llegar al final de lo almacenado.
        """
        async for document in notification_crud.iter_notifications():
            yield notification_mapper.to_dto(document)


# Instancia global del servicio
notification_service = NotificationService()
