# backend/ticket_logger/services/notification_broker.py
"""
Broker en memoria de publicación/suscripción por destino.

Cada suscriptor es una corrutina que recibe el mensaje (un dict serializable
a JSON). Las sesiones STOMP del endpoint /ws se registran aquí al recibir un
SUBSCRIBE y se dan de baja con UNSUBSCRIBE o al desconectarse.

dispatch() entrega en segundo plano: el llamante no espera a los suscriptores
y un fallo o un timeout en la entrega sólo se registra en el log.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from ticket_logger.core.config import settings

logger = logging.getLogger(__name__)

Subscriber = Callable[[Dict[str, Any]], Awaitable[None]]


class TopicBroker:
    def __init__(self, publish_timeout: Optional[float] = None):
        # destino -> {id de suscripción -> callback}
        self.subscriptions: Dict[str, Dict[str, Subscriber]] = {}
        self.publish_timeout = publish_timeout if publish_timeout is not None else settings.NOTIFICATION_PUBLISH_TIMEOUT
        self._pending: Set[asyncio.Task] = set()

    def subscribe(self, destination: str, subscription_id: str, callback: Subscriber) -> None:
        self.subscriptions.setdefault(destination, {})[subscription_id] = callback
        logger.info(f"Suscripción {subscription_id} registrada en {destination}")

    def unsubscribe(self, destination: str, subscription_id: str) -> None:
        subscribers = self.subscriptions.get(destination)
        if subscribers is None:
            return
        subscribers.pop(subscription_id, None)
        if not subscribers:
            del self.subscriptions[destination]
        logger.info(f"Suscripción {subscription_id} eliminada de {destination}")

    def subscriber_count(self, destination: str) -> int:
        return len(self.subscriptions.get(destination, {}))

    async def publish(self, destination: str, message: Dict[str, Any]) -> int:
        """
        Entrega el mensaje a todos los suscriptores del destino a la vez.

        Cada entrega tiene su propio límite de publish_timeout segundos: un
        suscriptor lento o que falla no impide la entrega al resto.

        Returns:
            Número de entregas correctas
        """
        # Copia: un suscriptor puede darse de baja mientras se entrega
        targets = list(self.subscriptions.get(destination, {}).items())
        results = await asyncio.gather(
            *(asyncio.wait_for(callback(message), timeout=self.publish_timeout) for _, callback in targets),
            return_exceptions=True,
        )

        delivered = 0
        for (subscription_id, _), result in zip(targets, results):
            if isinstance(result, asyncio.TimeoutError):
                logger.error(f"Timeout ({self.publish_timeout}s) entregando a la suscripción {subscription_id} en {destination}")
            elif isinstance(result, BaseException):
                logger.error(f"Error entregando mensaje a la suscripción {subscription_id} en {destination}: {result}")
            else:
                delivered += 1
        return delivered

    def dispatch(self, destination: str, message: Dict[str, Any]) -> asyncio.Task:
        """
        Programa la publicación en una tarea propia y vuelve inmediatamente.

        La tarea no depende de la petición que la creó: si ésta se cancela,
        la publicación sigue su curso.
        """
        task = asyncio.create_task(self._publish_in_background(destination, message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _publish_in_background(self, destination: str, message: Dict[str, Any]) -> None:
        try:
            delivered = await self.publish(destination, message)
            logger.debug(f"Mensaje publicado en {destination} a {delivered} suscriptores")
        except Exception as e:
            logger.error(f"Error publicando en {destination}: {e}", exc_info=True)

    async def drain(self) -> None:
        """Espera a que terminen las publicaciones pendientes (al apagar y en tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


# Instancia global del broker
notification_broker = TopicBroker()
