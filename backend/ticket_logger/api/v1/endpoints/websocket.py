# backend/ticket_logger/api/v1/endpoints/websocket.py
"""
Endpoint WebSocket /ws: broker de mensajes con protocolo STOMP.

Flujo de una conexión:
1. El cliente abre el WebSocket (subprotocolo v12.stomp, v11.stomp o v10.stomp)
2. Envía CONNECT con la cabecera "Authorization: Bearer <jwt>"
3. Si el token es válido recibe CONNECTED; si no, ERROR y cierre (1008)
4. Con SUBSCRIBE a /topic/notifications recibe un MESSAGE por cada
   notificación creada mientras siga conectado
"""

import itertools
import json
import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from ticket_logger.api.deps import get_notification_broker, get_token_verifier
from ticket_logger.core.config import settings
from ticket_logger.core.exceptions import AuthenticationError
from ticket_logger.core.security import Principal, TokenVerifier, authenticate_bearer
from ticket_logger.core.stomp import Frame, FrameError, parse_frame, serialize_frame
from ticket_logger.services.notification_broker import TopicBroker

logger = logging.getLogger(__name__)

router = APIRouter()

SUPPORTED_SUBPROTOCOLS = ("v12.stomp", "v11.stomp", "v10.stomp")
SUPPORTED_VERSIONS = ("1.2", "1.1", "1.0")

# Comandos que se aceptan pero no requieren acción (los mensajes se confirman solos)
IGNORED_COMMANDS = {"ACK", "NACK", "BEGIN", "COMMIT", "ABORT"}


def negotiate_version(accept_version: Optional[str]) -> Optional[str]:
    """Versión más alta que soportan ambos lados. Sin cabecera, STOMP 1.0."""
    if not accept_version:
        return "1.0"
    offered = {v.strip() for v in accept_version.split(",")}
    for version in SUPPORTED_VERSIONS:
        if version in offered:
            return version
    return None


class StompSession:
    """
    Estado de una conexión STOMP.

    El usuario autenticado (principal) se guarda en la propia sesión y se
    consulta desde aquí; no hay contexto global por petición.
    """

    def __init__(self, websocket: WebSocket, broker: TopicBroker, verifier: Optional[TokenVerifier]):
        self.websocket = websocket
        self.broker = broker
        self.verifier = verifier
        self.session_id = uuid.uuid4().hex
        self.principal: Optional[Principal] = None
        # id de suscripción STOMP -> destino
        self.subscriptions: Dict[str, str] = {}
        self._message_ids = itertools.count(1)

    # ========================================
    # ENVÍO DE TRAMAS
    # ========================================

    async def send_frame(self, frame: Frame) -> None:
        await self.websocket.send_text(serialize_frame(frame))

    async def send_error(self, message: str, receipt: Optional[str] = None) -> None:
        """Envía ERROR y cierra la conexión, como exige STOMP."""
        headers = {"message": message}
        if receipt:
            headers["receipt-id"] = receipt
        await self.send_frame(Frame("ERROR", headers))
        await self.websocket.close(code=status.WS_1008_POLICY_VIOLATION)

    def _subscriber(self, subscription_id: str):
        async def deliver(message: Dict[str, Any]) -> None:
            await self.send_frame(Frame(
                "MESSAGE",
                {
                    "destination": self.subscriptions.get(subscription_id, ""),
                    "subscription": subscription_id,
                    "message-id": f"{self.session_id}-{next(self._message_ids)}",
                    "content-type": "application/json",
                },
                json.dumps(message, ensure_ascii=False),
            ))
        return deliver

    def _broker_key(self, subscription_id: str) -> str:
        return f"{self.session_id}:{subscription_id}"

    # ========================================
    # BUCLE PRINCIPAL
    # ========================================

    async def run(self) -> None:
        try:
            while True:
                data = await self.websocket.receive_text()
                try:
                    frame = parse_frame(data)
                except FrameError as e:
                    logger.warning(f"Trama STOMP mal formada en la sesión {self.session_id}: {e}")
                    await self.send_error(f"Trama mal formada: {e}")
                    return
                if frame is None:
                    continue  # heart-beat
                if not await self.handle(frame):
                    return
        except WebSocketDisconnect:
            logger.info(f"🔌 Sesión STOMP {self.session_id} desconectada")
        finally:
            self.close_subscriptions()

    async def handle(self, frame: Frame) -> bool:
        """
        Procesa una trama. Devuelve False si la conexión debe terminar.
        """
        command = frame.command
        receipt = frame.headers.get("receipt")

        if command in ("CONNECT", "STOMP"):
            return await self._handle_connect(frame)

        if self.principal is None:
            await self.send_error("Conexión no autenticada: envía CONNECT primero", receipt)
            return False

        if command == "SUBSCRIBE":
            destination = frame.headers.get("destination")
            subscription_id = frame.headers.get("id")
            if not destination or not subscription_id:
                await self.send_error("SUBSCRIBE requiere las cabeceras destination e id", receipt)
                return False
            self.subscriptions[subscription_id] = destination
            self.broker.subscribe(destination, self._broker_key(subscription_id), self._subscriber(subscription_id))
            logger.info(f"📡 {self.principal.username} suscrito a {destination}")
        elif command == "UNSUBSCRIBE":
            subscription_id = frame.headers.get("id")
            destination = self.subscriptions.pop(subscription_id, None) if subscription_id else None
            if destination:
                self.broker.unsubscribe(destination, self._broker_key(subscription_id))
        elif command == "DISCONNECT":
            if receipt:
                await self.send_frame(Frame("RECEIPT", {"receipt-id": receipt}))
            await self.websocket.close()
            return False
        elif command not in IGNORED_COMMANDS:
            await self.send_error(f"Comando no soportado: {command}", receipt)
            return False

        if receipt:
            await self.send_frame(Frame("RECEIPT", {"receipt-id": receipt}))
        return True

    async def _handle_connect(self, frame: Frame) -> bool:
        version = negotiate_version(frame.headers.get("accept-version"))
        if version is None:
            await self.send_error(f"Versiones soportadas: {','.join(SUPPORTED_VERSIONS)}")
            return False

        if self.verifier is None:
            await self.send_error("Autenticación no configurada en el servidor")
            return False

        authorization = frame.headers.get("Authorization") or frame.headers.get("authorization")
        try:
            self.principal = authenticate_bearer(authorization, self.verifier)
        except AuthenticationError as e:
            logger.warning(f"❌ CONNECT rechazado en la sesión {self.session_id}: {e.message}")
            await self.send_error(e.message)
            return False

        logger.info(f"✅ Sesión STOMP {self.session_id} autenticada como {self.principal.username}")
        await self.send_frame(Frame("CONNECTED", {
            "version": version,
            "heart-beat": "0,0",
            "server": f"{settings.PROJECT_NAME}/{settings.PROJECT_VERSION}",
            "session": self.session_id,
            "user-name": self.principal.username,
        }))
        receipt = frame.headers.get("receipt")
        if receipt:
            await self.send_frame(Frame("RECEIPT", {"receipt-id": receipt}))
        return True

    def close_subscriptions(self) -> None:
        for subscription_id, destination in list(self.subscriptions.items()):
            self.broker.unsubscribe(destination, self._broker_key(subscription_id))
        self.subscriptions.clear()


@router.websocket("/ws")
async def stomp_endpoint(
    websocket: WebSocket,
    broker: TopicBroker = Depends(get_notification_broker),
    verifier: Optional[TokenVerifier] = Depends(get_token_verifier),
):
    """
    Punto de entrada del broker STOMP.
    """
    offered = websocket.scope.get("subprotocols", [])
    subprotocol = next((p for p in offered if p in SUPPORTED_SUBPROTOCOLS), None)
    await websocket.accept(subprotocol=subprotocol)
    logger.info(f"🔌 Nueva conexión WebSocket (subprotocolo {subprotocol})")

    session = StompSession(websocket, broker, verifier)
    await session.run()
