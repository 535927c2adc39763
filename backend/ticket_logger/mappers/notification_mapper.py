# backend/ticket_logger/mappers/notification_mapper.py
"""
Conversión entre documentos de Redis (dict) y esquemas de notificación.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ticket_logger.schemas.notification_schema import NotificationCreate, NotificationResponse


def to_dto(document: Optional[Dict[str, Any]]) -> Optional[NotificationResponse]:
    if document is None:
        return None
    return NotificationResponse(
        id=document["id"],
        subject=document["subject"],
        message=document["message"],
        read=document.get("read", False),
        created_at=document["created_at"],
    )


def to_document(notification_in: NotificationCreate) -> Dict[str, Any]:
    """Nuevo documento con ID generado, no leído y fecha de creación en UTC."""
    return {
        "id": uuid.uuid4().hex,
        "subject": notification_in.subject,
        "message": notification_in.message,
        "read": False,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
