# backend/ticket_logger/schemas/notification_schema.py
"""
Esquemas Pydantic para las notificaciones.

Las notificaciones viven en Redis como documentos JSON; su ID es una cadena.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class NotificationResponse(BaseModel):
    id: str
    subject: str
    message: str
    read: bool = False
    created_at: datetime
