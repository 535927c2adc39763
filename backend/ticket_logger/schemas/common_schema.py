# backend/ticket_logger/schemas/common_schema.py
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Cuerpo de las respuestas sin entidad: confirmaciones de borrado y errores."""
    detail: str
