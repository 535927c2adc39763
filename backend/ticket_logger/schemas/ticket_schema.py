# backend/ticket_logger/schemas/ticket_schema.py

"""
Esquemas Pydantic para el modelo Ticket.

- TicketCreate: fecha, descuento, ubicación y la lista de productos por ID
- TicketResponse: ubicación completa, productos y un total que por ahora
  se devuelve vacío (ver mappers/ticket_mapper.py)
"""

import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ticket_logger.schemas.location_schema import LocationResponse
from ticket_logger.schemas.product_schema import ProductResponse


class TicketBase(BaseModel):
    date: datetime.date
    discount: float = Field(default=0, ge=0)


class TicketCreate(TicketBase):
    location_id: int
    product_ids: List[int] = Field(..., min_length=1, description="IDs de los productos comprados (al menos uno).")


class TicketResponse(TicketBase):
    id: int
    total: Optional[float] = None
    location: LocationResponse
    products: List[ProductResponse] = []

    model_config = ConfigDict(from_attributes=True)
