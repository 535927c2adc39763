# backend/ticket_logger/mappers/ticket_mapper.py
from typing import List, Optional

from ticket_logger.db.models.location_model import Location
from ticket_logger.db.models.product_model import Product
from ticket_logger.db.models.ticket_model import Ticket
from ticket_logger.mappers import location_mapper, product_mapper
from ticket_logger.schemas.ticket_schema import TicketCreate, TicketResponse


def to_dto(ticket: Optional[Ticket]) -> Optional[TicketResponse]:
    if ticket is None:
        return None
    return TicketResponse(
        id=ticket.id,
        date=ticket.date,
        discount=float(ticket.discount) if ticket.discount is not None else 0.0,
        # TODO: calcular el total (suma de precios menos descuento) cuando se
        # confirme si el descuento es un importe absoluto o un porcentaje.
        total=None,
        location=location_mapper.to_dto(ticket.location),
        products=[product_mapper.to_dto(p) for p in ticket.products],
    )


def to_entity(ticket_in: TicketCreate, location: Location, products: List[Product]) -> Ticket:
    return Ticket(
        date=ticket_in.date,
        discount=ticket_in.discount,
        location=location,
        products=list(products),
    )
