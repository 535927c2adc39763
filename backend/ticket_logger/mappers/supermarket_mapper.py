# backend/ticket_logger/mappers/supermarket_mapper.py
from typing import Optional

from ticket_logger.db.models.supermarket_model import Supermarket
from ticket_logger.schemas.supermarket_schema import SupermarketCreate, SupermarketResponse


def to_dto(supermarket: Optional[Supermarket]) -> Optional[SupermarketResponse]:
    if supermarket is None:
        return None
    return SupermarketResponse(id=supermarket.id, name=supermarket.name)


def to_entity(supermarket_in: SupermarketCreate) -> Supermarket:
    return Supermarket(name=supermarket_in.name)
