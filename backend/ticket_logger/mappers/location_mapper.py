# backend/ticket_logger/mappers/location_mapper.py
from typing import Optional

from ticket_logger.db.models.location_model import Location
from ticket_logger.db.models.province_model import Province
from ticket_logger.db.models.supermarket_model import Supermarket
from ticket_logger.mappers import province_mapper, supermarket_mapper
from ticket_logger.schemas.location_schema import LocationCreate, LocationResponse


def to_dto(location: Optional[Location]) -> Optional[LocationResponse]:
    if location is None:
        return None
    return LocationResponse(
        id=location.id,
        address=location.address,
        city=location.city,
        supermarket=supermarket_mapper.to_dto(location.supermarket),
        province=province_mapper.to_dto(location.province),
    )


def to_entity(location_in: LocationCreate, supermarket: Supermarket, province: Province) -> Location:
    return Location(
        address=location_in.address,
        city=location_in.city,
        supermarket=supermarket,
        province=province,
    )
