# backend/ticket_logger/mappers/region_mapper.py
"""
Conversión entre el modelo Region y sus esquemas.

Todas las funciones to_dto de este paquete devuelven None si reciben None,
y ninguna función to_entity asigna el ID (lo genera la base de datos).
"""

from typing import Optional

from ticket_logger.db.models.region_model import Region
from ticket_logger.schemas.region_schema import RegionCreate, RegionResponse


def to_dto(region: Optional[Region]) -> Optional[RegionResponse]:
    if region is None:
        return None
    return RegionResponse(id=region.id, code=region.code, name=region.name)


def to_entity(region_in: RegionCreate) -> Region:
    return Region(code=region_in.code, name=region_in.name)
