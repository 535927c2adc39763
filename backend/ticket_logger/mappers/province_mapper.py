# backend/ticket_logger/mappers/province_mapper.py
from typing import Optional

from ticket_logger.db.models.province_model import Province
from ticket_logger.db.models.region_model import Region
from ticket_logger.mappers import region_mapper
from ticket_logger.schemas.province_schema import ProvinceCreate, ProvinceResponse


def to_dto(province: Optional[Province]) -> Optional[ProvinceResponse]:
    if province is None:
        return None
    return ProvinceResponse(
        id=province.id,
        code=province.code,
        name=province.name,
        region=region_mapper.to_dto(province.region),
    )


def to_entity(province_in: ProvinceCreate, region: Region) -> Province:
    """La región llega ya resuelta por el servicio."""
    return Province(code=province_in.code, name=province_in.name, region=region)
