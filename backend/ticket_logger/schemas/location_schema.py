# backend/ticket_logger/schemas/location_schema.py

"""
Esquemas Pydantic para el modelo Location.

Patrón de esquemas utilizado:
- LocationBase: Propiedades comunes compartidas
- LocationCreate: Entrada con las referencias por ID
- LocationResponse: Salida con supermercado y provincia resumidos
"""

from pydantic import BaseModel, ConfigDict, Field

from ticket_logger.schemas.province_schema import ProvinceResponse
from ticket_logger.schemas.supermarket_schema import SupermarketResponse


class LocationBase(BaseModel):
    address: str = Field(..., min_length=1, max_length=255, description="Dirección (única).")
    city: str = Field(..., min_length=1, max_length=100)


class LocationCreate(LocationBase):
    supermarket_id: int
    province_id: int


class LocationResponse(LocationBase):
    id: int
    supermarket: SupermarketResponse
    province: ProvinceResponse

    model_config = ConfigDict(from_attributes=True)
