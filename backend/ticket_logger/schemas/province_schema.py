# backend/ticket_logger/schemas/province_schema.py

"""
Esquemas Pydantic para el modelo Province.

La respuesta incluye la región resumida (id, código y nombre) en lugar del
region_id suelto.
"""

from pydantic import BaseModel, ConfigDict, Field

from ticket_logger.schemas.region_schema import RegionResponse


class ProvinceBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=2, description="Código de la provincia (único).")
    name: str = Field(..., min_length=1, max_length=100)


class ProvinceCreate(ProvinceBase):
    region_id: int = Field(..., description="ID de la región a la que pertenece.")


class ProvinceResponse(ProvinceBase):
    id: int
    region: RegionResponse

    model_config = ConfigDict(from_attributes=True)
