# backend/ticket_logger/schemas/supermarket_schema.py
from pydantic import BaseModel, ConfigDict, Field


class SupermarketBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Nombre del supermercado (único).")


class SupermarketCreate(SupermarketBase):
    pass


class SupermarketResponse(SupermarketBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
