# backend/ticket_logger/schemas/region_schema.py

"""
Esquemas Pydantic para el modelo Region.

Patrón de esquemas utilizado:
- RegionBase: Propiedades comunes compartidas
- RegionCreate: Para crear y actualizar regiones (POST/PUT, sustitución completa)
- RegionResponse: Para respuestas de la API (GET)
"""

from pydantic import BaseModel, ConfigDict, Field

# ========================================
# ESQUEMA BASE
# ========================================

class RegionBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de región."""
    code: str = Field(..., min_length=1, max_length=2, description="Código de la región (único).")
    name: str = Field(..., min_length=1, max_length=100)


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class RegionCreate(RegionBase):
    """Esquema para crear o sustituir una región. El ID lo genera la base de datos."""
    pass


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class RegionResponse(RegionBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
