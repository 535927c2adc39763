# backend/ticket_logger/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Los esquemas definen la estructura de datos que fluye a través de la API:
- Validación automática de tipos de datos
- Serialización/deserialización JSON
- Documentación automática en OpenAPI/Swagger
- Separación entre modelo de base de datos y API

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear y sustituir categorías (POST/PUT, multipart)
- ParentCategoryResponse: Resumen de la categoría padre
- CategoryResponse: Para respuestas de la API (GET)
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str = Field(..., min_length=2, max_length=100)


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """
    Datos de alta o modificación de una categoría.

    La imagen no forma parte del esquema: llega como fichero en el formulario
    y el servicio guarda sólo la referencia devuelta por el almacenamiento.
    """
    parent_category_id: Optional[int] = None


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class ParentCategoryResponse(BaseModel):
    """Resumen de la categoría padre: un solo nivel, sin abuelos ni hijas."""
    id: int
    name: str
    image: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(CategoryBase):
    """Esquema para las respuestas de la API al leer categorías."""
    id: int
    image: Optional[str] = None
    parent_category: Optional[ParentCategoryResponse] = None

    # Las subcategorías no se anidan en la respuesta. Para navegar el árbol se
    # filtra el listado por parent_category.id en el cliente.

    model_config = ConfigDict(from_attributes=True)
