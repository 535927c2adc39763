# backend/ticket_logger/mappers/category_mapper.py
"""
Conversión entre el modelo Category y sus esquemas.

El árbol de categorías se guarda plano (cada fila apunta a su padre por ID).
Al serializar sólo se sube un nivel: la respuesta lleva un resumen del padre
y nunca sus abuelos ni las hijas, así que no puede haber ciclos.
"""

from typing import Optional

from ticket_logger.db.models.category_model import Category
from ticket_logger.schemas.category_schema import (
    CategoryCreate,
    CategoryResponse,
    ParentCategoryResponse,
)


def to_parent_dto(parent: Optional[Category]) -> Optional[ParentCategoryResponse]:
    if parent is None:
        return None
    return ParentCategoryResponse(id=parent.id, name=parent.name, image=parent.image)


def to_dto(category: Optional[Category]) -> Optional[CategoryResponse]:
    if category is None:
        return None
    return CategoryResponse(
        id=category.id,
        name=category.name,
        image=category.image,
        parent_category=to_parent_dto(category.parent),
    )


def to_entity(category_in: CategoryCreate, parent: Optional[Category] = None, image: Optional[str] = None) -> Category:
    """
    Construye una categoría nueva.

    Args:
        category_in: datos del formulario
        parent: categoría padre ya resuelta (None para categorías raíz)
        image: referencia devuelta por el almacenamiento de ficheros
    """
    return Category(name=category_in.name, parent=parent, image=image)
