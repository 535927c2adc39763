# backend/ticket_logger/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Los productos no tienen clave natural única: dos productos pueden
llamarse igual y costar distinto (p. ej. en supermercados diferentes).
"""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.db.base import Product

import logging

logger = logging.getLogger(__name__)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    result = await db.execute(select(Product).filter(Product.id == product_id))
    return result.scalars().first()


async def get_products(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Product]:
    result = await db.execute(select(Product).order_by(Product.id).offset(skip).limit(limit))
    return result.scalars().all()


async def get_products_by_ids(db: AsyncSession, product_ids: Sequence[int]) -> List[Product]:
    """
    Obtiene los productos cuyos IDs están en la lista dada.

    Los IDs inexistentes simplemente no aparecen en el resultado; el llamante
    compara tamaños para detectar referencias rotas.
    """
    if not product_ids:
        return []
    result = await db.execute(select(Product).filter(Product.id.in_(set(product_ids))))
    products = result.scalars().all()
    logger.debug(f"Solicitados {len(set(product_ids))} productos, encontrados {len(products)}")
    return products


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def save_product(db: AsyncSession, product: Product) -> Product:
    db.add(product)
    await db.commit()
    return await get_product(db, product.id)


async def delete_product(db: AsyncSession, product: Product) -> None:
    """Elimina un producto; sus filas en ticket_products caen en cascada."""
    await db.delete(product)
    await db.commit()
