# backend/ticket_logger/crud/supermarket_crud.py

"""
Operaciones CRUD para el modelo Supermarket.
"""

from typing import List, Optional

from sqlalchemy import select, exists
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.db.base import Supermarket

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_supermarket(db: AsyncSession, supermarket_id: int) -> Optional[Supermarket]:
    result = await db.execute(select(Supermarket).filter(Supermarket.id == supermarket_id))
    return result.scalars().first()


async def get_supermarkets(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Supermarket]:
    result = await db.execute(select(Supermarket).order_by(Supermarket.id).offset(skip).limit(limit))
    return result.scalars().all()


# ========================================
# VALIDACIONES DE UNICIDAD
# ========================================

async def exists_supermarket_by_name(db: AsyncSession, name: str) -> bool:
    result = await db.execute(select(exists().where(Supermarket.name == name)))
    return bool(result.scalar())


async def exists_supermarket_by_name_and_not_id(db: AsyncSession, name: str, supermarket_id: int) -> bool:
    result = await db.execute(
        select(exists().where(Supermarket.name == name, Supermarket.id != supermarket_id))
    )
    return bool(result.scalar())


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def save_supermarket(db: AsyncSession, supermarket: Supermarket) -> Supermarket:
    db.add(supermarket)
    await db.commit()
    return await get_supermarket(db, supermarket.id)


async def delete_supermarket(db: AsyncSession, supermarket: Supermarket) -> None:
    """Elimina un supermercado y, en cascada, sus ubicaciones y tickets."""
    await db.delete(supermarket)
    await db.commit()
