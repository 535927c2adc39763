# backend/ticket_logger/crud/province_crud.py

"""
Operaciones CRUD para el modelo Province.

Las provincias se cargan siempre junto a su región (selectinload) porque el
DTO de salida la incluye.
"""

from typing import List, Optional

from sqlalchemy import select, exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ticket_logger.db.base import Province

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_province(db: AsyncSession, province_id: int) -> Optional[Province]:
    """Obtiene una provincia por su ID, con la región precargada."""
    result = await db.execute(
        select(Province)
        .options(selectinload(Province.region))
        .filter(Province.id == province_id)
    )
    return result.scalars().first()


async def get_provinces(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Province]:
    result = await db.execute(
        select(Province)
        .options(selectinload(Province.region))
        .order_by(Province.id)
        .offset(skip)
        .limit(limit)
    )
    return result.scalars().all()


# ========================================
# VALIDACIONES DE UNICIDAD
# ========================================

async def exists_province_by_code(db: AsyncSession, code: str) -> bool:
    result = await db.execute(select(exists().where(Province.code == code)))
    return bool(result.scalar())


async def exists_province_by_code_and_not_id(db: AsyncSession, code: str, province_id: int) -> bool:
    result = await db.execute(
        select(exists().where(Province.code == code, Province.id != province_id))
    )
    return bool(result.scalar())


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def save_province(db: AsyncSession, province: Province) -> Province:
    db.add(province)
    await db.commit()
    return await get_province(db, province.id)


async def delete_province(db: AsyncSession, province: Province) -> None:
    await db.delete(province)
    await db.commit()
