# backend/ticket_logger/crud/region_crud.py

"""
Operaciones CRUD para el modelo Region.

Este módulo implementa las operaciones de Create, Read, Update, Delete para regiones,
proporcionando una capa de abstracción entre los servicios y la base de datos.

Funcionalidades principales:
- Consultas por ID y listado paginado
- Validación de código duplicado (alta y modificación)
- Persistencia y borrado (las provincias se borran en cascada en la BD)
"""

from typing import List, Optional

from sqlalchemy import select, exists
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.db.base import Region

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_region(db: AsyncSession, region_id: int) -> Optional[Region]:
    """
    Obtiene una región por su ID.

    Args:
        db: Sesión asíncrona de SQLAlchemy
        region_id: ID único de la región

    Returns:
        Objeto Region si existe, None si no se encuentra
    """
    result = await db.execute(select(Region).filter(Region.id == region_id))
    return result.scalars().first()


async def get_regions(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Region]:
    """Obtiene una lista paginada de regiones ordenada por ID."""
    result = await db.execute(select(Region).order_by(Region.id).offset(skip).limit(limit))
    return result.scalars().all()


# ========================================
# VALIDACIONES DE UNICIDAD
# ========================================

async def exists_region_by_code(db: AsyncSession, code: str) -> bool:
    """
    Indica si ya existe una región con el código dado.

    Se usa antes de insertar. La restricción UNIQUE de la tabla sigue siendo
    la garantía final si dos altas concurrentes pasan esta comprobación.
    """
    result = await db.execute(select(exists().where(Region.code == code)))
    return bool(result.scalar())


async def exists_region_by_code_and_not_id(db: AsyncSession, code: str, region_id: int) -> bool:
    """
    Indica si otra región (distinta de region_id) ya usa el código dado.

    Permite que una modificación conserve su propio código sin dar error.
    """
    result = await db.execute(
        select(exists().where(Region.code == code, Region.id != region_id))
    )
    return bool(result.scalar())


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def save_region(db: AsyncSession, region: Region) -> Region:
    """
    Persiste una región nueva o modificada y la devuelve con su ID asignado.
    """
    db.add(region)
    await db.commit()
    return await get_region(db, region.id)


async def delete_region(db: AsyncSession, region: Region) -> None:
    """
    Elimina una región. Sus provincias (y en cadena ubicaciones y tickets)
    se eliminan por ON DELETE CASCADE.
    """
    await db.delete(region)
    await db.commit()
