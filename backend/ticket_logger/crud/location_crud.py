# backend/ticket_logger/crud/location_crud.py

"""
Operaciones CRUD para el modelo Location.

Una ubicación se devuelve con su supermercado y su provincia (y la región
de ésta), así que todas las lecturas precargan esas relaciones.
"""

from typing import List, Optional

from sqlalchemy import select, exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ticket_logger.db.base import Location, Province


def _location_query():
    """Consulta base con las relaciones que necesita el DTO precargadas."""
    return select(Location).options(
        selectinload(Location.supermarket),
        selectinload(Location.province).selectinload(Province.region),
    )

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_location(db: AsyncSession, location_id: int) -> Optional[Location]:
    result = await db.execute(_location_query().filter(Location.id == location_id))
    return result.scalars().first()


async def get_locations(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Location]:
    result = await db.execute(_location_query().order_by(Location.id).offset(skip).limit(limit))
    return result.scalars().all()


# ========================================
# VALIDACIONES DE UNICIDAD
# ========================================

async def exists_location_by_address(db: AsyncSession, address: str) -> bool:
    result = await db.execute(select(exists().where(Location.address == address)))
    return bool(result.scalar())


async def exists_location_by_address_and_not_id(db: AsyncSession, address: str, location_id: int) -> bool:
    result = await db.execute(
        select(exists().where(Location.address == address, Location.id != location_id))
    )
    return bool(result.scalar())


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def save_location(db: AsyncSession, location: Location) -> Location:
    db.add(location)
    await db.commit()
    return await get_location(db, location.id)


async def delete_location(db: AsyncSession, location: Location) -> None:
    await db.delete(location)
    await db.commit()
