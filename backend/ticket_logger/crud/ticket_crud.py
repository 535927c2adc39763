# backend/ticket_logger/crud/ticket_crud.py

"""
Operaciones CRUD para el modelo Ticket.

Un ticket se devuelve con su ubicación completa (supermercado, provincia y
región) y con sus productos, así que todas las lecturas usan selectinload
para no disparar cargas perezosas en la sesión asíncrona.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ticket_logger.db.base import Ticket, Location, Province


def _ticket_query():
    return select(Ticket).options(
        selectinload(Ticket.location).selectinload(Location.supermarket),
        selectinload(Ticket.location).selectinload(Location.province).selectinload(Province.region),
        selectinload(Ticket.products),
    )

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_ticket(db: AsyncSession, ticket_id: int) -> Optional[Ticket]:
    """Obtiene un ticket por su ID con todas sus relaciones precargadas."""
    result = await db.execute(_ticket_query().filter(Ticket.id == ticket_id))
    return result.scalars().first()


async def get_tickets(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Ticket]:
    result = await db.execute(_ticket_query().order_by(Ticket.id).offset(skip).limit(limit))
    return result.scalars().all()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def save_ticket(db: AsyncSession, ticket: Ticket) -> Ticket:
    """
    Persiste un ticket nuevo o modificado (incluida su lista de productos).
    """
    db.add(ticket)
    await db.commit()
    return await get_ticket(db, ticket.id)


async def delete_ticket(db: AsyncSession, ticket: Ticket) -> None:
    await db.delete(ticket)
    await db.commit()
