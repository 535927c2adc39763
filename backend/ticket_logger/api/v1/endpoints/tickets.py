# backend/ticket_logger/api/v1/endpoints/tickets.py
"""
Endpoints REST para tickets y para añadir o quitar productos de un ticket.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.core.i18n import get_message
from ticket_logger.schemas.common_schema import MessageResponse
from ticket_logger.schemas.ticket_schema import TicketCreate, TicketResponse
from ticket_logger.services.ticket_service import ticket_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    ticket_in: TicketCreate,
) -> TicketResponse:
    """
    Registra un ticket. La ubicación y todos los productos deben existir.
    """
    logger.info(f"🆕 TICKET: Creando ticket del {ticket_in.date} en la ubicación {ticket_in.location_id}")
    ticket = await ticket_service.create_ticket(db, ticket_in, locale)
    logger.info(f"✅ TICKET: Creado exitosamente con ID {ticket.id}")
    return ticket

@router.put("/{ticket_id}", response_model=TicketResponse)
async def update_ticket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    ticket_id: int,
    ticket_in: TicketCreate,
) -> TicketResponse:
    logger.info(f"🔄 TICKET: Actualizando ticket {ticket_id}")
    return await ticket_service.update_ticket(db, ticket_id, ticket_in, locale)

@router.delete("/{ticket_id}", response_model=MessageResponse)
async def delete_ticket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    ticket_id: int,
) -> MessageResponse:
    logger.info(f"🗑️ TICKET: Eliminando ticket {ticket_id}")
    await ticket_service.delete_ticket(db, ticket_id, locale)
    return MessageResponse(detail=get_message("ticket.deleted", locale))

@router.get("/{ticket_id}", response_model=TicketResponse)
async def read_ticket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    ticket_id: int,
) -> TicketResponse:
    logger.debug(f"🔍 TICKET: Buscando ticket {ticket_id}")
    return await ticket_service.get_ticket_by_id(db, ticket_id, locale)

@router.get("", response_model=List[TicketResponse])
async def read_tickets(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[TicketResponse]:
    logger.debug(f"📋 TICKETS: Listando - skip={skip}, limit={limit}")
    return await ticket_service.get_all_tickets(db, skip=skip, limit=limit)

# ========================================
# PRODUCTOS DE UN TICKET
# ========================================

@router.post("/{ticket_id}/products/{product_id}", response_model=TicketResponse)
async def add_product_to_ticket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    ticket_id: int,
    product_id: int,
) -> TicketResponse:
    """
    Añade un producto al ticket. Si ya estaba, responde 400.
    """
    logger.info(f"➕ TICKET: Añadiendo producto {product_id} al ticket {ticket_id}")
    return await ticket_service.add_product(db, ticket_id, product_id, locale)

@router.delete("/{ticket_id}/products/{product_id}", response_model=TicketResponse)
async def remove_product_from_ticket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    ticket_id: int,
    product_id: int,
) -> TicketResponse:
    """
    Quita un producto del ticket. Si no estaba, responde 400.
    """
    logger.info(f"➖ TICKET: Quitando producto {product_id} del ticket {ticket_id}")
    return await ticket_service.remove_product(db, ticket_id, product_id, locale)
