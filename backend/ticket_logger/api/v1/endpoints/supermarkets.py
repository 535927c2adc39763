# backend/ticket_logger/api/v1/endpoints/supermarkets.py
"""
Endpoints REST para operaciones CRUD de supermercados.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.core.i18n import get_message
from ticket_logger.schemas.common_schema import MessageResponse
from ticket_logger.schemas.supermarket_schema import SupermarketCreate, SupermarketResponse
from ticket_logger.services.supermarket_service import supermarket_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=SupermarketResponse, status_code=status.HTTP_201_CREATED)
async def create_supermarket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    supermarket_in: SupermarketCreate,
) -> SupermarketResponse:
    logger.info(f"🆕 SUPERMERCADO: Creando supermercado '{supermarket_in.name}'")
    supermarket = await supermarket_service.create_supermarket(db, supermarket_in, locale)
    logger.info(f"✅ SUPERMERCADO: Creado exitosamente con ID {supermarket.id}")
    return supermarket

@router.put("/{supermarket_id}", response_model=SupermarketResponse)
async def update_supermarket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    supermarket_id: int,
    supermarket_in: SupermarketCreate,
) -> SupermarketResponse:
    logger.info(f"🔄 SUPERMERCADO: Actualizando {supermarket_id}")
    return await supermarket_service.update_supermarket(db, supermarket_id, supermarket_in, locale)

@router.delete("/{supermarket_id}", response_model=MessageResponse)
async def delete_supermarket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    supermarket_id: int,
) -> MessageResponse:
    """Elimina un supermercado; sus ubicaciones y tickets se eliminan en cascada."""
    logger.info(f"🗑️ SUPERMERCADO: Eliminando {supermarket_id}")
    await supermarket_service.delete_supermarket(db, supermarket_id, locale)
    return MessageResponse(detail=get_message("supermarket.deleted", locale))

@router.get("/{supermarket_id}", response_model=SupermarketResponse)
async def read_supermarket(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    supermarket_id: int,
) -> SupermarketResponse:
    logger.debug(f"🔍 SUPERMERCADO: Buscando {supermarket_id}")
    return await supermarket_service.get_supermarket_by_id(db, supermarket_id, locale)

@router.get("", response_model=List[SupermarketResponse])
async def read_supermarkets(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[SupermarketResponse]:
    logger.debug(f"📋 SUPERMERCADOS: Listando - skip={skip}, limit={limit}")
    return await supermarket_service.get_all_supermarkets(db, skip=skip, limit=limit)
