# backend/ticket_logger/api/v1/endpoints/regions.py
"""
Endpoints REST para operaciones CRUD de regiones.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.core.i18n import get_message
from ticket_logger.schemas.common_schema import MessageResponse
from ticket_logger.schemas.region_schema import RegionCreate, RegionResponse
from ticket_logger.services.region_service import region_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=RegionResponse, status_code=status.HTTP_201_CREATED)
async def create_region(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    region_in: RegionCreate,
) -> RegionResponse:
    """Crea una nueva región. El código no puede repetirse."""
    logger.info(f"🆕 REGIÓN: Creando región con código '{region_in.code}'")
    region = await region_service.create_region(db, region_in, locale)
    logger.info(f"✅ REGIÓN: Creada exitosamente con ID {region.id}")
    return region

@router.put("/{region_id}", response_model=RegionResponse)
async def update_region(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    region_id: int,
    region_in: RegionCreate,
) -> RegionResponse:
    """Sustituye los datos de una región existente."""
    logger.info(f"🔄 REGIÓN: Actualizando región {region_id}")
    return await region_service.update_region(db, region_id, region_in, locale)

@router.delete("/{region_id}", response_model=MessageResponse)
async def delete_region(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    region_id: int,
) -> MessageResponse:
    """Elimina una región junto con sus provincias, ubicaciones y tickets."""
    logger.info(f"🗑️ REGIÓN: Eliminando región {region_id}")
    await region_service.delete_region(db, region_id, locale)
    return MessageResponse(detail=get_message("region.deleted", locale))

@router.get("/{region_id}", response_model=RegionResponse)
async def read_region(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    region_id: int,
) -> RegionResponse:
    logger.debug(f"🔍 REGIÓN: Buscando región {region_id}")
    return await region_service.get_region_by_id(db, region_id, locale)

@router.get("", response_model=List[RegionResponse])
async def read_regions(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[RegionResponse]:
    logger.debug(f"📋 REGIONES: Listando - skip={skip}, limit={limit}")
    return await region_service.get_all_regions(db, skip=skip, limit=limit)
