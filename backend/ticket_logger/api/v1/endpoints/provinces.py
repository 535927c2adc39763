# backend/ticket_logger/api/v1/endpoints/provinces.py
"""
Endpoints REST para operaciones CRUD de provincias.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.core.i18n import get_message
from ticket_logger.schemas.common_schema import MessageResponse
from ticket_logger.schemas.province_schema import ProvinceCreate, ProvinceResponse
from ticket_logger.services.province_service import province_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=ProvinceResponse, status_code=status.HTTP_201_CREATED)
async def create_province(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    province_in: ProvinceCreate,
) -> ProvinceResponse:
    logger.info(f"🆕 PROVINCIA: Creando provincia con código '{province_in.code}' en la región {province_in.region_id}")
    province = await province_service.create_province(db, province_in, locale)
    logger.info(f"✅ PROVINCIA: Creada exitosamente con ID {province.id}")
    return province

@router.put("/{province_id}", response_model=ProvinceResponse)
async def update_province(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    province_id: int,
    province_in: ProvinceCreate,
) -> ProvinceResponse:
    """Sustituye código, nombre y región de una provincia existente."""
    logger.info(f"🔄 PROVINCIA: Actualizando provincia {province_id}")
    return await province_service.update_province(db, province_id, province_in, locale)

@router.delete("/{province_id}", response_model=MessageResponse)
async def delete_province(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    province_id: int,
) -> MessageResponse:
    logger.info(f"🗑️ PROVINCIA: Eliminando provincia {province_id}")
    await province_service.delete_province(db, province_id, locale)
    return MessageResponse(detail=get_message("province.deleted", locale))

@router.get("/{province_id}", response_model=ProvinceResponse)
async def read_province(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    province_id: int,
) -> ProvinceResponse:
    logger.debug(f"🔍 PROVINCIA: Buscando {province_id}")
    return await province_service.get_province_by_id(db, province_id, locale)

@router.get("", response_model=List[ProvinceResponse])
async def read_provinces(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[ProvinceResponse]:
    logger.debug(f"📋 PROVINCIAS: Listando - skip={skip}, limit={limit}")
    return await province_service.get_all_provinces(db, skip=skip, limit=limit)
