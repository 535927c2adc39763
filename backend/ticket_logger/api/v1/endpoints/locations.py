# backend/ticket_logger/api/v1/endpoints/locations.py
"""
Endpoints REST para operaciones CRUD de ubicaciones.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.core.i18n import get_message
from ticket_logger.schemas.common_schema import MessageResponse
from ticket_logger.schemas.location_schema import LocationCreate, LocationResponse
from ticket_logger.services.location_service import location_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    location_in: LocationCreate,
) -> LocationResponse:
    """
    Crea una ubicación. El supermercado y la provincia deben existir (404 si no)
    y la dirección no puede estar registrada ya (400).
    """
    logger.info(f"🆕 UBICACIÓN: Creando ubicación en '{location_in.address}' ({location_in.city})")
    location = await location_service.create_location(db, location_in, locale)
    logger.info(f"✅ UBICACIÓN: Creada exitosamente con ID {location.id}")
    return location

@router.put("/{location_id}", response_model=LocationResponse)
async def update_location(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    location_id: int,
    location_in: LocationCreate,
) -> LocationResponse:
    logger.info(f"🔄 UBICACIÓN: Actualizando {location_id}")
    return await location_service.update_location(db, location_id, location_in, locale)

@router.delete("/{location_id}", response_model=MessageResponse)
async def delete_location(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    location_id: int,
) -> MessageResponse:
    logger.info(f"🗑️ UBICACIÓN: Eliminando {location_id}")
    await location_service.delete_location(db, location_id, locale)
    return MessageResponse(detail=get_message("location.deleted", locale))

@router.get("/{location_id}", response_model=LocationResponse)
async def read_location(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    location_id: int,
) -> LocationResponse:
    logger.debug(f"🔍 UBICACIÓN: Buscando {location_id}")
    return await location_service.get_location_by_id(db, location_id, locale)

@router.get("", response_model=List[LocationResponse])
async def read_locations(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[LocationResponse]:
    logger.debug(f"📋 UBICACIONES: Listando - skip={skip}, limit={limit}")
    return await location_service.get_all_locations(db, skip=skip, limit=limit)
