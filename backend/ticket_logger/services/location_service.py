# backend/ticket_logger/services/location_service.py
"""
Servicio para operaciones de negocio relacionadas con ubicaciones.

Una ubicación necesita un supermercado y una provincia existentes, y su
dirección no puede repetirse.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.exceptions import DuplicateKeyError, NotFoundError
from ticket_logger.core.i18n import get_message
from ticket_logger.crud import location_crud, province_crud, supermarket_crud
from ticket_logger.db.models.location_model import Location
from ticket_logger.mappers import location_mapper
from ticket_logger.schemas.location_schema import LocationCreate, LocationResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


class LocationService:
    """
    Servicio para operaciones de negocio relacionadas con ubicaciones.

    Características:
    - Dirección única (alta y modificación excluyendo la propia ubicación)
    - El supermercado y la provincia referenciados deben existir
    - La respuesta incluye supermercado y provincia (con su región)
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_all_locations(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[LocationResponse]:
        if limit > MAX_PAGE_SIZE:
            limit = MAX_PAGE_SIZE
        locations = await location_crud.get_locations(db, skip=skip, limit=limit)
        return [location_mapper.to_dto(loc) for loc in locations]

    async def get_location_by_id(self, db: AsyncSession, location_id: int, locale: Optional[str] = None) -> LocationResponse:
        return location_mapper.to_dto(await self._get_location_or_raise(db, location_id, locale))

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_location(self, db: AsyncSession, location_in: LocationCreate, locale: Optional[str] = None) -> LocationResponse:
        logger.info(f"Creando una nueva ubicación en {location_in.address}")
        if await location_crud.exists_location_by_address(db, location_in.address):
            logger.warning(f"Ya existe una ubicación en {location_in.address}")
            raise DuplicateKeyError(get_message("location.addressExist", locale), field="address")

        supermarket, province = await self._resolve_references(db, location_in, locale)
        location = await location_crud.save_location(db, location_mapper.to_entity(location_in, supermarket, province))
        logger.info(f"Ubicación creada con ID {location.id}")
        return location_mapper.to_dto(location)

    async def update_location(
        self, db: AsyncSession, location_id: int, location_in: LocationCreate, locale: Optional[str] = None
    ) -> LocationResponse:
        logger.info(f"Actualizando la ubicación con ID {location_id}")
        location = await self._get_location_or_raise(db, location_id, locale)

        if await location_crud.exists_location_by_address_and_not_id(db, location_in.address, location_id):
            logger.warning(f"La dirección {location_in.address} ya está en uso por otra ubicación")
            raise DuplicateKeyError(get_message("location.addressExist", locale), field="address")

        supermarket, province = await self._resolve_references(db, location_in, locale)

        location.address = location_in.address
        location.city = location_in.city
        location.supermarket = supermarket
        location.province = province
        location = await location_crud.save_location(db, location)
        return location_mapper.to_dto(location)

    async def delete_location(self, db: AsyncSession, location_id: int, locale: Optional[str] = None) -> None:
        logger.info(f"Eliminando la ubicación con ID {location_id}")
        location = await self._get_location_or_raise(db, location_id, locale)
        await location_crud.delete_location(db, location)

    # ========================================
    # MÉTODOS AUXILIARES
    # ========================================

    async def _get_location_or_raise(self, db: AsyncSession, location_id: int, locale: Optional[str]) -> Location:
        location = await location_crud.get_location(db, location_id)
        if location is None:
            logger.warning(f"La ubicación con ID {location_id} no existe")
            raise NotFoundError(get_message("location.notFound", locale))
        return location

    async def _resolve_references(self, db: AsyncSession, location_in: LocationCreate, locale: Optional[str]):
        """Devuelve (supermercado, provincia) o lanza NotFoundError."""
        supermarket = await supermarket_crud.get_supermarket(db, location_in.supermarket_id)
        if supermarket is None:
            logger.warning(f"El supermercado con ID {location_in.supermarket_id} no existe")
            raise NotFoundError(get_message("location.supermarketNotFound", locale))

        province = await province_crud.get_province(db, location_in.province_id)
        if province is None:
            logger.warning(f"La provincia con ID {location_in.province_id} no existe")
            raise NotFoundError(get_message("location.provinceNotFound", locale))

        return supermarket, province


# Instancia global del servicio
location_service = LocationService()
