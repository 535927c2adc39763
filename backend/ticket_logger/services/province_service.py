# backend/ticket_logger/services/province_service.py
"""
Servicio para operaciones de negocio relacionadas con provincias.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.exceptions import DuplicateKeyError, NotFoundError
from ticket_logger.core.i18n import get_message
from ticket_logger.crud import province_crud, region_crud
from ticket_logger.db.models.province_model import Province
from ticket_logger.db.models.region_model import Region
from ticket_logger.mappers import province_mapper
from ticket_logger.schemas.province_schema import ProvinceCreate, ProvinceResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


class ProvinceService:
    """
    Provincias: código único y región obligatoria.
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_all_provinces(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[ProvinceResponse]:
        if limit > MAX_PAGE_SIZE:
            limit = MAX_PAGE_SIZE
        provinces = await province_crud.get_provinces(db, skip=skip, limit=limit)
        return [province_mapper.to_dto(p) for p in provinces]

    async def get_province_by_id(self, db: AsyncSession, province_id: int, locale: Optional[str] = None) -> ProvinceResponse:
        return province_mapper.to_dto(await self._get_province_or_raise(db, province_id, locale))

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_province(self, db: AsyncSession, province_in: ProvinceCreate, locale: Optional[str] = None) -> ProvinceResponse:
        """
        Crea una provincia comprobando el código y la existencia de la región.
        """
        logger.info(f"Creando una nueva provincia con código {province_in.code}")
        if await province_crud.exists_province_by_code(db, province_in.code):
            logger.warning(f"El código de provincia {province_in.code} ya existe")
            raise DuplicateKeyError(get_message("province.codeExist", locale), field="code")

        region = await self._get_region_or_raise(db, province_in.region_id, locale)
        province = await province_crud.save_province(db, province_mapper.to_entity(province_in, region))
        logger.info(f"Provincia creada con ID {province.id}")
        return province_mapper.to_dto(province)

    async def update_province(
        self, db: AsyncSession, province_id: int, province_in: ProvinceCreate, locale: Optional[str] = None
    ) -> ProvinceResponse:
        logger.info(f"Actualizando la provincia con ID {province_id}")
        province = await self._get_province_or_raise(db, province_id, locale)

        if await province_crud.exists_province_by_code_and_not_id(db, province_in.code, province_id):
            logger.warning(f"El código de provincia {province_in.code} ya está en uso por otra provincia")
            raise DuplicateKeyError(get_message("province.codeExist", locale), field="code")

        region = await self._get_region_or_raise(db, province_in.region_id, locale)

        province.code = province_in.code
        province.name = province_in.name
        province.region = region
        province = await province_crud.save_province(db, province)
        return province_mapper.to_dto(province)

    async def delete_province(self, db: AsyncSession, province_id: int, locale: Optional[str] = None) -> None:
        logger.info(f"Eliminando la provincia con ID {province_id}")
        province = await self._get_province_or_raise(db, province_id, locale)
        await province_crud.delete_province(db, province)

    # ========================================
    # MÉTODOS AUXILIARES
    # ========================================

    async def _get_province_or_raise(self, db: AsyncSession, province_id: int, locale: Optional[str]) -> Province:
        province = await province_crud.get_province(db, province_id)
        if province is None:
            logger.warning(f"La provincia con ID {province_id} no existe")
            raise NotFoundError(get_message("province.notFound", locale))
        return province

    async def _get_region_or_raise(self, db: AsyncSession, region_id: int, locale: Optional[str]) -> Region:
        region = await region_crud.get_region(db, region_id)
        if region is None:
            logger.warning(f"La región con ID {region_id} indicada para la provincia no existe")
            raise NotFoundError(get_message("province.regionNotFound", locale))
        return region


# Instancia global del servicio
province_service = ProvinceService()
