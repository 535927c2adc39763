# backend/ticket_logger/services/region_service.py
"""
Servicio para operaciones de negocio relacionadas con regiones.

Este servicio se encarga de la lógica de negocio de las regiones: validación
del código único antes de cada escritura, conversión a esquemas de respuesta
y traducción de "no encontrado" en una excepción de dominio.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.exceptions import DuplicateKeyError, NotFoundError
from ticket_logger.core.i18n import get_message
from ticket_logger.crud import region_crud
from ticket_logger.db.models.region_model import Region
from ticket_logger.mappers import region_mapper
from ticket_logger.schemas.region_schema import RegionCreate, RegionResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


class RegionService:
    """
    Servicio para operaciones de negocio relacionadas con regiones.

    Características:
    - Código de región único (alta y modificación excluyendo la propia región)
    - Modificación por sustitución completa de los campos
    - Los errores se lanzan como excepciones de dominio; los endpoints no
      capturan nada, los manejadores globales generan la respuesta
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_all_regions(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[RegionResponse]:
        """
        Obtiene todas las regiones con paginación.

        Args:
            db: Sesión asíncrona de SQLAlchemy
            skip: Número de registros a omitir (paginación)
            limit: Número máximo de registros a devolver (máximo 1000)
        """
        if limit > MAX_PAGE_SIZE: # Prevenir consultas excesivamente grandes
            limit = MAX_PAGE_SIZE
        regions = await region_crud.get_regions(db, skip=skip, limit=limit)
        return [region_mapper.to_dto(r) for r in regions]

    async def get_region_by_id(self, db: AsyncSession, region_id: int, locale: Optional[str] = None) -> RegionResponse:
        region = await self._get_region_or_raise(db, region_id, locale)
        return region_mapper.to_dto(region)

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_region(self, db: AsyncSession, region_in: RegionCreate, locale: Optional[str] = None) -> RegionResponse:
        """
        Crea una nueva región.

        Raises:
            DuplicateKeyError: si ya existe una región con el mismo código
        """
        logger.info(f"Creando una nueva región con código {region_in.code}")
        if await region_crud.exists_region_by_code(db, region_in.code):
            logger.warning(f"El código de región {region_in.code} ya existe")
            raise DuplicateKeyError(get_message("region.codeExist", locale), field="code")

        region = await region_crud.save_region(db, region_mapper.to_entity(region_in))
        logger.info(f"Región creada con ID {region.id}")
        return region_mapper.to_dto(region)

    async def update_region(
        self, db: AsyncSession, region_id: int, region_in: RegionCreate, locale: Optional[str] = None
    ) -> RegionResponse:
        """
        Sustituye los datos de una región existente.

        Conservar el mismo código no es un duplicado; usar el de otra región sí.

        Raises:
            NotFoundError: si la región no existe
            DuplicateKeyError: si otra región ya usa ese código
        """
        logger.info(f"Actualizando la región con ID {region_id}")
        region = await self._get_region_or_raise(db, region_id, locale)

        if await region_crud.exists_region_by_code_and_not_id(db, region_in.code, region_id):
            logger.warning(f"El código de región {region_in.code} ya está en uso por otra región")
            raise DuplicateKeyError(get_message("region.codeExist", locale), field="code")

        region.code = region_in.code
        region.name = region_in.name
        region = await region_crud.save_region(db, region)
        return region_mapper.to_dto(region)

    async def delete_region(self, db: AsyncSession, region_id: int, locale: Optional[str] = None) -> None:
        """
        Elimina una región. Sus provincias, ubicaciones y tickets se eliminan en cascada.
        """
        logger.info(f"Eliminando la región con ID {region_id}")
        region = await self._get_region_or_raise(db, region_id, locale)
        await region_crud.delete_region(db, region)

    # ========================================
    # MÉTODOS AUXILIARES
    # ========================================

    async def _get_region_or_raise(self, db: AsyncSession, region_id: int, locale: Optional[str]) -> Region:
        region = await region_crud.get_region(db, region_id)
        if region is None:
            logger.warning(f"La región con ID {region_id} no existe")
            raise NotFoundError(get_message("region.notFound", locale))
        return region


# Instancia global del servicio
region_service = RegionService()
