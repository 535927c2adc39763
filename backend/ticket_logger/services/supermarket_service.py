# backend/ticket_logger/services/supermarket_service.py
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.exceptions import DuplicateKeyError, NotFoundError
from ticket_logger.core.i18n import get_message
from ticket_logger.crud import supermarket_crud
from ticket_logger.db.models.supermarket_model import Supermarket
from ticket_logger.mappers import supermarket_mapper
from ticket_logger.schemas.supermarket_schema import SupermarketCreate, SupermarketResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


class SupermarketService:
    """Supermercados: el nombre es la clave natural."""

    async def get_all_supermarkets(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[SupermarketResponse]:
        if limit > MAX_PAGE_SIZE:
            limit = MAX_PAGE_SIZE
        supermarkets = await supermarket_crud.get_supermarkets(db, skip=skip, limit=limit)
        return [supermarket_mapper.to_dto(s) for s in supermarkets]

    async def get_supermarket_by_id(self, db: AsyncSession, supermarket_id: int, locale: Optional[str] = None) -> SupermarketResponse:
        return supermarket_mapper.to_dto(await self._get_supermarket_or_raise(db, supermarket_id, locale))

    async def create_supermarket(
        self, db: AsyncSession, supermarket_in: SupermarketCreate, locale: Optional[str] = None
    ) -> SupermarketResponse:
        logger.info(f"Creando un nuevo supermercado con nombre {supermarket_in.name}")
        if await supermarket_crud.exists_supermarket_by_name(db, supermarket_in.name):
            logger.warning(f"El supermercado {supermarket_in.name} ya existe")
            raise DuplicateKeyError(get_message("supermarket.nameExist", locale), field="name")

        supermarket = await supermarket_crud.save_supermarket(db, supermarket_mapper.to_entity(supermarket_in))
        logger.info(f"Supermercado creado con ID {supermarket.id}")
        return supermarket_mapper.to_dto(supermarket)

    async def update_supermarket(
        self, db: AsyncSession, supermarket_id: int, supermarket_in: SupermarketCreate, locale: Optional[str] = None
    ) -> SupermarketResponse:
        logger.info(f"Actualizando el supermercado con ID {supermarket_id}")
        supermarket = await self._get_supermarket_or_raise(db, supermarket_id, locale)

        if await supermarket_crud.exists_supermarket_by_name_and_not_id(db, supermarket_in.name, supermarket_id):
            logger.warning(f"El nombre {supermarket_in.name} ya está en uso por otro supermercado")
            raise DuplicateKeyError(get_message("supermarket.nameExist", locale), field="name")

        supermarket.name = supermarket_in.name
        supermarket = await supermarket_crud.save_supermarket(db, supermarket)
        return supermarket_mapper.to_dto(supermarket)

    async def delete_supermarket(self, db: AsyncSession, supermarket_id: int, locale: Optional[str] = None) -> None:
        logger.info(f"Eliminando el supermercado con ID {supermarket_id}")
        supermarket = await self._get_supermarket_or_raise(db, supermarket_id, locale)
        await supermarket_crud.delete_supermarket(db, supermarket)

    async def _get_supermarket_or_raise(self, db: AsyncSession, supermarket_id: int, locale: Optional[str]) -> Supermarket:
        supermarket = await supermarket_crud.get_supermarket(db, supermarket_id)
        if supermarket is None:
            logger.warning(f"El supermercado con ID {supermarket_id} no existe")
            raise NotFoundError(get_message("supermarket.notFound", locale))
        return supermarket


# Instancia global del servicio
supermarket_service = SupermarketService()
