# backend/ticket_logger/services/product_service.py
"""
Servicio para operaciones de negocio relacionadas con productos.

Los productos no tienen clave natural, así que no hay validación de
duplicados: sólo existencia en lectura, modificación y borrado.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.exceptions import NotFoundError
from ticket_logger.core.i18n import get_message
from ticket_logger.crud import product_crud
from ticket_logger.db.models.product_model import Product
from ticket_logger.mappers import product_mapper
from ticket_logger.schemas.product_schema import ProductCreate, ProductResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


class ProductService:

    async def get_all_products(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[ProductResponse]:
        if limit > MAX_PAGE_SIZE:
            limit = MAX_PAGE_SIZE
        products = await product_crud.get_products(db, skip=skip, limit=limit)
        return [product_mapper.to_dto(p) for p in products]

    async def get_product_by_id(self, db: AsyncSession, product_id: int, locale: Optional[str] = None) -> ProductResponse:
        return product_mapper.to_dto(await self._get_product_or_raise(db, product_id, locale))

    async def create_product(self, db: AsyncSession, product_in: ProductCreate, locale: Optional[str] = None) -> ProductResponse:
        logger.info(f"Creando un nuevo producto: {product_in.name}")
        product = await product_crud.save_product(db, product_mapper.to_entity(product_in))
        logger.info(f"Producto creado con ID {product.id}")
        return product_mapper.to_dto(product)

    async def update_product(
        self, db: AsyncSession, product_id: int, product_in: ProductCreate, locale: Optional[str] = None
    ) -> ProductResponse:
        logger.info(f"Actualizando el producto con ID {product_id}")
        product = await self._get_product_or_raise(db, product_id, locale)
        product.name = product_in.name
        product.price = product_in.price
        product = await product_crud.save_product(db, product)
        return product_mapper.to_dto(product)

    async def delete_product(self, db: AsyncSession, product_id: int, locale: Optional[str] = None) -> None:
        logger.info(f"Eliminando el producto con ID {product_id}")
        product = await self._get_product_or_raise(db, product_id, locale)
        await product_crud.delete_product(db, product)

    async def _get_product_or_raise(self, db: AsyncSession, product_id: int, locale: Optional[str]) -> Product:
        product = await product_crud.get_product(db, product_id)
        if product is None:
            logger.warning(f"El producto con ID {product_id} no existe")
            raise NotFoundError(get_message("product.notFound", locale))
        return product


# Instancia global del servicio
product_service = ProductService()
