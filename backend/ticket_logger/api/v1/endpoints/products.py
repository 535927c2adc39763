# backend/ticket_logger/api/v1/endpoints/products.py
"""
Endpoints REST para operaciones CRUD de productos.

Los productos son el catálogo que se referencia desde los tickets por ID.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.core.i18n import get_message
from ticket_logger.schemas.common_schema import MessageResponse
from ticket_logger.schemas.product_schema import ProductCreate, ProductResponse
from ticket_logger.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    product_in: ProductCreate,
) -> ProductResponse:
    logger.info(f"🆕 PRODUCTO: Creando producto '{product_in.name}' ({product_in.price} €)")
    product = await product_service.create_product(db, product_in, locale)
    logger.info(f"✅ PRODUCTO: Creado exitosamente con ID {product.id}")
    return product

@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    product_id: int,
    product_in: ProductCreate,
) -> ProductResponse:
    logger.info(f"🔄 PRODUCTO: Actualizando {product_id}")
    return await product_service.update_product(db, product_id, product_in, locale)

@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    product_id: int,
) -> MessageResponse:
    logger.info(f"🗑️ PRODUCTO: Eliminando {product_id}")
    await product_service.delete_product(db, product_id, locale)
    return MessageResponse(detail=get_message("product.deleted", locale))

@router.get("/{product_id}", response_model=ProductResponse)
async def read_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    product_id: int,
) -> ProductResponse:
    logger.debug(f"🔍 PRODUCTO: Buscando {product_id}")
    return await product_service.get_product_by_id(db, product_id, locale)

@router.get("", response_model=List[ProductResponse])
async def read_products(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[ProductResponse]:
    logger.debug(f"📋 PRODUCTOS: Listando - skip={skip}, limit={limit}")
    return await product_service.get_all_products(db, skip=skip, limit=limit)
