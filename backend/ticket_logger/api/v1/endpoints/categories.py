# backend/ticket_logger/api/v1/endpoints/categories.py
"""
Endpoints REST para operaciones CRUD de categorías.

El alta y la modificación reciben multipart/form-data porque pueden incluir
la imagen de la categoría:
- name: nombre (2-100 caracteres, único)
- parent_category_id: ID de la categoría padre (opcional)
- image_file: imagen (opcional)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.api import deps
from ticket_logger.core.i18n import get_message
from ticket_logger.schemas.category_schema import CategoryCreate, CategoryResponse
from ticket_logger.schemas.common_schema import MessageResponse
from ticket_logger.services.category_service import category_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    name: str = Form(..., min_length=2, max_length=100),
    parent_category_id: Optional[int] = Form(None),
    image_file: Optional[UploadFile] = File(None),
) -> CategoryResponse:
    """Crea una nueva categoría, opcionalmente con imagen y categoría padre."""
    logger.info(f"🆕 CATEGORÍA: Creando categoría '{name}' (padre: {parent_category_id})")
    category_in = CategoryCreate(name=name, parent_category_id=parent_category_id)
    category = await category_service.create_category(db, category_in, image_file, locale)
    logger.info(f"✅ CATEGORÍA: Creada exitosamente con ID {category.id}")
    return category

@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    category_id: int,
    name: str = Form(..., min_length=2, max_length=100),
    parent_category_id: Optional[int] = Form(None),
    image_file: Optional[UploadFile] = File(None),
) -> CategoryResponse:
    """
    Sustituye nombre y categoría padre. Si llega una imagen nueva, la
    anterior se borra del disco.
    """
    logger.info(f"🔄 CATEGORÍA: Actualizando categoría {category_id}")
    category_in = CategoryCreate(name=name, parent_category_id=parent_category_id)
    return await category_service.update_category(db, category_id, category_in, image_file, locale)

@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    category_id: int,
) -> MessageResponse:
    """Elimina una categoría y su imagen. Las subcategorías pasan a ser raíz."""
    logger.info(f"🗑️ CATEGORÍA: Eliminando categoría {category_id}")
    await category_service.delete_category(db, category_id, locale)
    return MessageResponse(detail=get_message("category.deleted", locale))

@router.get("/{category_id}", response_model=CategoryResponse)
async def read_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    locale: str = Depends(deps.get_locale),
    category_id: int,
) -> CategoryResponse:
    return await category_service.get_category_by_id(db, category_id, locale)

@router.get("", response_model=List[CategoryResponse])
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[CategoryResponse]:
    """Lista las categorías; cada una incluye sólo el resumen de su padre."""
    return await category_service.get_all_categories(db, skip=skip, limit=limit)
