# backend/ticket_logger/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio se encarga de gestionar la lógica de negocio para el manejo de categorías,
incluyendo validaciones complejas, verificación de integridad referencial
y orquestación de operaciones que involucran múltiples entidades (la fila en
base de datos y el fichero de imagen en disco).
"""

import logging
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from ticket_logger.core.i18n import get_message
from ticket_logger.crud import category_crud
from ticket_logger.db.models.category_model import Category
from ticket_logger.mappers import category_mapper
from ticket_logger.schemas.category_schema import CategoryCreate, CategoryResponse
from ticket_logger.services.file_storage_service import FileStorageService, file_storage_service

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


def _has_file(image_file: Optional[UploadFile]) -> bool:
    # Un campo de fichero vacío en el formulario llega sin nombre
    return image_file is not None and bool(image_file.filename)


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Características:
    - Nombre de categoría único en todo el árbol
    - Verificación de integridad referencial padre-hijo
    - Prevención de ciclos al cambiar la categoría padre
    - Gestión del fichero de imagen asociado (alta, sustitución y borrado)
    """

    def __init__(self, storage: Optional[FileStorageService] = None):
        self.storage = storage or file_storage_service

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_all_categories(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[CategoryResponse]:
        """
        Obtiene todas las categorías con paginación.

        Cada categoría incluye un resumen de su padre (un solo nivel).

        Args:
            db: Sesión asíncrona de SQLAlchemy
            skip: Número de registros a omitir (paginación)
            limit: Número máximo de registros a devolver
        """
        if limit > MAX_PAGE_SIZE: # Prevenir consultas excesivamente grandes
            limit = MAX_PAGE_SIZE
        categories = await category_crud.get_categories(db, skip=skip, limit=limit)
        return [category_mapper.to_dto(c) for c in categories]

    async def get_category_by_id(self, db: AsyncSession, category_id: int, locale: Optional[str] = None) -> CategoryResponse:
        return category_mapper.to_dto(await self._get_category_or_raise(db, category_id, locale))

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_category(
        self,
        db: AsyncSession,
        category_in: CategoryCreate,
        image_file: Optional[UploadFile] = None,
        locale: Optional[str] = None,
    ) -> CategoryResponse:
        """
        Crea una nueva categoría con validaciones completas de negocio.

        Si se adjunta una imagen se guarda primero en disco y la categoría
        almacena sólo su referencia. Si después falla la inserción, el fichero
        queda huérfano.

        Raises:
            DuplicateKeyError: nombre ya usado
            NotFoundError: la categoría padre no existe
            ValidationError / StorageError: imagen no válida o fallo al guardarla
        """
        logger.info(f"Creando una nueva categoría con nombre {category_in.name}")
        if await category_crud.exists_category_by_name(db, category_in.name):
            logger.warning(f"La categoría {category_in.name} ya existe")
            raise DuplicateKeyError(get_message("category.nameExist", locale), field="name")

        parent = None
        if category_in.parent_category_id is not None:
            parent = await self._get_parent_or_raise(db, category_in.parent_category_id, locale)

        image = None
        if _has_file(image_file):
            image = await self.storage.save(image_file, locale)

        category = await category_crud.save_category(db, category_mapper.to_entity(category_in, parent, image))
        logger.info(f"Categoría creada con ID {category.id}")
        return category_mapper.to_dto(category)

    async def update_category(
        self,
        db: AsyncSession,
        category_id: int,
        category_in: CategoryCreate,
        image_file: Optional[UploadFile] = None,
        locale: Optional[str] = None,
    ) -> CategoryResponse:
        """
        Sustituye el nombre y la categoría padre de una categoría existente.

        La imagen sólo cambia si se adjunta una nueva; en ese caso se valida,
        se borra el fichero anterior y se guarda el nuevo. Una imagen no válida
        deja la categoría y su fichero como estaban.

        Validaciones:
            - El nombre no puede estar en uso por otra categoría
            - La categoría padre debe existir
            - Una categoría no puede ser su propio padre ni colgar de una de
              sus descendientes (se formaría un ciclo)
        """
        logger.info(f"Actualizando la categoría con ID {category_id}")
        category = await self._get_category_or_raise(db, category_id, locale)

        if await category_crud.exists_category_by_name_and_not_id(db, category_in.name, category_id):
            logger.warning(f"El nombre {category_in.name} ya está en uso por otra categoría")
            raise DuplicateKeyError(get_message("category.nameExist", locale), field="name")

        parent = None
        if category_in.parent_category_id is not None:
            if category_in.parent_category_id == category_id:
                raise ValidationError(get_message("category.selfParent", locale))
            parent = await self._get_parent_or_raise(db, category_in.parent_category_id, locale)
            descendant_ids = await category_crud.get_category_and_all_children_ids(db, category_id)
            if parent.id in descendant_ids:
                logger.warning(f"La categoría {parent.id} es descendiente de {category_id}, se formaría un ciclo")
                raise ValidationError(get_message("category.descendantParent", locale))

        if _has_file(image_file):
            # Una imagen rechazada no debe borrar la que ya hay
            await self.storage.validate(image_file, locale)
            if category.image:
                await self.storage.delete(category.image, locale)
            category.image = await self.storage.save(image_file, locale)

        category.name = category_in.name
        category.parent = parent
        category = await category_crud.save_category(db, category)
        return category_mapper.to_dto(category)

    async def delete_category(self, db: AsyncSession, category_id: int, locale: Optional[str] = None) -> None:
        """
        Elimina una categoría y, antes, su fichero de imagen si lo tiene.

        Las subcategorías no se borran: pasan a ser categorías raíz.
        """
        logger.info(f"Eliminando la categoría con ID {category_id}")
        category = await self._get_category_or_raise(db, category_id, locale)
        if category.image:
            await self.storage.delete(category.image, locale)
        await category_crud.delete_category(db, category)

    # ========================================
    # MÉTODOS AUXILIARES
    # ========================================

    async def _get_category_or_raise(self, db: AsyncSession, category_id: int, locale: Optional[str]) -> Category:
        category = await category_crud.get_category(db, category_id)
        if category is None:
            logger.warning(f"La categoría con ID {category_id} no existe")
            raise NotFoundError(get_message("category.notFound", locale))
        return category

    async def _get_parent_or_raise(self, db: AsyncSession, parent_id: int, locale: Optional[str]) -> Category:
        parent = await category_crud.get_category(db, parent_id)
        if parent is None:
            logger.warning(f"La categoría padre con ID {parent_id} no existe")
            raise NotFoundError(get_message("category.parentNotFound", locale))
        return parent


# Instancia global del servicio
category_service = CategoryService()
