# backend/ticket_logger/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de Create, Read, Update, Delete para categorías,
proporcionando una capa de abstracción entre los servicios y la base de datos.

Funcionalidades principales:
- Consultas básicas por ID (con la categoría padre precargada)
- Manejo de jerarquías (descendientes mediante una CTE recursiva)
- Validación de nombres duplicados
- Operaciones de paginación
"""

from typing import List, Optional

from sqlalchemy import select, exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ticket_logger.db.base import Category

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría por su ID.

    La categoría padre se carga en la misma operación porque el DTO la
    expone (sólo un nivel: nunca abuelos ni hijas).

    Args:
        db: Sesión asíncrona de SQLAlchemy
        category_id: ID único de la categoría

    Returns:
        Objeto Category si existe, None si no se encuentra
    """
    result = await db.execute(
        select(Category)
        .options(selectinload(Category.parent))
        .filter(Category.id == category_id)
    )
    return result.scalars().first()


async def get_categories(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Category]:
    """
    Obtiene una lista paginada de todas las categorías.

    Args:
        db: Sesión asíncrona de SQLAlchemy
        skip: Número de registros a omitir (para paginación)
        limit: Número máximo de registros a devolver
    """
    result = await db.execute(
        select(Category)
        .options(selectinload(Category.parent))
        .order_by(Category.id)
        .offset(skip)
        .limit(limit)
    )
    return result.scalars().all()


async def get_category_and_all_children_ids(db: AsyncSession, category_id: int) -> List[int]:
    """
    Obtiene el ID de la categoría dada y los IDs de toda su descendencia.
    Utiliza una consulta recursiva (CTE) para recorrer la jerarquía.

    El servicio lo usa para impedir ciclos: el nuevo padre de una categoría
    no puede estar en esta lista.
    """
    category_cte = select(Category.id).filter(Category.id == category_id).cte(name='category_cte', recursive=True)

    recursive_part = select(Category.id).join(category_cte, Category.parent_id == category_cte.c.id)

    full_cte = category_cte.union_all(recursive_part)

    result = await db.execute(select(full_cte.c.id))

    return [r[0] for r in result.fetchall()]


# ========================================
# VALIDACIONES DE UNICIDAD
# ========================================

async def exists_category_by_name(db: AsyncSession, name: str) -> bool:
    result = await db.execute(select(exists().where(Category.name == name)))
    return bool(result.scalar())


async def exists_category_by_name_and_not_id(db: AsyncSession, name: str, category_id: int) -> bool:
    """Indica si otra categoría distinta de category_id ya usa ese nombre."""
    result = await db.execute(
        select(exists().where(Category.name == name, Category.id != category_id))
    )
    return bool(result.scalar())


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def save_category(db: AsyncSession, category: Category) -> Category:
    """
    Persiste una categoría nueva o modificada.

    Se vuelve a leer tras el commit para devolverla con su padre cargado.
    """
    db.add(category)
    await db.commit()
    return await get_category(db, category.id)


async def delete_category(db: AsyncSession, category: Category) -> None:
    """
    Elimina una categoría de la base de datos.

    Efectos colaterales (manejados por la FK con ON DELETE SET NULL):
        - Subcategorías: parent_id se establece a NULL (se vuelven raíz)

    El fichero de imagen no se toca aquí; lo borra el servicio antes.
    """
    await db.delete(category)
    await db.commit()
