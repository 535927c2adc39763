# backend/ticket_logger/services/ticket_service.py
"""
Servicio para operaciones de negocio relacionadas con tickets.

Un ticket pertenece a una ubicación y referencia un conjunto de productos.
Además del CRUD, permite añadir y quitar productos de uno en uno; ninguna de
las dos operaciones es idempotente: repetirlas es un error de validación.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.core.exceptions import NotFoundError, ValidationError
from ticket_logger.core.i18n import get_message
from ticket_logger.crud import location_crud, product_crud, ticket_crud
from ticket_logger.db.models.location_model import Location
from ticket_logger.db.models.product_model import Product
from ticket_logger.db.models.ticket_model import Ticket
from ticket_logger.mappers import ticket_mapper
from ticket_logger.schemas.ticket_schema import TicketCreate, TicketResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


class TicketService:
    """
    Servicio para operaciones de negocio relacionadas con tickets.

    Características:
    - La ubicación y todos los productos indicados deben existir
    - Añadir un producto ya presente o quitar uno ausente es un error (400)
    - El total se devuelve vacío hasta fijar cómo se aplica el descuento
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_all_tickets(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[TicketResponse]:
        if limit > MAX_PAGE_SIZE:
            limit = MAX_PAGE_SIZE
        tickets = await ticket_crud.get_tickets(db, skip=skip, limit=limit)
        return [ticket_mapper.to_dto(t) for t in tickets]

    async def get_ticket_by_id(self, db: AsyncSession, ticket_id: int, locale: Optional[str] = None) -> TicketResponse:
        return ticket_mapper.to_dto(await self._get_ticket_or_raise(db, ticket_id, locale))

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_ticket(self, db: AsyncSession, ticket_in: TicketCreate, locale: Optional[str] = None) -> TicketResponse:
        """
        Crea un ticket comprobando que la ubicación y todos los productos existen.
        """
        logger.info(f"Creando un nuevo ticket en la ubicación {ticket_in.location_id} con {len(ticket_in.product_ids)} productos")
        location = await self._get_location_or_raise(db, ticket_in.location_id, locale)
        products = await self._get_products_or_raise(db, ticket_in.product_ids, locale)

        ticket = await ticket_crud.save_ticket(db, ticket_mapper.to_entity(ticket_in, location, products))
        logger.info(f"Ticket creado con ID {ticket.id}")
        return ticket_mapper.to_dto(ticket)

    async def update_ticket(
        self, db: AsyncSession, ticket_id: int, ticket_in: TicketCreate, locale: Optional[str] = None
    ) -> TicketResponse:
        """Sustituye fecha, descuento, ubicación y lista de productos."""
        logger.info(f"Actualizando el ticket con ID {ticket_id}")
        ticket = await self._get_ticket_or_raise(db, ticket_id, locale)
        location = await self._get_location_or_raise(db, ticket_in.location_id, locale)
        products = await self._get_products_or_raise(db, ticket_in.product_ids, locale)

        ticket.date = ticket_in.date
        ticket.discount = ticket_in.discount
        ticket.location = location
        ticket.products = products
        ticket = await ticket_crud.save_ticket(db, ticket)
        return ticket_mapper.to_dto(ticket)

    async def delete_ticket(self, db: AsyncSession, ticket_id: int, locale: Optional[str] = None) -> None:
        logger.info(f"Eliminando el ticket con ID {ticket_id}")
        ticket = await self._get_ticket_or_raise(db, ticket_id, locale)
        await ticket_crud.delete_ticket(db, ticket)

    async def add_product(
        self, db: AsyncSession, ticket_id: int, product_id: int, locale: Optional[str] = None
    ) -> TicketResponse:
        """
        Añade un producto al ticket.

        Raises:
            NotFoundError: el ticket o el producto no existen
            ValidationError: el producto ya estaba en el ticket
        """
        logger.info(f"Añadiendo el producto {product_id} al ticket {ticket_id}")
        ticket = await self._get_ticket_or_raise(db, ticket_id, locale)
        product = await self._get_product_or_raise(db, product_id, locale)

        if any(p.id == product.id for p in ticket.products):
            logger.warning(f"El producto {product_id} ya está asociado al ticket {ticket_id}")
            raise ValidationError(get_message("ticket.productAlreadyAdded", locale))

        ticket.products.append(product)
        ticket = await ticket_crud.save_ticket(db, ticket)
        return ticket_mapper.to_dto(ticket)

    async def remove_product(
        self, db: AsyncSession, ticket_id: int, product_id: int, locale: Optional[str] = None
    ) -> TicketResponse:
        """
        Quita un producto del ticket.

        Raises:
            NotFoundError: el ticket o el producto no existen
            ValidationError: el producto no estaba en el ticket
        """
        logger.info(f"Quitando el producto {product_id} del ticket {ticket_id}")
        ticket = await self._get_ticket_or_raise(db, ticket_id, locale)
        product = await self._get_product_or_raise(db, product_id, locale)

        if not any(p.id == product.id for p in ticket.products):
            logger.warning(f"El producto {product_id} no está asociado al ticket {ticket_id}")
            raise ValidationError(get_message("ticket.productNotInTicket", locale))

        ticket.products.remove(product)
        ticket = await ticket_crud.save_ticket(db, ticket)
        return ticket_mapper.to_dto(ticket)

    # ========================================
    # MÉTODOS AUXILIARES
    # ========================================

    async def _get_ticket_or_raise(self, db: AsyncSession, ticket_id: int, locale: Optional[str]) -> Ticket:
        ticket = await ticket_crud.get_ticket(db, ticket_id)
        if ticket is None:
            logger.warning(f"El ticket con ID {ticket_id} no existe")
            raise NotFoundError(get_message("ticket.notFound", locale))
        return ticket

    async def _get_location_or_raise(self, db: AsyncSession, location_id: int, locale: Optional[str]) -> Location:
        location = await location_crud.get_location(db, location_id)
        if location is None:
            logger.warning(f"La ubicación con ID {location_id} no existe")
            raise NotFoundError(get_message("ticket.locationNotFound", locale))
        return location

    async def _get_product_or_raise(self, db: AsyncSession, product_id: int, locale: Optional[str]) -> Product:
        product = await product_crud.get_product(db, product_id)
        if product is None:
            logger.warning(f"El producto con ID {product_id} no existe")
            raise NotFoundError(get_message("product.notFound", locale))
        return product

    async def _get_products_or_raise(self, db: AsyncSession, product_ids: Sequence[int], locale: Optional[str]) -> List[Product]:
        """
        Resuelve todos los IDs (sin repetidos, en el orden recibido) o lanza
        NotFoundError indicando cuáles faltan.
        """
        requested = list(dict.fromkeys(product_ids))
        found = {p.id: p for p in await product_crud.get_products_by_ids(db, requested)}
        missing = [pid for pid in requested if pid not in found]
        if missing:
            logger.warning(f"Productos inexistentes: {missing}")
            raise NotFoundError(get_message("ticket.productsNotFound", locale, ids=", ".join(map(str, missing))))
        return [found[pid] for pid in requested]


# Instancia global del servicio
ticket_service = TicketService()
