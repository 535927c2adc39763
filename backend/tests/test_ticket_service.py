# backend/tests/test_ticket_service.py
import datetime

import pytest

from ticket_logger.core.exceptions import NotFoundError, ValidationError
from ticket_logger.schemas.location_schema import LocationCreate
from ticket_logger.schemas.product_schema import ProductCreate
from ticket_logger.schemas.province_schema import ProvinceCreate
from ticket_logger.schemas.region_schema import RegionCreate
from ticket_logger.schemas.supermarket_schema import SupermarketCreate
from ticket_logger.schemas.ticket_schema import TicketCreate
from ticket_logger.services.location_service import location_service
from ticket_logger.services.product_service import product_service
from ticket_logger.services.province_service import province_service
from ticket_logger.services.region_service import region_service
from ticket_logger.services.supermarket_service import supermarket_service
from ticket_logger.services.ticket_service import ticket_service


@pytest.fixture
async def location(db):
    region = await region_service.create_region(db, RegionCreate(code="13", name="Madrid"))
    province = await province_service.create_province(db, ProvinceCreate(code="28", name="Madrid", region_id=region.id))
    supermarket = await supermarket_service.create_supermarket(db, SupermarketCreate(name="Carrefour"))
    return await location_service.create_location(
        db, LocationCreate(address="Gran Vía 1", city="Madrid", supermarket_id=supermarket.id, province_id=province.id)
    )


@pytest.fixture
async def products(db):
    return [
        await product_service.create_product(db, ProductCreate(name="Leche", price=1.15)),
        await product_service.create_product(db, ProductCreate(name="Pan", price=0.90)),
        await product_service.create_product(db, ProductCreate(name="Huevos", price=2.35)),
    ]


def _ticket_in(location, product_ids, **kwargs):
    return TicketCreate(date=datetime.date(2024, 5, 17), location_id=location.id, product_ids=product_ids, **kwargs)


async def test_create_ticket(db, location, products):
    ticket = await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id, products[1].id], discount=0.5))

    assert ticket.id is not None
    assert ticket.location.address == "Gran Vía 1"
    assert ticket.location.province.region.name == "Madrid"
    assert {p.name for p in ticket.products} == {"Leche", "Pan"}
    assert ticket.discount == 0.5
    assert ticket.total is None


async def test_create_ticket_with_unknown_product_fails(db, location, products):
    with pytest.raises(NotFoundError) as exc_info:
        await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id, 999]), locale="en")
    assert "999" in exc_info.value.message


async def test_create_ticket_with_unknown_location_fails(db, products):
    ticket_in = TicketCreate(date=datetime.date(2024, 5, 17), location_id=999, product_ids=[products[0].id])
    with pytest.raises(NotFoundError):
        await ticket_service.create_ticket(db, ticket_in)


async def test_repeated_product_ids_are_stored_once(db, location, products):
    ticket = await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id, products[0].id]))
    assert [p.id for p in ticket.products] == [products[0].id]


async def test_update_ticket_replaces_products(db, location, products):
    ticket = await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id]))

    updated = await ticket_service.update_ticket(db, ticket.id, _ticket_in(location, [products[1].id, products[2].id], discount=1))

    assert sorted(p.id for p in updated.products) == sorted([products[1].id, products[2].id])
    assert updated.discount == 1


async def test_add_product_twice_fails_the_second_time(db, location, products):
    ticket = await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id]))

    after_add = await ticket_service.add_product(db, ticket.id, products[1].id)
    assert {p.id for p in after_add.products} == {products[0].id, products[1].id}

    with pytest.raises(ValidationError) as exc_info:
        await ticket_service.add_product(db, ticket.id, products[1].id, locale="es")
    assert exc_info.value.message == "El producto ya está asociado al ticket."


async def test_remove_absent_product_fails(db, location, products):
    ticket = await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id]))

    with pytest.raises(ValidationError):
        await ticket_service.remove_product(db, ticket.id, products[2].id)

    after_remove = await ticket_service.remove_product(db, ticket.id, products[0].id)
    assert after_remove.products == []

    with pytest.raises(ValidationError):
        await ticket_service.remove_product(db, ticket.id, products[0].id)


async def test_add_product_to_missing_ticket_fails(db, products):
    with pytest.raises(NotFoundError):
        await ticket_service.add_product(db, 999, products[0].id)


async def test_deleting_product_removes_it_from_tickets(db, location, products):
    ticket = await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id, products[1].id]))

    await product_service.delete_product(db, products[0].id)
    db.expire_all()

    reloaded = await ticket_service.get_ticket_by_id(db, ticket.id)
    assert [p.id for p in reloaded.products] == [products[1].id]


async def test_delete_ticket(db, location, products):
    ticket = await ticket_service.create_ticket(db, _ticket_in(location, [products[0].id]))
    await ticket_service.delete_ticket(db, ticket.id)
    with pytest.raises(NotFoundError):
        await ticket_service.get_ticket_by_id(db, ticket.id)


async def test_product_crud(db):
    product = await product_service.create_product(db, ProductCreate(name="Aceite", price=8.5))
    updated = await product_service.update_product(db, product.id, ProductCreate(name="Aceite de oliva", price=9.25))
    assert (updated.name, updated.price) == ("Aceite de oliva", 9.25)

    await product_service.delete_product(db, product.id)
    with pytest.raises(NotFoundError):
        await product_service.get_product_by_id(db, product.id)
