# backend/tests/test_mappers.py
import datetime

import pytest

from ticket_logger.mappers import (
    category_mapper,
    location_mapper,
    notification_mapper,
    product_mapper,
    province_mapper,
    region_mapper,
    supermarket_mapper,
    ticket_mapper,
)
from ticket_logger.schemas.category_schema import CategoryCreate
from ticket_logger.schemas.location_schema import LocationCreate
from ticket_logger.schemas.notification_schema import NotificationCreate
from ticket_logger.schemas.product_schema import ProductCreate
from ticket_logger.schemas.province_schema import ProvinceCreate
from ticket_logger.schemas.region_schema import RegionCreate
from ticket_logger.schemas.supermarket_schema import SupermarketCreate
from ticket_logger.schemas.ticket_schema import TicketCreate


@pytest.mark.parametrize(
    "mapper",
    [
        region_mapper,
        province_mapper,
        supermarket_mapper,
        location_mapper,
        category_mapper,
        product_mapper,
        ticket_mapper,
        notification_mapper,
    ],
)
def test_to_dto_of_none_is_none(mapper):
    assert mapper.to_dto(None) is None


def test_to_entity_never_sets_id():
    region = region_mapper.to_entity(RegionCreate(code="01", name="Andalucía"))
    assert region.id is None


def _region(id_=1):
    region = region_mapper.to_entity(RegionCreate(code="01", name="Andalucía"))
    region.id = id_
    return region


def _province(region, id_=1):
    province = province_mapper.to_entity(ProvinceCreate(code="41", name="Sevilla", region_id=region.id), region)
    province.id = id_
    return province


def test_province_round_trip_includes_region_summary():
    region = _region()
    province = _province(region)

    dto = province_mapper.to_dto(province)

    assert dto.code == "41"
    assert dto.name == "Sevilla"
    assert dto.region.id == 1
    assert dto.region.code == "01"


def test_location_round_trip_flattens_references():
    region = _region()
    province = _province(region)
    supermarket = supermarket_mapper.to_entity(SupermarketCreate(name="Mercadona"))
    supermarket.id = 3
    location_in = LocationCreate(address="Calle Feria 1", city="Sevilla", supermarket_id=3, province_id=1)

    location = location_mapper.to_entity(location_in, supermarket, province)
    location.id = 9
    dto = location_mapper.to_dto(location)

    assert dto.address == location_in.address
    assert dto.city == location_in.city
    assert dto.supermarket.name == "Mercadona"
    assert dto.province.region.name == "Andalucía"


def test_category_parent_is_summarized_one_level():
    grandparent = category_mapper.to_entity(CategoryCreate(name="Hogar"))
    grandparent.id = 1
    parent = category_mapper.to_entity(CategoryCreate(name="Electrónica"), grandparent, image="elec.png")
    parent.id = 2
    child = category_mapper.to_entity(CategoryCreate(name="Teléfonos", parent_category_id=2), parent)
    child.id = 3

    dto = category_mapper.to_dto(child)

    assert dto.name == "Teléfonos"
    assert dto.image is None
    assert dto.parent_category.id == 2
    assert dto.parent_category.name == "Electrónica"
    assert dto.parent_category.image == "elec.png"
    # El resumen del padre no lleva su propio padre ni hijas
    assert set(dto.parent_category.model_dump()) == {"id", "name", "image"}


def test_root_category_has_no_parent():
    category = category_mapper.to_entity(CategoryCreate(name="Bebidas"))
    category.id = 1
    assert category_mapper.to_dto(category).parent_category is None


def test_product_round_trip():
    product = product_mapper.to_entity(ProductCreate(name="Leche", price=1.15))
    product.id = 4
    dto = product_mapper.to_dto(product)
    assert (dto.id, dto.name, dto.price) == (4, "Leche", 1.15)


def test_ticket_round_trip_leaves_total_empty():
    region = _region()
    province = _province(region)
    supermarket = supermarket_mapper.to_entity(SupermarketCreate(name="Dia"))
    supermarket.id = 1
    location = location_mapper.to_entity(
        LocationCreate(address="Av. Constitución 5", city="Sevilla", supermarket_id=1, province_id=1),
        supermarket,
        province,
    )
    location.id = 1
    product = product_mapper.to_entity(ProductCreate(name="Pan", price=0.9))
    product.id = 7
    ticket_in = TicketCreate(date=datetime.date(2024, 3, 1), discount=0.5, location_id=1, product_ids=[7])

    ticket = ticket_mapper.to_entity(ticket_in, location, [product])
    ticket.id = 11
    dto = ticket_mapper.to_dto(ticket)

    assert dto.date == ticket_in.date
    assert dto.discount == 0.5
    assert dto.total is None
    assert dto.location.address == "Av. Constitución 5"
    assert [p.id for p in dto.products] == [7]


def test_notification_document_defaults():
    document = notification_mapper.to_document(NotificationCreate(subject="A", message="B"))

    assert isinstance(document["id"], str) and document["id"]
    assert document["read"] is False

    dto = notification_mapper.to_dto(document)
    assert (dto.subject, dto.message, dto.read) == ("A", "B", False)
    assert dto.created_at.tzinfo is not None
