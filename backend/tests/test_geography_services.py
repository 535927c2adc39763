# backend/tests/test_geography_services.py
"""
Regiones, provincias, supermercados y ubicaciones: unicidad de la clave
natural, referencias obligatorias y borrados en cascada.
"""

import pytest

from ticket_logger.core.exceptions import DuplicateKeyError, NotFoundError
from ticket_logger.schemas.location_schema import LocationCreate
from ticket_logger.schemas.province_schema import ProvinceCreate
from ticket_logger.schemas.region_schema import RegionCreate
from ticket_logger.schemas.supermarket_schema import SupermarketCreate
from ticket_logger.services.location_service import location_service
from ticket_logger.services.province_service import province_service
from ticket_logger.services.region_service import region_service
from ticket_logger.services.supermarket_service import supermarket_service


async def _create_location(db, address="Calle Feria 1"):
    region = await region_service.create_region(db, RegionCreate(code="01", name="Andalucía"))
    province = await province_service.create_province(db, ProvinceCreate(code="41", name="Sevilla", region_id=region.id))
    supermarket = await supermarket_service.create_supermarket(db, SupermarketCreate(name="Mercadona"))
    location = await location_service.create_location(
        db, LocationCreate(address=address, city="Sevilla", supermarket_id=supermarket.id, province_id=province.id)
    )
    return region, province, supermarket, location


# ========================================
# REGIONES
# ========================================

async def test_create_region_assigns_id(db):
    region = await region_service.create_region(db, RegionCreate(code="01", name="Andalucía"))
    assert region.id is not None
    assert (await region_service.get_region_by_id(db, region.id)).code == "01"


async def test_create_region_with_duplicate_code_fails(db):
    await region_service.create_region(db, RegionCreate(code="01", name="Andalucía"))

    with pytest.raises(DuplicateKeyError) as exc_info:
        await region_service.create_region(db, RegionCreate(code="01", name="Otra"))

    assert exc_info.value.field == "code"
    assert exc_info.value.status_code == 400


async def test_update_region_to_own_code_succeeds(db):
    region = await region_service.create_region(db, RegionCreate(code="01", name="Andalucía"))

    updated = await region_service.update_region(db, region.id, RegionCreate(code="01", name="Andalucía (ES)"))

    assert updated.id == region.id
    assert updated.name == "Andalucía (ES)"


async def test_update_region_to_other_code_fails(db):
    await region_service.create_region(db, RegionCreate(code="01", name="Andalucía"))
    aragon = await region_service.create_region(db, RegionCreate(code="02", name="Aragón"))

    with pytest.raises(DuplicateKeyError):
        await region_service.update_region(db, aragon.id, RegionCreate(code="01", name="Aragón"))


async def test_missing_region_message_follows_locale(db):
    with pytest.raises(NotFoundError) as exc_info:
        await region_service.get_region_by_id(db, 999, locale="en")
    assert exc_info.value.message == "The region does not exist."

    with pytest.raises(NotFoundError) as exc_info:
        await region_service.delete_region(db, 999, locale="es")
    assert exc_info.value.message == "La región no existe."


async def test_list_regions_is_paginated(db):
    for i in range(5):
        await region_service.create_region(db, RegionCreate(code=f"0{i}", name=f"Región {i}"))

    page = await region_service.get_all_regions(db, skip=1, limit=2)

    assert [r.code for r in page] == ["01", "02"]


# ========================================
# PROVINCIAS
# ========================================

async def test_create_province_requires_existing_region(db):
    with pytest.raises(NotFoundError):
        await province_service.create_province(db, ProvinceCreate(code="41", name="Sevilla", region_id=42))


async def test_province_code_uniqueness(db):
    region = await region_service.create_region(db, RegionCreate(code="01", name="Andalucía"))
    await province_service.create_province(db, ProvinceCreate(code="41", name="Sevilla", region_id=region.id))
    cadiz = await province_service.create_province(db, ProvinceCreate(code="11", name="Cádiz", region_id=region.id))

    with pytest.raises(DuplicateKeyError):
        await province_service.create_province(db, ProvinceCreate(code="41", name="Otra", region_id=region.id))
    with pytest.raises(DuplicateKeyError):
        await province_service.update_province(db, cadiz.id, ProvinceCreate(code="41", name="Cádiz", region_id=region.id))

    same = await province_service.update_province(db, cadiz.id, ProvinceCreate(code="11", name="Cádiz", region_id=region.id))
    assert same.code == "11"


async def test_update_province_moves_region(db):
    andalucia = await region_service.create_region(db, RegionCreate(code="01", name="Andalucía"))
    aragon = await region_service.create_region(db, RegionCreate(code="02", name="Aragón"))
    province = await province_service.create_province(db, ProvinceCreate(code="22", name="Huesca", region_id=andalucia.id))

    updated = await province_service.update_province(db, province.id, ProvinceCreate(code="22", name="Huesca", region_id=aragon.id))

    assert updated.region.id == aragon.id
    assert updated.region.name == "Aragón"


# ========================================
# SUPERMERCADOS
# ========================================

async def test_supermarket_name_uniqueness(db):
    await supermarket_service.create_supermarket(db, SupermarketCreate(name="Mercadona"))
    dia = await supermarket_service.create_supermarket(db, SupermarketCreate(name="Dia"))

    with pytest.raises(DuplicateKeyError):
        await supermarket_service.create_supermarket(db, SupermarketCreate(name="Mercadona"))
    with pytest.raises(DuplicateKeyError):
        await supermarket_service.update_supermarket(db, dia.id, SupermarketCreate(name="Mercadona"))

    assert (await supermarket_service.update_supermarket(db, dia.id, SupermarketCreate(name="Dia"))).name == "Dia"


# ========================================
# UBICACIONES
# ========================================

async def test_create_location_returns_nested_references(db):
    region, province, supermarket, location = await _create_location(db)

    assert location.supermarket.id == supermarket.id
    assert location.province.id == province.id
    assert location.province.region.code == region.code


async def test_location_address_uniqueness(db):
    _, province, supermarket, location = await _create_location(db)
    other = await location_service.create_location(
        db, LocationCreate(address="Calle Sierpes 2", city="Sevilla", supermarket_id=supermarket.id, province_id=province.id)
    )

    with pytest.raises(DuplicateKeyError):
        await location_service.create_location(
            db, LocationCreate(address=location.address, city="Sevilla", supermarket_id=supermarket.id, province_id=province.id)
        )

    with pytest.raises(DuplicateKeyError):
        await location_service.update_location(
            db, other.id, LocationCreate(address=location.address, city="Sevilla", supermarket_id=supermarket.id, province_id=province.id)
        )

    kept = await location_service.update_location(
        db, location.id, LocationCreate(address=location.address, city="Dos Hermanas", supermarket_id=supermarket.id, province_id=province.id)
    )
    assert kept.address == location.address
    assert kept.city == "Dos Hermanas"


async def test_location_references_must_exist(db):
    _, province, supermarket, _ = await _create_location(db)

    with pytest.raises(NotFoundError):
        await location_service.create_location(
            db, LocationCreate(address="Otra 1", city="Sevilla", supermarket_id=999, province_id=province.id)
        )
    with pytest.raises(NotFoundError):
        await location_service.create_location(
            db, LocationCreate(address="Otra 1", city="Sevilla", supermarket_id=supermarket.id, province_id=999)
        )


async def test_deleting_region_cascades_to_locations(db):
    region, province, _, location = await _create_location(db)

    await region_service.delete_region(db, region.id)

    with pytest.raises(NotFoundError):
        await province_service.get_province_by_id(db, province.id)
    with pytest.raises(NotFoundError):
        await location_service.get_location_by_id(db, location.id)
