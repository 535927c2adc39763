# backend/tests/test_category_service.py
import pytest

from ticket_logger.core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from ticket_logger.schemas.category_schema import CategoryCreate
from ticket_logger.services.category_service import CategoryService


@pytest.fixture
def service(storage):
    return CategoryService(storage=storage)


async def test_create_child_category_shows_parent_summary(db, service):
    electronica = await service.create_category(db, CategoryCreate(name="Electrónica"))
    telefonos = await service.create_category(db, CategoryCreate(name="Teléfonos", parent_category_id=electronica.id))

    assert electronica.parent_category is None
    assert telefonos.parent_category.id == electronica.id
    assert telefonos.parent_category.name == "Electrónica"


async def test_create_category_with_duplicate_name_fails(db, service):
    await service.create_category(db, CategoryCreate(name="Bebidas"))
    with pytest.raises(DuplicateKeyError):
        await service.create_category(db, CategoryCreate(name="Bebidas"))


async def test_create_category_with_missing_parent_fails(db, service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.create_category(db, CategoryCreate(name="Huérfana", parent_category_id=123), locale="es")
    assert exc_info.value.message == "La categoría padre no existe."


async def test_update_category_to_own_name_succeeds(db, service):
    category = await service.create_category(db, CategoryCreate(name="Bebidas"))
    updated = await service.update_category(db, category.id, CategoryCreate(name="Bebidas"))
    assert updated.name == "Bebidas"


async def test_update_category_to_other_name_fails(db, service):
    await service.create_category(db, CategoryCreate(name="Bebidas"))
    lacteos = await service.create_category(db, CategoryCreate(name="Lácteos"))
    with pytest.raises(DuplicateKeyError):
        await service.update_category(db, lacteos.id, CategoryCreate(name="Bebidas"))


async def test_category_cannot_be_its_own_parent(db, service):
    category = await service.create_category(db, CategoryCreate(name="Bebidas"))
    with pytest.raises(ValidationError):
        await service.update_category(db, category.id, CategoryCreate(name="Bebidas", parent_category_id=category.id))


async def test_category_cannot_move_under_descendant(db, service):
    root = await service.create_category(db, CategoryCreate(name="Hogar"))
    child = await service.create_category(db, CategoryCreate(name="Cocina", parent_category_id=root.id))
    grandchild = await service.create_category(db, CategoryCreate(name="Sartenes", parent_category_id=child.id))

    with pytest.raises(ValidationError):
        await service.update_category(db, root.id, CategoryCreate(name="Hogar", parent_category_id=grandchild.id))


async def test_category_can_move_to_unrelated_branch(db, service):
    hogar = await service.create_category(db, CategoryCreate(name="Hogar"))
    jardin = await service.create_category(db, CategoryCreate(name="Jardín"))
    cocina = await service.create_category(db, CategoryCreate(name="Cocina", parent_category_id=hogar.id))

    moved = await service.update_category(db, cocina.id, CategoryCreate(name="Cocina", parent_category_id=jardin.id))

    assert moved.parent_category.id == jardin.id


async def test_create_category_stores_only_image_reference(db, service, storage, make_upload):
    category = await service.create_category(db, CategoryCreate(name="Frutas"), make_upload("manzana.jpg"))

    assert category.image == storage.saved[0]
    assert category.image.endswith(".jpg")
    assert storage.path_for(category.image).exists()


async def test_create_category_rejects_invalid_extension(db, service, make_upload):
    with pytest.raises(ValidationError):
        await service.create_category(db, CategoryCreate(name="Frutas"), make_upload("virus.exe"))


async def test_update_with_new_image_deletes_previous_first(db, service, storage, make_upload):
    category = await service.create_category(db, CategoryCreate(name="Frutas"), make_upload("a.png"))
    old_image = category.image

    updated = await service.update_category(db, category.id, CategoryCreate(name="Frutas"), make_upload("b.png"))

    assert storage.deleted == [old_image]
    assert updated.image != old_image
    assert not storage.path_for(old_image).exists()


async def test_update_with_invalid_image_keeps_previous_one(db, service, storage, make_upload):
    category = await service.create_category(db, CategoryCreate(name="Frutas"), make_upload("a.png"))

    with pytest.raises(ValidationError):
        await service.update_category(db, category.id, CategoryCreate(name="Frutas"), make_upload("virus.exe"))

    assert storage.deleted == []
    assert storage.path_for(category.image).exists()
    assert (await service.get_category_by_id(db, category.id)).image == category.image


async def test_update_without_image_keeps_current_one(db, service, storage, make_upload):
    category = await service.create_category(db, CategoryCreate(name="Frutas"), make_upload("a.png"))

    updated = await service.update_category(db, category.id, CategoryCreate(name="Fruta"))

    assert updated.image == category.image
    assert storage.deleted == []


async def test_delete_category_deletes_image_exactly_once(db, service, storage, make_upload):
    category = await service.create_category(db, CategoryCreate(name="Frutas"), make_upload("a.png"))

    await service.delete_category(db, category.id)

    assert storage.deleted == [category.image]
    with pytest.raises(NotFoundError):
        await service.get_category_by_id(db, category.id)


async def test_delete_category_without_image_touches_no_file(db, service, storage):
    category = await service.create_category(db, CategoryCreate(name="Frutas"))
    await service.delete_category(db, category.id)
    assert storage.deleted == []


async def test_deleting_parent_turns_children_into_roots(db, service):
    parent = await service.create_category(db, CategoryCreate(name="Hogar"))
    child = await service.create_category(db, CategoryCreate(name="Cocina", parent_category_id=parent.id))

    await service.delete_category(db, parent.id)
    db.expire_all()

    assert (await service.get_category_by_id(db, child.id)).parent_category is None
