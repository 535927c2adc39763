# backend/tests/test_file_storage.py
import pytest

from ticket_logger.core.exceptions import ValidationError
from ticket_logger.services.file_storage_service import FileStorageService


async def test_save_writes_file_with_random_name(tmp_path, make_upload):
    storage = FileStorageService(upload_dir=tmp_path)

    reference = await storage.save(make_upload("Foto Perfil.PNG", b"contenido"))

    assert reference.endswith(".png")
    assert "Foto" not in reference
    assert (tmp_path / reference).read_bytes() == b"contenido"


async def test_save_rejects_large_files(tmp_path, make_upload):
    storage = FileStorageService(upload_dir=tmp_path, max_size=4)
    with pytest.raises(ValidationError):
        await storage.save(make_upload("a.png", b"12345"))
    assert list(tmp_path.iterdir()) == []


async def test_delete_missing_file_is_not_an_error(tmp_path):
    storage = FileStorageService(upload_dir=tmp_path)
    await storage.delete("no-existe.png")


async def test_delete_cannot_escape_upload_dir(tmp_path):
    outside = tmp_path / "fuera.png"
    outside.write_bytes(b"x")
    storage = FileStorageService(upload_dir=tmp_path / "uploads")

    await storage.delete("../fuera.png")

    assert outside.exists()


async def test_validate_checks_without_writing(tmp_path, make_upload):
    storage = FileStorageService(upload_dir=tmp_path / "uploads")
    upload = make_upload("a.png", b"contenido")

    assert await storage.validate(upload) == b"contenido"
    with pytest.raises(ValidationError):
        await storage.validate(make_upload("a.exe", b"x"))
    assert not (tmp_path / "uploads").exists()

    # El fichero validado se puede guardar después con su contenido completo
    reference = await storage.save(upload)
    assert storage.path_for(reference).read_bytes() == b"contenido"
