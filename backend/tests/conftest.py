# backend/tests/conftest.py
"""
Configuración común de pytest.

- Cada test usa su propia base de datos SQLite en tmp_path (aiosqlite, NullPool)
- Redis se sustituye por fakeredis
- Los tokens JWT se firman con un par de claves RSA generado para la sesión
"""

import os
import tempfile
from pathlib import Path

# La configuración se lee al importar ticket_logger: fijar el entorno antes
_TMP_DIR = Path(tempfile.mkdtemp(prefix="ticket_logger_tests_"))
os.environ["SQLALCHEMY_DATABASE_URI"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'app.db'}"
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "uploads")
os.environ["DEFAULT_LOCALE"] = "es"

import asyncio
import io

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fakeredis import FakeServer, aioredis as fake_aioredis
from fastapi import UploadFile
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from ticket_logger.api import deps
from ticket_logger.core.security import TokenVerifier
from ticket_logger.crud import notification_crud
from ticket_logger.db.base import Base
from ticket_logger.db.database import build_engine
from ticket_logger.services.category_service import category_service
from ticket_logger.services.file_storage_service import FileStorageService


# -------------------------------
# Claves RSA para los tokens
# -------------------------------

def _generate_rsa_pair():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_keys():
    """(clave privada, clave pública) en PEM."""
    return _generate_rsa_pair()


@pytest.fixture(scope="session")
def other_rsa_keys():
    """Un segundo par, para probar firmas con una clave ajena."""
    return _generate_rsa_pair()


@pytest.fixture
def verifier(rsa_keys) -> TokenVerifier:
    return TokenVerifier(rsa_keys[1], "RS256")


# -------------------------------
# Base de datos
# -------------------------------

def _database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(_database_url(tmp_path), poolclass=NullPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db(engine):
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


# -------------------------------
# Ficheros
# -------------------------------

class RecordingStorage(FileStorageService):
    """Almacenamiento real en tmp_path que además anota las llamadas."""

    def __init__(self, upload_dir: Path):
        super().__init__(upload_dir=upload_dir)
        self.saved = []
        self.deleted = []

    async def save(self, upload, locale=None):
        reference = await super().save(upload, locale)
        self.saved.append(reference)
        return reference

    async def delete(self, reference, locale=None):
        self.deleted.append(reference)
        await super().delete(reference, locale)


@pytest.fixture
def storage(tmp_path) -> RecordingStorage:
    return RecordingStorage(tmp_path / "uploads")


@pytest.fixture
def make_upload():
    """Fábrica de UploadFile en memoria."""
    def _make(filename: str = "foto.png", content: bytes = b"\x89PNG fake image") -> UploadFile:
        return UploadFile(file=io.BytesIO(content), filename=filename)
    return _make


# -------------------------------
# Redis
# -------------------------------

@pytest.fixture
def fake_redis(monkeypatch):
    client = fake_aioredis.FakeRedis(server=FakeServer(), decode_responses=True)
    monkeypatch.setattr(notification_crud, "_redis_client", client)
    return client


# -------------------------------
# Cliente HTTP
# -------------------------------

@pytest.fixture
def client(tmp_path, fake_redis, storage, verifier, monkeypatch):
    """
    TestClient con la app completa sobre una base de datos temporal.

    Se usa como context manager para que todas las peticiones (y los
    WebSockets) compartan el mismo bucle de eventos.
    """
    from ticket_logger.main import app

    test_engine = build_engine(_database_url(tmp_path), poolclass=NullPool)

    async def create_tables():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    session_factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_token_verifier] = lambda: verifier
    monkeypatch.setattr(category_service, "storage", storage)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    asyncio.run(test_engine.dispose())
