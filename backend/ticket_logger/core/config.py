# backend/ticket_logger/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path
import os

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Ticket Logger API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "postgres")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "ticket_logger_db")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")

    # Permite apuntar a otra base de datos (p. ej. SQLite en desarrollo y tests)
    SQLALCHEMY_DATABASE_URI: Optional[str] = None
    SQLALCHEMY_ECHO: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Configuración de Redis (almacén de notificaciones)
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", 6379))
    REDIS_DB: int = 0

    @property
    def REDIS_URL(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # JWT - La clave pública verifica los tokens emitidos por el servidor de autenticación
    JWT_PUBLIC_KEY: Optional[str] = None
    JWT_PUBLIC_KEY_PATH: Optional[str] = None
    JWT_ALGORITHM: str = "RS256"
    JWT_EXPIRATION_MINUTES: int = 60

    # Imágenes de categorías
    UPLOAD_DIR: str = "uploads"
    ALLOWED_IMAGE_EXTENSIONS: List[str] = [".png", ".jpg", ".jpeg", ".gif", ".webp"]
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5 MB

    # Notificaciones
    NOTIFICATIONS_TOPIC: str = "/topic/notifications"
    NOTIFICATION_PUBLISH_TIMEOUT: float = 5.0

    # Idioma por defecto de los mensajes de error
    DEFAULT_LOCALE: str = "es"

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = None

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    def get_jwt_public_key(self) -> Optional[str]:
        """Devuelve la clave pública PEM, leyéndola del fichero si se configuró una ruta."""
        if self.JWT_PUBLIC_KEY:
            return self.JWT_PUBLIC_KEY
        if self.JWT_PUBLIC_KEY_PATH:
            return Path(self.JWT_PUBLIC_KEY_PATH).read_text(encoding="utf-8")
        return None

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
