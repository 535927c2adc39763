# backend/ticket_logger/services/file_storage_service.py
"""
Almacenamiento en disco de las imágenes de categoría.

Las imágenes se guardan en UPLOAD_DIR con un nombre aleatorio que conserva
la extensión original. El servicio devuelve sólo ese nombre (la referencia),
que es lo que se persiste en la columna categories.image.
"""

import logging
import uuid
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from ticket_logger.core.config import settings
from ticket_logger.core.exceptions import StorageError, ValidationError
from ticket_logger.core.i18n import get_message

logger = logging.getLogger(__name__)


class FileStorageService:
    """
    Guarda y borra ficheros subidos.

    Las escrituras y borrados en disco se hacen en el pool de hilos para no
    bloquear el bucle de eventos.
    """

    def __init__(
        self,
        upload_dir: Optional[Path] = None,
        allowed_extensions: Optional[Iterable[str]] = None,
        max_size: Optional[int] = None,
    ):
        if upload_dir is None:
            upload_dir = Path(settings.UPLOAD_DIR)
            if not upload_dir.is_absolute():
                upload_dir = settings.BASE_DIR / upload_dir
        self.upload_dir = Path(upload_dir)
        self.allowed_extensions = {ext.lower() for ext in (allowed_extensions or settings.ALLOWED_IMAGE_EXTENSIONS)}
        self.max_size = max_size or settings.MAX_UPLOAD_SIZE

    def path_for(self, reference: str) -> Path:
        # Path(...).name impide salir del directorio con referencias tipo "../x"
        return self.upload_dir / Path(reference).name

    async def validate(self, upload: UploadFile, locale: Optional[str] = None) -> bytes:
        """
        Comprueba extensión y tamaño sin escribir nada en disco.

        Returns:
            El contenido del fichero (el UploadFile queda rebobinado)

        Raises:
            ValidationError: extensión no permitida o tamaño excesivo
        """
        extension = Path(upload.filename or "").suffix.lower()
        if extension not in self.allowed_extensions:
            raise ValidationError(get_message("storage.invalidExtension", locale, extension=extension or "-"))

        content = await upload.read()
        await upload.seek(0)
        if len(content) > self.max_size:
            raise ValidationError(get_message("storage.tooLarge", locale))
        return content

    async def save(self, upload: UploadFile, locale: Optional[str] = None) -> str:
        """
        Valida y guarda un fichero subido.

        Returns:
            La referencia del fichero guardado (nombre dentro de UPLOAD_DIR)

        Raises:
            ValidationError: extensión no permitida o tamaño excesivo
            StorageError: fallo de escritura en disco
        """
        content = await self.validate(upload, locale)
        extension = Path(upload.filename or "").suffix.lower()

        reference = f"{uuid.uuid4().hex}{extension}"
        target = self.path_for(reference)
        try:
            await run_in_threadpool(self.upload_dir.mkdir, parents=True, exist_ok=True)
            await run_in_threadpool(target.write_bytes, content)
        except OSError as e:
            logger.error(f"Error guardando la imagen {reference}: {e}", exc_info=True)
            raise StorageError(get_message("storage.saveFailed", locale)) from e

        logger.info(f"Imagen guardada: {reference} ({len(content)} bytes)")
        return reference

    async def delete(self, reference: str, locale: Optional[str] = None) -> None:
        """
        Borra un fichero guardado. Un fichero que ya no existe no es un error.
        """
        target = self.path_for(reference)
        try:
            await run_in_threadpool(target.unlink, missing_ok=True)
        except OSError as e:
            logger.error(f"Error eliminando la imagen {reference}: {e}", exc_info=True)
            raise StorageError(get_message("storage.deleteFailed", locale)) from e
        logger.info(f"Imagen eliminada: {reference}")


# Instancia global del servicio
file_storage_service = FileStorageService()
