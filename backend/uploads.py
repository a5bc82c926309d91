"""
Хранение загруженных изображений проектов в папке uploads/
"""
import secrets
import time
from functools import lru_cache
from pathlib import Path
from typing import BinaryIO, Optional

from config import get_settings
from errors import UploadError
from logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}
REFERENCE_PREFIX = "uploads/"


class ImageStorage:
    def __init__(self, directory: Path, max_bytes: int):
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    def ensure(self):
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, filename: str, content_type: Optional[str], stream: BinaryIO) -> str:
        """Сохраняет файл и возвращает ссылку вида uploads/<имя>."""
        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS or (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
            raise UploadError("Разрешены только изображения (jpeg, jpg, png, gif)")

        data = stream.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise UploadError(f"Файл слишком большой. Максимальный размер {limit_mb}MB")

        name = f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{ext}"
        self.ensure()
        (self.directory / name).write_bytes(data)
        logger.info("Изображение сохранено: %s (%d байт)", name, len(data))
        return REFERENCE_PREFIX + name

    def path_for(self, reference: Optional[str]) -> Optional[Path]:
        if not reference or not reference.startswith(REFERENCE_PREFIX):
            return None
        # только имя файла, без подпапок
        name = Path(reference[len(REFERENCE_PREFIX):]).name
        if not name:
            return None
        return self.directory / name

    def delete(self, reference: Optional[str]) -> bool:
        path = self.path_for(reference)
        if path is None or not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error("Не удалось удалить изображение %s: %s", path.name, e)
            return False
        logger.info("Изображение удалено: %s", path.name)
        return True


@lru_cache()
def get_images() -> ImageStorage:
    settings = get_settings()
    storage = ImageStorage(settings.uploads_path, settings.max_upload_bytes)
    storage.ensure()
    return storage
