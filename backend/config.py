"""
Настройки приложения (pydantic-settings, переменные окружения и .env)
"""
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_DIR = Path(__file__).resolve().parent
ENV_FILE = BACKEND_DIR / ".env"
if not ENV_FILE.exists():
    ENV_FILE = BACKEND_DIR.parent / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = Field(default="project-board API", description="Название сервиса")
    app_env: str = Field(default="development", description="Окружение")
    log_level: str = Field(default="INFO", description="Уровень логирования")
    log_format: str = Field(default="text", description="Формат логов: 'text' или 'json'")

    api_host: str = Field(default="0.0.0.0", description="Хост API")
    api_port: int = Field(default=3000, ge=1, le=65535, description="Порт API")
    allowed_origins: str = Field(default="*", description="CORS origins через запятую")

    data_file: Path = Field(default=Path("projects.json"), description="JSON-файл с проектами")
    uploads_dir: Path = Field(default=Path("uploads"), description="Папка для изображений")
    max_upload_mb: int = Field(default=5, ge=1, description="Максимальный размер изображения, MB")

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def data_path(self) -> Path:
        return _resolve(self.data_file)

    @property
    def uploads_path(self) -> Path:
        return _resolve(self.uploads_dir)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


def _resolve(path: Path) -> Path:
    # относительные пути считаются от папки backend/
    return path if path.is_absolute() else BACKEND_DIR / path


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
