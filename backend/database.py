"""
Хранилище проектов: один JSON-файл со списком всех записей.

Файл читается и перезаписывается целиком при каждом изменении. Изменения
внутри процесса выполняются под общей блокировкой.
"""
import os
import tempfile
import threading
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from config import get_settings
from errors import StorageError
from logging_config import LoggingConfig
from schemas import Project

logger = LoggingConfig.get_logger(__name__)

_projects_adapter = TypeAdapter(List[Project])


@dataclass
class LoadResult:
    """Результат чтения файла: ok=False означает, что хранилище недоступно."""
    records: List[Project] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[Project]:
        if self.error is not None:
            raise StorageError("Ошибка чтения хранилища проектов")
        return self.records


class ProjectStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def ensure(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.save_all([])

    def load_all(self) -> LoadResult:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return LoadResult()
        except OSError as e:
            logger.error("Ошибка чтения файла проектов %s: %s", self.path, e)
            return LoadResult(error=str(e))

        try:
            return LoadResult(records=_projects_adapter.validate_json(raw))
        except PydanticValidationError as e:
            logger.error("Файл проектов %s поврежден: %s", self.path, e)
            return LoadResult(error=str(e))

    def save_all(self, records: List[Project]):
        payload = _projects_adapter.dump_json(records, by_alias=True, indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=self.path.name, suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error("Ошибка записи файла проектов %s: %s", self.path, e)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("Ошибка записи хранилища проектов") from e

    def append(self, record: Project):
        with self._lock:
            records = self.load_all().unwrap()
            records.append(record)
            self.save_all(records)
        logger.info("Проект %s сохранен", record.id)

    def remove(self, project_id: str) -> Optional[Project]:
        """Удаляет первую запись с данным id и возвращает ее (или None)."""
        with self._lock:
            records = self.load_all().unwrap()
            for index, record in enumerate(records):
                if record.id == project_id:
                    del records[index]
                    self.save_all(records)
                    logger.info("Проект %s удален", project_id)
                    return record
        return None

    def find_by_id(self, project_id: str) -> Optional[Project]:
        for record in self.load_all().unwrap():
            if record.id == project_id:
                return record
        return None

    def find_by_creation_date(self, day: date) -> List[Project]:
        # сравнение по локальной дате сервера
        return [
            record for record in self.load_all().unwrap()
            if record.created_at.astimezone().date() == day
        ]


@lru_cache()
def get_store() -> ProjectStore:
    store = ProjectStore(get_settings().data_path)
    store.ensure()
    return store
