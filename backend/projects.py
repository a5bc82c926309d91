"""
Создание и удаление проектов: проверка формы, изображение, запись в хранилище
"""
import json
import math
import re
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Optional

from pydantic import ValidationError as PydanticValidationError

import cities
from contacts import check_contacts
from database import ProjectStore
from errors import NotFoundError, StorageError, ValidationError
from logging_config import LoggingConfig
from schemas import ContactBundle, Project
from uploads import ImageStorage

logger = LoggingConfig.get_logger(__name__)

REQUIRED_FIELDS = (
    ("title", "Название проекта"),
    ("tagline", "Краткое описание"),
    ("description", "Подробное описание"),
    ("city", "Город"),
    ("price", "Стоимость"),
    ("contact", "Контактная информация"),
)


@dataclass
class ProjectForm:
    title: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    city: Optional[str] = None
    price: Optional[str] = None
    contact: Optional[str] = None


@dataclass
class ImageUpload:
    filename: str
    content_type: Optional[str]
    stream: BinaryIO


_PRICE_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def generate_id() -> str:
    return f"project_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


def _parse_price(raw: str) -> float:
    price = float(raw) if _PRICE_RE.fullmatch(raw) else math.nan
    if not math.isfinite(price) or price <= 0:
        raise ValidationError("Стоимость должна быть положительным числом")
    return price


def _parse_contacts(raw: str) -> ContactBundle:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("contact must be an object")
        return ContactBundle.model_validate(data)
    except (ValueError, PydanticValidationError):
        raise ValidationError("Некорректный формат контактной информации")


def validate_form(form: ProjectForm) -> Project:
    """Проверяет форму и возвращает запись проекта (без изображения)."""
    missing = [
        label for name, label in REQUIRED_FIELDS
        if not (getattr(form, name) or "").strip()
    ]
    if missing:
        raise ValidationError(f"Не заполнены обязательные поля: {', '.join(missing)}")

    city = form.city.strip()
    if not cities.is_valid(city):
        message = "Указанный город не найден в списке российских городов"
        suggestion = cities.suggest(city)
        if suggestion:
            message += f". Возможно, вы имели в виду: {suggestion}"
        raise ValidationError(message)

    check = check_contacts(_parse_contacts(form.contact))
    if not check.valid:
        raise ValidationError(check.error)

    price = _parse_price(form.price.strip())

    return Project(
        id=generate_id(),
        title=form.title.strip(),
        tagline=form.tagline.strip(),
        description=form.description.strip(),
        city=city,
        price=price,
        contacts=check.contacts,
        created_at=datetime.now(timezone.utc),
    )


def create_project(
    store: ProjectStore,
    images: ImageStorage,
    form: ProjectForm,
    image: Optional[ImageUpload] = None,
) -> Project:
    project = validate_form(form)

    if image is not None:
        project.image = images.save(image.filename, image.content_type, image.stream)

    try:
        store.append(project)
    except StorageError:
        # запись не сохранилась, изображение больше никому не нужно
        images.delete(project.image)
        raise

    logger.info("Создан проект %s (%s)", project.id, project.city)
    return project


def delete_project(store: ProjectStore, images: ImageStorage, project_id: str) -> Project:
    project = store.remove(project_id)
    if project is None:
        raise NotFoundError("Проект не найден")
    if project.image:
        images.delete(project.image)
    return project
