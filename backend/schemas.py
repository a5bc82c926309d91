"""
Pydantic models for the project board

Project records are persisted as a JSON list in the data file (see database.py);
the remaining models describe API responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContactBundle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone: str = Field("", description="Телефон")
    email: str = Field("", description="Email")
    telegram: str = Field("", description="Telegram username (@username)")
    other_contact: str = Field("", alias="otherContact", description="Другие контакты")

    @field_validator("phone", "email", "telegram", "other_contact", mode="before")
    @classmethod
    def clean(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    def is_empty(self) -> bool:
        return not (self.phone or self.email or self.telegram or self.other_contact)


class Project(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Идентификатор проекта")
    title: str = Field(..., description="Название проекта")
    tagline: str = Field(..., description="Краткое описание")
    description: str = Field(..., description="Подробное описание")
    city: str = Field(..., description="Город из справочника")
    price: float = Field(..., gt=0, description="Стоимость")
    contacts: ContactBundle = Field(default_factory=ContactBundle, description="Контакты")
    image: Optional[str] = Field(None, description="Путь к изображению (uploads/...)")
    created_at: datetime = Field(..., alias="createdAt", description="Дата создания")


class CityValidation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city: str
    is_valid: bool = Field(..., alias="isValid")
    suggestion: Optional[str] = None


class ContactCheck(BaseModel):
    valid: bool
    error: Optional[str] = None
    contacts: ContactBundle


class DeleteResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_id: str = Field(..., alias="deletedId")
