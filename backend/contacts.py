"""
Проверка и нормализация контактов проекта.

Один и тот же модуль используется при создании проекта и через
POST /api/contacts/validate для проверки формы в браузере.
"""
import re

from schemas import ContactBundle, ContactCheck

NO_CONTACTS = "Укажите хотя бы один способ связи"
BAD_PHONE = "Некорректный номер телефона. Используйте формат: +7 XXX XXX-XX-XX"
BAD_EMAIL = "Некорректный email адрес"
BAD_TELEGRAM = "Некорректный Telegram username. Формат: @username (5-32 символа)"

_NON_DIGITS = re.compile(r"[^0-9]")
_EMAIL_RE = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])"
    r"|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))"
)
_TELEGRAM_RE = re.compile(r"@[A-Za-z0-9_]{5,32}")


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def normalize_phone(raw: str) -> str:
    """
    Приводит номер из 11 цифр к виду +7 (XXX) XXX-XX-XX.

    Первая цифра (7 или 8) отбрасывается. Строки с другим количеством цифр
    возвращаются как есть, их отклонит is_valid_phone.
    """
    if not raw:
        return ""
    digits = _digits(raw)
    if len(digits) != 11:
        return raw
    rest = digits[1:]
    return f"+7 ({rest[0:3]}) {rest[3:6]}-{rest[6:8]}-{rest[8:10]}"


def is_valid_phone(value: str) -> bool:
    if not value:
        return True
    digits = _digits(value)
    return len(digits) == 11 and digits[0] in "78"


def is_valid_email(value: str) -> bool:
    if not value:
        return True
    return value.isascii() and _EMAIL_RE.fullmatch(value.lower()) is not None


def is_valid_handle(value: str) -> bool:
    if not value:
        return True
    return _TELEGRAM_RE.fullmatch(value) is not None


def validate_bundle(bundle: ContactBundle):
    """Возвращает текст ошибки или None. Телефон проверяется отдельно."""
    if bundle.is_empty():
        return NO_CONTACTS
    if bundle.email and not is_valid_email(bundle.email):
        return BAD_EMAIL
    if bundle.telegram and not is_valid_handle(bundle.telegram):
        return BAD_TELEGRAM
    return None


def check_contacts(bundle: ContactBundle) -> ContactCheck:
    error = validate_bundle(bundle)
    if error is None:
        phone = normalize_phone(bundle.phone)
        bundle = bundle.model_copy(update={"phone": phone})
        if not is_valid_phone(phone):
            error = BAD_PHONE
    return ContactCheck(valid=error is None, error=error, contacts=bundle)
