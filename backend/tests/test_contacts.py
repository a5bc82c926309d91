"""
Tests for contact normalization and validation
"""
import pytest

from contacts import (
    BAD_EMAIL, BAD_PHONE, BAD_TELEGRAM, NO_CONTACTS,
    check_contacts, is_valid_email, is_valid_handle, is_valid_phone,
    normalize_phone, validate_bundle,
)
from schemas import ContactBundle


@pytest.mark.parametrize("raw", ["89161234567", "79161234567", "+7 916 123 45 67", "8 (916) 123-45-67"])
def test_normalize_phone(raw):
    assert normalize_phone(raw) == "+7 (916) 123-45-67"


def test_normalize_phone_keeps_other_input():
    assert normalize_phone("12345") == "12345"
    assert normalize_phone("") == ""


def test_normalize_phone_discards_leading_digit():
    assert normalize_phone("99161234567") == "+7 (916) 123-45-67"


def test_normalize_phone_twice():
    once = normalize_phone("89161234567")
    assert normalize_phone(once) == once


def test_is_valid_phone():
    assert is_valid_phone("")
    assert is_valid_phone("+7 (916) 123-45-67")
    assert is_valid_phone("89161234567")
    assert not is_valid_phone("99161234567")
    assert not is_valid_phone("8916")


@pytest.mark.parametrize("email", [
    "",
    "user@example.com",
    "User.Name@Example.RU",
    "user@[192.168.0.1]",
    '"john doe"@example.com',
])
def test_valid_email(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", [
    "user@localhost",
    "user example@x.com",
    "user@example.c",
    "юзер@example.com",
    "user@example.com\n",
])
def test_invalid_email(email):
    assert not is_valid_email(email)


def test_handle():
    assert is_valid_handle("")
    assert is_valid_handle("@user_name")
    assert is_valid_handle("@" + "a" * 32)
    assert not is_valid_handle("@abcd")
    assert not is_valid_handle("@" + "a" * 33)
    assert not is_valid_handle("user_name")
    assert not is_valid_handle("@bad-name")


def test_validate_bundle():
    assert validate_bundle(ContactBundle()) == NO_CONTACTS
    assert validate_bundle(ContactBundle(phone="any")) is None
    assert validate_bundle(ContactBundle(other_contact="WhatsApp")) is None
    assert validate_bundle(ContactBundle(email="nope")) == BAD_EMAIL
    assert validate_bundle(ContactBundle(telegram="nope")) == BAD_TELEGRAM


def test_bundle_accepts_camel_case_and_none():
    bundle = ContactBundle.model_validate({"otherContact": " VK ", "phone": None})
    assert bundle.other_contact == "VK"
    assert bundle.phone == ""


def test_check_contacts_normalizes_phone():
    check = check_contacts(ContactBundle(phone="8 916 123 45 67", telegram="@pool_master"))
    assert check.valid
    assert check.error is None
    assert check.contacts.phone == "+7 (916) 123-45-67"
    assert check.contacts.telegram == "@pool_master"


def test_check_contacts_rejects_phone():
    check = check_contacts(ContactBundle(phone="123"))
    assert not check.valid
    assert check.error == BAD_PHONE


def test_check_contacts_reports_bundle_error_first():
    check = check_contacts(ContactBundle(phone="123", email="bad"))
    assert check.error == BAD_EMAIL
