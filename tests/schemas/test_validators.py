"""Tests for request validation helpers."""
from uuid import UUID

import pytest

from schemas.validators import is_valid_email, is_valid_password, is_valid_url, parse_uuid


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://a.example", True),
        ("http://localhost:8000/path?q=1", True),
        ("ftp://files.example/x", True),
        ("a.example", False),
        ("https://", False),
        ("", False),
        ("http://[::1", False),
    ],
)
def test__is_valid_url(url: str, expected: bool) -> None:
    assert is_valid_url(url) is expected


@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("user@example.com", True),
        ("first.last+tag@sub.example.org", True),
        ("user@localhost", True),
        ("no-at-sign", False),
        ("user@", False),
        ("@example.com", False),
        ("user@-example.com", False),
    ],
)
def test__is_valid_email(email: str, expected: bool) -> None:
    assert is_valid_email(email) is expected


def test__is_valid_password__minimum_length() -> None:
    assert is_valid_password("12345678") is True
    assert is_valid_password("1234567") is False


def test__parse_uuid__canonical_string() -> None:
    value = "3f2504e0-4f89-11d3-9a0c-0305e82c3301"
    assert parse_uuid(value) == UUID(value)
    assert parse_uuid(value.upper()) == UUID(value)


def test__parse_uuid__passes_uuid_through() -> None:
    value = UUID("3f2504e0-4f89-11d3-9a0c-0305e82c3301")
    assert parse_uuid(value) is value


@pytest.mark.parametrize(
    "value",
    ["", "not-a-uuid", "3f2504e04f8911d39a0c0305e82c3301", "{3f2504e0-4f89-11d3-9a0c-0305e82c3301}", None, 42],
)
def test__parse_uuid__malformed_returns_none(value: object) -> None:
    assert parse_uuid(value) is None
