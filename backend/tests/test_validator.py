import pytest

from signaldesk.validation.validator import (
    sanitize_input,
    validate_email,
    validate_password,
)


@pytest.mark.parametrize("email", ["", "   ", None])
def test_email_required(email) -> None:
    result = validate_email(email)

    assert result.valid is False
    assert result.error == "Email is required"


@pytest.mark.parametrize(
    "email",
    ["plainaddress", "user@", "user@domain", "@domain.com", "us er@domain.com", "a@b@c.com"],
)
def test_email_rejects_malformed(email) -> None:
    result = validate_email(email)

    assert result.valid is False
    assert result.error == "Email is invalid"


@pytest.mark.parametrize("email", ["trader@example.com", "a.b+tag@sub.domain.vn"])
def test_email_accepts_well_formed(email) -> None:
    result = validate_email(email)

    assert result.valid is True
    assert result.error is None


@pytest.mark.parametrize("password", ["", None])
def test_password_required(password) -> None:
    assert validate_password(password).error == "Password is required"


def test_password_minimum_length() -> None:
    short = validate_password("abc12")

    assert short.valid is False
    assert short.error == "Password must be at least 6 characters"
    assert validate_password("abc123").valid is True
    assert validate_password("      ").valid is True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  hello  ", "hello"),
        ("<script>alert(1)</script>", "scriptalert(1)/script"),
        ("a < b > c", "a  b  c"),
        ("< padded >", "padded"),
        ("<<>>", ""),
    ],
)
def test_sanitize_input(raw, expected) -> None:
    cleaned = sanitize_input(raw)

    assert cleaned == expected
    assert "<" not in cleaned and ">" not in cleaned
    assert sanitize_input(cleaned) == cleaned
