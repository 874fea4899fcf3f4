from __future__ import annotations

import re

from pydantic import BaseModel

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_MARKUP_RE = re.compile(r"[<>]")

MIN_PASSWORD_LENGTH = 6


class FieldValidation(BaseModel):
    valid: bool
    error: str | None = None


def validate_email(email: str | None) -> FieldValidation:
    if not email or not email.strip():
        return FieldValidation(valid=False, error="Email is required")
    if not _EMAIL_RE.match(email):
        return FieldValidation(valid=False, error="Email is invalid")
    return FieldValidation(valid=True)


def validate_password(password: str | None) -> FieldValidation:
    if not password:
        return FieldValidation(valid=False, error="Password is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        return FieldValidation(
            valid=False,
            error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
    return FieldValidation(valid=True)


def sanitize_input(text: str) -> str:
    # Trim again: removing markup can expose edge whitespace.
    return _MARKUP_RE.sub("", text.strip()).strip()
