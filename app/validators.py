"""Payload validators for the JSON request bodies.

Each validator is a pure function taking the decoded request body and
returning ``(True, None)`` when the payload is acceptable, or
``(False, message)`` with the first rule that failed.
"""

import math
import re
from typing import Any

from app import messages

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 3

# Largest value a MongoDB 64-bit integer can hold
MAX_REQUEST_COUNT = 2**63 - 1

ValidationResult = tuple[bool, str | None]

_OK: ValidationResult = (True, None)


def is_valid_email(value: Any) -> bool:
    """Return True if value is a string shaped like an email address."""
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def is_non_blank(value: Any) -> bool:
    """Return True if value is a string with at least one non-space character."""
    return isinstance(value, str) and value.strip() != ""


def _is_valid_password(value: Any) -> bool:
    return isinstance(value, str) and len(value) >= MIN_PASSWORD_LENGTH


def _password_message() -> str:
    return messages.PASSWORD_TOO_SHORT.format(min_length=MIN_PASSWORD_LENGTH)


def _as_positive_number(value: Any) -> float | None:
    """Coerce value to a finite positive number, accepting numeric strings.

    Returns:
        The number, or None if value is not a finite number greater than 0.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def validate_registration(payload: dict) -> ValidationResult:
    """Validate a registration body: email, password and name."""
    if not is_valid_email(payload.get("email")):
        return False, messages.INVALID_EMAIL
    if not _is_valid_password(payload.get("password")):
        return False, _password_message()
    if not is_non_blank(payload.get("name")):
        return False, messages.NAME_REQUIRED
    return _OK


def validate_login(payload: dict) -> ValidationResult:
    """Validate a login body: email and password."""
    if not is_valid_email(payload.get("email")):
        return False, messages.INVALID_EMAIL
    if not _is_valid_password(payload.get("password")):
        return False, _password_message()
    return _OK


def validate_advice(payload: dict) -> ValidationResult:
    """Validate an advice body: positive age, name and behavior."""
    if _as_positive_number(payload.get("age")) is None:
        return False, messages.AGE_INVALID
    if not is_non_blank(payload.get("name")):
        return False, messages.NAME_REQUIRED
    if not is_non_blank(payload.get("behavior")):
        return False, messages.BEHAVIOR_REQUIRED
    return _OK


def validate_translation(payload: dict) -> ValidationResult:
    """Validate a translation body: text and target language."""
    text, language = payload.get("text"), payload.get("language")
    if not (is_non_blank(text) and is_non_blank(language)):
        return False, messages.TEXT_AND_LANGUAGE_REQUIRED
    return _OK


def validate_update_request_count(payload: dict) -> ValidationResult:
    """Validate a request count update: target email and non-negative integer."""
    if not is_valid_email(payload.get("email")):
        return False, messages.INVALID_EMAIL

    # bool is a subclass of int; 5.0 decodes as float but is still integral
    count = payload.get("requestCount")
    if isinstance(count, bool) or not isinstance(count, (int, float)):
        return False, messages.REQUEST_COUNT_INVALID
    if isinstance(count, float) and not count.is_integer():
        return False, messages.REQUEST_COUNT_INVALID
    if count < 0 or count > MAX_REQUEST_COUNT:
        return False, messages.REQUEST_COUNT_INVALID
    return _OK
