"""Field rules applied to incoming create and update payloads.

Rules live in a plain table mapping each field to an ordered list of
``(predicate, message)`` pairs. Evaluation stops at the first failing rule of a
field but always visits every field, so callers get the complete list of
violations in one response.
"""

import logging
from collections.abc import Callable
from typing import Any

from email_validator import EmailNotValidError, validate_email

from users_common.exceptions import ValidationError

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6

Rule = tuple[Callable[[Any], bool], str]


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _not_blank(value: Any) -> bool:
    return bool(value.strip())


def _is_email(value: Any) -> bool:
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _min_password_length(value: Any) -> bool:
    return len(value) >= PASSWORD_MIN_LENGTH


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


USER_RULES: dict[str, list[Rule]] = {
    "name": [
        (_is_string, "Name must be a string"),
        (_not_blank, "Name is required"),
    ],
    "email": [
        (_is_string, "Email must be a string"),
        (_not_blank, "Email is required"),
        (_is_email, "Please enter a valid email"),
    ],
    "password": [
        (_is_string, "Password must be a string"),
        (_min_password_length, f"Password must be at least {PASSWORD_MIN_LENGTH} characters"),
    ],
    "isActive": [
        (_is_bool, "isActive must be a boolean"),
    ],
}

REQUIRED_ON_CREATE = ("name", "email", "password")

REQUIRED_MESSAGES = {
    "name": "Name is required",
    "email": "Email is required",
    "password": "Password is required",
}

NORMALIZERS: dict[str, Callable[[Any], Any]] = {
    "name": lambda value: value.strip(),
    "email": lambda value: value.strip().lower(),
}


def _check(raw: Any, required: tuple[str, ...]) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValidationError([{"field": "body", "message": "Request body must be a JSON object"}])

    details: list[dict[str, Any]] = []
    normalized: dict[str, Any] = {}

    for field, rules in USER_RULES.items():
        if raw.get(field) is None and field in required:
            details.append({"field": field, "message": REQUIRED_MESSAGES[field]})
            continue
        if field not in raw:
            continue

        value = raw[field]

        for predicate, message in rules:
            if not predicate(value):
                details.append({"field": field, "message": message})
                break
        else:
            normalizer = NORMALIZERS.get(field)
            normalized[field] = normalizer(value) if normalizer else value

    if details:
        logger.debug("Payload rejected: %s", [d["field"] for d in details])
        raise ValidationError(details)

    return normalized


def validate_create(raw: Any) -> dict[str, Any]:
    """Validate and normalize a create payload.

    Args:
        raw: Parsed JSON body

    Returns:
        Normalized record holding only known fields

    Raises:
        ValidationError: If any field violates its rules
    """
    return _check(raw, REQUIRED_ON_CREATE)


def validate_update(raw: Any) -> dict[str, Any]:
    """Validate and normalize a partial update payload.

    Absent fields stay unchanged, so nothing is required here. A field sent
    as null is present and must pass its rules like any other value.
    """
    return _check(raw, ())
