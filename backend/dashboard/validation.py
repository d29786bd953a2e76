"""
Client-side validation primitives and entity rule sets.

Each primitive returns None when the value passes or a ValidationError
naming the field. Only ``required`` rejects missing values; the other
checks skip None and "" so that optional fields can be composed freely:

    result = collect_errors(
        required("name", data.get("name"), "Name"),
        min_length("name", data.get("name"), 3, "Name"),
        email("email", data.get("email"), "Email"),
    )
    if not result.is_valid:
        print(result.message)
"""

import math
import re
from typing import Any, Callable, Iterable, Pattern

from dashboard.entity import Entity, Operation, ValidationError, ValidationResult
from shared.config.constants import Limits, Roles

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


# =============================================================================
# Primitives
# =============================================================================


def required(field: str, value: Any, field_name: str | None = None) -> ValidationError | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return ValidationError(field, f"{field_name or field} is required")
    return None


def email(field: str, value: Any, field_name: str | None = None) -> ValidationError | None:
    if _is_blank(value):
        return None
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
        return ValidationError(field, f"{field_name or field} must be a valid email address")
    return None


def min_length(
    field: str, value: Any, length: int, field_name: str | None = None
) -> ValidationError | None:
    if _is_blank(value):
        return None
    if len(value) < length:
        return ValidationError(
            field, f"{field_name or field} must be at least {length} characters long"
        )
    return None


def max_length(
    field: str, value: Any, length: int, field_name: str | None = None
) -> ValidationError | None:
    if _is_blank(value):
        return None
    if len(value) > length:
        return ValidationError(
            field, f"{field_name or field} must be no more than {length} characters long"
        )
    return None


def pattern(
    field: str, value: Any, regex: str | Pattern[str], message: str
) -> ValidationError | None:
    """Fail with ``message`` when ``value`` does not match ``regex``."""
    if _is_blank(value):
        return None
    if not re.search(regex, str(value)):
        return ValidationError(field, message)
    return None


def one_of(
    field: str, value: Any, allowed: Iterable[Any], field_name: str | None = None
) -> ValidationError | None:
    if _is_blank(value):
        return None
    allowed = list(allowed)
    if value not in allowed:
        options = ", ".join(str(a) for a in allowed)
        return ValidationError(field, f"{field_name or field} must be one of: {options}")
    return None


def number(field: str, value: Any, field_name: str | None = None) -> ValidationError | None:
    if _is_blank(value):
        return None
    if not _is_number(value):
        return ValidationError(field, f"{field_name or field} must be a valid number")
    return None


def in_range(
    field: str,
    value: Any,
    minimum: float,
    maximum: float,
    field_name: str | None = None,
) -> ValidationError | None:
    """Inclusive range check. Non-numeric values are left to ``number``."""
    if not _is_number(value):
        return None
    if value < minimum or value > maximum:
        return ValidationError(
            field, f"{field_name or field} must be between {minimum} and {maximum}"
        )
    return None


def collect_errors(*results: ValidationError | None) -> ValidationResult:
    errors = [r for r in results if r is not None]
    return ValidationResult(is_valid=not errors, errors=errors)


# =============================================================================
# Entity rule sets
# =============================================================================
#
# Each takes the camelCase payload and the operation. Required checks only
# run on create, since updates are partial.


def validate_user(data: Entity, operation: Operation = "create") -> ValidationResult:
    creating = operation == "create"
    return collect_errors(
        required("name", data.get("name"), "Name") if creating else None,
        min_length("name", data.get("name"), Limits.USER_NAME_MIN, "Name"),
        max_length("name", data.get("name"), Limits.USER_NAME_MAX, "Name"),
        required("email", data.get("email"), "Email") if creating else None,
        email("email", data.get("email"), "Email"),
        one_of("role", data.get("role"), Roles.ALL, "Role"),
    )


def validate_trainer(data: Entity, operation: Operation = "create") -> ValidationResult:
    return collect_errors(
        required("userId", data.get("userId"), "User") if operation == "create" else None,
        max_length("specialty", data.get("specialty"), 255, "Specialty"),
        number("experienceYears", data.get("experienceYears"), "Experience"),
        in_range("experienceYears", data.get("experienceYears"), 0, 70, "Experience"),
    )


def validate_client(data: Entity, operation: Operation = "create") -> ValidationResult:
    return collect_errors(
        required("userId", data.get("userId"), "User") if operation == "create" else None,
        max_length("goals", data.get("goals"), Limits.GOALS_MAX, "Goals"),
        number("height", data.get("height"), "Height"),
        in_range("height", data.get("height"), 50, 300, "Height"),
        number("weight", data.get("weight"), "Weight"),
        in_range("weight", data.get("weight"), 20, 500, "Weight"),
    )


def validate_feedback(data: Entity, operation: Operation = "create") -> ValidationResult:
    creating = operation == "create"
    return collect_errors(
        required("userId", data.get("userId"), "Client") if creating else None,
        required("trainerId", data.get("trainerId"), "Trainer") if creating else None,
        required("rating", data.get("rating"), "Rating") if creating else None,
        number("rating", data.get("rating"), "Rating"),
        in_range("rating", data.get("rating"), Limits.RATING_MIN, Limits.RATING_MAX, "Rating"),
    )


RULE_SETS: dict[str, Callable[[Entity, Operation], ValidationResult]] = {
    "user": validate_user,
    "trainer": validate_trainer,
    "client": validate_client,
    "feedback": validate_feedback,
}
