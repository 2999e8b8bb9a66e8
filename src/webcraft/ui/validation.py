"""Client-side form field validation.

Mirrors the rules the site's forms declare: required fields, e-mail
format and minimum length. ``FieldRules`` instances plug straight into
NiceGUI's ``validation=`` argument, which expects a callable returning an
error message or None.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

REQUIRED_MESSAGE = "Ce champ est obligatoire."
INVALID_EMAIL_MESSAGE = "Veuillez saisir une adresse e-mail valide."

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def min_length_message(min_length: int) -> str:
    return f"Ce champ doit contenir au moins {min_length} caractères."


def validate_field(
    value: str | None,
    *,
    required: bool = False,
    input_type: Literal["text", "email", "password"] = "text",
    min_length: int | None = None,
) -> str | None:
    """Return the error message for a field value, or None if it is valid.

    Rules are checked in order and only the first failure is reported:
    required, then e-mail format (e-mail fields only), then minimum length.
    Surrounding whitespace is ignored.
    """
    text = (value or "").strip()

    if required and not text:
        return REQUIRED_MESSAGE
    if input_type == "email" and text:
        return None if _EMAIL_RE.match(text) else INVALID_EMAIL_MESSAGE
    if min_length is not None and len(text) < min_length:
        return min_length_message(min_length)
    return None


@dataclass(frozen=True)
class FieldRules:
    """Validation rules for one input; callable as a NiceGUI validator."""

    required: bool = False
    input_type: Literal["text", "email", "password"] = "text"
    min_length: int | None = None

    def __call__(self, value: str | None) -> str | None:
        return validate_field(
            value,
            required=self.required,
            input_type=self.input_type,
            min_length=self.min_length,
        )


EMAIL_FIELD = FieldRules(required=True, input_type="email")
PASSWORD_FIELD = FieldRules(required=True, input_type="password", min_length=8)


def validate_form(
    values: dict[str, str | None], rules: dict[str, FieldRules]
) -> dict[str, str]:
    """Validate several fields at once.

    Returns:
        Mapping of field name to error message, empty when every field
        passes. Fields without rules are ignored.
    """
    errors: dict[str, str] = {}
    for name, field_rules in rules.items():
        message = field_rules(values.get(name))
        if message is not None:
            errors[name] = message
    return errors
