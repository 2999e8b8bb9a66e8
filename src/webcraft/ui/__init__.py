"""UI helpers shared by the site's pages: validation, formatting, timing."""

from webcraft.ui.formatting import format_date, format_number
from webcraft.ui.timing import debounce, throttle
from webcraft.ui.validation import FieldRules, validate_field, validate_form

__all__ = [
    "FieldRules",
    "debounce",
    "format_date",
    "format_number",
    "throttle",
    "validate_field",
    "validate_form",
]
