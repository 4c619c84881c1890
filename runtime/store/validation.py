"""Required-field checks for form submissions."""

import math
from typing import Any, List, Mapping, Sequence

from exceptions.exceptions import ValidationError


def is_empty(value: Any) -> bool:
    """True for None, "", False, 0 and NaN.

    Empty lists and objects count as present, the same as in a browser.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def missing_fields(record: Mapping, required: Sequence[str]) -> List[str]:
    """Return the required field names whose value is absent or empty.

    Order follows `required`, not the record.
    """
    return [name for name in required if is_empty(record.get(name))]


def require_fields(record: Mapping, required: Sequence[str]) -> None:
    """Raise ValidationError naming every missing field, if any."""
    missing = missing_fields(record, required)
    if missing:
        raise ValidationError(missing)
