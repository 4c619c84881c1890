"""
Record-related models for the celebrations site.

These describe:
- the Collection enum (CONTACT, EVENT, DASHBOARD)
- the Record type: an open mapping, since form submissions carry no schema
- the required fields of an event booking
"""

from enum import Enum
from typing import Any, Dict


# One form submission. Keys are form field names, values are whatever the
# client sent (strings from HTML forms, any JSON scalar from JSON bodies).
Record = Dict[str, Any]


class Collection(str, Enum):
    CONTACT = "contact"
    EVENT = "event"
    DASHBOARD = "dashboard"


REQUIRED_EVENT_FIELDS = ("eventPurpose", "guests", "date", "budget")
