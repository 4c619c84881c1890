import pytest

from exceptions.exceptions import ValidationError
from runtime.models.record_models import REQUIRED_EVENT_FIELDS
from runtime.store.validation import missing_fields, require_fields


def test_missing_fields_in_declared_order():
    assert missing_fields({"guests": 5}, REQUIRED_EVENT_FIELDS) == [
        "eventPurpose",
        "date",
        "budget",
    ]


def test_empty_values_count_as_missing():
    record = {"eventPurpose": "", "guests": 0, "date": None, "budget": "100"}
    assert missing_fields(record, REQUIRED_EVENT_FIELDS) == [
        "eventPurpose",
        "guests",
        "date",
    ]


def test_require_fields_passes_complete_record():
    record = {"eventPurpose": "Wedding", "guests": "50", "date": "2025-06-01", "budget": "10000"}
    require_fields(record, REQUIRED_EVENT_FIELDS)


def test_require_fields_raises_with_message():
    with pytest.raises(ValidationError) as exc_info:
        require_fields({"guests": 5}, REQUIRED_EVENT_FIELDS)

    err = exc_info.value
    assert err.missing_fields == ["eventPurpose", "date", "budget"]
    assert err.message == "Missing required fields: eventPurpose, date, budget"
    assert err.status_code == 400


def test_empty_containers_count_as_present():
    record = {"eventPurpose": [], "guests": {}, "date": False, "budget": float("nan")}
    assert missing_fields(record, REQUIRED_EVENT_FIELDS) == ["date", "budget"]
