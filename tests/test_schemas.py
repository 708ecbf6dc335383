from datetime import datetime

import pytest
from pydantic import ValidationError

from reservation_api.errors import RequestValidationError
from reservation_api.models import ReservationStatus
from reservation_api.schemas import (
    CreateBlacklistRequest,
    CreateReservationRequest,
    RequestReservationRequest,
)


def _payload(**overrides):
    payload = {
        "lastName": "doe",
        "email": "a@b.com",
        "seats": 2,
        "date": "2026-11-20T19:00:00Z",
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


def _error_message(model, payload) -> str:
    with pytest.raises(ValidationError) as exc:
        model.model_validate(payload)
    return RequestValidationError.from_pydantic(exc.value).message


def test_minimal_payload_defaults_status():
    data = CreateReservationRequest.model_validate(_payload())
    assert data.status is ReservationStatus.REQUIRES_APPROVAL
    assert data.table_id is None
    assert data.phone_number is None


def test_names_are_trimmed_and_lowercased():
    data = CreateReservationRequest.model_validate(
        _payload(firstName="  Jane ", lastName="  DOE-Smith  ")
    )
    assert data.first_name == "jane"
    assert data.last_name == "doe-smith"


def test_date_is_stored_as_naive_utc():
    data = CreateReservationRequest.model_validate(_payload(date="2026-11-20T21:00:00+02:00"))
    assert data.date == datetime(2026, 11, 20, 19, 0)
    assert data.date.tzinfo is None


def test_snake_case_keys_are_accepted():
    payload = _payload(email=None, phone_number="15551234567", last_name="smith")
    del payload["lastName"]
    data = CreateReservationRequest.model_validate(payload)
    assert data.phone_number == "15551234567"
    assert data.last_name == "smith"


@pytest.mark.parametrize("contact", [{}, {"email": ""}, {"email": "  ", "phoneNumber": ""}])
def test_missing_both_contacts_is_rejected(contact):
    payload = _payload(email=None)
    payload.update(contact)
    message = _error_message(CreateReservationRequest, payload)
    assert "email or phoneNumber is required" in message


@pytest.mark.parametrize("last_name", [None, "ab", "  ab  ", "123", "---"])
def test_bad_last_name_is_rejected(last_name):
    message = _error_message(CreateReservationRequest, _payload(lastName=last_name))
    assert message.startswith("lastName:")


def test_first_name_is_optional_but_validated_when_present():
    assert CreateReservationRequest.model_validate(_payload(firstName="")).first_name is None
    message = _error_message(CreateReservationRequest, _payload(firstName="Al"))
    assert message.startswith("firstName:")


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "a@b.c.d", "a b@c.com", "x" * 320 + "@b.com"])
def test_malformed_email_is_rejected(email):
    assert _error_message(CreateReservationRequest, _payload(email=email)).startswith("email:")


@pytest.mark.parametrize("phone", ["1555123456", "15551234567890", "+15551234567", "555-123-4567"])
def test_malformed_phone_number_is_rejected(phone):
    message = _error_message(CreateReservationRequest, _payload(email=None, phoneNumber=phone))
    assert "phoneNumber:" in message


@pytest.mark.parametrize("phone", ["15551234567", "445551234567", "4455512345678"])
def test_phone_number_accepts_eleven_to_thirteen_digits(phone):
    data = CreateReservationRequest.model_validate(_payload(email=None, phoneNumber=phone))
    assert data.phone_number == phone


def test_seats_required_and_non_negative():
    assert _error_message(CreateReservationRequest, _payload(seats=None)).startswith("seats:")
    assert _error_message(CreateReservationRequest, _payload(seats=-1)).startswith("seats:")
    assert CreateReservationRequest.model_validate(_payload(seats=0)).seats == 0


def test_table_id_must_be_non_negative():
    assert _error_message(CreateReservationRequest, _payload(tableId=-3)).startswith("tableId:")
    assert CreateReservationRequest.model_validate(_payload(tableId=0)).table_id == 0


def test_notes_limited_to_255_characters():
    assert _error_message(CreateReservationRequest, _payload(notes="n" * 256)).startswith("notes:")


def test_status_is_normalized_and_restricted():
    data = CreateReservationRequest.model_validate(_payload(status="  Reserved "))
    assert data.status is ReservationStatus.RESERVED
    assert _error_message(CreateReservationRequest, _payload(status="active")).startswith("status:")


def test_request_path_ignores_status_and_table():
    data = RequestReservationRequest.model_validate(_payload(status="reserved", tableId=4))
    assert not hasattr(data, "status")
    assert not hasattr(data, "table_id")


def test_blacklist_entry_needs_a_contact():
    message = _error_message(CreateBlacklistRequest, {})
    assert "email or phoneNumber is required" in message
    entry = CreateBlacklistRequest.model_validate({"phoneNumber": " 15551234567 "})
    assert entry.phone_number == "15551234567"
    assert entry.date_blacklisted is None
