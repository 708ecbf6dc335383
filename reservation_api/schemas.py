import re
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .models import ReservationStatus
from .utils.time import db_utc_naive


EMAIL_PATTERN = r"^[A-Za-z0-9._-]+@[A-Za-z0-9]+\.[A-Za-z0-9]+$"
PHONE_PATTERN = r"^[0-9]{11,13}$"
# Largest value an INTEGER column holds on every supported backend.
MAX_INT = 2**31 - 1


def _require_letter(v: str) -> str:
    if not re.search(r"[a-z]", v, re.IGNORECASE):
        raise ValueError("must contain at least one letter")
    return v

def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v

def _normalize_status(v: Any) -> Any:
    return v.strip().lower() if isinstance(v, str) else v


Name = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_lower=True, min_length=3, max_length=120),
    AfterValidator(_require_letter),
]
Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3, max_length=320, pattern=EMAIL_PATTERN),
]
PhoneNumber = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PHONE_PATTERN)]
Seats = Annotated[int, Field(ge=0, le=MAX_INT)]
TableId = Annotated[int, Field(ge=0, le=MAX_INT)]
Notes = Annotated[str, StringConstraints(max_length=255)]
Status = Annotated[ReservationStatus, BeforeValidator(_normalize_status)]
Timestamp = Annotated[datetime, AfterValidator(db_utc_naive)]

OptionalName = Annotated[Optional[Name], BeforeValidator(_blank_to_none)]
OptionalEmail = Annotated[Optional[Email], BeforeValidator(_blank_to_none)]
OptionalPhoneNumber = Annotated[Optional[PhoneNumber], BeforeValidator(_blank_to_none)]


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _ContactPayload(_Payload):
    email: OptionalEmail = None
    phone_number: OptionalPhoneNumber = None

    @model_validator(mode="after")
    def require_contact(self):
        if not self.email and not self.phone_number:
            raise ValueError("email or phoneNumber is required")
        return self


class RequestReservationRequest(_ContactPayload):
    """Public booking request. Status is never taken from the payload."""

    first_name: OptionalName = None
    last_name: Name
    date: Timestamp
    seats: Seats
    notes: Optional[Notes] = None


class CreateReservationRequest(RequestReservationRequest):
    table_id: Optional[TableId] = None
    status: Status = ReservationStatus.REQUIRES_APPROVAL


class CreateBlacklistRequest(_ContactPayload):
    date_blacklisted: Optional[Timestamp] = None


@dataclass(frozen=True)
class FieldSpec:
    """Model attribute a payload field writes to, and the adapter validating it."""

    attr: str
    adapter: TypeAdapter


RESERVATION_FIELDS = {
    "firstName": FieldSpec("first_name", TypeAdapter(Name)),
    "lastName": FieldSpec("last_name", TypeAdapter(Name)),
    "email": FieldSpec("email", TypeAdapter(Email)),
    "phoneNumber": FieldSpec("phone_number", TypeAdapter(PhoneNumber)),
    "date": FieldSpec("date", TypeAdapter(Timestamp)),
    "tableId": FieldSpec("table_id", TypeAdapter(TableId)),
    "seats": FieldSpec("seats", TypeAdapter(Seats)),
    "notes": FieldSpec("notes", TypeAdapter(Notes)),
    "status": FieldSpec("status", TypeAdapter(Status)),
}

BLACKLIST_FIELDS = {
    "email": FieldSpec("email", TypeAdapter(Email)),
    "phoneNumber": FieldSpec("phone_number", TypeAdapter(PhoneNumber)),
    "dateBlacklisted": FieldSpec("date_blacklisted", TypeAdapter(Timestamp)),
}
