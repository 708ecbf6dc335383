"""
Translate listing query parameters into SQLAlchemy filter clauses.

Parsing is separated from clause building so malformed parameters are
rejected before any query runs.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from .errors import RequestValidationError
from .models import BlacklistEntry, Reservation, ReservationStatus
from .utils.time import parse_epoch_ms, parse_iso, db_utc_naive

DEFAULT_LIST_STATUS = ReservationStatus.RESERVED.value


def _epoch_param(args: Mapping[str, str], name: str) -> datetime:
    try:
        return parse_epoch_ms(args[name])
    except ValueError as e:
        raise RequestValidationError(
            f"{name}: must be an integer epoch value in milliseconds.", details=str(e)
        ) from e


@dataclass(frozen=True)
class ReservationQuery:
    status: str = DEFAULT_LIST_STATUS
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "ReservationQuery":
        status = (args.get("status") or "").strip().lower() or DEFAULT_LIST_STATUS

        start = end = None
        if args.get("startDate") is not None:
            start = _epoch_param(args, "startDate")
            # endDate only narrows a range that already has a start.
            if args.get("endDate") is not None:
                end = _epoch_param(args, "endDate")
        return cls(status=status, start=start, end=end)

    def clauses(self) -> list:
        out = [Reservation.status == self.status]
        if self.start is not None:
            out.append(Reservation.date >= self.start)
        if self.end is not None:
            out.append(Reservation.date <= self.end)
        return out


@dataclass(frozen=True)
class BlacklistQuery:
    email: Optional[str] = None
    phone_number: Optional[str] = None
    date_blacklisted: Optional[datetime] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "BlacklistQuery":
        date_blacklisted = None
        raw = args.get("dateBlacklisted")
        if raw:
            try:
                date_blacklisted = parse_epoch_ms(raw)
            except ValueError:
                try:
                    date_blacklisted = db_utc_naive(parse_iso(raw))
                except ValueError as e:
                    raise RequestValidationError(
                        "dateBlacklisted: expected epoch milliseconds or ISO 8601.", details=str(e)
                    ) from e
        return cls(
            email=args.get("email") or None,
            phone_number=args.get("phoneNumber") or None,
            date_blacklisted=date_blacklisted,
        )

    def clauses(self) -> list:
        out = []
        if self.email is not None:
            out.append(BlacklistEntry.email == self.email)
        if self.phone_number is not None:
            out.append(BlacklistEntry.phone_number == self.phone_number)
        if self.date_blacklisted is not None:
            out.append(BlacklistEntry.date_blacklisted == self.date_blacklisted)
        return out
