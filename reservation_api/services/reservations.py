import logging
from typing import Any, Mapping

from pydantic import ValidationError
from sqlalchemy import select

from ..errors import BlacklistedError, NotFoundError, RequestValidationError
from ..extensions import db
from ..filters import ReservationQuery
from ..models import Reservation, ReservationStatus
from ..schemas import RESERVATION_FIELDS, CreateReservationRequest, RequestReservationRequest
from .blacklist import is_blacklisted
from .patching import apply_changes

logger = logging.getLogger(__name__)


def list_all() -> list[Reservation]:
    stmt = select(Reservation).order_by(Reservation.date.asc(), Reservation.id.asc())
    return list(db.session.execute(stmt).scalars())


def list_filtered(args: Mapping[str, str]) -> list[Reservation]:
    query = ReservationQuery.from_args(args)
    stmt = (
        select(Reservation)
        .where(*query.clauses())
        .order_by(Reservation.date.asc(), Reservation.id.asc())
    )
    return list(db.session.execute(stmt).scalars())


def get_reservation(reservation_id: int) -> Reservation:
    res = db.session.get(Reservation, reservation_id)
    if res is None:
        raise NotFoundError(f"Reservation {reservation_id} not found.")
    return res


def _insert(data: RequestReservationRequest, status: str, table_id=None) -> Reservation:
    res = Reservation(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        phone_number=data.phone_number,
        date=data.date,
        table_id=table_id,
        seats=data.seats,
        notes=data.notes,
        status=status,
    )
    db.session.add(res)
    db.session.commit()
    logger.info("Created reservation %s with status %s", res.id, res.status)
    return res


def create_reservation(payload: Mapping[str, Any]) -> Reservation:
    """Operator path: status comes from the payload, contact is cross-checked."""
    try:
        data = CreateReservationRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError.from_pydantic(e) from e

    if is_blacklisted(data.email, data.phone_number):
        logger.info("Rejected reservation for blacklisted contact")
        raise BlacklistedError("This contact is not allowed to make reservations.")

    return _insert(data, status=data.status.value, table_id=data.table_id)


def request_reservation(payload: Mapping[str, Any]) -> Reservation:
    try:
        data = RequestReservationRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError.from_pydantic(e) from e

    return _insert(data, status=ReservationStatus.REQUIRES_APPROVAL.value)


def update_reservation(reservation_id: int, changes: Mapping[str, Any]) -> Reservation:
    res = get_reservation(reservation_id)
    apply_changes(res, changes, RESERVATION_FIELDS)
    db.session.commit()
    return res


def delete_reservation(reservation_id: int) -> Reservation:
    res = db.session.get(Reservation, reservation_id)
    # Soft-deleted rows stay in the table but no longer resolve for deletion.
    if res is None or res.is_deleted:
        raise NotFoundError(f"Reservation {reservation_id} not found.")
    res.status = ReservationStatus.DELETED.value
    db.session.commit()
    logger.info("Marked reservation %s as deleted", reservation_id)
    return res
