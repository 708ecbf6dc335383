
import enum
from sqlalchemy import func
from .extensions import db
from .utils.time import utc_now


class ReservationStatus(str, enum.Enum):
    REQUIRES_APPROVAL = "requires-approval"
    RESERVED = "reserved"
    DELETED = "deleted"


class Reservation(db.Model):
    __tablename__ = "reservations"
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(120))
    last_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(320), index=True)
    phone_number = db.Column(db.String(13), index=True)
    date = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    table_id = db.Column(db.Integer)
    seats = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.String(255))
    status = db.Column(
        db.String(32),
        nullable=False,
        default=ReservationStatus.REQUIRES_APPROVAL.value,
        index=True,
    )

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    @property
    def is_deleted(self) -> bool:
        return self.status == ReservationStatus.DELETED.value


class BlacklistEntry(db.Model):
    __tablename__ = "blacklist"
    id = db.Column(db.Integer, primary_key=True)
    # NULLs never collide, so either identifier may be absent.
    email = db.Column(db.String(320), unique=True, index=True)
    phone_number = db.Column(db.String(13), unique=True, index=True)
    date_blacklisted = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
