"""
Barred contacts: CRUD plus the cross-check run before a reservation is created.

When a payload carries both an email and a phone number, whether a hit on
just one of them blocks the reservation depends on ``MatchPolicy``:

* ``any``: each supplied identifier is looked up; any hit blocks.
* ``last-supplied``: identifiers are looked up in source order (email, then
  phone) and the last lookup decides, so a clear phone number lets a
  blacklisted email through.
"""
import enum
import logging
from typing import Any, Mapping, Optional

from flask import current_app
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ..errors import DuplicateError, NotFoundError, RequestValidationError
from ..extensions import db
from ..filters import BlacklistQuery
from ..models import BlacklistEntry
from ..schemas import BLACKLIST_FIELDS, CreateBlacklistRequest
from ..utils.time import utc_now
from .patching import apply_changes

logger = logging.getLogger(__name__)


class MatchPolicy(str, enum.Enum):
    ANY = "any"
    LAST_SUPPLIED = "last-supplied"


def configured_policy() -> MatchPolicy:
    return MatchPolicy(current_app.config["BLACKLIST_MATCH_POLICY"])


def find_by_email(email: str) -> Optional[BlacklistEntry]:
    return BlacklistEntry.query.filter_by(email=email).first()


def find_by_phone_number(phone_number: str) -> Optional[BlacklistEntry]:
    return BlacklistEntry.query.filter_by(phone_number=phone_number).first()


def is_blacklisted(
    email: Optional[str],
    phone_number: Optional[str],
    policy: Optional[MatchPolicy] = None,
) -> bool:
    policy = policy or configured_policy()

    email_hit = bool(email) and find_by_email(email) is not None
    phone_hit = bool(phone_number) and find_by_phone_number(phone_number) is not None

    if policy is MatchPolicy.LAST_SUPPLIED:
        return phone_hit if phone_number else email_hit
    return email_hit or phone_hit


def list_entries(query: Optional[BlacklistQuery] = None) -> list[BlacklistEntry]:
    stmt = select(BlacklistEntry).order_by(BlacklistEntry.id.asc())
    if query is not None:
        stmt = stmt.where(*query.clauses())
    return list(db.session.execute(stmt).scalars())


def get_entry(entry_id: int) -> BlacklistEntry:
    entry = db.session.get(BlacklistEntry, entry_id)
    if entry is None:
        raise NotFoundError(f"Blacklist entry {entry_id} not found.")
    return entry


def _commit_unique():
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise DuplicateError("This contact is already blacklisted.", details=str(e.orig)) from e


def create_entry(payload: Mapping[str, Any]) -> BlacklistEntry:
    try:
        data = CreateBlacklistRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError.from_pydantic(e) from e

    if data.email and find_by_email(data.email):
        raise DuplicateError(f"Email {data.email} is already blacklisted.")
    if data.phone_number and find_by_phone_number(data.phone_number):
        raise DuplicateError(f"Phone number {data.phone_number} is already blacklisted.")

    entry = BlacklistEntry(
        email=data.email,
        phone_number=data.phone_number,
        date_blacklisted=data.date_blacklisted or utc_now(),
    )
    db.session.add(entry)
    _commit_unique()
    logger.info("Blacklisted contact as entry %s", entry.id)
    return entry


def update_entry(entry_id: int, changes: Mapping[str, Any]) -> BlacklistEntry:
    entry = get_entry(entry_id)
    apply_changes(entry, changes, BLACKLIST_FIELDS)
    _commit_unique()
    return entry


def delete_entry(entry_id: int) -> None:
    entry = get_entry(entry_id)
    db.session.delete(entry)
    db.session.commit()
    logger.info("Removed blacklist entry %s", entry_id)
