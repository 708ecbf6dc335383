from flask import Blueprint, request, jsonify
from ..filters import BlacklistQuery
from ..http import jerror, json_payload
from ..models import BlacklistEntry
from ..services import blacklist as service
from ..services.patching import require_id
from ..utils.time import api_iso_z

bp = Blueprint("blacklist", __name__)


def _serialize(entry: BlacklistEntry) -> dict:
    return {
        "id": entry.id,
        "email": entry.email,
        "phoneNumber": entry.phone_number,
        "dateBlacklisted": api_iso_z(entry.date_blacklisted),
    }


def _listing(rows):
    return jsonify(blacklist=[_serialize(e) for e in rows], count=len(rows))


@bp.get("/fetch/all")
def fetch_all():
    return _listing(service.list_entries())


@bp.get("/fetch")
def fetch_filtered():
    """Exact match on any of ?email=&phoneNumber=&dateBlacklisted=."""
    return _listing(service.list_entries(BlacklistQuery.from_args(request.args)))


@bp.post("/create")
def create_entry():
    payload = json_payload()
    if payload is None:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    entry = service.create_entry(payload)
    return jsonify(message="Contact blacklisted.", blacklistId=entry.id), 201


@bp.put("/update/<field>")
def update_field(field: str):
    payload = json_payload()
    if payload is None:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    entry_id = require_id(payload.get("id"))
    entry = service.update_entry(entry_id, {field: payload.get(field)})
    return jsonify(message=f"Blacklist {field} updated.", entry=_serialize(entry))


@bp.delete("/delete")
def delete_entry():
    payload = json_payload() or {}
    entry_id = require_id(payload.get("id", request.args.get("id")))
    service.delete_entry(entry_id)
    return jsonify(message="Blacklist entry deleted.", blacklistId=entry_id)
