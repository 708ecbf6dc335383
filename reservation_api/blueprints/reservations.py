from flask import Blueprint, request, jsonify
from ..http import jerror, json_payload
from ..models import Reservation
from ..services import reservations as service
from ..services.patching import require_id
from ..utils.time import api_iso_z

bp = Blueprint("reservations", __name__)


def _serialize(res: Reservation) -> dict:
    return {
        "id": res.id,
        "firstName": res.first_name,
        "lastName": res.last_name,
        "email": res.email,
        "phoneNumber": res.phone_number,
        "date": api_iso_z(res.date),
        "tableId": res.table_id,
        "seats": res.seats,
        "notes": res.notes,
        "status": res.status,
    }


def _listing(rows):
    return jsonify(reservations=[_serialize(r) for r in rows], count=len(rows))


@bp.get("/fetch/all")
def fetch_all():
    return _listing(service.list_all())


@bp.get("/fetch")
def fetch_filtered():
    """
    Query: ?status=reserved&startDate=<epoch ms>&endDate=<epoch ms>
    endDate is ignored unless startDate is also given.
    """
    return _listing(service.list_filtered(request.args))


@bp.get("/<int(max=2147483647):reservation_id>")
def fetch_one(reservation_id: int):
    return jsonify(reservation=_serialize(service.get_reservation(reservation_id)))


@bp.post("/create")
def create_reservation():
    payload = json_payload()
    if payload is None:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    res = service.create_reservation(payload)
    return jsonify(message="Reservation created.", reservationId=res.id, status=res.status), 201


@bp.post("/request")
def request_reservation():
    payload = json_payload()
    if payload is None:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    res = service.request_reservation(payload)
    return jsonify(message="Reservation requested.", reservationId=res.id, status=res.status), 201


@bp.put("/update/<field>")
def update_field(field: str):
    """Body: {"id": <reservation id>, "<field>": <new value>}"""
    payload = json_payload()
    if payload is None:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    reservation_id = require_id(payload.get("id"))
    res = service.update_reservation(reservation_id, {field: payload.get(field)})
    return jsonify(message=f"Reservation {field} updated.", reservation=_serialize(res))


@bp.patch("/<int(max=2147483647):reservation_id>")
def patch_reservation(reservation_id: int):
    payload = json_payload()
    if payload is None:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    res = service.update_reservation(reservation_id, payload)
    return jsonify(message="Reservation updated.", reservation=_serialize(res))


@bp.delete("/delete")
def delete_reservation():
    payload = json_payload() or {}
    reservation_id = require_id(payload.get("id", request.args.get("id")))
    service.delete_reservation(reservation_id)
    return jsonify(message="Reservation deleted.", reservationId=reservation_id)
