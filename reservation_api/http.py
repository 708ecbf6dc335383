from flask import jsonify, request

def jerror(status: int, code: str, message: str, details=None):
    payload = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def json_payload() -> dict | None:
    """Returns the JSON object body, or None when missing or not an object."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) and payload else None
