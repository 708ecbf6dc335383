import enum
import re
from typing import Any, Mapping

from pydantic import ValidationError

from ..errors import MissingFieldError, NotFoundError, RequestValidationError
from ..schemas import MAX_INT, FieldSpec

_ID_RE = re.compile(r"^\d+$")


def require_id(raw: Any, label: str = "id") -> int:
    """Coerces a client-supplied record id; values that cannot be an id never resolve."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise MissingFieldError(f"Missing '{label}'.")
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str) and _ID_RE.match(raw.strip()):
        value = int(raw.strip())
    else:
        raise NotFoundError(f"No record with {label} {raw!r}.")
    if not 0 <= value <= MAX_INT:
        raise NotFoundError(f"No record with {label} {raw!r}.")
    return value


def apply_changes(record, changes: Mapping[str, Any], fields: Mapping[str, FieldSpec]) -> list[str]:
    """Validates every change against its field adapter, then writes them all.

    Nothing is written if any change is rejected. Returns the payload names
    that were applied.
    """
    if not changes:
        raise MissingFieldError("No fields to update.")

    unknown = sorted(set(changes) - set(fields))
    if unknown:
        raise RequestValidationError(
            f"{', '.join(unknown)}: not an updatable field.",
            details={"allowed": sorted(fields)},
        )

    validated = {}
    for name, raw in changes.items():
        if raw is None:
            raise MissingFieldError(f"Missing value for '{name}'.")
        spec = fields[name]
        try:
            value = spec.adapter.validate_python(raw)
        except ValidationError as e:
            raise RequestValidationError.from_pydantic(e, field=name) from e
        if isinstance(value, enum.Enum):
            value = value.value
        validated[spec.attr] = value

    for attr, value in validated.items():
        setattr(record, attr, value)
    return list(changes)
