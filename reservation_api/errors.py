"""
Exceptions raised by the service layer.

Each carries the HTTP status and error code the request boundary turns it
into; see ``app.register_error_handlers``.
"""


class ServiceError(Exception):
    status = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class RequestValidationError(ServiceError):
    status = 422
    code = "VALIDATION_ERROR"

    @classmethod
    def from_pydantic(cls, exc, field: str | None = None) -> "RequestValidationError":
        """Builds a message naming every offending field.

        ``field`` prefixes each error location, for values validated on their
        own rather than as part of a payload model.
        """
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        parts = []
        for err in errors:
            if field:
                err["loc"] = (field, *err["loc"])
            loc = ".".join(str(p) for p in err["loc"]) or "payload"
            parts.append(f"{loc}: {err['msg']}")
        return cls("; ".join(parts) or "Invalid input.", details=errors)


class MissingFieldError(ServiceError):
    status = 400
    code = "MISSING_FIELD"


class BlacklistedError(ServiceError):
    status = 403
    code = "BLACKLISTED"


class NotFoundError(ServiceError):
    status = 404
    code = "NOT_FOUND"


class DuplicateError(ServiceError):
    status = 409
    code = "DUPLICATE"
