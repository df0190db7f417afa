# gearshare/domain/errors.py


class ServiceError(Exception):
    """Base for every failure reported to the caller."""

    status_code = 500
    kind = "error"


class ValidationError(ServiceError, ValueError):
    status_code = 400
    kind = "validation_error"


class EmptyCartError(ValidationError):
    kind = "empty_cart"


class NotFoundError(ServiceError, LookupError):
    status_code = 404
    kind = "not_found"


class ForbiddenError(ServiceError, PermissionError):
    status_code = 403
    kind = "forbidden"


class InvalidStateError(ServiceError):
    status_code = 409
    kind = "invalid_state"


class UnauthenticatedError(ServiceError):
    status_code = 401
    kind = "unauthenticated"
