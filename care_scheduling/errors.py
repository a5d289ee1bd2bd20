"""
Domain errors raised by the scheduling services.

Every error carries a machine-readable ``kind`` and the HTTP status the API
layer renders it with. Routes never build error responses themselves.
"""


class SchedulingError(Exception):
    kind = "internal"
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "detail": self.detail}


class UnauthenticatedError(SchedulingError):
    kind = "unauthenticated"
    status_code = 401


class UnauthorizedError(SchedulingError):
    kind = "unauthorized"
    status_code = 403


class NotFoundError(SchedulingError):
    kind = "not_found"
    status_code = 404


class InvalidInputError(SchedulingError):
    kind = "invalid_input"
    status_code = 400


class StateConflictError(SchedulingError):
    """A precondition on the current state of a record does not hold."""

    kind = "state_conflict"
    status_code = 400
