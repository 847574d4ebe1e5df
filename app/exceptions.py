# app/exceptions.py
"""
Error kinds raised by the service layer.
Each one maps to a single HTTP status in app/main.py.
"""


class FleetError(Exception):
    status_code = 500
    kind = "error"

    def __init__(self, action: str, reason: str = ""):
        self.action = action
        self.reason = reason
        message = f"Failed to {action}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class AuthorizationDenied(FleetError):
    status_code = 403
    kind = "authorization_denied"


class ValidationFailed(FleetError):
    status_code = 422
    kind = "validation_failed"


class NotFound(FleetError):
    status_code = 404
    kind = "not_found"


class Conflict(FleetError):
    status_code = 409
    kind = "conflict"


class Transient(FleetError):
    status_code = 503
    kind = "transient"
