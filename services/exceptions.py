"""
Service-layer errors.

Services raise these; the blueprint layer turns them into the JSON envelope
``{"success": false, "error": message}`` with ``status_code``.
"""


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotFound(ServiceError):
    """Ledger, weekly plan, month entry or bet missing."""
    status_code = 404


class InvalidInput(ServiceError):
    status_code = 400


class AtBoundary(ServiceError):
    """Moving the current month pointer past the start of the schedule."""
    status_code = 409


class CascadeFailure(ServiceError):
    """A multi-record update failed part way and was rolled back."""
    status_code = 500
