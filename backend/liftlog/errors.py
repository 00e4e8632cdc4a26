"""Error taxonomy shared by the repository, service and HTTP layers.

Routers never build these responses themselves; ``liftlog.main`` maps each
class to a status code.
"""


class LiftLogError(Exception):
    """Base class for errors surfaced to API callers."""


class Unauthorized(LiftLogError):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)
        self.detail = detail


class NotFound(LiftLogError):
    # Same message for "missing" and "owned by someone else"
    def __init__(self, detail: str = "Workout not found"):
        super().__init__(detail)
        self.detail = detail


class ValidationFailed(LiftLogError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class StoreFailure(LiftLogError):
    """Persistence failed; the driver's message stays in the server log."""

    def __init__(self, detail: str = "Storage unavailable"):
        super().__init__(detail)
        self.detail = detail
