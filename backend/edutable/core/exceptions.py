class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class NotFoundError(AppError):
    """Raised when a write or delete targets an identifier that does not exist."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            status_code=404,
            details={"resource": resource_type, "id": resource_id},
        )

class DuplicateKeyError(AppError):
    """Raised when a create or update collides with a unique field."""
    def __init__(self, resource_type: str, field: str, value):
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            status_code=409,
            details={"resource": resource_type, "field": field, "value": value},
        )

class InvalidInputError(AppError):
    """Raised when fields are malformed or missing before they reach the store."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=422, details=details)

class SlotConflictError(AppError):
    """Raised when a timetable entry overlaps other entries on room, faculty or group."""
    def __init__(self, message: str, conflicts: list[dict]):
        super().__init__(message, status_code=409, details={"conflicts": conflicts})
        self.conflicts = conflicts

class CapacityExceededError(AppError):
    """Raised when an enforced faculty-hours or room-capacity check fails."""
    def __init__(self, message: str, issues: list[dict]):
        super().__init__(message, status_code=422, details={"issues": issues})
        self.issues = issues

class GenerationError(AppError):
    """Raised when the timetable generator fails."""
    def __init__(self, message: str):
        super().__init__(message, status_code=502)

class GenerationTimeoutError(GenerationError):
    """Raised when the timetable generator does not answer in time."""
    def __init__(self, timeout_seconds: float):
        super().__init__(f"Timetable generation timed out after {timeout_seconds:g} seconds")
        self.status_code = 504
        self.details = {"timeout_seconds": timeout_seconds}
