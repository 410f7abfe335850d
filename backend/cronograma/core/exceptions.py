class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class MalformedInputError(AppError):
    """Raised when a request is syntactically valid but not schedulable (bad ranges, weeks before the course)."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=422, details=details)

class SchedulingConflictError(AppError):
    """Raised when a hard constraint blocks a write.

    ``conflict`` is the ``ConflictDetail`` describing the clash; it is echoed
    in ``details`` so the API can render which resource collided.
    """
    def __init__(self, conflict):
        self.conflict = conflict
        super().__init__(conflict.message, status_code=409, details=conflict.model_dump())

class PersistenceError(AppError):
    """Raised when the store rejects a write that already passed validation."""
    def __init__(self, operation: str, message: str = "The schedule store rejected the write"):
        self.operation = operation
        super().__init__(message, status_code=503, details={"operation": operation})

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)

class AnalyzerUnavailableError(AppError):
    """Raised when the conflict analysis service cannot be reached or answers garbage."""
    def __init__(self, message: str):
        super().__init__(message, status_code=502)
