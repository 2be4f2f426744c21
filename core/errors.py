"""
Flow Error Hierarchy

Every exception raised by the assessment flow inherits from FlowError so the
API layer can map it to a stable response shape.
"""


class FlowError(Exception):
    """Base exception for all flow errors."""

    def __init__(self, message: str, code: str = "FLOW_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to an API error payload."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
        }


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(FlowError):
    """Raised when a value or an external payload has the wrong shape."""

    def __init__(self, field: str, message: str):
        super().__init__(
            f"Validation error for '{field}': {message}",
            "VALIDATION_ERROR",
        )
        self.field = field


# =============================================================================
# Generation Errors
# =============================================================================

class TransientNetworkError(FlowError):
    """A single generation attempt failed. Retried by the orchestrator."""

    def __init__(self, operation: str, attempt: int, detail: str):
        super().__init__(
            f"{operation} attempt {attempt} failed: {detail}",
            "TRANSIENT_NETWORK_ERROR",
        )
        self.operation = operation
        self.attempt = attempt
        self.detail = detail


class GenerationFailure(FlowError):
    """Raised when a generation call exhausted its retry budget."""

    def __init__(self, operation: str, attempts: int, detail: str = ""):
        message = f"Failed to {operation} after {attempts} attempts"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, "GENERATION_FAILED")
        self.operation = operation
        self.attempts = attempts
        self.detail = detail


# =============================================================================
# Session Errors
# =============================================================================

class SessionNotFoundError(FlowError):
    """Raised when a session id doesn't exist."""

    def __init__(self, session_id: str):
        super().__init__(
            f"Session {session_id} not found",
            "SESSION_NOT_FOUND",
        )
        self.session_id = session_id
