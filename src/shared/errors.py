"""Error taxonomy shared by the inventory and procurement contexts.

Every domain failure the HTTP layer can render as a 4xx response derives from
``StockroomError``. Unexpected persistence errors are never wrapped; they
propagate unchanged.
"""

from typing import Any


class StockroomError(Exception):
    """Base class for structured, request-terminal domain errors."""

    status_code = 400
    code = "error"
    default_message = "The request could not be completed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Render the error as a JSON-friendly payload."""
        payload = {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class NotFound(StockroomError):
    status_code = 404
    code = "not_found"
    default_message = "Entity not found"


class DuplicateKey(StockroomError):
    status_code = 409
    code = "duplicate_key"
    default_message = "An entity with the same key already exists"


class InvalidArgument(StockroomError):
    code = "invalid_argument"
    default_message = "Invalid argument"


class InsufficientStock(StockroomError):
    code = "insufficient_stock"
    default_message = "Insufficient stock"


class InsufficientAvailable(StockroomError):
    code = "insufficient_available"
    default_message = "Insufficient available stock"


class InsufficientReserved(StockroomError):
    code = "insufficient_reserved"
    default_message = "Insufficient reserved stock"


class InvalidTransition(StockroomError):
    status_code = 409
    code = "invalid_transition"
    default_message = "Illegal status transition"


class ConcurrencyConflict(StockroomError):
    status_code = 409
    code = "concurrency_conflict"
    default_message = "The entity is being modified by another request"
