"""
Typed errors raised by the operation layer.

Every error carries a machine-readable ``kind``, a human-readable
``message``, the HTTP status used by the API adapter and optional
``details``.  Operations never swallow these; the API layer converts
them into JSON responses in ``api/exception_handlers.py``.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError


class ErrorKind(str, Enum):
    """Error kinds exposed to callers."""

    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"


class FocusTimerError(Exception):
    """Base class for all errors surfaced by the operations."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        status_code: int,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to the body returned by the API."""
        result: Dict[str, Any] = {
            "error": {
                "kind": self.kind.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value}, message={self.message!r})"


class UnauthorizedError(FocusTimerError):
    """Raised when no signed-in identity accompanies a call."""

    def __init__(self, message: str = "You must be signed in to perform this action.") -> None:
        super().__init__(message=message, kind=ErrorKind.UNAUTHORIZED, status_code=401)


class NotFoundError(FocusTimerError):
    """Raised when a preset or session does not exist or belongs to someone else."""

    def __init__(self, resource_type: str, resource_id: Any = None) -> None:
        details: Dict[str, Any] = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(
            message=f"{resource_type} not found.",
            kind=ErrorKind.NOT_FOUND,
            status_code=404,
            details=details,
        )


class ValidationError(FocusTimerError):
    """Raised when input fails structural or range checks."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(
            message=message,
            kind=ErrorKind.VALIDATION_ERROR,
            status_code=422,
            details={"errors": errors} if errors else None,
        )

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        errors = []
        for error in exc.errors():
            errors.append({
                "field": ".".join(str(x) for x in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            })
        return cls("Input validation failed", errors=errors)


class ConflictError(FocusTimerError):
    """Raised when a write would break the session state machine."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, kind=ErrorKind.CONFLICT, status_code=409)


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_input(model: Type[ModelT], payload: Mapping[str, Any]) -> ModelT:
    """Validate a raw mapping against ``model``.

    Callers that do not go through the HTTP adapter use this to get the
    same ``ValidationError`` the API reports.  Both camelCase and
    snake_case keys are accepted.
    """
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc
