"""Error occurrence data models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from .category import ErrorSeverity


class ErrorOccurrence(BaseModel):
    """An error caught by the caller, together with what it was doing."""

    model_config = ConfigDict(frozen=True)

    operation: str
    error: Any
    stack_trace: Any = None
    endpoint: Optional[str] = None
    data_type: Optional[str] = None
    raw_payload: Any = None
    additional_context: Dict[str, Any] = {}
    severity: Optional[ErrorSeverity] = None


class FrameworkErrorDetails(BaseModel):
    """Structured error context reported by a framework-level error hook."""

    model_config = ConfigDict(frozen=True)

    exception: Any
    stack: Any = None
    library: Optional[str] = None
    context: Optional[str] = None
    silent: bool = False

    def __str__(self) -> str:
        return f"{self.library or 'framework'}: {self.exception}"
