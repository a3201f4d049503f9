"""Classified error record models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from .category import ErrorCategory, ErrorSeverity


class ErrorRecord(BaseModel):
    """Classified error, ready to hand to a reporter sink."""

    model_config = ConfigDict(frozen=True)

    operation: str
    error: Any
    stack_trace: Any = None
    category: ErrorCategory
    severity: ErrorSeverity
    fatal: bool
    reason: str
    context: Dict[str, Any] = {}
    endpoint: Optional[str] = None
    fallback: bool = False

    def information(self) -> List[str]:
        """Render the record as the ``information`` lines sent to the sink."""
        lines = [f"Operation: {self.operation}"]
        if self.endpoint is not None:
            lines.append(f"Endpoint: {self.endpoint}")
        lines.append(f"Severity: {self.severity.value.upper()}")
        lines.append(f"Category: {self.category.value}")
        lines.append(f"Fatal: {self.fatal}")
        for key, value in self.context.items():
            if key in ("operation", "endpoint"):
                continue
            lines.append(f"{key}: {value}")
        return lines
