"""Classification outcome enums."""

from enum import Enum


class ErrorCategory(str, Enum):
    """Nature of a reported error. Exactly one is assigned per occurrence."""

    UNEXPECTED = "UNEXPECTED"
    LOGIC_ERROR = "LOGIC_ERROR"
    PARSING = "PARSING"
    TIMEOUT = "TIMEOUT"
    NETWORK = "NETWORK"
    SERVER_ERROR = "SERVER_ERROR"
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"
    CLIENT_ERROR = "CLIENT_ERROR"
    API_ERROR = "API_ERROR"
    USER_CANCELLED = "USER_CANCELLED"
    PLATFORM_ERROR = "PLATFORM_ERROR"
    FILE_ERROR = "FILE_ERROR"
    PERMISSION = "PERMISSION"
    SECURITY = "SECURITY"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorSeverity(str, Enum):
    """
    How urgently an error should be surfaced.

    Members are totally ordered by urgency: low < medium < high < critical.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANKS[self.value]

    def __lt__(self, other):
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANKS = {"low": 0, "medium": 1, "high": 2, "critical": 3}


class TransportErrorType(str, Enum):
    """Sub-type of a structured HTTP client error."""

    CONNECTION_TIMEOUT = "connection_timeout"
    SEND_TIMEOUT = "send_timeout"
    RECEIVE_TIMEOUT = "receive_timeout"
    CONNECTION_ERROR = "connection_error"
    BAD_RESPONSE = "bad_response"
    CANCEL = "cancel"
    UNKNOWN = "unknown"
