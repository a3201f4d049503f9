"""
Type-based error classification.

Maps the runtime class of an error to an ErrorCategory. Families are
checked in a fixed order (logic, parsing, network, platform, file) and
the first match wins. ``None`` means the type was not recognized and the
caller should fall back to pattern matching.
"""

import asyncio
import binascii
import ctypes
import http.client
import json
import socket
import subprocess
import urllib.error
from typing import Any, Optional

import httpx
import pydantic
import yaml

from crash_guard.errors import MissingIntegrationError, PlatformError
from crash_guard.models.category import ErrorCategory, TransportErrorType

from .rendering import render_error


LOGIC_ERROR_TYPES = (
    TypeError,
    AssertionError,
    ValueError,
    AttributeError,
    NameError,
    IndexError,
    KeyError,
    ZeroDivisionError,
    RecursionError,
)

PARSING_ERROR_TYPES = (
    json.JSONDecodeError,
    UnicodeError,
    binascii.Error,
    pydantic.ValidationError,
    yaml.YAMLError,
)

# Messages raised by the json encoder as plain TypeError/ValueError
SERIALIZATION_FAILURE_PHRASES = (
    "is not json serializable",
    "circular reference detected",
)

# Standard library messages for malformed input raised as plain ValueError
MALFORMED_INPUT_PHRASES = (
    "invalid literal for",
    "could not convert string to",
    "does not match format",
    "badly formed hexadecimal uuid string",
    "invalid isoformat string",
)

NETWORK_ERROR_TYPES = (
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
    socket.gaierror,
    socket.herror,
    http.client.HTTPException,
    urllib.error.URLError,
)

PLATFORM_ERROR_TYPES = (
    PlatformError,
    MissingIntegrationError,
    ImportError,
    NotImplementedError,
    ctypes.ArgumentError,
    subprocess.SubprocessError,
)

FILE_ERROR_TYPES = (OSError,)


def is_parsing_error(error: Any) -> bool:
    """Check whether an error comes from decoding, converting or serializing data."""
    if isinstance(error, PARSING_ERROR_TYPES):
        return True
    if isinstance(error, (TypeError, ValueError)):
        message = render_error(error).lower()
        if any(phrase in message for phrase in SERIALIZATION_FAILURE_PHRASES):
            return True
        if isinstance(error, ValueError):
            return any(phrase in message for phrase in MALFORMED_INPUT_PHRASES)
    return False


def is_logic_error(error: Any) -> bool:
    """Check whether an error signals a programming mistake."""
    return isinstance(error, LOGIC_ERROR_TYPES) and not is_parsing_error(error)


def transport_error_type(error: Any) -> Optional[TransportErrorType]:
    """
    Return the transport sub-type of a structured HTTP client error.

    Returns None for anything that is not an httpx error or a cancellation.
    """
    if isinstance(error, asyncio.CancelledError):
        return TransportErrorType.CANCEL
    if not isinstance(error, httpx.HTTPError):
        return None
    if isinstance(error, (httpx.ConnectTimeout, httpx.PoolTimeout)):
        return TransportErrorType.CONNECTION_TIMEOUT
    if isinstance(error, httpx.WriteTimeout):
        return TransportErrorType.SEND_TIMEOUT
    if isinstance(error, httpx.TimeoutException):
        return TransportErrorType.RECEIVE_TIMEOUT
    if isinstance(error, httpx.NetworkError):
        return TransportErrorType.CONNECTION_ERROR
    if isinstance(error, httpx.HTTPStatusError):
        return TransportErrorType.BAD_RESPONSE
    return TransportErrorType.UNKNOWN


def response_status_code(error: Any) -> Optional[int]:
    """Status code of the response attached to an httpx error, if any."""
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None)


def request_url(error: Any) -> Optional[str]:
    """URL of the request attached to an httpx error, if any."""
    if not isinstance(error, (httpx.RequestError, httpx.HTTPStatusError)):
        return None
    try:
        return str(error.request.url)
    except RuntimeError:
        # httpx raises when the error was built without a request
        return None


def _category_for_status(status_code: int) -> ErrorCategory:
    if status_code >= 500:
        return ErrorCategory.SERVER_ERROR
    if status_code == 401:
        return ErrorCategory.AUTHENTICATION
    if status_code == 403:
        return ErrorCategory.AUTHORIZATION
    if 400 <= status_code < 500:
        return ErrorCategory.CLIENT_ERROR
    return ErrorCategory.API_ERROR


def _classify_network(error: Any) -> Optional[ErrorCategory]:
    transport_type = transport_error_type(error)
    if transport_type is not None:
        if transport_type in (
            TransportErrorType.CONNECTION_TIMEOUT,
            TransportErrorType.SEND_TIMEOUT,
            TransportErrorType.RECEIVE_TIMEOUT,
        ):
            return ErrorCategory.TIMEOUT
        if transport_type == TransportErrorType.BAD_RESPONSE:
            return _category_for_status(response_status_code(error) or 0)
        if transport_type == TransportErrorType.CANCEL:
            return ErrorCategory.USER_CANCELLED
        return ErrorCategory.NETWORK

    if isinstance(error, NETWORK_ERROR_TYPES):
        return ErrorCategory.NETWORK
    return None


def is_network_error(error: Any) -> bool:
    """Check whether an error belongs to the network family."""
    return _classify_network(error) is not None


def classify_by_type(error: Any) -> Optional[ErrorCategory]:
    """
    Classify an error by its runtime type.

    Args:
        error: Any value raised or reported by the application

    Returns:
        The category of the first matching family, or None when the type
        is not recognized
    """
    if is_logic_error(error):
        return ErrorCategory.LOGIC_ERROR

    if is_parsing_error(error):
        return ErrorCategory.PARSING

    network_category = _classify_network(error)
    if network_category is not None:
        return network_category

    if isinstance(error, PLATFORM_ERROR_TYPES):
        return ErrorCategory.PLATFORM_ERROR

    if isinstance(error, FILE_ERROR_TYPES):
        return ErrorCategory.FILE_ERROR

    return None
