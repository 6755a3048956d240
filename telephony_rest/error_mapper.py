"""
Error mapper module for classifying failed responses into the client error taxonomy
"""

import json
from dataclasses import dataclass
from typing import Any, Collection, IO, Optional, Union

from .http_client import Response


GENERIC_SERVER_ERROR = "Server Error, no content"


class TelephonyError(Exception):
    """Base class for all errors raised by the client"""
    pass


class ApiConnectionError(TelephonyError):
    """Raised when the transport could not get any response from the server"""
    pass


class ApiError(TelephonyError):
    """Raised when the server answered with a status outside the expected success range"""

    def __init__(self, message: str, code: Optional[int] = None,
                 more_info: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.more_info = more_info
        self.status = status

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (self.message, self.code, self.more_info, self.status) == \
               (other.message, other.code, other.more_info, other.status)

    def __hash__(self) -> int:
        return hash((self.message, self.code, self.more_info, self.status))

    def __repr__(self) -> str:
        return (f"ApiError(message={self.message!r}, code={self.code!r}, "
                f"more_info={self.more_info!r}, status={self.status!r})")


class RecordDecodeError(TelephonyError):
    """Raised when a successful response body does not have the expected shape"""
    pass


class ResourceSetBrokenError(TelephonyError):
    """Raised when a ResourceSet is advanced after a failed page fetch"""
    pass


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class RestException:
    """Structured error document returned by the server"""
    message: str
    code: Optional[int] = None
    more_info: Optional[str] = None
    status: Optional[int] = None

    @classmethod
    def from_json(cls, body: Union[bytes, str, IO[bytes]]) -> Optional["RestException"]:
        """
        Parse an error body

        Args:
            body: Raw bytes, text or a binary stream holding the response body

        Returns:
            RestException, or None if the body is not a structured error document
        """
        if hasattr(body, 'read'):
            body = body.read()

        if not body:
            return None

        try:
            data = json.loads(body)
        except (ValueError, UnicodeDecodeError):
            return None

        if not isinstance(data, dict) or not isinstance(data.get('message'), str):
            return None

        more_info = data.get('more_info')
        return cls(
            message=data['message'],
            code=_optional_int(data.get('code')),
            more_info=more_info if isinstance(more_info, str) else None,
            status=_optional_int(data.get('status'))
        )


def _is_success(status_code: int, expected_status: Union[int, Collection[int]]) -> bool:
    if isinstance(expected_status, int):
        return status_code == expected_status
    return status_code in expected_status


def classify(response: Optional[Response], expected_status: Union[int, Collection[int]],
             failure_message: str) -> Optional[TelephonyError]:
    """
    Classify a transport result without raising

    Args:
        response: Response from the transport, or None if there was no response
        expected_status: Success status code(s) for the operation
        failure_message: Fixed message used when there was no response

    Returns:
        The error the result maps to, or None when the response is a success
    """
    if response is None:
        return ApiConnectionError(failure_message)

    if _is_success(response.status_code, expected_status):
        return None

    rest_exception = RestException.from_json(response.stream)
    if rest_exception is None:
        return ApiError(GENERIC_SERVER_ERROR)

    return ApiError(
        rest_exception.message,
        code=rest_exception.code,
        more_info=rest_exception.more_info,
        status=rest_exception.status
    )


def validate_response(response: Optional[Response], expected_status: Union[int, Collection[int]],
                      failure_message: str) -> Response:
    """
    Raise the mapped error for a failed call, otherwise hand back the Response

    Raises:
        ApiConnectionError: If there was no response
        ApiError: If the status is outside the expected success range
    """
    error = classify(response, expected_status, failure_message)
    if error is not None:
        raise error
    return response


def connection_failure_message(resource_name: str, verb: str) -> str:
    return f"{resource_name} {verb} failed: Unable to connect to server"
