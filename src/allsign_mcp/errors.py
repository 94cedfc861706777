"""
Error types and error-message normalisation for AllSign operations.
"""
from typing import Any, Optional

API_ERROR_PREFIX = "AllSign API Error"


class AllSignError(Exception):
    """Base class for every error raised by the connector."""


class ParameterError(AllSignError):
    """A required parameter is missing or does not have the expected shape."""


class UnsupportedOperationError(AllSignError):
    """The (resource, operation) pair has no handler."""

    def __init__(self, resource: str, operation: str):
        super().__init__(f"The operation '{operation}' is not supported for resource '{resource}'")
        self.resource = resource
        self.operation = operation


class TransportError(AllSignError):
    """
    An HTTP request failed.

    Attributes:
        status: HTTP status code, or None when no response was received
        data: Decoded error body returned by the remote service, if any
    """

    def __init__(self, message: str, status: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.status = status
        self.data = data


class AllSignApiError(AllSignError):
    """
    User-facing error for a failed item.

    Attributes:
        message: "AllSign API Error: <message>"
        status: HTTP status code of the failing request, if any
        item_index: Index of the input item being processed
        description: "HTTP Status Code: <status | N/A>"
    """

    def __init__(self, message: str, status: Optional[int] = None, item_index: Optional[int] = None):
        self.message = f"{API_ERROR_PREFIX}: {message}"
        super().__init__(self.message)
        self.status = status
        self.item_index = item_index
        self.description = f"HTTP Status Code: {status if status else 'N/A'}"

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "description": self.description,
            "item_index": self.item_index,
        }


def extract_error_message(error: BaseException) -> str:
    """
    Best available message for an error.

    Checks the remote error body's "message", then its "error", then the
    exception's own message, falling back to "Unknown error".
    """
    data = getattr(error, "data", None)
    if not isinstance(data, dict):
        data = {}
    return data.get("message") or data.get("error") or str(error) or "Unknown error"


def to_api_error(error: BaseException, item_index: Optional[int] = None) -> AllSignApiError:
    """Wrap any error as an AllSignApiError carrying the HTTP status, if known."""
    if isinstance(error, AllSignApiError):
        return error
    return AllSignApiError(
        extract_error_message(error),
        status=getattr(error, "status", None),
        item_index=item_index,
    )
