"""
Operation table for the AllSign connector.

Each handler registers itself under its (resource, operation) key with the
@operation decorator. Handlers share one signature:

    handler(params: ItemParameters, credentials: ResolvedCredentials,
            transport: Transport) -> List[ResultRecord]
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .credentials import ResolvedCredentials
from .errors import UnsupportedOperationError
from .models import ItemParameters, ResultRecord
from .transport import HttpResponse, RequestSpec, Transport

logger = logging.getLogger(__name__)

Handler = Callable[[ItemParameters, ResolvedCredentials, Transport], List[ResultRecord]]


@dataclass(frozen=True)
class OperationSpec:
    resource: str
    operation: str
    method: str
    path: str
    handler: Handler

    def to_dict(self) -> Dict[str, str]:
        return {
            "resource": self.resource,
            "operation": self.operation,
            "method": self.method,
            "path": self.path,
        }


OPERATIONS: Dict[Tuple[str, str], OperationSpec] = {}


def operation(resource: str, name: str, method: str, path: str) -> Callable[[Handler], Handler]:
    """Register a handler for (resource, name). method/path are informational."""

    def decorator(handler: Handler) -> Handler:
        key = (resource, name)
        if key in OPERATIONS:
            raise ValueError(f"Operation {resource}.{name} is already registered")
        OPERATIONS[key] = OperationSpec(resource, name, method, path, handler)
        return handler

    return decorator


def get_operation(resource: str, name: str) -> OperationSpec:
    try:
        return OPERATIONS[(resource, name)]
    except KeyError:
        raise UnsupportedOperationError(resource, name) from None


def call_api(
    credentials: ResolvedCredentials,
    transport: Transport,
    method: str,
    path: str,
    body: Optional[Any] = None,
    query: Optional[Dict[str, Any]] = None,
    binary: bool = False,
) -> HttpResponse:
    """Send one authenticated request to the AllSign API."""
    spec = RequestSpec(
        method=method,
        url=credentials.url(path),
        headers=credentials.auth_headers,
        body=body,
        query=query,
        binary=binary,
    )
    logger.info(f"AllSign request: {method} {path}")
    return transport.request(spec)


def json_record(value: Any, params: ItemParameters) -> ResultRecord:
    if not isinstance(value, dict):
        value = {} if value is None else {"data": value}
    return ResultRecord(json=value, paired_item=params.index)


def fan_out(value: Any, params: ItemParameters) -> List[ResultRecord]:
    """One record per element for list responses, otherwise a single record."""
    if isinstance(value, list):
        return [json_record(element, params) for element in value]
    return [json_record(value, params)]


def omit_empty(body: Dict[str, Any], **optional: Any) -> Dict[str, Any]:
    """Add each optional field to body only when its value is truthy."""
    for key, value in optional.items():
        if value:
            body[key] = value
    return body
