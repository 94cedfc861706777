"""
AllSign e-signature connector.

Exposes the AllSign REST API (documents, signers, signature fields,
folders, contacts) as operations run over a list of input items.
"""
from .credentials import (
    Environment,
    EnvironmentEndpoint,
    LiteralEndpoint,
    ResolvedCredentials,
    resolve_credentials,
    verify_credentials,
)
from .dispatcher import execute, list_operations, load_template_options
from .errors import (
    AllSignApiError,
    AllSignError,
    ParameterError,
    TransportError,
    UnsupportedOperationError,
)
from .models import BinaryData, Item, NodeParameters, ResultRecord
from .transport import HttpResponse, RequestSpec, RequestsTransport

__version__ = "1.0.0"

__all__ = [
    "AllSignApiError",
    "AllSignError",
    "BinaryData",
    "Environment",
    "EnvironmentEndpoint",
    "HttpResponse",
    "Item",
    "LiteralEndpoint",
    "NodeParameters",
    "ParameterError",
    "RequestSpec",
    "RequestsTransport",
    "ResolvedCredentials",
    "ResultRecord",
    "TransportError",
    "UnsupportedOperationError",
    "execute",
    "list_operations",
    "load_template_options",
    "resolve_credentials",
    "verify_credentials",
]
