"""
HTTP transport for AllSign requests.

Handlers build a RequestSpec and hand it to a Transport; the default
implementation is backed by a requests Session.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


@dataclass
class RequestSpec:
    """One outbound request. Built fresh per operation call."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None
    query: Optional[Dict[str, Any]] = None
    binary: bool = False


@dataclass
class HttpResponse:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None

    def __post_init__(self):
        self.headers = {str(k).lower(): v for k, v in (self.headers or {}).items()}

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)


class Transport(Protocol):
    def request(self, spec: RequestSpec) -> HttpResponse:
        ...


def _decode_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class RequestsTransport:
    """Transport backed by requests. Raises TransportError on any failure."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(self, spec: RequestSpec) -> HttpResponse:
        kwargs: Dict[str, Any] = {
            "headers": dict(spec.headers),
            "timeout": self.timeout,
        }
        if spec.query:
            kwargs["params"] = spec.query
        if spec.body is not None:
            kwargs["json"] = spec.body
        if not spec.binary:
            kwargs["headers"].setdefault("Accept", "application/json")

        logger.debug(f"{spec.method} {spec.url}")
        try:
            response = self.session.request(spec.method, spec.url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request to {spec.url} failed: {e}")
            raise TransportError(str(e)) from e

        if not response.ok:
            raise TransportError(
                f"Request failed with status code {response.status_code}",
                status=response.status_code,
                data=_decode_body(response),
            )

        body = response.content if spec.binary else _decode_body(response)
        return HttpResponse(status=response.status_code, headers=dict(response.headers), body=body)

    def close(self):
        self.session.close()
