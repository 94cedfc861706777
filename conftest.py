"""
Shared fixtures for the AllSign connector tests.
"""
from typing import Any, List

import pytest

from allsign_mcp.credentials import resolve_credentials
from allsign_mcp.dispatcher import execute
from allsign_mcp.models import NodeParameters
from allsign_mcp.transport import HttpResponse, RequestSpec

API_KEY = "allsign_live_sk_test123"


class RecordingTransport:
    """Fake transport: records every RequestSpec and replays queued outcomes."""

    def __init__(self):
        self.calls: List[RequestSpec] = []
        self._queue: List[Any] = []

    def respond(self, body: Any = None, status: int = 200, headers=None):
        self._queue.append(HttpResponse(status=status, headers=headers or {}, body=body))
        return self

    def fail(self, error: Exception):
        self._queue.append(error)
        return self

    def request(self, spec: RequestSpec) -> HttpResponse:
        self.calls.append(spec)
        if not self._queue:
            return HttpResponse(status=200, body={})
        outcome = self._queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def last(self) -> RequestSpec:
        return self.calls[-1]


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def credentials():
    return resolve_credentials(API_KEY, "https://api.allsign.io")


@pytest.fixture
def run(transport, credentials):
    """Execute one operation with the given parameters over a single empty item."""

    def _run(resource, operation, items=None, continue_on_fail=False, **parameters):
        return execute(
            items,
            resource,
            operation,
            NodeParameters(parameters),
            credentials,
            transport,
            continue_on_fail=continue_on_fail,
        )

    return _run
