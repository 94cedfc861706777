#!/usr/bin/env python3
"""
Tests for the requests-backed transport and source-file downloads
"""
import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from allsign_mcp.errors import ParameterError, TransportError
from allsign_mcp.pdf_utils import fetch_source_file, filename_from_content_disposition
from allsign_mcp.transport import RequestSpec, RequestsTransport


def _response(status=200, content=b"", headers=None):
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.headers = CaseInsensitiveDict(headers or {})
    return response


@pytest.fixture
def session(monkeypatch):
    calls = []
    outcomes = []

    def fake_request(self, method, url, **kwargs):
        calls.append((method, url, kwargs))
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(requests.Session, "request", fake_request)
    return calls, outcomes


def test_json_request(session):
    calls, outcomes = session
    outcomes.append(_response(content=json.dumps({"id": "doc-1"}).encode(), headers={"Content-Type": "application/json"}))

    response = RequestsTransport(timeout=5).request(RequestSpec(
        method="POST",
        url="https://api.allsign.io/v2/documents",
        headers={"Authorization": "Bearer k"},
        body={"name": "A"},
        query={"limit": 1},
    ))

    method, url, kwargs = calls[0]
    assert (method, url) == ("POST", "https://api.allsign.io/v2/documents")
    assert kwargs["json"] == {"name": "A"}
    assert kwargs["params"] == {"limit": 1}
    assert kwargs["timeout"] == 5
    assert kwargs["headers"]["Authorization"] == "Bearer k"
    assert response.body == {"id": "doc-1"}
    assert response.header("CONTENT-TYPE") == "application/json"


def test_empty_body_decodes_to_none(session):
    calls, outcomes = session
    outcomes.append(_response(status=204))

    response = RequestsTransport().request(RequestSpec(method="DELETE", url="https://api.allsign.io/v2/folders/f1"))

    assert response.body is None
    assert "json" not in calls[0][2]


def test_binary_mode_returns_bytes(session):
    _, outcomes = session
    outcomes.append(_response(content=b"%PDF-1.7", headers={"Content-Type": "application/pdf"}))

    response = RequestsTransport().request(RequestSpec(method="GET", url="https://x/download", binary=True))

    assert response.body == b"%PDF-1.7"


def test_error_status_raises_with_body(session):
    _, outcomes = session
    outcomes.append(_response(status=404, content=b'{"message": "Document not found"}'))

    with pytest.raises(TransportError) as excinfo:
        RequestsTransport().request(RequestSpec(method="GET", url="https://api.allsign.io/v2/documents/x"))

    assert excinfo.value.status == 404
    assert excinfo.value.data == {"message": "Document not found"}
    assert str(excinfo.value) == "Request failed with status code 404"


def test_connection_error_has_no_status(session):
    _, outcomes = session
    outcomes.append(requests.ConnectionError("Connection refused"))

    with pytest.raises(TransportError) as excinfo:
        RequestsTransport().request(RequestSpec(method="GET", url="https://api.allsign.io/v2/documents"))

    assert excinfo.value.status is None
    assert excinfo.value.data is None
    assert "Connection refused" in str(excinfo.value)


@pytest.mark.parametrize(
    "header, expected",
    [
        ('attachment; filename="contract.pdf"', "contract.pdf"),
        ("attachment; filename=report.pdf", "report.pdf"),
        ("inline", None),
        (None, None),
    ],
)
def test_filename_from_content_disposition(header, expected):
    assert filename_from_content_disposition(header) == expected


def test_fetch_source_file_rejects_non_http(transport):
    with pytest.raises(ParameterError, match="Unsupported URL scheme"):
        fetch_source_file("file:///etc/passwd", transport)
    assert transport.calls == []
