#!/usr/bin/env python3
"""
Tests for the combined create-and-send flow
"""
import base64

import pytest

from allsign_mcp.credentials import resolve_credentials
from allsign_mcp.dispatcher import execute
from allsign_mcp.errors import AllSignApiError
from allsign_mcp.models import BinaryData, Item, NodeParameters
from conftest import API_KEY

PARTICIPANTS = {"participantValues": [{"name": "Ana", "email": "ana@test.com"}]}


def _run_url_flow(run, transport, source_headers=None, **parameters):
    transport.respond(b"%PDF-source", headers=source_headers or {})
    transport.respond({"id": "doc-new"})
    parameters.setdefault("documentName", "Contrato")
    parameters.setdefault("fileUrl", "https://files.example.com/contrato")
    return run("document", "createAndSend", fileSource="url", **parameters)


def test_downloads_source_then_posts(run, transport):
    result = _run_url_flow(run, transport, participants=PARTICIPANTS)

    download, create = transport.calls
    assert download.method == "GET"
    assert download.url == "https://files.example.com/contrato"
    assert download.binary is True
    assert "Authorization" not in download.headers

    assert create.method == "POST"
    assert create.url == "https://api.allsign.io/v2/documents/"
    assert create.body["document"] == {
        "base64Content": base64.b64encode(b"%PDF-source").decode("utf-8"),
        "name": "Contrato.pdf",
    }
    assert create.body["participants"] == [{"name": "Ana", "email": "ana@test.com"}]
    assert len(result) == 1
    assert result[0].json_data == {"id": "doc-new"}


def test_trailing_slash_base_url_is_not_doubled(transport):
    transport.respond(b"%PDF").respond({"id": "x"})
    credentials = resolve_credentials(API_KEY, "https://api.allsign.io/")

    execute(None, "document", "createAndSend",
            NodeParameters({"documentName": "A", "fileUrl": "https://example.com/a.pdf"}),
            credentials, transport)

    assert transport.last.url == "https://api.allsign.io/v2/documents/"


def test_source_name_ending_in_pdf_is_used_verbatim(run, transport):
    _run_url_flow(run, transport, source_headers={"Content-Disposition": 'attachment; filename="Signed Lease.PDF"'})
    assert transport.last.body["document"]["name"] == "Signed Lease.PDF"


def test_url_path_name_ending_in_pdf_is_used(run, transport):
    _run_url_flow(run, transport, fileUrl="https://files.example.com/path/lease.pdf")
    assert transport.last.body["document"]["name"] == "lease.pdf"


def test_binary_source_without_pdf_suffix_gets_document_name(run, transport):
    transport.respond({"id": "doc-bin"})
    item = Item(binary={"data": BinaryData(data=b"%PDF", file_name="scan.bin")})

    run("document", "createAndSend", items=[item], fileSource="binary", documentName="Acuerdo")

    assert len(transport.calls) == 1
    assert transport.last.body["document"]["name"] == "Acuerdo.pdf"


def test_config_with_participants(run, transport):
    _run_url_flow(run, transport, participants=PARTICIPANTS)
    assert transport.last.body["config"] == {"sendInvitations": True, "sendByEmail": True, "startAtStep": 3}


def test_config_without_participants(run, transport):
    _run_url_flow(run, transport)
    assert transport.last.body["participants"] == []
    assert transport.last.body["config"] == {"sendInvitations": False, "sendByEmail": False, "startAtStep": 1}


def test_signature_validation_toggles(run, transport):
    _run_url_flow(run, transport, autografa=False, fea=True, nom151=True, biometricSignature=True,
                  confirmNameToFinish=True)
    assert transport.last.body["signatureValidation"] == {
        "autografa": False,
        "FEA": True,
        "nom151": True,
        "biometric_signature": True,
        "confirm_name_to_finish": True,
    }


@pytest.mark.parametrize(
    "toggles, expected",
    [
        ({"identityVerification": True, "idScan": True}, True),
        ({"identityVerification": True, "biometricSelfie": True, "synthIdDetection": True}, True),
        ({"identityVerification": True, "idScan": True, "biometricSelfie": True}, True),
        ({"identityVerification": True, "biometricSelfie": True}, False),
        ({"identityVerification": True, "synthIdDetection": True}, False),
        ({"identityVerification": True}, False),
        ({"idScan": True, "biometricSelfie": True, "synthIdDetection": True}, False),
        ({}, False),
    ],
)
def test_ai_verification_present_only_when_enabled(run, transport, toggles, expected):
    _run_url_flow(run, transport, **toggles)

    validation = transport.last.body["signatureValidation"]
    if expected:
        assert validation["ai_verification"] is True
    else:
        assert "ai_verification" not in validation


def test_invalid_participant_is_rejected_before_posting(run, transport):
    with pytest.raises(AllSignApiError, match="participants"):
        _run_url_flow(run, transport, participants={"participantValues": [{"name": "No Email"}]})
    assert [call.method for call in transport.calls] == ["GET"]
