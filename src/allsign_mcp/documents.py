"""
Document operations: create, send, download, void, invite and the
combined create-and-send flow.
"""
import logging
from typing import Any, Dict, List

from .credentials import ResolvedCredentials
from .models import (
    InviteParticipant,
    ItemParameters,
    ResultRecord,
    Signer,
    dump_records,
    parse_records,
)
from .operations import call_api, fan_out, json_record, omit_empty, operation
from .pdf_utils import (
    DEFAULT_UPLOAD_NAME,
    download_attachment,
    encode_base64,
    fetch_source_file,
    pdf_document_name,
)
from .transport import Transport

logger = logging.getLogger(__name__)


@operation("document", "create", "POST", "/v2/documents")
def create_document(params: ItemParameters, credentials: ResolvedCredentials,
                    transport: Transport) -> List[ResultRecord]:
    """Create a document from a remote URL or from the item's binary data."""
    document_name = params.get("documentName")
    file_source = params.get("fileSource", "binary")
    template_id = params.get("templateId", "")

    if file_source == "url":
        body: Dict[str, Any] = {
            "name": document_name,
            "file_url": params.get("fileUrl"),
        }
    else:
        binary = params.binary(params.get("binaryProperty", "data"))
        body = {
            "name": document_name,
            "file_data": encode_base64(binary.data),
            "file_name": binary.file_name or DEFAULT_UPLOAD_NAME,
        }
    omit_empty(body, template_id=template_id)

    response = call_api(credentials, transport, "POST", "/v2/documents", body=body)
    return [json_record(response.body, params)]


@operation("document", "get", "GET", "/v2/documents/{id}")
def get_document(params, credentials, transport):
    document_id = params.get("documentId")
    response = call_api(credentials, transport, "GET", f"/v2/documents/{document_id}")
    return [json_record(response.body, params)]


@operation("document", "getAll", "GET", "/v2/documents")
def get_documents(params, credentials, transport):
    limit = params.get("limit", 50)
    response = call_api(credentials, transport, "GET", "/v2/documents", query={"limit": limit})
    return fan_out(response.body, params)


@operation("document", "send", "POST", "/v2/documents/{id}/send")
def send_document(params, credentials, transport):
    document_id = params.get("documentId")
    signers = parse_records(Signer, params.get("signers.signerValues", []), "signers")

    body = omit_empty({"signers": dump_records(signers)}, message=params.get("message", ""))

    response = call_api(credentials, transport, "POST", f"/v2/documents/{document_id}/send", body=body)
    return [json_record(response.body, params)]


@operation("document", "download", "GET", "/v2/documents/{id}/download")
def download_document(params, credentials, transport):
    """Download the signed PDF as a binary attachment."""
    document_id = params.get("documentId")
    output_property = params.get("binaryPropertyOutput", "data")

    response = call_api(credentials, transport, "GET", f"/v2/documents/{document_id}/download", binary=True)
    file_name, binary = download_attachment(
        response.body,
        response.header("content-disposition"),
        f"document-{document_id}.pdf",
        response.header("content-type"),
    )
    return [
        ResultRecord(
            json={"documentId": document_id, "fileName": file_name},
            binary={output_property: binary},
            paired_item=params.index,
        )
    ]


@operation("document", "void", "POST", "/v2/documents/{id}/void")
def void_document(params, credentials, transport):
    document_id = params.get("documentId")
    body = omit_empty({}, reason=params.get("reason", ""))
    response = call_api(credentials, transport, "POST", f"/v2/documents/{document_id}/void", body=body)
    return [json_record(response.body, params)]


@operation("document", "delete", "DELETE", "/v2/documents/{id}")
def delete_document(params, credentials, transport):
    document_id = params.get("documentId")
    response = call_api(credentials, transport, "DELETE", f"/v2/documents/{document_id}")
    if response.body is None:
        return [json_record({"success": True, "documentId": document_id}, params)]
    return [json_record(response.body, params)]


@operation("document", "update", "PATCH", "/v2/documents/{id}")
def update_document(params, credentials, transport):
    document_id = params.get("documentId")
    update_fields = params.get("updateFields", {}) or {}

    body = omit_empty({}, name=update_fields.get("name"), description=update_fields.get("description"))
    # an empty folderId removes the document from its folder
    if "folderId" in update_fields:
        body["folderId"] = update_fields["folderId"] or None

    response = call_api(credentials, transport, "PATCH", f"/v2/documents/{document_id}", body=body)
    return [json_record(response.body, params)]


@operation("document", "getStats", "GET", "/v2/documents/stats")
def get_document_stats(params, credentials, transport):
    response = call_api(credentials, transport, "GET", "/v2/documents/stats")
    return [json_record(response.body, params)]


@operation("document", "invite", "POST", "/v2/documents/{id}/invite")
def invite_participant(params, credentials, transport):
    document_id = params.get("documentId")
    body = omit_empty(
        {"email": params.get("inviteEmail")},
        name=params.get("inviteName", ""),
        message=params.get("inviteMessage", ""),
    )
    response = call_api(credentials, transport, "POST", f"/v2/documents/{document_id}/invite", body=body)
    return [json_record(response.body, params)]


@operation("document", "inviteBulk", "POST", "/v2/documents/{id}/invite-bulk")
def invite_participants(params, credentials, transport):
    document_id = params.get("documentId")
    participants = parse_records(
        InviteParticipant,
        params.get("inviteParticipants.participantValues", []),
        "inviteParticipants",
    )
    body = omit_empty(
        {"participants": dump_records(participants)},
        message=params.get("inviteBulkMessage", ""),
    )
    response = call_api(credentials, transport, "POST", f"/v2/documents/{document_id}/invite-bulk", body=body)
    return [json_record(response.body, params)]


@operation("document", "updateSignatureValidations", "PATCH", "/api/documents/{id}/signature-validations")
def update_signature_validations(params, credentials, transport):
    document_id = params.get("documentId")
    body = {
        "signatureValidations": {
            "autografa": bool(params.get("autografa", True)),
            "FEA": bool(params.get("fea", False)),
            "nom151": bool(params.get("nom151", False)),
            "eIDAS": bool(params.get("eidas", False)),
            "firmaBiometrica": bool(params.get("firmaBiometrica", False)),
            "aiVerification": bool(params.get("aiVerification", False)),
            "confirmNameToFinish": bool(params.get("confirmNameToFinish", False)),
        }
    }
    response = call_api(
        credentials, transport, "PATCH", f"/api/documents/{document_id}/signature-validations", body=body
    )
    return [json_record(response.body, params)]


@operation("document", "updateSignatureState", "PATCH", "/api/documents/{id}/signature-state")
def update_signature_state(params, credentials, transport):
    document_id = params.get("documentId")
    status = params.get("signatureStatus", "RECOLECTANDO_FIRMANTES")
    response = call_api(
        credentials, transport, "PATCH", f"/api/documents/{document_id}/signature-state", body={"status": status}
    )
    return [json_record(response.body, params)]


def identity_ai_verification(params: ItemParameters) -> bool:
    """
    Whether AI identity verification is requested.

    Requires identity verification plus either the ID scan, or the
    biometric selfie together with its AI-detection check. The ID scan on
    its own is enough.
    """
    if not params.get("identityVerification", False):
        return False
    selfie_check = bool(params.get("biometricSelfie", False)) and bool(params.get("synthIdDetection", False))
    return bool(params.get("idScan", False)) or selfie_check


def build_create_and_send_body(params: ItemParameters, content: bytes, source_name) -> Dict[str, Any]:
    participants = dump_records(
        parse_records(Signer, params.get("participants.participantValues", []), "participants")
    )
    has_participants = len(participants) > 0

    signature_validation: Dict[str, Any] = {
        "autografa": bool(params.get("autografa", True)),
        "FEA": bool(params.get("fea", False)),
        "nom151": bool(params.get("nom151", False)),
        "biometric_signature": bool(params.get("biometricSignature", False)),
        "confirm_name_to_finish": bool(params.get("confirmNameToFinish", False)),
    }
    if identity_ai_verification(params):
        signature_validation["ai_verification"] = True

    return {
        "document": {
            "base64Content": encode_base64(content),
            "name": pdf_document_name(params.get("documentName"), source_name),
        },
        "participants": participants,
        "signatureValidation": signature_validation,
        "config": {
            "sendInvitations": has_participants,
            "sendByEmail": has_participants,
            "startAtStep": 3 if has_participants else 1,
        },
    }


@operation("document", "createAndSend", "POST", "/v2/documents/")
def create_and_send_document(params, credentials, transport):
    """Fetch the source file, then create the document and invite participants in one call."""
    if params.get("fileSource", "url") == "url":
        source = fetch_source_file(params.get("fileUrl"), transport)
    else:
        source = params.binary(params.get("binaryProperty", "data"))

    body = build_create_and_send_body(params, source.data, source.file_name)
    logger.info(
        f"Creating document '{body['document']['name']}' with {len(body['participants'])} participant(s)"
    )
    response = call_api(credentials, transport, "POST", "/v2/documents/", body=body)
    return [json_record(response.body, params)]
