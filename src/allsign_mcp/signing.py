"""
Signer, signature field and signature operations.
"""
from .models import SignatureField, dump_records, parse_records
from .operations import call_api, json_record, operation


@operation("signer", "add", "POST", "/api/documents/{id}/add-signer")
def add_signer(params, credentials, transport):
    document_id = params.get("documentId")
    body = {
        "signerEmail": params.get("signerEmail"),
        "invitedByEmail": params.get("invitedByEmail"),
    }
    response = call_api(credentials, transport, "POST", f"/api/documents/{document_id}/add-signer", body=body)
    return [json_record(response.body, params)]


@operation("signatureField", "add", "POST", "/api/documents/{id}/add-signature-field")
def add_signature_field(params, credentials, transport):
    """Place one signature field. Extra placement options are passed through as given."""
    document_id = params.get("documentId")
    body = {
        "signerEmail": params.get("sfSignerEmail"),
        "pageNumber": params.get("sfPageNumber", 1),
    }
    body.update(params.get("sfAdditionalFields", {}) or {})
    response = call_api(
        credentials, transport, "POST", f"/api/documents/{document_id}/add-signature-field", body=body
    )
    return [json_record(response.body, params)]


@operation("signatureField", "addMultiple", "POST", "/api/documents/{id}/add-signature-fields")
def add_signature_fields(params, credentials, transport):
    document_id = params.get("documentId")
    fields = parse_records(SignatureField, params.get("sfFields.fieldValues", []), "sfFields")
    response = call_api(
        credentials,
        transport,
        "POST",
        f"/api/documents/{document_id}/add-signature-fields",
        body={"fields": dump_records(fields)},
    )
    return [json_record(response.body, params)]


@operation("signatureField", "update", "PUT", "/api/documents/{id}/update-signature-field")
def update_signature_field(params, credentials, transport):
    document_id = params.get("documentId")
    body = {
        "fieldId": params.get("sfFieldId"),
        "signerEmail": params.get("sfUpdateSignerEmail"),
    }
    body.update(params.get("sfUpdateFields", {}) or {})
    response = call_api(
        credentials, transport, "PUT", f"/api/documents/{document_id}/update-signature-field", body=body
    )
    return [json_record(response.body, params)]


@operation("signatureField", "delete", "DELETE", "/api/documents/{id}/delete-signature-field")
def delete_signature_field(params, credentials, transport):
    document_id = params.get("documentId")
    body = {
        "fieldId": params.get("sfDeleteFieldId"),
        "signerEmail": params.get("sfDeleteSignerEmail"),
        "deleteLinkedFields": bool(params.get("deleteLinkedFields", False)),
    }
    response = call_api(
        credentials, transport, "DELETE", f"/api/documents/{document_id}/delete-signature-field", body=body
    )
    return [json_record(response.body, params)]


@operation("signature", "delete", "DELETE", "/api/documents/{docId}/signature/{sigId}")
def delete_signature(params, credentials, transport):
    document_id = params.get("documentId")
    signature_id = params.get("signatureId")
    response = call_api(credentials, transport, "DELETE", f"/api/documents/{document_id}/signature/{signature_id}")
    return [json_record(response.body, params)]
