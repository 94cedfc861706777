"""
Contact operations.
"""
from .operations import call_api, fan_out, json_record, operation


@operation("contact", "getAll", "GET", "/v2/contacts")
def get_contacts(params, credentials, transport):
    limit = params.get("contactLimit", 50)
    response = call_api(credentials, transport, "GET", "/v2/contacts", query={"limit": limit})
    return fan_out(response.body, params)


@operation("contact", "get", "GET", "/v2/contacts/{id}")
def get_contact(params, credentials, transport):
    contact_id = params.get("contactId")
    response = call_api(credentials, transport, "GET", f"/v2/contacts/{contact_id}")
    return [json_record(response.body, params)]


@operation("contact", "create", "POST", "/v2/contacts")
def create_contact(params, credentials, transport):
    body = {
        "email": params.get("contactEmail"),
        "name": params.get("contactName"),
    }
    body.update(params.get("contactAdditionalFields", {}) or {})
    response = call_api(credentials, transport, "POST", "/v2/contacts", body=body)
    return [json_record(response.body, params)]


@operation("contact", "update", "PATCH", "/v2/contacts/{id}")
def update_contact(params, credentials, transport):
    contact_id = params.get("contactId")
    update_fields = params.get("contactUpdateFields", {}) or {}
    response = call_api(credentials, transport, "PATCH", f"/v2/contacts/{contact_id}", body=update_fields)
    return [json_record(response.body, params)]


@operation("contact", "delete", "DELETE", "/v2/contacts/{id}")
def delete_contact(params, credentials, transport):
    contact_id = params.get("contactId")
    call_api(credentials, transport, "DELETE", f"/v2/contacts/{contact_id}")
    return [json_record({"success": True, "contactId": contact_id}, params)]


@operation("contact", "getDocuments", "GET", "/v2/contacts/{id}/documents")
def get_contact_documents(params, credentials, transport):
    contact_id = params.get("contactId")
    limit = params.get("contactLimit", 50)
    response = call_api(credentials, transport, "GET", f"/v2/contacts/{contact_id}/documents", query={"limit": limit})
    return fan_out(response.body, params)
