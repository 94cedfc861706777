"""
Folder operations.
"""
from .operations import call_api, fan_out, json_record, omit_empty, operation


@operation("folder", "getAll", "GET", "/v2/folders")
def get_folders(params, credentials, transport):
    response = call_api(credentials, transport, "GET", "/v2/folders")
    return fan_out(response.body, params)


@operation("folder", "get", "GET", "/v2/folders/{id}")
def get_folder(params, credentials, transport):
    folder_id = params.get("folderId")
    response = call_api(credentials, transport, "GET", f"/v2/folders/{folder_id}")
    return [json_record(response.body, params)]


@operation("folder", "create", "POST", "/v2/folders")
def create_folder(params, credentials, transport):
    body = omit_empty({"name": params.get("folderName")}, parentFolderId=params.get("parentFolderId", ""))
    response = call_api(credentials, transport, "POST", "/v2/folders", body=body)
    return [json_record(response.body, params)]


@operation("folder", "update", "PATCH", "/v2/folders/{id}")
def update_folder(params, credentials, transport):
    folder_id = params.get("folderId")
    update_fields = params.get("folderUpdateFields", {}) or {}
    response = call_api(credentials, transport, "PATCH", f"/v2/folders/{folder_id}", body=update_fields)
    return [json_record(response.body, params)]


@operation("folder", "delete", "DELETE", "/v2/folders/{id}")
def delete_folder(params, credentials, transport):
    folder_id = params.get("folderId")
    call_api(credentials, transport, "DELETE", f"/v2/folders/{folder_id}")
    return [json_record({"success": True, "folderId": folder_id}, params)]


@operation("folder", "getDocuments", "GET", "/v2/folders/{id}/documents")
def get_folder_documents(params, credentials, transport):
    folder_id = params.get("folderId")
    limit = params.get("folderDocsLimit", 50)
    response = call_api(credentials, transport, "GET", f"/v2/folders/{folder_id}/documents", query={"limit": limit})
    return fan_out(response.body, params)
