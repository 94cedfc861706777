#!/usr/bin/env python3
"""
AllSign E-Signature MCP Server
Built with FastMCP; every AllSign operation is reachable through one tool.
"""
import logging
from typing import Any, Dict, List, Optional

from fastmcp import FastMCP

from . import __version__
from .credentials import ResolvedCredentials, resolve_credentials, verify_credentials
from .dispatcher import execute, list_operations, load_template_options
from .errors import AllSignApiError, AllSignError
from .models import Item, NodeParameters
from .settings import settings
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

SERVER_NAME = "AllSign E-Signature MCP Server"

# Initialize FastMCP
mcp = FastMCP(SERVER_NAME)


def get_credentials() -> ResolvedCredentials:
    """
    Resolve credentials from settings.

    Raises:
        ValueError: If the API key is missing or the environment is unknown
    """
    config = settings.get_allsign_config()
    return resolve_credentials(config["api_key"], config["base_url"], config["environment"])


def get_transport() -> Transport:
    return RequestsTransport(timeout=settings.ALLSIGN_TIMEOUT)


def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "message": "Server is running"}


def get_server_info() -> dict:
    """Get server information and configuration status."""
    configured = settings.validate_allsign_config()
    try:
        base_url = settings.get_endpoint().base_url
    except ValueError as e:
        logger.error(f"❌ Invalid AllSign endpoint configuration: {e}")
        return {"success": False, "error": str(e), "message": "Invalid AllSign configuration"}

    return {
        "success": True,
        "server": {"name": SERVER_NAME, "version": __version__, "status": "running"},
        "config": {
            "allsign": {
                "configured": configured,
                "environment": settings.ALLSIGN_ENVIRONMENT or "production",
                "base_url": base_url,
            }
        },
        "message": "Server is running and ready",
    }


def execute_operation(
    resource: str,
    operation: str,
    parameters: Optional[Dict[str, Any]] = None,
    items: Optional[List[Dict[str, Any]]] = None,
    item_parameters: Optional[List[Dict[str, Any]]] = None,
    continue_on_fail: Optional[bool] = None,
) -> dict:
    """Run one AllSign operation over a list of input items."""
    logger.info(f"📄 execute_operation called: {resource}.{operation} ({len(items or [])} item(s))")

    if continue_on_fail is None:
        continue_on_fail = settings.ALLSIGN_CONTINUE_ON_FAIL

    try:
        credentials = get_credentials()
        input_items = [Item.from_payload(payload) for payload in (items or [])]
        records = execute(
            input_items,
            resource,
            operation,
            NodeParameters(parameters, item_parameters),
            credentials,
            get_transport(),
            continue_on_fail=continue_on_fail,
        )
    except AllSignApiError as e:
        logger.error(f"❌ {e.message} ({e.description})")
        return {"success": False, **e.to_dict()}
    except (AllSignError, ValueError) as e:
        logger.error(f"❌ execute_operation error: {e}")
        return {"success": False, "error": str(e), "message": "Failed to execute AllSign operation"}

    return {"success": True, "items": [record.to_payload() for record in records]}


def get_operations() -> dict:
    """List every supported resource/operation pair."""
    return {"success": True, "operations": list_operations()}


def list_templates() -> dict:
    """List AllSign templates as selectable options."""
    try:
        credentials = get_credentials()
    except ValueError as e:
        return {"success": False, "error": str(e), "message": "AllSign is not configured"}
    return {"success": True, "templates": load_template_options(credentials, get_transport())}


def test_connection() -> dict:
    """Check the configured API key against AllSign."""
    try:
        credentials = get_credentials()
    except ValueError as e:
        return {"success": False, "error": str(e), "message": "AllSign is not configured"}
    result = verify_credentials(credentials, get_transport())
    return {"success": result["status"] == "OK", **result}


# Register tools without rebinding the module-level functions
mcp.tool(name="health_check", description="Health check endpoint")(health_check)
mcp.tool(name="get_server_info", description="Get server information and configuration status")(get_server_info)
mcp.tool(
    name="execute_operation",
    description=(
        "Run an AllSign operation (document, signer, signatureField, signature, folder, contact) "
        "over a list of input items"
    ),
)(execute_operation)
mcp.tool(name="list_operations", description="List supported AllSign resources and operations")(get_operations)
mcp.tool(name="list_templates", description="List AllSign document templates")(list_templates)
mcp.tool(name="test_connection", description="Verify the AllSign API key")(test_connection)


def main():
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    logger.info(f"🚀 Starting {SERVER_NAME} with FastMCP...")
    logger.info(f"🌍 AllSign configured: {settings.validate_allsign_config()}")
    logger.info(f"🌐 Starting FastMCP server on {settings.HOST}:{settings.PORT}")

    try:
        mcp.run(transport="http", host=settings.HOST, port=settings.PORT)
    except KeyboardInterrupt:
        logger.info("🛑 Server shutdown requested by user")


if __name__ == "__main__":
    main()
