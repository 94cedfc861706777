"""
Operation dispatcher.

Runs one (resource, operation) selection over a list of input items,
strictly in order, and turns failures into AllSignApiError or, when
continue-on-failure is requested, into per-item error records.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

# handler modules register themselves in the operation table on import
from . import contacts, documents, folders, signing  # noqa: F401
from .credentials import ResolvedCredentials
from .errors import extract_error_message, to_api_error
from .models import Item, NodeParameters, ResultRecord
from .operations import OPERATIONS, call_api, get_operation
from .transport import Transport

logger = logging.getLogger(__name__)


def execute(
    items: Optional[Sequence[Item]],
    resource: str,
    operation: str,
    parameters: NodeParameters,
    credentials: ResolvedCredentials,
    transport: Transport,
    continue_on_fail: bool = False,
) -> List[ResultRecord]:
    """
    Execute an operation for every input item.

    Args:
        items: Input items; an empty list runs the operation once
        resource: Resource selector, e.g. "document"
        operation: Operation selector, e.g. "send"
        parameters: Parameter bag supplied by the host
        credentials: Credentials resolved once for the run
        transport: HTTP transport used for every request
        continue_on_fail: Record {"error": ...} for failing items instead of aborting

    Returns:
        Result records in item order

    Raises:
        UnsupportedOperationError: If the selection has no handler
        AllSignApiError: On the first failing item when continue_on_fail is off
    """
    spec = get_operation(resource, operation)
    items = list(items) if items else [Item()]
    results: List[ResultRecord] = []

    logger.info(f"Executing {resource}.{operation} for {len(items)} item(s)")
    for index, item in enumerate(items):
        params = parameters.for_item(index, item)
        try:
            results.extend(spec.handler(params, credentials, transport))
        except Exception as e:
            if continue_on_fail:
                message = extract_error_message(e)
                logger.error(f"Item {index} failed, continuing: {message}")
                results.append(ResultRecord(json={"error": message}, paired_item=index))
                continue

            api_error = to_api_error(e, item_index=index)
            logger.error(f"Item {index} failed: {api_error} ({api_error.description})")
            raise api_error from e

    logger.info(f"{resource}.{operation} produced {len(results)} record(s)")
    return results


def list_operations() -> List[Dict[str, str]]:
    """Every supported (resource, operation) with its method and path."""
    return [OPERATIONS[key].to_dict() for key in sorted(OPERATIONS)]


def load_template_options(credentials: ResolvedCredentials, transport: Transport) -> List[Dict[str, Any]]:
    """
    Template choices for a selection list.

    Failures are logged and reported as a single placeholder option.
    """
    try:
        response = call_api(credentials, transport, "GET", "/v2/templates")
    except Exception as e:
        logger.warning(f"Could not load AllSign templates: {extract_error_message(e)}")
        return [{"name": "Could not load templates", "value": ""}]

    if isinstance(response.body, list):
        return [{"name": template.get("name"), "value": template.get("id")} for template in response.body]
    return [{"name": "No Templates Found", "value": ""}]
