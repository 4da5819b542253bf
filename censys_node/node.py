"""
The Censys workflow node: its description and the per-item dispatch loop
"""
import logging

import requests

from .core import CensysApiAccessObject, CensysException, CensysTransportException
from .credentials import CensysApiCredentials
from .operations import OPERATIONS, build_request, get_operation

LOGGER = logging.getLogger(__name__)
"""The logger for this module"""


def _timeout(value):
    """
    Read an item's timeout option, which may arrive as a number or a numeric string.

    :param value: The "timeout" additional option, in milliseconds
    :return: The timeout in milliseconds (the default for missing or zero values)
    :raises ValueError: If the value is not a positive number
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return CensysApiAccessObject.DEFAULT_TIMEOUT
    try:
        milliseconds = float(value)
    except (TypeError, ValueError):
        raise ValueError("Invalid timeout: %r" % (value,)) from None
    if milliseconds < 0:
        raise ValueError("Invalid timeout: %r" % (value,))
    return milliseconds or CensysApiAccessObject.DEFAULT_TIMEOUT


def _property(parameter, operations):
    prop = {
        "displayName": parameter.name,
        "name": parameter.name,
        "type": "string",
    }
    prop.update(parameter.display)
    prop["default"] = parameter.default if parameter.default is not None else ""
    if parameter.required:
        prop["required"] = True
    prop["displayOptions"] = {"show": {"operation": list(operations)}}
    return prop


def describe(operations=None):
    """
    Build the node description from the operation registry.

    Each parameter name appears once, shown for every operation that reads it.

    :param operations: An iterable of Operation objects (defaults to every registered operation)
    :return: The node description dictionary
    """
    operations = list(OPERATIONS.values() if operations is None else operations)
    shown_for = {}
    first_seen = {}
    for operation in operations:
        for parameter in operation.parameters:
            first_seen.setdefault(parameter.name, parameter)
            shown_for.setdefault(parameter.name, []).append(operation.name)
    properties = [{
        "displayName": "Operation",
        "name": "operation",
        "type": "options",
        "noDataExpression": True,
        "options": [{"name": operation.display_name, "value": operation.name, "description": operation.description}
                    for operation in operations],
        "default": operations[0].name if operations else "",
    }]
    properties.extend(_property(parameter, shown_for[name]) for name, parameter in first_seen.items())
    properties.append({
        "displayName": "Additional Options",
        "name": "additionalOptions",
        "type": "collection",
        "placeholder": "Add Option",
        "default": {},
        "options": [
            {
                "displayName": "Return Raw Response",
                "name": "returnRawResponse",
                "type": "boolean",
                "default": False,
                "description": "Return the full API response including metadata",
            },
            {
                "displayName": "Timeout",
                "name": "timeout",
                "type": "number",
                "default": CensysApiAccessObject.DEFAULT_TIMEOUT,
                "description": "Request timeout in milliseconds",
            },
        ],
    })
    return {
        "displayName": "Censys",
        "name": "censys",
        "group": ["transform"],
        "version": 1,
        "subtitle": "={{$parameter[\"operation\"]}}",
        "description": "Interact with Censys Internet Search API",
        "defaults": {"name": "Censys"},
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [{"name": CensysApiCredentials.name, "required": True}],
        "properties": properties,
    }


class CensysNode(object):
    """
    A workflow node exposing the Censys Search API.

    Each call to 'execute' runs one operation over a list of items.  An item is a mapping of parameter names to values
    (the parameters each operation reads are listed in the description), plus an optional "additionalOptions" mapping
    with "timeout" (milliseconds) and "returnRawResponse".  Items are processed one at a time, in order, and each
    produces exactly one output entry.

    Example:
        node = CensysNode()
        results = node.execute([{"ipAddress": "8.8.8.8"}], "getHost",
                               credentials={"apiId": "...", "apiSecret": "..."})

    A transport may be given to the constructor; it needs a 'request(method, path, params, data, timeout)' method
    returning the decoded JSON (CensysApiAccessObject is the default).  When none is given, one is created from the
    credentials for each execution and closed afterwards.
    """

    def __init__(self, transport=None):
        self._transport = transport

    @property
    def description(self):
        return describe()

    def execute(self, items, operation, credentials=None, continue_on_fail=False):
        """
        Run an operation over every item.

        :param items: An iterable of parameter mappings, one per item
        :param operation: The operation name (e.g. "searchHosts")
        :param credentials: A CensysApiCredentials, a {"apiId": ..., "apiSecret": ...} mapping, or None to read them
        from the environment
        :param continue_on_fail: If True, a failing item produces {"error", "operation", "itemIndex"} and the remaining
        items are still processed; if False, the first failure is raised
        :return: The list of output objects, one per item, in input order
        :raises CensysConfigurationException: If the credentials are missing (before any request is made)
        :raises UnknownOperationException: If the operation is not registered
        :raises CensysException: If an item fails and 'continue_on_fail' is False
        """
        credentials = self._credentials(credentials).validate()
        definition = get_operation(operation)
        items = list(items)
        LOGGER.debug("Executing %s over %d item(s)", definition.name, len(items))
        if self._transport is not None:
            return self._run(self._transport, definition, items, continue_on_fail)
        with CensysApiAccessObject(credentials.api_id, credentials.api_secret) as transport:
            return self._run(transport, definition, items, continue_on_fail)

    def _run(self, transport, operation, items, continue_on_fail):
        results = []
        for index, item in enumerate(items):
            try:
                results.append(self._execute_item(transport, operation, item or {}))
            except (CensysException, ValueError) as e:
                if not continue_on_fail:
                    LOGGER.error("Censys %s failed on item %d: %s", operation.name, index, e)
                    raise
                LOGGER.warning("Censys %s failed on item %d, continuing: %s", operation.name, index, e)
                results.append({"error": str(e), "operation": operation.name, "itemIndex": index})
        return results

    @staticmethod
    def _execute_item(transport, operation, item):
        options = item.get("additionalOptions") or {}
        timeout = _timeout(options.get("timeout"))
        request = build_request(operation, item)
        try:
            response = transport.request(request.method, request.path, params=request.params, data=request.data,
                                         timeout=timeout)
        except (OSError, requests.RequestException) as e:
            # injected transports may raise their own network errors
            raise CensysTransportException(str(e) or type(e).__name__) from e
        if operation.synthesizes_result:
            return {"success": True, "message": operation.message}
        if options.get("returnRawResponse"):
            return response
        if isinstance(response, dict) and "result" in response:
            return response["result"]
        return response

    @staticmethod
    def _credentials(credentials):
        if isinstance(credentials, CensysApiCredentials):
            return credentials
        if credentials is None:
            return CensysApiCredentials.from_env()
        return CensysApiCredentials.from_dict(credentials)
