"""
The operation registry.

Every node operation is described by an Operation: its HTTP method, a path template, and the Parameters it reads.  The
'build_request' function turns an operation plus one item's resolved parameter values into a Request without any I/O.
"""
import datetime
import enum
import logging
import urllib.parse

import dateutil.parser
import dateutil.tz

from .core import HttpMethod, MissingParameterException, UnknownOperationException

LOGGER = logging.getLogger(__name__)
"""The logger for this module"""


@enum.unique
class Location(enum.Enum):
    """
    Where a parameter value is placed in the request
    """

    PATH = "path"
    """Substituted (percent-encoded) into the path template"""

    QUERY = "query"
    """Sent as a query-string entry"""

    BODY = "body"
    """Sent as a (possibly nested) key of the JSON body"""


def to_rfc3339(value):
    """
    Convert a user-supplied date or date-time into an RFC3339 UTC timestamp with millisecond precision.

    Values without a UTC offset are taken to be UTC, so "2024-01-01" becomes "2024-01-01T00:00:00.000Z".

    :param value: A string, datetime.datetime or datetime.date
    :return: The RFC3339 timestamp
    :raises ValueError: If the value cannot be parsed as a date
    """
    if isinstance(value, datetime.datetime):
        moment = value
    elif isinstance(value, datetime.date):
        moment = datetime.datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        try:
            moment = dateutil.parser.isoparse(text)
        except ValueError:
            try:
                moment = dateutil.parser.parse(text)
            except (ValueError, OverflowError) as e:
                raise ValueError("Invalid date: %s" % value) from e
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dateutil.tz.UTC)
    moment = moment.astimezone(dateutil.tz.UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + "%03dZ" % (moment.microsecond // 1000)


class Parameter(object):
    """
    One parameter an operation reads from an item.

    'key' is the wire name; dotted keys (e.g. "metadata.color") nest inside the JSON body.  Optional parameters whose
    resolved value is empty are left out of the request entirely.
    """

    def __init__(self, name, key=None, location=Location.QUERY, default=None, required=False, convert=None,
                 aliases=(), display=None):
        """
        Create a parameter.

        :param name: The item-level parameter name (e.g. "perPageNames")
        :param key: The wire name (defaults to 'name')
        :param location: A Location enumeration value
        :param default: The value used when the item does not supply one
        :param required: Whether an empty value is an error
        :param convert: A callable applied to non-empty values before sending
        :param aliases: Other item-level names accepted for this parameter, checked in order after 'name'
        :param display: Extra node-description attributes (displayName, type, description, ...)
        """
        self.name = name
        self.key = key or name
        self.location = location
        self.default = default
        self.required = required
        self.convert = convert
        self.aliases = tuple(aliases)
        self.display = dict(display or {})

    def resolve(self, values):
        """
        Resolve this parameter's value from an item's parameter mapping.

        :param values: The item's parameter mapping
        :return: The resolved value (possibly the default, possibly empty)
        """
        for name in (self.name,) + self.aliases:
            if name in values and not _is_empty(values[name]):
                return values[name]
        return self.default

    def __repr__(self):
        return "%s(%r, key=%r, location=%s)" % (type(self).__name__, self.name, self.key, self.location.name)


class Operation(object):
    """
    A node operation: one fixed (method, path template) pair and the parameters it reads.

    Operations with a 'message' have no meaningful response body; the node reports {"success": True, "message": ...}
    for them instead of the API response.
    """

    def __init__(self, name, display_name, method, path, parameters=(), message=None, description=None):
        self.name = name
        self.display_name = display_name
        self.method = method
        self.path = path
        self.parameters = tuple(parameters)
        self.message = message
        self.description = description

    @property
    def synthesizes_result(self):
        return self.message is not None

    def __repr__(self):
        return "%s(%r, %s %s)" % (type(self).__name__, self.name, self.method.value, self.path)


class Request(object):
    """
    A fully built request, ready to hand to a transport.
    """

    def __init__(self, method, path, params=None, data=None):
        self.method = method
        self.path = path
        self.params = params
        self.data = data

    def __eq__(self, other):
        if not isinstance(other, Request):
            return NotImplemented
        return (self.method, self.path, self.params, self.data) == (other.method, other.path, other.params, other.data)

    def __repr__(self):
        return "%s(%s, %r, params=%r, data=%r)" % (type(self).__name__, self.method.value, self.path, self.params,
                                                    self.data)


def search_query():
    return Parameter("query", key="q", required=True, display={
        "displayName": "Query",
        "type": "string",
        "description": "Query using Censys Search Language (e.g., \"services.service_name: HTTP\" for hosts or "
                       "\"parsed.subject.country: US\" for certificates)",
    })


def per_page(name="perPage", default=50):
    return Parameter(name, key="per_page", default=default, display={
        "displayName": "Results Per Page",
        "type": "number",
        "typeOptions": {"minValue": 1, "maxValue": 100},
        "description": "Maximum number of results per page (1-100)",
    })


def cursor(name="cursor"):
    return Parameter(name, key="cursor", display={
        "displayName": "Cursor",
        "type": "string",
        "description": "Cursor token for pagination",
    })


def sort():
    return Parameter("sort", display={
        "displayName": "Sort",
        "type": "string",
        "description": "Sort fields as comma-separated list (e.g., \"parsed.subject.country,-fingerprint_sha256\"). Use "
                       "\"-\" prefix for descending order. For hosts, can also use RELEVANCE, ASCENDING, DESCENDING.",
    })


def fields():
    return Parameter("fields", display={
        "displayName": "Fields",
        "type": "string",
        "description": "Comma-separated list of fields to return (e.g., \"names,parsed.issuer.organization\"). For "
                       "hosts, this is a paid feature.",
    })


def timestamp(name, key, display_name, description):
    return Parameter(name, key=key, convert=to_rfc3339, display={
        "displayName": display_name,
        "type": "dateTime",
        "description": description,
    })


OPERATIONS = {}
"""Registered operations by name, in registration order"""


def register(*operations):
    """
    Add operations to the registry.

    :param operations: The Operation instances
    :return: This method returns no values
    :raises ValueError: If an operation name is already registered
    """
    for operation in operations:
        if operation.name in OPERATIONS:
            raise ValueError("Operation already registered: %s" % operation.name)
        OPERATIONS[operation.name] = operation
        LOGGER.debug("Registered operation %r", operation)


def get_operation(name):
    """
    Look up a registered operation.

    :param name: The operation name (e.g. "searchHosts")
    :return: The Operation
    :raises UnknownOperationException: If no operation has this name
    """
    try:
        return OPERATIONS[name]
    except KeyError:
        raise UnknownOperationException(name) from None


def build_request(operation, values):
    """
    Build the request for one item.

    :param operation: An Operation, or the name of a registered operation
    :param values: The item's resolved parameter mapping
    :return: A Request; 'params' and 'data' are None when nothing is placed there
    :raises MissingParameterException: If a required parameter is empty
    :raises ValueError: If a value cannot be converted (e.g. an invalid date)
    """
    if not isinstance(operation, Operation):
        operation = get_operation(operation)
    values = values or {}
    segments = {}
    params = None
    data = None
    for parameter in operation.parameters:
        value = parameter.resolve(values)
        if _is_empty(value):
            if parameter.required:
                raise MissingParameterException(operation.name, parameter.name)
            continue
        if parameter.convert is not None:
            value = parameter.convert(value)
        if parameter.location is Location.PATH:
            segments[parameter.key] = urllib.parse.quote(str(value), safe="")
        elif parameter.location is Location.QUERY:
            params = params if params is not None else {}
            params[parameter.key] = value
        else:
            data = data if data is not None else {}
            _set_nested(data, parameter.key, value)
    path = operation.path.format(**segments)
    return Request(operation.method, path, params=params, data=data)


def _is_empty(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _set_nested(target, dotted_key, value):
    keys = dotted_key.split(".")
    for key in keys[:-1]:
        target = target.setdefault(key, {})
    target[keys[-1]] = value
