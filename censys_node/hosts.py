"""
Operations against the Censys hosts index
"""
import logging

from .core import HttpMethod
from .operations import (Location, Operation, Parameter, cursor, fields, per_page, register, search_query, sort,
                         timestamp)

LOGGER = logging.getLogger(__name__)
"""The logger for this module"""


def ip_address():
    return Parameter("ipAddress", location=Location.PATH, required=True, display={
        "displayName": "IP Address",
        "type": "string",
        "description": "The IP address of the host (e.g. \"8.8.8.8\")",
    })


def virtual_hosts():
    return Parameter("virtualHosts", key="virtual_hosts", default="EXCLUDE", display={
        "displayName": "Virtual Hosts",
        "type": "options",
        "options": [
            {"name": "Exclude", "value": "EXCLUDE", "description": "Ignore virtual hosts entries"},
            {"name": "Include", "value": "INCLUDE", "description": "Include virtual hosts in results"},
            {"name": "Only", "value": "ONLY", "description": "Return only virtual hosts"},
        ],
        "description": "How to handle virtual hosts",
    })


SEARCH_HOSTS = Operation(
    "searchHosts", "Search Hosts", HttpMethod.GET, "/v2/hosts/search",
    parameters=(search_query(), per_page(), virtual_hosts(), sort(), fields(), cursor()),
    description="Search for hosts using Censys Search Language")

AGGREGATE_HOSTS = Operation(
    "aggregateHosts", "Aggregate Hosts", HttpMethod.GET, "/v2/hosts/aggregate",
    parameters=(
        search_query(),
        # "field" and "numBuckets" are accepted for workflows written against the older parameter names
        Parameter("fieldHost", key="field", required=True, aliases=("field",), display={
            "displayName": "Field",
            "type": "string",
            "description": "Field to aggregate on (e.g., \"services.port\")",
        }),
        Parameter("numBucketsHost", key="num_buckets", default=50, aliases=("numBuckets",), display={
            "displayName": "Number of Buckets",
            "type": "number",
            "typeOptions": {"minValue": 1, "maxValue": 1000},
            "description": "Maximum number of buckets for aggregation (1-1000)",
        }),
        virtual_hosts(),
    ),
    description="Aggregate hosts into buckets by a field")

GET_HOST = Operation(
    "getHost", "Get Host Details", HttpMethod.GET, "/v2/hosts/{ipAddress}",
    parameters=(
        ip_address(),
        timestamp("atTime", "at_time", "At Time",
                  "Fetch the host as it was at this point in time (leave empty for the latest data)"),
    ),
    description="Get detailed information about a specific host")

GET_HOST_NAMES = Operation(
    "getHostNames", "Get Host Names", HttpMethod.GET, "/v2/hosts/{ipAddress}/names",
    parameters=(ip_address(), per_page("perPageNames", 100), cursor("cursorNames")),
    description="Get the names associated with a host")

GET_HOST_CERTIFICATES = Operation(
    "getHostCertificates", "Get Host Certificates", HttpMethod.GET, "/v2/hosts/{ipAddress}/certificates",
    parameters=(
        ip_address(),
        per_page("perPageCerts", 50),
        timestamp("startTime", "start_time", "Start Time", "Only return certificates observed after this time"),
        timestamp("endTime", "end_time", "End Time", "Only return certificates observed before this time"),
        cursor("cursorCerts"),
    ),
    description="Get the certificates observed on a host")

register(SEARCH_HOSTS, AGGREGATE_HOSTS, GET_HOST, GET_HOST_NAMES, GET_HOST_CERTIFICATES)
