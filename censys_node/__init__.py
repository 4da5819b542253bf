"""
Censys Search API workflow node.

The easiest way to use this is to instantiate a node.CensysNode and call 'execute' with a list of items, an operation
name and a credential pair.  Each operation maps to exactly one HTTP call against https://search.censys.io/api; the
operations are registered by the hosts, certificates and tags modules.

Exception Hierarchy:
    Exception
    |
    +- CensysException
       |
       +- CensysConfigurationException
       |
       +- UnknownOperationException
       |
       +- MissingParameterException
       |
       +- CensysTransportException
       |
       +- CensysResultException

Result Object Hierarchy:
    CensysResult
    |
    +- ErrorResult

Operation Registry:
    - operations.Operation: One (method, path template) pair and the Parameters it reads
    - operations.build_request: Turns an operation and an item into a Request (no I/O)
    - hosts, certificates, tags: The registered operations

Enumerations:
    - HttpMethod: Enumeration of HTTP methods used by the v2 endpoints
    - Location: Where a parameter is placed in a request (path, query string or body)

"""
# registration order is the order operations are offered in
from . import hosts  # noqa: F401
from . import certificates  # noqa: F401
from . import tags  # noqa: F401
from .core import (CensysApiAccessObject, CensysConfigurationException, CensysException, CensysResultException,
                   CensysTransportException, HttpMethod, MissingParameterException, UnknownOperationException)
from .credentials import CensysApiCredentials
from .node import CensysNode, describe
from .operations import OPERATIONS, build_request, get_operation, to_rfc3339

__all__ = [
    "CensysApiAccessObject",
    "CensysApiCredentials",
    "CensysConfigurationException",
    "CensysException",
    "CensysNode",
    "CensysResultException",
    "CensysTransportException",
    "HttpMethod",
    "MissingParameterException",
    "OPERATIONS",
    "UnknownOperationException",
    "build_request",
    "describe",
    "get_operation",
    "to_rfc3339",
]
