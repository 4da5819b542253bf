"""
Operations against the Censys certificates index
"""
import logging

from .core import HttpMethod
from .operations import Location, Operation, Parameter, cursor, fields, per_page, register, search_query, sort

LOGGER = logging.getLogger(__name__)
"""The logger for this module"""


SEARCH_CERTIFICATES = Operation(
    "searchCertificates", "Search Certificates", HttpMethod.GET, "/v2/certificates/search",
    parameters=(search_query(), per_page(), sort(), fields(), cursor()),
    description="Search for certificates using Censys Search Language")

AGGREGATE_CERTIFICATES = Operation(
    "aggregateCertificates", "Aggregate Certificates", HttpMethod.GET, "/v2/certificates/aggregate",
    parameters=(
        search_query(),
        Parameter("fieldCert", key="field", required=True, display={
            "displayName": "Field",
            "type": "string",
            "description": "Field to aggregate on (e.g., \"parsed.issuer.organization\", \"parsed.subject.country\")",
        }),
        Parameter("numBucketsCert", key="num_buckets", default=50, display={
            "displayName": "Number of Buckets",
            "type": "number",
            "typeOptions": {"minValue": 1, "maxValue": 100},
            "description": "Maximum number of buckets for aggregation (1-100)",
        }),
    ),
    description="Aggregate certificates into buckets by a field")

GET_CERTIFICATE = Operation(
    "getCertificate", "Get Certificate Details", HttpMethod.GET, "/v2/certificates/{fingerprint}",
    parameters=(
        Parameter("fingerprint", location=Location.PATH, required=True, display={
            "displayName": "Certificate Fingerprint",
            "type": "string",
            "description": "SHA-256 fingerprint of the certificate to retrieve",
        }),
    ),
    description="Get detailed information about a specific certificate")

register(SEARCH_CERTIFICATES, AGGREGATE_CERTIFICATES, GET_CERTIFICATE)
