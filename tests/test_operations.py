from __future__ import annotations

import datetime

import pytest

from censys_node import OPERATIONS, HttpMethod, build_request, get_operation, to_rfc3339
from censys_node.core import MissingParameterException, UnknownOperationException
from censys_node.operations import Request


def test_registry_holds_every_operation_in_offer_order() -> None:
    assert list(OPERATIONS) == [
        "searchHosts", "aggregateHosts", "getHost", "getHostNames", "getHostCertificates",
        "searchCertificates", "aggregateCertificates", "getCertificate",
        "listTags", "createTag", "getTag", "updateTag", "deleteTag",
        "getHostTags", "addHostTag", "removeHostTag",
        "getCertTags", "addCertTag", "removeCertTag",
        "getTagHosts", "getTagCertificates",
    ]


def test_get_operation_rejects_unknown_names() -> None:
    with pytest.raises(UnknownOperationException) as exc:
        get_operation("searchWebsites")
    assert str(exc.value) == "Unknown operation: searchWebsites"


def test_search_hosts_sends_defaults_and_omits_empty_optionals() -> None:
    request = build_request("searchHosts", {"query": "services.service_name: HTTP", "fields": "", "cursor": ""})
    assert request == Request(
        HttpMethod.GET,
        "/v2/hosts/search",
        params={"q": "services.service_name: HTTP", "per_page": 50, "virtual_hosts": "EXCLUDE"},
    )


def test_search_hosts_forwards_every_supplied_value() -> None:
    request = build_request("searchHosts", {
        "query": "services.port: 22",
        "perPage": 10,
        "virtualHosts": "ONLY",
        "sort": "RELEVANCE",
        "fields": "ip,services.port",
        "cursor": "abc==",
    })
    assert request.params == {
        "q": "services.port: 22",
        "per_page": 10,
        "virtual_hosts": "ONLY",
        "sort": "RELEVANCE",
        "fields": "ip,services.port",
        "cursor": "abc==",
    }
    assert request.data is None


def test_search_requires_a_query() -> None:
    with pytest.raises(MissingParameterException) as exc:
        build_request("searchHosts", {"query": "  "})
    assert exc.value.parameter == "query"


def test_aggregate_hosts_accepts_legacy_parameter_names() -> None:
    current = build_request("aggregateHosts", {"query": "*", "fieldHost": "services.port", "numBucketsHost": 5})
    legacy = build_request("aggregateHosts", {"query": "*", "field": "services.port", "numBuckets": 5})
    assert current == legacy
    assert current.params == {"q": "*", "field": "services.port", "num_buckets": 5, "virtual_hosts": "EXCLUDE"}


def test_get_host_converts_at_time_to_rfc3339() -> None:
    request = build_request("getHost", {"ipAddress": "8.8.8.8", "atTime": "2024-01-01"})
    assert request.path == "/v2/hosts/8.8.8.8"
    assert request.params == {"at_time": "2024-01-01T00:00:00.000Z"}


def test_get_host_without_at_time_has_no_query() -> None:
    request = build_request("getHost", {"ipAddress": "8.8.8.8", "atTime": ""})
    assert request.params is None


def test_path_segments_are_percent_encoded() -> None:
    request = build_request("getHost", {"ipAddress": "2001:db8::1"})
    assert request.path == "/v2/hosts/2001%3Adb8%3A%3A1"

    request = build_request("removeCertTag", {"certificateFingerprint": "ab/cd", "tagId": "tag 1"})
    assert request.method is HttpMethod.DELETE
    assert request.path == "/v2/certificates/ab%2Fcd/tags/tag%201"


def test_get_host_certificates_window() -> None:
    request = build_request("getHostCertificates", {
        "ipAddress": "1.1.1.1",
        "startTime": "2024-03-01T12:30:00+02:00",
        "endTime": datetime.date(2024, 3, 31),
        "cursorCerts": "next",
    })
    assert request.params == {
        "per_page": 50,
        "start_time": "2024-03-01T10:30:00.000Z",
        "end_time": "2024-03-31T00:00:00.000Z",
        "cursor": "next",
    }


def test_get_host_names_defaults_to_one_hundred_per_page() -> None:
    assert build_request("getHostNames", {"ipAddress": "1.1.1.1"}).params == {"per_page": 100}


def test_certificate_operations() -> None:
    search = build_request("searchCertificates", {"query": "parsed.subject.country: US"})
    assert search.path == "/v2/certificates/search"
    assert search.params == {"q": "parsed.subject.country: US", "per_page": 50}

    aggregate = build_request("aggregateCertificates", {"query": "*", "fieldCert": "parsed.issuer.organization"})
    assert aggregate.params == {"q": "*", "field": "parsed.issuer.organization", "num_buckets": 50}

    view = build_request("getCertificate", {"fingerprint": "f" * 64})
    assert view == Request(HttpMethod.GET, "/v2/certificates/" + "f" * 64)


def test_tag_body_only_carries_color_when_given() -> None:
    plain = build_request("createTag", {"tagName": "suspicious", "tagColor": ""})
    assert plain == Request(HttpMethod.POST, "/v2/tags", data={"name": "suspicious"})

    colored = build_request("updateTag", {"tagId": "t1", "tagName": "suspicious", "tagColor": "ff6113"})
    assert colored == Request(HttpMethod.PUT, "/v2/tags/t1",
                              data={"name": "suspicious", "metadata": {"color": "ff6113"}})


def test_operations_without_parameters_send_nothing() -> None:
    assert build_request("listTags", {}) == Request(HttpMethod.GET, "/v2/tags")


def test_to_rfc3339_handles_common_inputs() -> None:
    assert to_rfc3339("2024-01-01") == "2024-01-01T00:00:00.000Z"
    assert to_rfc3339("2024-01-01T05:06:07.891Z") == "2024-01-01T05:06:07.891Z"
    assert to_rfc3339("January 2, 2024") == "2024-01-02T00:00:00.000Z"
    assert to_rfc3339(datetime.datetime(2024, 1, 1, 23, 59, 59, 999999)) == "2024-01-01T23:59:59.999Z"


def test_to_rfc3339_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        to_rfc3339("not a date")
