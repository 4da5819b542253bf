from __future__ import annotations

import pytest
import requests

from conftest import FakeTransport, api_error

from censys_node import CensysApiCredentials, HttpMethod
from censys_node.core import CensysConfigurationException, CensysResultException


def test_descriptor_shape() -> None:
    assert CensysApiCredentials.name == "censysApi"
    assert [prop["name"] for prop in CensysApiCredentials.properties] == ["apiId", "apiSecret"]
    assert CensysApiCredentials.properties[1]["typeOptions"] == {"password": True}


def test_authenticate_sets_basic_auth() -> None:
    session = requests.Session()
    CensysApiCredentials("id", "secret").authenticate(session)
    assert session.auth == ("id", "secret")
    session.close()


def test_test_pings_the_account_endpoint() -> None:
    transport = FakeTransport([{"login": "analyst", "quota": {"used": 1, "allowance": 250}}])
    assert CensysApiCredentials("id", "secret").test(transport) is True
    assert transport.calls[0]["method"] is HttpMethod.GET
    assert transport.calls[0]["path"] == "/v1/account"


def test_test_propagates_rejection() -> None:
    transport = FakeTransport([api_error(401, "Unauthorized")])
    with pytest.raises(CensysResultException):
        CensysApiCredentials("id", "wrong").test(transport)


@pytest.mark.parametrize("values", [{}, {"apiId": "id"}, {"apiSecret": "secret"}, {"apiId": "", "apiSecret": ""}])
def test_validate_rejects_incomplete_pairs(values) -> None:
    with pytest.raises(CensysConfigurationException, match="No valid credentials provided!"):
        CensysApiCredentials.from_dict(values).validate()


def test_repr_hides_the_secret() -> None:
    assert "secret" not in repr(CensysApiCredentials("id", "secret"))
