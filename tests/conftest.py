from __future__ import annotations

from typing import Any

import pytest

from censys_node.core import CensysResultException, ErrorResult


class FakeTransport:
    """Records every request and answers from a queue of responses (or exceptions)."""

    def __init__(self, responses: list[Any] | None = None):
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def request(self, method, path, params=None, data=None, timeout=None):
        self.calls.append({"method": method, "path": path, "params": params, "data": data, "timeout": timeout})
        response = self.responses.pop(0) if self.responses else {}
        if isinstance(response, Exception):
            raise response
        return response


def api_error(code: int = 404, message: str = "Not found") -> CensysResultException:
    return CensysResultException(ErrorResult(code, {"code": code, "status": "Error", "error": message}))


@pytest.fixture
def credentials() -> dict[str, str]:
    return {"apiId": "test-id", "apiSecret": "test-secret"}


@pytest.fixture(autouse=True)
def _no_env_credentials(monkeypatch) -> None:
    monkeypatch.delenv("CENSYS_API_ID", raising=False)
    monkeypatch.delenv("CENSYS_API_SECRET", raising=False)
