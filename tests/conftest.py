"""
Pytest configuration and shared fixtures for MDB_DATA_API tests.

This module provides:
- A recording mock transport for httpx
- Client factories for both configuration shapes
- Metrics isolation between tests
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from mdb_data_api import MongoDBDataAPI
from mdb_data_api.observability import get_metrics_collector

TEST_API_KEY = "test-api-key-0123456789abcdef"
TEST_URL_ENDPOINT = "https://data.mongodb-api.com/app/data-test/endpoint/data/beta"
TEST_APP_ID = "data-test"


# ============================================================================
# MOCK TRANSPORT
# ============================================================================


class RequestRecorder:
    """
    httpx.MockTransport handler that records every request.

    Returns `json_body` with `status_code`, or raises `error` (built from
    the request when it is a callable).
    """

    def __init__(
        self,
        json_body: Any = None,
        status_code: int = 200,
        error: Optional[Callable[[httpx.Request], Exception]] = None,
    ) -> None:
        self.json_body = {} if json_body is None else json_body
        self.status_code = status_code
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.last_request.content)


@pytest.fixture
def api_key() -> str:
    """The API key used by every test client."""
    return TEST_API_KEY


@pytest.fixture
def recorder_factory() -> Callable[..., RequestRecorder]:
    """Build recorders with a custom response or error."""
    return RequestRecorder


@pytest.fixture
def recorder() -> RequestRecorder:
    """Recorder answering 200 with an empty JSON object."""
    return RequestRecorder()


@pytest.fixture
def make_client(recorder) -> Callable[..., MongoDBDataAPI]:
    """
    Factory for root clients wired to a mock transport.

    Defaults to the direct-endpoint configuration; pass `app_id=...` (and
    `url_endpoint=None`) for the app-ID shape.
    """

    def _make(handler: Optional[RequestRecorder] = None, **config: Any) -> MongoDBDataAPI:
        values: Dict[str, Any] = {"api_key": TEST_API_KEY, "url_endpoint": TEST_URL_ENDPOINT}
        values.update(config)
        values = {k: v for k, v in values.items() if v is not None}
        transport = httpx.MockTransport(handler or recorder)
        return MongoDBDataAPI(http_client=httpx.AsyncClient(transport=transport), **values)

    return _make


@pytest.fixture
def api(make_client) -> MongoDBDataAPI:
    """Unscoped root client."""
    return make_client()


@pytest.fixture
def users(api):
    """Client scoped to Cluster0/app/users."""
    return api.cluster("Cluster0").database("app").collection("users")


# ============================================================================
# METRICS ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def reset_metrics():
    """Clear the global metrics collector around each test."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()
