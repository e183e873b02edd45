"""
Pytest fixtures for API relay tests
"""

from typing import Callable, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from api_relay.config import Settings
from api_relay.main import create_app


class UpstreamRecorder:
    """Stands in for Google / PayDunya: records outbound requests, replays a canned answer"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.response = httpx.Response(200, json={"status": "OK"})
        self.error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"
        return self.requests[-1]


def make_settings(**overrides) -> Settings:
    """Settings isolated from any .env file in the working directory"""
    values = {
        "agora_app_id": "970CA35de60c44645bbae8a215061b33",
        "agora_app_cert": "5CFd2fd1755d40ecb72977518be15d3b",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> UpstreamRecorder:
    return UpstreamRecorder()


@pytest.fixture
def app(settings, upstream):
    return create_app(settings, transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def client(app):
    """Test client with the lifespan (and upstream HTTP client) running"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_factory(upstream) -> Callable[..., TestClient]:
    """Build clients for non-default settings; closed at teardown"""
    opened = []

    def factory(**overrides) -> TestClient:
        app = create_app(make_settings(**overrides), transport=httpx.MockTransport(upstream.handler))
        test_client = TestClient(app)
        test_client.__enter__()
        opened.append(test_client)
        return test_client

    yield factory

    for test_client in opened:
        test_client.__exit__(None, None, None)
