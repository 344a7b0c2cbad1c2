"""
pytest configuration for the OAuth 2.0 client tests.

Adds the project root to the Python path and provides a scripted transport
so no test touches the network.
"""

import sys
import threading
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from oauth20 import (  # noqa: E402
    ClientConfig,
    OAuth20Service,
    OAuth2Api,
    Response,
    Transport,
)

TOKEN_BODY = (
    '{"access_token": "at-123", "token_type": "Bearer", "expires_in": 3600, '
    '"refresh_token": "rt-456", "scope": "read"}'
)


class FakeTransport(Transport):
    """Transport returning a fixed response (or raising) and recording requests."""

    def __init__(self, response: Response = None, error: Exception = None):
        self.response = response or Response(code=200, body=TOKEN_BODY)
        self.error = error
        self.requests = []
        self.threads = []
        self.closed = False

    def execute(self, request):
        self.requests.append(request)
        self.threads.append(threading.current_thread())
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True

    @property
    def last_request(self):
        return self.requests[-1]


@pytest.fixture
def api():
    return OAuth2Api(
        access_token_endpoint="https://provider.example/oauth/token",
        authorization_base_url="https://provider.example/oauth/authorize",
        revoke_token_endpoint="https://provider.example/oauth/revoke",
    )


@pytest.fixture
def client_config():
    return ClientConfig(
        api_key="client-1",
        api_secret="secret-1",
        callback="https://app.example/cb",
        default_scope="read write",
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def service(api, client_config, transport):
    service = OAuth20Service(api, client_config, transport=transport)
    yield service
    service.close()


@pytest.fixture
def make_service(api, client_config):
    """Factory for a service whose transport returns the given response or raises."""
    created = []

    def _make(response=None, error=None, **kwargs):
        fake = FakeTransport(response=response, error=error)
        svc = OAuth20Service(kwargs.pop("api", api), kwargs.pop("config", client_config), transport=fake, **kwargs)
        created.append(svc)
        return svc, fake

    yield _make
    for svc in created:
        svc.close()
