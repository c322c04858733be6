import httpx
import pytest

from ghost_mcp.dispatcher import GhostDispatcher
from ghost_mcp.signer import CredentialSigner
from ghost_stub import create_stub_app

KEY_ID = "6489e8a8c1f3a20001c6a9b2"
KEY_SECRET = "8f3c2a61b0d94e7fa5c1e2d3b4a5968778695a4b3c2d1e0f9a8b7c6d5e4f3a2b"
ADMIN_API_KEY = f"{KEY_ID}:{KEY_SECRET}"
BASE_URL = "http://ghost.test"
FIXED_NOW = 1_700_000_000


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, status_code=200, json=None, content=None, headers=None, exc=None):
        self.requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content, headers=headers)
            return httpx.Response(status_code, json=json, headers=headers)

        super().__init__(handler)


@pytest.fixture
def fixed_signer():
    return CredentialSigner.from_key(ADMIN_API_KEY, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_dispatcher(fixed_signer):
    def _make(transport, **kwargs):
        return GhostDispatcher(BASE_URL, fixed_signer, transport=transport, **kwargs)

    return _make


@pytest.fixture
def stub_app():
    return create_stub_app(KEY_ID, KEY_SECRET)


@pytest.fixture
def stub_dispatcher(stub_app):
    signer = CredentialSigner.from_key(ADMIN_API_KEY)
    return GhostDispatcher(BASE_URL, signer, transport=httpx.ASGITransport(app=stub_app))
