import pytest
import httpx
from unittest.mock import patch

from webclient import ClientOptions, WebClient

def _respond(body: bytes = b"", status: int = 200, headers=None):
    def _factory(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=body, headers=headers)
    return _factory

@pytest.fixture
def respond():
    """Builds response factories for stub transports."""
    return _respond

@pytest.fixture
def stub_transport():
    """
    Returns a factory for MockTransports that play back a script of outcomes.
    Each outcome is either an exception to raise or a callable building a response.
    The last outcome repeats once the script runs out. Requests are recorded on `.calls`.
    """
    def _make(*outcomes):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            outcome = outcomes[min(len(calls), len(outcomes)) - 1]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome(request)

        transport = httpx.MockTransport(handler)
        transport.calls = calls
        return transport
    return _make

@pytest.fixture
def make_client():
    clients = []

    def _make(transport, **options):
        client = WebClient(ClientOptions(**options) if options else None, transport=transport)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()

@pytest.fixture
def mock_sleep():
    """
    Patches time.sleep (used by tenacity between retries) so tests run instantly.
    """
    with patch("time.sleep", return_value=None) as mock:
        yield mock
