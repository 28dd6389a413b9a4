"""Tests for TransferServerRequestClient in isolation"""

import logging
from unittest.mock import MagicMock

import httpx
import pytest

from anchor_transfers.core.config import TransferConfig
from anchor_transfers.infrastructure.transfer_server import (
    TransferServerRequestClient,
    install_logging_bridge,
)
from anchor_transfers.infrastructure.transfer_server import requests as requests_module
from anchor_transfers.shared.exceptions import ServerDataError, TransportError
from factories import TRANSFER_SERVER, FakeTransferServer


def make_client(server: FakeTransferServer) -> TransferServerRequestClient:
    return TransferServerRequestClient(
        TRANSFER_SERVER,
        TransferConfig(user_agent="tests/1.0"),
        transport=httpx.MockTransport(server.handler),
    )


@pytest.mark.unit
def test_request_client_initialization():
    """Test successful initialization of request client"""
    request_client = TransferServerRequestClient(TRANSFER_SERVER + "/")

    assert request_client.base_url == TRANSFER_SERVER
    assert request_client._http_client is None


@pytest.mark.unit
def test_set_http_client():
    """Test setting HTTP client"""
    mock_http_client = MagicMock()

    request_client = TransferServerRequestClient(TRANSFER_SERVER)
    request_client.set_http_client(mock_http_client)

    assert request_client._http_client is mock_http_client


@pytest.mark.asyncio
async def test_get_decodes_json_and_encodes_params():
    server = FakeTransferServer()
    server.route("/transactions", {"transactions": []})
    client = make_client(server)

    body = await client.get(
        "/transactions",
        params={"asset_code": "USD", "limit": None, "show_all_transactions": True},
    )

    assert body == {"transactions": []}
    (request,) = server.requests
    assert dict(request.url.params) == {
        "asset_code": "USD",
        "show_all_transactions": "true",
    }
    assert request.headers["user-agent"] == "tests/1.0"
    assert "authorization" not in request.headers
    await client.aclose()


@pytest.mark.asyncio
async def test_get_attaches_bearer_token():
    server = FakeTransferServer()
    server.route("/transaction", {"id": "1"})
    client = make_client(server)

    await client.get("/transaction", params={"id": "1"}, auth_token="jwt")

    assert server.requests[0].headers["authorization"] == "Bearer jwt"
    await client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 403, 404, 500, 502])
async def test_non_success_status_raises_transport_error(status_code):
    server = FakeTransferServer()
    server.route("/info", {"error": "nope"}, status_code=status_code)
    client = make_client(server)

    with pytest.raises(TransportError) as exc_info:
        await client.get("/info")

    assert exc_info.value.status_code == status_code
    assert "nope" in str(exc_info.value)
    await client.aclose()


@pytest.mark.asyncio
async def test_network_error_raises_transport_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = TransferServerRequestClient(
        TRANSFER_SERVER, transport=httpx.MockTransport(refuse)
    )

    with pytest.raises(TransportError) as exc_info:
        await client.get("/info")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    await client.aclose()


@pytest.mark.asyncio
async def test_invalid_json_raises_server_data_error():
    client = TransferServerRequestClient(
        TRANSFER_SERVER,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="{")),
    )

    with pytest.raises(ServerDataError):
        await client.get("/info")
    await client.aclose()


@pytest.mark.asyncio
async def test_aclose_resets_client():
    server = FakeTransferServer()
    server.route("/info", {})
    client = make_client(server)
    await client.get("/info")

    await client.aclose()

    assert client._http_client is None


@pytest.mark.unit
def test_building_client_leaves_httpx_logging_alone():
    httpx_logger = logging.getLogger("httpx")
    propagate_before = httpx_logger.propagate
    handlers_before = list(httpx_logger.handlers)

    TransferServerRequestClient(TRANSFER_SERVER)

    assert httpx_logger.propagate == propagate_before
    assert httpx_logger.handlers == handlers_before


@pytest.mark.unit
def test_logging_bridge_is_opt_in_and_installed_once(monkeypatch):
    """Test explicit bridging of a named stdlib logger into loguru"""
    monkeypatch.setattr(requests_module, "_bridged_loggers", set())
    std_logger = logging.getLogger("anchor_transfers.tests.bridge")
    monkeypatch.setattr(std_logger, "handlers", [])
    monkeypatch.setattr(std_logger, "propagate", True)

    install_logging_bridge(("anchor_transfers.tests.bridge",))
    install_logging_bridge(("anchor_transfers.tests.bridge",))

    assert len(std_logger.handlers) == 1
    assert isinstance(std_logger.handlers[0], requests_module._LoguruHandler)
    assert std_logger.propagate is False
