"""Pytest fixtures for anchor-transfers tests"""

import copy
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest

# =============================================================================
# Global Test Setup
# =============================================================================

# Add src to Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from anchor_transfers.core.config import TransferConfig  # noqa: E402
from anchor_transfers.infrastructure.transfer_server import (  # noqa: E402
    TransferServerRequestClient,
)
from anchor_transfers.transfers import TransferProvider  # noqa: E402
from factories import (  # noqa: E402
    ACCOUNT,
    RAW_INFO,
    TRANSFER_SERVER,
    FakeTransferServer,
)


@pytest.fixture
def raw_info() -> dict[str, Any]:
    """Fresh copy of the sample /info response"""
    return copy.deepcopy(RAW_INFO)


@pytest.fixture
def fake_server(raw_info) -> FakeTransferServer:
    """Fake transfer server with /info already routed"""
    server = FakeTransferServer()
    server.route("/info", raw_info)
    return server


@pytest.fixture
def make_provider(fake_server):
    """Factory for providers talking to the fake transfer server"""

    def _make(direction: str = "deposit", **kwargs: Any) -> TransferProvider:
        config = TransferConfig(watch_poll_interval_seconds=0)
        request_client = TransferServerRequestClient(
            TRANSFER_SERVER,
            config,
            transport=httpx.MockTransport(fake_server.handler),
        )
        return TransferProvider(
            TRANSFER_SERVER,
            ACCOUNT,
            direction,
            config=config,
            request_client=request_client,
            **kwargs,
        )

    return _make
