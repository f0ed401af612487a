"""
Pytest configuration and shared fixtures.

This module provides common fixtures used across all test modules.
Fixtures are organized by category for easy discovery.
"""
import json
import pytest
from typing import Any, Callable, Dict, Optional
from unittest.mock import AsyncMock, MagicMock


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_ticker_data() -> Dict[str, Any]:
    """Ticker response as returned by /api/ticker/."""
    return {
        "high": "652.55",
        "last": "649.97",
        "timestamp": "1454320800",
        "bid": "649.89",
        "vwap": "647.37",
        "volume": "12.34567890",
        "low": "634.98",
        "ask": "650.12",
        "open": "640.00",
    }


@pytest.fixture
def sample_order_book_data() -> Dict[str, Any]:
    """Order book response as returned by /api/order_book/."""
    return {
        "timestamp": "1454320800",
        "bids": [
            ["450.31", "0.33445566"],
            ["450.10", "1.00000000"],
            ["449.00", "2.50000000"],
        ],
        "asks": [
            ["450.65", "0.44556677"],
            ["451.00", "0.10000000"],
        ],
    }


@pytest.fixture
def sample_balance_data() -> Dict[str, Any]:
    """Balance response as returned by /api/balance/."""
    return {
        "usd_balance": "223.45",
        "btc_balance": "1.50000000",
        "usd_reserved": "100.00",
        "btc_reserved": "1.00000000",
        "usd_available": "123.45",
        "btc_available": "0.50000000",
        "fee": "0.25",
    }


@pytest.fixture
def sample_order_status_data() -> Dict[str, Any]:
    """Finished order with two fills, as returned by /api/order_status/."""
    return {
        "status": "Finished",
        "transactions": [
            {
                "tid": 1001,
                "usd": "372.63",
                "price": "372.63",
                "fee": "0.06",
                "btc": "1.00000000",
                "datetime": "2016-02-01 10:00:00",
                "type": 2,
            },
            {
                "tid": 1002,
                "usd": "372.63",
                "price": "372.63",
                "fee": "0.05",
                "btc": "1.00000000",
                "datetime": "2016-02-01 10:05:00",
                "type": 2,
            },
        ],
    }


@pytest.fixture
def sample_placed_order_data() -> Dict[str, Any]:
    """Response of /api/sell/ for a freshly placed order."""
    return {
        "id": 123456,
        "datetime": "2016-02-01 10:00:00",
        "type": 1,
        "price": "30000",
        "amount": "0.5",
    }


@pytest.fixture
def make_transaction() -> Callable[..., Dict[str, Any]]:
    """Factory for raw user_transactions records."""

    def _make(
        tx_id: int,
        datetime: str,
        tx_type: int = 0,
        btc: str = "0.00000000",
        usd: str = "0.00",
        fee: str = "0.00",
        order_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        return {
            "id": tx_id,
            "datetime": datetime,
            "type": tx_type,
            "btc": btc,
            "usd": usd,
            "fee": fee,
            "order_id": order_id,
        }

    return _make


@pytest.fixture
def sample_deposit_data(make_transaction) -> Dict[str, Any]:
    """BTC deposit record."""
    return make_transaction(1, "2016-02-01 10:00:00", tx_type=0, btc="0.50000000")


@pytest.fixture
def sample_withdrawal_data(make_transaction) -> Dict[str, Any]:
    """USD withdrawal record."""
    return make_transaction(2, "2016-02-01 11:00:00", tx_type=1, usd="-100.25")


@pytest.fixture
def sample_market_trade_data(make_transaction) -> Dict[str, Any]:
    """Market trade record (a sell of 0.5 BTC)."""
    return make_transaction(
        3,
        "2016-02-01 12:00:00",
        tx_type=2,
        btc="-0.50000000",
        usd="186.32",
        fee="0.47",
        order_id=98765,
    )


# =============================================================================
# Response Fixtures
# =============================================================================


@pytest.fixture
def make_response() -> Callable[..., Any]:
    """Factory for successful raw transport responses."""
    from bitstamp_client.transport import RawResponse

    def _make(data: Any, status: int = 200) -> RawResponse:
        return RawResponse(status=status, body=json.dumps(data))

    return _make


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_transport():
    """Mock HTTP transport."""
    from bitstamp_client.transport import HttpTransport

    transport = MagicMock(spec=HttpTransport)
    transport.get = AsyncMock()
    transport.post = AsyncMock()
    transport.close = AsyncMock()
    return transport


@pytest.fixture
def mock_session():
    """Mock aiohttp session whose request() yields a 200 JSON response."""
    response = MagicMock()
    response.status = 200
    response.text = AsyncMock(return_value="{}")

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.request = MagicMock()
    session.request.return_value.__aenter__ = AsyncMock(return_value=response)
    session.request.return_value.__aexit__ = AsyncMock(return_value=False)
    session.response = response
    return session


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def test_bitstamp_config():
    """Test Bitstamp configuration with full credentials."""
    from bitstamp_client.config import BitstampConfig

    return BitstampConfig(
        host="https://www.bitstamp.net",
        request_timeout=5.0,
        api_key="test-key",
        api_secret="test-secret",
        client_id="123456",
    )


@pytest.fixture
def anonymous_bitstamp_config():
    """Test Bitstamp configuration without credentials."""
    from bitstamp_client.config import BitstampConfig

    return BitstampConfig(
        host="https://www.bitstamp.net",
        request_timeout=5.0,
        api_key="",
        api_secret="",
        client_id="",
    )


@pytest.fixture
def client(test_bitstamp_config, mock_transport):
    """Client wired to the mock transport."""
    from bitstamp_client.api import BitstampClient

    return BitstampClient(config=test_bitstamp_config, transport=mock_transport)


# =============================================================================
# Parametrized Data Fixtures
# =============================================================================


@pytest.fixture(params=[("ETH", "USD"), ("BTC", "EUR"), ("LTC", "BTC"), ("USD", "BTC")])
def unsupported_pair(request):
    """Currency pairs the client must reject."""
    return request.param


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Reset the cached configuration between tests."""
    yield

    from bitstamp_client.config import get_config
    get_config.cache_clear()
