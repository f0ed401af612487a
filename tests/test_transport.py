"""
Tests for the aiohttp HTTP transport.

The aiohttp session is mocked; no network access is needed.
"""
import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp

from bitstamp_client.exceptions import ValidationError
from bitstamp_client.transport import HttpMethod, HttpTransport, RequestOptions


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def transport(test_bitstamp_config, mock_session):
    """Transport over the mock session."""
    return HttpTransport(test_bitstamp_config, session=mock_session)


# =============================================================================
# Request Building Tests
# =============================================================================


class TestBuildOptions:
    """Tests for HttpTransport.build_options."""

    def test_get_options(self, transport, test_bitstamp_config):
        """Test GET carries user agent and no form or content type."""
        options = transport.build_options("ticker", HttpMethod.GET, {"ignored": "1"})

        assert options.url == "https://www.bitstamp.net/api/ticker/"
        assert options.method == HttpMethod.GET
        assert options.timeout == 5.0
        assert options.form is None
        assert options.headers == {"User-Agent": test_bitstamp_config.user_agent}

    def test_post_options(self, transport):
        """Test POST carries form and JSON content type."""
        options = transport.build_options("balance", HttpMethod.POST, {"key": "k"})

        assert options.url == "https://www.bitstamp.net/api/balance/"
        assert options.form == {"key": "k"}
        assert options.headers["Content-Type"] == "application/json"
        assert "User-Agent" in options.headers


# =============================================================================
# Request Tests
# =============================================================================


class TestRequest:
    """Tests for HttpTransport.request."""

    @pytest.mark.asyncio
    async def test_get(self, transport, mock_session, test_bitstamp_config):
        """Test GET sends one request and returns status and body."""
        mock_session.response.text.return_value = '{"bid": "1"}'

        response = await transport.get("ticker")

        assert response.status == 200
        assert response.body == '{"bid": "1"}'
        assert response.error is None
        assert response.ok
        mock_session.request.assert_called_once_with(
            "GET",
            "https://www.bitstamp.net/api/ticker/",
            headers={"User-Agent": test_bitstamp_config.user_agent},
            timeout=aiohttp.ClientTimeout(total=5.0),
        )

    @pytest.mark.asyncio
    async def test_post_sends_form(self, transport, mock_session):
        """Test POST sends the form as request data."""
        await transport.post("balance", {"key": "k", "nonce": "1"})

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "https://www.bitstamp.net/api/balance/")
        assert kwargs["data"] == {"key": "k", "nonce": "1"}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned(self, transport, mock_session):
        """Test error statuses are returned, not raised."""
        mock_session.response.status = 500
        mock_session.response.text.return_value = "Internal Server Error"

        response = await transport.get("ticker")

        assert response.status == 500
        assert response.body == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_connection_error_returned(self, transport, mock_session):
        """Test connection failures are captured on the response."""
        error = aiohttp.ClientConnectionError("connection refused")
        mock_session.request.side_effect = error

        response = await transport.get("ticker")

        assert response.error is error
        assert response.status is None
        assert not response.ok

    @pytest.mark.asyncio
    async def test_timeout_returned(self, transport, mock_session):
        """Test timeouts are captured on the response."""
        mock_session.request.return_value.__aenter__.side_effect = asyncio.TimeoutError()

        response = await transport.get("ticker")

        assert isinstance(response.error, asyncio.TimeoutError)

    @pytest.mark.asyncio
    async def test_invalid_method(self, transport, mock_session):
        """Test methods other than GET and POST are rejected without a request."""
        options = RequestOptions(url="https://www.bitstamp.net/api/ticker/", method="PUT", timeout=1.0)

        with pytest.raises(ValidationError) as exc_info:
            await transport.request(options)

        assert exc_info.value.message == "The request must be either POST or GET."
        mock_session.request.assert_not_called()


# =============================================================================
# Session Lifecycle Tests
# =============================================================================


class TestSessionLifecycle:
    """Tests for session ownership."""

    @pytest.mark.asyncio
    async def test_owned_session_closed(self, test_bitstamp_config):
        """Test a lazily created session is closed on exit."""
        session = MagicMock()
        session.closed = False
        session.close = AsyncMock()

        with patch("bitstamp_client.transport.http.aiohttp.ClientSession", return_value=session):
            async with HttpTransport(test_bitstamp_config):
                pass

        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shared_session_not_closed(self, transport, mock_session):
        """Test a caller-provided session is left open."""
        await transport.close()

        mock_session.close.assert_not_awaited()
