"""
HTTP transport for the Bitstamp REST API.

Performs exactly one request per call and never retries. Failures at the
network level are returned on the response rather than raised, so that
the response interpreter decides how every outcome is surfaced.
"""
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import aiohttp

from bitstamp_client.config import BitstampConfig, get_config
from bitstamp_client.exceptions import ValidationError
from bitstamp_client.utils import get_logger

logger = get_logger(__name__)


class HttpMethod(str, Enum):
    """Supported HTTP methods."""

    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class RequestOptions:
    """Immutable description of a single API request."""
    url: str
    method: HttpMethod
    timeout: float
    form: Optional[Mapping[str, str]] = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """
    Raw transport outcome.

    Either ``error`` is set (the request did not complete) or ``status``
    and ``body`` hold what the server sent.
    """
    status: Optional[int] = None
    body: str = ""
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.body)


class HttpTransport:
    """
    aiohttp based transport.

    Owns one ``aiohttp.ClientSession``, created lazily on first use or on
    ``__aenter__`` and closed by ``close()`` / ``__aexit__``.
    """

    def __init__(
        self,
        config: Optional[BitstampConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self._config = config or get_config().bitstamp
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "HttpTransport":
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the owned session."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    def build_options(
        self,
        action: str,
        method: HttpMethod,
        form: Optional[Mapping[str, str]] = None,
    ) -> RequestOptions:
        """
        Build request options for an API action.

        Every request carries the configured timeout and User-Agent; POST
        requests also carry a JSON content-type header.
        """
        headers: Dict[str, str] = {"User-Agent": self._config.user_agent}
        if method == HttpMethod.POST:
            headers["Content-Type"] = "application/json"
        return RequestOptions(
            url=self._config.api_url(action),
            method=method,
            timeout=self._config.request_timeout,
            form=form if method == HttpMethod.POST else None,
            headers=headers,
        )

    async def request(self, options: RequestOptions) -> RawResponse:
        """
        Perform one HTTP request.

        Raises:
            ValidationError: If the method is neither GET nor POST
        """
        try:
            method = HttpMethod(options.method)
        except ValueError:
            raise ValidationError(
                "The request must be either POST or GET.",
                field="method",
                value=options.method,
            ) from None

        session = self._ensure_session()
        kwargs: Dict[str, Any] = {
            "headers": dict(options.headers),
            "timeout": aiohttp.ClientTimeout(total=options.timeout),
        }
        if options.form is not None:
            kwargs["data"] = dict(options.form)

        logger.debug("%s %s", method.value, options.url)
        try:
            async with session.request(method.value, options.url, **kwargs) as response:
                body = await response.text()
                return RawResponse(status=response.status, body=body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Request to %s failed: %s", options.url, e)
            return RawResponse(error=e)

    async def get(self, action: str) -> RawResponse:
        """GET an unauthenticated API action."""
        return await self.request(self.build_options(action, HttpMethod.GET))

    async def post(self, action: str, form: Mapping[str, str]) -> RawResponse:
        """POST a signed form to an API action."""
        return await self.request(self.build_options(action, HttpMethod.POST, form))
