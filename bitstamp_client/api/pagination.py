"""
Transaction history pagination.

Pages through ``user_transactions`` newest first, one request at a time,
until either a page comes back short or a transaction at or before the
boundary date shows up.

The early exit relies on the exchange returning transactions in strictly
descending time order, within and across pages. Out-of-order output would
truncate the listing; this is assumed, not checked.
"""
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from bitstamp_client.exceptions import BitstampError, ClientParseError, ListingError
from bitstamp_client.models import EPOCH, parse_exchange_datetime, transaction_datetime
from bitstamp_client.utils import get_logger

logger = get_logger(__name__)

# Transactions requested per page; the exchange caps a single call at 1000
PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

PageFetcher = Callable[[int, int], Awaitable[Any]]


class TransactionPaginator:
    """
    Collects raw transactions strictly newer than a boundary date.

    Args:
        fetch_page: Coroutine function ``(offset, limit) -> page`` returning
            the decoded response of one ``user_transactions`` request
        page_size: Transactions requested per page
    """

    def __init__(self, fetch_page: PageFetcher, page_size: int = PAGE_SIZE):
        if not 0 < page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        self._fetch_page = fetch_page
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    async def collect(self, boundary: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Fetch every transaction newer than ``boundary``, newest first.

        Args:
            boundary: Exclusive lower bound; None fetches the whole history

        Returns:
            Raw transaction records in the order the exchange returned them

        Raises:
            ListingError: If any page fails; nothing is returned in that case
        """
        since = parse_exchange_datetime(boundary) if boundary is not None else EPOCH
        accumulated: List[Dict[str, Any]] = []
        offset = 0
        pages = 0

        while True:
            try:
                page = await self._fetch_page(offset, self._page_size)
                if not isinstance(page, list):
                    raise ClientParseError(
                        "Expected a list of transactions from exchange server.",
                        details={"offset": offset, "type": type(page).__name__},
                    )

                reached_boundary = False
                for tx in page:
                    if transaction_datetime(tx) <= since:
                        reached_boundary = True
                        break
                    accumulated.append(tx)
            except BitstampError as e:
                logger.error("Transaction listing failed at offset %d: %s", offset, e)
                raise ListingError(
                    "Transactions could not be listed.",
                    cause=e,
                    offset=offset,
                ) from e

            pages += 1
            logger.debug(
                "Fetched page at offset %d: %d transactions, %d accepted so far",
                offset, len(page), len(accumulated),
            )

            if reached_boundary or len(page) < self._page_size:
                break
            offset += self._page_size

        logger.info(
            "Collected %d transactions newer than %s in %d requests",
            len(accumulated), since.isoformat(), pages,
        )
        return accumulated
