"""
Public API client for Bitstamp.
"""
from .client import BitstampClient
from .pagination import MAX_PAGE_SIZE, PAGE_SIZE, TransactionPaginator

__all__ = [
    "BitstampClient",
    "TransactionPaginator",
    "PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
