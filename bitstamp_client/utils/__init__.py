"""
Utility functions and classes for the Bitstamp client.
"""
from .currency import Currency
from .logging import setup_logger, get_logger
from .signing import Signer, compute_signature

__all__ = [
    "Currency",
    "setup_logger",
    "get_logger",
    "Signer",
    "compute_signature",
]
