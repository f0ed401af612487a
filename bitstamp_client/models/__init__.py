"""
Data models for Bitstamp market and account data.

This module provides strongly-typed dataclasses for parsing
and serializing REST API responses from Bitstamp.
"""
from .balance import Balance
from .base import EPOCH, BaseRecord, parse_exchange_datetime, to_iso8601
from .enums import (
    OrderSide,
    TradeState,
    TradeType,
    TransactionKind,
    TransactionState,
    TransactionType,
)
from .orderbook import OrderBook, OrderBookEntry
from .ticker import Ticker
from .trade import NormalizedTrade
from .transaction import NormalizedTransaction, transaction_datetime

__all__ = [
    # Base classes and helpers
    "BaseRecord",
    "EPOCH",
    "parse_exchange_datetime",
    "to_iso8601",
    "transaction_datetime",
    # Enums
    "OrderSide",
    "TradeState",
    "TradeType",
    "TransactionKind",
    "TransactionState",
    "TransactionType",
    # Records
    "Balance",
    "NormalizedTrade",
    "NormalizedTransaction",
    "OrderBook",
    "OrderBookEntry",
    "Ticker",
]
