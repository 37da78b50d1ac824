"""
Lunch Money Integration Package

Access to the Lunch Money v1 API for the review workflow.

This package provides:
- Domain models for transactions, tags, and sparse transaction updates
- A requests-based API client with explicit construction from config
- An asyncio TransactionSource adapter used by the review session

Key Components:
- models: Transaction, TransactionStatus, TransactionUpdate
- client: LunchMoneyClient (GET/PUT /v1/transactions)
- source: TransactionSource protocol and LunchMoneyTransactionSource
"""

from .client import LunchMoneyAPIError, LunchMoneyClient, TransactionFilters
from .models import (
    LunchMoneyError,
    MalformedTransactionError,
    RecurringType,
    Tag,
    Transaction,
    TransactionSplit,
    TransactionStatus,
    TransactionUpdate,
    TransactionUpdateResponse,
    parse_transactions,
)
from .source import LunchMoneyTransactionSource, TransactionSource

__all__ = [
    # Domain models
    "RecurringType",
    "Tag",
    "Transaction",
    "TransactionSplit",
    "TransactionStatus",
    "TransactionUpdate",
    "TransactionUpdateResponse",
    "parse_transactions",
    # Errors
    "LunchMoneyError",
    "LunchMoneyAPIError",
    "MalformedTransactionError",
    # API access
    "LunchMoneyClient",
    "LunchMoneyTransactionSource",
    "TransactionFilters",
    "TransactionSource",
]
