#!/usr/bin/env python3
"""
TransactionSource Protocol - asynchronous access to remote transactions.

The review session and mutation controller only depend on this protocol,
so they can be driven by the real API client or by an in-memory fake.
"""

import asyncio
from typing import Protocol

from ..core.dates import MonthRange
from .client import LunchMoneyClient, TransactionFilters
from .models import Transaction, TransactionUpdate, TransactionUpdateResponse


class TransactionSource(Protocol):
    """
    Protocol for the remote transaction service.

    Both operations suspend the caller without blocking the event loop and
    may raise an exception carrying a human-readable message.
    """

    async def list_transactions(
        self, month_range: MonthRange, filters: TransactionFilters | None = None
    ) -> list[Transaction]:
        """
        Fetch the transactions dated within month_range.

        Returns:
            Transactions in the order the service returned them
        """
        ...

    async def update_transaction(
        self, transaction_id: int, update: TransactionUpdate
    ) -> TransactionUpdateResponse:
        """
        Apply a sparse update server-side.

        Returns:
            Server reply describing whether the update was applied
        """
        ...


class LunchMoneyTransactionSource:
    """TransactionSource backed by LunchMoneyClient, run in worker threads."""

    def __init__(self, client: LunchMoneyClient):
        self.client = client

    async def list_transactions(
        self, month_range: MonthRange, filters: TransactionFilters | None = None
    ) -> list[Transaction]:
        return await asyncio.to_thread(self.client.get_transactions, month_range.start, month_range.end, filters)

    async def update_transaction(
        self, transaction_id: int, update: TransactionUpdate
    ) -> TransactionUpdateResponse:
        return await asyncio.to_thread(self.client.update_transaction, transaction_id, update)
