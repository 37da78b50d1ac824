#!/usr/bin/env python3
"""
Review Session

Ties together the month selection, the transaction store, the view model
builder, and the mutation controller for one review screen.

Selecting a month starts a fetch; only the most recently requested fetch
may replace the store, so a slow response for a previously selected month
never overwrites a newer one. A failed fetch leaves the store untouched.
"""

import logging
from collections.abc import Callable

from ..core.dates import MonthRange
from ..lunchmoney.client import TransactionFilters
from ..lunchmoney.source import TransactionSource
from .mutation import ConfirmResult, ErrorCallback, OptimisticMutationController
from .store import TransactionStore
from .view_model import TransactionViewModel, build_view_model, fingerprint

logger = logging.getLogger(__name__)

GENERIC_LOAD_FAILURE_MESSAGE = "Failed to load transactions"


class ReviewSession:
    """State for reviewing one month of transactions at a time."""

    def __init__(
        self,
        source: TransactionSource,
        store: TransactionStore | None = None,
        on_error: ErrorCallback | None = None,
        on_load_error: Callable[[str], None] | None = None,
    ):
        """
        Initialize the session.

        Args:
            source: Remote transaction service
            store: Collection owner (default: a new empty store)
            on_error: Called with a message when a confirm is reverted
            on_load_error: Called with a message when a fetch fails
        """
        self.source = source
        self.store = store if store is not None else TransactionStore()
        self.controller = OptimisticMutationController(self.store, source, on_error=on_error)
        self.on_load_error = on_load_error

        self._active_month: MonthRange | None = None
        self._request_id = 0
        self._loading = False
        self._load_error: str | None = None
        self._view_model: TransactionViewModel | None = None
        self._view_model_key: tuple[int, str] | None = None

    @property
    def active_month(self) -> MonthRange | None:
        return self._active_month

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def load_error(self) -> str | None:
        """Message of the latest failed fetch, cleared by a successful one."""
        return self._load_error

    async def select_month(self, month_range: MonthRange, filters: TransactionFilters | None = None) -> bool:
        """
        Make month_range active and fetch its transactions.

        Args:
            month_range: Month to review
            filters: Optional query filters

        Returns:
            True if the fetch result was applied to the store; False if it
            failed or was superseded by a later selection
        """
        self._request_id += 1
        request_id = self._request_id
        self._active_month = month_range
        self._loading = True

        try:
            transactions = await self.source.list_transactions(month_range, filters)
        except Exception as e:
            if request_id != self._request_id:
                logger.debug(f"Ignoring failed fetch for superseded month {month_range.key}")
                return False
            self._loading = False
            self._load_error = str(e) or GENERIC_LOAD_FAILURE_MESSAGE
            logger.error(f"Failed to load transactions for {month_range.key}: {self._load_error}")
            if self.on_load_error is not None:
                self.on_load_error(self._load_error)
            return False

        if request_id != self._request_id:
            logger.debug(f"Discarding stale transactions for {month_range.key}")
            return False

        self.store.replace(transactions)
        self._loading = False
        self._load_error = None
        logger.info(f"Loaded {len(transactions)} transactions for {month_range.key}")
        return True

    async def refresh(self, filters: TransactionFilters | None = None) -> bool:
        """Refetch the active month."""
        if self._active_month is None:
            raise RuntimeError("No month selected")
        return await self.select_month(self._active_month, filters)

    def view_model(self) -> TransactionViewModel:
        """
        Current view model.

        Rebuilt after every fetch, and otherwise only when the ids or
        statuses of the collection change.
        """
        transactions = self.store.transactions
        key = (self.store.generation, fingerprint(transactions))
        if self._view_model is None or key != self._view_model_key:
            self._view_model = build_view_model(transactions)
            self._view_model_key = key
        return self._view_model

    async def confirm(self, transaction_id: int) -> ConfirmResult:
        """Confirm a transaction through the optimistic mutation controller."""
        return await self.controller.confirm(transaction_id)
