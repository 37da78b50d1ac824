#!/usr/bin/env python3
"""
Optimistic Mutation Controller

Confirms ("clears") a transaction with immediate local feedback:

1. the store entry is patched to `cleared` before the remote call is made,
   so the next view model recompute already shows it
2. the remote update is issued
3. on success the optimistic state is kept as is; on failure the entry is
   restored to its exact previous value and the error is reported once

Nothing is retried. At most one confirm per transaction id can be in
flight; confirms for different ids run independently.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..lunchmoney.models import TransactionStatus, TransactionUpdate
from ..lunchmoney.source import TransactionSource
from .display import can_confirm
from .store import TransactionStore

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to validate transaction"

ErrorCallback = Callable[[str], None]


class MutationState(Enum):
    """Terminal states of a confirm invocation."""

    COMMITTED = "committed"
    REVERTED = "reverted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ConfirmResult:
    """Outcome of a confirm invocation."""

    transaction_id: int
    state: MutationState
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state == MutationState.COMMITTED


class OptimisticMutationController:
    """
    Runs the optimistic confirm protocol against a store and a source.

    The controller is the only component besides a full refetch that writes
    to the store.
    """

    def __init__(
        self,
        store: TransactionStore,
        source: TransactionSource,
        on_error: ErrorCallback | None = None,
    ):
        """
        Initialize the controller.

        Args:
            store: Collection being reviewed
            source: Remote transaction service
            on_error: Called once with a message for every reverted confirm
        """
        self.store = store
        self.source = source
        self.on_error = on_error
        self._in_flight: set[int] = set()

    def is_in_flight(self, transaction_id: int) -> bool:
        return transaction_id in self._in_flight

    async def confirm(self, transaction_id: int) -> ConfirmResult:
        """
        Mark a transaction as cleared.

        Args:
            transaction_id: Transaction to confirm

        Returns:
            ConfirmResult; REJECTED means no local or remote change was made
        """
        transaction = self.store.get(transaction_id)
        if transaction is None:
            return self._reject(transaction_id, f"Transaction {transaction_id} is not loaded")
        if transaction_id in self._in_flight:
            return self._reject(transaction_id, f"Transaction {transaction_id} is already being validated")
        if not can_confirm(transaction):
            if transaction.status == TransactionStatus.CLEARED:
                return self._reject(transaction_id, f"Transaction {transaction_id} is already cleared")
            return self._reject(transaction_id, f"Transaction {transaction_id} is still pending")

        self._in_flight.add(transaction_id)
        try:
            update = TransactionUpdate(status=TransactionStatus.CLEARED)
            snapshot = self.store.snapshot(transaction_id)
            self.store.apply_patch(transaction_id, update)
            logger.debug(f"Optimistically cleared transaction {transaction_id}")

            try:
                response = await self.source.update_transaction(transaction_id, update)
                if not response.updated:
                    raise RuntimeError(f"Lunch Money did not update transaction {transaction_id}")
            except asyncio.CancelledError:
                self.store.revert(snapshot)
                raise
            except Exception as e:
                self.store.revert(snapshot)
                message = str(e) or GENERIC_FAILURE_MESSAGE
                logger.warning(f"Reverted transaction {transaction_id}: {message}")
                if self.on_error is not None:
                    self.on_error(message)
                return ConfirmResult(transaction_id, MutationState.REVERTED, error=message)

            logger.info(f"Validated transaction {transaction_id}")
            return ConfirmResult(transaction_id, MutationState.COMMITTED)
        finally:
            self._in_flight.discard(transaction_id)

    def _reject(self, transaction_id: int, reason: str) -> ConfirmResult:
        logger.info(f"Confirm rejected: {reason}")
        return ConfirmResult(transaction_id, MutationState.REJECTED, error=reason)
