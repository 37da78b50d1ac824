#!/usr/bin/env python3
"""
Transaction Store

In-memory owner of the active month's transaction collection. The only
writers are a full refetch (`replace`) and the optimistic mutation
controller (`apply_patch` / `revert`). Every write emits exactly one
StoreEvent to subscribers.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from ..lunchmoney.models import Transaction, TransactionUpdate

logger = logging.getLogger(__name__)


class StoreEventType(Enum):
    """Kinds of collection changes."""

    REPLACE = "replace"
    PATCH = "patch"
    REVERT = "revert"


@dataclass(frozen=True)
class StoreEvent:
    """Notification of a collection change."""

    type: StoreEventType
    generation: int
    transaction_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class StoreSnapshot:
    """
    Saved state of some or all store entries.

    A snapshot belongs to the generation it was taken in; once the
    collection is replaced by a newer fetch it can no longer be reverted to.
    """

    generation: int
    entries: tuple[Transaction, ...]
    complete: bool


StoreListener = Callable[[StoreEvent], None]


class StoreError(LookupError):
    """Raised when a store operation targets an unknown transaction"""

    pass


class TransactionStore:
    """State container for the active month's transactions."""

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: list[Transaction] = list(transactions)
        self._index = self._build_index(self._transactions)
        self._generation = 0
        self._listeners: list[StoreListener] = []

    @staticmethod
    def _build_index(transactions: list[Transaction]) -> dict[int, int]:
        return {transaction.id: position for position, transaction in enumerate(transactions)}

    @property
    def generation(self) -> int:
        """Incremented each time the collection is replaced wholesale."""
        return self._generation

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Current collection, in service order."""
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._index

    def get(self, transaction_id: int) -> Transaction | None:
        position = self._index.get(transaction_id)
        if position is None:
            return None
        return self._transactions[position]

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, transactions: Iterable[Transaction]) -> None:
        """Replace the whole collection with a fresh fetch result."""
        self._transactions = list(transactions)
        self._index = self._build_index(self._transactions)
        self._generation += 1
        self._emit(StoreEventType.REPLACE, ())

    def snapshot(self, transaction_id: int | None = None) -> StoreSnapshot:
        """
        Capture current state.

        Args:
            transaction_id: Capture only this entry (default: the whole collection)

        Raises:
            StoreError: If transaction_id is not in the store
        """
        if transaction_id is None:
            return StoreSnapshot(self._generation, tuple(self._transactions), complete=True)

        transaction = self.get(transaction_id)
        if transaction is None:
            raise StoreError(f"Transaction {transaction_id} is not loaded")
        return StoreSnapshot(self._generation, (transaction,), complete=False)

    def apply_patch(self, transaction_id: int, update: TransactionUpdate) -> Transaction:
        """
        Apply a sparse update to one entry.

        Returns:
            The patched transaction

        Raises:
            StoreError: If transaction_id is not in the store
        """
        position = self._index.get(transaction_id)
        if position is None:
            raise StoreError(f"Transaction {transaction_id} is not loaded")

        patched = update.apply_to(self._transactions[position])
        self._transactions[position] = patched
        self._emit(StoreEventType.PATCH, (transaction_id,))
        return patched

    def revert(self, snapshot: StoreSnapshot) -> bool:
        """
        Restore the entries captured in snapshot.

        A partial snapshot restores only its own entries, leaving concurrent
        changes to other transactions in place.

        Returns:
            True if the store was changed, False if the snapshot is stale
        """
        if snapshot.generation != self._generation:
            logger.debug(
                f"Ignoring revert to generation {snapshot.generation}; store is at {self._generation}"
            )
            return False

        if snapshot.complete:
            self._transactions = list(snapshot.entries)
            self._index = self._build_index(self._transactions)
            restored = tuple(t.id for t in snapshot.entries)
        else:
            restored_ids: list[int] = []
            for transaction in snapshot.entries:
                position = self._index.get(transaction.id)
                if position is not None:
                    self._transactions[position] = transaction
                    restored_ids.append(transaction.id)
            restored = tuple(restored_ids)

        self._emit(StoreEventType.REVERT, restored)
        return True

    def _emit(self, event_type: StoreEventType, transaction_ids: tuple[int, ...]) -> None:
        event = StoreEvent(type=event_type, generation=self._generation, transaction_ids=transaction_ids)
        for listener in list(self._listeners):
            listener(event)
