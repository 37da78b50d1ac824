"""
Review Package

Monthly transaction review: shaping the fetched transactions into the
pending list and the settled-by-day map, and confirming transactions with
optimistic updates.

Key Components:
- view_model: build_view_model, the pure data-shaping pipeline
- display: classification of transactions into display categories
- store: TransactionStore, the single owner of the fetched collection
- mutation: OptimisticMutationController for the confirm action
- session: ReviewSession tying month selection, store, and controller together
"""

from .display import (
    DisplayCategory,
    can_confirm,
    classify,
    classify_transaction,
    display_payee,
    matches_search,
    payee_url,
    search_keywords,
)
from .mutation import ConfirmResult, MutationState, OptimisticMutationController
from .session import ReviewSession
from .store import StoreError, StoreEvent, StoreEventType, StoreSnapshot, TransactionStore
from .view_model import (
    TransactionViewModel,
    build_view_model,
    fingerprint,
    group_settled_by_day,
    partition_transactions,
    sort_pending,
)

__all__ = [
    # View model
    "TransactionViewModel",
    "build_view_model",
    "fingerprint",
    "group_settled_by_day",
    "partition_transactions",
    "sort_pending",
    # Display
    "DisplayCategory",
    "can_confirm",
    "classify",
    "classify_transaction",
    "display_payee",
    "matches_search",
    "payee_url",
    "search_keywords",
    # State and mutation
    "ConfirmResult",
    "MutationState",
    "OptimisticMutationController",
    "ReviewSession",
    "StoreError",
    "StoreEvent",
    "StoreEventType",
    "StoreSnapshot",
    "TransactionStore",
]
