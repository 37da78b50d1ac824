#!/usr/bin/env python3
"""
Review View Model Builder

Shapes a flat transaction collection into what the review screen shows:
- a single "pending" attention list, newest day first and largest
  base-currency amount first within a day
- settled transactions grouped by day, newest day first and most recently
  created first within a day

Group members (transactions with a group_id) are represented by their group
and never appear at the top level of the settled map.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..lunchmoney.models import Transaction


@dataclass(frozen=True)
class TransactionViewModel:
    """Derived, non-persisted view of one month's transactions."""

    pending: list[Transaction] = field(default_factory=list)
    settled_by_day: dict[str, list[Transaction]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.pending and not self.settled_by_day

    @property
    def days(self) -> list[str]:
        """Settled day keys in display order."""
        return list(self.settled_by_day)

    def all_transactions(self) -> list[Transaction]:
        """Every displayed transaction, pending first, in display order."""
        result = list(self.pending)
        for transactions in self.settled_by_day.values():
            result.extend(transactions)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "pending": [t.to_dict() for t in self.pending],
            "settled": [
                {"day": day, "transactions": [t.to_dict() for t in transactions]}
                for day, transactions in self.settled_by_day.items()
            ],
        }


def fingerprint(transactions: Iterable[Transaction]) -> str:
    """
    Identity of a collection for recompute purposes.

    Two collections with the same ids and statuses in the same order
    produce the same view model key.
    """
    return ",".join(f"{t.id}:{t.status.value}" for t in transactions)


def partition_transactions(
    transactions: Iterable[Transaction],
) -> tuple[list[Transaction], list[Transaction]]:
    """
    Split transactions into (pending, settled).

    Pending means awaiting settlement at the institution. Settled excludes
    group members. Input order is preserved in both lists.
    """
    pending: list[Transaction] = []
    settled: list[Transaction] = []
    for transaction in transactions:
        if transaction.is_awaiting_settlement:
            pending.append(transaction)
        elif transaction.group_id is None:
            settled.append(transaction)
    return pending, settled


def sort_pending(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Sort by day descending, then base-currency amount descending (stable)."""
    # reverse=True keeps equal keys in their original relative order
    return sorted(transactions, key=lambda t: (t.date.day_key(), t.to_base), reverse=True)


def _created_at_key(transaction: Transaction) -> tuple[bool, datetime]:
    # Transactions without a timestamp share one key, so under a descending
    # sort they land after every dated peer and keep their input order.
    if transaction.created_at is None:
        return (False, datetime.min)
    return (True, transaction.created_at)


def group_settled_by_day(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    """
    Group transactions by day, newest day first.

    Within a day, transactions are ordered by creation time, newest first.

    Returns:
        Dictionary of {YYYY-MM-DD: transactions}; insertion order is display order
    """
    groups: dict[str, list[Transaction]] = defaultdict(list)
    for transaction in transactions:
        groups[transaction.date.day_key()].append(transaction)

    result: dict[str, list[Transaction]] = {}
    for day in sorted(groups, reverse=True):
        result[day] = sorted(groups[day], key=_created_at_key, reverse=True)
    return result


def build_view_model(transactions: Iterable[Transaction]) -> TransactionViewModel:
    """
    Build the review view model.

    Pure function: the input is not modified and equal inputs give equal output.

    Args:
        transactions: Month's transactions as returned by the service

    Returns:
        TransactionViewModel with the pending list and settled-by-day map
    """
    pending, settled = partition_transactions(transactions)
    return TransactionViewModel(
        pending=sort_pending(pending),
        settled_by_day=group_settled_by_day(settled),
    )
