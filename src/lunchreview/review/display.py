#!/usr/bin/env python3
"""
Transaction Display Classification

Maps a transaction's status, recurring state, and pending flag to a small
closed set of display categories, independent of how they are rendered.
"""

from enum import Enum
from urllib.parse import quote

from ..lunchmoney.models import RecurringType, Transaction, TransactionStatus

LUNCHMONEY_WEB_URL = "https://my.lunchmoney.app"


class DisplayCategory(Enum):
    """Visual treatment of a transaction in the review list."""

    CLEARED = "cleared"
    RECURRING_CLEARED = "recurring_cleared"
    UNCLEARED = "uncleared"
    PENDING = "pending"
    OTHER = "other"


# Short markers for terminal output
CATEGORY_MARKERS = {
    DisplayCategory.CLEARED: "✓",
    DisplayCategory.RECURRING_CLEARED: "↻",
    DisplayCategory.UNCLEARED: "◐",
    DisplayCategory.PENDING: "⏱",
    DisplayCategory.OTHER: "○",
}


def classify(
    status: TransactionStatus,
    recurring_type: RecurringType | None,
    is_pending: bool = False,
) -> DisplayCategory:
    """
    Classify a transaction for display.

    Rules are checked in order; the first match wins.

    Args:
        status: Transaction status
        recurring_type: Recurring state, if matched to a recurring item
        is_pending: Institution-reported pending flag

    Returns:
        DisplayCategory
    """
    if status == TransactionStatus.CLEARED and recurring_type is None:
        return DisplayCategory.CLEARED
    elif status == TransactionStatus.CLEARED and recurring_type == RecurringType.CLEARED:
        return DisplayCategory.RECURRING_CLEARED
    elif status == TransactionStatus.UNCLEARED:
        return DisplayCategory.UNCLEARED
    elif status == TransactionStatus.PENDING:
        return DisplayCategory.PENDING
    elif is_pending and status != TransactionStatus.CLEARED:
        return DisplayCategory.PENDING
    else:
        return DisplayCategory.OTHER


def classify_transaction(transaction: Transaction) -> DisplayCategory:
    return classify(transaction.status, transaction.recurring_type, transaction.is_pending)


def display_payee(transaction: Transaction) -> str:
    """Payee to show: the recurring item's payee for cleared recurring matches."""
    if transaction.recurring_type == RecurringType.CLEARED and transaction.recurring_payee:
        return transaction.recurring_payee
    return transaction.payee


def search_keywords(transaction: Transaction) -> list[str]:
    """Non-empty strings a list filter should match against."""
    candidates = [
        transaction.status.value,
        transaction.payee,
        transaction.recurring_payee,
        transaction.notes,
        transaction.display_note,
    ]
    return [value for value in candidates if value]


def matches_search(transaction: Transaction, query: str) -> bool:
    """Case-insensitive substring match against the search keywords."""
    query_lower = query.lower()
    return any(query_lower in keyword.lower() for keyword in search_keywords(transaction))


def can_confirm(transaction: Transaction) -> bool:
    """Whether the confirm action is offered for this transaction."""
    return transaction.status != TransactionStatus.CLEARED and not transaction.is_awaiting_settlement


def payee_url(transaction: Transaction) -> str:
    """Lunch Money web link listing this payee's transactions in the same month."""
    month_path = transaction.date.date.strftime("%Y/%m")
    payee = quote(transaction.payee, safe="")
    return f"{LUNCHMONEY_WEB_URL}/transactions/{month_path}?match=all&payee_exact={payee}&time=month"
