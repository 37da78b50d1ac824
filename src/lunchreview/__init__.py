"""
Lunch Money Review - Monthly Transaction Review Tool

Fetches a month of transactions from Lunch Money, orders them for review,
and confirms ("clears") them with optimistic updates.

Key Features:
- Pending transactions as a single attention list, largest amount first
- Settled transactions grouped by day, most recently created first
- Optimistic confirm with full rollback and error reporting on failure
- Command-line interface for listing and confirming transactions

Domain Packages:
- core: Money, dates and month ranges, configuration
- lunchmoney: Lunch Money API models, client, and async source
- review: View model builder, store, mutation controller, session
- cli: Command-line interface

Example Usage:
    from lunchreview.core import MonthRange
    from lunchreview.lunchmoney import LunchMoneyClient, LunchMoneyTransactionSource
    from lunchreview.review import ReviewSession

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Lunch Money Review contributors"

from .core.config import Environment, get_config
from .core.dates import MonthRange
from .core.money import Money
from .lunchmoney.models import Transaction, TransactionStatus
from .review.view_model import TransactionViewModel, build_view_model

__all__ = [
    # Configuration
    "Environment",
    "get_config",
    # Core models
    "Money",
    "MonthRange",
    "Transaction",
    "TransactionStatus",
    # View model
    "TransactionViewModel",
    "build_view_model",
]
