"""
Core Utilities Package

Shared primitives used across the review tool.

This package provides:
- Decimal-backed money values and currency formatting
- Date wrappers and calendar month ranges
- Configuration management for environment-specific settings
- JSON formatting helpers
"""

from .config import (
    Config,
    Environment,
    LunchMoneyConfig,
    get_config,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import format_amount, normalize_currency, parse_decimal
from .dates import FinancialDate, MonthRange, months_of_year, parse_timestamp
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "LunchMoneyConfig",
    "get_config",
    "is_development",
    "is_production",
    "is_test",
    "reload_config",
    # Currency
    "format_amount",
    "normalize_currency",
    "parse_decimal",
    # Dates
    "FinancialDate",
    "MonthRange",
    "months_of_year",
    "parse_timestamp",
    "Money",
]
