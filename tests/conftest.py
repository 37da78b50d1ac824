"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from typing import Any

import pytest

import lunchreview.core.config as config_module


@pytest.fixture
def sample_transaction_record() -> dict[str, Any]:
    """Sample Lunch Money transaction for testing."""
    return {
        "id": 246810,
        "date": "2024-07-03",
        "payee": "Sample Coffee Shop",
        "amount": "4.5000",
        "currency": "usd",
        "to_base": 4.5,
        "notes": "Morning coffee",
        "category_id": 83,
        "category_name": "Dining Out",
        "asset_id": None,
        "asset_name": None,
        "plaid_account_id": 7,
        "plaid_account_name": "Test Checking",
        "status": "uncleared",
        "is_pending": False,
        "parent_id": None,
        "is_group": False,
        "group_id": None,
        "tags": [{"id": 5, "name": "coffee"}],
        "external_id": None,
        "recurring_type": None,
        "recurring_payee": None,
        "display_note": None,
        "created_at": "2024-07-03T14:22:10.123Z",
        "updated_at": "2024-07-03T14:22:10.123Z",
    }


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    # Ensure tests never talk to the real service with real credentials
    monkeypatch.setenv("LUNCHREVIEW_ENV", "test")
    monkeypatch.setenv("LUNCHMONEY_API_TOKEN", "test-token")
    monkeypatch.setenv("LUNCHMONEY_BASE_URL", "https://lunchmoney.test")
    monkeypatch.delenv("LUNCHMONEY_TIMEOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    # Configuration is cached per process; start each test from the environment
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "lunchmoney: Tests for Lunch Money API integration")
    config.addinivalue_line("markers", "review: Tests for the review view model and confirm workflow")
