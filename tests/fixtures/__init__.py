"""
Test Fixtures and Utilities

Synthetic Lunch Money records, Transaction builders, and a controllable
in-memory TransactionSource for review and CLI tests.
"""
