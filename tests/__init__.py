"""
Test Suite for Lunch Money Review

Test Structure:
- fixtures/: Shared synthetic data and an in-memory transaction source
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and CLI tests

Test Data:
All test data uses synthetic transactions. Real financial data is never
included in tests, and no test talks to the Lunch Money API.
"""
