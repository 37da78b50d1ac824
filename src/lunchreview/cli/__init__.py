"""
Command Line Interface Package

Unified CLI for the monthly transaction review.

Command Structure:
- lunchreview: Main entry point with utility commands (version, config)
- lunchreview months: Selectable months of the current year
- lunchreview transactions: Pending list and settled-by-day listing for a month
- lunchreview confirm: Mark a transaction as cleared
"""
