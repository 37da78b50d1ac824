#!/usr/bin/env python3
"""
Transactions CLI - Monthly Review Commands

Command-line presentation of the review session: list a month's
transactions (pending first, then settled by day) and confirm them.
"""

import asyncio
from datetime import date

import click

from ..core.config import Config, get_config
from ..core.dates import MonthRange, months_of_year
from ..core.json_utils import format_json, write_json
from ..lunchmoney.client import LunchMoneyClient, TransactionFilters
from ..lunchmoney.models import Transaction
from ..lunchmoney.source import LunchMoneyTransactionSource
from ..review.display import (
    CATEGORY_MARKERS,
    can_confirm,
    classify_transaction,
    display_payee,
    matches_search,
)
from ..review.mutation import MutationState
from ..review.session import ReviewSession
from ..review.view_model import build_view_model


def create_client(config: Config) -> LunchMoneyClient:
    """Build the Lunch Money API client from configuration."""
    try:
        return LunchMoneyClient.from_config(config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def parse_month(value: str | None) -> MonthRange:
    if not value:
        return MonthRange.current()
    try:
        return MonthRange.from_string(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--month") from e


def format_day_title(day_key: str) -> str:
    """Format a YYYY-MM-DD key as e.g. 'Jul 3, 2024'."""
    day = date.fromisoformat(day_key)
    return f"{day:%b} {day.day}, {day.year}"


def format_transaction_line(transaction: Transaction) -> str:
    """One-line summary of a transaction for terminal output."""
    marker = CATEGORY_MARKERS[classify_transaction(transaction)]
    parts = [
        f"{marker} {transaction.id:>10}",
        f"{display_payee(transaction)[:32]:<32}",
        f"{transaction.amount!s:>12}",
    ]
    if transaction.account_name:
        parts.append(transaction.account_name)
    if transaction.is_group:
        parts.append("[group]")
    parts.extend(f"#{tag.name}" for tag in transaction.tags)
    if transaction.category_name:
        parts.append(f"({transaction.category_name})")
    return "  ".join(parts)


@click.command()
@click.option("--count", type=int, default=None, help="Limit the number of months shown")
def months(count: int | None) -> None:
    """
    List selectable months of the current year, newest first.

    Example:
      lunchreview months
    """
    ranges = months_of_year()
    if count is not None:
        ranges = ranges[:count]
    for month_range in ranges:
        click.echo(f"{month_range.key}  {month_range.title}")


@click.command()
@click.option("--month", help="Month to review (YYYY-MM), defaults to the current month")
@click.option("--tag-id", type=int, help="Only include transactions with this tag")
@click.option("--search", help="Only include transactions matching this text")
@click.option("--json", "as_json", is_flag=True, help="Print the view model as JSON")
@click.option("--output", "output_file", help="Also write the view model JSON to this file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def transactions(
    ctx: click.Context,
    month: str | None,
    tag_id: int | None,
    search: str | None,
    as_json: bool,
    output_file: str | None,
    verbose: bool,
) -> None:
    """
    Show a month's transactions for review.

    Pending transactions are listed first, then settled transactions
    grouped by day.

    Examples:
      lunchreview transactions
      lunchreview transactions --month 2024-07 --tag-id 42
      lunchreview transactions --search coffee --json
    """
    config = get_config()
    month_range = parse_month(month)
    filters = TransactionFilters(tag_id=tag_id) if tag_id is not None else None

    if verbose or (ctx.obj or {}).get("verbose", False):
        click.echo(f"Month: {month_range.title} ({month_range})")
        click.echo(f"API: {config.lunchmoney.base_url}")
        click.echo()

    with create_client(config) as client:
        session = ReviewSession(LunchMoneyTransactionSource(client))
        loaded = asyncio.run(session.select_month(month_range, filters))
    if not loaded:
        raise click.ClickException(f"Failed to load transactions: {session.load_error}")

    if search:
        view_model = build_view_model(t for t in session.store.transactions if matches_search(t, search))
    else:
        view_model = session.view_model()

    if output_file:
        write_json(output_file, {"month": month_range.key, **view_model.to_dict()})

    if as_json:
        click.echo(format_json({"month": month_range.key, **view_model.to_dict()}))
        return

    if view_model.is_empty:
        click.echo(f"No transactions for {month_range.title}")
        return

    if view_model.pending:
        click.echo("Pending Transactions")
        for transaction in view_model.pending:
            click.echo(f"  {format_transaction_line(transaction)}")
        click.echo()

    for day, day_transactions in view_model.settled_by_day.items():
        click.echo(format_day_title(day))
        for transaction in day_transactions:
            click.echo(f"  {format_transaction_line(transaction)}")
        click.echo()

    awaiting = sum(1 for t in view_model.all_transactions() if can_confirm(t))
    click.echo(f"{awaiting} transaction(s) awaiting validation")
    if output_file:
        click.echo(f"Saved to: {output_file}")


@click.command()
@click.argument("transaction_id", type=int)
@click.option("--month", help="Month containing the transaction (YYYY-MM), defaults to the current month")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def confirm(ctx: click.Context, transaction_id: int, month: str | None, verbose: bool) -> None:
    """
    Mark a transaction as cleared.

    Example:
      lunchreview confirm 123456 --month 2024-07
    """
    config = get_config()
    month_range = parse_month(month)

    def report_failure(message: str) -> None:
        click.echo(f"❌ Failed to validate: {message}", err=True)

    async def run(session: ReviewSession) -> MutationState:
        if not await session.select_month(month_range):
            raise click.ClickException(f"Failed to load transactions: {session.load_error}")
        if verbose or (ctx.obj or {}).get("verbose", False):
            click.echo(f"Loaded {len(session.store)} transactions for {month_range.title}")

        result = await session.confirm(transaction_id)
        if result.state == MutationState.REJECTED:
            raise click.ClickException(result.error or "Confirm was rejected")
        return result.state

    with create_client(config) as client:
        session = ReviewSession(LunchMoneyTransactionSource(client), on_error=report_failure)
        state = asyncio.run(run(session))
    if state == MutationState.REVERTED:
        ctx.exit(1)

    transaction = session.store.get(transaction_id)
    payee = display_payee(transaction) if transaction else ""
    click.echo(f"✅ Validated {transaction_id} {payee}".rstrip())
