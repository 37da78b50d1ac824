#!/usr/bin/env python3
"""
Lunch Money Domain Models

Type-safe models representing Lunch Money API data structures.
These models are true to the v1 API format and use Money/FinancialDate primitives.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from ..core.currency import normalize_currency, parse_decimal
from ..core.dates import FinancialDate, parse_timestamp
from ..core.money import Money

logger = logging.getLogger(__name__)


class LunchMoneyError(Exception):
    """Base class for errors raised while talking to Lunch Money."""

    pass


class MalformedTransactionError(LunchMoneyError):
    """Raised when a transaction record is missing required fields or has invalid values"""

    pass


class TransactionStatus(Enum):
    """Lifecycle status of a transaction."""

    CLEARED = "cleared"
    UNCLEARED = "uncleared"
    RECURRING = "recurring"
    RECURRING_SUGGESTED = "recurring_suggested"
    PENDING = "pending"


class RecurringType(Enum):
    """Recurring-item state attached to a transaction matched to a recurring expense."""

    CLEARED = "cleared"
    SUGGESTED = "suggested"
    DISMISSED = "dismissed"


@dataclass(frozen=True)
class Tag:
    """Transaction tag."""

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tag":
        return cls(id=int(data["id"]), name=data["name"])


@dataclass(frozen=True)
class Transaction:
    """
    Lunch Money transaction from API.

    Instances are immutable; local changes produce a new instance via
    `TransactionUpdate.apply_to` so that earlier snapshots stay intact.
    """

    id: int
    date: FinancialDate
    payee: str
    amount: Money
    to_base: Decimal  # Amount normalized to the user's primary currency
    status: TransactionStatus
    notes: str = ""
    is_pending: bool = False
    category_id: int | None = None
    category_name: str | None = None
    asset_id: int | None = None
    asset_name: str | None = None
    plaid_account_id: int | None = None
    plaid_account_name: str | None = None
    parent_id: int | None = None
    group_id: int | None = None
    is_group: bool = False
    recurring_type: RecurringType | None = None
    recurring_payee: str | None = None
    tags: tuple[Tag, ...] = field(default_factory=tuple)
    external_id: str | None = None
    display_note: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """
        Create Transaction from API dict.

        Args:
            data: Dictionary from Lunch Money API (GET /v1/transactions)

        Returns:
            Transaction instance

        Raises:
            MalformedTransactionError: If required fields are missing or invalid
        """
        try:
            if data.get("date") is None:
                raise ValueError("date is required")

            currency = normalize_currency(data.get("currency"))
            amount = Money.from_api(data["amount"], currency)
            # to_base is absent on some older records; fall back to the raw amount
            to_base = parse_decimal(data["to_base"]) if data.get("to_base") is not None else amount.amount

            recurring_type = data.get("recurring_type")

            return cls(
                id=int(data["id"]),
                date=FinancialDate.from_string(data["date"]),
                payee=data.get("payee") or "",
                amount=amount,
                to_base=to_base,
                status=TransactionStatus(data["status"]),
                notes=data.get("notes") or "",
                is_pending=bool(data.get("is_pending", False)),
                category_id=data.get("category_id"),
                category_name=data.get("category_name"),
                asset_id=data.get("asset_id"),
                asset_name=data.get("asset_name"),
                plaid_account_id=data.get("plaid_account_id"),
                plaid_account_name=data.get("plaid_account_name"),
                parent_id=data.get("parent_id"),
                group_id=data.get("group_id"),
                is_group=bool(data.get("is_group", False)),
                recurring_type=RecurringType(recurring_type) if recurring_type else None,
                recurring_payee=data.get("recurring_payee"),
                tags=tuple(Tag.from_dict(tag) for tag in data.get("tags") or []),
                external_id=data.get("external_id"),
                display_note=data.get("display_note"),
                created_at=parse_timestamp(data.get("created_at")),
                updated_at=parse_timestamp(data.get("updated_at")),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise MalformedTransactionError(
                f"Malformed transaction {data.get('id', '<unknown>')}: {e}"
            ) from e

    @property
    def currency(self) -> str:
        return self.amount.currency

    @property
    def is_member(self) -> bool:
        """Whether this transaction is aggregated into a transaction group."""
        return self.group_id is not None

    @property
    def is_awaiting_settlement(self) -> bool:
        """Whether the linked institution still reports this transaction as pending."""
        return self.status == TransactionStatus.PENDING or self.is_pending

    @property
    def account_name(self) -> str:
        """Name of the linked account or manually-managed asset."""
        return self.plaid_account_name or self.asset_name or ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output (API field names)."""
        return {
            "id": self.id,
            "date": self.date.to_iso_string(),
            "payee": self.payee,
            "amount": self.amount.to_api(),
            "currency": self.currency,
            "to_base": self.to_base,
            "status": self.status.value,
            "notes": self.notes,
            "is_pending": self.is_pending,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "asset_id": self.asset_id,
            "asset_name": self.asset_name,
            "plaid_account_id": self.plaid_account_id,
            "plaid_account_name": self.plaid_account_name,
            "parent_id": self.parent_id,
            "group_id": self.group_id,
            "is_group": self.is_group,
            "recurring_type": self.recurring_type.value if self.recurring_type else None,
            "recurring_payee": self.recurring_payee,
            "tags": [{"id": tag.id, "name": tag.name} for tag in self.tags],
            "external_id": self.external_id,
            "display_note": self.display_note,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


# Statuses a client may set through PUT /v1/transactions/:id
UPDATABLE_STATUSES = (TransactionStatus.CLEARED, TransactionStatus.UNCLEARED)


@dataclass(frozen=True)
class TransactionUpdate:
    """
    Sparse set of field overrides for a transaction.

    Fields left as None are absent from the update: they are neither sent
    to the server nor applied locally.
    """

    date: FinancialDate | None = None
    category_id: int | None = None
    payee: str | None = None
    amount: Decimal | None = None
    currency: str | None = None
    asset_id: int | None = None
    recurring_id: int | None = None
    notes: str | None = None
    status: TransactionStatus | None = None
    external_id: str | None = None
    tags: tuple[int | str, ...] | None = None

    def __post_init__(self) -> None:
        if self.status is not None and self.status not in UPDATABLE_STATUSES:
            raise ValueError(f"Status cannot be set to {self.status.value!r}")

    def is_empty(self) -> bool:
        return not self.to_dict()

    def to_dict(self) -> dict[str, Any]:
        """Serialize only the fields present in the update."""
        payload: dict[str, Any] = {}
        if self.date is not None:
            payload["date"] = self.date.to_iso_string()
        if self.category_id is not None:
            payload["category_id"] = self.category_id
        if self.payee is not None:
            payload["payee"] = self.payee
        if self.amount is not None:
            payload["amount"] = str(self.amount)
        if self.currency is not None:
            payload["currency"] = normalize_currency(self.currency)
        if self.asset_id is not None:
            payload["asset_id"] = self.asset_id
        if self.recurring_id is not None:
            payload["recurring_id"] = self.recurring_id
        if self.notes is not None:
            payload["notes"] = self.notes
        if self.status is not None:
            payload["status"] = self.status.value
        if self.external_id is not None:
            payload["external_id"] = self.external_id
        if self.tags is not None:
            payload["tags"] = list(self.tags)
        return payload

    def apply_to(self, transaction: Transaction) -> Transaction:
        """
        Return a copy of transaction with this update's fields applied.

        Tags and recurring_id are server-side references and are not
        reflected locally.
        """
        changes: dict[str, Any] = {}
        if self.date is not None:
            changes["date"] = self.date
        if self.category_id is not None:
            changes["category_id"] = self.category_id
        if self.payee is not None:
            changes["payee"] = self.payee
        if self.amount is not None or self.currency is not None:
            changes["amount"] = Money.from_api(
                self.amount if self.amount is not None else transaction.amount.amount,
                self.currency or transaction.currency,
            )
        if self.asset_id is not None:
            changes["asset_id"] = self.asset_id
        if self.notes is not None:
            changes["notes"] = self.notes
        if self.status is not None:
            changes["status"] = self.status
        if self.external_id is not None:
            changes["external_id"] = self.external_id
        return replace(transaction, **changes)


@dataclass(frozen=True)
class TransactionSplit:
    """Split echoed back by the server when an update splits a transaction."""

    amount: Decimal
    payee: str | None = None
    date: FinancialDate | None = None
    category_id: int | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransactionSplit":
        return cls(
            amount=parse_decimal(data["amount"]),
            payee=data.get("payee"),
            date=FinancialDate.from_string(data["date"]) if data.get("date") else None,
            category_id=data.get("category_id"),
            notes=data.get("notes"),
        )


@dataclass
class TransactionUpdateResponse:
    """Reply to PUT /v1/transactions/:id."""

    updated: bool
    split: TransactionSplit | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransactionUpdateResponse":
        split = data.get("split")
        return cls(
            updated=bool(data.get("updated", False)),
            split=TransactionSplit.from_dict(split) if split else None,
        )


def parse_transactions(records: Iterable[dict[str, Any]], strict: bool = True) -> list[Transaction]:
    """
    Convert API records to Transaction models.

    Args:
        records: Transaction dicts from the API
        strict: If True, a malformed record raises; otherwise it is logged and skipped

    Returns:
        List of Transaction domain models, in input order

    Raises:
        MalformedTransactionError: If strict and any record is malformed
    """
    transactions: list[Transaction] = []
    for record in records:
        try:
            transactions.append(Transaction.from_dict(record))
        except MalformedTransactionError as e:
            if strict:
                raise
            logger.error(f"Skipping transaction: {e}")
    return transactions
