#!/usr/bin/env python3
"""
Lunch Money API Client

Thin synchronous client for the Lunch Money v1 REST API. The client is
constructed explicitly from configuration and passed to whatever needs it;
there is no module-level instance.

Only the two endpoints the review workflow needs are implemented:
- GET /v1/transactions
- PUT /v1/transactions/:id
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

import requests

from ..core.config import Config
from .models import (
    LunchMoneyError,
    Transaction,
    TransactionUpdate,
    TransactionUpdateResponse,
    parse_transactions,
)

logger = logging.getLogger(__name__)


class LunchMoneyAPIError(LunchMoneyError):
    """Raised when a request fails or the API reports an error"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class TransactionFilters:
    """Optional query filters for GET /v1/transactions."""

    tag_id: int | None = None
    debit_as_negative: bool | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.tag_id is not None:
            params["tag_id"] = self.tag_id
        if self.debit_as_negative is not None:
            params["debit_as_negative"] = "true" if self.debit_as_negative else "false"
        return params


class LunchMoneyClient:
    """
    Lunch Money REST client.

    Wraps a requests.Session carrying the bearer token. Requests are never
    retried; every failure surfaces as LunchMoneyAPIError.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = "https://dev.lunchmoney.app",
        timeout: float = 30.0,
        strict: bool = True,
        session: requests.Session | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_token: Lunch Money developer access token
            base_url: API root (without the /v1 prefix)
            timeout: Per-request timeout in seconds
            strict: Raise on malformed transaction records instead of skipping them
            session: Optional pre-built session (used by tests)
        """
        if not api_token:
            raise ValueError("A Lunch Money API token is required")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.strict = strict
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_token}",
            }
        )

    @classmethod
    def from_config(cls, config: Config) -> "LunchMoneyClient":
        """Build a client from application configuration."""
        if not config.lunchmoney.api_token:
            raise ValueError("LUNCHMONEY_API_TOKEN is not set")
        return cls(
            api_token=config.lunchmoney.api_token,
            base_url=config.lunchmoney.base_url,
            timeout=config.lunchmoney.timeout,
            strict=config.strict_parsing,
        )

    def get_transactions(
        self,
        start_date: date,
        end_date: date,
        filters: TransactionFilters | None = None,
    ) -> list[Transaction]:
        """
        Fetch transactions dated within [start_date, end_date].

        Args:
            start_date: First day (inclusive)
            end_date: Last day (inclusive)
            filters: Optional additional query filters

        Returns:
            List of Transaction domain models

        Raises:
            LunchMoneyAPIError: If the request fails
            MalformedTransactionError: If strict and a record cannot be parsed
        """
        params: dict[str, Any] = {
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
        }
        if filters is not None:
            params.update(filters.to_params())

        data = self._request("GET", "v1/transactions", params=params)
        records = data.get("transactions")
        if not isinstance(records, list):
            raise LunchMoneyAPIError("Unexpected response: missing 'transactions' list")

        logger.debug(f"Fetched {len(records)} transactions for {start_date}..{end_date}")
        return parse_transactions(records, strict=self.strict)

    def update_transaction(self, transaction_id: int, update: TransactionUpdate) -> TransactionUpdateResponse:
        """
        Apply a partial update to a transaction.

        Args:
            transaction_id: Lunch Money transaction id
            update: Fields to change

        Returns:
            TransactionUpdateResponse from the server

        Raises:
            ValueError: If the update is empty
            LunchMoneyAPIError: If the request fails
        """
        payload = update.to_dict()
        if not payload:
            raise ValueError("Transaction update has no fields to change")

        data = self._request("PUT", f"v1/transactions/{transaction_id}", json={"transaction": payload})
        logger.debug(f"Updated transaction {transaction_id}: {payload}")
        return TransactionUpdateResponse.from_dict(data)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "LunchMoneyClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise LunchMoneyAPIError(f"Request to Lunch Money failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = _error_message(data) or f"HTTP {response.status_code}: {response.reason}"
            raise LunchMoneyAPIError(message, status_code=response.status_code)

        if not isinstance(data, dict):
            raise LunchMoneyAPIError("Unexpected response: body is not a JSON object", response.status_code)

        # The API reports some validation failures with a 200 status
        message = _error_message(data)
        if message:
            raise LunchMoneyAPIError(message, status_code=response.status_code)

        return data


def _error_message(data: Any) -> str | None:
    """Extract an error message from an API error body, if present."""
    if not isinstance(data, dict):
        return None

    for key in ("error", "errors", "message"):
        value = data.get(key)
        if not value:
            continue
        if isinstance(value, list):
            return "; ".join(str(item) for item in value)
        if key == "message" and "name" not in data:
            # Plain informational messages are not errors
            continue
        return str(value)
    return None
