#!/usr/bin/env python3
"""Tests for the optimistic mutation controller."""

import asyncio

import pytest

from lunchreview.lunchmoney.client import LunchMoneyAPIError
from lunchreview.lunchmoney.models import TransactionStatus, TransactionUpdateResponse
from lunchreview.review.mutation import (
    GENERIC_FAILURE_MESSAGE,
    MutationState,
    OptimisticMutationController,
)
from lunchreview.review.store import StoreEventType, TransactionStore
from tests.fixtures.synthetic_data import FakeTransactionSource, make_transaction


@pytest.fixture
def store():
    return TransactionStore(
        [
            make_transaction(1),
            make_transaction(2),
            make_transaction(3, status="cleared"),
            make_transaction(4, status="pending"),
            make_transaction(5, is_pending=True),
        ]
    )


@pytest.fixture
def source():
    return FakeTransactionSource()


@pytest.fixture
def errors():
    return []


@pytest.fixture
def controller(store, source, errors):
    return OptimisticMutationController(store, source, on_error=errors.append)


@pytest.fixture
def events(store):
    received = []
    store.subscribe(received.append)
    return received


class TestConfirmSuccess:
    """Test the committed path."""

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_commits_cleared_status(self, controller, store, source, events, errors):
        result = await controller.confirm(1)

        assert result.state == MutationState.COMMITTED
        assert result.succeeded
        assert result.error is None
        assert store.get(1).status == TransactionStatus.CLEARED
        assert source.update_calls == [(1, {"status": "cleared"})]
        assert [e.type for e in events] == [StoreEventType.PATCH]
        assert errors == []
        assert not controller.is_in_flight(1)

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_optimistic_state_visible_before_response(self, controller, store, source):
        source.update_gate = asyncio.Event()

        task = asyncio.create_task(controller.confirm(1))
        await asyncio.sleep(0)

        assert store.get(1).status == TransactionStatus.CLEARED
        assert controller.is_in_flight(1)

        source.update_gate.set()
        result = await task

        assert result.succeeded
        assert store.get(1).status == TransactionStatus.CLEARED


class TestConfirmFailure:
    """Test the reverted path."""

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_service_error_restores_previous_value(self, controller, store, source, events, errors):
        original = store.get(2)
        source.update_error = LunchMoneyAPIError("Server unavailable", 503)

        result = await controller.confirm(2)

        assert result.state == MutationState.REVERTED
        assert result.error == "Server unavailable"
        assert store.get(2) == original
        assert [e.type for e in events] == [StoreEventType.PATCH, StoreEventType.REVERT]
        assert errors == ["Server unavailable"]
        assert len(source.update_calls) == 1
        assert not controller.is_in_flight(2)

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_not_updated_reply_is_failure(self, controller, store, source, errors):
        source.update_response = TransactionUpdateResponse(updated=False)

        result = await controller.confirm(1)

        assert result.state == MutationState.REVERTED
        assert store.get(1).status == TransactionStatus.UNCLEARED
        assert errors == ["Lunch Money did not update transaction 1"]

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_empty_error_message_uses_generic_message(self, controller, source, errors):
        source.update_error = RuntimeError()

        result = await controller.confirm(1)

        assert result.error == GENERIC_FAILURE_MESSAGE
        assert errors == [GENERIC_FAILURE_MESSAGE]

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_without_error_callback(self, store, source):
        source.update_error = LunchMoneyAPIError("boom")
        controller = OptimisticMutationController(store, source)

        result = await controller.confirm(1)

        assert result.state == MutationState.REVERTED

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_cancellation_reverts(self, controller, store, source, errors):
        source.update_gate = asyncio.Event()

        task = asyncio.create_task(controller.confirm(1))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert store.get(1).status == TransactionStatus.UNCLEARED
        assert not controller.is_in_flight(1)
        assert errors == []

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_failure_after_refetch_keeps_fresh_data(self, controller, store, source, errors):
        source.update_gate = asyncio.Event()
        source.update_error = LunchMoneyAPIError("Server unavailable", 503)

        task = asyncio.create_task(controller.confirm(1))
        await asyncio.sleep(0)
        store.replace([make_transaction(1, status="cleared", notes="fresh")])
        source.update_gate.set()
        result = await task

        assert result.state == MutationState.REVERTED
        assert store.get(1).notes == "fresh"
        assert store.get(1).status == TransactionStatus.CLEARED
        assert errors == ["Server unavailable"]


class TestConfirmRejected:
    """Test confirms that make no change at all."""

    @pytest.mark.asyncio
    @pytest.mark.review
    @pytest.mark.parametrize(
        "transaction_id,reason",
        [
            (3, "already cleared"),
            (4, "still pending"),
            (5, "still pending"),
            (99, "not loaded"),
        ],
        ids=["cleared", "pending_status", "pending_flag", "unknown"],
    )
    async def test_rejected(self, controller, source, events, errors, transaction_id, reason):
        result = await controller.confirm(transaction_id)

        assert result.state == MutationState.REJECTED
        assert reason in result.error
        assert source.update_calls == []
        assert events == []
        assert errors == []

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_duplicate_confirm_while_in_flight(self, controller, source):
        source.update_gate = asyncio.Event()

        first = asyncio.create_task(controller.confirm(1))
        await asyncio.sleep(0)
        second = await controller.confirm(1)

        assert second.state == MutationState.REJECTED
        assert "already being validated" in second.error

        source.update_gate.set()
        assert (await first).succeeded
        assert len(source.update_calls) == 1


class TestConcurrentConfirms:
    """Test independent confirms on different transactions."""

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_different_ids_run_concurrently(self, controller, store, source):
        source.update_gate = asyncio.Event()

        tasks = [asyncio.create_task(controller.confirm(tx_id)) for tx_id in (1, 2)]
        await asyncio.sleep(0)

        assert controller.is_in_flight(1)
        assert controller.is_in_flight(2)
        assert [call[0] for call in source.update_calls] == [1, 2]

        source.update_gate.set()
        results = await asyncio.gather(*tasks)

        assert all(result.succeeded for result in results)
        assert store.get(1).status == TransactionStatus.CLEARED
        assert store.get(2).status == TransactionStatus.CLEARED

    @pytest.mark.asyncio
    @pytest.mark.review
    async def test_one_failure_does_not_revert_another(self, controller, store, source, errors):
        first_gate = asyncio.Event()
        source.update_gate = first_gate

        first = asyncio.create_task(controller.confirm(1))
        await asyncio.sleep(0)

        source.update_gate = None
        second = await controller.confirm(2)
        assert second.succeeded

        source.update_error = LunchMoneyAPIError("Server unavailable", 503)
        first_gate.set()
        result = await first

        assert result.state == MutationState.REVERTED
        assert store.get(1).status == TransactionStatus.UNCLEARED
        assert store.get(2).status == TransactionStatus.CLEARED
        assert errors == ["Server unavailable"]
