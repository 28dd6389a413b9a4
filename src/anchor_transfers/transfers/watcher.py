"""TransactionWatcher - polls one transaction until it stops pending

Each call to `watch` owns its own asyncio task and returns its own
WatchHandle, so several watches can run side by side without sharing state.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from loguru import logger

from anchor_transfers.domain.models import Transaction, TransactionArgs

if TYPE_CHECKING:
    from anchor_transfers.infrastructure.protocols import TransactionFetcher

DEFAULT_POLL_INTERVAL_SECONDS = 1.0

TransactionCallback = Callable[[Transaction], Any]
ErrorCallback = Callable[[Transaction | Exception], Any]


class WatchState(Enum):
    """States of a single watch

    SCHEDULED -> FETCHING -> RESCHEDULING -> SCHEDULED ...
                          -> SUCCEEDED | FAILED
    Any non-terminal state -> CANCELLED
    """

    SCHEDULED = "scheduled"
    FETCHING = "fetching"
    RESCHEDULING = "rescheduling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class WatchHandle:
    """Caller-owned handle for one watch

    Cancelling while the next check is scheduled drops it. Cancelling while a
    fetch is in flight lets the fetch finish, but no callback runs afterwards.
    The handle is also callable, which cancels it.
    """

    def __init__(self, asset_code: str, transaction_id: str) -> None:
        self.asset_code = asset_code
        self.transaction_id = transaction_id
        self.state = WatchState.SCHEDULED
        self._cancelled = False
        self._task: asyncio.Task | None = None

    def _attach(self, task: asyncio.Task) -> None:
        self._task = task
        task.add_done_callback(self._log_outcome)

    def _transition(self, state: WatchState) -> None:
        if not self._cancelled:
            self.state = state

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def cancel(self) -> None:
        """Stop watching. Safe to call more than once."""
        if self._cancelled or self.done:
            return
        if self.state in (WatchState.SUCCEEDED, WatchState.FAILED):
            return

        self._cancelled = True
        idle = self.state is WatchState.SCHEDULED
        self.state = WatchState.CANCELLED
        logger.debug(
            f"Watch cancelled: {self.asset_code}/{self.transaction_id}"
        )

        if idle and self._task is not None:
            self._task.cancel()

    __call__ = cancel

    async def wait(self) -> None:
        """Wait for the watch to finish

        Raises:
            Exception: Whatever a callback raised, if one did
        """
        if self._task is None:
            return
        await asyncio.wait({self._task})
        if not self._task.cancelled():
            self._task.result()

    def _log_outcome(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error(
                f"Watch callback failed for "
                f"{self.asset_code}/{self.transaction_id}: {exc}"
            )


async def _invoke(callback: Callable[[Any], Any], value: Any) -> None:
    result = callback(value)
    if inspect.isawaitable(result):
        await result


class TransactionWatcher:
    """Polls a transaction's status until it reaches a terminal state"""

    def __init__(
        self,
        fetcher: TransactionFetcher,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialise watcher

        Args:
            fetcher: Fetches a single transaction, e.g. a TransferProvider
            poll_interval: Default delay before each status check (seconds)
            sleep: Awaitable sleep function, replaceable in tests
        """
        self._fetcher = fetcher
        self._poll_interval = poll_interval
        self._sleep = sleep

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    async def poll(
        self,
        asset_code: str,
        transaction_id: str,
        poll_interval: float | None = None,
        handle: WatchHandle | None = None,
    ) -> AsyncIterator[Transaction]:
        """Yield the transaction after each check until it stops pending

        Every check is preceded by a delay. The last transaction yielded is
        the first one with a terminal status. Fetch errors propagate.
        """
        interval = self._poll_interval if poll_interval is None else poll_interval
        args = TransactionArgs(asset_code=asset_code, id=transaction_id)

        while handle is None or not handle.cancelled:
            if handle is not None:
                handle._transition(WatchState.SCHEDULED)
            await self._sleep(interval)

            if handle is not None:
                if handle.cancelled:
                    return
                handle._transition(WatchState.FETCHING)

            transaction = await self._fetcher.fetch_transaction(
                args, is_watching=True
            )
            logger.debug(
                f"Watch {asset_code}/{transaction_id}: status={transaction.status}"
            )
            yield transaction

            if transaction.is_terminal:
                return

    def watch(
        self,
        asset_code: str,
        transaction_id: str,
        on_message: TransactionCallback,
        on_success: TransactionCallback,
        on_error: ErrorCallback,
        poll_interval: float | None = None,
    ) -> WatchHandle:
        """Start watching a transaction in the background

        Must be called with a running event loop. Returns before the first
        check happens.

        Args:
            asset_code: Asset of the transaction
            transaction_id: Transaction id on the transfer server
            on_message: Called with the transaction each time it is still pending
            on_success: Called once with the transaction when it completes
            on_error: Called once with the transaction when it ends in any
                other status, or with the exception if a check fails
            poll_interval: Delay between checks, overriding the default

        Returns:
            Handle for cancelling or awaiting this watch
        """
        handle = WatchHandle(asset_code, transaction_id)
        task = asyncio.get_running_loop().create_task(
            self._run(handle, on_message, on_success, on_error, poll_interval),
            name=f"watch-{asset_code}-{transaction_id}",
        )
        handle._attach(task)
        return handle

    async def _run(
        self,
        handle: WatchHandle,
        on_message: TransactionCallback,
        on_success: TransactionCallback,
        on_error: ErrorCallback,
        poll_interval: float | None,
    ) -> None:
        updates = self.poll(
            handle.asset_code, handle.transaction_id, poll_interval, handle
        )
        try:
            while True:
                try:
                    transaction = await anext(updates)
                except StopAsyncIteration:
                    return
                except Exception as e:
                    if handle.cancelled:
                        return
                    handle._transition(WatchState.FAILED)
                    logger.warning(
                        f"Watch {handle.asset_code}/{handle.transaction_id} "
                        f"failed: {e}"
                    )
                    await _invoke(on_error, e)
                    return

                if handle.cancelled:
                    return

                if transaction.is_pending:
                    handle._transition(WatchState.RESCHEDULING)
                    await _invoke(on_message, transaction)
                elif transaction.is_completed:
                    handle._transition(WatchState.SUCCEEDED)
                    logger.info(f"Transaction {transaction.id} completed")
                    await _invoke(on_success, transaction)
                    return
                else:
                    handle._transition(WatchState.FAILED)
                    logger.warning(
                        f"Transaction {transaction.id} ended with status "
                        f"{transaction.status}"
                    )
                    await _invoke(on_error, transaction)
                    return
        finally:
            await updates.aclose()
