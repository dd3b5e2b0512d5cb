""" Bridge between the channel's futures and the client's blocking/non-blocking surfaces

    Nothing in here starts a thread. Callbacks attached with ``transform`` run on whichever thread resolves the
    source future, so they must never block, and in particular must never call ``wait_for``.
"""
import asyncio
from concurrent.futures import Future
from typing import Callable, Optional, TypeVar

I = TypeVar('I')
O = TypeVar('O')
V = TypeVar('V')


def transform(pending: 'Future[I]', function: Callable[[I], O]) -> 'Future[O]':
    """ Derive a future resolved with ``function(result)`` once ``pending`` resolves

        A failure of ``pending`` is passed through as the same exception object. An exception raised by ``function``
        fails the derived future. If ``pending`` is cancelled, so is the derived future.
    """
    derived: Future = Future()

    def _on_done(source: Future):
        if source.cancelled():
            derived.cancel()
            return

        if not derived.set_running_or_notify_cancel():
            # Cancelled by the caller in the meantime.
            return

        error = source.exception()
        if error is not None:
            derived.set_exception(error)
            return

        try:
            result = function(source.result())
        except Exception as e:
            derived.set_exception(e)
        else:
            derived.set_result(result)

    pending.add_done_callback(_on_done)

    return derived


def wait_for(pending: 'Future[V]') -> V:
    """ Block until ``pending`` resolves

        Returns the value or raises the original cause of the failure. An interrupted wait is resumed.
    """
    while True:
        try:
            return pending.result()
        except InterruptedError as e:
            if pending.done() and not pending.cancelled() and pending.exception() is e:
                # The remote call itself failed with this error.
                raise


def completed(value: V) -> 'Future[V]':
    future: Future = Future()
    future.set_result(value)
    return future


def failed(error: BaseException) -> Future:
    future: Future = Future()
    future.set_exception(error)
    return future


def as_awaitable(pending: Future, loop: Optional[asyncio.AbstractEventLoop] = None) -> asyncio.Future:
    """ Wrap a pending value for ``await`` in an asyncio event loop """
    return asyncio.wrap_future(pending, loop=loop)
