"""
Cancellation scope for outbound verification requests.

A request borrows the caller's cancellation event when one is supplied.
Otherwise it owns a fresh event plus a timer that sets it after the
timeout budget; the timer is released on every exit from the scope.
"""
import asyncio
import logging
from typing import Any, Awaitable, Optional, TypeVar

from bankproof.core.error_handling import RequestCancelledError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class CancellationScope:
    """Borrow-or-own cancellation for a single request.

    Example:
        with CancellationScope(context.cancel_event, timeout_seconds) as scope:
            response = await scope.run(client.post(url, json=payload))
    """

    def __init__(self, signal: Optional[asyncio.Event], timeout: float):
        """
        Args:
            signal: Caller's cancellation event, borrowed if given
            timeout: Seconds before an owned timer fires
        """
        self.owns_signal = signal is None
        self.signal = signal if signal is not None else asyncio.Event()
        self.timeout = timeout
        self.timed_out = False
        self._timer: Optional[asyncio.TimerHandle] = None

    def __enter__(self) -> "CancellationScope":
        if self.owns_signal:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self.timeout, self._expire)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    @property
    def timer_active(self) -> bool:
        return self._timer is not None

    def release(self) -> None:
        """Cancel the owned timer. Safe to call multiple times."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _expire(self) -> None:
        self.timed_out = True
        self._timer = None
        self.signal.set()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the signal fires first.

        Raises:
            RequestCancelledError: If the signal fired before completion
        """
        request = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self.signal.wait())
        try:
            done, _ = await asyncio.wait(
                {request, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            await _cancel_pending(request, waiter)

        if request in done:
            return request.result()

        logger.debug(f"Request cancelled (timed_out={self.timed_out})")
        raise RequestCancelledError(timed_out=self.timed_out)


async def _cancel_pending(*tasks: "asyncio.Future[Any]") -> None:
    pending = [task for task in tasks if not task.done()]
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
