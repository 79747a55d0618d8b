"""
Cooperative cancellation for long-running external commands.

A CancellationToken is shared by the install tasks and the command runner.
Tripping it (normally from a SIGINT/SIGTERM handler) kills every running
subprocess at its next poll and stops new tasks from being admitted. Work
that already finished is left as is.

Usage:
    token = CancellationToken()
    with cancel_on_signals(token):
        orchestrator.run(desired)
"""

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class CancellationToken:
    """Thread-safe, one-way cancellation flag."""

    def __init__(self):
        self._event = threading.Event()
        self.reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled") -> None:
        """Trip the token. Later calls keep the first reason."""
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@contextmanager
def cancel_on_signals(
    token: CancellationToken, signals: Sequence[int] = DEFAULT_SIGNALS
) -> Iterator[CancellationToken]:
    """
    Route process signals to a cancellation token for the duration of a block.

    Previous handlers are restored on exit. Outside the main thread signal
    handlers cannot be installed; the token is yielded unchanged then.

    Args:
        token: Token to trip when a signal arrives
        signals: Signals to intercept (default: SIGINT, SIGTERM)

    Yields:
        The token
    """
    if threading.current_thread() is not threading.main_thread():
        logger.debug("Not in main thread, signal cancellation disabled")
        yield token
        return

    def handler(signum, frame):
        name = signal.Signals(signum).name
        logger.info(f"Received {name}, cancelling running commands")
        token.cancel(name)

    previous = {}
    for sig in signals:
        previous[sig] = signal.signal(sig, handler)

    try:
        yield token
    finally:
        for sig, old_handler in previous.items():
            signal.signal(sig, old_handler)
