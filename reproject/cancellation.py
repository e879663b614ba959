"""Poll-only cancellation signal shared between the CLI and a render worker."""

from __future__ import annotations

import threading


class CancellationToken:
    """Thread-safe cancellation flag.

    The token is callable and returns the current flag, so it can be passed
    anywhere a ``Callable[[], bool]`` poll function is expected.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def __call__(self) -> bool:
        return self._event.is_set()


def NEVER_CANCELLED() -> bool:
    """Poll function for renders that cannot be cancelled."""
    return False


__all__ = ["CancellationToken", "NEVER_CANCELLED"]
