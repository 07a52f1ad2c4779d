"""Run a callback when a block is left, unless cancelled."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class ScopedExit:
    """Context manager calling a callback on exit; errors from the callback are swallowed."""

    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback = callback
        self._canceled = False

    def cancel(self) -> None:
        """Prevent the callback from running."""
        self._canceled = True

    def __enter__(self) -> ScopedExit:
        return self

    def __exit__(self, *args) -> bool:
        if not self._canceled:
            self._canceled = True
            try:
                self._callback()
            except Exception:
                pass
        return False


def defer(callback: Callable[[], Any]) -> ScopedExit:
    """Return a ScopedExit that runs callback when its block ends."""
    return ScopedExit(callback)